"""
Constants declarations for geocoords
"""

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_INVERSE_F = 298.257223563
WGS84_EPSG = 6326

# UTM
UTM_K0 = 0.9996  # Scale on the central meridian
UTM_FALSE_EASTING = 500e3
UTM_FALSE_NORTHING = 10000e3
UTM_MIN_LATITUDE = -80.
UTM_MAX_LATITUDE = 84.

# Convergence tolerance of the conformal -> geodetic latitude iteration. The
# correction toggles around +-1.12e-16 for some inputs (eg 31N 400000 5000000),
# so a tighter bound never terminates.
UTM_TAU_TOLERANCE = 1e-12
UTM_MAX_ITERATIONS = 100

# MGRS latitude bands C..X (no I, O), 8 degrees each from 80S; X repeats for 80-84N
MGRS_BANDS = 'CDEFGHJKLMNPQRSTUVWXX'

# 100km column letters, repeating every third zone
MGRS_E100K_LETTERS = ('ABCDEFGH', 'JKLMNPQR', 'STUVWXYZ')

# 100km row letters, repeating every other zone
MGRS_N100K_LETTERS = ('ABCDEFGHJKLMNPQRSTUV', 'FGHJKLMNPQRSTUVABCDE')
