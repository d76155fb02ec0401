"""
Universal Transverse Mercator (UTM) and Military Grid Reference System (MGRS)
coordinates, and the conversions between them and geodetic coordinates.

The projection implements Karney's method, using Krüger series to order n⁶, which
is accurate to 5nm for distances up to 3900km from the central meridian.

    Karney, C.F.F., 2011. Transverse Mercator with an accuracy of a few nanometers.
    J. Geodesy 85(8), 475-485.
"""

__all__ = [
    'MGRS', 'UTM',
    'geo_to_utm', 'latitude_band', 'mgrs_to_utm', 'parse_mgrs', 'parse_utm',
    'utm', 'utm_convergence_scale', 'utm_to_geo', 'utm_to_mgrs',
]

import math
import re
from typing import List, Tuple

from pydantic import validate_call

from geocoords._const import (
    MGRS_BANDS, MGRS_E100K_LETTERS, MGRS_N100K_LETTERS,
    UTM_FALSE_EASTING, UTM_FALSE_NORTHING, UTM_K0, UTM_MAX_ITERATIONS,
    UTM_MAX_LATITUDE, UTM_MIN_LATITUDE, UTM_TAU_TOLERANCE,
)
from geocoords.coordinates import GeoCoordinate
from geocoords.datums import Datum, Ellipsoid, WGS84
from geocoords.errors import CoordinateError
from geocoords.utils.functions import to_degrees, to_radians, wrap180
from geocoords.utils.logging import LOGGER, warn_once
from geocoords.utils.mixins import FrozenMixin

_NAN = float('nan')

_UTM_PATTERN = re.compile(
    r'^\s*(\d{1,2})\s*([a-z])\s+(\d+(?:[.,]\d+)?)\s+(\d+(?:[.,]\d+)?)\s*$',
    re.IGNORECASE
)
_MGRS_PATTERN = re.compile(
    r'^\s*(\d{1,2})\s*([c-hj-np-x])\s*([a-hj-np-z]{2})\s*([\d.,\s]*)$',
    re.IGNORECASE
)


class UTM(FrozenMixin):
    """
    A position in the Universal Transverse Mercator grid.

    Args:
        zone:
            6° longitudinal zone, 1..60

        hemisphere:
            'N' or 'S' (either case)

        easting:
            Meters from the false origin 500km west of the central meridian

        northing:
            Meters from the equator (north), or from 10,000km south of it (south)

        altitude: (Default NaN)
            Height above the ellipsoid in meters

        accuracy: (Default NaN)
            Horizontal accuracy in meters

        altitude_accuracy: (Default NaN)
            Altitude accuracy in meters

        datum: (Default WGS84)
            Datum of the projection

        convergence: (Default NaN)
            Meridian convergence in degrees (grid north relative to true north),
            populated by geo_to_utm

        scale: (Default NaN)
            Point scale factor, populated by geo_to_utm
    """
    _fields = (
        'zone', 'hemisphere', 'easting', 'northing', 'altitude', 'accuracy',
        'altitude_accuracy', 'datum', 'convergence', 'scale',
    )

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(
        self,
        zone: int,
        hemisphere: str,
        easting: float,
        northing: float,
        altitude: float = _NAN,
        accuracy: float = _NAN,
        altitude_accuracy: float = _NAN,
        datum: Datum = WGS84,
        convergence: float = _NAN,
        scale: float = _NAN,
    ):
        if not 1 <= zone <= 60:
            raise CoordinateError.out_of_range(f'UTM zone {zone} out of range [1, 60]')
        if hemisphere.upper() not in ('N', 'S'):
            raise CoordinateError.invalid_code(f'Invalid hemisphere {hemisphere!r}, must be N or S')

        self.zone = zone
        self.hemisphere = hemisphere.upper()
        self.easting = easting
        self.northing = northing
        self.altitude = altitude
        self.accuracy = accuracy
        self.altitude_accuracy = altitude_accuracy
        self.datum = datum
        self.convergence = convergence
        self.scale = scale
        self._freeze()

    def __repr__(self):
        return f'<UTM({self.zone} {self.hemisphere} {self.easting} {self.northing})>'

    @classmethod
    def from_band(cls, zone: int, band: str, easting: float, northing: float, **kwargs) -> 'UTM':
        """
        Create a UTM coordinate from an MGRS latitude band letter instead of a hemisphere;
        bands N and above are northern.
        """
        if band.upper() not in MGRS_BANDS:
            raise CoordinateError.invalid_code(f'Invalid latitude band {band!r}')
        hemisphere = 'N' if band.upper() >= 'N' else 'S'
        return cls(zone, hemisphere, easting, northing, **kwargs)


def utm(
    zone: int,
    hemisphere: str,
    easting: float,
    northing: float,
    altitude: float = _NAN,
    accuracy: float = _NAN,
    altitude_accuracy: float = _NAN,
    datum: Datum = WGS84,
) -> UTM:
    """Shorthand factory for UTM"""
    return UTM(zone, hemisphere, easting, northing, altitude, accuracy, altitude_accuracy, datum)


class MGRS(FrozenMixin):
    """
    A Military Grid Reference System position: a grid zone designator, a 100km
    square and an easting/northing within that square, e.g. ‘31U DQ 48251 11932’.

    Args:
        zone:
            6° longitudinal zone, 1..60

        band:
            8° latitudinal band C..X (excluding I and O)

        grid:
            The two 100km square letters, column then row, e.g. 'DQ'

        easting:
            Meters east within the 100km square, [0, 100000)

        northing:
            Meters north within the 100km square, [0, 100000)

        altitude, accuracy, altitude_accuracy, datum:
            As for UTM
    """
    _fields = (
        'zone', 'band', 'grid', 'easting', 'northing', 'altitude', 'accuracy',
        'altitude_accuracy', 'datum',
    )

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(
        self,
        zone: int,
        band: str,
        grid: str,
        easting: float,
        northing: float,
        altitude: float = _NAN,
        accuracy: float = _NAN,
        altitude_accuracy: float = _NAN,
        datum: Datum = WGS84,
    ):
        band, grid = band.upper(), grid.upper()
        if not 1 <= zone <= 60:
            raise CoordinateError.out_of_range(f'MGRS zone {zone} out of range [1, 60]')
        if len(band) != 1 or band not in MGRS_BANDS:
            raise CoordinateError.invalid_code(f'Invalid latitude band {band!r}')
        if (
            len(grid) != 2
            or grid[0] not in MGRS_E100K_LETTERS[(zone - 1) % 3]
            or grid[1] not in MGRS_N100K_LETTERS[(zone - 1) % 2]
        ):
            raise CoordinateError.invalid_code(f'Invalid 100km square {grid!r} for zone {zone}')
        if not (0 <= easting < 100e3 and 0 <= northing < 100e3):
            raise CoordinateError.out_of_range(
                f'MGRS easting/northing ({easting}, {northing}) out of range [0, 100000)'
            )

        self.zone = zone
        self.band = band
        self.grid = grid
        self.easting = easting
        self.northing = northing
        self.altitude = altitude
        self.accuracy = accuracy
        self.altitude_accuracy = altitude_accuracy
        self.datum = datum
        self._freeze()

    def __repr__(self):
        return f'<MGRS({self.zone}{self.band} {self.grid} {self.easting} {self.northing})>'


def latitude_band(latitude: float) -> str:
    """
    The MGRS latitude band letter of a latitude. Bands are 8° tall from 80°S; band X
    extends to 84°N.

    Raises:
        CoordinateError (OUT_OF_RANGE) outside 80°S..84°N
    """
    if not UTM_MIN_LATITUDE <= latitude <= UTM_MAX_LATITUDE:
        raise CoordinateError.out_of_range(
            f'Latitude {latitude} is outside the UTM/MGRS latitude limits [-80, 84]'
        )
    # 0°N is offset 10 into the bands
    return MGRS_BANDS[int(math.floor(latitude / 8 + 10))]


def _alpha(n: float) -> List[float]:
    """Krüger direct series coefficients, one-based"""
    n2, n3, n4, n5, n6 = n ** 2, n ** 3, n ** 4, n ** 5, n ** 6
    return [
        0.,
        1/2*n - 2/3*n2 + 5/16*n3 + 41/180*n4 - 127/288*n5 + 7891/37800*n6,
        13/48*n2 - 3/5*n3 + 557/1440*n4 + 281/630*n5 - 1983433/1935360*n6,
        61/240*n3 - 103/140*n4 + 15061/26880*n5 + 167603/181440*n6,
        49561/161280*n4 - 179/168*n5 + 6601661/7257600*n6,
        34729/80640*n5 - 3418889/1995840*n6,
        212378941/319334400*n6,
    ]


def _beta(n: float) -> List[float]:
    """Krüger inverse series coefficients, one-based"""
    n2, n3, n4, n5, n6 = n ** 2, n ** 3, n ** 4, n ** 5, n ** 6
    return [
        0.,
        1/2*n - 2/3*n2 + 37/96*n3 - 1/360*n4 - 81/512*n5 + 96199/604800*n6,
        1/48*n2 + 1/15*n3 - 437/1440*n4 + 46/105*n5 - 1118711/3870720*n6,
        17/480*n3 - 37/840*n4 - 209/4480*n5 + 5569/90720*n6,
        4397/161280*n4 - 11/504*n5 - 830251/7257600*n6,
        4583/161280*n5 - 108847/3991680*n6,
        20648693/638668800*n6,
    ]


def _meridian_radius(a: float, n: float) -> float:
    """A, where 2πA is the circumference of a meridian"""
    return a / (1 + n) * (1 + 1/4*n**2 + 1/64*n**4 + 1/256*n**6)


def _central_meridian(zone: int) -> float:
    return to_radians((zone - 1) * 6 - 180 + 3)


def _zone_for(latitude: float, longitude: float) -> int:
    """The UTM zone of a position, including the Norway/Svalbard exceptions"""
    zone = int(math.floor((longitude + 180) / 6)) + 1
    if not UTM_MIN_LATITUDE <= latitude <= UTM_MAX_LATITUDE:
        return zone

    band = latitude_band(latitude)
    if zone == 31 and band == 'V' and longitude >= 3:
        return 32
    if band == 'X':
        if zone == 32:
            return 31 if longitude < 9 else 33
        if zone == 34:
            return 33 if longitude < 21 else 35
        if zone == 36:
            return 35 if longitude < 33 else 37
    return zone


def _project(
    latitude: float,
    longitude: float,
    ellipsoid: Ellipsoid,
    zone: int,
) -> Tuple[float, float, float, float]:
    """
    Transverse Mercator forward projection about the central meridian of a zone.

    Returns:
        (x, y, convergence, scale); x, y in meters from the central meridian and
        the equator, convergence in degrees
    """
    a, f = ellipsoid.a, ellipsoid.f
    phi = to_radians(latitude)
    lam = to_radians(longitude) - _central_meridian(zone)

    # easting, northing: Karney 2011 Eq 7-14, 29, 35
    e = math.sqrt(f * (2 - f))
    n = f / (2 - f)
    cos_lam, sin_lam, tan_lam = math.cos(lam), math.sin(lam), math.tan(lam)

    # τ ≡ tanφ, τʹ ≡ tanφʹ; prime indicates angles on the conformal sphere
    tau = math.tan(phi)
    sigma = math.sinh(e * math.atanh(e * tau / math.sqrt(1 + tau * tau)))
    tau_p = tau * math.sqrt(1 + sigma * sigma) - sigma * math.sqrt(1 + tau * tau)

    xi_p = math.atan2(tau_p, cos_lam)
    eta_p = math.asinh(sin_lam / math.sqrt(tau_p * tau_p + cos_lam * cos_lam))

    big_a = _meridian_radius(a, n)
    alpha = _alpha(n)

    xi, eta = xi_p, eta_p
    for j in range(1, 7):
        xi += alpha[j] * math.sin(2 * j * xi_p) * math.cosh(2 * j * eta_p)
        eta += alpha[j] * math.cos(2 * j * xi_p) * math.sinh(2 * j * eta_p)

    x = UTM_K0 * big_a * eta
    y = UTM_K0 * big_a * xi

    # convergence: Karney 2011 Eq 23, 24
    p_p, q_p = 1., 0.
    for j in range(1, 7):
        p_p += 2 * j * alpha[j] * math.cos(2 * j * xi_p) * math.cosh(2 * j * eta_p)
        q_p += 2 * j * alpha[j] * math.sin(2 * j * xi_p) * math.sinh(2 * j * eta_p)

    gamma_p = math.atan(tau_p / math.sqrt(1 + tau_p * tau_p) * tan_lam)
    gamma_pp = math.atan2(q_p, p_p)
    gamma = gamma_p + gamma_pp

    # scale: Karney 2011 Eq 25
    sin_phi = math.sin(phi)
    k_p = (
        math.sqrt(1 - e * e * sin_phi * sin_phi) * math.sqrt(1 + tau * tau)
        / math.sqrt(tau_p * tau_p + cos_lam * cos_lam)
    )
    k_pp = big_a / a * math.sqrt(p_p * p_p + q_p * q_p)

    return x, y, to_degrees(gamma), UTM_K0 * k_p * k_pp


def _unproject(
    x: float,
    y: float,
    ellipsoid: Ellipsoid,
    zone: int,
) -> Tuple[float, float, float, float]:
    """
    Transverse Mercator inverse projection about the central meridian of a zone.

    Args:
        x:
            Meters east of the central meridian

        y:
            Meters north of the equator

    Returns:
        (latitude, longitude, convergence, scale); degrees, degrees, degrees, factor
    """
    a, f = ellipsoid.a, ellipsoid.f

    # Karney 2011 Eq 15-22, 36
    e = math.sqrt(f * (2 - f))
    n = f / (2 - f)
    big_a = _meridian_radius(a, n)

    eta = x / (UTM_K0 * big_a)
    xi = y / (UTM_K0 * big_a)

    beta = _beta(n)
    xi_p, eta_p = xi, eta
    for j in range(1, 7):
        xi_p -= beta[j] * math.sin(2 * j * xi) * math.cosh(2 * j * eta)
        eta_p -= beta[j] * math.cos(2 * j * xi) * math.sinh(2 * j * eta)

    sinh_eta_p = math.sinh(eta_p)
    sin_xi_p, cos_xi_p = math.sin(xi_p), math.cos(xi_p)

    tau_p = sin_xi_p / math.sqrt(sinh_eta_p * sinh_eta_p + cos_xi_p * cos_xi_p)

    # conformal -> geodetic latitude by fixed-point iteration
    tau_i = tau_p
    for _ in range(UTM_MAX_ITERATIONS):
        sigma_i = math.sinh(e * math.atanh(e * tau_i / math.sqrt(1 + tau_i * tau_i)))
        tau_i_p = tau_i * math.sqrt(1 + sigma_i * sigma_i) - sigma_i * math.sqrt(1 + tau_i * tau_i)
        d_tau_i = (
            (tau_p - tau_i_p) / math.sqrt(1 + tau_i_p * tau_i_p)
            * (1 + (1 - e * e) * tau_i * tau_i)
            / ((1 - e * e) * math.sqrt(1 + tau_i * tau_i))
        )
        tau_i += d_tau_i
        if abs(d_tau_i) <= UTM_TAU_TOLERANCE:
            break
    else:
        warn_once(
            'UTM inverse projection did not converge within %d iterations; '
            'results may be inaccurate (this warning will not repeat)',
            UTM_MAX_ITERATIONS,
        )

    tau = tau_i
    phi = math.atan(tau)
    lam = math.atan2(sinh_eta_p, cos_xi_p)

    # convergence: Karney 2011 Eq 26, 27
    p, q = 1., 0.
    for j in range(1, 7):
        p -= 2 * j * beta[j] * math.cos(2 * j * xi) * math.cosh(2 * j * eta)
        q += 2 * j * beta[j] * math.sin(2 * j * xi) * math.sinh(2 * j * eta)

    gamma = math.atan(math.tan(xi_p) * math.tanh(eta_p)) + math.atan2(q, p)

    # scale: Karney 2011 Eq 28
    sin_phi = math.sin(phi)
    k1 = (
        math.sqrt(1 - e * e * sin_phi * sin_phi) * math.sqrt(1 + tau * tau)
        * math.sqrt(sinh_eta_p * sinh_eta_p + cos_xi_p * cos_xi_p)
    )
    k2 = big_a / a / math.sqrt(p * p + q * q)

    lam += _central_meridian(zone)
    return to_degrees(phi), to_degrees(lam), to_degrees(gamma), UTM_K0 * k1 * k2


def geo_to_utm(coord: GeoCoordinate) -> UTM:
    """
    Project a geodetic coordinate into its UTM zone, on the coordinate's own datum.
    The Norway (32V) and Svalbard (31X..37X) zone exceptions are applied.

    Args:
        coord:
            The coordinate to project

    Returns:
        UTM, with convergence and scale populated
    """
    lat, lon = coord.latitude, coord.longitude
    if lon == 180.:
        lon = -180.

    if not UTM_MIN_LATITUDE <= lat <= UTM_MAX_LATITUDE:
        LOGGER.debug('Latitude %s is outside the UTM limits [-80, 84]; projecting anyway', lat)

    zone = _zone_for(lat, lon)
    x, y, convergence, scale = _project(lat, lon, coord.datum.ellipsoid, zone)

    # shift x/y to false origins
    x += UTM_FALSE_EASTING
    if y < 0:
        y += UTM_FALSE_NORTHING

    return UTM(
        zone,
        'N' if lat >= 0 else 'S',
        x,
        y,
        altitude=coord.altitude,
        accuracy=coord.accuracy,
        altitude_accuracy=coord.altitude_accuracy,
        datum=coord.datum,
        convergence=convergence,
        scale=scale,
    )


def _unproject_utm(coord: UTM) -> Tuple[float, float, float, float]:
    x = coord.easting - UTM_FALSE_EASTING
    y = coord.northing - UTM_FALSE_NORTHING if coord.hemisphere == 'S' else coord.northing
    return _unproject(x, y, coord.datum.ellipsoid, coord.zone)


def utm_to_geo(coord: UTM) -> GeoCoordinate:
    """
    Convert a UTM coordinate to latitude/longitude on the same datum.

    Args:
        coord:
            The UTM coordinate

    Returns:
        GeoCoordinate
    """
    lat, lon, _, _ = _unproject_utm(coord)
    return GeoCoordinate(
        min(90., max(-90., lat)),
        wrap180(lon),
        coord.altitude,
        coord.accuracy,
        coord.altitude_accuracy,
        coord.datum,
    )


def utm_convergence_scale(coord: UTM) -> Tuple[float, float]:
    """
    Meridian convergence (degrees) and point scale factor at a UTM position, for
    converting between grid and true bearings/distances.
    """
    _, _, convergence, scale = _unproject_utm(coord)
    return convergence, scale


def utm_to_mgrs(coord: UTM) -> MGRS:
    """
    Convert a UTM coordinate to an MGRS grid reference.

    Args:
        coord:
            The UTM coordinate

    Returns:
        MGRS

    Raises:
        CoordinateError (OUT_OF_RANGE) if the position lies outside the MGRS
        latitude limits or outside the zone's 100km columns
    """
    # the latitude band comes from the geodetic latitude
    lat, _, _, _ = _unproject_utm(coord)
    band = latitude_band(lat)

    # columns in zone 1 are A-H, zone 2 J-R, zone 3 S-Z, then repeating every 3rd zone
    col = int(math.floor(coord.easting / 100e3))
    letters = MGRS_E100K_LETTERS[(coord.zone - 1) % 3]
    if not 1 <= col <= len(letters):
        raise CoordinateError.out_of_range(
            f'UTM easting {coord.easting} has no MGRS 100km column in zone {coord.zone}'
        )
    # column 1 is the first letter; eastings start at 166km due to the 500km false origin
    e100k = letters[col - 1]

    # rows in odd zones are A-V, in even zones are F-E
    row = int(math.floor(coord.northing / 100e3)) % 20
    n100k = MGRS_N100K_LETTERS[(coord.zone - 1) % 2][row]

    return MGRS(
        coord.zone,
        band,
        e100k + n100k,
        coord.easting % 100e3,
        coord.northing % 100e3,
        coord.altitude,
        coord.accuracy,
        coord.altitude_accuracy,
        coord.datum,
    )


def mgrs_to_utm(coord: MGRS) -> UTM:
    """
    Convert an MGRS grid reference to UTM.

    The 100km row letters repeat every 2,000km, so the northing is placed in the
    first 2,000km cycle that lands inside the reference's latitude band.

    Args:
        coord:
            The MGRS grid reference

    Returns:
        UTM
    """
    hemisphere = 'N' if coord.band >= 'N' else 'S'

    # +1 because eastings start at 166e3 due to 500km false origin
    col = MGRS_E100K_LETTERS[(coord.zone - 1) % 3].index(coord.grid[0]) + 1
    e100k = col * 100e3

    row = MGRS_N100K_LETTERS[(coord.zone - 1) % 2].index(coord.grid[1])
    n100k = row * 100e3

    # northing of the bottom of the band on the central meridian, extended to
    # include the entirety of the bottom-most 100km square
    band_latitude = (MGRS_BANDS.index(coord.band) - 10) * 8.
    _, y, _, _ = _project(band_latitude, 3., coord.datum.ellipsoid, 31)
    if y < 0:
        y += UTM_FALSE_NORTHING
    n_band = math.floor(y / 100e3) * 100e3

    n2m = 0.
    while n2m + n100k + coord.northing < n_band:
        n2m += 2000e3

    return UTM(
        coord.zone,
        hemisphere,
        e100k + coord.easting,
        n2m + n100k + coord.northing,
        coord.altitude,
        coord.accuracy,
        coord.altitude_accuracy,
        coord.datum,
    )


def parse_utm(text: str, band: bool = False, datum: Datum = WGS84) -> UTM:
    """
    Parse a UTM reference such as '31N 448251 5411932' or '56 S 335003.521 6252510.623'.

    Args:
        text:
            zone, hemisphere (or band) letter, easting and northing; decimal commas
            are accepted

        band: (Default False)
            If True the letter is an MGRS latitude band rather than a hemisphere

        datum: (Default WGS84)
            Datum of the projection

    Returns:
        UTM

    Raises:
        CoordinateError (INVALID_CODE) if the text cannot be parsed
    """
    match = _UTM_PATTERN.match(text)
    if match is None:
        raise CoordinateError.invalid_code(f'Failed to parse UTM coordinate {text!r}')

    zone, letter, easting, northing = match.groups()
    easting, northing = float(easting.replace(',', '.')), float(northing.replace(',', '.'))
    if band:
        return UTM.from_band(int(zone), letter, easting, northing, datum=datum)
    return UTM(int(zone), letter, easting, northing, datum=datum)


def _mgrs_digits(digits: str) -> float:
    """Grid digits are meters to 5 places; shorter references are truncated values"""
    digits = digits.replace(',', '.')
    if '.' in digits:
        return float(digits)
    return float(digits.ljust(5, '0'))


def parse_mgrs(text: str, datum: Datum = WGS84) -> MGRS:
    """
    Parse an MGRS reference such as '31U DQ 48251 11932' or '15SWC8081751205'.

    Args:
        text:
            The grid reference; the easting/northing may be separated by whitespace
            or written as one run of an even number of digits

        datum: (Default WGS84)
            Datum of the reference

    Returns:
        MGRS

    Raises:
        CoordinateError (INVALID_CODE) if the text cannot be parsed
    """
    match = _MGRS_PATTERN.match(text)
    if match is None:
        raise CoordinateError.invalid_code(f'Failed to parse MGRS reference {text!r}')

    zone, band, grid, numbers = match.groups()
    parts = numbers.split()
    if len(parts) == 1 and parts[0].isdigit():
        if len(parts[0]) % 2:
            raise CoordinateError.invalid_code(
                f'MGRS reference {text!r} has an odd number of grid digits'
            )
        half = len(parts[0]) // 2
        parts = [parts[0][:half], parts[0][half:]]

    if len(parts) == 0:
        parts = ['0', '0']
    if len(parts) != 2:
        raise CoordinateError.invalid_code(f'Failed to parse MGRS easting/northing in {text!r}')

    try:
        easting, northing = (_mgrs_digits(x) for x in parts)
    except ValueError as exc:
        raise CoordinateError.invalid_code(
            f'Failed to parse MGRS easting/northing in {text!r}'
        ) from exc

    return MGRS(int(zone), band, grid, easting, northing, datum=datum)
