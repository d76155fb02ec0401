"""
Conversion between geodetic and earth-centered, earth-fixed (ECEF) coordinates
"""

__all__ = ['ecef_to_geo', 'geo_to_ecef']

import math

from geocoords.coordinates import ECEF, GeoCoordinate
from geocoords.datums import Datum, WGS84
from geocoords.utils.functions import to_degrees, to_radians, wrap180


def geo_to_ecef(coord: GeoCoordinate) -> ECEF:
    """
    Convert a geodetic coordinate to cartesian coordinates on its own datum.

        x = (ν+h)⋅cosφ⋅cosλ, y = (ν+h)⋅cosφ⋅sinλ, z = (ν⋅(1-e²)+h)⋅sinφ

    where ν = a/√(1−e²⋅sin²φ) is the radius of curvature in the prime vertical and
    e² = 2f - f². An unknown (NaN) altitude is treated as 0.

    Args:
        coord:
            The coordinate to convert

    Returns:
        ECEF
    """
    ellipsoid = coord.datum.ellipsoid
    a, f = ellipsoid.a, ellipsoid.f
    h = 0. if math.isnan(coord.altitude) else coord.altitude

    phi = to_radians(coord.latitude)
    lam = to_radians(coord.longitude)
    sin_phi, cos_phi = math.sin(phi), math.cos(phi)

    e_sq = 2 * f - f * f
    nu = a / math.sqrt(1 - e_sq * sin_phi * sin_phi)

    return ECEF(
        (nu + h) * cos_phi * math.cos(lam),
        (nu + h) * cos_phi * math.sin(lam),
        (nu * (1 - e_sq) + h) * sin_phi,
    )


def ecef_to_geo(ecef: ECEF, datum: Datum = WGS84) -> GeoCoordinate:
    """
    Convert cartesian coordinates to a geodetic coordinate using Bowring's
    non-iterative method, which is accurate to well below a millimeter for
    terrestrial heights.

    Args:
        ecef:
            The cartesian coordinates

        datum: (Default WGS84)
            The datum whose geocenter and ellipsoid the cartesian coordinates refer to

    Returns:
        GeoCoordinate, with the altitude set to the ellipsoidal height
    """
    ellipsoid = datum.ellipsoid
    a, b = ellipsoid.a, ellipsoid.b
    e2, eps2 = ellipsoid.e2, ellipsoid.second_e2
    x, y, z = ecef.x, ecef.y, ecef.z

    p = math.sqrt(x * x + y * y)
    r = math.sqrt(p * p + z * z)

    if p == 0.:
        # On the polar axis the parametric latitude is 0/0
        if z == 0.:
            return GeoCoordinate(0., 0., -a, datum=datum)
        return GeoCoordinate(math.copysign(90., z), 0., abs(z) - b, datum=datum)

    # parametric latitude (Bowring eqn.17, replacing tanβ = z·a / p·b)
    tan_beta = (b * z) / (a * p) * (1 + eps2 * b / r)
    sin_beta = tan_beta / math.sqrt(1 + tan_beta * tan_beta)
    cos_beta = sin_beta / tan_beta if tan_beta else 1.

    # geodetic latitude (Bowring eqn.18: tanφ = z+ε²⋅b⋅sin³β / p−e²⋅a⋅cos³β)
    phi = math.atan2(z + eps2 * b * sin_beta ** 3, p - e2 * a * cos_beta ** 3)
    lam = math.atan2(y, x)

    # height above ellipsoid (Bowring eqn.7)
    sin_phi, cos_phi = math.sin(phi), math.cos(phi)
    nu = a / math.sqrt(1 - e2 * sin_phi * sin_phi)
    h = p * cos_phi + z * sin_phi - (a * a / nu)

    return GeoCoordinate(
        min(90., max(-90., to_degrees(phi))),
        wrap180(to_degrees(lam)),
        h,
        datum=datum
    )
