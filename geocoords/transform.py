"""
Datum transformations: Helmert (3/7 parameter), Molodensky-Badekas (10 parameter)
and the direct geodetic Molodensky (5 parameter) transformation
"""

__all__ = [
    'COORDINATE_FRAME', 'POSITION_VECTOR',
    'convert_datum', 'helmert_3p', 'helmert_7p', 'molodensky_5p',
    'molodensky_badekas_10p', 'molodensky_shift',
]

import math
from typing import Optional, Sequence, Tuple

import numpy as np

from geocoords.coordinates import ECEF, GeoCoordinate
from geocoords.datums import Datum
from geocoords.ecef import ecef_to_geo, geo_to_ecef
from geocoords.errors import CoordinateError
from geocoords.utils.functions import to_degrees, to_radians, wrap180

POSITION_VECTOR = 'position_vector'
COORDINATE_FRAME = 'coordinate_frame'

_CONVENTIONS = (POSITION_VECTOR, COORDINATE_FRAME)


def _rotation_scale_matrix(rotation: np.ndarray, scale: float) -> np.ndarray:
    """Small-angle rotation matrix with 1 + ppm scale on the diagonal"""
    rx, ry, rz = (to_radians(r / 3600.) for r in rotation)
    s = 1. + scale * 1e-6
    return np.array([
        [s, rz, -ry],
        [-rz, s, rx],
        [ry, -rx, s],
    ])


def _prepare_parameters(
    translation: Sequence[float],
    rotation: Sequence[float],
    scale: float,
    convention: str,
    inverse: bool,
) -> Tuple[np.ndarray, np.ndarray, float]:
    if convention not in _CONVENTIONS:
        raise CoordinateError.out_of_range(f'Unknown rotation convention {convention!r}, must be one of {_CONVENTIONS}')

    t = np.asarray(translation, dtype=float)
    r = np.asarray(rotation, dtype=float)
    if t.shape != (3,) or r.shape != (3,):
        raise CoordinateError.out_of_range('translation and rotation must each have 3 components')

    if convention == COORDINATE_FRAME:
        r = -r

    if inverse:
        t, r, scale = -t, -r, -scale

    return t, r, scale


def helmert_3p(source: ECEF, translation: Sequence[float]) -> ECEF:
    """
    Shift cartesian coordinates by a geocenter translation.

    Args:
        source:
            Cartesian coordinates on the source datum

        translation:
            (tx, ty, tz) in meters

    Returns:
        ECEF
    """
    return ECEF.from_numpy(source.to_numpy() + np.asarray(translation, dtype=float))


def helmert_7p(
    source: ECEF,
    translation: Sequence[float],
    rotation: Sequence[float],
    scale: float,
    convention: str = POSITION_VECTOR,
    inverse: bool = False,
) -> ECEF:
    """
    Apply a 7 parameter (Helmert) similarity transformation, linearized for small
    rotation angles:

        | s   rz  -ry |
        | -rz  s   rx | × source + translation,   s = 1 + scale·1e-6
        | ry  -rx  s  |

    Args:
        source:
            Cartesian coordinates on the source datum

        translation:
            (tx, ty, tz) in meters

        rotation:
            (rx, ry, rz) in arc seconds

        scale:
            Scale change in ppm

        convention: (Default POSITION_VECTOR)
            Rotation sense of the parameters; COORDINATE_FRAME negates all rotations

        inverse: (Default False)
            If True, apply the reverse transformation by negating every parameter

    Returns:
        ECEF
    """
    t, r, s = _prepare_parameters(translation, rotation, scale, convention, inverse)
    return ECEF.from_numpy(t + _rotation_scale_matrix(r, s) @ source.to_numpy())


def molodensky_badekas_10p(
    source: ECEF,
    translation: Sequence[float],
    rotation: Sequence[float],
    origin: Sequence[float],
    scale: float,
    convention: str = POSITION_VECTOR,
) -> ECEF:
    """
    Apply a 10 parameter (Molodensky-Badekas) transformation: a Helmert
    transformation whose rotation and scale act about an origin near the points
    being transformed, decoupling rotation from translation.

    No inverse option is provided: the rotation origin is defined in the
    source datum, so negating the parameters does not give the reverse transform.

    Args:
        source:
            Cartesian coordinates on the source datum

        translation:
            (tx, ty, tz) in meters

        rotation:
            (rx, ry, rz) in arc seconds

        origin:
            (x, y, z) of the rotation origin in meters, on the source datum

        scale:
            Scale change in ppm

        convention: (Default POSITION_VECTOR)
            Rotation sense of the parameters; COORDINATE_FRAME negates all rotations

    Returns:
        ECEF
    """
    t, r, s = _prepare_parameters(translation, rotation, scale, convention, False)
    o = np.asarray(origin, dtype=float)
    return ECEF.from_numpy(
        (t + o) + _rotation_scale_matrix(r, s) @ (source.to_numpy() - o)
    )


def molodensky_shift(
    latitude: float,
    longitude: float,
    height: float,
    translation: Sequence[float],
    a: float,
    f: float,
    delta_a: float,
    delta_f: float,
) -> Tuple[float, float, float]:
    """
    Standard Molodensky formulas: shift a geodetic position directly between two
    datums without passing through cartesian coordinates.

    Args:
        latitude:
            Source latitude in degrees

        longitude:
            Source longitude in degrees

        height:
            Source ellipsoidal height in meters

        translation:
            (dx, dy, dz) geocenter shift from source to target in meters

        a:
            Semi-major axis of the source ellipsoid

        f:
            Flattening of the source ellipsoid

        delta_a:
            Target minus source semi-major axis

        delta_f:
            Target minus source flattening

    Returns:
        (latitude, longitude, height) on the target datum; degrees, degrees, meters
    """
    dx, dy, dz = translation
    lat, lon = to_radians(latitude), to_radians(longitude)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    sin_lon, cos_lon = math.sin(lon), math.cos(lon)

    b_div_a = 1. - f
    e_sq = (2. - f) * f
    w_sq = 1. - e_sq * sin_lat * sin_lat
    w = math.sqrt(w_sq)
    rn = a / w  # prime vertical radius of curvature
    rm = a * (1. - e_sq) / (w_sq * w)  # meridian radius of curvature

    d_lat = (
        -dx * sin_lat * cos_lon - dy * sin_lat * sin_lon + dz * cos_lat
        + delta_a * (rn * e_sq * sin_lat * cos_lat) / a
        + delta_f * (rm / b_div_a + rn * b_div_a) * sin_lat * cos_lat
    ) / (rm + height)
    d_lon = (-dx * sin_lon + dy * cos_lon) / ((rn + height) * cos_lat) if cos_lat else 0.
    d_h = (
        dx * cos_lat * cos_lon + dy * cos_lat * sin_lon + dz * sin_lat
        - delta_a * a / rn
        + delta_f * b_div_a * rn * sin_lat * sin_lat
    )

    return to_degrees(lat + d_lat), to_degrees(lon + d_lon), height + d_h


def molodensky_5p(
    coord: GeoCoordinate,
    translation: Sequence[float],
    delta_a: float,
    delta_f: float,
    target: Optional[Datum] = None,
) -> GeoCoordinate:
    """
    Transform a geodetic coordinate to another datum using the 5 parameter
    Molodensky transformation.

    Args:
        coord:
            The coordinate on its source datum

        translation:
            (dx, dy, dz) geocenter shift from source to target in meters

        delta_a:
            Target minus source semi-major axis in meters

        delta_f:
            Target minus source flattening

        target: (Default None)
            The datum to label the result with; defaults to the source datum

    Returns:
        GeoCoordinate
    """
    ellipsoid = coord.datum.ellipsoid
    height = 0. if math.isnan(coord.altitude) else coord.altitude
    lat, lon, h = molodensky_shift(
        coord.latitude, coord.longitude, height,
        translation, ellipsoid.a, ellipsoid.f, delta_a, delta_f
    )

    return coord.replace(
        latitude=min(90., max(-90., lat)),
        longitude=wrap180(lon),
        altitude=coord.altitude if math.isnan(coord.altitude) else h,
        datum=target or coord.datum,
    )


def convert_datum(coord: GeoCoordinate, target: Datum) -> GeoCoordinate:
    """
    Convert a geodetic coordinate to another datum through cartesian coordinates
    and the two datums' WGS84 Helmert parameters.

    Args:
        coord:
            The coordinate on its source datum

        target:
            The datum to convert to

    Returns:
        GeoCoordinate on the target datum; an unknown altitude stays unknown

    Raises:
        CoordinateError (NOT_FOUND) if either datum lacks transformation parameters
    """
    source = coord.datum
    if source == target:
        return coord

    for datum in (source, target):
        if not datum.has_transform:
            raise CoordinateError.not_found(
                f'No transformation parameters are known for datum {datum.name!r}'
            )

    cartesian = geo_to_ecef(coord)
    # table parameters are EPSG 9606 (position vector) values, which
    # _rotation_scale_matrix applies with its rotations negated.
    # source -> WGS84 is the reverse of the published WGS84 -> source transform
    cartesian = helmert_7p(
        cartesian, source.translation, source.rotation, source.scale,
        convention=COORDINATE_FRAME, inverse=True,
    )
    cartesian = helmert_7p(
        cartesian, target.translation, target.rotation, target.scale,
        convention=COORDINATE_FRAME,
    )
    converted = ecef_to_geo(cartesian, target)

    return converted.replace(
        altitude=coord.altitude if math.isnan(coord.altitude) else converted.altitude,
        accuracy=coord.accuracy,
        altitude_accuracy=coord.altitude_accuracy,
    )
