"""
Pairwise conversions between the coordinate value types. Conversions preserve
altitude, accuracies and datum wherever the target type can carry them.
"""

__all__ = [
    'to_code_area', 'to_ecef', 'to_geo', 'to_geohash', 'to_mgrs',
    'to_plus_code', 'to_utm',
]

from typing import Union

from geocoords.coordinates import ECEF, GeoCoordinate
from geocoords.datums import Datum, WGS84
from geocoords.ecef import ecef_to_geo, geo_to_ecef
from geocoords.errors import CoordinateError
from geocoords.geohash import GeoHash, decode as decode_geohash, encode as encode_geohash
from geocoords.openlocationcode import (
    CodeArea, PAIR_CODE_LENGTH, PlusCode,
    decode as decode_plus_code, encode as encode_plus_code,
)
from geocoords.utm import MGRS, UTM, geo_to_utm, mgrs_to_utm, utm_to_geo, utm_to_mgrs

CoordinateType = Union[GeoCoordinate, ECEF, UTM, MGRS, GeoHash, PlusCode, CodeArea]


def to_geo(coord: CoordinateType, datum: Datum = WGS84) -> GeoCoordinate:
    """
    Convert any coordinate value to a geodetic coordinate.

    Args:
        coord:
            The coordinate to convert

        datum: (Default WGS84)
            The datum of ECEF input; ignored for every other type, which carry
            their own datum

    Returns:
        GeoCoordinate

    Raises:
        CoordinateError (INVALID_CODE) for a short or padded-invalid plus code
    """
    if isinstance(coord, GeoCoordinate):
        return coord

    if isinstance(coord, ECEF):
        return ecef_to_geo(coord, datum)

    if isinstance(coord, UTM):
        return utm_to_geo(coord)

    if isinstance(coord, MGRS):
        return utm_to_geo(mgrs_to_utm(coord))

    if isinstance(coord, GeoHash):
        lat, lon = decode_geohash(coord.hash)
        return GeoCoordinate(
            lat, lon, coord.altitude, coord.accuracy, coord.altitude_accuracy, coord.datum
        )

    if isinstance(coord, PlusCode):
        center = decode_plus_code(coord.code).center()
        return center.replace(
            altitude=coord.altitude,
            accuracy=coord.accuracy,
            altitude_accuracy=coord.altitude_accuracy,
        )

    if isinstance(coord, CodeArea):
        return coord.center()

    raise TypeError(f'Cannot convert {type(coord).__name__} to GeoCoordinate')


def to_ecef(coord: CoordinateType) -> ECEF:
    """Convert any coordinate value to cartesian coordinates on its own datum"""
    if isinstance(coord, ECEF):
        return coord
    return geo_to_ecef(to_geo(coord))


def to_utm(coord: CoordinateType) -> UTM:
    """Convert any coordinate value to UTM"""
    if isinstance(coord, UTM):
        return coord
    if isinstance(coord, MGRS):
        return mgrs_to_utm(coord)
    return geo_to_utm(to_geo(coord))


def to_mgrs(coord: CoordinateType) -> MGRS:
    """
    Convert any coordinate value to an MGRS grid reference.

    Raises:
        CoordinateError (OUT_OF_RANGE) outside the MGRS latitude limits
    """
    if isinstance(coord, MGRS):
        return coord
    return utm_to_mgrs(to_utm(coord))


def to_geohash(coord: CoordinateType, precision: int = 0) -> GeoHash:
    """
    Convert any coordinate value to a geohash.

    Args:
        coord:
            The coordinate to convert

        precision: (Default 0)
            Geohash length; 0 for automatic precision

    Returns:
        GeoHash
    """
    geo = to_geo(coord)
    return GeoHash(
        encode_geohash(geo.latitude, geo.longitude, precision),
        geo.altitude,
        geo.accuracy,
        geo.altitude_accuracy,
        geo.datum,
    )


def to_plus_code(coord: CoordinateType, length: int = PAIR_CODE_LENGTH) -> PlusCode:
    """
    Convert any coordinate value to a full plus code.

    Args:
        coord:
            The coordinate to convert

        length: (Default 10)
            Number of code digits

    Returns:
        PlusCode

    Raises:
        CoordinateError (DATUM_MISMATCH) if the coordinate is not on WGS84
    """
    geo = to_geo(coord)
    if geo.datum != WGS84:
        raise CoordinateError.datum_mismatch(
            f'Plus codes are defined on WGS84; convert from {geo.datum.name!r} first'
        )

    return PlusCode(
        encode_plus_code(geo.latitude, geo.longitude, length),
        geo.altitude,
        geo.accuracy,
        geo.altitude_accuracy,
    )


def to_code_area(coord: Union[PlusCode, str]) -> CodeArea:
    """Decode a full plus code (value or string) into its CodeArea"""
    if isinstance(coord, PlusCode):
        return decode_plus_code(coord.code)
    return decode_plus_code(coord)
