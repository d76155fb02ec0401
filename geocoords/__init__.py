from geocoords._version import __version__  # noqa: F401
from geocoords.utils.logging import LOGGER
from geocoords.errors import CoordinateError, ErrorKind
from geocoords.datums import Datum, DatumRegistry, Ellipsoid, WGS84, WGS84_ELLIPSOID
from geocoords.coordinates import ECEF, GeoCoordinate, geo
from geocoords.ecef import ecef_to_geo, geo_to_ecef
from geocoords.transform import (
    COORDINATE_FRAME, POSITION_VECTOR, convert_datum, helmert_3p, helmert_7p,
    molodensky_5p, molodensky_badekas_10p,
)
from geocoords.utm import (
    MGRS, UTM, geo_to_utm, mgrs_to_utm, parse_mgrs, parse_utm, utm_to_geo,
    utm_to_mgrs,
)
from geocoords.geohash import GeoHash
from geocoords.openlocationcode import CodeArea, PlusCode, plus_code
from geocoords.conversion import (
    to_code_area, to_ecef, to_geo, to_geohash, to_mgrs, to_plus_code, to_utm
)

__all__ = [
    'COORDINATE_FRAME',
    'CodeArea',
    'CoordinateError',
    'Datum',
    'DatumRegistry',
    'ECEF',
    'Ellipsoid',
    'ErrorKind',
    'GeoCoordinate',
    'GeoHash',
    'MGRS',
    'POSITION_VECTOR',
    'PlusCode',
    'UTM',
    'WGS84',
    'WGS84_ELLIPSOID',
    'LOGGER',
    'convert_datum',
    'ecef_to_geo',
    'geo',
    'geo_to_ecef',
    'geo_to_utm',
    'helmert_3p',
    'helmert_7p',
    'mgrs_to_utm',
    'molodensky_5p',
    'molodensky_badekas_10p',
    'parse_mgrs',
    'parse_utm',
    'plus_code',
    'to_code_area',
    'to_ecef',
    'to_geo',
    'to_geohash',
    'to_mgrs',
    'to_plus_code',
    'to_utm',
    'utm_to_geo',
    'utm_to_mgrs',
]
