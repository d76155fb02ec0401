"""
Open Location Code ("plus codes"): a base-20 geocode of paired latitude/longitude
digits followed by optional 4x5 grid refinement digits.

    8FVC2222+22
    ^^^^^^^^ ^^
    pairs    pairs/grid

The separator '+' always follows the eighth digit. Codes shorter than eight
digits are right-padded with '0' up to the separator; codes with fewer than
eight digits before the separator are short codes that must be recovered
against a nearby reference location.
"""

__all__ = [
    'CodeArea', 'PlusCode',
    'code_length', 'decode', 'encode', 'is_full', 'is_padded', 'is_short',
    'is_valid', 'plus_code', 'recover_nearest', 'shorten',
]

import math
from typing import Tuple

from pydantic import validate_call

from geocoords.coordinates import GeoCoordinate
from geocoords.errors import CoordinateError
from geocoords.utils.functions import round_to
from geocoords.utils.mixins import FrozenMixin

_NAN = float('nan')

SEPARATOR = '+'
SEPARATOR_POSITION = 8
PADDING_CHARACTER = '0'
CODE_ALPHABET = '23456789CFGHJMPQRVWX'
ENCODING_BASE = len(CODE_ALPHABET)

LATITUDE_MAX = 90
LONGITUDE_MAX = 180

MAX_DIGIT_COUNT = 15
PAIR_CODE_LENGTH = 10
GRID_CODE_LENGTH = MAX_DIGIT_COUNT - PAIR_CODE_LENGTH
GRID_COLUMNS = 4
GRID_ROWS = 5

# first place value of the pairs (if the last pair value is 1)
PAIR_FIRST_PLACE_VALUE = ENCODING_BASE ** (PAIR_CODE_LENGTH // 2 - 1)
# inverse of the precision of the pair section of the code
PAIR_PRECISION = ENCODING_BASE ** 3
# resolution values in degrees for each position in the lat/lng pair encoding
PAIR_RESOLUTIONS = (20.0, 1.0, .05, .0025, .000125)

GRID_LAT_FIRST_PLACE_VALUE = GRID_ROWS ** (GRID_CODE_LENGTH - 1)
GRID_LNG_FIRST_PLACE_VALUE = GRID_COLUMNS ** (GRID_CODE_LENGTH - 1)
# multiply degrees by these to get integers of the final precision
FINAL_LAT_PRECISION = PAIR_PRECISION * GRID_ROWS ** GRID_CODE_LENGTH
FINAL_LNG_PRECISION = PAIR_PRECISION * GRID_COLUMNS ** GRID_CODE_LENGTH

MIN_TRIMMABLE_CODE_LEN = 6
SHORTEN_SAFETY_FACTOR = 0.3


def is_valid(code: str) -> bool:
    """
    Whether a string is a valid full or short code: exactly one separator at an
    even position no later than 8, padding only as a single even-length group
    ending at the separator, never exactly one digit after the separator, and
    only alphabet characters otherwise.
    """
    sep = code.find(SEPARATOR)
    if code.count(SEPARATOR) != 1:
        return False
    if len(code) == 1:
        return False
    if sep > SEPARATOR_POSITION or sep % 2 == 1:
        return False

    pad = code.find(PADDING_CHARACTER)
    if pad != -1:
        # short codes cannot have padding
        if sep < SEPARATOR_POSITION:
            return False
        if pad == 0:
            return False
        # one group of even length, ending at the separator
        rpad = code.rfind(PADDING_CHARACTER) + 1
        pads = code[pad:rpad]
        if len(pads) % 2 == 1 or pads.count(PADDING_CHARACTER) != len(pads):
            return False
        if not code.endswith(SEPARATOR):
            return False

    if len(code) - sep - 1 == 1:
        return False

    for char in code:
        if char.upper() not in CODE_ALPHABET and char not in (SEPARATOR, PADDING_CHARACTER):
            return False

    return True


def is_short(code: str) -> bool:
    """A valid code with fewer than eight digits before the separator"""
    return is_valid(code) and 0 <= code.find(SEPARATOR) < SEPARATOR_POSITION


def is_full(code: str) -> bool:
    """A valid, non-short code whose first pair lies within the globe"""
    if not is_valid(code) or is_short(code):
        return False

    first_lat_value = CODE_ALPHABET.find(code[0].upper()) * ENCODING_BASE
    if first_lat_value >= LATITUDE_MAX * 2:
        return False

    first_lng_value = CODE_ALPHABET.find(code[1].upper()) * ENCODING_BASE
    if first_lng_value >= LONGITUDE_MAX * 2:
        return False

    return True


def is_padded(code: str) -> bool:
    return PADDING_CHARACTER in code


def code_length(code: str) -> int:
    """
    Number of significant digits in a code, i.e. excluding the separator and
    any padding.
    """
    digits = code.replace(SEPARATOR, '')
    pad = digits.find(PADDING_CHARACTER)
    if pad != -1:
        digits = digits[:pad]
    return len(digits)


def _clip_latitude(latitude: float) -> float:
    return min(LATITUDE_MAX, max(-LATITUDE_MAX, latitude))


def _normalize_longitude(longitude: float) -> float:
    while longitude < -LONGITUDE_MAX:
        longitude += LONGITUDE_MAX * 2
    while longitude >= LONGITUDE_MAX:
        longitude -= LONGITUDE_MAX * 2
    return longitude


def _location_to_integers(latitude: float, longitude: float) -> Tuple[int, int]:
    """
    Convert a position to integer lat/lng values at the finest code precision.
    Latitude is clamped so that 90° lands in the topmost cell; longitude wraps.
    """
    lat_val = int(math.floor(round(latitude * FINAL_LAT_PRECISION, 6)))
    lat_val += LATITUDE_MAX * FINAL_LAT_PRECISION
    lat_val = min(max(lat_val, 0), 2 * LATITUDE_MAX * FINAL_LAT_PRECISION - 1)

    lng_val = int(math.floor(round(longitude * FINAL_LNG_PRECISION, 6)))
    lng_val += LONGITUDE_MAX * FINAL_LNG_PRECISION
    lng_val %= 2 * LONGITUDE_MAX * FINAL_LNG_PRECISION

    return lat_val, lng_val


def _encode_integers(lat_val: int, lng_val: int, length: int) -> str:
    code = ''
    if length > PAIR_CODE_LENGTH:
        for _ in range(GRID_CODE_LENGTH):
            lat_digit = lat_val % GRID_ROWS
            lng_digit = lng_val % GRID_COLUMNS
            code = CODE_ALPHABET[lat_digit * GRID_COLUMNS + lng_digit] + code
            lat_val //= GRID_ROWS
            lng_val //= GRID_COLUMNS
    else:
        lat_val //= GRID_ROWS ** GRID_CODE_LENGTH
        lng_val //= GRID_COLUMNS ** GRID_CODE_LENGTH

    for _ in range(PAIR_CODE_LENGTH // 2):
        code = CODE_ALPHABET[lng_val % ENCODING_BASE] + code
        code = CODE_ALPHABET[lat_val % ENCODING_BASE] + code
        lat_val //= ENCODING_BASE
        lng_val //= ENCODING_BASE

    code = code[:SEPARATOR_POSITION] + SEPARATOR + code[SEPARATOR_POSITION:]
    if length >= SEPARATOR_POSITION:
        return code[:length + 1]

    return code[:length] + PADDING_CHARACTER * (SEPARATOR_POSITION - length) + SEPARATOR


def encode(latitude: float, longitude: float, length: int = PAIR_CODE_LENGTH) -> str:
    """
    Encode a position as a full plus code.

    Args:
        latitude:
            Latitude in decimal degrees; clipped to [-90, 90]

        longitude:
            Longitude in decimal degrees; wrapped to [-180, 180)

        length: (Default 10)
            Number of digits, 2, 4, 6, 8, or 10 and above (clipped to 15)

    Returns:
        str

    Raises:
        CoordinateError (INVALID_CODE) for an unsupported length
    """
    if length < 2 or (length < PAIR_CODE_LENGTH and length % 2 == 1):
        raise CoordinateError.invalid_code(f'Invalid Open Location Code length {length}')

    length = min(length, MAX_DIGIT_COUNT)
    lat_val, lng_val = _location_to_integers(latitude, longitude)
    return _encode_integers(lat_val, lng_val, length)


class CodeArea(FrozenMixin):
    """
    The area covered by a decoded plus code.

    Args:
        south, west, north, east:
            Bounds in decimal degrees

        code_length:
            Number of significant digits of the decoded code
    """
    _fields = ('south', 'west', 'north', 'east', 'code_length')

    def __init__(self, south: float, west: float, north: float, east: float, code_length: int):
        self.south = south
        self.west = west
        self.north = north
        self.east = east
        self.code_length = code_length
        self._freeze()

    def __repr__(self):
        return f'<CodeArea({self.south}, {self.west}, {self.north}, {self.east}, {self.code_length})>'

    @property
    def latitude_center(self) -> float:
        return min(self.south + (self.north - self.south) / 2, LATITUDE_MAX)

    @property
    def longitude_center(self) -> float:
        return min(self.west + (self.east - self.west) / 2, LONGITUDE_MAX)

    def center(self) -> GeoCoordinate:
        """The center of the area as a WGS84 GeoCoordinate"""
        return GeoCoordinate(self.latitude_center, self.longitude_center)


def decode(code: str) -> CodeArea:
    """
    Decode a full plus code into the area it covers.

    Args:
        code:
            A full code, e.g. '8FVC2222+22'

    Returns:
        CodeArea

    Raises:
        CoordinateError (INVALID_CODE) if the code is not a valid full code
    """
    if not is_full(code):
        raise CoordinateError.invalid_code(f'{code!r} is not a valid full Open Location Code')

    digits = code.replace(SEPARATOR, '').replace(PADDING_CHARACTER, '').upper()
    digits = digits[:MAX_DIGIT_COUNT]

    # integer arithmetic avoids accumulating float error
    normal_lat = -LATITUDE_MAX * PAIR_PRECISION
    normal_lng = -LONGITUDE_MAX * PAIR_PRECISION
    grid_lat, grid_lng = 0, 0

    count = min(len(digits), PAIR_CODE_LENGTH)
    place_value = PAIR_FIRST_PLACE_VALUE
    for i in range(0, count, 2):
        normal_lat += CODE_ALPHABET.find(digits[i]) * place_value
        normal_lng += CODE_ALPHABET.find(digits[i + 1]) * place_value
        if i < count - 2:
            place_value //= ENCODING_BASE

    lat_precision = place_value / PAIR_PRECISION
    lng_precision = place_value / PAIR_PRECISION

    if len(digits) > PAIR_CODE_LENGTH:
        row_place_value = GRID_LAT_FIRST_PLACE_VALUE
        col_place_value = GRID_LNG_FIRST_PLACE_VALUE
        for i in range(PAIR_CODE_LENGTH, len(digits)):
            digit = CODE_ALPHABET.find(digits[i])
            grid_lat += (digit // GRID_COLUMNS) * row_place_value
            grid_lng += (digit % GRID_COLUMNS) * col_place_value
            if i < len(digits) - 1:
                row_place_value //= GRID_ROWS
                col_place_value //= GRID_COLUMNS

        lat_precision = row_place_value / FINAL_LAT_PRECISION
        lng_precision = col_place_value / FINAL_LNG_PRECISION

    lat = normal_lat / PAIR_PRECISION + grid_lat / FINAL_LAT_PRECISION
    lng = normal_lng / PAIR_PRECISION + grid_lng / FINAL_LNG_PRECISION

    return CodeArea(
        round_to(lat, 14),
        round_to(lng, 14),
        round_to(lat + lat_precision, 14),
        round_to(lng + lng_precision, 14),
        len(digits),
    )


def shorten(code: str, latitude: float, longitude: float) -> str:
    """
    Remove as many leading digits from a full code as a reference location allows.

    Digits are removed in pairs (8, then 6, 4, 2) while the reference lies within
    0.3 of the resolution of the removed digits from the code's center, leaving
    room for the reference to move before recovery becomes ambiguous.

    Args:
        code:
            A full, unpadded code of at least 6 digits

        latitude:
            Reference latitude

        longitude:
            Reference longitude

    Returns:
        str, the short code

    Raises:
        CoordinateError (INVALID_CODE) for a short, padded or too-short code
        CoordinateError (UNREACHABLE_REFERENCE) if the reference is too far from
        the code for any digits to be removed
    """
    if not is_full(code):
        raise CoordinateError.invalid_code(f'{code!r} is not a valid full Open Location Code')
    if is_padded(code):
        raise CoordinateError.invalid_code(f'Cannot shorten padded code {code!r}')

    code = code.upper()
    area = decode(code)
    if area.code_length < MIN_TRIMMABLE_CODE_LEN:
        raise CoordinateError.invalid_code(
            f'Code {code!r} must have at least {MIN_TRIMMABLE_CODE_LEN} digits to be shortened'
        )

    latitude = _clip_latitude(latitude)
    longitude = _normalize_longitude(longitude)
    code_range = max(
        abs(area.latitude_center - latitude),
        abs(area.longitude_center - longitude)
    )

    for i in range(len(PAIR_RESOLUTIONS) - 2, -1, -1):
        if code_range < PAIR_RESOLUTIONS[i] * SHORTEN_SAFETY_FACTOR:
            return code[(i + 1) * 2:]

    raise CoordinateError.unreachable_reference(
        f'Reference ({latitude}, {longitude}) is too far from {code!r} to shorten it'
    )


def recover_nearest(code: str, latitude: float, longitude: float) -> str:
    """
    Recover the full code nearest a reference location from a short code.

    The missing leading digits are taken from the reference's own code; the
    result is then moved one cell north/south/east/west when that cell is
    closer to the reference.

    Args:
        code:
            A short code (full codes are returned upper-cased)

        latitude:
            Reference latitude

        longitude:
            Reference longitude

    Returns:
        str, the full code

    Raises:
        CoordinateError (INVALID_CODE) if the code is neither full nor short
    """
    if is_full(code):
        return code.upper()
    if not is_short(code):
        raise CoordinateError.invalid_code(f'{code!r} is not a valid short Open Location Code')

    latitude = _clip_latitude(latitude)
    longitude = _normalize_longitude(longitude)
    code = code.upper()

    padding_length = SEPARATOR_POSITION - code.find(SEPARATOR)
    resolution = ENCODING_BASE ** (2 - (padding_length / 2))
    half_resolution = resolution / 2.0

    area = decode(encode(latitude, longitude)[:padding_length] + code)
    lat_center, lng_center = area.latitude_center, area.longitude_center

    # move to the adjacent cell if that is closer to the reference
    if latitude + half_resolution < lat_center and lat_center - resolution >= -LATITUDE_MAX:
        lat_center -= resolution
    elif latitude - half_resolution > lat_center and lat_center + resolution <= LATITUDE_MAX:
        lat_center += resolution

    if longitude + half_resolution < lng_center:
        lng_center -= resolution
    elif longitude - half_resolution > lng_center:
        lng_center += resolution

    return encode(lat_center, lng_center, area.code_length)


class PlusCode(FrozenMixin):
    """
    A plus code (full, short or padded) with the altitude/accuracy of the position
    it was derived from. Plus codes are always relative to WGS84.

    Args:
        code:
            A valid plus code; normalized to upper case

        altitude, accuracy, altitude_accuracy: (Default NaN)
            As for GeoCoordinate
    """
    _fields = ('code', 'altitude', 'accuracy', 'altitude_accuracy')

    @validate_call
    def __init__(
        self,
        code: str,
        altitude: float = _NAN,
        accuracy: float = _NAN,
        altitude_accuracy: float = _NAN,
    ):
        if not is_valid(code):
            raise CoordinateError.invalid_code(f'Invalid Open Location Code {code!r}')

        self.code = code.upper()
        self.altitude = altitude
        self.accuracy = accuracy
        self.altitude_accuracy = altitude_accuracy
        self._freeze()

    def __repr__(self):
        return f'<PlusCode({self.code})>'

    def __str__(self):
        return self.code

    @property
    def is_full(self) -> bool:
        return is_full(self.code)

    @property
    def is_short(self) -> bool:
        return is_short(self.code)

    @property
    def is_padded(self) -> bool:
        return is_padded(self.code)


def plus_code(
    code: str,
    altitude: float = _NAN,
    accuracy: float = _NAN,
    altitude_accuracy: float = _NAN,
) -> PlusCode:
    """Shorthand factory for PlusCode"""
    return PlusCode(code, altitude, accuracy, altitude_accuracy)
