"""
Module for Niemeyer geohashes: a base-32 geocode that interleaves longitude and
latitude bisection bits, five bits per character.

| length | lat error    | lon error    | km error |
|--------|--------------|--------------|----------|
| 1      | ± 23         | ± 23         | ± 2500   |
| 2      | ± 2.8        | ± 5.6        | ± 630    |
| 3      | ± 0.70       | ± 0.70       | ± 78     |
| 4      | ± 0.087      | ± 0.18       | ± 20     |
| 5      | ± 0.022      | ± 0.022      | ± 2.4    |
| 6      | ± 0.0027     | ± 0.0055     | ± 0.61   |
| 7      | ± 0.00068    | ± 0.00068    | ± 0.076  |
| 8      | ± 0.000085   | ± 0.00017    | ± 0.019  |
"""

__all__ = [
    'GeoHash', 'GeoHashBounds',
    'adjacent', 'bounds', 'decode', 'encode', 'geohash', 'neighbours', 'subhashes',
]

from typing import Dict, NamedTuple, Set, Tuple

from pydantic import validate_call

from geocoords.datums import Datum, WGS84
from geocoords.errors import CoordinateError
from geocoords.utils.logging import warn_once
from geocoords.utils.mixins import FrozenMixin

_NAN = float('nan')

_BITS = (16, 8, 4, 2, 1)
_CHARSET = '0123456789bcdefghjkmnpqrstuvwxyz'
_INVERSE = {char: idx for idx, char in enumerate(_CHARSET)}
_MAX_PRECISION = 12

# (even length, odd length)
_NEIGHBOUR = {
    'n': ('p0r21436x8zb9dcf5h7kjnmqesgutwvy', 'bc01fg45238967deuvhjyznpkmstqrwx'),
    's': ('14365h7k9dcfesgujnmqp0r2twvyx8zb', '238967debc01fg45kmstqrwxuvhjyznp'),
    'e': ('bc01fg45238967deuvhjyznpkmstqrwx', 'p0r21436x8zb9dcf5h7kjnmqesgutwvy'),
    'w': ('238967debc01fg45kmstqrwxuvhjyznp', '14365h7k9dcfesgujnmqp0r2twvyx8zb'),
}
_BORDER = {
    'n': ('prxz', 'bcfguvyz'),
    's': ('028b', '0145hjnp'),
    'e': ('bcfguvyz', 'prxz'),
    'w': ('0145hjnp', '028b'),
}


class GeoHashBounds(NamedTuple):
    """The south-west and north-east corners of a geohash cell"""
    south: float
    west: float
    north: float
    east: float


def _validate_hash(value: str) -> str:
    hash_ = value.lower()
    if not hash_:
        raise CoordinateError.invalid_code('Invalid geohash: empty string')
    for character in hash_:
        if character not in _INVERSE:
            raise CoordinateError.invalid_code(
                f'Invalid character {character!r} in geohash {value!r}'
            )
    return hash_


class GeoHash(FrozenMixin):
    """
    A geohash cell together with the altitude/accuracy/datum of the position it
    was derived from. The hash is normalized to lower case.

    Args:
        hash:
            The geohash, e.g. 'u4pruydqqvj'

        altitude, accuracy, altitude_accuracy: (Default NaN)
            As for GeoCoordinate

        datum: (Default WGS84)
            The datum of the encoded position
    """
    _fields = ('hash', 'altitude', 'accuracy', 'altitude_accuracy', 'datum')

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(
        self,
        hash: str,
        altitude: float = _NAN,
        accuracy: float = _NAN,
        altitude_accuracy: float = _NAN,
        datum: Datum = WGS84,
    ):
        self.hash = _validate_hash(hash)
        self.altitude = altitude
        self.accuracy = accuracy
        self.altitude_accuracy = altitude_accuracy
        self.datum = datum
        self._freeze()

    def __repr__(self):
        return f'<GeoHash({self.hash})>'

    def __str__(self):
        return self.hash

    def __len__(self):
        return len(self.hash)


def geohash(
    hash: str,
    altitude: float = _NAN,
    accuracy: float = _NAN,
    altitude_accuracy: float = _NAN,
    datum: Datum = WGS84,
) -> GeoHash:
    """Shorthand factory for GeoHash"""
    return GeoHash(hash, altitude, accuracy, altitude_accuracy, datum)


def _encode(latitude: float, longitude: float, precision: int) -> str:
    lat_interval = [-90., 90.]
    lon_interval = [-180., 180.]
    character, bit = 0, 0
    lon_component = True

    hash_ = ''
    while len(hash_) < precision:
        if lon_component:
            mid = (lon_interval[0] + lon_interval[1]) / 2.0
            if longitude >= mid:
                character |= _BITS[bit]
                lon_interval[0] = mid
            else:
                lon_interval[1] = mid
        else:
            mid = (lat_interval[0] + lat_interval[1]) / 2.0
            if latitude >= mid:
                character |= _BITS[bit]
                lat_interval[0] = mid
            else:
                lat_interval[1] = mid

        if bit < len(_BITS) - 1:
            bit += 1
        else:
            hash_ += _CHARSET[character]
            character, bit = 0, 0

        lon_component = not lon_component

    return hash_


def encode(latitude: float, longitude: float, precision: int = 0) -> str:
    """
    Find the geohash in which a latitude/longitude falls.

    Args:
        latitude:
            Latitude in decimal degrees

        longitude:
            Longitude in decimal degrees

        precision: (Default 0)
            Number of characters. If 0, the shortest hash (up to 12 characters)
            whose cell center is exactly the input position is returned, falling
            back to 12 characters. Only positions on a cell center shorten the
            hash, so e.g. (52.205, 0.119) gives 12 characters here and needs
            precision=7 to produce 'u120fxw'

    Returns:
        str
    """
    if precision < 0:
        raise CoordinateError.out_of_range(f'Geohash precision must be non-negative, got {precision}')

    if precision == 0:
        for length in range(1, _MAX_PRECISION + 1):
            hash_ = _encode(latitude, longitude, length)
            if decode(hash_) == (latitude, longitude):
                return hash_

        warn_once(
            'Position could not be represented exactly by a geohash of up to %d '
            'characters; using %d characters (this warning will not repeat)',
            _MAX_PRECISION, _MAX_PRECISION
        )
        precision = _MAX_PRECISION

    return _encode(latitude, longitude, precision)


def bounds(hash: str) -> GeoHashBounds:
    """
    The south-west/north-east bounds of a geohash cell.

    Args:
        hash:
            A geohash

    Returns:
        GeoHashBounds(south, west, north, east)

    Raises:
        CoordinateError (INVALID_CODE) for an empty hash or a character outside
        the geohash alphabet
    """
    hash_ = _validate_hash(hash)
    lat_interval = [-90., 90.]
    lon_interval = [-180., 180.]
    lon_component = True

    for character in hash_:
        character_decoded = _INVERSE[character]
        for mask in _BITS:
            if lon_component:
                if character_decoded & mask != 0:
                    lon_interval[0] = (lon_interval[0] + lon_interval[1]) / 2.0
                else:
                    lon_interval[1] = (lon_interval[0] + lon_interval[1]) / 2.0
            else:
                if character_decoded & mask != 0:
                    lat_interval[0] = (lat_interval[0] + lat_interval[1]) / 2.0
                else:
                    lat_interval[1] = (lat_interval[0] + lat_interval[1]) / 2.0
            lon_component = not lon_component

    return GeoHashBounds(lat_interval[0], lon_interval[0], lat_interval[1], lon_interval[1])


def decode(hash: str) -> Tuple[float, float]:
    """
    The center of a geohash cell.

    Args:
        hash:
            A geohash

    Returns:
        latitude, longitude
    """
    south, west, north, east = bounds(hash)
    return (south + north) / 2.0, (west + east) / 2.0


def adjacent(hash: str, direction: str) -> str:
    """
    The adjacent cell of the same length in a cardinal direction.

    Args:
        hash:
            A geohash

        direction:
            One of 'n', 's', 'e', 'w' (either case)

    Returns:
        str

    Raises:
        CoordinateError (INVALID_CODE) for a malformed hash or direction
    """
    hash_ = _validate_hash(hash)
    direction = direction.lower()
    if direction not in _NEIGHBOUR:
        raise CoordinateError.invalid_code(f'Invalid direction {direction!r}, must be one of n, s, e, w')

    last, parent = hash_[-1], hash_[:-1]
    parity = len(hash_) % 2

    # cells on the border of their parent don't share its prefix
    if last in _BORDER[direction][parity] and parent:
        parent = adjacent(parent, direction)

    return parent + _CHARSET[_NEIGHBOUR[direction][parity].index(last)]


def neighbours(hash: str) -> Dict[str, str]:
    """
    All eight cells surrounding a geohash.

    Returns:
        dict keyed 'n', 'ne', 'e', 'se', 's', 'sw', 'w', 'nw'
    """
    north, south = adjacent(hash, 'n'), adjacent(hash, 's')
    return {
        'n': north,
        'ne': adjacent(north, 'e'),
        'e': adjacent(hash, 'e'),
        'se': adjacent(south, 'e'),
        's': south,
        'sw': adjacent(south, 'w'),
        'w': adjacent(hash, 'w'),
        'nw': adjacent(north, 'w'),
    }


def subhashes(hash: str) -> Set[str]:
    """
    The 32 cells one character longer contained by a geohash.

    Args:
        hash:
            A geohash

    Returns:
        set of str
    """
    hash_ = _validate_hash(hash)
    return {hash_ + char for char in _CHARSET}
