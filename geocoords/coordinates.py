"""
Geodetic (latitude/longitude) and geocentric (ECEF) coordinate values
"""

__all__ = ['ECEF', 'GeoCoordinate', 'geo']

import math
from typing import Tuple, Union

import numpy as np
from pydantic import validate_call

from geocoords.datums import Datum, WGS84
from geocoords.errors import CoordinateError
from geocoords.utils.functions import round_half_up, to_decimal_degrees
from geocoords.utils.mixins import FrozenMixin

_NAN = float('nan')


def _check_accuracy(value: float, name: str):
    if not math.isnan(value) and value < 0:
        raise CoordinateError.out_of_range(f'{name} must be non-negative, got {value}')


class GeoCoordinate(FrozenMixin):
    """
    A geodetic position (latitude/longitude in decimal degrees) on a datum.

    Unlike the projected grids, no wrapping is applied: out-of-range values are
    rejected. Use geocoords.utils.functions.wrap90/wrap180 first if wrapping is
    wanted.

    Args:
        latitude:
            Latitude in [-90, 90]

        longitude:
            Longitude in [-180, 180]

        altitude: (Default NaN)
            Height above the ellipsoid in meters, NaN if unknown

        accuracy: (Default NaN)
            Horizontal accuracy in meters, NaN if unknown

        altitude_accuracy: (Default NaN)
            Altitude accuracy in meters, NaN if unknown

        datum: (Default WGS84)
            The datum the position refers to

    Raises:
        CoordinateError (OUT_OF_RANGE) if latitude/longitude are out of bounds or an
        accuracy is negative
    """
    _fields = ('latitude', 'longitude', 'altitude', 'accuracy', 'altitude_accuracy', 'datum')

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(
        self,
        latitude: float,
        longitude: float,
        altitude: float = _NAN,
        accuracy: float = _NAN,
        altitude_accuracy: float = _NAN,
        datum: Datum = WGS84,
    ):
        if not -90. <= latitude <= 90.:
            raise CoordinateError.out_of_range(f'Latitude {latitude} out of bounds [-90, 90]')
        if not -180. <= longitude <= 180.:
            raise CoordinateError.out_of_range(f'Longitude {longitude} out of bounds [-180, 180]')
        _check_accuracy(accuracy, 'Accuracy')
        _check_accuracy(altitude_accuracy, 'Altitude accuracy')

        self.latitude = latitude
        self.longitude = longitude
        self.altitude = altitude
        self.accuracy = accuracy
        self.altitude_accuracy = altitude_accuracy
        self.datum = datum
        self._freeze()

    def __repr__(self):
        parts = [str(self.latitude), str(self.longitude)]
        if not math.isnan(self.altitude):
            parts.append(str(self.altitude))
        return f'<GeoCoordinate({", ".join(parts)}, {self.datum.name})>'

    @classmethod
    def from_dms(
        cls,
        lat: Tuple[float, float, float, str],
        lon: Tuple[float, float, float, str],
        **kwargs
    ) -> 'GeoCoordinate':
        """
        Creates a GeoCoordinate from a Degree Minutes Seconds (lat, lon) pair.

        The quadrant value should consist of either 'N'/'S' (latitude) or 'E'/'W' (longitude)

        Args:
            lat:
                Latitude, as a 4-tuple of
                ( <degrees> (float), <minutes> (float), <seconds> (float), <quadrant> (str) )

            lon:
                Longitude, as a 4-tuple of
                ( <degrees> (float), <minutes> (float), <seconds> (float), <quadrant> (str) )

        Keyword Args:
            Passed through to the GeoCoordinate constructor (altitude, datum, ...)

        Returns:
            GeoCoordinate
        """
        def convert(dms: Tuple[float, float, float, str]) -> float:
            mult = -1 if dms[3].upper() in ('S', 'W') else 1
            return mult * to_decimal_degrees(dms[0], dms[1], dms[2])

        return cls(convert(lat), convert(lon), **kwargs)

    def to_dms(self) -> Tuple[Tuple[int, int, float, str], Tuple[int, int, float, str]]:
        """
        Convert latitude and longitude to tuples of degrees, minutes, seconds, hemisphere

        Returns:
            ((degrees, minutes, seconds, 'N'|'S'), (degrees, minutes, seconds, 'E'|'W'))
        """
        def convert(dd: float) -> Tuple[int, int, float]:
            minutes, seconds = divmod(abs(dd) * 3600, 60)
            degrees, minutes = divmod(minutes, 60)
            return int(degrees), int(minutes), round_half_up(seconds, 5)

        return (
            (*convert(self.latitude), 'N' if self.latitude >= 0 else 'S'),
            (*convert(self.longitude), 'E' if self.longitude >= 0 else 'W'),
        )

    def to_float(self) -> Tuple[float, float]:
        """Returns (latitude, longitude)"""
        return self.latitude, self.longitude


def geo(
    latitude: Union[float, int, str],
    longitude: Union[float, int, str],
    altitude: float = _NAN,
    accuracy: float = _NAN,
    altitude_accuracy: float = _NAN,
    datum: Datum = WGS84,
) -> GeoCoordinate:
    """Shorthand factory for GeoCoordinate"""
    return GeoCoordinate(latitude, longitude, altitude, accuracy, altitude_accuracy, datum)


class ECEF(FrozenMixin):
    """
    Earth-centered, earth-fixed cartesian coordinates in meters, relative to the
    geocenter of whichever datum produced them.

    Args:
        x:
            Meters towards (0°N, 0°E)

        y:
            Meters towards (0°N, 90°E)

        z:
            Meters towards the north pole
    """
    _fields = ('x', 'y', 'z')

    @validate_call
    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z
        self._freeze()

    def __repr__(self):
        return f'<ECEF({self.x}, {self.y}, {self.z})>'

    def to_numpy(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_numpy(cls, xyz: np.ndarray) -> 'ECEF':
        return cls(*(float(v) for v in xyz))
