"""Module for angle and rounding functions shared by every converter"""

__all__ = [
    'add_wrapped_latitude', 'add_wrapped_longitude', 'round_half_up', 'round_to',
    'to_decimal_degrees', 'to_degrees', 'to_radians', 'wrap90', 'wrap180', 'wrap360',
]

import math


def to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def to_degrees(radians: float) -> float:
    return radians * 180.0 / math.pi


def wrap360(degrees: float) -> float:
    """
    Constrain degrees to the range [0, 360], e.g. for bearings; -1 => 359, 361 => 1.

    Values already within range are returned untouched, so no rounding error is
    introduced by the modulo arithmetic.

    Args:
        degrees:
            An angle in degrees

    Returns:
        float
    """
    if 0.0 <= degrees <= 360.0:
        return degrees

    # sawtooth wave p:360, a:360
    return (degrees % 360.0 + 360.0) % 360.0


def wrap180(degrees: float) -> float:
    """
    Constrain degrees to the range [-180, 180], e.g. for longitudes; -181 => 179,
    181 => -179.

    Values already within range are returned untouched.

    Args:
        degrees:
            An angle in degrees

    Returns:
        float
    """
    if -180.0 <= degrees <= 180.0:
        return degrees

    # sawtooth wave p:180, a:+-180
    return (degrees + 540.0) % 360.0 - 180.0


def wrap90(degrees: float) -> float:
    """
    Constrain degrees to the range [-90, 90], e.g. for latitudes; -91 => -89, 91 => 89.

    Values already within range are returned untouched.

    Args:
        degrees:
            An angle in degrees

    Returns:
        float
    """
    if -90.0 <= degrees <= 90.0:
        return degrees

    # triangle wave p:360, a:+-90
    return abs((degrees % 360.0 + 270.0) % 360.0 - 180.0) - 90.0


def add_wrapped_latitude(lat1: float, lat2: float) -> float:
    """Sum of two latitudes, folded back over the poles into [-90, 90]"""
    return wrap90(lat1 + lat2)


def add_wrapped_longitude(lon1: float, lon2: float) -> float:
    """Sum of two longitudes, wrapped across the antimeridian into [-180, 180]"""
    return wrap180(lon1 + lon2)


def round_to(value: float, digits: int) -> float:
    """
    Rounds to a number of decimal digits by scaling with 10**digits, rounding to the
    nearest whole (halves away from zero), and scaling back.

    Args:
        value:
            The float value to be rounded

        digits:
            Number of digits after the decimal point

    Returns:
        float
    """
    factor = 10.0 ** digits
    scaled = value * factor
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / factor


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = value + 10 ** -(precision + 12)

    return round(mod, precision)


def to_decimal_degrees(degrees: float, minutes: float = 0., seconds: float = 0.) -> float:
    """
    Converts d, d m.m or d m s.s to decimal degrees. All parts are taken as
    magnitudes; apply the hemisphere sign to the result.

    Args:
        degrees:
            Whole (or decimal) degrees

        minutes: (Default 0)
            Minutes of arc

        seconds: (Default 0)
            Seconds of arc

    Returns:
        float
    """
    return degrees + (minutes + seconds / 60.0) / 60.0
