import math

from pytest import approx

from geocoords.utils.functions import *


def test_to_radians_to_degrees():
    assert to_radians(180.) == approx(math.pi)
    assert to_radians(-90.) == approx(-math.pi / 2)
    assert to_degrees(math.pi) == approx(180.)
    assert to_degrees(to_radians(51.5)) == approx(51.5)


def test_wrap360():
    assert wrap360(-1.) == 359.
    assert wrap360(361.) == 1.
    assert wrap360(720.) == 0.
    assert wrap360(0.) == 0.
    assert wrap360(360.) == 360.


def test_wrap180():
    assert wrap180(181.) == -179.
    assert wrap180(-181.) == 179.
    assert wrap180(359.) == -1.
    assert wrap180(180.) == 180.
    assert wrap180(-180.) == -180.


def test_wrap90():
    assert wrap90(91.) == 89.
    assert wrap90(-91.) == -89.
    assert wrap90(180.) == 0.
    assert wrap90(270.) == -90.
    assert wrap90(90.) == 90.


def test_wrap_in_range_untouched():
    # in-range values must not pick up modulo rounding error
    value = 0.1 + 0.2
    assert wrap360(value) is value
    assert wrap180(value) is value
    assert wrap90(value) is value


def test_add_wrapped():
    assert add_wrapped_latitude(80., 20.) == 80.
    assert add_wrapped_latitude(-80., -20.) == -80.
    assert add_wrapped_latitude(10., 20.) == 30.

    assert add_wrapped_longitude(170., 20.) == -170.
    assert add_wrapped_longitude(-170., -20.) == 170.
    assert add_wrapped_longitude(10., 20.) == 30.


def test_round_to():
    assert round_to(1.23456, 3) == 1.235
    assert round_to(2.5, 0) == 3.
    assert round_to(-2.5, 0) == -3.
    assert round_to(-1.23456, 2) == -1.23


def test_round_half_up():
    assert round_half_up(1.59, 1) == 1.6
    assert round_half_up(1.51, 1) == 1.5
    assert round_half_up(1.55, 1) == 1.6
    assert round_half_up(1.65, 1) == 1.7

    assert round_half_up(-1.59, 1) == -1.6
    assert round_half_up(-1.51, 1) == -1.5
    assert round_half_up(-1.55, 1) == -1.5
    assert round_half_up(-1.65, 1) == -1.6


def test_to_decimal_degrees():
    assert to_decimal_degrees(51) == 51.
    assert to_decimal_degrees(51, 30) == 51.5
    assert to_decimal_degrees(10, 15, 36) == approx(10.26)
