from pytest import approx

from geocoords import GeoCoordinate


def assert_geo_close(c1: GeoCoordinate, c2: GeoCoordinate, abs_tol=1e-9):
    """
    Asserts that two geodetic coordinates are equal within a specified absolute
    tolerance.

    Args:
        c1: The first GeoCoordinate
        c2: The second GeoCoordinate
        abs_tol: The absolute tolerance in degrees.
                 Default is 1e-9 (approx 0.1mm at the equator).
    """
    try:
        assert c1.latitude == approx(c2.latitude, abs=abs_tol)
        assert c1.longitude == approx(c2.longitude, abs=abs_tol)
        assert c1.datum == c2.datum
    except AssertionError as e:
        raise AssertionError(f'{c1!r} != {c2!r}') from e
