from pytest import approx

from geocoords import DatumRegistry, ECEF, WGS84_ELLIPSOID, ecef_to_geo, geo, geo_to_ecef
from tests.functions import assert_geo_close


def test_geo_to_ecef():
    ecef = geo_to_ecef(geo(0., 0.))
    assert ecef.x == approx(WGS84_ELLIPSOID.a)
    assert ecef.y == approx(0., abs=1e-9)
    assert ecef.z == approx(0., abs=1e-9)

    ecef = geo_to_ecef(geo(0., 90., 100.))
    assert ecef.x == approx(0., abs=1e-6)
    assert ecef.y == approx(WGS84_ELLIPSOID.a + 100.)

    ecef = geo_to_ecef(geo(90., 0.))
    assert ecef.x == approx(0., abs=1e-6)
    assert ecef.z == approx(WGS84_ELLIPSOID.b, abs=1e-6)


def test_ecef_to_geo():
    c = ecef_to_geo(ECEF(WGS84_ELLIPSOID.a + 10., 0., 0.))
    assert_geo_close(c, geo(0., 0.))
    assert c.altitude == approx(10., abs=1e-6)

    c = ecef_to_geo(ECEF(0., 0., -WGS84_ELLIPSOID.b - 5.))
    assert c.latitude == -90.
    assert c.altitude == approx(5., abs=1e-6)

    c = ecef_to_geo(ECEF(0., 0., 0.))
    assert c.to_float() == (0., 0.)
    assert c.altitude == -WGS84_ELLIPSOID.a


def test_ecef_round_trip():
    for lat, lon, alt in (
        (51.5, -0.1, 100.),
        (-33.857, 151.215, 0.),
        (89.9, 179.9, 8848.),
        (-45., -179.99, -400.),
        (0.001, 0.001, 35786000.),
    ):
        c = geo(lat, lon, alt)
        back = ecef_to_geo(geo_to_ecef(c))
        assert_geo_close(back, c)
        assert back.altitude == approx(alt, abs=1e-3)


def test_ecef_round_trip_other_datum():
    nad27 = DatumRegistry.default().datum('nad1927')
    c = geo(40., -100., 250., datum=nad27)
    back = ecef_to_geo(geo_to_ecef(c), nad27)
    assert_geo_close(back, c)
    assert back.altitude == approx(250., abs=1e-3)
