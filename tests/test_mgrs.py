import pytest
from pytest import approx

from geocoords import (
    MGRS, CoordinateError, ErrorKind, geo, geo_to_utm, mgrs_to_utm, parse_mgrs,
    utm_to_mgrs,
)
from geocoords.utm import utm


def test_mgrs_init():
    m = MGRS(31, 'u', 'dq', 48251., 11932.)
    assert m.zone == 31
    assert m.band == 'U'
    assert m.grid == 'DQ'
    assert m.easting == 48251.
    assert m.northing == 11932.
    assert repr(m) == '<MGRS(31U DQ 48251.0 11932.0)>'

    with pytest.raises(AttributeError):
        m.grid = 'DR'


def test_mgrs_invalid():
    with pytest.raises(CoordinateError) as exc:
        MGRS(0, 'U', 'DQ', 0., 0.)
    assert exc.value.kind is ErrorKind.OUT_OF_RANGE

    for band in ('I', 'O', 'A', 'Y', 'UU'):
        with pytest.raises(CoordinateError) as exc:
            MGRS(31, band, 'DQ', 0., 0.)
        assert exc.value.kind is ErrorKind.INVALID_CODE

    # zone 31 columns are A-H; row letters never include I or O
    for grid in ('JQ', 'DI', 'D', 'DQQ'):
        with pytest.raises(CoordinateError) as exc:
            MGRS(31, 'U', grid, 0., 0.)
        assert exc.value.kind is ErrorKind.INVALID_CODE

    for easting, northing in ((100000., 0.), (0., 100000.), (-1., 0.)):
        with pytest.raises(CoordinateError) as exc:
            MGRS(31, 'U', 'DQ', easting, northing)
        assert exc.value.kind is ErrorKind.OUT_OF_RANGE


def test_mgrs_to_utm():
    u = mgrs_to_utm(MGRS(31, 'U', 'DQ', 48251., 11932.))
    assert u == utm(31, 'N', 448251., 5411932.)

    u = mgrs_to_utm(MGRS(31, 'U', 'DQ', 48251., 11932., altitude=35., accuracy=1.))
    assert u.altitude == 35.
    assert u.accuracy == 1.


def test_utm_to_mgrs():
    m = utm_to_mgrs(utm(31, 'N', 448251., 5411932.))
    assert m == MGRS(31, 'U', 'DQ', 48251., 11932.)

    m = utm_to_mgrs(geo_to_utm(geo(48.8582, 2.2945)))
    assert (m.zone, m.band, m.grid) == (31, 'U', 'DQ')
    assert m.easting == approx(48251.5, abs=1.)
    assert m.northing == approx(11932.5, abs=1.)


def test_utm_to_mgrs_out_of_range():
    with pytest.raises(CoordinateError) as exc:
        utm_to_mgrs(geo_to_utm(geo(85., 0.)))
    assert exc.value.kind is ErrorKind.OUT_OF_RANGE

    with pytest.raises(CoordinateError) as exc:
        utm_to_mgrs(utm(31, 'N', 50000., 5411932.))
    assert exc.value.kind is ErrorKind.OUT_OF_RANGE


def test_mgrs_round_trip():
    for lat, lon in (
        (51.5, -0.1),
        (-33.857, 151.215),
        (0.5, 0.5),
        (-0.5, -0.5),
        (64.1, -21.9),
        (-54.8, -68.3),
        (78., 15.6),
        (83.5, -40.),
        (-79.5, 166.6),
    ):
        u = geo_to_utm(geo(lat, lon))
        m = utm_to_mgrs(u)
        back = mgrs_to_utm(m)
        assert back.zone == u.zone
        assert back.hemisphere == u.hemisphere
        assert back.easting == approx(u.easting, abs=1e-6)
        assert back.northing == approx(u.northing, abs=1e-6)


def test_parse_mgrs():
    expected = MGRS(31, 'U', 'DQ', 48251., 11932.)
    assert parse_mgrs('31U DQ 48251 11932') == expected
    assert parse_mgrs('31udq 48251 11932') == expected
    assert parse_mgrs('31UDQ4825111932') == expected
    assert parse_mgrs(' 31U DQ 48251.0 11932.0 ') == expected

    # fewer digits are truncated values
    assert parse_mgrs('31U DQ 4825 1193') == MGRS(31, 'U', 'DQ', 48250., 11930.)
    assert parse_mgrs('31UDQ4811') == MGRS(31, 'U', 'DQ', 48000., 11000.)
    assert parse_mgrs('31U DQ') == MGRS(31, 'U', 'DQ', 0., 0.)

    assert parse_mgrs('15SWC8081751205') == MGRS(15, 'S', 'WC', 80817., 51205.)


def test_parse_mgrs_invalid():
    for text in (
        '',
        'garbage',
        '31I DQ 48251 11932',
        '31U DQ 482511193',
        '31U DQ 48251 11932 5',
        '31U DQ 48,2,51 11932',
    ):
        with pytest.raises(CoordinateError) as exc:
            parse_mgrs(text)
        assert exc.value.kind is ErrorKind.INVALID_CODE
