import pytest
from pytest import approx

from geocoords import CodeArea, CoordinateError, ErrorKind, GeoCoordinate, PlusCode, plus_code
from geocoords.openlocationcode import (
    code_length, decode, encode, is_full, is_padded, is_short, is_valid, recover_nearest,
    shorten,
)


@pytest.mark.parametrize(
    'code,valid,short,full',
    [
        ('8FWC2345+G6', True, False, True),
        ('8FWC2345+G6G', True, False, True),
        ('8fwc2345+', True, False, True),
        ('8FWCX400+', True, False, True),
        ('WC2345+G6g', True, True, False),
        ('2345+G6', True, True, False),
        ('45+G6', True, True, False),
        ('+G6', True, True, False),
        ('G+', False, False, False),
        ('+', False, False, False),
        ('8FWC2345+G', False, False, False),
        ('8FWC2_45+G6', False, False, False),
        ('8FWC2η45+G6', False, False, False),
        ('8FWC2345+G6+', False, False, False),
        ('8FWC2345G6+', False, False, False),
        ('8FWC2300+G6', False, False, False),
        ('WC2300+G6g', False, False, False),
        ('WC2345+G', False, False, False),
        ('WC2300+', False, False, False),
        ('8FWC2345', False, False, False),
        # first pair outside the globe
        ('G2222222+22', True, False, False),
        ('8X222222+22', True, False, False),
    ]
)
def test_validity(code, valid, short, full):
    assert is_valid(code) is valid
    assert is_short(code) is short
    assert is_full(code) is full


def test_is_padded():
    assert is_padded('CFX30000+')
    assert is_padded('8FWCX400+')
    assert not is_padded('8FWC2345+G6')


def test_code_length():
    assert code_length('8FVC2222+22') == 10
    assert code_length('9C3W9QCJ+2VX') == 11
    assert code_length('CFX30000+') == 4
    assert code_length('+2VX') == 3


def test_encode():
    assert encode(47.0000625, 8.0000625) == '8FVC2222+22'
    assert encode(20.3700625, 2.7821875) == '7FG49QCJ+2V'
    assert encode(20.3701125, 2.782234375, 11) == '7FG49QCJ+2VX'
    assert encode(90., 1., 4) == 'CFX30000+'

    # longitude wraps
    assert encode(47.0000625, 368.0000625) == '8FVC2222+22'

    # latitude is clipped
    assert encode(95., 1., 4) == 'CFX30000+'

    # lengths above 15 are clipped
    assert len(encode(20.3701135, 2.78223535156, 20)) == 16


def test_encode_invalid_length():
    for length in (0, 1, 3, 9):
        with pytest.raises(CoordinateError) as exc:
            encode(0., 0., length)
        assert exc.value.kind is ErrorKind.INVALID_CODE


def test_decode():
    area = decode('7FG49QCJ+2V')
    assert area.south == approx(20.37)
    assert area.west == approx(2.782125)
    assert area.north == approx(20.370125)
    assert area.east == approx(2.78225)
    assert area.code_length == 10

    area = decode('8fvc2222+22')
    assert area.latitude_center == approx(47.0000625)
    assert area.longitude_center == approx(8.0000625)

    area = decode('CFX30000+')
    assert (area.south, area.west, area.north, area.east) == approx((89., 1., 90., 2.))
    assert area.code_length == 4

    area = decode('9C3W9QCJ+2VX')
    assert area.latitude_center == approx(51.3701125, abs=1e-9)
    assert area.longitude_center == approx(-1.217765625, abs=1e-9)
    assert area.code_length == 11


def test_decode_invalid():
    for code in ('+2VX', 'CJ+2VX', 'garbage', '8FWC2345G6+'):
        with pytest.raises(CoordinateError) as exc:
            decode(code)
        assert exc.value.kind is ErrorKind.INVALID_CODE


def test_code_area_center():
    center = decode('8FVC2222+22').center()
    assert isinstance(center, GeoCoordinate)
    assert center.latitude == approx(47.0000625)
    assert center.longitude == approx(8.0000625)

    area = CodeArea(89., 179., 92., 182., 4)
    assert area.latitude_center == 90.
    assert area.longitude_center == 180.


def test_shorten():
    code = '9C3W9QCJ+2VX'
    assert shorten(code, 51.3701125, -1.217765625) == '+2VX'
    # too far from the center to remove 8 digits
    assert shorten(code, 51.3708675, -1.217765625) == 'CJ+2VX'
    assert shorten(code, 51.3693575, -1.217765625) == 'CJ+2VX'
    assert shorten(code.lower(), 51.3701125, -1.217765625) == '+2VX'


def test_shorten_invalid():
    for code in ('+2VX', 'CFX30000+', 'garbage'):
        with pytest.raises(CoordinateError) as exc:
            shorten(code, 0., 0.)
        assert exc.value.kind is ErrorKind.INVALID_CODE

    with pytest.raises(CoordinateError) as exc:
        shorten('9C3W9QCJ+2VX', -51., 100.)
    assert exc.value.kind is ErrorKind.UNREACHABLE_REFERENCE


def test_recover_nearest():
    assert recover_nearest('+2VX', 51.3701125, -1.217765625) == '9C3W9QCJ+2VX'
    assert recover_nearest('CJ+2VX', 51.3708675, -1.217765625) == '9C3W9QCJ+2VX'
    assert recover_nearest('cj+2vx', 51.3693575, -1.217765625) == '9C3W9QCJ+2VX'

    # the reference's own cell is further than the neighbouring one
    assert recover_nearest('+2VX', 51.3699, -1.217765625) == '9C3W9QCJ+2VX'

    # full codes are returned as-is
    assert recover_nearest('9c3w9qcj+2vx', 0., 0.) == '9C3W9QCJ+2VX'

    with pytest.raises(CoordinateError) as exc:
        recover_nearest('9C3W9QCJ', 51., -1.)
    assert exc.value.kind is ErrorKind.INVALID_CODE


def test_shorten_recover_round_trip():
    for lat, lon in ((47.365590, 8.524997), (-33.857, 151.215), (0.1, -179.9)):
        code = encode(lat, lon, 11)
        short = shorten(code, lat + 0.0001, lon - 0.0001)
        assert recover_nearest(short, lat + 0.0001, lon - 0.0001) == code


def test_plus_code():
    pc = plus_code('8fvc2222+22', altitude=5.)
    assert pc.code == '8FVC2222+22'
    assert pc.altitude == 5.
    assert str(pc) == '8FVC2222+22'
    assert repr(pc) == '<PlusCode(8FVC2222+22)>'
    assert pc.is_full
    assert not pc.is_short
    assert not pc.is_padded

    assert PlusCode('+2VX').is_short
    assert PlusCode('CFX30000+').is_padded

    with pytest.raises(CoordinateError) as exc:
        PlusCode('8FWC2345G6+')
    assert exc.value.kind is ErrorKind.INVALID_CODE

    with pytest.raises(AttributeError):
        pc.code = '7FG49QCJ+2V'
