import pytest
from pytest import approx

from geocoords import CoordinateError, Datum, DatumRegistry, Ellipsoid, ErrorKind, WGS84, WGS84_ELLIPSOID


def test_wgs84_ellipsoid():
    assert WGS84_ELLIPSOID.a == 6378137.0
    assert WGS84_ELLIPSOID.f == approx(1 / 298.257223563)
    assert WGS84_ELLIPSOID.b == approx(6356752.314245, abs=1e-6)
    assert WGS84_ELLIPSOID.e2 == approx(0.00669437999014, abs=1e-14)
    assert WGS84_ELLIPSOID.second_e2 == approx(0.00673949674228, abs=1e-14)
    assert WGS84_ELLIPSOID.n == approx(WGS84_ELLIPSOID.f / (2 - WGS84_ELLIPSOID.f))
    assert not WGS84_ELLIPSOID.is_sphere


def test_ellipsoid_from_semi_minor_axis():
    clarke = Ellipsoid('clarke1866', 6378206.4, semi_minor_axis=6356583.8)
    assert clarke.b == 6356583.8
    assert clarke.f == approx((6378206.4 - 6356583.8) / 6378206.4)

    # derived values are consistent on every access
    assert clarke.f == clarke.f
    assert clarke.b == approx(clarke.a * (1 - clarke.f))


def test_ellipsoid_sphere():
    sphere = Ellipsoid('sphere', 6371000., semi_minor_axis=6371000.)
    assert sphere.is_sphere
    assert sphere.e2 == 0.


def test_ellipsoid_requires_one_shape_parameter():
    with pytest.raises(CoordinateError) as exc:
        Ellipsoid('none', 6378137.)
    assert exc.value.kind is ErrorKind.OUT_OF_RANGE

    with pytest.raises(CoordinateError):
        Ellipsoid('both', 6378137., 6356752.3, 298.257)


def test_ellipsoid_immutable():
    with pytest.raises(AttributeError):
        WGS84_ELLIPSOID.a = 1.


def test_datum():
    assert WGS84.has_transform
    assert WGS84.translation == (0., 0., 0.)
    assert WGS84.epsg == 6326

    datum = Datum('test', WGS84_ELLIPSOID, (1, 2, 3, 4, 5, 6, 7))
    assert datum.translation == (1., 2., 3.)
    assert datum.rotation == (4., 5., 6.)
    assert datum.scale == 7.

    unknown = Datum('unknown', WGS84_ELLIPSOID)
    assert not unknown.has_transform
    assert unknown.scale == 0.

    with pytest.raises(CoordinateError) as exc:
        Datum('short', WGS84_ELLIPSOID, (1, 2, 3))
    assert exc.value.kind is ErrorKind.OUT_OF_RANGE


def test_registry_default():
    registry = DatumRegistry.default()
    assert registry is DatumRegistry.default()

    assert registry.datum('wgs1984') is WGS84
    assert registry.datum(6326) is WGS84
    assert registry.ellipsoid(7030) is WGS84_ELLIPSOID

    osgb36 = registry.datum('OSGB36')
    assert osgb36 is registry.datum(6277)
    assert osgb36.ellipsoid is registry.ellipsoid('airy1830')
    assert osgb36.translation == (-446.448, 125.157, -542.060)

    assert registry.ellipsoid('intl1924').a == 6378388.0
    assert registry.ellipsoid('Krassowsky1940').f == approx(1 / 298.3)

    assert len(registry.datums) == 16
    assert len(registry.ellipsoids) > 50


def test_registry_not_found():
    registry = DatumRegistry.default()
    with pytest.raises(CoordinateError) as exc:
        registry.datum('atlantis')
    assert exc.value.kind is ErrorKind.NOT_FOUND

    with pytest.raises(CoordinateError) as exc:
        registry.ellipsoid(1)
    assert exc.value.kind is ErrorKind.NOT_FOUND


def test_registry_custom():
    ellipsoid = Ellipsoid('custom', 6378000., inverse_flattening=300., epsg=99999)
    datum = Datum('customDatum', ellipsoid, epsg=88888)
    registry = DatumRegistry([ellipsoid], [datum])

    assert registry.ellipsoid('CUSTOM') is ellipsoid
    assert registry.ellipsoid(99999) is ellipsoid
    assert registry.datum(88888) is datum
    assert registry.datums == (datum, )

    with pytest.raises(CoordinateError):
        registry.datum('wgs1984')
