"""
Reference ellipsoids and geodetic datums, and the registry used to look them up
"""

__all__ = ['Datum', 'DatumRegistry', 'Ellipsoid', 'WGS84', 'WGS84_ELLIPSOID']

import threading
from types import MappingProxyType
from typing import Dict, Iterable, Optional, Sequence, Tuple, Union

from geocoords._const import WGS84_A, WGS84_EPSG, WGS84_INVERSE_F
from geocoords.errors import CoordinateError
from geocoords.utils.mixins import FrozenMixin


class Ellipsoid(FrozenMixin):
    """
    A reference ellipsoid, defined by its semi-major axis and exactly one of
    semi-minor axis or inverse flattening. The other value is derived on every access.

    Args:
        name:
            Name of the ellipsoid, e.g. 'wgs1984'

        a:
            Semi-major axis in meters

        semi_minor_axis: (Default None)
            Semi-minor axis in meters

        inverse_flattening: (Default None)
            1/f

        epsg: (Default None)
            EPSG code of the ellipsoid, if it has one

        comment: (Default '')
            Free text
    """
    _fields = ('name', 'a', 'semi_minor_axis', 'inverse_flattening', 'epsg', 'comment')

    def __init__(
        self,
        name: str,
        a: float,
        semi_minor_axis: Optional[float] = None,
        inverse_flattening: Optional[float] = None,
        epsg: Optional[int] = None,
        comment: str = '',
    ):
        if (semi_minor_axis is None) == (inverse_flattening is None):
            raise CoordinateError.out_of_range(
                f'Ellipsoid {name!r} must define exactly one of semi_minor_axis '
                'or inverse_flattening'
            )

        self.name = name
        self.a = float(a)
        self.semi_minor_axis = None if semi_minor_axis is None else float(semi_minor_axis)
        self.inverse_flattening = None if inverse_flattening is None else float(inverse_flattening)
        self.epsg = epsg
        self.comment = comment
        self._freeze()

    def __repr__(self):
        if self.inverse_flattening is not None:
            return f'<Ellipsoid({self.name}, a={self.a}, 1/f={self.inverse_flattening})>'
        return f'<Ellipsoid({self.name}, a={self.a}, b={self.semi_minor_axis})>'

    @property
    def b(self) -> float:
        """Semi-minor axis, b = a(1 - f)"""
        if self.semi_minor_axis is not None:
            return self.semi_minor_axis
        return self.a * (1 - 1 / self.inverse_flattening)

    @property
    def f(self) -> float:
        """Flattening, f = (a - b) / a"""
        if self.inverse_flattening is not None:
            return 1 / self.inverse_flattening
        return (self.a - self.semi_minor_axis) / self.a

    @property
    def e2(self) -> float:
        """First eccentricity squared, e² = f(2 - f)"""
        f = self.f
        return f * (2 - f)

    @property
    def second_e2(self) -> float:
        """Second eccentricity squared, e'² = f(2 - f) / (1 - f)²"""
        f = self.f
        return f * (2 - f) / (1 - f) ** 2

    @property
    def n(self) -> float:
        """Third flattening, n = f / (2 - f)"""
        f = self.f
        return f / (2 - f)

    @property
    def is_sphere(self) -> bool:
        return self.f == 0.


class Datum(FrozenMixin):
    """
    A geodetic datum: a reference ellipsoid anchored to the earth, plus the 7
    Helmert parameters which transform WGS84 cartesian coordinates into it.

    Args:
        name:
            Name of the datum, e.g. 'osgb36'

        ellipsoid:
            The reference Ellipsoid

        helmert: (Default empty)
            WGS84 -> datum parameters as (tx, ty, tz, rx, ry, rz, s); translations
            in meters, rotations in arc seconds, scale in ppm. Empty when unknown.

        epsg: (Default None)
            EPSG code of the datum

        epoch: (Default 0)
            Reference epoch, 0 if not applicable

        comment: (Default '')
            Free text
    """
    _fields = ('name', 'ellipsoid', 'helmert', 'epsg', 'epoch', 'comment')

    def __init__(
        self,
        name: str,
        ellipsoid: Ellipsoid,
        helmert: Sequence[float] = (),
        epsg: Optional[int] = None,
        epoch: int = 0,
        comment: str = '',
    ):
        if len(helmert) not in (0, 7):
            raise CoordinateError.out_of_range(
                f'Datum {name!r} requires either 0 or 7 helmert parameters, got {len(helmert)}'
            )

        self.name = name
        self.ellipsoid = ellipsoid
        self.helmert: Tuple[float, ...] = tuple(float(x) for x in helmert)
        self.epsg = epsg
        self.epoch = epoch
        self.comment = comment
        self._freeze()

    def __repr__(self):
        return f'<Datum({self.name}, ellipsoid={self.ellipsoid.name})>'

    @property
    def has_transform(self) -> bool:
        """True if the WGS84 -> datum parameters are known"""
        return len(self.helmert) == 7

    @property
    def translation(self) -> Tuple[float, float, float]:
        return self.helmert[:3] if self.has_transform else (0., 0., 0.)

    @property
    def rotation(self) -> Tuple[float, float, float]:
        return self.helmert[3:6] if self.has_transform else (0., 0., 0.)

    @property
    def scale(self) -> float:
        return self.helmert[6] if self.has_transform else 0.


WGS84_ELLIPSOID = Ellipsoid('wgs1984', WGS84_A, inverse_flattening=WGS84_INVERSE_F, epsg=7030)
WGS84 = Datum('wgs1984', WGS84_ELLIPSOID, (0., 0., 0., 0., 0., 0., 0.), epsg=WGS84_EPSG)


# name, a, b, 1/f, epsg, comment
_ELLIPSOID_TABLE = (
    ('grs1980authalic', 6370997.0, 6370997.0, None, 7048, 'GRS 1980 authalic sphere'),
    ('airy1830', 6377563.396, None, 299.3249646, 7001, 'Airy 1830'),
    ('airyModified', 6377340.189, None, 299.3249646, 7002, 'Modified Airy'),
    ('andrae', 6377104.43, None, 300.0, None, 'Andrae 1876 (Denmark, Iceland)'),
    ('apl4.9', 6378137.0, None, 298.25, None, 'Appl. Physics 1965'),
    ('ats1977', 6378135.0, None, 298.257, 7041, 'Average Terrestrial System 1977'),
    ('australian', 6378160.0, None, 298.25, 7003, 'Australian National & S. Amer. 1969'),
    ('bessel1841', 6377397.155, None, 299.1528128, 7004, 'Bessel 1841'),
    ('besselMod', 6377492.018, None, 299.1528128, 7005, 'Bessel Modified'),
    ('besselNamibia', 6377483.865, None, 299.1528128, 7046, 'Bessel Namibia (GLM)'),
    ('clarke1858', 6378293.639, None, 294.2606764, 7007, 'Clarke 1858'),
    ('clarke1866', 6378206.4, 6356583.8, None, 7008, 'Clarke 1866'),
    ('clarke1880', 6378249.145, None, 293.465, 7034, 'Clarke 1880'),
    ('clarke1880mod', 6378249.145, None, 293.4663, 7012, 'Clarke 1880 (RGS)'),
    ('clarke1880ign', 6378249.2, None, 293.4660212936269, 7011, 'Clarke 1880 (IGN)'),
    ('cpm1799', 6375738.7, None, 334.29, None, 'Comm. des Poids et Mesures 1799'),
    ('danish', 6377019.2563, None, 300.0, 7051, 'Andrae 1876 (Denmark, Iceland)'),
    ('delmbr', 6376428.0, None, 311.5, None, 'Delambre 1810 (Belgium)'),
    ('engelis', 6378136.05, None, 298.2566, None, 'Engelis 1985'),
    ('everest1830', 6377276.345, None, 300.8017, 7042, 'Everest 1830 Definition'),
    ('everest1830mod', 6377304.063, None, 300.8017, 7018, 'Everest 1830 Modified'),
    ('everest1937', 6377276.345, None, 300.8017, 7015, 'Everest 1830 (1937 Adjustment) India'),
    ('everest1962', 6377301.243, None, 300.8017255, 7044, 'Everest 1830 (1962 Definition) Pakistan'),
    ('everest1967', 6377298.556, None, 300.8017, 7016, 'Everest 1830 (1967 Definition) Sabah & Sarawak'),
    ('everest1969', 6377295.664, None, 300.8017, 7056, 'Everest 1830 RSO 1969 Malaysia'),
    ('everest1975', 6377299.151, None, 300.8017255, 7045, 'Everest 1830 (1975 Definition)'),
    ('fischer1960', 6378166.0, None, 298.3, None, 'Fischer (Mercury Datum) 1960'),
    ('fischer1960mod', 6378155.0, None, 298.3, None, 'Modified Fischer 1960'),
    ('fischer1968', 6378150.0, None, 298.3, None, 'Fischer 1968'),
    ('gem10c', 6378137.0, None, 298.257223563, 7031, 'GEM 10C Gravity Potential Model'),
    ('grs1967', 6378160.0, None, 298.247167427, 7036, 'GRS 1967'),
    ('grs1967trunc', 6378160.0, None, 298.25, None, 'GRS 1967 truncated'),
    ('grs1980', 6378137.0, None, 298.257222101, 7019, 'GRS 1980 (IUGG, 1980)'),
    ('gsk2011', 6378136.5, None, 298.2564151, 1025, 'GSK-2011'),
    ('helmert1906', 6378200.0, None, 298.3, 7020, 'Helmert 1906'),
    ('hough1960', 6378270.0, None, 297.0, 7053, 'Hough 1960'),
    ('iau1976', 6378140.0, None, 298.257, None, 'IAU 1976'),
    ('indonesianNational', 6378160.0, None, 298.247, 7021, 'Indonesian National 1974'),
    ('intl1924', 6378388.0, None, 297.0, 7022, 'International 1924'),
    ('intl1967', 6378160.0, None, 298.25, 7023, 'International 1967'),
    ('kaula', 6378163.0, None, 298.24, None, 'Kaula 1961'),
    ('krassowsky1940', 6378245.0, None, 298.3, 7024, 'Krassowsky 1940'),
    ('lerch', 6378139.0, None, 298.257, None, 'Lerch 1979'),
    ('maupertius', 6397300.0, None, 191.0, None, 'Maupertius 1738'),
    ('merit', 6378137.0, None, 298.257, None, 'MERIT 1983'),
    ('nwl9d', 6378145.0, None, 298.25, 7025, 'Naval Weapons Lab. 1965'),
    ('osu1986', 6378136.2, None, 298.25722, 7032, 'OSU 86 geoidal model'),
    ('osu1991', 6378136.3, None, 298.25722, 7033, 'OSU 91 geoidal model'),
    ('plessis1817', 6376523.0, None, 308.64, 7027, 'Plessis 1817'),
    ('pz90', 6378136.0, None, 298.25784, 7054, 'PZ-90'),
    ('seasia', 6378155.0, 6356773.3205, None, None, 'Southeast Asia'),
    ('sgs1985', 6378136.0, None, 298.257, None, 'Soviet Geodetic System 1985'),
    ('struve1860', 6378298.3, None, 294.73, 7028, 'Struve 1860'),
    ('walbeck', 6376896.0, None, 302.78, None, 'Walbeck'),
    ('wgs1960', 6378165.0, None, 298.3, None, 'WGS 60'),
    ('wgs1966', 6378145.0, None, 298.25, None, 'WGS 66'),
    ('wgs1972', 6378135.0, None, 298.26, 7043, 'WGS 72'),
)

# name, ellipsoid, (tx, ty, tz, rx, ry, rz, s), epsg
_DATUM_TABLE = (
    ('osgb36', 'airy1830', (-446.448, 125.157, -542.060, -0.1502, -0.2470, -0.8421, 20.4894), 6277),
    ('irl1975', 'airyModified', (-482.530, 130.596, -564.557, -1.042, -0.214, -0.631, -8.150), None),
    ('tokyoJapan', 'bessel1841', (148.0, -507.0, -685.0, 0., 0., 0., 0.), 6301),
    ('adindan', 'clarke1880', (-165.0, -11.0, 206.0, 0., 0., 0., 0.), 6201),
    ('afgooye', 'krassowsky1940', (-43.0, -163.0, 45.0, 0., 0., 0., 0.), 6205),
    ('australianGeod1966', 'australian',
     (-124.133, -42.003, 137.4, -0.008, -0.557, -0.178, -0.3824149507821167), 6202),
    ('australianGeod1984', 'australian',
     (-117.763, -51.51, 139.061, 0.292, -0.443, -0.277, -0.03939657799319541), 6203),
    ('arc1950', 'clarke1880', (-138.0, -105.0, -289.0, 0., 0., 0., 0.), 6209),
    ('arc1960', 'clarke1880', (-157.0, -2.0, -299.0, 0., 0., 0., 0.), 6210),
    ('ayabelle', 'clarke1880', (-79.0, -129.0, 145.0, 0., 0., 0., 0.), 6713),
    ('ed1950', 'intl1924', (89.5, 93.8, 123.1, 0., 0., 0.156, -1.2), 6230),
    ('etrf1989', 'grs1980', (0., 0., 0., 0., 0., 0., 0.), 6258),
    ('nad1927', 'clarke1866', (8.0, -160.0, -176.0, 0., 0., 0., 0.), 6267),
    ('nad1983', 'grs1980', (1.004, -1.910, -0.515, 0.0267, 0.00034, 0.011, -0.0015), 6269),
    ('wgs1972', 'wgs1972', (0., 0., -4.5, 0., 0., 0.554, -0.22), 6322),
)


def _index(
    items: Iterable[Union[Ellipsoid, Datum]]
) -> Tuple[Dict[str, Union[Ellipsoid, Datum]], Dict[int, Union[Ellipsoid, Datum]]]:
    by_name, by_epsg = {}, {}
    for item in items:
        by_name[item.name.lower()] = item
        if item.epsg is not None:
            by_epsg[item.epsg] = item
    return by_name, by_epsg


class DatumRegistry:
    """
    A read-only lookup of ellipsoids and datums by name (case-insensitive) or EPSG code.

    Registries never change after construction and can be shared between threads.
    DatumRegistry.default() returns the built-in table, built once per process.

    Args:
        ellipsoids:
            The ellipsoids to register

        datums:
            The datums to register. Their ellipsoids need not be registered.
    """

    _DEFAULT: Optional['DatumRegistry'] = None
    _DEFAULT_LOCK = threading.Lock()

    def __init__(self, ellipsoids: Iterable[Ellipsoid], datums: Iterable[Datum]):
        ell_name, ell_epsg = _index(ellipsoids)
        dat_name, dat_epsg = _index(datums)
        self._ellipsoids_by_name = MappingProxyType(ell_name)
        self._ellipsoids_by_epsg = MappingProxyType(ell_epsg)
        self._datums_by_name = MappingProxyType(dat_name)
        self._datums_by_epsg = MappingProxyType(dat_epsg)

    def __repr__(self):
        return (
            f'<DatumRegistry with {len(self._ellipsoids_by_name)} ellipsoids '
            f'and {len(self._datums_by_name)} datums>'
        )

    @classmethod
    def default(cls) -> 'DatumRegistry':
        """The built-in registry of ellipsoids and datums"""
        if cls._DEFAULT is None:
            with cls._DEFAULT_LOCK:
                if cls._DEFAULT is None:
                    cls._DEFAULT = cls._build_default()
        return cls._DEFAULT

    @classmethod
    def _build_default(cls) -> 'DatumRegistry':
        ellipsoids = {WGS84_ELLIPSOID.name: WGS84_ELLIPSOID}
        for name, a, b, inv_f, epsg, comment in _ELLIPSOID_TABLE:
            ellipsoids[name] = Ellipsoid(name, a, b, inv_f, epsg, comment)

        datums = [WGS84]
        for name, ellipsoid, helmert, epsg in _DATUM_TABLE:
            datums.append(Datum(name, ellipsoids[ellipsoid], helmert, epsg))

        return cls(ellipsoids.values(), datums)

    @staticmethod
    def _lookup(identifier: Union[str, int], by_name, by_epsg, what: str):
        if isinstance(identifier, str):
            found = by_name.get(identifier.lower())
        else:
            found = by_epsg.get(identifier)

        if found is None:
            raise CoordinateError.not_found(f'No {what} registered as {identifier!r}')
        return found

    def ellipsoid(self, identifier: Union[str, int]) -> Ellipsoid:
        """
        Look up an ellipsoid.

        Args:
            identifier:
                The ellipsoid name, or its EPSG code

        Returns:
            Ellipsoid

        Raises:
            CoordinateError (NOT_FOUND) if no ellipsoid matches
        """
        return self._lookup(
            identifier, self._ellipsoids_by_name, self._ellipsoids_by_epsg, 'ellipsoid'
        )

    def datum(self, identifier: Union[str, int]) -> Datum:
        """
        Look up a datum.

        Args:
            identifier:
                The datum name, or its EPSG code

        Returns:
            Datum

        Raises:
            CoordinateError (NOT_FOUND) if no datum matches
        """
        return self._lookup(identifier, self._datums_by_name, self._datums_by_epsg, 'datum')

    @property
    def ellipsoids(self) -> Tuple[Ellipsoid, ...]:
        return tuple(self._ellipsoids_by_name.values())

    @property
    def datums(self) -> Tuple[Datum, ...]:
        return tuple(self._datums_by_name.values())
