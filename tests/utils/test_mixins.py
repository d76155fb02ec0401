import pytest

from geocoords.utils.mixins import FrozenMixin


class Pair(FrozenMixin):
    _fields = ('a', 'b')

    def __init__(self, a, b=float('nan')):
        if a < 0:
            raise ValueError('a must be non-negative')
        self.a = a
        self.b = b
        self._freeze()


def test_frozen():
    pair = Pair(1, 2)
    with pytest.raises(AttributeError):
        pair.a = 3

    with pytest.raises(AttributeError):
        del pair.a

    with pytest.raises(AttributeError):
        pair.c = 3

    assert pair.a == 1


def test_eq_hash():
    assert Pair(1, 2) == Pair(1, 2)
    assert Pair(1, 2) != Pair(1, 3)
    assert Pair(1, 2) != (1, 2)

    # NaN means "unspecified" and compares equal
    assert Pair(1) == Pair(1)
    assert len({Pair(1), Pair(1), Pair(2)}) == 2


def test_replace():
    pair = Pair(1, 2)
    replaced = pair.replace(b=5)
    assert replaced == Pair(1, 5)
    assert pair == Pair(1, 2)

    with pytest.raises(TypeError):
        pair.replace(c=1)

    # validation runs again
    with pytest.raises(ValueError):
        pair.replace(a=-1)
