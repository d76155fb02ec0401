"""Utility mixin classes"""

__all__ = ['FrozenMixin']

import math
from typing import Any, Tuple


class FrozenMixin:
    """
    Mixin for value types which must not change after construction.

    Subclasses list their constructor arguments in _fields and call self._freeze()
    at the end of __init__. Changing a field is done with .replace(), which runs the
    constructor (and therefore its validation) again.

    NaN fields compare equal to each other, since NaN stands for "unspecified".
    """
    _fields: Tuple[str, ...] = ()

    def _freeze(self):
        object.__setattr__(self, '_frozen', True)

    def __setattr__(self, name, value):
        if getattr(self, '_frozen', False):
            raise AttributeError(
                f'{self.__class__.__name__} is immutable; use .replace({name}=...) instead'
            )
        super().__setattr__(name, value)

    def __delattr__(self, name):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def _key(self) -> Tuple[Any, ...]:
        return tuple(
            None if isinstance(val, float) and math.isnan(val) else val
            for val in (getattr(self, field) for field in self._fields)
        )

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False

        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def replace(self, **changes):
        """
        Returns a copy of this value with the given fields changed.

        Keyword Args:
            Any constructor argument of the value type

        Returns:
            A new instance of the same type
        """
        unknown = set(changes) - set(self._fields)
        if unknown:
            raise TypeError(f'Unknown field(s) for {self.__class__.__name__}: {sorted(unknown)}')

        kwargs = {field: getattr(self, field) for field in self._fields}
        kwargs.update(changes)
        return self.__class__(**kwargs)
