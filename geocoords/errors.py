"""
Error type raised by geocoords
"""

__all__ = ['CoordinateError', 'ErrorKind']

from enum import Enum


class ErrorKind(Enum):
    """The category of a CoordinateError"""
    OUT_OF_RANGE = 'out_of_range'
    NOT_FOUND = 'not_found'
    INVALID_CODE = 'invalid_code'
    UNREACHABLE_REFERENCE = 'unreachable_reference'
    DATUM_MISMATCH = 'datum_mismatch'


class CoordinateError(ValueError):
    """
    Raised for every local validation failure in geocoords. Inspect .kind to tell
    the failures apart.

    Args:
        kind:
            The ErrorKind of the failure

        message:
            A human readable description
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self):
        return f'<CoordinateError({self.kind.name}: {self.message})>'

    @classmethod
    def out_of_range(cls, message: str) -> 'CoordinateError':
        return cls(ErrorKind.OUT_OF_RANGE, message)

    @classmethod
    def not_found(cls, message: str) -> 'CoordinateError':
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def invalid_code(cls, message: str) -> 'CoordinateError':
        return cls(ErrorKind.INVALID_CODE, message)

    @classmethod
    def unreachable_reference(cls, message: str) -> 'CoordinateError':
        return cls(ErrorKind.UNREACHABLE_REFERENCE, message)

    @classmethod
    def datum_mismatch(cls, message: str) -> 'CoordinateError':
        return cls(ErrorKind.DATUM_MISMATCH, message)
