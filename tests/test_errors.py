import pytest

from geocoords import CoordinateError, ErrorKind, geo


def test_error_kinds():
    assert CoordinateError.out_of_range('x').kind is ErrorKind.OUT_OF_RANGE
    assert CoordinateError.not_found('x').kind is ErrorKind.NOT_FOUND
    assert CoordinateError.invalid_code('x').kind is ErrorKind.INVALID_CODE
    assert CoordinateError.unreachable_reference('x').kind is ErrorKind.UNREACHABLE_REFERENCE
    assert CoordinateError.datum_mismatch('x').kind is ErrorKind.DATUM_MISMATCH


def test_error_is_value_error():
    with pytest.raises(ValueError):
        geo(91., 0.)

    err = CoordinateError.not_found('No datum registered as "x"')
    assert isinstance(err, ValueError)
    assert str(err) == 'No datum registered as "x"'
    assert err.message == 'No datum registered as "x"'


def test_error_repr():
    err = CoordinateError.invalid_code('bad')
    assert repr(err) == '<CoordinateError(INVALID_CODE: bad)>'
