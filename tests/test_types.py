import pytest

from paneer.errors import ErrorVal, PaneerError, TYPE_ERROR, format_error
from paneer.types import ArrayVal, TypeSpec, VoidVal, check_value, format_float, to_string, unify


def test_typespec_repr():
    assert repr(TypeSpec.array(TypeSpec.array(TypeSpec.integer()))) == 'array<array<int>>'
    assert repr(TypeSpec.string()) == 'string'


def test_format_float():
    assert format_float(3.0) == '3'
    assert format_float(2.5) == '2.5'
    assert format_float(-0.125) == '-0.125'
    assert format_float(1e-7) == '0.0000001'


def test_to_string():
    nested = ArrayVal(TypeSpec.array(TypeSpec.boolean()), [ArrayVal(TypeSpec.boolean(), [True, False])])
    assert to_string(nested) == '[[true, false]]'
    assert to_string(ArrayVal(None, [])) == '[]'
    assert to_string(VoidVal()) == 'void'


def test_check_value_promotes_int_to_float():
    value = check_value(3, TypeSpec.float_())
    assert isinstance(value, float) and value == 3.0


def test_check_value_rejects_bool_as_int():
    with pytest.raises(TypeError):
        check_value(True, TypeSpec.integer())


def test_empty_array_adopts_declared_type():
    bound = check_value(ArrayVal(None, []), TypeSpec.array(TypeSpec.string()))
    assert bound.elem_type == TypeSpec.string()


def test_unify():
    assert unify(None, TypeSpec.integer()) == TypeSpec.integer()
    assert unify(TypeSpec.array(None), TypeSpec.array(TypeSpec.integer())) == TypeSpec.array(TypeSpec.integer())
    with pytest.raises(TypeError):
        unify(TypeSpec.integer(), TypeSpec.float_())


def test_error_kinds_are_closed():
    with pytest.raises(ValueError):
        ErrorVal('SomethingElse', 'nope')


def test_format_error_shows_source_line():
    err = ErrorVal(TYPE_ERROR, 'bad', 2)
    assert format_error(err, 'a;\n    b;  \n', 'f.paneer') == 'f.paneer:2: TypeError: bad\n    b;'
    assert format_error(ErrorVal(TYPE_ERROR, 'bad')) == '<input>: TypeError: bad'


def test_paneer_error_message():
    e = PaneerError(ErrorVal(TYPE_ERROR, 'bad', 4))
    assert str(e) == 'TypeError: bad (line 4)'
