"""Type definitions and helpers for PaneerLang.

This module defines the runtime type system used by the PaneerLang
interpreter. It includes classes for representing declared type
annotations and array values, as well as utilities for checking values
against annotations and rendering values in their canonical textual form.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Optional, Tuple
import math


INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class TypeSpec:
    """Represents a PaneerLang type annotation.

    A type is described by its `kind` (one of 'int', 'float', 'string',
    'bool', 'array' or 'void') and, for arrays, the element type. For
    example, `array<int>` becomes
    `TypeSpec(kind='array', args=(TypeSpec(kind='int'),))`.
    """
    kind: str
    args: Tuple['TypeSpec', ...] = ()

    def __repr__(self) -> str:
        if not self.args:
            return self.kind
        inner = ", ".join(repr(a) for a in self.args)
        return f"{self.kind}<{inner}>"

    @property
    def elem(self) -> Optional['TypeSpec']:
        return self.args[0] if self.kind == 'array' and self.args else None

    # Convenience constructors
    @staticmethod
    def integer() -> 'TypeSpec':
        return TypeSpec('int')

    @staticmethod
    def float_() -> 'TypeSpec':
        return TypeSpec('float')

    @staticmethod
    def string() -> 'TypeSpec':
        return TypeSpec('string')

    @staticmethod
    def boolean() -> 'TypeSpec':
        return TypeSpec('bool')

    @staticmethod
    def array(elem: Optional['TypeSpec']) -> 'TypeSpec':
        # An array whose element type is not known yet (empty literal) has no args.
        return TypeSpec('array', (elem,) if elem is not None else ())

    @staticmethod
    def void() -> 'TypeSpec':
        return TypeSpec('void')


class VoidVal:
    """Marker object for the unit value produced by print and void functions."""
    def __repr__(self) -> str:
        return 'void'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, VoidVal)

    def __hash__(self) -> int:
        return hash(VoidVal)


@dataclass
class ArrayVal:
    """Represents a PaneerLang array value.

    An array has an element type (a TypeSpec, or None while it is an empty
    literal that has not been bound yet) and a list of contained items.
    Arrays are homogeneous by construction: the interpreter refuses literals
    whose elements disagree on their type.
    """
    elem_type: Optional[TypeSpec]
    items: List[Any]

    def __repr__(self) -> str:
        return f"Array({self.elem_type!r}, {self.items!r})"


def is_numeric(value: Any) -> bool:
    # bool is a subclass of int in Python but a distinct kind in PaneerLang
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def fits_int64(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX


def type_of(value: Any) -> TypeSpec:
    """Return the runtime TypeSpec of a PaneerLang value."""
    if isinstance(value, bool):
        return TypeSpec.boolean()
    if isinstance(value, int):
        return TypeSpec.integer()
    if isinstance(value, float):
        return TypeSpec.float_()
    if isinstance(value, str):
        return TypeSpec.string()
    if isinstance(value, ArrayVal):
        return TypeSpec.array(value.elem_type)
    if isinstance(value, VoidVal):
        return TypeSpec.void()
    raise TypeError(f"not a PaneerLang value: {value!r}")


def type_name(value: Any) -> str:
    """Return the PaneerLang type name of a runtime value."""
    if isinstance(value, ArrayVal) and value.elem_type is None:
        return 'array'
    return repr(type_of(value))


def unify(a: Optional[TypeSpec], b: Optional[TypeSpec]) -> Optional[TypeSpec]:
    """Combine two element types of the same array literal.

    `None` stands for "unknown" (the element type of an empty array) and
    unifies with anything. Raises TypeError when the types disagree.
    """
    if a is None:
        return b
    if b is None:
        return a
    if a.kind == 'array' and b.kind == 'array':
        return TypeSpec.array(unify(a.elem, b.elem))
    if a != b:
        raise TypeError(f"array elements must share one type, found {a!r} and {b!r}")
    return a


def check_value(value: Any, spec: TypeSpec) -> Any:
    """Check a runtime value against a declared type and return the value to bind.

    Ints bound to `float` slots are promoted, and empty arrays adopt the
    declared element type. Any other mismatch raises a TypeError (not a
    PaneerLang error); callers translate it into a PaneerError.
    """
    kind = spec.kind
    if kind == 'int':
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif kind == 'float':
        if isinstance(value, float):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return float(value)
    elif kind == 'string':
        if isinstance(value, str):
            return value
    elif kind == 'bool':
        if isinstance(value, bool):
            return value
    elif kind == 'void':
        if isinstance(value, VoidVal):
            return value
    elif kind == 'array':
        if isinstance(value, ArrayVal):
            return _check_array(value, spec)
    else:
        raise TypeError(f"unknown type {spec!r}")
    raise TypeError(f"expected {spec!r}, got {type_name(value)}")


def _check_array(value: ArrayVal, spec: TypeSpec) -> ArrayVal:
    elem = spec.elem
    if elem is None:
        return value
    if value.elem_type is None:
        # empty array literal: take the declared element type
        return ArrayVal(elem, value.items)
    if value.elem_type == elem:
        return value
    if elem.kind == 'array' and value.elem_type.kind == 'array':
        items = [_check_array(item, elem) for item in value.items]
        return ArrayVal(elem, items)
    raise TypeError(f"expected {spec!r}, got {type_name(value)}")


def format_float(value: float) -> str:
    """Render a float as its shortest round-trip decimal, without exponent.

    Integral floats drop their fractional part, so `3.0` renders as `3`
    and `2.5` as `2.5`.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    text = repr(value)
    if 'e' in text or 'E' in text:
        text = format(Decimal(text), 'f')
    if text.endswith('.0'):
        text = text[:-2]
    return text


def to_string(value: Any) -> str:
    """Convert a PaneerLang value to its canonical textual form.

    This is the form used both by the print built-in and by string
    concatenation with `+`.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(to_string(item) for item in value.items) + ']'
    if isinstance(value, VoidVal):
        return 'void'
    return str(value)
