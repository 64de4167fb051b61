"""Helpers over the literal value domain: type checks, equality and display."""

from __future__ import annotations

from io import StringIO

from iku import Literal


def is_bool(value: Literal) -> bool:
    return isinstance(value, bool)


def is_int(value: Literal) -> bool:
    # bool is an int subclass in Python but not an integer in iku
    return isinstance(value, int) and not isinstance(value, bool)


def type_name(value: Literal) -> str:
    if is_bool(value):
        return "bool"
    if is_int(value):
        return "int"
    if isinstance(value, str):
        return "string"
    if isinstance(value, tuple):
        return "tuple"
    return type(value).__name__


def literal_equals(a: Literal, b: Literal) -> bool:
    """Structural equality, recursing into tuples.

    Values of different types are never equal, so `true != 1`.
    """
    if type(a) is not type(b):
        return False
    if isinstance(a, tuple):
        return len(a) == len(b) and all(literal_equals(x, y) for x, y in zip(a, b))
    return a == b


def _write_literal(buffer: StringIO, value: Literal) -> None:
    if is_bool(value):
        buffer.write("true" if value else "false")
    elif isinstance(value, tuple):
        buffer.write("(")
        for i, item in enumerate(value):
            if i:
                buffer.write(", ")
            _write_literal(buffer, item)
        # (1,) is a tuple, (1) would read as a parenthesised expression
        if len(value) == 1:
            buffer.write(",")
        buffer.write(")")
    else:
        buffer.write(str(value))


def display(value: Literal) -> str:
    """Render a literal the way `print` shows it."""
    with StringIO() as buffer:
        _write_literal(buffer, value)
        return buffer.getvalue()
