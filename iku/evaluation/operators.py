from __future__ import annotations
from typing import Callable

from iku import Literal
from iku.errors import IkuTypeError, IkuZeroDivisionError, IkuOverflowError
from iku.reader.lexer import INT64_MIN, INT64_MAX
from iku.types.ast import Operator
from iku.types.literal import is_int, literal_equals, type_name


# -------------------------------
# Integer helpers
# -------------------------------
def _check_range(op: Operator, value: int) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise IkuOverflowError(f"Integer overflow in {op.value}")
    return value


def _trunc_div(a: int, b: int) -> int:
    # Rounds toward zero, unlike Python's floor division
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def div(a: int, b: int) -> int:
    if b == 0:
        raise IkuZeroDivisionError("Division by zero")
    return _trunc_div(a, b)


def mod(a: int, b: int) -> int:
    if b == 0:
        raise IkuZeroDivisionError("Modulo by zero")
    # The remainder takes the sign of the dividend
    return a - b * _trunc_div(a, b)


INT_OPERATIONS: dict[Operator, Callable[[int, int], Literal]] = {
    Operator.LESS: lambda a, b: a < b,
    Operator.LESS_EQUALS: lambda a, b: a <= b,
    Operator.GREATER: lambda a, b: a > b,
    Operator.GREATER_EQUALS: lambda a, b: a >= b,
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: div,
    Operator.MOD: mod,
}


# -------------------------------
# Binary operations
# -------------------------------
def binary_op(op: Operator, left: Literal, right: Literal) -> Literal:
    """Apply `op` to two evaluated operands."""
    if op is Operator.EQUALS:
        return literal_equals(left, right)
    if op is Operator.NOT_EQUALS:
        return not literal_equals(left, right)

    if not (is_int(left) and is_int(right)):
        raise IkuTypeError(
            f"Operator {op.value} requires two ints, got {type_name(left)} and {type_name(right)}"
        )
    result = INT_OPERATIONS[op](left, right)
    if is_int(result):
        return _check_range(op, result)
    return result
