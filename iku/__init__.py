# Core type aliases for iku's data model.
# Runtime values are plain Python types: str, int, bool and tuple (of values).
# There is no wrapper class for literals; the evaluator checks the concrete
# Python type where the language needs it (bool is checked before int).
#
# Naming guidance:
# - Literal: a fully evaluated runtime value.
# - Expr (iku.types.ast): a syntax tree node that still has to be evaluated.

from typing import Union

Literal = Union[str, int, bool, tuple]

# The zero-element tuple: the value of empty blocks, print and empty bodies.
UNIT: tuple = ()
