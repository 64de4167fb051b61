"""Syntax tree for iku programs.

The evaluator only depends on these shapes, never on how they were parsed.
Each node owns its children; sequences are tuples so trees are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from iku import Literal


class Operator(Enum):
    EQUALS = "=="
    NOT_EQUALS = "!="
    LESS = "<"
    LESS_EQUALS = "<="
    GREATER = ">"
    GREATER_EQUALS = ">="
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"


class ConditionalOperator(Enum):
    AND = "&&"
    OR = "||"


@dataclass(frozen=True)
class Lit:
    value: Literal


@dataclass(frozen=True)
class Name:
    name: str


@dataclass(frozen=True)
class Call:
    name: str
    args: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class Declare:
    """`name := expr`, a new binding in the innermost scope."""
    name: str
    expr: Expr


@dataclass(frozen=True)
class Assign:
    """`name = expr`, mutates the nearest visible binding."""
    name: str
    expr: Expr


@dataclass(frozen=True)
class Block:
    exprs: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class BinOp:
    op: Operator
    left: Expr
    right: Expr


@dataclass(frozen=True)
class ConditionalOp:
    op: ConditionalOperator
    left: Expr
    right: Expr


@dataclass(frozen=True)
class If:
    cond: Expr
    then: tuple[Expr, ...] = ()
    otherwise: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class Not:
    expr: Expr


@dataclass(frozen=True)
class MakeTuple:
    exprs: tuple[Expr, ...] = ()


Expr = Union[Lit, Name, Call, Declare, Assign, Block, BinOp, ConditionalOp, If, Not, MakeTuple]


@dataclass(frozen=True)
class Param:
    name: str
    annotation: Optional[str] = None  # not enforced by the evaluator


@dataclass(frozen=True)
class Function:
    name: str
    params: tuple[Param, ...] = ()
    body: tuple[Expr, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.params)


@dataclass(frozen=True)
class Program:
    functions: tuple[Function, ...] = field(default_factory=tuple)
