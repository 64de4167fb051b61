"""Tree-walking evaluator for iku programs.

Walks the syntax tree recursively, keeping variables in an explicit scope stack
and performing output only through an injected Context. Errors are raised as
InterpreterError subclasses and propagate straight to the caller.
"""

from __future__ import annotations

import logging
from typing import Iterable

from iku import Literal, UNIT
from iku.config import get_max_call_depth, recursion_limit
from iku.errors import (
    IkuArityError,
    IkuNameError,
    IkuRecursionError,
    IkuRedefinitionError,
    IkuTypeError,
    InterpreterError,
)
from iku.evaluation.context import Context
from iku.evaluation.operators import binary_op
from iku.types.ast import (
    Assign,
    BinOp,
    Block,
    Call,
    ConditionalOp,
    ConditionalOperator,
    Declare,
    Expr,
    Function,
    If,
    Lit,
    MakeTuple,
    Name,
    Not,
    Program,
)
from iku.types.literal import display, is_bool, type_name
from iku.types.scopes import Scopes

logger = logging.getLogger(__name__)

PRINT = "print"
MAIN = "main"


class Evaluator:
    """Holds the state of a single program run."""

    def __init__(self, ctx: Context, max_call_depth: int | None = None):
        self.ctx = ctx
        self.functions: dict[str, Function] = {}
        self.scopes = Scopes()
        self.max_call_depth = max_call_depth if max_call_depth is not None else get_max_call_depth()
        self.call_depth = 0

    def load(self, program: Program) -> None:
        """Fill the function table; nothing runs if a name is defined twice."""
        functions: dict[str, Function] = {}
        for fn in program.functions:
            if fn.name in functions:
                raise IkuRedefinitionError(f"Function {fn.name} is defined more than once")
            functions[fn.name] = fn
        self.functions = functions
        logger.debug("loaded %d function(s): %s", len(functions), ", ".join(functions))

    # --- Sequences ---
    def eval_sequence(self, exprs: Iterable[Expr]) -> Literal:
        """Evaluate in the current scope; the last value wins, unit if empty."""
        result: Literal = UNIT
        for e in exprs:
            result = self.eval(e)
        return result

    def expect_bool(self, value: Literal, what: str) -> bool:
        if not is_bool(value):
            raise IkuTypeError(f"{what} must be a bool, got {type_name(value)}")
        return value

    # --- Expressions ---
    def eval(self, expr: Expr) -> Literal:
        match expr:
            case Lit(value):
                return value

            case Name(name):
                value = self.scopes.get(name)
                if value is None:
                    raise IkuNameError(f"Undefined variable {name}")
                return value

            case Declare(name, e):
                value = self.eval(e)
                self.scopes.create(name, value)
                return value

            case Assign(name, e):
                value = self.eval(e)
                if not self.scopes.set(name, value):
                    raise IkuNameError(f"Assignment to undeclared variable {name}")
                return value

            case Block(exprs):
                with self.scopes.scope(nested=True):
                    return self.eval_sequence(exprs)

            case If(cond, then, otherwise):
                # Branches run in the current scope, only Block opens a new one
                if self.expect_bool(self.eval(cond), "Condition of if"):
                    return self.eval_sequence(then)
                return self.eval_sequence(otherwise)

            case BinOp(op, left, right):
                lhs = self.eval(left)
                rhs = self.eval(right)
                return binary_op(op, lhs, rhs)

            case ConditionalOp(op, left, right):
                lhs = self.expect_bool(self.eval(left), f"Left operand of {op.value}")
                if op is ConditionalOperator.AND and not lhs:
                    return False
                if op is ConditionalOperator.OR and lhs:
                    return True
                return self.eval(right)

            case Not(e):
                return not self.expect_bool(self.eval(e), "Operand of !")

            case MakeTuple(exprs):
                return tuple(self.eval(e) for e in exprs)

            case Call(name, args):
                values = [self.eval(a) for a in args]
                return self.call(name, values)

        raise TypeError(f"Cannot evaluate {expr!r}")

    # --- Calls ---
    def call(self, name: str, args: list[Literal]) -> Literal:
        """Call a function in a fresh detached scope, released on every path."""
        if self.call_depth >= self.max_call_depth:
            raise IkuRecursionError(f"Maximum call depth of {self.max_call_depth} exceeded calling {name}")
        self.call_depth += 1
        try:
            with self.scopes.scope(nested=False):
                if name == PRINT:
                    return self.call_print(args)
                return self.call_function(name, args)
        finally:
            self.call_depth -= 1

    def call_print(self, args: list[Literal]) -> Literal:
        if len(args) != 1:
            raise IkuArityError(f"not enough arguments to print: expected 1, got {len(args)}")
        self.ctx.print(display(args[0]))
        self.ctx.print("\n")
        return UNIT

    def call_function(self, name: str, args: list[Literal]) -> Literal:
        fn = self.functions.get(name)
        if fn is None:
            raise IkuNameError(f"Trying to call unknown function {name}")
        if len(args) != fn.arity:
            raise IkuArityError(
                f"Function {name} takes {fn.arity} argument(s) but {len(args)} were given"
            )
        for param, value in zip(fn.params, args):
            self.scopes.create(param.name, value)
        logger.debug("call %s(%s)", name, ", ".join(display(a) for a in args))
        # The call scope itself hosts the body
        return self.eval_sequence(fn.body)

    def interpret(self, program: Program) -> Literal:
        self.load(program)
        logger.debug("running %s", MAIN)
        return self.call(MAIN, [])


def interpret(ctx: Context, program: Program, max_call_depth: int | None = None) -> Literal:
    """Interpret a program given some context for the interpreter to use."""
    evaluator = Evaluator(ctx, max_call_depth)
    with recursion_limit(evaluator.max_call_depth):
        try:
            return evaluator.interpret(program)
        except InterpreterError as e:
            logger.debug("program failed: %s", e.message)
            raise
