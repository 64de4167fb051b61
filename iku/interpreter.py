from __future__ import annotations

from iku import Literal
from iku.config import configure_logging
from iku.evaluation.context import Context, RealContext
from iku.evaluation.evaluator import interpret
from iku.reader.parser import parse
from iku.types.ast import Program


class Interpreter:
    """
    Orchestrates reading and evaluating iku source code.
    Output goes to the given Context (stdout when none is given).
    """

    def __init__(self, ctx: Context | None = None, *, max_call_depth: int | None = None):
        configure_logging()
        self.ctx: Context = ctx if ctx is not None else RealContext()
        self.max_call_depth = max_call_depth

    def parse(self, code: str) -> Program:
        return parse(code)

    def run(self, code: str) -> Literal:
        """Parse `code` and run its main function, returning main's value."""
        return interpret(self.ctx, self.parse(code), self.max_call_depth)
