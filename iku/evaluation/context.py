from __future__ import annotations
import sys
from typing import Protocol, TextIO


class Context(Protocol):
    """The effects an interpreter is allowed to perform.

    Abstracting them lets the same evaluator write to stdout or to a buffer.
    """

    def print(self, data: str) -> None:
        """Emit `data` verbatim, without adding a newline. Must not fail."""
        ...


class RealContext:
    """Performs effects for real by writing to a stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def print(self, data: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(data)


class BufferContext:
    """Collects printed data in memory instead of performing it."""

    def __init__(self):
        self.prints: list[str] = []

    def print(self, data: str) -> None:
        self.prints.append(data)

    @property
    def output(self) -> str:
        return "".join(self.prints)
