"""Lexical scoping for iku.

Scopes form an explicit stack rather than an environment chain. A scope is
either nested (a block, which sees its enclosing scopes) or detached (a function
call, whose lookups stop at its own boundary). Functions capture nothing.
"""

from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import Iterator, Optional

from iku import Literal
from iku.errors import IkuInternalError


class Scope:
    """Variable definitions of a single block or call."""

    __slots__ = ("nested", "vars")

    def __init__(self, nested: bool):
        self.nested: bool = nested
        self.vars: dict[str, Literal] = {}

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("nested" if self.nested else "detached")
            self._write_vars(buffer)
            return buffer.getvalue()


class Scopes:
    """Stack of scopes; the last element is the active one."""

    __slots__ = ("scopes",)

    def __init__(self):
        self.scopes: list[Scope] = []

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def enter(self, nested: bool) -> None:
        self.scopes.append(Scope(nested))

    def exit(self) -> None:
        if not self.scopes:
            raise IkuInternalError("Cannot exit scope: no scope is active")
        self.scopes.pop()

    @contextmanager
    def scope(self, nested: bool) -> Iterator[Scope]:
        """Enter a scope for the duration of a `with` block, exiting on every path."""
        self.enter(nested)
        try:
            yield self.scopes[-1]
        finally:
            self.exit()

    def _visible(self) -> Iterator[Scope]:
        # Top-down, up to and including the first detached scope
        for scope in reversed(self.scopes):
            yield scope
            if not scope.nested:
                break

    def find(self, name: str) -> Optional[Scope]:
        """Find the nearest visible scope that binds `name`."""
        for scope in self._visible():
            if name in scope.vars:
                return scope
        return None

    def get(self, name: str) -> Optional[Literal]:
        """Look up `name`, or None if it is not visible from the active scope."""
        scope = self.find(name)
        if scope is None:
            return None
        return scope.vars[name]

    def set(self, name: str, value: Literal) -> bool:
        """Update an existing binding. Returns whether a binding was found."""
        scope = self.find(name)
        if scope is None:
            return False
        scope.vars[name] = value
        return True

    def create(self, name: str, value: Literal) -> None:
        """Bind `name` in the active scope, shadowing any outer binding."""
        if not self.scopes:
            raise IkuInternalError(f"Cannot create {name}: no scope is active")
        self.scopes[-1].vars[name] = value

    def __repr__(self) -> str:
        return f"<Scopes: {' -> '.join(repr(s) for s in reversed(self.scopes))}>"
