from __future__ import annotations
import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator

# Defaults
_DEFAULT_LOG_LEVEL = logging.WARNING
_DEFAULT_MAX_CALL_DEPTH = 1000

# Host frames consumed per iku call (eval -> call -> body -> operand ...),
# with generous headroom for deeply nested expressions.
_FRAMES_PER_CALL = 25


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def get_log_level() -> int:
    raw = os.environ.get('IKU_LOG_LEVEL')
    if raw:
        level = getattr(logging, raw.strip().upper(), None)
        if isinstance(level, int):
            return level
    return _DEFAULT_LOG_LEVEL


def get_max_call_depth() -> int:
    return int_from_env('IKU_MAX_CALL_DEPTH', _DEFAULT_MAX_CALL_DEPTH)


def needed_recursion_limit(max_call_depth: int) -> int:
    return max_call_depth * _FRAMES_PER_CALL + 1000


@contextmanager
def recursion_limit(max_call_depth: int) -> Iterator[None]:
    """Raise the host recursion limit so that `max_call_depth` iku calls fit,
    restoring the previous limit on exit."""
    previous = sys.getrecursionlimit()
    needed = needed_recursion_limit(max_call_depth)
    if previous < needed:
        sys.setrecursionlimit(needed)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


_logging_configured = False


def configure_logging() -> None:
    # Applies IKU_LOG_LEVEL to the package logger once, and only when it is set
    global _logging_configured
    if _logging_configured:
        return
    _logging_configured = True
    if os.environ.get('IKU_LOG_LEVEL'):
        logging.getLogger('iku').setLevel(get_log_level())
