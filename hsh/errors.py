"""Formatted diagnostics written to standard error."""

from __future__ import annotations

import sys
from typing import Iterator


def _context(args: tuple[str | None, ...]) -> Iterator[str]:
    for arg in args:
        if arg is None:
            return
        yield arg


def format_error(msg: str | None, *args: str | None) -> str:
    """Return "ctx: ctx: msg"; context stops at the first None."""
    text = "".join(f"{ctx}: " for ctx in _context(args))
    return text + (msg if msg is not None else "")


def _emit(text: str) -> None:
    sys.stderr.write(text + "\n")
    sys.stderr.flush()


def perrorl(msg: str | None, *args: str | None) -> None:
    """Print msg to standard error, preceded by the context strings."""
    _emit(format_error(msg, *args))


def perrorl_default(
    arg0: str | None, lineno: int, msg: str | None, *args: str | None
) -> None:
    """Print "arg0: lineno: ctx: msg" to standard error."""
    _emit(f"{arg0 or ''}: {lineno}: " + format_error(msg, *args))