"""Quote states, character classes, dequoting, tokenizing and command splitting."""

from __future__ import annotations

import re
from enum import IntFlag
from typing import Iterator

_SPACE_CHARS = " \t\n\v\f\r"
_DIGITS = "0123456789"
_ALPHA = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_SPECIAL_DOUBLE = '"$\\'


class QuoteState(IntFlag):
    """Lexical state of the scanner at a given character."""

    NONE = 0x0
    WORD = 0x1
    DOUBLE = 0x2
    SINGLE = 0x4
    ESCAPE = 0x8


_OPENING = QuoteState.DOUBLE | QuoteState.SINGLE | QuoteState.ESCAPE
_QUOTED = QuoteState.DOUBLE | QuoteState.SINGLE

_STATE_PATTERNS = {
    QuoteState.NONE: re.compile(r"[ \t\n\v\f\r]*"),
    QuoteState.WORD: re.compile(r"[^ \t\n\v\f\r\"'\\]*"),
    QuoteState.DOUBLE: re.compile(r'[^"]*'),
    QuoteState.SINGLE: re.compile(r"[^']*"),
}

_DOUBLE_ESCAPE = re.compile(r'\\(\n|["$\\])')
_NOQUOTE_WORD = re.compile(r"[^ \t\n\v\f\r]+")


def _is_digit(c: str) -> bool:
    return len(c) == 1 and c in _DIGITS


def _is_alpha(c: str) -> bool:
    return len(c) == 1 and c in _ALPHA


def is_space(c: str) -> bool:
    """Return True if c is an ASCII blank (space, tab, newline, VT, FF, CR)."""
    return len(c) == 1 and c in _SPACE_CHARS


def is_quote(c: str) -> bool:
    """Return True if c is a double quote, single quote or backslash."""
    return len(c) == 1 and c in "\"'\\"


def is_ident(c: str) -> bool:
    """Return True if c may appear in a variable name."""
    return c == "_" or _is_alpha(c) or _is_digit(c)


def is_special_double(c: str) -> bool:
    """Return True if a backslash before c is removed inside double quotes."""
    return len(c) == 1 and c in _SPECIAL_DOUBLE


def is_number(s: str | None) -> bool:
    """Return True if s is a string made only of ASCII digits."""
    if s is None:
        return False
    return all(_is_digit(c) for c in s)


def quote_state(c: str) -> QuoteState:
    """Return the state a character opens; the empty string counts as a word."""
    if is_space(c):
        return QuoteState.NONE
    if c == '"':
        return QuoteState.DOUBLE
    if c == "'":
        return QuoteState.SINGLE
    if c == "\\":
        return QuoteState.ESCAPE
    return QuoteState.WORD


def _state_len(s: str, pos: int, state: QuoteState) -> int:
    if state == QuoteState.ESCAPE:
        return 1 if pos < len(s) else 0
    pattern = _STATE_PATTERNS.get(state)
    if pattern is None:
        raise ValueError(f"invalid quote state: {state!r}")
    return pattern.match(s, pos).end() - pos


def quote_state_len(s: str, state: QuoteState) -> int:
    """Return how many leading characters of s belong to the given state."""
    return _state_len(s, 0, state)


def _unescape_double(region: str) -> str:
    return _DOUBLE_ESCAPE.sub(
        lambda m: "" if m.group(1) == "\n" else m.group(1), region
    )


def dequote(s: str) -> str:
    """Return s with quoting removed."""
    out: list[str] = []
    pos, n = 0, len(s)
    while pos < n:
        state = quote_state(s[pos])
        if state & _OPENING:
            pos += 1
        end = pos + _state_len(s, pos, state)
        region = s[pos:end]
        out.append(_unescape_double(region) if state == QuoteState.DOUBLE else region)
        pos = end
        if pos < n and state & _QUOTED:
            pos += 1
    return "".join(out)


def _token_spans(s: str) -> Iterator[tuple[int, int]]:
    pos, n = 0, len(s)
    while True:
        pos += _state_len(s, pos, QuoteState.NONE)
        if pos >= n:
            return
        start = pos
        while pos < n:
            state = quote_state(s[pos])
            if state == QuoteState.NONE:
                break
            if state & _OPENING:
                pos += _state_len(s, pos + 1, state) + 1
            else:
                pos += _state_len(s, pos, state)
            if pos < n and state & _QUOTED:
                pos += 1
        yield start, min(pos, n)


def tokenize(s: str) -> list[str]:
    """Split s into words, honouring quotes; the quotes stay in the words."""
    return [s[start:end] for start, end in _token_spans(s)]


def count_tokens(s: str) -> int:
    """Return the number of words tokenize would produce for s."""
    return sum(1 for _ in _token_spans(s))


def tokenize_noquote(s: str) -> list[str]:
    """Split s into words on blanks, ignoring quotes."""
    return _NOQUOTE_WORD.findall(s)


def split_cmd(cmd: str) -> list[str]:
    """Split a line on unquoted semicolons.

    Unquoted backslash-newline pairs are removed from the result.
    """
    commands: list[str] = []
    current: list[str] = []
    pos, n = 0, len(cmd)
    while pos < n:
        state = quote_state(cmd[pos])
        if state == QuoteState.NONE or state == QuoteState.WORD:
            end = pos + _state_len(cmd, pos, state)
            sep = cmd.find(";", pos, end) if state == QuoteState.WORD else -1
            if sep != -1:
                current.append(cmd[pos:sep])
                commands.append("".join(current))
                current = []
                pos = sep + 1
            else:
                current.append(cmd[pos:end])
                pos = end
        elif state == QuoteState.ESCAPE:
            if cmd[pos + 1:pos + 2] != "\n":
                current.append(cmd[pos:pos + 2])
            pos += 2
        else:
            end = pos + 1 + _state_len(cmd, pos + 1, state)
            if end < n:
                end += 1
            current.append(cmd[pos:end])
            pos = end
    commands.append("".join(current))
    return commands