"""Alias and variable expansion of command tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from hsh.quote import QuoteState, is_ident, quote_state, quote_state_len, tokenize

if TYPE_CHECKING:
    from hsh.info import ShellInfo

_OPENING = QuoteState.DOUBLE | QuoteState.SINGLE | QuoteState.ESCAPE
_QUOTED = QuoteState.DOUBLE | QuoteState.SINGLE
_DIGITS = "0123456789"

# Alias chains that never settle are cut off instead of looping forever.
_MAX_EXPANSIONS = 1024


def expand_alias(
    aliases: Mapping[str, str], tokens: list[str]
) -> tuple[str | None, list[str]]:
    """Expand the first token once.

    Return the alias name used (or None) and the resulting tokens.
    """
    if not tokens:
        return None, tokens
    name = tokens[0]
    if name not in aliases:
        return None, tokens
    return name, tokenize(aliases[name]) + tokens[1:]


def expand_aliases(aliases: Mapping[str, str], tokens: list[str]) -> list[str]:
    """Expand aliases on the first token until it no longer changes.

    When an alias value ends with a blank, the word after it is expanded too.
    """
    seen: set[tuple[str, ...]] = set()
    for _ in range(_MAX_EXPANSIONS):
        seen.add(tuple(tokens))
        name, tokens = expand_alias(aliases, tokens)
        value = aliases.get(name) if name is not None else None
        if value and value[-1].isspace() and value[-1] in " \t\n\v\f\r" and tokens:
            tokens = tokens[:1] + expand_aliases(aliases, tokens[1:])
        if not (name and tokens and tokens[0] != name):
            break
        if tuple(tokens) in seen:
            break
    return tokens


def expand_token(info: ShellInfo, token: str) -> list[str]:
    """Expand $$, $? and $NAME in a token, then split the result into words."""
    tok = token
    pos = 0
    state = QuoteState.NONE

    def at(index: int) -> str:
        return tok[index] if index < len(tok) else ""

    while pos < len(tok):
        var_len = val_len = 1
        if quote_state_len(tok[pos:], state) == 0:
            if state & _QUOTED:
                pos += 1
                if pos >= len(tok):
                    break
            state = quote_state(tok[pos])
            if state & _OPENING:
                pos += 1
            continue
        if (state & QuoteState.DOUBLE and quote_state(tok[pos]) & QuoteState.ESCAPE) \
                or state & QuoteState.ESCAPE:
            pos += 2
            if pos >= len(tok):
                break
            state = quote_state(tok[pos])
            if state & _OPENING:
                pos += 1
            continue
        if state & QuoteState.SINGLE:
            pos += quote_state_len(tok[pos:], state)
            if pos < len(tok):
                pos += 1
            continue
        if tok[pos] != "$":
            pos += 1
            continue
        following = at(pos + 1)
        value: str | None = None
        if following == "$":
            value = str(info.pid)
        elif following == "?":
            value = str(info.status)
        elif is_ident(following) and following not in _DIGITS:
            while is_ident(at(pos + var_len + 1)):
                var_len += 1
            value = info.env.get(tok[pos + 1:pos + 1 + var_len], "")
        if value is not None:
            val_len = len(value)
            tok = tok[:pos] + value + tok[pos + var_len + 1:]
        pos += val_len
    return tokenize(tok)


def expand_vars(info: ShellInfo, tokens: list[str]) -> list[str]:
    """Expand variables in every token and join the resulting words."""
    return [word for token in tokens for word in expand_token(info, token)]