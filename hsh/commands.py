"""Command lists: splitting a line into tokenized commands and dropping comments."""

from __future__ import annotations

from hsh.quote import split_cmd, tokenize


def cmd_to_list(cmd: str) -> list[list[str]]:
    """Split a line on unquoted semicolons and tokenize each command.

    Empty commands are kept as empty token lists.
    """
    return [tokenize(part) for part in split_cmd(cmd)]


def remove_comments(commands: list[list[str]]) -> list[list[str]]:
    """Return the commands with everything from the first comment on removed.

    A comment is a token starting with '#'. The command holding it keeps the
    tokens before it, and every command after it is dropped.
    """
    result: list[list[str]] = []
    for tokens in commands:
        for index, token in enumerate(tokens):
            if token.startswith("#"):
                result.append(tokens[:index])
                return result
        result.append(list(tokens))
    return result