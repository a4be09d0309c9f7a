"""Conversion between environment string lists and dictionaries."""

from __future__ import annotations

from typing import Iterable, Mapping


def env_to_dict(env: Iterable[str]) -> dict[str, str]:
    """Build a dictionary from "KEY=VALUE" strings, keeping the first of duplicates.

    Raises ValueError for an entry with no '='.
    """
    result: dict[str, str] = {}
    for entry in env:
        key, sep, value = entry.partition("=")
        if not sep:
            raise ValueError(f"malformed environment entry: {entry!r}")
        result.setdefault(key, value)
    return result


def dict_to_env(env: Mapping[str, str]) -> list[str]:
    """Return the environment as a list of "KEY=VALUE" strings, in order."""
    return [f"{key}={value}" for key, value in env.items()]