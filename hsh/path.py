"""PATH splitting and executable lookup."""

from __future__ import annotations

import os
import stat


def str_to_list(s: str | None, delim: str) -> list[str]:
    """Split s on delim, keeping empty fields; None gives an empty list."""
    if s is None:
        return []
    return s.split(delim)


def search_path(command: str, path: list[str], cwd: str | None) -> str | None:
    """Return the first "dir/command" that exists and is not a directory.

    An empty directory entry stands for cwd.
    """
    for directory in path:
        base = directory if directory else (cwd or "")
        pathname = f"{base}/{command}"
        try:
            info = os.stat(pathname)
        except OSError:
            continue
        if not stat.S_ISDIR(info.st_mode):
            return pathname
    return None