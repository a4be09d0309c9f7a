"""Shell state and its setup and teardown."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

from hsh.errors import perrorl_default
from hsh.getline import release_buffers

STDIN_FILENO = 0


@dataclass
class ShellInfo:
    """State shared by the whole shell session."""

    argv: list[str] = field(default_factory=list)
    file: str | None = None
    fileno: int = STDIN_FILENO
    interactive: bool = False
    status: int = 0
    line: str | None = None
    lineno: int = 0
    tokens: list[str] | None = None
    pid: int = 0
    cwd: str | None = None
    exe: str | None = None
    env: dict[str, str] = field(default_factory=dict)
    path: list[str] = field(default_factory=list)
    aliases: dict[str, str] = field(default_factory=dict)
    commands: list[list[str]] = field(default_factory=list)

    def close(self) -> int:
        """Release all session state and return the current exit status.

        The script file, if one was opened, is closed as well; calling this
        more than once is harmless.
        """
        self.line = None
        release_buffers()
        self.tokens = None
        self.cwd = None
        self.exe = None
        self.env = {}
        self.path = []
        self.aliases = {}
        self.commands = []
        if self.file is not None and self.fileno not in (-1, STDIN_FILENO):
            try:
                os.close(self.fileno)
            except OSError:
                pass
            self.fileno = -1
        return self.status


def _getcwd() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def init_info(argv: list[str] | None = None) -> ShellInfo:
    """Create the shell state, opening argv[1] as a script if given.

    Raises SystemExit(127) when the script cannot be opened.
    """
    if argv is None:
        argv = list(sys.argv)
    info = ShellInfo(argv=list(argv))
    if len(argv) > 1:
        info.file = argv[1]
        try:
            info.fileno = os.open(info.file, os.O_RDONLY)
        except OSError:
            perrorl_default(argv[0] if argv else None, info.lineno,
                            f"Can't open {info.file}")
            info.fileno = -1
            info.status = 127
            raise SystemExit(info.close())
    info.interactive = os.isatty(info.fileno)
    info.pid = os.getpid()
    info.cwd = _getcwd()
    info.env = dict(os.environ)
    return info