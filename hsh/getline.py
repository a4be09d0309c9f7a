"""Buffered line reading from raw file descriptors."""

from __future__ import annotations

import os

BUFFER_SIZE = 4096
_ENCODING = "utf-8"


def _decode(data: bytes) -> str:
    return data.decode(_ENCODING, errors="surrogateescape")


class LineReader:
    """Read lines from a file descriptor, keeping unread data buffered."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._buffer = b""

    def readline(self) -> str | None:
        """Return the next line, newline included, or None at end of input.

        A read error discards the partial line and also yields None.
        """
        parts: list[bytes] = []
        while True:
            if self._buffer:
                eol = self._buffer.find(b"\n")
                if eol != -1:
                    parts.append(self._buffer[:eol + 1])
                    self._buffer = self._buffer[eol + 1:]
                    return _decode(b"".join(parts))
                parts.append(self._buffer)
                self._buffer = b""
            try:
                chunk = os.read(self.fd, BUFFER_SIZE)
            except OSError:
                return None
            if not chunk:
                break
            self._buffer = chunk
        if not parts:
            return None
        return _decode(b"".join(parts))

    def close(self) -> None:
        """Discard buffered input; the descriptor itself stays open."""
        self._buffer = b""


_readers: dict[int, LineReader] = {}


def getline(fd: int) -> str | None:
    """Read a line from fd using a buffer shared per descriptor.

    A negative fd releases all buffers and returns None.
    """
    if fd < 0:
        release_buffers()
        return None
    reader = _readers.get(fd)
    if reader is None:
        reader = _readers[fd] = LineReader(fd)
    return reader.readline()


def release_buffers() -> None:
    """Drop every per-descriptor buffer."""
    for reader in _readers.values():
        reader.close()
    _readers.clear()