"""Line transports — where request lines come from and responses go.

Each transport satisfies the :class:`LineTransport` protocol, providing
``read_line``, ``write_line`` and ``close`` methods.
"""

from __future__ import annotations

import io
import sys
from typing import Any, Protocol, TextIO, runtime_checkable


@runtime_checkable
class LineTransport(Protocol):
    """Abstract newline-delimited text channel."""

    def read_line(self) -> str | None: ...
    def write_line(self, line: str) -> None: ...
    def close(self) -> None: ...


def _use_utf8(stream: Any, errors: str) -> None:
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(encoding="utf-8", errors=errors)


class StdioTransport:
    """Reads requests from stdin and writes responses to stdout.

    Any pair of text streams can be supplied instead, which is how the
    tests drive the server.  Streams that support ``reconfigure`` are
    switched to UTF-8; undecodable input bytes become U+FFFD so the line
    fails to parse instead of ending the loop.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._closed = False
        _use_utf8(self._stdin, "replace")
        _use_utf8(self._stdout, "strict")

    def read_line(self) -> str | None:
        """Return the next line without its terminator, or ``None`` at end of input."""
        if self._closed:
            return None
        line = self._stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def write_line(self, line: str) -> None:
        """Write *line* plus one newline and flush."""
        if self._closed:
            msg = "Transport closed"
            raise RuntimeError(msg)
        self._stdout.write(line + "\n")
        self._stdout.flush()

    def close(self) -> None:
        self._closed = True
