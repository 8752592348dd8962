"""Splitting of massdns standard output into lines."""

from __future__ import annotations

from typing import Protocol


class Callback(Protocol):
    """Receives the lines of massdns output one by one."""

    def callback(self, line: str) -> None:
        """Handle one line, without its line ending."""

    def close(self) -> None:
        """Release what the callback holds."""


class StdoutHandler:
    """A writable stream that passes each complete line to a callback.

    Partial lines are kept until the rest arrives in a later write.
    """

    def __init__(self, callback: Callback) -> None:
        self._callback = callback
        self._remainder = b""

    def __enter__(self) -> StdoutHandler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def write(self, data: bytes) -> int:
        """Send every line completed by ``data`` to the callback, even empty ones."""
        *lines, rest = (self._remainder + bytes(data)).split(b"\n")
        for line in lines:
            self._callback.callback(line.decode("utf-8", errors="replace"))
        self._remainder = rest
        return len(data)

    def close(self) -> None:
        """Close the callback."""
        self._callback.close()