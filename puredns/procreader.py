"""A reader whose data is produced on demand by a callback."""

from __future__ import annotations

from typing import Callable, Tuple

# The callback receives a size hint and returns the data generated and
# whether that data is the last there is.
Callback = Callable[[int], Tuple[bytes, bool]]


class ProcReader:
    """A file-like reader that generates its content from a callback.

    Data returned by the callback beyond what a read asked for is kept for
    the following reads. A read returns ``b""`` once the callback has said
    it has no more data and everything has been consumed.
    """

    def __init__(self, callback: Callback) -> None:
        self._callback = callback
        self._remainder = b""
        self._eof = False

    def read(self, size: int) -> bytes:
        """Return up to ``size`` bytes, asking the callback for more as needed."""
        if size < 1:
            raise ValueError("read size must be positive")

        out = bytearray()
        while True:
            if self._remainder:
                data, self._remainder = self._remainder, b""
            elif self._eof:
                return bytes(out)
            else:
                data, last = self._callback(size - len(out))
                if last:
                    self._eof = True

            room = size - len(out)
            out += data[:room]
            if len(data) > room:
                self._remainder = bytes(data[room:])
                return bytes(out)

            if len(out) == size or self._eof:
                return bytes(out)