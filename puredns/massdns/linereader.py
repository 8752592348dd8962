"""A line reader that limits how many lines per second it hands out."""

from __future__ import annotations

import threading
import time
from typing import BinaryIO, Callable, Optional

_CHUNK_SIZE = 65536
_THROTTLE_PAUSE = 0.1


class LineReader:
    """Reads bytes from ``reader`` while keeping to ``rate`` lines per second.

    A rate of 0 means no limit. ``read`` returns ``b""`` at the end of the
    input and ``None`` when the rate limit allows nothing to be read yet,
    like a non-blocking stream. Each read pauses briefly when a rate is set.
    """

    def __init__(
        self,
        reader: BinaryIO,
        rate: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._reader = reader
        self._rate = float(rate)
        self._clock = clock

        self._pending = bytearray()
        self._eof = False
        self._start_time: Optional[float] = None

        self._lock = threading.Lock()
        self._line_count = 0

    def read(self, size: int) -> Optional[bytes]:
        """Return up to ``size`` bytes, ``b""`` at end of input, ``None`` if throttled."""
        can_send = self._can_send()
        out = bytearray()
        lines = 0
        eof = False

        while len(out) < size and can_send > 0:
            if not self._pending:
                if not self._fill():
                    eof = True
                    break

            window = self._pending[: size - len(out)]
            end = len(window)
            taken = 0
            pos = -1
            while taken < can_send:
                pos = window.find(b"\n", pos + 1)
                if pos == -1:
                    break
                taken += 1
            if taken == can_send:
                end = pos + 1

            out += window[:end]
            del self._pending[:end]
            lines += taken
            can_send -= taken

        if self._rate > 0:
            time.sleep(_THROTTLE_PAUSE)

        with self._lock:
            self._line_count += lines

        if out:
            return bytes(out)
        if eof:
            return b""
        return None

    def count(self) -> int:
        """Return the number of lines read so far."""
        with self._lock:
            return self._line_count

    def _fill(self) -> bool:
        if self._eof:
            return False
        chunk = self._reader.read(_CHUNK_SIZE)
        if not chunk:
            self._eof = True
            return False
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        self._pending += chunk
        return True

    def _can_send(self) -> int:
        if self._rate == 0:
            return 2**31 - 1
        if self._start_time is None:
            self._start_time = self._clock()
        delta = self._clock() - self._start_time
        return int(self._rate * (delta + 1)) - self.count()