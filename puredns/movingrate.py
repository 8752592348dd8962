"""Rate measurement using a moving average of periodic samples."""

from __future__ import annotations

import math
import threading
import time
from typing import Callable, List, Optional


class RateError(RuntimeError):
    """Base class for MovingRate state errors."""


class NotStartedError(RateError):
    """The rate has not been started."""


class AlreadyStartedError(RateError):
    """The rate has already been started."""


class StoppedError(RateError):
    """The rate has been stopped."""


class AlreadyStoppedError(RateError):
    """The rate has already been stopped."""


def _ratio(total: float, delta: float) -> float:
    if delta > 0:
        return total / delta
    return 0.0 if total == 0 else math.inf


class MovingRate:
    """Computes the rate of sampled counts as a moving average.

    Counts sampled less than ``sampling_rate`` seconds apart are accumulated
    until enough time has passed to compute a rate; the last ``samples``
    rates are averaged.
    """

    def __init__(
        self,
        sampling_rate: float,
        samples: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._lock = threading.Lock()

        self._sampling_rate = sampling_rate
        self._max_samples = samples
        self._samples: List[float] = []

        self._accum = 0.0
        self._accum_time: Optional[float] = None

        self._start_time: Optional[float] = None
        self._stop_time: Optional[float] = None
        self._total = 0.0

    def start(self) -> None:
        """Start measuring."""
        with self._lock:
            if self._start_time is not None:
                raise AlreadyStartedError("rate is already started")
            self._start_time = self._clock()

    def stop(self) -> None:
        """Stop measuring; the rate becomes the global rate."""
        with self._lock:
            if self._start_time is None:
                raise NotStartedError("rate is not started")
            if self._stop_time is not None:
                raise AlreadyStoppedError("rate is already stopped")
            self._stop_time = self._clock()

    def sample(self, count: float) -> None:
        """Record ``count`` new elements."""
        with self._lock:
            if self._start_time is None:
                raise NotStartedError("rate is not started")
            if self._stop_time is not None:
                raise StoppedError("rate has been stopped")

            if self._accum_time is None:
                self._total += count
                self._samples.append(count)
                self._accum_time = self._clock()
                return

            self._accum += count
            self._total += count

            delta = self._clock() - self._accum_time
            if delta < self._sampling_rate:
                return

            self._samples.append(self._accum / delta)
            self._accum = 0.0
            if len(self._samples) > self._max_samples:
                self._samples.pop(0)

            self._accum_time = self._clock()

    def current(self) -> float:
        """Return the moving-average rate, or the global rate once stopped."""
        with self._lock:
            if self._start_time is None:
                raise NotStartedError("rate is not started")

            if self._stop_time is not None:
                return _ratio(self._total, self._stop_time - self._start_time)

            if not self._samples:
                return _ratio(self._total, self._clock() - self._start_time)

            return sum(self._samples) / len(self._samples)