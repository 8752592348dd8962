"""An asynchronous progress bar that redraws itself on a timer."""

from __future__ import annotations

import math
import re
import sys
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import IO, Any, Callable, Dict, Optional, Tuple

from puredns.movingrate import MovingRate, RateError

DEFAULT_TEMPLATE = (
    "[ETA {{ eta }}] {{ bar }} {{ current }}/{{ total }} {{ rate }}/s (time: {{ time }})"
)
DEFAULT_INTERVAL = 0.2

_BAR_WIDTH = 40
_VARIABLE = re.compile(r"{{\s*([a-zA-Z0-9\-_.]+)\s*}}")


class Color(str, Enum):
    """Terminal escape sequences selecting a foreground color."""

    BLACK = "\033[0;30m"
    GRAY = "\033[1;30m"
    RED = "\033[0;31m"
    BRIGHT_RED = "\033[1;31m"
    GREEN = "\033[0;32m"
    BRIGHT_GREEN = "\033[1;32m"
    YELLOW = "\033[0;33m"
    BRIGHT_YELLOW = "\033[1;33m"
    BLUE = "\033[0;34m"
    BRIGHT_BLUE = "\033[1;34m"
    MAGENTA = "\033[0;35m"
    BRIGHT_MAGENTA = "\033[1;35m"
    CYAN = "\033[0;36m"
    BRIGHT_CYAN = "\033[1;36m"
    WHITE = "\033[0;37m"
    BRIGHT_WHITE = "\033[1;37m"
    RESET = "\033[0m"


@dataclass(frozen=True)
class Style:
    """Characters and colors used to draw the bar."""

    bar_prefix: str = "|"
    bar_suffix: str = "|"
    bar_full: str = "█"
    bar_empty: str = "░"

    bar_prefix_color: Color = Color.WHITE
    bar_suffix_color: Color = Color.WHITE
    bar_full_color: Color = Color.WHITE
    bar_empty_color: Color = Color.GRAY


def default_style() -> Style:
    """Return the default bar style."""
    return Style()


Update = Callable[["ProgressBar"], None]


class ProgressBar:
    """A progress bar redrawn every ``interval`` seconds on a background thread.

    Before each redraw the ``update`` callback is called with the bar, so it
    can poll for progress and set template variables.
    """

    def __init__(
        self,
        update: Update,
        total: int,
        template: str = DEFAULT_TEMPLATE,
        writer: Optional[IO[str]] = None,
        interval: float = DEFAULT_INTERVAL,
        style: Optional[Style] = None,
    ) -> None:
        self._template = template
        self._update_cb = update
        self._style = style if style is not None else default_style()
        self._interval = interval
        self._writer = writer if writer is not None else sys.stderr

        self._lock = threading.RLock()
        self._vars: Dict[Any, Any] = {}
        self._current = 0
        self._total = total

        self._rate = MovingRate(1.0, 10)
        self._start_time: Optional[float] = None
        self._finish_time: Optional[float] = None

        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def __enter__(self) -> ProgressBar:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        """Start measuring and redrawing the bar."""
        if self._thread is not None:
            raise RuntimeError("progress bar already started")
        self._rate.start()
        self._start_time = time.monotonic()
        self._done.clear()
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Draw the bar one last time and wait for the drawing thread to end."""
        if self._thread is None:
            raise RuntimeError("progress bar is not started")
        self._done.set()
        self._thread.join()
        self._thread = None

        try:
            self._rate.stop()
        except RateError:
            pass

        with self._lock:
            if self._finish_time is None:
                self._finish_time = time.monotonic()

    def set(self, key: Any, value: Any) -> None:
        """Set a template variable."""
        with self._lock:
            self._vars[key] = value

    def get(self, key: Any) -> Any:
        """Return a template variable, or None if it is not set."""
        with self._lock:
            return self._vars.get(key)

    def set_current(self, current: int) -> None:
        """Move the counter forward to ``current``; lower values are ignored."""
        with self._lock:
            diff = current - self._current
        if diff > 0:
            self.increment(diff)

    def increment(self, value: int) -> None:
        """Advance the counter by ``value``."""
        try:
            self._rate.sample(float(value))
        except RateError:
            pass

        with self._lock:
            self._current += value
            if self._current == self._total and self._finish_time is None:
                self._finish_time = time.monotonic()

    def current(self) -> int:
        """Return the counter value."""
        with self._lock:
            return self._current

    def total(self) -> int:
        """Return the total the counter is heading for."""
        return self._total

    def rate(self) -> float:
        """Return the current rate per second, or 0 when not measuring."""
        try:
            return self._rate.current()
        except RateError:
            return 0.0

    def eta(self) -> Tuple[int, int, int]:
        """Return the estimated (hours, minutes, seconds) left."""
        current = self.current()
        total = self.total()
        remaining = total - current
        rate = self.rate()

        if total == 0 or remaining <= 0:
            return 0, 0, 0
        if rate == 0.0:
            return 99, 59, 59
        return _convert_time(remaining / rate)

    def elapsed(self) -> Tuple[int, int, int]:
        """Return the (hours, minutes, seconds) since start, until finished."""
        with self._lock:
            start, finish = self._start_time, self._finish_time
        if start is None:
            return 0, 0, 0
        end = finish if finish is not None else time.monotonic()
        return _convert_time(end - start)

    def render(self) -> str:
        """Return the template with its variables substituted."""
        with self._lock:
            values = dict(self._vars)

        def substitute(match: re.Match) -> str:
            key = match.group(1)
            if key in values:
                return str(values[key])
            return match.group(0)

        return _VARIABLE.sub(substitute, self._template)

    def _loop(self) -> None:
        while True:
            last = self._done.wait(self._interval)
            self._update_cb(self)
            self._update()
            self._writer.write(f"\r{self.render()}")
            if last:
                self._writer.write("\n")
            flush = getattr(self._writer, "flush", None)
            if flush is not None:
                flush()
            if last:
                return

    def _update(self) -> None:
        self.set("time", "%02d:%02d:%02d" % self.elapsed())
        self.set("rate", _format_float(self.rate()))
        self.set("eta", "%02d:%02d:%02d" % self.eta())

        current = self.current()
        total = self.total()
        self.set("current", str(current))
        self.set("total", str(total))

        percent = _percent(current, total)
        self.set("percent", _format_float(percent))
        self.set("bar", self._draw_bar(percent))

    def _draw_bar(self, percent: float) -> str:
        style = self._style
        inner = _BAR_WIDTH - 2
        full = sum(1 for i in range(inner) if i / inner * 100.0 < percent)

        parts = [style.bar_prefix_color.value, style.bar_prefix, style.bar_full_color.value]
        parts.append(style.bar_full * full)
        if full < inner:
            parts.append(style.bar_empty_color.value)
            parts.append(style.bar_empty * (inner - full))
        parts += [style.bar_suffix_color.value, style.bar_suffix, Color.RESET.value]
        return "".join(parts)


def _percent(current: int, total: int) -> float:
    if total != 0:
        return current / total * 100.0
    if current == 0:
        return math.nan
    return math.copysign(math.inf, current)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:.0f}"


def _convert_time(seconds: float) -> Tuple[int, int, int]:
    hours = int(seconds / 3600.0)
    seconds -= hours * 3600
    minutes = int(seconds / 60.0)
    seconds -= minutes * 60
    return hours, minutes, int(seconds)