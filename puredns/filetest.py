"""Helpers for tests that work with files, standard input and streams."""

from __future__ import annotations

import contextlib
import os
import sys
import tempfile
from dataclasses import dataclass, field
from typing import IO, Iterator, List, Optional


@contextlib.contextmanager
def temp_file(content: str) -> Iterator[IO[str]]:
    """Yield an open temporary file holding ``content``, positioned at its start.

    The file is closed and deleted on exit.
    """
    file = tempfile.NamedTemporaryFile(mode="w+", delete=False, encoding="utf-8")
    try:
        file.write(content)
        file.flush()
        file.seek(0)
        yield file
    finally:
        file.close()
        with contextlib.suppress(OSError):
            os.remove(file.name)


@contextlib.contextmanager
def temp_dir() -> Iterator[str]:
    """Yield the path of a new temporary directory, removed on exit if empty."""
    path = tempfile.mkdtemp()
    try:
        yield path
    finally:
        with contextlib.suppress(OSError):
            os.rmdir(path)


def read_lines(name: str) -> List[str]:
    """Return the lines of a text file without line endings.

    An empty file name gives an empty list.
    """
    if not name:
        return []
    with open(name, encoding="utf-8", newline="") as file:
        return [line.removesuffix("\n").removesuffix("\r") for line in file]


def clear_file(file: IO) -> None:
    """Truncate the content of an open file."""
    file.truncate(0)


@contextlib.contextmanager
def override_stdin(file: IO) -> Iterator[IO]:
    """Replace ``sys.stdin`` with ``file`` and restore it on exit."""
    old = sys.stdin
    sys.stdin = file
    try:
        yield file
    finally:
        sys.stdin = old


@dataclass
class StubReader:
    """A reader serving a fixed buffer, or failing with a given error."""

    buffer: bytes
    error: Optional[BaseException] = None
    index: int = 0

    def read(self, size: int = -1) -> bytes:
        """Return up to ``size`` bytes of the buffer; ``b""`` at its end."""
        if self.error is not None:
            raise self.error
        end = len(self.buffer) if size < 0 else self.index + size
        chunk = bytes(self.buffer[self.index:end])
        self.index += len(chunk)
        return chunk

    def close(self) -> None:
        """Do nothing; present for the file interface."""


@dataclass
class StubWriter:
    """A writer that records what is written, or fails with a given error."""

    error: Optional[BaseException] = None
    buffer: bytearray = field(default_factory=bytearray)
    count: int = 0

    def write(self, data: bytes) -> int:
        """Record ``data`` and return its length, or raise the configured error."""
        if self.error is not None:
            raise self.error
        self.buffer += data
        self.count += len(data)
        return len(data)

    def close(self) -> None:
        """Do nothing; present for the file interface."""