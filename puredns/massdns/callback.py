"""Saving of massdns simple-text results to files."""

from __future__ import annotations

import os
from enum import Enum, auto
from typing import IO, Optional

_VALID_TYPES = frozenset({"A", "AAAA", "CNAME"})


class _State(Enum):
    NEW_ANSWER_SECTION = auto()
    SAVE_ANSWER = auto()
    SKIP = auto()


def _create(name: str) -> IO[str]:
    return open(name, "w", encoding="utf-8", newline="\n", buffering=1)


class DefaultWriteCallback:
    """Parses massdns ``-o Snl`` output lines and saves the valid results.

    The valid domains found go to the domain file, and the A, AAAA and CNAME
    records that made them valid go to the massdns file. An empty file name
    disables that file.
    """

    def __init__(self, massdns_filename: str = "", domain_filename: str = "") -> None:
        self._massdns_file: Optional[IO[str]] = None
        self._domain_file: Optional[IO[str]] = None

        if massdns_filename:
            self._massdns_file = _create(massdns_filename)

        if domain_filename:
            try:
                self._domain_file = _create(domain_filename)
            except OSError:
                if self._massdns_file is not None:
                    self._massdns_file.close()
                raise

        self._state = _State.NEW_ANSWER_SECTION
        self._domain = ""
        self._domain_saved = False
        self._found = 0

    def __enter__(self) -> DefaultWriteCallback:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def found(self) -> int:
        """Number of valid domains found so far."""
        return self._found

    def callback(self, line: str) -> None:
        """Parse one line of massdns output and save what is relevant."""
        if self._massdns_file is None and self._domain_file is None:
            return

        if line == "":
            self._state = _State.NEW_ANSWER_SECTION
            return

        if self._state is _State.SKIP:
            return

        parts = line.split(" ")
        if len(parts) != 3:
            self._state = _State.SKIP
            return

        if self._state is _State.NEW_ANSWER_SECTION:
            domain = parts[0].removesuffix(".")
            if not domain:
                self._state = _State.SKIP
                return
            self._domain = domain
            self._state = _State.SAVE_ANSWER
            self._domain_saved = False

        rr_type = parts[1]
        answer = parts[2].removesuffix(".")

        if rr_type not in _VALID_TYPES:
            return

        if not self._domain_saved:
            _write(self._domain_file, self._domain)
            self._domain_saved = True
            self._found += 1

        _write(self._massdns_file, f"{self._domain} {rr_type} {answer}")

    def close(self) -> None:
        """Flush the files to disk and close them."""
        for file in (self._massdns_file, self._domain_file):
            if file is None or file.closed:
                continue
            try:
                file.flush()
                os.fsync(file.fileno())
            except OSError:
                pass
            file.close()


def _write(file: Optional[IO[str]], line: str) -> None:
    if file is not None:
        file.write(line + "\n")