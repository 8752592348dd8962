"""Resolution of domain batches by running the massdns program."""

from __future__ import annotations

import subprocess
from typing import BinaryIO, Iterator, List, Optional, Protocol

from puredns.massdns.linereader import LineReader

_CHUNK_SIZE = 65536


class Runner(Protocol):
    """Runs massdns on the domains read from ``reader``."""

    def run(self, reader: LineReader, output: str, resolvers_file: str, qps: int) -> None:
        """Resolve the domains and write the answers to ``output``."""


def create_massdns_args(output: str, resolvers_file: str, qps: int) -> List[str]:
    """Return the massdns command-line arguments."""
    args = [
        "-q",
        "-r", resolvers_file,
        "-o", "Snl",
        "-t", "A",
        "--root",
        "--retry", "REFUSED",
        "--retry", "SERVFAIL",
        "-w", output,
    ]
    # Size the hashmap to the rate so massdns does not pile up queries on start.
    if qps > 0:
        args += ["-s", str(qps)]
    return args


def _chunks(reader: LineReader) -> Iterator[bytes]:
    while True:
        chunk = reader.read(_CHUNK_SIZE)
        if chunk is None:
            continue
        if not chunk:
            return
        yield chunk


class DefaultRunner:
    """Runs the massdns binary, feeding it the domains on standard input."""

    def __init__(self, bin_path: str) -> None:
        self._bin_path = bin_path

    def run(self, reader: LineReader, output: str, resolvers_file: str, qps: int) -> None:
        """Run massdns until it ends.

        Raises ``subprocess.CalledProcessError`` on a non-zero exit status and
        ``OSError`` when the program cannot be started.
        """
        args = [self._bin_path, *create_massdns_args(output, resolvers_file, qps)]
        with subprocess.Popen(
            args,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        ) as proc:
            assert proc.stdin is not None
            try:
                for chunk in _chunks(reader):
                    proc.stdin.write(chunk)
            except BrokenPipeError:
                pass
            finally:
                try:
                    proc.stdin.close()
                except BrokenPipeError:
                    pass
            code = proc.wait()

        if code != 0:
            raise subprocess.CalledProcessError(code, args)


class Resolver:
    """Resolves batches of domain names with massdns."""

    def __init__(self, bin_path: str = "massdns", runner: Optional[Runner] = None) -> None:
        self._runner: Runner = runner if runner is not None else DefaultRunner(bin_path)
        self._reader: Optional[LineReader] = None

    def resolve(self, reader: BinaryIO, output: str, resolvers_file: str, qps: int) -> None:
        """Resolve the domains read from ``reader`` and save the answers to ``output``."""
        self._reader = LineReader(reader, qps)
        self._runner.run(self._reader, output, resolvers_file, qps)

    def current(self) -> int:
        """Return the number of domains handed to massdns so far."""
        if self._reader is None:
            return 0
        return self._reader.count()