"""Silent execution of command-line programs."""

from __future__ import annotations

import subprocess


class ShellExecutor:
    """Runs programs without showing their output."""

    def shell(self, name: str, *args: str) -> None:
        """Run ``name`` with ``args``.

        Raises ``subprocess.CalledProcessError`` when the program exits with a
        non-zero status, and ``OSError`` when it cannot be started.
        """
        subprocess.run(
            [name, *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=True,
        )