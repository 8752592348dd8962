"""Random subdomain labels used to probe for wildcards."""

from __future__ import annotations

import random
from typing import List

RANDOM_SUBDOMAIN_LENGTH = 16
_LETTERS = "abcdefghijklmnopqrstuvwxyz1234567890"


def random_subdomains(count: int) -> List[str]:
    """Return ``count`` random labels that should not exist in any zone."""
    rng = random.Random()
    return [
        "".join(rng.choices(_LETTERS, k=RANDOM_SUBDOMAIN_LENGTH)) for _ in range(count)
    ]