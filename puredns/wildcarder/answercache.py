"""A thread-safe cache associating wildcard answers with their root domains."""

from __future__ import annotations

import threading
from typing import Dict, Iterable, List

from puredns.wildcarder.answers import AnswerHash, DNSAnswer, hash_answer


class AnswerCache:
    """Maps wildcard DNS answers to the root domains that return them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: Dict[AnswerHash, List[str]] = {}

    def add(self, root: str, answers: Iterable[DNSAnswer]) -> None:
        """Associate ``root`` with each of the answers."""
        self.add_hashes(root, [hash_answer(answer) for answer in answers])

    def add_hashes(self, root: str, hashes: Iterable[AnswerHash]) -> None:
        """Associate ``root`` with each of the answer hashes."""
        with self._lock:
            for answer_hash in hashes:
                roots = self._cache.setdefault(answer_hash, [])
                if root not in roots:
                    roots.append(root)

    def find(self, answers: Iterable[DNSAnswer]) -> List[str]:
        """Return the roots of the first answer found in the cache."""
        return self.find_hashes([hash_answer(answer) for answer in answers])

    def find_hashes(self, hashes: Iterable[AnswerHash]) -> List[str]:
        """Return the roots of the first answer hash found in the cache."""
        with self._lock:
            for answer_hash in hashes:
                roots = self._cache.get(answer_hash)
                if roots is not None:
                    return list(roots)
        return []

    def count(self) -> int:
        """Return the number of (answer, root) associations in the cache."""
        with self._lock:
            return sum(len(roots) for roots in self._cache.values())

    def roots(self) -> List[str]:
        """Return every distinct root domain in the cache."""
        with self._lock:
            found = dict.fromkeys(root for roots in self._cache.values() for root in roots)
        return list(found)