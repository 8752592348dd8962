"""A thread-safe cache of DNS questions and their answers."""

from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional

from puredns.wildcarder.answers import AnswerHash, DNSAnswer, hash_answer, hash_question


class DNSCache:
    """Maps DNS questions to the distinct answers seen for them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: Dict[int, List[AnswerHash]] = {}

    def add(self, question: str, answers: Iterable[DNSAnswer]) -> None:
        """Record answers for a question, appending to those already known."""
        with self._lock:
            known = self._cache.setdefault(hash_question(question), [])
            for answer in answers:
                answer_hash = hash_answer(answer)
                if answer_hash not in known:
                    known.append(answer_hash)

    def find(self, question: str) -> Optional[List[AnswerHash]]:
        """Return the answers for a question.

        The list is empty when the question is cached without answers, and the
        result is None when the question is not cached at all.
        """
        with self._lock:
            known = self._cache.get(hash_question(question))
            return None if known is None else list(known)