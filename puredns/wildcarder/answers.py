"""DNS answers and the hashes under which they are cached."""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from enum import IntEnum

# Hashes only need to be stable within one process, like a seeded map hash.
_SEED = os.urandom(16)


class RRType(IntEnum):
    """DNS resource record types handled by wildcard detection."""

    A = 1
    CNAME = 5
    AAAA = 28


@dataclass(frozen=True)
class DNSAnswer:
    """A DNS answer without its question."""

    type: RRType
    answer: str


@dataclass(frozen=True)
class AnswerHash:
    """The cache key of a DNS answer: its record type and a hash of its data."""

    type: RRType
    hash: int


def _hash(text: str) -> int:
    digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8, key=_SEED).digest()
    return int.from_bytes(digest, "little")


def hash_question(question: str) -> int:
    """Return the cache key of a DNS question."""
    return _hash(question)


def hash_answer(answer: DNSAnswer) -> AnswerHash:
    """Return the cache key of a DNS answer."""
    return AnswerHash(type=answer.type, hash=_hash(answer.answer))