"""Detection of wildcard DNS answers for a single domain."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from puredns.wildcarder.answercache import AnswerCache
from puredns.wildcarder.answers import AnswerHash, DNSAnswer
from puredns.wildcarder.dnscache import DNSCache


class _Resolver(Protocol):
    def resolve(self, domains: Sequence[str]) -> List[DNSAnswer]:
        """Resolve the domains and return their answers."""

    def query_count(self) -> int:
        """Return the number of DNS queries made."""


@dataclass
class DetectionContext:
    """State shared by the detection tasks of one filtering run."""

    resolver: _Resolver
    wildcard_cache: AnswerCache
    precache: DNSCache
    dns_cache: DNSCache
    random_subs: Sequence[str]
    query_count: int
    results: List[str] = field(default_factory=list)
    results_lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )


def get_parent(domain: str) -> str:
    """Return the parent of a subdomain, or "" when the parent would be a TLD."""
    if domain.count(".") <= 1:
        return ""
    return domain.split(".", 1)[1]


def answer_match(a: Iterable[AnswerHash], b: Iterable[AnswerHash]) -> bool:
    """Return True if the two sets of answers have at least one answer in common."""
    others = set(b)
    return any(answer in others for answer in a)


def _append_unique(items: List[AnswerHash], extra: Iterable[AnswerHash]) -> List[AnswerHash]:
    result = list(items)
    for answer in extra:
        if answer not in result:
            result.append(answer)
    return result


class DetectionTask:
    """Decides whether one domain is a real domain or a wildcard answer."""

    def __init__(self, context: DetectionContext, domain: str) -> None:
        self.context = context
        self.domain = domain

    def run(self) -> None:
        """Classify the domain, adding it to the results if it is not a wildcard."""
        ctx = self.context
        domain = self.domain

        # The untrusted precache may tell us it is a wildcard without any query.
        if self.check_precache(domain):
            return

        root = self.test_wildcard(domain)
        if not root:
            self._add_domain(domain)
            return

        # The wildcard cache is now filled; the precache may settle it cheaply.
        if self.check_precache(domain):
            return

        if self.check_resolve(domain):
            ctx.wildcard_cache.add_hashes(root, ctx.precache.find(domain) or [])
            return

        self._add_domain(domain)

    def check_precache(self, domain: str) -> bool:
        """Return True if the precached answers of the domain are wildcard answers."""
        return self._is_wildcard(domain, self.context.precache.find(domain) or [])

    def check_resolve(self, domain: str) -> bool:
        """Resolve the domain with trusted resolvers and check for wildcard answers."""
        return self._is_wildcard(domain, self.resolve_with_cache(domain))

    def test_wildcard(self, domain: str) -> str:
        """Return the wildcard root above the domain, or "" if there is no wildcard.

        When a wildcard is found, its answers are recorded in the wildcard cache.
        """
        answers = self.resolve_random_subdomains(domain)
        if not answers:
            return ""

        root, answers = self.find_wildcard_root(domain, answers)
        self.context.wildcard_cache.add_hashes(root, answers)
        return root

    def find_wildcard_root(
        self, domain: str, answers: Sequence[AnswerHash]
    ) -> Tuple[str, List[AnswerHash]]:
        """Walk up the parents while they are wildcards and return the topmost one.

        The wildcard answers met on the way are accumulated and returned too.
        """
        collected = list(answers)
        while True:
            parent = get_parent(domain)
            if not parent:
                return domain, collected

            parent_answers = self.resolve_with_cache(parent)
            parent_random = self.resolve_random_subdomains(parent)

            if not answer_match(parent_answers, parent_random):
                return parent, collected

            collected = _append_unique(collected, parent_answers)
            collected = _append_unique(collected, parent_random)
            domain = parent

    def resolve_random_subdomains(self, domain: str) -> List[AnswerHash]:
        """Resolve random names at the domain's level and return the answers found.

        Several names are tried to collect the answers of load-balanced wildcards.
        """
        ctx = self.context
        tests = self.make_test_subdomains(domain)
        if not tests:
            return []

        first_name = tests[0]
        found = ctx.dns_cache.find(first_name)
        if found is not None:
            return found

        first = ctx.resolver.resolve(tests[:1])
        ctx.dns_cache.add(first_name, first)
        if not first:
            return []

        ctx.dns_cache.add(first_name, ctx.resolver.resolve(tests[1:]))
        return ctx.dns_cache.find(first_name) or []

    def make_test_subdomains(self, domain: str) -> List[str]:
        """Return random sibling names of the domain, or [] at the topmost level."""
        parent = get_parent(domain)
        if not parent:
            return []
        return [f"{sub}.{parent}" for sub in self.context.random_subs]

    def resolve_with_cache(self, domain: str) -> List[AnswerHash]:
        """Return the answers of the domain, resolving it several times if not cached."""
        ctx = self.context
        cached = ctx.dns_cache.find(domain)
        if cached is not None:
            return cached

        first = ctx.resolver.resolve([domain])
        ctx.dns_cache.add(domain, first)
        if not first:
            return []

        for _ in range(1, ctx.query_count):
            ctx.dns_cache.add(domain, ctx.resolver.resolve([domain]))

        return ctx.dns_cache.find(domain) or []

    def _is_wildcard(self, domain: str, answers: Iterable[AnswerHash]) -> bool:
        roots = self.context.wildcard_cache.find_hashes(answers)
        return any(domain == root or domain.endswith("." + root) for root in roots)

    def _add_domain(self, domain: str) -> None:
        with self.context.results_lock:
            self.context.results.append(domain)