"""Filtering of wildcard subdomains out of a list of domains."""

from __future__ import annotations

import threading
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple, Union

from puredns.threadpool import ThreadPool
from puredns.wildcarder.answercache import AnswerCache
from puredns.wildcarder.answers import DNSAnswer
from puredns.wildcarder.clientdns import ClientDNS
from puredns.wildcarder.detection import DetectionContext, DetectionTask
from puredns.wildcarder.dnscache import DNSCache
from puredns.wildcarder.randomsub import RANDOM_SUBDOMAIN_LENGTH, random_subdomains

DEFAULT_RESOLVERS = ("8.8.8.8", "8.8.4.4")

_QUEUE_SIZE = 1000
_MAX_DOMAIN_LENGTH = 253


class _Resolver(Protocol):
    def resolve(self, domains: Sequence[str]) -> List[DNSAnswer]:
        """Resolve the domains and return their answers."""

    def query_count(self) -> int:
        """Return the number of DNS queries made."""


class Wildcarder:
    """Filters wildcard subdomains out of a list of domains.

    ``precache`` is an untrusted, pre-filled DNS cache (such as massdns
    results) used to save queries; its answers are checked against trusted
    resolvers when needed. ``random_subdomains`` holds the labels probed to
    detect wildcards.
    """

    def __init__(
        self,
        thread_count: int,
        test_count: int,
        resolver: Optional[_Resolver] = None,
        precache: Optional[DNSCache] = None,
    ) -> None:
        self._thread_count = thread_count
        self._resolver: _Resolver = (
            resolver if resolver is not None else ClientDNS(DEFAULT_RESOLVERS, 3, 100, 10)
        )
        self._precache = precache if precache is not None else DNSCache()

        self._answer_cache = AnswerCache()
        self._dns_cache = DNSCache()

        self._pool: Optional[ThreadPool] = None
        self._pool_lock = threading.Lock()
        self._total = 0

        self.random_subdomains: List[str] = random_subdomains(test_count)

    def filter(self, reader: Iterable[Union[str, bytes]]) -> Tuple[List[str], List[str]]:
        """Return the domains read that are not wildcards, and the wildcard roots found.

        ``reader`` yields one domain per line. Domains too long to be probed
        for wildcards are left out of the results.
        """
        with self._pool_lock:
            if self._pool is not None:
                raise RuntimeError("concurrent executions of filter are not supported")
            pool = ThreadPool(self._thread_count, _QUEUE_SIZE)
            self._pool = pool

        context = DetectionContext(
            resolver=self._resolver,
            wildcard_cache=self._answer_cache,
            precache=self._precache,
            dns_cache=self._dns_cache,
            random_subs=self.random_subdomains,
            query_count=len(self.random_subdomains),
        )

        try:
            for line in reader:
                if isinstance(line, bytes):
                    line = line.decode("utf-8", errors="replace")
                domain = line.strip()
                if not domain:
                    continue
                if len(domain) + RANDOM_SUBDOMAIN_LENGTH > _MAX_DOMAIN_LENGTH:
                    continue
                pool.execute(DetectionTask(context, domain))
            pool.wait()
        finally:
            with self._pool_lock:
                self._total += pool.current_count()
                pool.close()
                self._pool = None

        with context.results_lock:
            domains = list(context.results)
        return domains, self._answer_cache.roots()

    def query_count(self) -> int:
        """Return the number of DNS queries made so far to detect wildcards."""
        return self._resolver.query_count()

    def current(self) -> int:
        """Return the number of domains processed so far."""
        with self._pool_lock:
            if self._pool is None:
                return self._total
            return self._total + self._pool.current_count()

    def set_precache(self, precache: DNSCache) -> None:
        """Replace the untrusted precache."""
        self._precache = precache