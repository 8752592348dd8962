"""A DNS client used by wildcard detection."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

import dns.exception
import dns.resolver

from puredns.wildcarder.answers import DNSAnswer, RRType

_QUERY_TIMEOUT = 2.0


@dataclass(frozen=True)
class Record:
    """A DNS record returned for a question."""

    question: str
    type: RRType
    answer: str


class Client(Protocol):
    """Resolves batches of domains for one record type."""

    def resolve(self, domains: Sequence[str], rrtype: RRType) -> List[Record]:
        """Return the records found for the domains."""

    def query_count(self) -> int:
        """Return the number of DNS queries sent."""


class _DNSClient:
    """Resolves domains concurrently against fixed resolvers, with a query rate."""

    def __init__(self, resolvers: Sequence[str], retry_count: int, qps: int, concurrency: int) -> None:
        self._nameservers = list(resolvers)
        self._retries = max(retry_count, 0)
        self._interval = 1.0 / qps if qps > 0 else 0.0
        self._concurrency = max(concurrency, 1)

        self._lock = threading.Lock()
        self._next_time = 0.0
        self._queries = 0

    def resolve(self, domains: Sequence[str], rrtype: RRType) -> List[Record]:
        if not domains:
            return []
        with ThreadPoolExecutor(max_workers=self._concurrency) as pool:
            results = pool.map(lambda domain: self._query(domain, rrtype), domains)
            return [record for records in results for record in records]

    def query_count(self) -> int:
        with self._lock:
            return self._queries

    def _throttle(self) -> None:
        with self._lock:
            self._queries += 1
            now = time.monotonic()
            wait = self._next_time - now
            self._next_time = max(now, self._next_time) + self._interval
        if wait > 0:
            time.sleep(wait)

    def _query(self, domain: str, rrtype: RRType) -> List[Record]:
        resolver = dns.resolver.Resolver(configure=False)
        resolver.nameservers = self._nameservers
        resolver.timeout = _QUERY_TIMEOUT
        resolver.lifetime = _QUERY_TIMEOUT

        for _ in range(self._retries + 1):
            self._throttle()
            try:
                answer = resolver.resolve(
                    domain, rrtype.name, raise_on_no_answer=False, search=False
                )
            except (dns.exception.Timeout, dns.resolver.NoNameservers):
                continue
            except dns.exception.DNSException:
                return []
            return _records(domain, answer.response.answer)
        return []


def _records(domain: str, rrsets) -> List[Record]:
    records = []
    for rrset in rrsets:
        try:
            rrtype = RRType(rrset.rdtype)
        except ValueError:
            continue
        for rdata in rrset:
            records.append(Record(domain, rrtype, rdata.to_text().removesuffix(".")))
    return records


class ClientDNS:
    """Resolves A records for wildcard detection."""

    def __init__(
        self,
        resolvers: Sequence[str] = (),
        retry_count: int = 3,
        qps: int = 100,
        concurrency: int = 10,
        client: Optional[Client] = None,
    ) -> None:
        self._client: Client = (
            client
            if client is not None
            else _DNSClient(resolvers, retry_count, qps, concurrency)
        )

    def resolve(self, domains: Sequence[str]) -> List[DNSAnswer]:
        """Resolve the A records of the domains and return the answers."""
        records = self._client.resolve(list(domains), RRType.A)
        return [DNSAnswer(type=record.type, answer=record.answer) for record in records]

    def query_count(self) -> int:
        """Return the number of DNS queries actually performed."""
        return self._client.query_count()