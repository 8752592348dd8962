import pytest

from puredns.wildcarder.answers import DNSAnswer, RRType
from puredns.wildcarder.clientdns import ClientDNS, Record


class StubClient:
    def __init__(self, empty):
        self.empty = empty
        self.queries = 0

    def resolve(self, domains, rrtype):
        if self.empty:
            return []
        records = []
        for domain in domains:
            answer = "127.0.0.1" if rrtype == RRType.A else ""
            records.append(Record(question=domain, type=rrtype, answer=answer))
            self.queries += 1
        return records

    def query_count(self):
        return self.queries


@pytest.mark.parametrize(
    "have_records, want",
    [
        (False, []),
        (True, [DNSAnswer(RRType.A, "127.0.0.1")]),
    ],
    ids=["empty answer", "non-empty answer"],
)
def test_resolve(have_records, want):
    resolver = ClientDNS(client=StubClient(empty=not have_records))
    assert resolver.resolve(["test"]) == want


def test_query_count():
    resolver = ClientDNS(client=StubClient(empty=False))
    assert resolver.query_count() == 0

    resolver.resolve(["test A", "test B"])
    assert resolver.query_count() == 2


def test_default_client_with_no_domains():
    resolver = ClientDNS(["127.0.0.1"], 1, 10, 2)
    assert resolver.resolve([]) == []
    assert resolver.query_count() == 0