import pytest

from puredns.wildcarder.answercache import AnswerCache
from puredns.wildcarder.answers import DNSAnswer, RRType, hash_answer

SINGLE_ANSWER = [DNSAnswer(RRType.A, "127.0.0.1")]
SINGLE_CNAME = [DNSAnswer(RRType.CNAME, "127.0.0.1")]
MULTIPLE_ANSWERS = [
    DNSAnswer(RRType.A, "127.0.0.1"),
    DNSAnswer(RRType.AAAA, "::1"),
    DNSAnswer(RRType.CNAME, "cname"),
]


@pytest.mark.parametrize(
    "data, search, want",
    [
        ([], SINGLE_ANSWER, []),
        ([("root", SINGLE_ANSWER)], [], []),
        ([("root", MULTIPLE_ANSWERS)], SINGLE_ANSWER, ["root"]),
        ([("root", SINGLE_ANSWER), ("root", SINGLE_CNAME)], SINGLE_ANSWER, ["root"]),
        ([("root", SINGLE_ANSWER), ("root", SINGLE_ANSWER)], SINGLE_ANSWER, ["root"]),
        ([("root A", SINGLE_ANSWER), ("root B", SINGLE_ANSWER)], MULTIPLE_ANSWERS, ["root A", "root B"]),
        ([("root", MULTIPLE_ANSWERS)], SINGLE_CNAME, []),
    ],
    ids=[
        "empty cache",
        "empty search",
        "find single record",
        "same root",
        "duplicate answer",
        "multiple roots",
        "different types",
    ],
)
def test_answer_cache(data, search, want):
    cache = AnswerCache()
    for root, answers in data:
        cache.add(root, answers)
    assert sorted(cache.find(search)) == sorted(want)


def test_find_hashes_matches_find():
    cache = AnswerCache()
    cache.add("root", SINGLE_ANSWER)
    assert cache.find_hashes([hash_answer(SINGLE_ANSWER[0])]) == ["root"]


def test_add_hashes():
    cache = AnswerCache()
    cache.add_hashes("root", [hash_answer(a) for a in MULTIPLE_ANSWERS])
    assert cache.find(SINGLE_CNAME) == []
    assert cache.find([DNSAnswer(RRType.CNAME, "cname")]) == ["root"]


def test_count():
    cache = AnswerCache()
    assert cache.count() == 0

    cache.add("root", [])
    assert cache.count() == 0

    cache.add("root", [DNSAnswer(RRType.A, "127.0.0.1")])
    assert cache.count() == 1

    cache.add("root", [DNSAnswer(RRType.A, "192.168.0.1")])
    assert cache.count() == 2


def test_roots_empty():
    assert AnswerCache().roots() == []


def test_roots_detected():
    cache = AnswerCache()
    cache.add("root A", [DNSAnswer(RRType.A, "")])
    cache.add("root B", [DNSAnswer(RRType.A, "")])
    cache.add("root C", [DNSAnswer(RRType.A, "")])
    assert sorted(cache.roots()) == ["root A", "root B", "root C"]