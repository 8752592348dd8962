import pytest

from puredns.wildcarder.answers import DNSAnswer, RRType, hash_answer
from puredns.wildcarder.dnscache import DNSCache


def test_add_without_duplicates():
    answer_a = [DNSAnswer(RRType.A, "127.0.0.1")]
    answer_b = [
        DNSAnswer(RRType.A, "127.0.0.1"),
        DNSAnswer(RRType.AAAA, "::1"),
        DNSAnswer(RRType.CNAME, "test"),
        DNSAnswer(RRType.A, "127.0.0.1"),
    ]

    cache = DNSCache()
    cache.add("question", answer_a)
    assert cache.find("question") == [hash_answer(answer_a[0])]

    cache.add("question", answer_b)
    assert cache.find("question") == [
        hash_answer(answer_a[0]),
        hash_answer(answer_b[1]),
        hash_answer(answer_b[2]),
    ]


def test_add_different_question():
    answer_a = [DNSAnswer(RRType.A, "127.0.0.1")]
    answer_b = [DNSAnswer(RRType.AAAA, "::1")]

    cache = DNSCache()
    cache.add("question 1", answer_a)
    cache.add("question 2", answer_b)

    assert cache.find("question 1") == [hash_answer(answer_a[0])]
    assert cache.find("question 2") == [hash_answer(answer_b[0])]


_ANSWERS = [
    DNSAnswer(RRType.A, "127.0.0.1"),
    DNSAnswer(RRType.AAAA, "::1"),
    DNSAnswer(RRType.CNAME, "test"),
]


@pytest.mark.parametrize(
    "answers, question, want",
    [
        (_ANSWERS, "question", [hash_answer(a) for a in _ANSWERS]),
        ([], "question", []),
        (_ANSWERS, "invalid", None),
    ],
    ids=["existing question", "existing question without answers", "inexistent question"],
)
def test_find(answers, question, want):
    cache = DNSCache()
    cache.add("question", answers)
    assert cache.find(question) == want


def test_find_returns_copy():
    cache = DNSCache()
    cache.add("question", _ANSWERS[:1])
    got = cache.find("question")
    got.clear()
    assert cache.find("question") == [hash_answer(_ANSWERS[0])]