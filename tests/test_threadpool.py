import threading

import pytest

from puredns.threadpool import ThreadPool


class CharCountTask:
    def __init__(self, value: str, want: int) -> None:
        self.value = value
        self.want = want
        self.count = 0

    def run(self) -> None:
        self.count = len(self.value)


def _small_list():
    return [
        CharCountTask("hello", 5),
        CharCountTask("world", 5),
        CharCountTask("foo", 3),
        CharCountTask("bar", 3),
        CharCountTask("test", 4),
    ]


def _big_list():
    return [CharCountTask("a" * (i + 1), i + 1) for i in range(1000)]


@pytest.mark.parametrize(
    "threads, queue_size, make_tasks",
    [
        (1, 10, _small_list),
        (3, 10, _small_list),
        (3, 1, _small_list),
        (5, 1000, _big_list),
        (5, 10, list),
        (5, 10, lambda: [CharCountTask("test", 4)]),
    ],
    ids=["single worker", "multiple workers", "single queue", "big list", "no tasks", "single task"],
)
def test_thread_pool(threads, queue_size, make_tasks):
    tasks = make_tasks()
    pool = ThreadPool(threads, queue_size)
    try:
        for task in tasks:
            pool.execute(task)
        pool.wait()

        for task in tasks:
            assert task.count == task.want
        assert pool.current_count() == len(tasks)
        assert pool.done() is True
    finally:
        pool.close()


def test_callables_are_accepted():
    results = []
    lock = threading.Lock()

    def make(i):
        def task():
            with lock:
                results.append(i)
        return task

    with ThreadPool(4, 2) as pool:
        for i in range(20):
            pool.execute(make(i))
        pool.wait()
        assert sorted(results) == list(range(20))
        assert pool.current_count() == 20


def test_execute_after_close_raises():
    pool = ThreadPool(2, 2)
    pool.close()
    with pytest.raises(RuntimeError):
        pool.execute(lambda: None)


def test_close_waits_for_tasks():
    tasks = _small_list()
    pool = ThreadPool(2, 10)
    for task in tasks:
        pool.execute(task)
    pool.close()
    assert [t.count for t in tasks] == [5, 5, 3, 3, 4]
    assert pool.current_count() == 5