import io

from puredns.massdns.linereader import LineReader


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def advance(self, seconds):
        self.now += seconds

    def __call__(self):
        return self.now


def test_read_unlimited():
    text = b"line1\nline2\nline3\n"
    reader = LineReader(io.BytesIO(text), 0, clock=FakeClock())

    got = b""
    while True:
        chunk = reader.read(1)
        if chunk == b"":
            break
        got += chunk

    assert got == text
    assert reader.count() == 3


def test_read_limited():
    clock = FakeClock()
    reader = LineReader(io.BytesIO(b"line1\nline2\n"), 1, clock=clock)

    got = reader.read(4096)
    assert got == b"line1\n"

    assert reader.read(4096) is None

    clock.advance(1)
    got += reader.read(4096)
    assert got == b"line1\nline2\n"

    clock.advance(1)
    assert reader.read(4096) == b""
    assert reader.count() == 2


def test_read_respects_size():
    reader = LineReader(io.BytesIO(b"abcdef\n"), 0, clock=FakeClock())

    assert reader.read(4) == b"abcd"
    assert reader.count() == 0
    assert reader.read(4) == b"ef\n"
    assert reader.count() == 1
    assert reader.read(4) == b""