import os
import sys

import pytest

from puredns.filetest import (
    StubReader,
    StubWriter,
    clear_file,
    override_stdin,
    read_lines,
    temp_dir,
    temp_file,
)


def test_temp_file_empty():
    with temp_file("") as file:
        assert read_lines(file.name) == []


def test_temp_file_content():
    with temp_file("foo\nbar") as file:
        assert read_lines(file.name) == ["foo", "bar"]
        assert file.read() == "foo\nbar"


def test_temp_file_removed_on_exit():
    with temp_file("foo") as file:
        name = file.name
        assert file.read() == "foo"
        assert read_lines(name) == ["foo"]
    assert os.path.exists(name) is False


def test_temp_dir():
    with temp_dir() as path:
        assert os.path.isdir(path) is True
        assert os.listdir(path) == []
    assert os.path.exists(path) is False


def test_read_lines_ok():
    with temp_file("line1\nline2\nline3") as file:
        assert read_lines(file.name) == ["line1", "line2", "line3"]


def test_read_lines_strips_crlf():
    with temp_file("line1\r\nline2\n") as file:
        assert read_lines(file.name) == ["line1", "line2"]


def test_read_lines_empty_name():
    assert read_lines("") == []


def test_clear_file():
    with temp_file("foo\nbar") as file:
        clear_file(file)
        assert read_lines(file.name) == []


def test_override_stdin():
    original = sys.stdin
    with temp_file("input") as file:
        with override_stdin(file):
            assert sys.stdin is file
            assert sys.stdin.read() == "input"
        assert sys.stdin is original


def test_stub_reader_read_full_buffer():
    reader = StubReader(b"foo")
    assert reader.read(3) == b"foo"
    assert reader.read(3) == b""


def test_stub_reader_read_part_of_buffer():
    reader = StubReader(b"foo")
    assert reader.read(1) == b"f"
    assert reader.index == 1


def test_stub_reader_generate_read_error():
    error = OSError("read error")
    reader = StubReader(b"foo", error)
    with pytest.raises(OSError) as info:
        reader.read(1)
    assert info.value is error
    assert reader.index == 0


def test_stub_writer_internal_buffer_updated():
    writer = StubWriter()
    assert writer.write(b"test") == 4
    assert writer.buffer == b"test"
    assert writer.count == 4


def test_stub_writer_generate_write_error():
    error = OSError("error")
    writer = StubWriter(error)
    with pytest.raises(OSError) as info:
        writer.write(b"test")
    assert info.value is error
    assert writer.buffer == b""
    assert writer.count == 0