import os

import pytest

from hsh.getline import BUFFER_SIZE, LineReader, getline, release_buffers


@pytest.fixture(autouse=True)
def _clean_buffers():
    release_buffers()
    yield
    release_buffers()


@pytest.fixture
def make_fd():
    opened = []

    def _make(data: bytes) -> int:
        r, w = os.pipe()
        os.write(w, data)
        os.close(w)
        opened.append(r)
        return r

    yield _make
    for fd in opened:
        os.close(fd)


def test_readline_keeps_newlines(make_fd):
    reader = LineReader(make_fd(b"one\ntwo\n"))
    assert reader.readline() == "one\n"
    assert reader.readline() == "two\n"
    assert reader.readline() is None


def test_readline_partial_last_line(make_fd):
    reader = LineReader(make_fd(b"first\nlast"))
    assert reader.readline() == "first\n"
    assert reader.readline() == "last"
    assert reader.readline() is None


def test_readline_empty_input(make_fd):
    assert LineReader(make_fd(b"")).readline() is None


def test_readline_empty_lines(make_fd):
    reader = LineReader(make_fd(b"\n\nx\n"))
    assert [reader.readline() for _ in range(4)] == ["\n", "\n", "x\n", None]


def test_readline_long_line(tmp_path):
    line = "a" * (BUFFER_SIZE * 3 + 17) + "\n"
    path = tmp_path / "long.txt"
    path.write_text(line + "tail\n")
    fd = os.open(path, os.O_RDONLY)
    try:
        reader = LineReader(fd)
        assert reader.readline() == line
        assert reader.readline() == "tail\n"
        assert reader.readline() is None
    finally:
        os.close(fd)


def test_readline_decodes_utf8(make_fd):
    text = "caf\u00e9 \u2603\n"
    assert LineReader(make_fd(text.encode("utf-8"))).readline() == text


def test_readline_bad_descriptor():
    r, w = os.pipe()
    os.close(r)
    os.close(w)
    assert LineReader(r).readline() is None


def test_close_discards_buffer(make_fd):
    reader = LineReader(make_fd(b"a\nb\n"))
    assert reader.readline() == "a\n"
    reader.close()
    assert reader.readline() is None


def test_getline_buffers_per_descriptor(make_fd):
    fd1 = make_fd(b"x1\nx2\n")
    fd2 = make_fd(b"y1\ny2\n")
    assert getline(fd1) == "x1\n"
    assert getline(fd2) == "y1\n"
    assert getline(fd1) == "x2\n"
    assert getline(fd2) == "y2\n"
    assert getline(fd1) is None


def test_release_buffers_drops_pending_data(make_fd):
    fd = make_fd(b"a\nb\n")
    assert getline(fd) == "a\n"
    release_buffers()
    assert getline(fd) is None


def test_getline_negative_fd_releases(make_fd):
    fd = make_fd(b"a\nb\n")
    assert getline(fd) == "a\n"
    assert getline(-1) is None
    assert getline(fd) is None