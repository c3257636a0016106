import io
import shutil

import pytest

from fastbin.progress import ProgressReader


class _FailingReader:
    def read(self, size=-1):
        raise OSError("broken stream")


def test_read_counts_bytes():
    pr = ProgressReader(io.BytesIO(b"abcdef"), 6, disable=True)
    assert pr.read(4) == b"abcd"
    assert pr.read_so_far == 4
    assert pr.read() == b"ef"
    assert pr.read_so_far == 6
    assert pr.percent == 1.0
    pr.close()


def test_partial_percent_matches_ratio():
    data = b"x" * 10
    pr = ProgressReader(io.BytesIO(data), len(data), disable=True)
    pr.read(5)
    assert pr.percent == pytest.approx(pr.read_so_far / pr.total)
    pr.close()


def test_unknown_total_is_spinner():
    payload = b"some payload"
    pr = ProgressReader(io.BytesIO(payload), -1, disable=True)
    assert pr.is_spinner
    assert pr.read() == payload
    assert pr.read_so_far == len(payload)
    assert pr.percent == 0.0
    pr.close()


def test_copy_round_trip():
    payload = bytes(range(256)) * 1000
    out = io.BytesIO()
    with ProgressReader(io.BytesIO(payload), len(payload), disable=True) as pr:
        shutil.copyfileobj(pr, out, 4096)
    assert out.getvalue() == payload
    assert pr.read_so_far == len(payload)
    assert pr.closed


def test_read_at_end_returns_empty_and_keeps_count():
    pr = ProgressReader(io.BytesIO(b"ab"), 2, disable=True)
    pr.read()
    assert pr.read() == b""
    assert pr.read_so_far == 2
    pr.close()


def test_error_propagates_without_counting():
    pr = ProgressReader(_FailingReader(), 10, disable=True)
    with pytest.raises(OSError, match="broken stream"):
        pr.read(4)
    assert pr.read_so_far == 0
    pr.close()


def test_close_leaves_wrapped_stream_open():
    stream = io.BytesIO(b"data")
    pr = ProgressReader(stream, 4, disable=True)
    pr.close()
    pr.close()
    assert pr.closed
    assert not stream.closed