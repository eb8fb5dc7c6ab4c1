"""
Tests for CopyIoLoop using in-memory buffers.

A single BytesIO passed as both source and destination behaves like one
file opened twice, which is enough to check the overlap handling.
"""

import io

import pytest

from rangecopy.core.exceptions import CopyIOError
from rangecopy.models import CopyDirection
from rangecopy.services.copy.copy_io_loop import CopyIoLoop


def memmove(data: bytes, source_offset: int, dest_offset: int, count: int) -> bytes:
    result = bytearray(data)
    result[dest_offset:dest_offset + count] = data[source_offset:source_offset + count]
    return bytes(result)


class TestCopyIoLoop:
    """Test copy_range on in-memory handles."""

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            CopyIoLoop(0)

    @pytest.mark.parametrize("chunk_size", [1, 3, 4, 64])
    def test_overlap_up_backward(self, chunk_size):
        data = bytes(range(32))
        buffer = io.BytesIO(data)

        copied = CopyIoLoop(chunk_size).copy_range(
            buffer, buffer, 2, 5, 20, CopyDirection.BACKWARD
        )

        assert copied == 20
        assert buffer.getvalue() == memmove(data, 2, 5, 20)

    @pytest.mark.parametrize("chunk_size", [1, 3, 4, 64])
    def test_overlap_down_forward(self, chunk_size):
        data = bytes(range(32))
        buffer = io.BytesIO(data)

        CopyIoLoop(chunk_size).copy_range(
            buffer, buffer, 5, 2, 20, CopyDirection.FORWARD
        )

        assert buffer.getvalue() == memmove(data, 5, 2, 20)

    def test_wrong_direction_corrupts_overlap(self):
        """Sanity check: forward iteration on an upward overlap is not a memmove."""
        data = bytes(range(32))
        buffer = io.BytesIO(data)

        CopyIoLoop(3).copy_range(buffer, buffer, 2, 5, 20, CopyDirection.FORWARD)

        assert buffer.getvalue() != memmove(data, 2, 5, 20)

    def test_separate_buffers(self):
        src = io.BytesIO(b"0123456789")
        dst = io.BytesIO(b"abc")

        copied = CopyIoLoop(4).copy_range(src, dst, 1, 3, 9, CopyDirection.FORWARD)

        assert copied == 9
        assert dst.getvalue() == b"abc123456789"

    def test_noop_reports_count(self):
        buffer = io.BytesIO(b"abcdef")
        sink_calls = []

        class Sink:
            def start(self, total):
                sink_calls.append(("start", total))

            def advance(self, nbytes):
                sink_calls.append(("advance", nbytes))

            def finish(self, total):
                sink_calls.append(("finish", total))

        copied = CopyIoLoop(2).copy_range(buffer, buffer, 1, 1, 5, CopyDirection.NONE, Sink())

        assert copied == 5
        assert buffer.getvalue() == b"abcdef"
        assert sink_calls == [("start", 5), ("advance", 5), ("finish", 5)]

    def test_short_source_raises(self):
        src = io.BytesIO(b"0123")
        dst = io.BytesIO()

        with pytest.raises(CopyIOError, match="unexpected end of source"):
            CopyIoLoop(4).copy_range(src, dst, 0, 0, 8, CopyDirection.FORWARD)

    def test_finish_reports_partial_total_on_error(self):
        src = io.BytesIO(b"0123")
        dst = io.BytesIO()
        finished = []

        class Sink:
            def start(self, total):
                pass

            def advance(self, nbytes):
                pass

            def finish(self, total):
                finished.append(total)

        with pytest.raises(CopyIOError):
            CopyIoLoop(4).copy_range(src, dst, 0, 0, 8, CopyDirection.FORWARD, Sink())

        assert finished == [4]
