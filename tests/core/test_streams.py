# tests/core/test_streams.py
"""Tests for the byte-copy helpers."""

import io
from pathlib import Path

import pytest

from filestore.contracts.errors import FileStoreIOError, InvalidArgumentError
from filestore.core.streams import as_stream, copy_stream


class _FailingSource:
    """Yields one block, then fails like a dropped connection."""

    def __init__(self, first_block: bytes) -> None:
        self._first_block = first_block
        self.calls = 0

    def read(self, size: int = -1) -> bytes:
        self.calls += 1
        if self.calls == 1:
            return self._first_block
        raise OSError("connection reset")


class TestCopyStream:
    """copy_stream() writes a whole source into a destination file."""

    def test_copies_all_bytes_in_order(self, tmp_path: Path) -> None:
        content = bytes(range(256)) * 1024  # larger than one copy block
        destination = tmp_path / "out.bin"

        copy_stream(destination, io.BytesIO(content))

        assert destination.read_bytes() == content

    def test_truncates_existing_destination(self, tmp_path: Path) -> None:
        destination = tmp_path / "out.bin"
        destination.write_bytes(b"previous, longer content")

        copy_stream(destination, io.BytesIO(b"new"))

        assert destination.read_bytes() == b"new"

    def test_source_left_open(self, tmp_path: Path) -> None:
        source = io.BytesIO(b"data")

        copy_stream(tmp_path / "out.bin", source)

        assert source.closed is False

    def test_none_source_raises_invalid_argument(self, tmp_path: Path) -> None:
        destination = tmp_path / "out.bin"

        with pytest.raises(InvalidArgumentError):
            copy_stream(destination, None)

        assert not destination.exists()

    def test_missing_parent_raises_io_error(self, tmp_path: Path) -> None:
        destination = tmp_path / "no-such-dir" / "out.bin"

        with pytest.raises(FileStoreIOError) as exc_info:
            copy_stream(destination, io.BytesIO(b"data"))

        assert exc_info.value.path == destination
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_directory_destination_raises_io_error(self, tmp_path: Path) -> None:
        with pytest.raises(FileStoreIOError):
            copy_stream(tmp_path, io.BytesIO(b"data"))

    def test_destination_flushed_and_closed_when_copy_fails(self, tmp_path: Path) -> None:
        """Bytes written before the failure reach the file: the handle was released."""
        destination = tmp_path / "out.bin"
        source = _FailingSource(b"partial")

        with pytest.raises(OSError, match="connection reset"):
            copy_stream(destination, source)  # type: ignore[arg-type]

        assert destination.read_bytes() == b"partial"


class TestAsStream:
    """as_stream() normalizes push-variant content."""

    def test_none_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            as_stream(None)

    @pytest.mark.parametrize("content", [b"abc", bytearray(b"abc"), memoryview(b"abc")])
    def test_bytes_like_wrapped(self, content: bytes | bytearray | memoryview) -> None:
        assert as_stream(content).read() == b"abc"

    def test_stream_passed_through(self) -> None:
        source = io.BytesIO(b"abc")

        assert as_stream(source) is source
