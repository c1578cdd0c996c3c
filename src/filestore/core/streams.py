"""Byte-stream helpers shared by the store's push operations."""

import io
from pathlib import Path
from typing import BinaryIO

from filestore.contracts.errors import FileStoreIOError, InvalidArgumentError
from filestore.contracts.file_store import Content

__all__ = ["as_stream", "copy_stream", "copy_to_handle"]

# Read size for each copy step
COPY_BUFFER_SIZE = 64 * 1024


def as_stream(content: Content | None) -> BinaryIO:
    """Normalize push-variant content to a readable binary stream.

    Raw bytes are wrapped in an in-memory stream; streams pass through
    untouched (and are never closed here).

    Raises:
        InvalidArgumentError: If content is None
    """
    if content is None:
        raise InvalidArgumentError("Null content stream.")
    if isinstance(content, bytes | bytearray | memoryview):
        return io.BytesIO(content)
    return content


def copy_to_handle(destination: BinaryIO, source: BinaryIO) -> None:
    """Copy every byte from source into an already-open destination, in order."""
    for chunk in iter(lambda: source.read(COPY_BUFFER_SIZE), b""):
        destination.write(chunk)


def copy_stream(destination: Path, source: BinaryIO | None) -> None:
    """Write all bytes from source into destination, truncating it first.

    The destination handle is always flushed and closed, including when the
    copy fails partway. The source stream is left open for the caller.

    Args:
        destination: File to write; its parent directory must already exist
        source: Readable binary stream

    Raises:
        InvalidArgumentError: If source is None
        FileStoreIOError: If destination cannot be opened for writing
        OSError: If a read or write fails after the destination was opened
    """
    if source is None:
        raise InvalidArgumentError("Null content stream.", path=destination)

    try:
        handle = open(destination, "wb")  # noqa: SIM115 - closed in the with block below
    except OSError as e:
        raise FileStoreIOError(f"Unable to create output stream for file {destination}", path=destination) from e

    with handle:
        copy_to_handle(handle, source)
