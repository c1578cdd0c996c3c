"""FileStore protocol for ID-addressed byte storage.

This protocol defines the public surface used by:
- core/file_store.py (FileStore filesystem implementation)
- cli.py (command-line front end)

Kept separate from the implementation so callers can type against the
protocol and substitute their own backends in tests.
"""

from io import BufferedReader, BufferedWriter
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

# Push variants accept either a readable binary stream or raw bytes
Content = BinaryIO | bytes | bytearray | memoryview


@runtime_checkable
class FileStoreProtocol(Protocol):
    """Protocol for ID-addressed storage backends.

    Implementations map an opaque string ID onto exactly one stored item.
    """

    def is_valid_id(self, item_id: str | None) -> bool:
        """Check an ID against the configured id pattern.

        Args:
            item_id: Candidate ID (None and empty string are never valid)

        Returns:
            True if the whole ID matches the pattern
        """
        ...

    def id_to_absolute_path(self, item_id: str) -> Path:
        """Map an ID to the location of its content.

        Args:
            item_id: ID to map

        Returns:
            Absolute location under the store root
        """
        ...

    def exists(self, item_id: str) -> bool:
        """Check if an item exists.

        Args:
            item_id: ID to query

        Returns:
            True if content is stored for the ID
        """
        ...

    def read(self, item_id: str) -> BufferedReader | None:
        """Open stored content for reading.

        Args:
            item_id: ID to read

        Returns:
            Buffered reader owned by the caller, or None if absent
        """
        ...

    def create(self, item_id: str, content: Content | None) -> None:
        """Store content under a new ID.

        Args:
            item_id: ID that must not already exist
            content: Stream or bytes to store; streams are not closed

        Raises:
            DuplicateIdError: If the ID already exists
            InvalidArgumentError: If content is None
            FileStoreIOError: If the content cannot be written
        """
        ...

    def create_stream(self, item_id: str) -> BufferedWriter:
        """Create a new item and return a stream for the caller to fill.

        Raises:
            DuplicateIdError: If the ID already exists
            FileStoreIOError: If the file cannot be created
        """
        ...

    def update(self, item_id: str, content: Content | None) -> None:
        """Replace the content of an existing item.

        Raises:
            ItemNotFoundError: If the ID does not exist
            InvalidArgumentError: If content is None
            FileStoreIOError: If the content cannot be written
        """
        ...

    def update_stream(self, item_id: str) -> BufferedWriter:
        """Truncate an existing item and return a stream for new content.

        Raises:
            ItemNotFoundError: If the ID does not exist
            FileStoreIOError: If the file cannot be opened
        """
        ...

    def delete(self, item_id: str) -> bool:
        """Delete an item.

        Returns:
            True if the filesystem removed the file, False otherwise

        Raises:
            ItemNotFoundError: If the ID does not exist
        """
        ...
