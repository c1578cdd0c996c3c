"""Exception hierarchy for file store operations.

Every failure raised by a store operation derives from FileStoreError so
callers can catch the whole family in one place. A missing item is NOT an
error for read() and exists(); those return None/False instead.
"""

from pathlib import Path

__all__ = [
    "DuplicateIdError",
    "FileStoreError",
    "FileStoreIOError",
    "InvalidArgumentError",
    "InvalidIdError",
    "ItemNotFoundError",
]


class FileStoreError(Exception):
    """Base class for all file store failures.

    Attributes:
        item_id: The ID the failing operation was called with, if any
        path: The filesystem path the ID mapped to, if known
    """

    def __init__(self, message: str, *, item_id: str | None = None, path: Path | None = None) -> None:
        super().__init__(message)
        self.item_id = item_id
        self.path = path


class DuplicateIdError(FileStoreError):
    """Raised when create is called for an ID that already has content."""

    pass


class ItemNotFoundError(FileStoreError):
    """Raised when update or delete targets an ID with no stored content."""

    pass


class InvalidArgumentError(FileStoreError, ValueError):
    """Raised when a required argument is missing or unusable.

    Subclasses ValueError so generic argument-checking callers still
    catch it.
    """

    pass


class InvalidIdError(InvalidArgumentError):
    """Raised when ID enforcement is on and an ID fails the id pattern."""

    pass


class FileStoreIOError(FileStoreError):
    """Raised when the filesystem refuses to create, open, or write a path.

    Always chained to the underlying OSError via ``raise ... from``.
    """

    pass
