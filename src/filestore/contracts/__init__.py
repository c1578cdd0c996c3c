"""Shared contracts: the store protocol and its exception hierarchy."""

from filestore.contracts.errors import (
    DuplicateIdError,
    FileStoreError,
    FileStoreIOError,
    InvalidArgumentError,
    InvalidIdError,
    ItemNotFoundError,
)
from filestore.contracts.file_store import Content, FileStoreProtocol

__all__ = [
    "Content",
    "DuplicateIdError",
    "FileStoreError",
    "FileStoreIOError",
    "FileStoreProtocol",
    "InvalidArgumentError",
    "InvalidIdError",
    "ItemNotFoundError",
]
