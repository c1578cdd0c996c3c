"""
Filesystem store addressing byte content by arbitrary string ID.

Each ID maps to exactly one file. The ID is cut into fixed-size chunks
that become nested directory names, with the last chunk carrying a file
extension:

    chunk_size=2, extension=".file":  "1234567" -> root/12/34/56/7.file

Chunking bounds the number of entries in any one directory. The extension
keeps a file from ever sharing a name with a directory: "10" maps to
"10.file" while "1000" maps to "10/00.file".

No in-process locks are used. Concurrent create() calls for the same ID are
arbitrated by exclusive-create open mode, so exactly one wins. update() and
delete() check existence and then act, so racing calls on one ID can
interleave; the last writer wins.
"""

import os
import re
from io import BufferedReader, BufferedWriter
from pathlib import Path
from typing import Any

from filestore.contracts.errors import (
    DuplicateIdError,
    FileStoreIOError,
    InvalidIdError,
    ItemNotFoundError,
)
from filestore.contracts.file_store import Content
from filestore.core.config import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_EXTENSION,
    DEFAULT_ID_PATTERN,
    FileStoreSettings,
)
from filestore.core.logging import get_logger
from filestore.core.streams import as_stream, copy_stream, copy_to_handle

__all__ = ["FileStore"]

logger = get_logger(__name__)


class FileStore:
    """Filesystem-based ID store.

    Structure: root_directory/<chunk>/<chunk>/.../<last chunk><extension>

    ID validation is advisory by default: operations act on whatever ID they
    are given and let the filesystem accept or reject the resulting path.
    Set enforce_valid_ids to have every operation check is_valid_id() first.
    """

    def __init__(self, settings: FileStoreSettings) -> None:
        """Initialize the store.

        Args:
            settings: Store configuration. The root directory is neither
                created nor checked here.
        """
        self._apply(settings)

    @classmethod
    def for_root(
        cls,
        root_directory: Path | str,
        *,
        id_pattern: str = DEFAULT_ID_PATTERN,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        extension: str = DEFAULT_EXTENSION,
        enforce_valid_ids: bool = False,
    ) -> "FileStore":
        """Build a store from individual options instead of a settings object."""
        return cls(
            FileStoreSettings(
                root_directory=Path(root_directory),
                id_pattern=id_pattern,
                chunk_size=chunk_size,
                extension=extension,
                enforce_valid_ids=enforce_valid_ids,
            )
        )

    def _apply(self, settings: FileStoreSettings) -> None:
        self._settings = settings
        self._pattern = re.compile(settings.id_pattern)

    def _replace(self, **changes: Any) -> None:
        # Rebuild rather than model_copy() so the new values are validated
        self._apply(FileStoreSettings(**{**self._settings.model_dump(), **changes}))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root_directory={str(self.root_directory)!r})"

    # --------------- Configuration --------------- #

    @property
    def settings(self) -> FileStoreSettings:
        return self._settings

    @property
    def root_directory(self) -> Path:
        return self._settings.root_directory

    @root_directory.setter
    def root_directory(self, value: Path | str) -> None:
        self._replace(root_directory=Path(value))

    @property
    def id_pattern(self) -> str:
        return self._settings.id_pattern

    @id_pattern.setter
    def id_pattern(self, value: str) -> None:
        self._replace(id_pattern=value)

    @property
    def chunk_size(self) -> int:
        return self._settings.chunk_size

    @chunk_size.setter
    def chunk_size(self, value: int) -> None:
        self._replace(chunk_size=value)

    @property
    def extension(self) -> str:
        return self._settings.extension

    @extension.setter
    def extension(self, value: str) -> None:
        self._replace(extension=value)

    # --------------- ID mapping --------------- #

    def is_valid_id(self, item_id: str | None) -> bool:
        """Check whether item_id is non-empty and fully matches id_pattern."""
        if not item_id:
            return False
        return self._pattern.fullmatch(item_id) is not None

    def id_to_relative_path(self, item_id: str) -> Path:
        """Map an ID to its path relative to the root directory.

        Pure function of the ID and the chunk_size/extension settings.
        """
        size = self._settings.chunk_size
        chunks = [item_id[pos : pos + size] for pos in range(0, len(item_id), size)]
        return Path(os.sep.join(chunks) + self._settings.extension)

    def id_to_absolute_path(self, item_id: str) -> Path:
        """Map an ID to its path under the root directory."""
        return self._settings.root_directory / self.id_to_relative_path(item_id)

    def _path_for(self, item_id: str) -> Path:
        if self._settings.enforce_valid_ids and not self.is_valid_id(item_id):
            raise InvalidIdError(
                f"Invalid file ID {item_id!r}: must match {self._settings.id_pattern!r}",
                item_id=item_id,
            )
        return self.id_to_absolute_path(item_id)

    def _require_existing(self, item_id: str, path: Path) -> None:
        if not path.exists():
            raise ItemNotFoundError(f"Unable to find file ID {item_id} ({path})", item_id=item_id, path=path)

    # --------------- Queries --------------- #

    def exists(self, item_id: str) -> bool:
        """Check if content is stored for item_id.

        Queries the filesystem on every call; the answer can be stale as
        soon as it is returned.
        """
        path = self._path_for(item_id)
        try:
            return path.exists()
        except OSError as e:
            raise FileStoreIOError(f"Unable to check file ID {item_id} ({path})", item_id=item_id, path=path) from e

    def read(self, item_id: str) -> BufferedReader | None:
        """Open the content for item_id.

        Returns:
            A buffered reader positioned at the start of the content, which
            the caller must close, or None if the item is absent. Content
            that exists but cannot be opened is also reported as None.
        """
        path = self._path_for(item_id)
        try:
            return open(path, "rb")  # noqa: SIM115 - caller owns the stream
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.debug("read_unavailable", item_id=item_id, path=str(path), error=str(e))
            return None

    def read_bytes(self, item_id: str) -> bytes | None:
        """Return the whole content for item_id, or None if absent."""
        stream = self.read(item_id)
        if stream is None:
            return None
        with stream:
            return stream.read()

    # --------------- Mutations --------------- #

    def _open_new(self, item_id: str, path: Path) -> BufferedWriter:
        """Atomically create the file for item_id and return it open for writing."""
        try:
            # exist_ok covers ancestors created by concurrent callers
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileStoreIOError(f"Unable to create folder for file ID {item_id} ({path})", item_id=item_id, path=path) from e

        try:
            return open(path, "xb")  # noqa: SIM115 - closed by caller
        except FileExistsError as e:
            raise DuplicateIdError(f"Duplicate file ID {item_id} ({path})", item_id=item_id, path=path) from e
        except OSError as e:
            raise FileStoreIOError(f"Unable to create file for ID {item_id} ({path})", item_id=item_id, path=path) from e

    def create(self, item_id: str, content: Content | None) -> None:
        """Store content under a new ID.

        Missing parent directories are created. Content streams are read to
        the end but not closed.

        Raises:
            InvalidArgumentError: If content is None (nothing is created)
            DuplicateIdError: If item_id already exists
            FileStoreIOError: If the file cannot be created or written
        """
        source = as_stream(content)
        path = self._path_for(item_id)

        with self._open_new(item_id, path) as handle:
            try:
                copy_to_handle(handle, source)
            except OSError as e:
                raise FileStoreIOError(f"Unable to create file for ID {item_id} ({path})", item_id=item_id, path=path) from e

        logger.debug("item_created", item_id=item_id, path=str(path))

    def create_stream(self, item_id: str) -> BufferedWriter:
        """Create a new, empty item and return a stream to fill it.

        The returned stream is buffered; use it as a context manager so it is
        closed on every exit path:

            with store.create_stream("report-17") as out:
                serializer.dump(obj, out)

        Raises:
            DuplicateIdError: If item_id already exists
            FileStoreIOError: If the file cannot be created
        """
        path = self._path_for(item_id)
        handle = self._open_new(item_id, path)
        logger.debug("item_created", item_id=item_id, path=str(path), stream=True)
        return handle

    def update(self, item_id: str, content: Content | None) -> None:
        """Replace the content of an existing item.

        The file is truncated to exactly the new content's length.

        Raises:
            InvalidArgumentError: If content is None
            ItemNotFoundError: If item_id does not exist
            FileStoreIOError: If the file cannot be opened or written
        """
        source = as_stream(content)
        path = self._path_for(item_id)
        self._require_existing(item_id, path)

        message = f"Unable to update file for ID {item_id} ({path})"
        try:
            copy_stream(path, source)
        except FileStoreIOError as e:
            # copy_stream knows the path but not the ID
            raise FileStoreIOError(message, item_id=item_id, path=path) from e.__cause__
        except OSError as e:
            raise FileStoreIOError(message, item_id=item_id, path=path) from e

        logger.debug("item_updated", item_id=item_id, path=str(path))

    def update_stream(self, item_id: str) -> BufferedWriter:
        """Truncate an existing item and return a stream for its new content.

        Raises:
            ItemNotFoundError: If item_id does not exist
            FileStoreIOError: If the file cannot be opened
        """
        path = self._path_for(item_id)
        self._require_existing(item_id, path)

        try:
            handle = open(path, "wb")  # noqa: SIM115 - caller owns the stream
        except OSError as e:
            raise FileStoreIOError(f"Unable to update file for ID {item_id} ({path})", item_id=item_id, path=path) from e

        logger.debug("item_updated", item_id=item_id, path=str(path), stream=True)
        return handle

    def delete(self, item_id: str) -> bool:
        """Delete the file for item_id.

        Parent directories are left in place even when they become empty.

        Returns:
            True if the file was removed, False if the filesystem refused
            (including losing a race with a concurrent delete)

        Raises:
            ItemNotFoundError: If item_id does not exist
        """
        path = self._path_for(item_id)
        self._require_existing(item_id, path)

        try:
            path.unlink()
        except OSError as e:
            logger.debug("delete_refused", item_id=item_id, path=str(path), error=str(e))
            return False

        logger.debug("item_deleted", item_id=item_id, path=str(path))
        return True
