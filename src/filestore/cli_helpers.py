"""CLI helper functions for store construction and content sources."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

import typer

from filestore.core.config import FileStoreSettings, Settings, load_settings
from filestore.core.file_store import FileStore

STDIN_SOURCE = "-"


def resolve_store(
    *,
    settings_path: Path | None,
    root: Path | None,
    chunk_size: int | None = None,
    extension: str | None = None,
) -> tuple[FileStore, Settings | None]:
    """Build the store a command operates on.

    --root wins over the settings file's root_directory; --chunk-size and
    --extension override the file's values (or the defaults without one).

    Returns:
        The store, plus the loaded Settings when a settings file was used

    Raises:
        ValueError: If neither a settings file nor a root is given
        FileNotFoundError: If the settings file does not exist
        ValidationError: If the settings or overrides are invalid
    """
    overrides: dict[str, object] = {}
    if root is not None:
        overrides["root_directory"] = root
    if chunk_size is not None:
        overrides["chunk_size"] = chunk_size
    if extension is not None:
        overrides["extension"] = extension

    if settings_path is not None:
        config = load_settings(settings_path)
        store_settings = FileStoreSettings(**{**config.store.model_dump(), **overrides})
        return FileStore(store_settings), config

    if root is None:
        raise ValueError("No store selected: pass --root or --settings")
    return FileStore(FileStoreSettings(**overrides)), None  # type: ignore[arg-type]


@contextmanager
def open_source(source: str | None) -> Iterator[BinaryIO]:
    """Open a content source for reading: a file path, or stdin for '-'/None.

    Files opened here are closed on exit; stdin is left open.
    """
    if source is None or source == STDIN_SOURCE:
        yield typer.get_binary_stream("stdin")
        return

    with open(Path(source).expanduser(), "rb") as handle:
        yield handle
