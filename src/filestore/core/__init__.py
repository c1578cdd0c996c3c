"""Core store implementation, configuration, and logging."""

from filestore.core.config import (
    FileStoreSettings,
    LoggingSettings,
    Settings,
    load_settings,
)
from filestore.core.file_store import FileStore
from filestore.core.logging import configure_logging, get_logger

__all__ = [
    "FileStore",
    "FileStoreSettings",
    "LoggingSettings",
    "Settings",
    "configure_logging",
    "get_logger",
    "load_settings",
]
