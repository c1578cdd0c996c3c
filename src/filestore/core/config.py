"""
Configuration schema and loading for filestore.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_ID_PATTERN = r"[a-zA-Z0-9_.-]+"
DEFAULT_CHUNK_SIZE = 2
DEFAULT_EXTENSION = ".file"


class FileStoreSettings(BaseModel):
    """Configuration owned by a single FileStore instance.

    Example YAML:
        store:
          root_directory: /var/lib/filestore
          chunk_size: 2
          extension: .file
    """

    model_config = {"frozen": True}

    root_directory: Path = Field(
        description="Directory under which all items are stored (not created or checked up front)",
    )
    id_pattern: str = Field(
        default=DEFAULT_ID_PATTERN,
        description="Regex an ID must fully match to be considered valid",
    )
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        gt=0,
        description="Number of ID characters per directory level",
    )
    extension: str = Field(
        default=DEFAULT_EXTENSION,
        description="Suffix appended to the final path segment of every item",
    )
    enforce_valid_ids: bool = Field(
        default=False,
        description="Reject IDs that fail id_pattern before touching the filesystem",
    )

    @field_validator("id_pattern")
    @classmethod
    def validate_id_pattern(cls, v: str) -> str:
        """Pattern must compile."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid id_pattern {v!r}: {e}") from e
        return v

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Extension must be non-empty and stay within the final path segment."""
        if not v:
            # Without a suffix "10" (a file) and "1000" (under dir 10/) claim one name
            raise ValueError("extension must not be empty")
        separators = {os.sep, "/"} | ({os.altsep} if os.altsep else set())
        if any(sep in v for sep in separators):
            raise ValueError(f"extension must not contain a path separator, got {v!r}")
        return v


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )
    json_output: bool = Field(
        default=False,
        description="Emit JSON lines instead of console output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class Settings(BaseModel):
    """Top-level filestore configuration file schema."""

    model_config = {"frozen": True}

    store: FileStoreSettings = Field(description="Store location and ID mapping")
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )


# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    Args:
        config: Configuration dict (may contain nested structures)

    Returns:
        New dict with environment variables expanded
    """

    def _expand_string(value: str) -> str:
        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default = match.group(2)  # None if no default specified
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            if default is not None:
                return default
            raise ValueError(f"Environment variable '{var_name}' is not set and has no default")

        return _ENV_VAR_PATTERN.sub(replacer, value)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _expand_string(value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def load_settings(config_path: Path) -> Settings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (FILESTORE_*) - highest priority
    2. Config file (YAML)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: FILESTORE_STORE__CHUNK_SIZE for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated Settings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
        ValueError: If a ${VAR} reference has no value and no default
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="FILESTORE",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    # Dynaconf returns uppercase top-level keys; Pydantic fields are lowercase
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    raw_config = _expand_env_vars(raw_config)

    return Settings(**raw_config)
