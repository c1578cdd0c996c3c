# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- store: FileStore rooted in a fresh per-test directory (default settings)
- store_root: that directory

Helpers:
- generate_content(): about 1 KiB of random bytes, length varies per call
- streams_equal(): byte-for-byte comparison of two readable streams

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import itertools
import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

import pytest
from hypothesis import Phase, Verbosity, settings

from filestore.core.file_store import FileStore

# =============================================================================
# Content Helpers
# =============================================================================

_MINIMUM_CONTENT_SIZE = 1020
_content_sizes = itertools.cycle(range(256))


def generate_content() -> bytes:
    """Return a fresh block of random content of about 1 KiB.

    Successive calls return blocks of different lengths, so two generated
    blocks never compare equal by accident.
    """
    return os.urandom(_MINIMUM_CONTENT_SIZE + next(_content_sizes))


def streams_equal(a: BinaryIO | None, b: BinaryIO | None) -> bool:
    """Compare two streams byte-for-byte, including where each one ends."""
    if a is None or b is None:
        return False
    return a.read() == b.read()


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """Handlers bound to a captured stream must not outlive the test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Root directory for the store fixture (not created up front)."""
    return tmp_path / "store"


@pytest.fixture
def store(store_root: Path) -> FileStore:
    """FileStore with default settings rooted in a fresh directory."""
    return FileStore.for_root(store_root)


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (filesystem timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
