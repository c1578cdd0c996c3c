"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- IDs matching the default id pattern
- IDs safe to write to disk (no dot-only path segments)
- Store configurations (chunk size, extension)
- Binary content

Usage:
    from tests.property.conftest import store_ids, binary_content

    @given(item_id=store_ids, content=binary_content)
    def test_roundtrip(item_id: str, content: bytes) -> None:
        ...
"""

from __future__ import annotations

import string

from hypothesis import strategies as st

# =============================================================================
# ID Strategies
# =============================================================================

# Exactly the characters accepted by the default id pattern
DEFAULT_ID_ALPHABET = string.ascii_letters + string.digits + "_.-"

# Any ID the default pattern accepts
store_ids = st.text(alphabet=DEFAULT_ID_ALPHABET, min_size=1, max_size=40)

# Without "." a chunk can never be "." or "..", which the filesystem would
# resolve as a relative step rather than a directory name
disk_safe_ids = st.text(alphabet=string.ascii_letters + string.digits + "_-", min_size=1, max_size=24)

# =============================================================================
# Configuration Strategies
# =============================================================================

chunk_sizes = st.integers(min_value=1, max_value=8)

extensions = st.sampled_from([".file", ".bin", ".dat", "~"])

# =============================================================================
# Content Strategies
# =============================================================================

# Arbitrary binary content (including empty)
binary_content = st.binary(min_size=0, max_size=10_000)

# Non-empty binary content
nonempty_binary = st.binary(min_size=1, max_size=10_000)

# Small binary content for cheap comparisons
small_binary = st.binary(min_size=0, max_size=200)
