# tests/property/__init__.py
"""Property-based tests for filestore.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- core/: ID-to-path mapping, round trips, item lifecycle
"""
