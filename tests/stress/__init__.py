# tests/stress/__init__.py
"""Stress tests for filestore.

Many threads share one store root. Select or skip them with the marker:
`pytest -m stress` / `pytest -m "not stress"`.
"""
