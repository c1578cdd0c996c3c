"""Tests for contracts package: the store protocol and the error hierarchy."""
