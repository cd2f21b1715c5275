"""Resilience helpers (retry policy)."""
