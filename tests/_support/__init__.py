"""Shared test helpers (document fixtures)."""
