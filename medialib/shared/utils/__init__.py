"""Utility helpers (ids, UTC datetimes)."""
