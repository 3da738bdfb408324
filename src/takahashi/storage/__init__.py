"""Persistence slots (SQLite-backed key-value store)."""
