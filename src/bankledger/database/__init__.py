"""Persistence layer for bankledger application."""

from bankledger.database.base import SnapshotStore
from bankledger.database.factories import create_sqlite_store

__all__ = ["SnapshotStore", "create_sqlite_store"]
