"""Store factory functions for creating snapshot store instances."""

import os
from pathlib import Path
from typing import Optional

from bankledger.database.sqlalchemy_db import SQLAlchemySnapshotStore

DB_PATH_ENV_VAR = "BANKLEDGER_DB_PATH"


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemySnapshotStore:
    """Create a SQLite snapshot store.

    Args:
        database_path: Path to SQLite database file. If None, checks BANKLEDGER_DB_PATH
            environment variable, then defaults to ~/.bankledger/ledger.db

    Returns:
        SQLAlchemySnapshotStore instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        # Default to ~/.bankledger/ledger.db
        home = Path.home()
        db_dir = home / ".bankledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "ledger.db")

    store = SQLAlchemySnapshotStore(f"sqlite:///{database_path}")
    store.database_path = database_path
    return store
