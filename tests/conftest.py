"""Shared pytest fixtures for bankledger tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from bankledger.database.factories import create_sqlite_store
from bankledger.domain.ledger import Ledger


@pytest.fixture
def temp_store():
    """Create a temporary SQLite snapshot store for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    store.connect()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger(temp_store):
    """Create an empty Ledger backed by a temporary store."""
    return Ledger(temp_store)


@pytest.fixture
def savings_account(ledger):
    """Open a savings account with 10000 at 5% interest."""
    return ledger.create_account("S", "Asha Rao", Decimal("10000"), Decimal("5")).unwrap()


@pytest.fixture
def current_account(ledger):
    """Open a current account with zero balance and a 500 overdraft."""
    return ledger.create_account("C", "Ravi Traders", Decimal("0"), Decimal("500")).unwrap()


@pytest.fixture
def saved_ledger(ledger, savings_account, current_account):
    """Persist a ledger holding one savings and one current account."""
    ledger.save_snapshot().unwrap()
    return ledger


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def db_args(temp_store):
    """Global CLI arguments pointing at the temporary store."""
    return ["--db-path", temp_store.database_path]
