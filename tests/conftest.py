"""Shared pytest fixtures for bankroll tests."""

import os
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from bankroll.database.factories import create_sqlite_database
from bankroll.domain.account import AccountService
from bankroll.domain.csv_import import CSVImportService
from bankroll.domain.progress import ProgressService
from bankroll.domain.session import SessionService


class FixedClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Clock starting at 2025-06-13 19:00."""
    return FixedClock(datetime(2025, 6, 13, 19, 0))


@pytest.fixture
def session_service(temp_db, clock):
    """Create a SessionService with a temporary database and fixed clock."""
    return SessionService(temp_db, clock=clock)


@pytest.fixture
def import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def progress_service(temp_db):
    """Create a ProgressService with a temporary database."""
    return ProgressService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def sample_account(import_service, account_service):
    """Create a sample imported account."""
    account_id = import_service.get_or_create_account("Main")
    return account_service.get_account(account_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
