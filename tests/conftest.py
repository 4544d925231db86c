"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path
from datetime import date
import tempfile

from avd_business_case.config import get_settings
from avd_business_case.rates import RateTable, get_rate_table


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def rates():
    """Built-in rate table."""
    return RateTable()


@pytest.fixture
def start_date():
    """A Monday project start date."""
    return date(2026, 1, 5)


@pytest.fixture
def all_max_factors():
    """Every complexity factor at its most complex value."""
    from avd_business_case.timeline.factors import FACTOR_CATALOG

    return {d.id: 3 for d in FACTOR_CATALOG}


@pytest.fixture
def mock_env_vars(monkeypatch, temp_dir):
    """Point settings at a temporary database and the built-in rate table."""
    monkeypatch.setenv("DATABASE_PATH", str(temp_dir / "scenarios.db"))
    monkeypatch.setenv("RATE_TABLE_PATH", "")
    get_settings.cache_clear()
    get_rate_table.cache_clear()
    yield
    get_settings.cache_clear()
    get_rate_table.cache_clear()


@pytest.fixture
def test_database(temp_dir):
    """Create a test database."""
    from avd_business_case.persistence.database import Database

    db_path = temp_dir / "test.db"
    db = Database(db_path)
    yield db
    # Cleanup happens automatically with temp_dir


@pytest.fixture
def test_repository(test_database):
    """Create a test repository."""
    from avd_business_case.persistence.repository import ScenarioRepository

    return ScenarioRepository(test_database)
