"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from tests.fixtures.fake_session import FakeBudgetSession, FakeSessionFactory

CONFIG_KEYS = (
    "ACTUAL_SERVER_URL",
    "ACTUAL_PASSWORD",
    "ACTUAL_SYNC_ID",
    "ACTUAL_DATA_DIR",
    "ACTUAL_ENCRYPTION_PASSWORD",
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def fake_session() -> FakeBudgetSession:
    """In-memory budget session with synthetic data."""
    return FakeBudgetSession()


@pytest.fixture
def session_factory(fake_session) -> FakeSessionFactory:
    """Session factory handing out ``fake_session``."""
    return FakeSessionFactory(fake_session)


@pytest.fixture
def sample_csv() -> str:
    """Sample import file content."""
    return (
        "Date,Amount,Payee,Category,Notes,Imported_ID\n"
        "2024-01-03,-1500.00,Landlord,rent,January rent,bank-001\n"
        '2024-01-04,"-1,020.50",Power Co,Power,,bank-002\n'
        "2024-01-05,2500,Employer,,,\n"
    )


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests never read the real user's config or environment
    for key in CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "e2e: End-to-end tests running the installed CLI")
    config.addinivalue_line("markers", "csv: Tests for CSV import parsing")
    config.addinivalue_line("markers", "config: Tests for configuration resolution")
    config.addinivalue_line("markers", "cli: Tests for argument parsing and command dispatch")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
