"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from fincal.main import app
from fincal.api.history import get_history_log
from fincal.services import HistoryLog


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def history_log():
    """Fresh history log for each test."""
    return HistoryLog(limit=3)


@pytest.fixture
def client(history_log):
    """Create test client backed by an isolated history log."""
    app.dependency_overrides[get_history_log] = lambda: history_log
    yield TestClient(app)
    app.dependency_overrides.clear()
