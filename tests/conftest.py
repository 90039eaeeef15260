"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from fincalc.main import app
from fincalc.calculations.irr import CashFlow


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture(scope="session")
def anyio_backend():
    """Backend for async tests."""
    return "asyncio"


@pytest.fixture
def client():
    """Create test client; dependency overrides are cleared afterwards."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def conventional_cash_flows():
    """$100k investment returning $140k over four periods (IRR ~15.32%)."""
    return [
        CashFlow(period=0, amount=-100000, label="Investment"),
        CashFlow(period=1, amount=30000),
        CashFlow(period=2, amount=40000),
        CashFlow(period=3, amount=50000),
        CashFlow(period=4, amount=20000),
    ]
