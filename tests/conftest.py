"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from homecalc.calculations.amortization import LoanTerms
from homecalc.main import app


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def standard_terms():
    """500K purchase, 20% down, 5.25% over 25 years."""
    return LoanTerms(
        home_price=500_000,
        down_payment=100_000,
        annual_rate_percent=5.25,
        amortization_years=25,
    )
