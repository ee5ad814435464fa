"""
conftest.py - Shared pytest fixtures for interest engine tests

Provides common fixtures used across unit, functional and conformance tests:
- Empty and pre-populated registries
- A fake read-only loan view
"""

import pytest

from interest_engine import Loan, LoanRegistry

from tests.fake_view import FakeLoanView, START_TIME, make_registry


@pytest.fixture
def registry() -> LoanRegistry:
    """Empty registry administered by ADMIN."""
    return make_registry()


@pytest.fixture
def registry_with_loan() -> LoanRegistry:
    """Registry holding loan 1: principal 1000, rate 5, frequency 12, created at 100."""
    return make_registry((1, 1000, 5, 12))


@pytest.fixture
def standard_loan() -> Loan:
    return Loan(principal=1000, rate=5, start_time=START_TIME, frequency=12)


@pytest.fixture
def loan_view(standard_loan: Loan) -> FakeLoanView:
    """Read-only view holding only the standard loan under id 1."""
    return FakeLoanView({1: standard_loan})
