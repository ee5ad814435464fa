"""
test_validators.py - Unit tests for input range checks

Tests:
- Boundaries of each validator
- first_failure ordering and short-circuit behaviour
"""

import pytest

from interest_engine import (
    ErrorCode,
    MAX_RATE,
    first_failure,
    validate_frequency,
    validate_periods,
    validate_principal,
    validate_rate,
)


class TestValidatePrincipal:

    @pytest.mark.parametrize("principal", [0, -1, -1_000_000])
    def test_non_positive_rejected(self, principal):
        assert validate_principal(principal) == ErrorCode.INVALID_PRINCIPAL

    @pytest.mark.parametrize("principal", [1, 1000, 10**30])
    def test_positive_accepted(self, principal):
        assert validate_principal(principal) is None


class TestValidateRate:

    @pytest.mark.parametrize("rate", [0, -5, MAX_RATE + 1, 10_000])
    def test_out_of_range_rejected(self, rate):
        assert validate_rate(rate) == ErrorCode.INVALID_RATE

    @pytest.mark.parametrize("rate", [1, 5, 500, MAX_RATE])
    def test_in_range_accepted(self, rate):
        assert validate_rate(rate) is None

    def test_upper_bound_is_twenty_percent(self):
        assert MAX_RATE == 2000


class TestValidatePeriods:

    def test_zero_rejected(self):
        assert validate_periods(0) == ErrorCode.INVALID_PERIODS

    def test_negative_rejected(self):
        assert validate_periods(-3) == ErrorCode.INVALID_PERIODS

    def test_one_accepted(self):
        assert validate_periods(1) is None


class TestValidateFrequency:

    def test_zero_rejected(self):
        assert validate_frequency(0) == ErrorCode.INVALID_FREQUENCY

    def test_one_accepted(self):
        assert validate_frequency(1) is None

    def test_daily_accepted(self):
        assert validate_frequency(365) is None


class TestFirstFailure:
    """Tests for ordered, short-circuit composition."""

    def test_all_pass(self):
        assert first_failure(
            lambda: validate_principal(1),
            lambda: validate_rate(5),
        ) is None

    def test_no_checks(self):
        assert first_failure() is None

    def test_first_failing_code_wins(self):
        code = first_failure(
            lambda: validate_principal(1),
            lambda: validate_rate(0),
            lambda: validate_periods(0),
        )
        assert code == ErrorCode.INVALID_RATE

    def test_later_checks_not_evaluated(self):
        def must_not_run():
            pytest.fail("check evaluated after an earlier failure")

        code = first_failure(
            lambda: validate_principal(0),
            must_not_run,
        )
        assert code == ErrorCode.INVALID_PRINCIPAL
