"""
test_loan_lifecycle.py - End-to-end registry and formula scenarios

Walks a registry through the calls a lending front end would make:
create a loan, read it back, adjust its overrides, accrue interest as the
clock advances, and price it with the standalone formulas.
"""

from interest_engine import (
    EngineConfig,
    ErrorCode,
    LoanRegistry,
    compound_interest,
    effective_rate,
    future_value,
    present_value,
    simple_interest,
)

from tests.fake_view import ADMIN, USER, START_TIME


class TestReferenceScenarios:
    """Single-call scenarios with known outcomes."""

    def test_simple_interest(self):
        assert simple_interest(1000, 5, 1).unwrap() == 50

    def test_simple_interest_invalid_principal(self):
        assert simple_interest(0, 5, 1).error == ErrorCode.INVALID_PRINCIPAL

    def test_compound_exceeds_simple(self):
        assert compound_interest(1000, 5, 1, 1).unwrap() > 50

    def test_effective_rate_exceeds_nominal(self):
        assert effective_rate(5, 12, 1).unwrap() > 5

    def test_future_value_exceeds_principal(self):
        assert future_value(1000, 5, 1, 12).unwrap() > 1000

    def test_present_value_below_future_amount(self):
        assert present_value(1050, 5, 1, 1).unwrap() < 1050


class TestLoanLifecycle:
    """Multi-step scenarios against one registry."""

    def test_create_accrue_and_read_back(self, registry):
        assert registry.initialize_loan(1, 1000, 5, 12, caller=ADMIN, current_time=START_TIME).ok

        details = registry.get_loan_details(1).unwrap()
        assert details.principal == 1000

        interest = registry.update_loan_interest(1, START_TIME + 12)
        assert interest.unwrap() > 0

    def test_interest_grows_as_clock_advances(self, registry_with_loan):
        accrued = [
            registry_with_loan.update_loan_interest(1, START_TIME + 12 * n).unwrap()
            for n in range(1, 5)
        ]
        assert accrued == sorted(accrued)
        assert len(set(accrued)) == len(accrued)

    def test_overrides_round_trip(self, registry):
        assert registry.set_interest_rate(1, 6, caller=ADMIN).ok
        assert registry.get_interest_rate(1).unwrap() == 6
        assert registry.set_compounding_frequency(1, 4, caller=ADMIN).ok
        assert registry.get_compounding_frequency(1).unwrap() == 4

    def test_unauthorized_user_cannot_change_anything(self, registry_with_loan):
        digest = registry_with_loan.state_digest()

        assert registry_with_loan.set_interest_rate(1, 6, caller=USER).error == ErrorCode.NOT_AUTHORIZED
        assert registry_with_loan.set_compounding_frequency(1, 4, caller=USER).error == ErrorCode.NOT_AUTHORIZED
        assert registry_with_loan.initialize_loan(
            2, 1000, 5, 12, caller=USER, current_time=START_TIME
        ).error == ErrorCode.NOT_AUTHORIZED

        assert registry_with_loan.state_digest() == digest

    def test_duplicate_initialization(self, registry_with_loan):
        result = registry_with_loan.initialize_loan(1, 2000, 6, 4, caller=ADMIN, current_time=START_TIME)
        assert result.error == ErrorCode.LOAN_ALREADY_EXISTS

    def test_reads_are_open_to_everyone(self, registry_with_loan):
        # Readers take no caller; the same answers come back regardless of who asks.
        assert registry_with_loan.get_loan_details(1).ok
        assert registry_with_loan.get_interest_rate(1).ok
        assert registry_with_loan.update_loan_interest(1, START_TIME + 12).ok

    def test_registry_from_environment(self, monkeypatch):
        monkeypatch.setenv("INTEREST_ENGINE_ADMIN", ADMIN)
        monkeypatch.setenv("INTEREST_ENGINE_NAME", "env-registry")
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        registry = LoanRegistry.from_config(EngineConfig.from_env())

        assert registry.initialize_loan(5, 1000, 5, 12, caller=ADMIN, current_time=0).ok
        assert registry.initialize_loan(6, 1000, 5, 12, caller=USER, current_time=0).error == ErrorCode.NOT_AUTHORIZED
        assert registry.list_loans() == [5]

    def test_replay_on_clone_matches(self, registry_with_loan):
        """Applying the same writes to a clone and to the original yields equal digests."""
        cloned = registry_with_loan.clone()
        for target in (registry_with_loan, cloned):
            target.set_interest_rate(1, 7, caller=ADMIN)
            target.initialize_loan(2, 5000, 10, 1, caller=ADMIN, current_time=150)
            target.set_compounding_frequency(3, 2, caller=ADMIN)
        assert cloned.state_digest() == registry_with_loan.state_digest()
        assert cloned.snapshot() == registry_with_loan.snapshot()
