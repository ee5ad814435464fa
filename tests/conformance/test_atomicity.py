"""
Atomicity Conformance Tests

INVARIANT: A write either fully succeeds or leaves no trace.

    ∀ write w:
        w.ok = False ⟹ state_after = state_before
        w.ok = True  ⟹ every map it names is updated

initialize_loan touches three maps (loans, interest_rates,
compounding_frequencies); a rejected call must leave all three as they were.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from interest_engine import ErrorCode, LoanRegistry

from tests.fake_view import ADMIN, USER, START_TIME, make_registry


class TestAtomicityProperties:
    """Property-based atomicity tests."""

    @given(
        st.integers(min_value=0, max_value=3),
        st.integers(min_value=-5, max_value=5000),
        st.integers(min_value=-5, max_value=2100),
        st.integers(min_value=-2, max_value=12),
        st.sampled_from([ADMIN, USER]),
    )
    @settings(max_examples=200)
    def test_rejected_initialize_changes_nothing(self, loan_id, principal, rate, frequency, caller):
        """
        PROPERTY: A failed initialize_loan leaves the snapshot unchanged.
        """
        registry = make_registry((1, 1000, 5, 12))
        registry.set_interest_rate(2, 900, caller=ADMIN)
        before = registry.snapshot()

        result = registry.initialize_loan(
            loan_id, principal, rate, frequency, caller=caller, current_time=START_TIME
        )

        if result.ok:
            assert registry.get_loan(loan_id).principal == principal
            assert registry.get_interest_rate(loan_id).unwrap() == rate
            assert registry.get_compounding_frequency(loan_id).unwrap() == frequency
        else:
            assert registry.snapshot() == before

    @given(
        st.integers(min_value=0, max_value=3),
        st.integers(min_value=-5, max_value=2100),
        st.sampled_from([ADMIN, USER]),
    )
    @settings(max_examples=100)
    def test_rejected_rate_override_changes_nothing(self, loan_id, rate, caller):
        registry = make_registry((1, 1000, 5, 12))
        before = registry.snapshot()

        result = registry.set_interest_rate(loan_id, rate, caller=caller)

        if result.ok:
            assert registry.get_interest_rate(loan_id).unwrap() == rate
        else:
            assert registry.snapshot() == before

    @given(
        st.integers(min_value=0, max_value=3),
        st.integers(min_value=-2, max_value=12),
        st.sampled_from([ADMIN, USER]),
    )
    @settings(max_examples=100)
    def test_rejected_frequency_override_changes_nothing(self, loan_id, frequency, caller):
        registry = make_registry((1, 1000, 5, 12))
        before = registry.snapshot()

        result = registry.set_compounding_frequency(loan_id, frequency, caller=caller)

        if result.ok:
            assert registry.get_compounding_frequency(loan_id).unwrap() == frequency
        else:
            assert registry.snapshot() == before


class TestAtomicityExamples:
    """Explicit atomicity examples."""

    def test_duplicate_does_not_reseed_overrides(self):
        """A rejected duplicate must not overwrite overrides set after creation."""
        registry = make_registry((1, 1000, 5, 12))
        registry.set_interest_rate(1, 8, caller=ADMIN)

        result = registry.initialize_loan(1, 1000, 5, 12, caller=ADMIN, current_time=200)

        assert result.error == ErrorCode.LOAN_ALREADY_EXISTS
        assert registry.get_interest_rate(1).unwrap() == 8

    def test_successful_initialize_writes_all_three_maps(self):
        registry = LoanRegistry(admin=ADMIN)
        registry.initialize_loan(4, 2500, 300, 2, caller=ADMIN, current_time=7)

        assert 4 in registry.loans
        assert registry.interest_rates[4] == 300
        assert registry.compounding_frequencies[4] == 2
