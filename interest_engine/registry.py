"""
registry.py - Loan Registry with Admin-Gated Writes

The LoanRegistry is the only stateful component of the engine. It holds
three independent maps:
    - loans: loan id -> Loan (created once, never updated or deleted)
    - interest_rates: loan id -> rate override
    - compounding_frequencies: loan id -> frequency override

Key responsibilities:
    - Implements the LoanView protocol for formulas that read stored loans
    - Gates every write behind the admin identity, compared against the
      caller passed to each call
    - Validates everything before writing, so a rejected call leaves all
      three maps untouched
    - Provides clone() and state_digest() for replay and determinism checks

The override maps are keyed independently of loans: an override may exist
for an id with no Loan, and update_loan_interest reads the Loan's own
rate/frequency rather than the overrides.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from .config import EngineConfig
from .core import (
    ErrorCode, Loan, Result,
    compute_digest, success, failure,
)
from . import formulas
from .logging import get_logger
from .validators import (
    first_failure,
    validate_frequency, validate_principal, validate_rate,
)


logger = get_logger(__name__)


class LoanRegistry:
    """
    Keyed store of loans and per-loan rate/frequency overrides.

    Implements the LoanView protocol, so it can be passed to pure formula
    functions that only need read access.

    Thread Safety:
        Not thread-safe. Callers serialise operations; each call runs to
        completion before the next observes state.

    Example:
        registry = LoanRegistry(admin="ST1ADMIN")
        registry.initialize_loan(1, 1000, 5, 12, caller="ST1ADMIN", current_time=100)
        registry.update_loan_interest(1, current_time=112)
    """

    def __init__(self, admin: str, name: str = "default"):
        """
        Create an empty registry.

        Args:
            admin: Identity allowed to create loans and set overrides
            name: Registry identifier used in log messages

        Raises:
            ValueError: If admin is empty
        """
        if not admin or not admin.strip():
            raise ValueError("admin identity cannot be empty")
        self.name = name
        self._admin = admin
        self.loans: Dict[int, Loan] = {}
        self.interest_rates: Dict[int, int] = {}
        self.compounding_frequencies: Dict[int, int] = {}

    @classmethod
    def from_config(cls, config: EngineConfig) -> LoanRegistry:
        """Build a registry from validated configuration."""
        config.validate()
        return cls(admin=config.admin, name=config.name)

    @property
    def admin(self) -> str:
        """The admin identity fixed at construction."""
        return self._admin

    def is_admin(self, caller: str) -> bool:
        return caller == self._admin

    # ========================================================================
    # LoanView PROTOCOL + READERS
    # ========================================================================

    def get_loan(self, loan_id: int) -> Optional[Loan]:
        """Return the Loan for loan_id, or None."""
        return self.loans.get(loan_id)

    def get_loan_details(self, loan_id: int) -> Result:
        """Return Ok(Loan) or LOAN_NOT_FOUND."""
        loan = self.loans.get(loan_id)
        if loan is None:
            return failure(ErrorCode.LOAN_NOT_FOUND)
        return success(loan)

    def get_interest_rate(self, loan_id: int) -> Result:
        """
        Return the rate override for loan_id.

        Returns LOAN_NOT_FOUND when no override was ever written, even if a
        Loan with this id exists in a registry that never seeded it.
        """
        rate = self.interest_rates.get(loan_id)
        if rate is None:
            return failure(ErrorCode.LOAN_NOT_FOUND)
        return success(rate)

    def get_compounding_frequency(self, loan_id: int) -> Result:
        """Return the frequency override for loan_id, or LOAN_NOT_FOUND."""
        frequency = self.compounding_frequencies.get(loan_id)
        if frequency is None:
            return failure(ErrorCode.LOAN_NOT_FOUND)
        return success(frequency)

    def list_loans(self) -> List[int]:
        """List all loan ids in ascending order."""
        return sorted(self.loans.keys())

    # ========================================================================
    # MUTATORS (admin only)
    # ========================================================================

    def initialize_loan(
        self,
        loan_id: int,
        principal: int,
        rate: int,
        frequency: int,
        *,
        caller: str,
        current_time: int,
    ) -> Result:
        """
        Create a loan and seed both override maps with its rate and frequency.

        Check order: caller is admin, principal, rate, frequency, loan id not
        yet present. The first failing check is returned and nothing is
        written.

        Args:
            loan_id: Key for the new loan
            principal: Fixed-point principal
            rate: Percent scaled by 100
            frequency: Compounding frequency, >= 1
            caller: Identity of the invoker
            current_time: Logical clock value, stored as start_time

        Returns:
            Ok(True), or NOT_AUTHORIZED / INVALID_PRINCIPAL / INVALID_RATE /
            INVALID_FREQUENCY / LOAN_ALREADY_EXISTS
        """
        if not self.is_admin(caller):
            logger.warning("[%s] initialize_loan rejected: %s is not admin", self.name, caller)
            return failure(ErrorCode.NOT_AUTHORIZED)

        error = first_failure(
            lambda: validate_principal(principal),
            lambda: validate_rate(rate),
            lambda: validate_frequency(frequency),
        )
        if error is not None:
            logger.debug("[%s] initialize_loan %s rejected: %s", self.name, loan_id, error.name)
            return failure(error)

        if loan_id in self.loans:
            logger.debug("[%s] initialize_loan rejected: loan %s exists", self.name, loan_id)
            return failure(ErrorCode.LOAN_ALREADY_EXISTS)

        loan = Loan(principal=principal, rate=rate, start_time=current_time, frequency=frequency)
        self.loans[loan_id] = loan
        self.interest_rates[loan_id] = rate
        self.compounding_frequencies[loan_id] = frequency
        logger.info(
            "[%s] loan %s created: principal=%d rate=%d frequency=%d start=%d",
            self.name, loan_id, principal, rate, frequency, current_time,
        )
        return success(True)

    def set_interest_rate(self, loan_id: int, new_rate: int, *, caller: str) -> Result:
        """
        Write or replace the rate override for loan_id.

        No Loan needs to exist for loan_id.
        """
        if not self.is_admin(caller):
            logger.warning("[%s] set_interest_rate rejected: %s is not admin", self.name, caller)
            return failure(ErrorCode.NOT_AUTHORIZED)

        error = validate_rate(new_rate)
        if error is not None:
            return failure(error)

        self.interest_rates[loan_id] = new_rate
        logger.info("[%s] interest rate override for %s set to %d", self.name, loan_id, new_rate)
        return success(True)

    def set_compounding_frequency(self, loan_id: int, new_frequency: int, *, caller: str) -> Result:
        """Write or replace the frequency override for loan_id."""
        if not self.is_admin(caller):
            logger.warning(
                "[%s] set_compounding_frequency rejected: %s is not admin", self.name, caller
            )
            return failure(ErrorCode.NOT_AUTHORIZED)

        error = validate_frequency(new_frequency)
        if error is not None:
            return failure(error)

        self.compounding_frequencies[loan_id] = new_frequency
        logger.info(
            "[%s] compounding frequency override for %s set to %d",
            self.name, loan_id, new_frequency,
        )
        return success(True)

    # ========================================================================
    # FORMULA DELEGATION
    # ========================================================================

    def update_loan_interest(self, loan_id: int, current_time: int) -> Result:
        """Compound interest accrued on a stored loan. See formulas.update_loan_interest."""
        return formulas.update_loan_interest(self, loan_id, current_time)

    # ========================================================================
    # SNAPSHOTS
    # ========================================================================

    def snapshot(self) -> Dict[str, Any]:
        """
        Plain-data copy of all registry state.

        The returned dict shares nothing mutable with the registry.
        """
        return {
            "name": self.name,
            "admin": self._admin,
            "loans": {loan_id: loan.to_dict() for loan_id, loan in self.loans.items()},
            "interest_rates": dict(self.interest_rates),
            "compounding_frequencies": dict(self.compounding_frequencies),
        }

    def state_digest(self) -> str:
        """
        Content hash of the admin identity and the three maps.

        Independent of insertion order and of the registry name, so two
        registries that processed the same writes agree.
        """
        state = self.snapshot()
        del state["name"]
        return compute_digest(state)

    def clone(self) -> LoanRegistry:
        """
        Create an independent copy of this registry.

        Loans are immutable and can be shared; the maps themselves are
        copied so writes to the clone never reach the original.
        """
        cloned = LoanRegistry.__new__(LoanRegistry)
        cloned.name = self.name
        cloned._admin = self._admin
        cloned.loans = dict(self.loans)
        cloned.interest_rates = dict(self.interest_rates)
        cloned.compounding_frequencies = dict(self.compounding_frequencies)
        return cloned

    def __repr__(self) -> str:
        return (
            f"LoanRegistry(name={self.name!r}, loans={len(self.loans)}, "
            f"rate_overrides={len(self.interest_rates)}, "
            f"frequency_overrides={len(self.compounding_frequencies)})"
        )
