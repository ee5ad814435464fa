"""
Core types and constants for the interest engine.

This module provides the foundational pieces shared by every other module:
1. Constants: fixed-point scale, rate bounds, intermediate width limit
2. Error codes and the tagged Result returned by every public operation
3. Exceptions: InterestEngineError and contract-violation error types
4. Immutable data structures: Loan
5. Protocols: LoanView for read-only registry access
6. Canonical serialization used for state digests

Expected failures (bad principal, unknown loan, ...) are never raised. They
travel as Result values carrying an ErrorCode. Exceptions are reserved for
programming-contract violations such as arithmetic overflow.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
import hashlib
from typing import Any, Dict, Optional, Protocol, runtime_checkable


# ============================================================================
# CONSTANTS
# ============================================================================

# Fixed-point scale: 1.0 is represented as 1_000_000.
SCALE = 1_000_000

# Raw integer one added to the per-period rate before exponentiation.
# Not multiplied by SCALE.
UNIT = 1

# Rates are percent scaled by 100 (500 = 5.00%). Upper bound is 20.00%.
MIN_RATE_EXCLUSIVE = 0
MAX_RATE = 2000

MIN_FREQUENCY = 1

# Divisors used to pro-rate a percent-scaled rate.
PERCENT = 100
MONTHS_PER_YEAR = 12
DAYS_PER_YEAR = 365

# Widest intermediate value any primitive may produce (2 MiB). Anything wider
# is an overflow and raises FixedPointOverflow. A one-plus-rate term is at
# most 45 bits wide, so this admits over 370,000 compounding events at any
# valid rate.
MAX_INTERMEDIATE_BITS = 1 << 24


# ============================================================================
# ERROR CODES
# ============================================================================

class ErrorCode(IntEnum):
    """
    Stable numeric failure codes.

    The numbers are part of the external contract and must not change.
    Gaps (106, 108-113) are intentional.
    """
    NOT_AUTHORIZED = 100
    INVALID_PRINCIPAL = 101
    INVALID_RATE = 102
    INVALID_PERIODS = 103
    INVALID_FREQUENCY = 104
    LOAN_NOT_FOUND = 105
    DIVISION_BY_ZERO = 107
    LOAN_ALREADY_EXISTS = 114


# ============================================================================
# EXCEPTIONS
# ============================================================================

class InterestEngineError(Exception):
    """Base exception for all interest engine errors."""
    pass


class FixedPointOverflow(InterestEngineError):
    """Raised when an intermediate value exceeds MAX_INTERMEDIATE_BITS."""
    pass


class ConfigurationError(InterestEngineError):
    """Raised when engine configuration is invalid or missing."""
    pass


class OperationFailed(InterestEngineError):
    """
    Raised by Result.unwrap() on a failed Result.

    Carries the ErrorCode and nothing else.
    """

    def __init__(self, code: ErrorCode):
        super().__init__(f"{code.name} ({int(code)})")
        self.code = code


# ============================================================================
# RESULT
# ============================================================================

@dataclass(frozen=True, slots=True)
class Result:
    """
    Outcome of a public operation.

    Attributes:
        ok: True on success.
        value: The success value, or the ErrorCode when ok is False.
    """
    ok: bool
    value: Any

    @property
    def error(self) -> Optional[ErrorCode]:
        """The failure code, or None for a successful result."""
        return None if self.ok else self.value

    def unwrap(self) -> Any:
        """
        Return the success value.

        Raises:
            OperationFailed: If this result is a failure.
        """
        if not self.ok:
            raise OperationFailed(self.value)
        return self.value

    def __repr__(self) -> str:
        if self.ok:
            return f"Ok({self.value!r})"
        return f"Err({self.value.name})"


def success(value: Any) -> Result:
    """Wrap a success value."""
    return Result(ok=True, value=value)


def failure(code: ErrorCode) -> Result:
    """Wrap a failure code."""
    return Result(ok=False, value=ErrorCode(code))


# ============================================================================
# LOAN
# ============================================================================

def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class Loan:
    """
    Immutable loan record - created once, never updated or deleted.

    Attributes:
        principal: Fixed-point principal amount.
        rate: Nominal rate, percent scaled by 100 (500 = 5.00%).
        start_time: Logical clock value (block height / sequence) at creation.
        frequency: Compounding periods per time unit, at least 1.
    """
    principal: int
    rate: int
    start_time: int
    frequency: int

    def __post_init__(self):
        for name in ("principal", "rate", "start_time", "frequency"):
            value = getattr(self, name)
            if not _is_int(value):
                raise ValueError(f"Loan {name} must be int, got {type(value).__name__}")
        if self.frequency < MIN_FREQUENCY:
            raise ValueError(f"Loan frequency must be >= {MIN_FREQUENCY}, got {self.frequency}")

    def to_dict(self) -> Dict[str, int]:
        return {
            "principal": self.principal,
            "rate": self.rate,
            "start_time": self.start_time,
            "frequency": self.frequency,
        }


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LoanView(Protocol):
    """
    Read-only access to stored loans.

    Formulas that need a stored loan take a LoanView, which declares that
    they cannot mutate registry state. LoanRegistry implements it; tests use
    a lightweight fake.
    """

    def get_loan(self, loan_id: int) -> Optional[Loan]:
        """Return the Loan for loan_id, or None if it was never created."""
        ...


# ============================================================================
# CANONICAL SERIALIZATION
# ============================================================================

def _canonicalize(value: Any) -> str:
    """
    Produce a canonical string representation of a value for hashing.

    Dict keys and set members are sorted so insertion order never changes
    the output.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return f"N:{value}"
    if isinstance(value, str):
        return f"S:{value}"
    if isinstance(value, Loan):
        return f"L:{_canonicalize(value.to_dict())}"
    if isinstance(value, dict):
        items = sorted(value.items(), key=lambda kv: _canonicalize(kv[0]))
        serialized = ",".join(f"{_canonicalize(k)}:{_canonicalize(v)}" for k, v in items)
        return f"{{{serialized}}}"
    if isinstance(value, (list, tuple)):
        serialized = ",".join(_canonicalize(item) for item in value)
        return f"[{serialized}]"
    if isinstance(value, (set, frozenset)):
        serialized = ",".join(sorted(_canonicalize(item) for item in value))
        return f"<{serialized}>"
    return f"R:{repr(value)}"


def compute_digest(value: Any) -> str:
    """Return a 16 hex character SHA-256 digest of the canonical form of value."""
    return hashlib.sha256(_canonicalize(value).encode()).hexdigest()[:16]
