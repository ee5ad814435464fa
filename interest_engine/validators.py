"""
validators.py - Input Range Checks

Each validator is a pure, total function: it returns None when the value is
acceptable and the matching ErrorCode otherwise. Formulas compose them with
first_failure(), which stops at the first failing check so the reported code
follows parameter declaration order.
"""

from __future__ import annotations
from typing import Callable, Optional

from .core import ErrorCode, MAX_RATE, MIN_RATE_EXCLUSIVE, MIN_FREQUENCY


Check = Callable[[], Optional[ErrorCode]]


def validate_principal(principal: int) -> Optional[ErrorCode]:
    """Principal must be strictly positive."""
    if principal <= 0:
        return ErrorCode.INVALID_PRINCIPAL
    return None


def validate_rate(rate: int) -> Optional[ErrorCode]:
    """Rate must lie in (0, MAX_RATE], i.e. above 0% and at most 20.00%."""
    if rate <= MIN_RATE_EXCLUSIVE or rate > MAX_RATE:
        return ErrorCode.INVALID_RATE
    return None


def validate_periods(periods: int) -> Optional[ErrorCode]:
    """Period count (or elapsed time) must be strictly positive."""
    if periods <= 0:
        return ErrorCode.INVALID_PERIODS
    return None


def validate_frequency(frequency: int) -> Optional[ErrorCode]:
    """Compounding frequency must be at least one per period."""
    if frequency < MIN_FREQUENCY:
        return ErrorCode.INVALID_FREQUENCY
    return None


def first_failure(*checks: Check) -> Optional[ErrorCode]:
    """
    Run checks in order and return the first failure code.

    Checks are zero-argument callables so that later checks are never
    evaluated once one has failed.

    Example:
        error = first_failure(
            lambda: validate_principal(principal),
            lambda: validate_rate(rate),
        )
    """
    for check in checks:
        code = check()
        if code is not None:
            return code
    return None
