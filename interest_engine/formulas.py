"""
formulas.py - Interest and Valuation Formulas

Pure functions built on the fixed-point primitives. Every function:
- Takes plain ints (FixedPoint amounts, percent-scaled rates, counts)
- Validates its parameters in declaration order, stopping at the first failure
- Returns a Result: the computed value, or the ErrorCode of the failure

Rates are percent scaled by 100: a rate of 5 becomes 0.05 after the internal
scaled_divide(rate, 100). The one-plus-rate term adds the raw integer UNIT,
not SCALE, and pow_approx multiplies without rescaling. Results therefore
follow the reference magnitudes bit for bit rather than textbook ones.

Key Formulas:
    simple    = scaled_multiply(principal * rate * time, scaled_divide(1, 100))
    compound  = principal * (1 + r/f)^(n*f) - principal
    amortized = principal * m * (1 + m)^n / ((1 + m)^n - 1),  m = rate / 1200
    effective = ((1 + r/f)^(f*n) - 1) * 100
    future    = principal * (1 + r/f)^(n*f)
    present   = future / (1 + r/f)^(n*f)
"""

from __future__ import annotations

from .core import (
    ErrorCode, LoanView, Result,
    UNIT, PERCENT, MONTHS_PER_YEAR, DAYS_PER_YEAR,
    success, failure,
)
from .fixed_point import (
    add, checked_mul, pow_approx, saturating_subtract,
    scaled_divide, scaled_multiply,
)
from .logging import get_logger
from .validators import (
    first_failure,
    validate_frequency, validate_periods, validate_principal, validate_rate,
)


logger = get_logger(__name__)


# ============================================================================
# SHARED TERMS
# ============================================================================

def _one_plus_periodic_rate(rate: int, frequency: int) -> int:
    """UNIT + (rate / 100) / frequency, in fixed point."""
    rate_fixed = scaled_divide(rate, PERCENT)
    return add(UNIT, scaled_divide(rate_fixed, frequency))


# ============================================================================
# SIMPLE AND COMPOUND INTEREST
# ============================================================================

def simple_interest(principal: int, rate: int, time: int) -> Result:
    """
    Non-compounding interest over `time` periods.

    The product principal * rate * time is raw integer multiplication; only
    the final step is fixed point.

    Example:
        simple_interest(1000, 5, 1)  # Ok(50)
    """
    error = first_failure(
        lambda: validate_principal(principal),
        lambda: validate_rate(rate),
        lambda: validate_periods(time),
    )
    if error is not None:
        return failure(error)

    raw = checked_mul(checked_mul(principal, rate), time)
    return success(scaled_multiply(raw, scaled_divide(1, PERCENT)))


def compound_interest(principal: int, rate: int, periods: int, frequency: int) -> Result:
    """
    Interest earned (not the final balance) when compounding `frequency`
    times per period for `periods` periods.

    Args:
        principal: Fixed-point principal
        rate: Percent scaled by 100
        periods: Number of periods
        frequency: Compounding events per period

    Returns:
        Ok(interest) clamped at zero, or the first validation failure.
    """
    error = first_failure(
        lambda: validate_principal(principal),
        lambda: validate_rate(rate),
        lambda: validate_periods(periods),
        lambda: validate_frequency(frequency),
    )
    if error is not None:
        return failure(error)

    one_plus_rate = _one_plus_periodic_rate(rate, frequency)
    compounded = pow_approx(one_plus_rate, checked_mul(periods, frequency))
    return success(saturating_subtract(scaled_multiply(principal, compounded), principal))


def amortized_payment(principal: int, rate: int, periods: int) -> Result:
    """
    Level payment per month that retires `principal` over `periods` months.

    Returns DIVISION_BY_ZERO when the growth term collapses to UNIT, which
    leaves nothing to divide by.
    """
    error = first_failure(
        lambda: validate_principal(principal),
        lambda: validate_rate(rate),
        lambda: validate_periods(periods),
    )
    if error is not None:
        return failure(error)

    monthly_rate = scaled_divide(rate, PERCENT * MONTHS_PER_YEAR)
    one_plus_rate = add(UNIT, monthly_rate)
    pow_term = pow_approx(one_plus_rate, periods)
    numerator = scaled_multiply(principal, scaled_multiply(monthly_rate, pow_term))
    denominator = saturating_subtract(pow_term, UNIT)
    if denominator == 0:
        logger.debug("amortized_payment: growth term collapsed to unit (periods=%d)", periods)
        return failure(ErrorCode.DIVISION_BY_ZERO)
    return success(scaled_divide(numerator, denominator))


def update_loan_interest(view: LoanView, loan_id: int, current_time: int) -> Result:
    """
    Compound interest accrued on a stored loan up to `current_time`.

    Reads the rate and frequency embedded in the Loan record, not the
    override maps. Whole compounding periods elapsed are
    floor((current_time - start_time) / frequency).

    Args:
        view: Read-only loan access
        loan_id: Loan to evaluate
        current_time: Logical clock value of the call

    Returns:
        Ok(interest), LOAN_NOT_FOUND, INVALID_PERIODS when no time has
        elapsed, or any failure from compound_interest.
    """
    loan = view.get_loan(loan_id)
    if loan is None:
        return failure(ErrorCode.LOAN_NOT_FOUND)

    time_elapsed = current_time - loan.start_time
    error = validate_periods(time_elapsed)
    if error is not None:
        return failure(error)

    return compound_interest(
        loan.principal,
        loan.rate,
        time_elapsed // loan.frequency,
        loan.frequency,
    )


# ============================================================================
# RATE AND TIME-VALUE FORMULAS
# ============================================================================

def effective_rate(nominal_rate: int, frequency: int, periods: int) -> Result:
    """Effective rate after compounding, re-expressed as a percent-scaled value."""
    error = first_failure(
        lambda: validate_rate(nominal_rate),
        lambda: validate_frequency(frequency),
        lambda: validate_periods(periods),
    )
    if error is not None:
        return failure(error)

    one_plus_rate = _one_plus_periodic_rate(nominal_rate, frequency)
    effective = saturating_subtract(
        pow_approx(one_plus_rate, checked_mul(frequency, periods)), UNIT
    )
    return success(scaled_multiply(effective, PERCENT))


def future_value(principal: int, rate: int, periods: int, frequency: int) -> Result:
    """Balance after compounding: principal times the growth term."""
    error = first_failure(
        lambda: validate_principal(principal),
        lambda: validate_rate(rate),
        lambda: validate_periods(periods),
        lambda: validate_frequency(frequency),
    )
    if error is not None:
        return failure(error)

    one_plus_rate = _one_plus_periodic_rate(rate, frequency)
    return success(
        scaled_multiply(principal, pow_approx(one_plus_rate, checked_mul(periods, frequency)))
    )


def present_value(future_amount: int, rate: int, periods: int, frequency: int) -> Result:
    """
    Discount a future amount back over `periods` periods.

    The future amount is checked with the principal rule, so a non-positive
    amount reports INVALID_PRINCIPAL.

    Note: present_value followed by future_value does not round-trip exactly.
    Each step floors, so the reconstructed amount may fall short by up to
    discount_factor // SCALE + 1.
    """
    error = first_failure(
        lambda: validate_principal(future_amount),
        lambda: validate_rate(rate),
        lambda: validate_periods(periods),
        lambda: validate_frequency(frequency),
    )
    if error is not None:
        return failure(error)

    one_plus_rate = _one_plus_periodic_rate(rate, frequency)
    discount_factor = pow_approx(one_plus_rate, checked_mul(periods, frequency))
    if discount_factor == 0:
        logger.debug("present_value: zero discount factor")
        return failure(ErrorCode.DIVISION_BY_ZERO)
    return success(scaled_divide(future_amount, discount_factor))


# ============================================================================
# ACCRUED INTEREST (linear, non-compounding)
# ============================================================================

def _accrued_interest(principal: int, rate: int, count: int, divisor: int) -> Result:
    error = first_failure(
        lambda: validate_principal(principal),
        lambda: validate_rate(rate),
        lambda: validate_periods(count),
    )
    if error is not None:
        return failure(error)

    period_rate = scaled_divide(rate, divisor)
    return success(scaled_multiply(principal, scaled_multiply(period_rate, count)))


def accrued_interest_daily(principal: int, rate: int, days: int) -> Result:
    """Linear accrual at rate / (100 * 365) per day."""
    return _accrued_interest(principal, rate, days, PERCENT * DAYS_PER_YEAR)


def accrued_interest_monthly(principal: int, rate: int, months: int) -> Result:
    """Linear accrual at rate / (100 * 12) per month."""
    return _accrued_interest(principal, rate, months, PERCENT * MONTHS_PER_YEAR)


def accrued_interest_annually(principal: int, rate: int, years: int) -> Result:
    """Linear accrual at rate / 100 per year."""
    return _accrued_interest(principal, rate, years, PERCENT)
