"""
interest_engine - Deterministic Fixed-Point Interest Calculations

Interest and loan-economics formulas on scaled integers (SCALE = 1_000_000),
plus a small admin-gated registry of loans and per-loan overrides. No floating
point anywhere: every participant recomputing a result gets the same answer.

Usage:
    from interest_engine import LoanRegistry, simple_interest, ErrorCode

    simple_interest(1000, 5, 1)            # Ok(50)
    simple_interest(0, 5, 1).error         # ErrorCode.INVALID_PRINCIPAL

    registry = LoanRegistry(admin="ST1ADMIN")
    registry.initialize_loan(1, 1000, 5, 12, caller="ST1ADMIN", current_time=100)
    registry.update_loan_interest(1, current_time=112)
"""

__version__ = "0.1.0"

# Core types
from .core import (
    SCALE,
    UNIT,
    MAX_RATE,
    MAX_INTERMEDIATE_BITS,
    ErrorCode,
    Result,
    success,
    failure,
    Loan,
    LoanView,
    InterestEngineError,
    FixedPointOverflow,
    ConfigurationError,
    OperationFailed,
    compute_digest,
)

# Fixed-point primitives
from .fixed_point import (
    scaled_multiply,
    scaled_divide,
    add,
    saturating_subtract,
    pow_approx,
    checked_mul,
    checked_add,
)

# Validators
from .validators import (
    validate_principal,
    validate_rate,
    validate_periods,
    validate_frequency,
    first_failure,
)

# Formulas
from .formulas import (
    simple_interest,
    compound_interest,
    amortized_payment,
    update_loan_interest,
    effective_rate,
    future_value,
    present_value,
    accrued_interest_daily,
    accrued_interest_monthly,
    accrued_interest_annually,
)

# Registry
from .registry import LoanRegistry

# Configuration and logging
from .config import EngineConfig
from .logging import setup_logging, get_logger
