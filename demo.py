#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: Learn the Interest Engine Step by Step

This is a pedagogical walk through the fixed-point interest engine.
Each step builds on the previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1-3:  Fixed Point     - Scaled integers, floor truncation, raw powers
  4-7:  Formulas        - Simple, compound, amortized, effective, PV/FV, accrual
  8-11: The Registry    - Admin-gated loans, overrides, accrual over time
  12:   Determinism     - Clones, replay and state digests

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing

Logging is configured from the environment (LOG_LEVEL, LOG_FORMAT);
INTEREST_ENGINE_ADMIN overrides the demo admin identity.
"""

from dataclasses import dataclass
import os
import sys

from interest_engine import (
    # Fixed point
    SCALE, UNIT, scaled_multiply, scaled_divide, saturating_subtract, pow_approx,
    # Formulas
    simple_interest, compound_interest, amortized_payment, effective_rate,
    future_value, present_value,
    accrued_interest_daily, accrued_interest_monthly, accrued_interest_annually,
    # Registry and errors
    LoanRegistry, ErrorCode, OperationFailed,
    # Ambient
    EngineConfig, setup_logging,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the tutorial. Modify these to experiment."""
    admin: str = "ST1ADMIN"
    outsider: str = "ST2USER"

    # Reference loan
    loan_id: int = 1
    principal: int = 1000
    rate: int = 5
    frequency: int = 12
    start_time: int = 100


CONFIG = DemoConfig()

# Global state for interactive mode
QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    """Print a step header with learning objective."""
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    """Print a section header within a step."""
    print(f"\n--- {text} ---\n")


# ============================================================================
# PHASE 1: FIXED POINT (Steps 1-3)
# ============================================================================

def step_01_scaled_integers():
    step_header(1, "Scaled Integers",
        "See how fractions are stored as integers scaled by 1,000,000.")

    print(f"SCALE = {SCALE:,}")
    print(">>> scaled_divide(5, 100)   # 5 / 100 in fixed point")
    print(f"    {scaled_divide(5, 100):,}  (represents 0.05)")
    print(">>> scaled_multiply(2 * SCALE, 3 * SCALE)")
    print(f"    {scaled_multiply(2 * SCALE, 3 * SCALE):,}  (represents 6.0)")

    section_header("Key Insight")
    print("""
    There is no floating point anywhere. Every node that recomputes a value
    gets exactly the same integer.
    """)


def step_02_truncation():
    step_header(2, "Floor Truncation",
        "Every division rounds down, and subtraction never goes negative.")

    print(">>> scaled_divide(2, 3)")
    print(f"    {scaled_divide(2, 3):,}  (0.666666..., truncated)")
    print(">>> scaled_multiply(999_999, 1)")
    print(f"    {scaled_multiply(999_999, 1)}  (too small to survive the floor)")
    print(">>> saturating_subtract(3, 10)")
    print(f"    {saturating_subtract(3, 10)}  (clamped at zero)")


def step_03_raw_powers():
    step_header(3, "Raw Powers",
        "pow_approx multiplies raw integers; it does not rescale by SCALE.")

    one_plus_rate = UNIT + scaled_divide(scaled_divide(CONFIG.rate, 100), 1)
    print(f"UNIT = {UNIT}")
    print(f"one_plus_rate for 5% annual = {one_plus_rate:,}")
    print(f">>> pow_approx(one_plus_rate, 2) = {pow_approx(one_plus_rate, 2):,}")

    section_header("Key Insight")
    print("""
    Because UNIT is the raw integer 1 and powers are not rescaled, results are
    large compared with textbook interest. They are reproducible bit for bit,
    which is the property that matters here.
    """)


# ============================================================================
# PHASE 2: FORMULAS (Steps 4-7)
# ============================================================================

def step_04_simple_and_compound():
    step_header(4, "Simple and Compound Interest",
        "Compute interest and learn how failures are reported.")

    print(">>> simple_interest(1000, 5, 1)")
    print(f"    {simple_interest(1000, 5, 1)}")
    print(">>> compound_interest(1000, 5, 1, 1)")
    print(f"    {compound_interest(1000, 5, 1, 1)}")

    section_header("Failures are values")
    print(">>> simple_interest(0, 5, 1)")
    result = simple_interest(0, 5, 1)
    print(f"    {result}  code={int(result.error)}")

    print(">>> compound_interest(0, 0, 0, 0)   # first failing check wins")
    print(f"    {compound_interest(0, 0, 0, 0)}")

    section_header("unwrap() raises on failure")
    try:
        simple_interest(1000, 2001, 1).unwrap()
    except OperationFailed as e:
        print(f"    OperationFailed: {e}")


def step_05_amortized():
    step_header(5, "Amortized Payment",
        "Level monthly payment for a loan.")

    print(">>> amortized_payment(1_000_000, 1200, 1)")
    print(f"    {amortized_payment(1_000_000, 1200, 1)}")
    print(">>> amortized_payment(1000, 5, 1)   # truncates to zero")
    print(f"    {amortized_payment(1000, 5, 1)}")


def step_06_rates_and_values():
    step_header(6, "Effective Rate, Future and Present Value",
        "Re-express a nominal rate and move money through time.")

    print(f">>> effective_rate(5, 12, 1)       -> {effective_rate(5, 12, 1)}")
    print(f">>> future_value(1000, 5, 1, 12)   -> {future_value(1000, 5, 1, 12)}")
    print(f">>> present_value(1050, 5, 1, 1)   -> {present_value(1050, 5, 1, 1)}")

    section_header("Round trip")
    pv = present_value(100_000_000_000, 5, 1, 1).unwrap()
    fv = future_value(pv, 5, 1, 1).unwrap()
    print(f"present_value(100,000,000,000) = {pv:,}")
    print(f"future_value of that           = {fv:,}")
    print("Each step floors, so the round trip can only fall short.")


def step_07_accrual():
    step_header(7, "Linear Accrual",
        "Accrue interest per day, month or year without compounding.")

    print(f">>> accrued_interest_daily(1_000_000_000, 1825, 20)   -> "
          f"{accrued_interest_daily(1_000_000_000, 1825, 20)}")
    print(f">>> accrued_interest_monthly(1_000_000_000, 1200, 3)  -> "
          f"{accrued_interest_monthly(1_000_000_000, 1200, 3)}")
    print(f">>> accrued_interest_annually(1_000_000_000, 500, 2)  -> "
          f"{accrued_interest_annually(1_000_000_000, 500, 2)}")


# ============================================================================
# PHASE 3: THE REGISTRY (Steps 8-11)
# ============================================================================

def step_08_create_registry() -> LoanRegistry:
    step_header(8, "The Registry",
        "Create an admin-gated registry from configuration.")

    config = EngineConfig(admin=os.getenv("INTEREST_ENGINE_ADMIN", CONFIG.admin), name="tutorial")
    registry = LoanRegistry.from_config(config)
    print(f">>> registry = LoanRegistry.from_config(EngineConfig(admin={config.admin!r}))")
    print(f"    {registry!r}")
    return registry


def step_09_initialize_loan(registry: LoanRegistry) -> LoanRegistry:
    step_header(9, "Creating a Loan",
        "Only the admin may create loans, and each id is used once.")

    print(f">>> registry.initialize_loan({CONFIG.loan_id}, {CONFIG.principal}, {CONFIG.rate}, "
          f"{CONFIG.frequency}, caller={registry.admin!r}, current_time={CONFIG.start_time})")
    print("    " + repr(registry.initialize_loan(
        CONFIG.loan_id, CONFIG.principal, CONFIG.rate, CONFIG.frequency,
        caller=registry.admin, current_time=CONFIG.start_time,
    )))

    section_header("Rejections")
    outsider = registry.initialize_loan(2, 1000, 5, 12, caller=CONFIG.outsider,
                                        current_time=CONFIG.start_time)
    print(f"Outsider creates a loan:  {outsider}")
    duplicate = registry.initialize_loan(CONFIG.loan_id, 2000, 6, 4, caller=registry.admin,
                                         current_time=CONFIG.start_time)
    print(f"Duplicate id:             {duplicate}")

    section_header("Stored record")
    print(f"get_loan_details(1) -> {registry.get_loan_details(CONFIG.loan_id)}")
    return registry


def step_10_overrides(registry: LoanRegistry) -> LoanRegistry:
    step_header(10, "Overrides",
        "Rate and frequency overrides live beside the loan, not inside it.")

    print(f"Seeded rate override:      {registry.get_interest_rate(CONFIG.loan_id)}")
    registry.set_interest_rate(CONFIG.loan_id, 6, caller=registry.admin)
    registry.set_compounding_frequency(CONFIG.loan_id, 4, caller=registry.admin)
    print(f"After set_interest_rate:   {registry.get_interest_rate(CONFIG.loan_id)}")
    print(f"After set_frequency:       {registry.get_compounding_frequency(CONFIG.loan_id)}")
    print(f"Loan record unchanged:     {registry.get_loan(CONFIG.loan_id)}")

    denied = registry.set_interest_rate(CONFIG.loan_id, 7, caller=CONFIG.outsider)
    print(f"Outsider override:         {denied}")
    return registry


def step_11_accrue_over_time(registry: LoanRegistry) -> LoanRegistry:
    step_header(11, "Accruing Over Time",
        "Interest depends on whole compounding periods elapsed since creation.")

    for elapsed in (0, 5, 12, 24, 36):
        now = CONFIG.start_time + elapsed
        print(f"current_time={now:<4} -> {registry.update_loan_interest(CONFIG.loan_id, now)}")
    print(f"Unknown loan          -> {registry.update_loan_interest(99, 200)}")
    return registry


# ============================================================================
# PHASE 4: DETERMINISM (Step 12)
# ============================================================================

def step_12_determinism(registry: LoanRegistry):
    step_header(12, "Determinism",
        "Replaying the same writes on a clone reaches the same state digest.")

    cloned = registry.clone()
    for target in (registry, cloned):
        target.initialize_loan(2, 5000, 10, 1, caller=target.admin, current_time=150)
        target.set_compounding_frequency(3, 2, caller=target.admin)

    print(f"original digest: {registry.state_digest()}")
    print(f"clone digest:    {cloned.state_digest()}")
    print(f"loans:           {registry.list_loans()}")
    assert registry.state_digest() == cloned.state_digest()


def main():
    """Run the complete tutorial."""
    setup_logging(
        level=os.getenv("LOG_LEVEL", "WARNING"),
        format_type=os.getenv("LOG_FORMAT", "standard"),
    )

    print("=" * 70)
    print("       INTEREST ENGINE - INTERACTIVE TUTORIAL")
    print("=" * 70)

    if QUICK_MODE:
        print("Running in QUICK mode (no pauses)")
    else:
        print("Running in INTERACTIVE mode (press Enter to advance)")

    wait_for_enter()

    # Phase 1: Fixed point
    step_01_scaled_integers()
    wait_for_enter()
    step_02_truncation()
    wait_for_enter()
    step_03_raw_powers()
    wait_for_enter()

    # Phase 2: Formulas
    step_04_simple_and_compound()
    wait_for_enter()
    step_05_amortized()
    wait_for_enter()
    step_06_rates_and_values()
    wait_for_enter()
    step_07_accrual()
    wait_for_enter()

    # Phase 3: Registry
    registry = step_08_create_registry()
    wait_for_enter()
    registry = step_09_initialize_loan(registry)
    wait_for_enter()
    registry = step_10_overrides(registry)
    wait_for_enter()
    registry = step_11_accrue_over_time(registry)
    wait_for_enter()

    # Phase 4: Determinism
    step_12_determinism(registry)

    print("\n" + "=" * 70)
    print("       TUTORIAL COMPLETE!")
    print("=" * 70)
    print(f"""
    Error codes you met along the way:
      {', '.join(f'{code.name}={int(code)}' for code in ErrorCode)}

    Next steps:
      - Run tests: pytest tests/
    """)


if __name__ == "__main__":
    main()
