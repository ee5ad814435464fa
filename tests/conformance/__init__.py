"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the interest engine.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. determinism.py - Identical inputs give identical outputs and state
2. atomicity.py - Rejected writes leave the registry untouched
3. validation_precedence.py - The first failing check decides the error code
4. round_trip.py - Discounting then compounding loses at most one rounding step

These tests use hypothesis for property-based testing.
"""
