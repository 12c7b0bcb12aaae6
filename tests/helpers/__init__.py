"""Test helpers module for shared test utilities.

- constants: expected payout range tables
- factories: curve and rounding policy factory functions
"""

from tests.helpers.factories import (
    as_tuples,
    assert_partition,
    expected_payout,
    hyperbola,
    line,
    payout_point,
    payouts_by_outcome,
    ramp_piece,
    rounding_intervals,
    single_modulus,
)

__all__ = [
    "as_tuples",
    "assert_partition",
    "expected_payout",
    "hyperbola",
    "line",
    "payout_point",
    "payouts_by_outcome",
    "ramp_piece",
    "rounding_intervals",
    "single_modulus",
]
