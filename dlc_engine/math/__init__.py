"""Mathematical utilities for the payout engine.

This package provides the numeric primitives shared by curves and rounding:
- high-precision Decimal context and helpers
- the 16-digit precision codec used by curve serialization
"""

from dlc_engine.math.decimal_utils import (
    DECIMAL_HIGH_PREC_CONTEXT,
    clamp_decimal,
    clamp_int,
    high_precision,
    round_half_up,
    to_decimal,
)
from dlc_engine.math.precision import (
    from_precision,
    get_precision,
    join_coefficient,
    split_coefficient,
)

__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "high_precision",
    "to_decimal",
    "round_half_up",
    "clamp_decimal",
    "clamp_int",
    "get_precision",
    "from_precision",
    "split_coefficient",
    "join_coefficient",
]
