"""Outcome compression and payout curve engine for numeric-outcome DLCs."""

from dlc_engine.cets import CetGroup, compute_cet_groups, contract_cet_groups, contract_payouts
from dlc_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from dlc_engine.curves import (
    HyperbolaPayoutCurve,
    LinePayoutCurve,
    PayoutCurve,
    PayoutPoint,
    curve_from_piece,
    curve_to_piece,
)
from dlc_engine.digits import decompose, recompose, separate_prefix
from dlc_engine.errors import (
    InvalidCurve,
    InvalidDomain,
    InvalidPayoutFunction,
    InvalidRoundingIntervals,
    NoValidOutcome,
    PayoutEngineError,
    PrecisionError,
    UnsupportedInversion,
)
from dlc_engine.grouping import group_by_ignoring_digits
from dlc_engine.math.precision import from_precision, get_precision
from dlc_engine.payout_function import compute_payouts
from dlc_engine.ranges import PayoutRange, merge_payouts, split_into_ranges
from dlc_engine.rounding import RoundingInterval, RoundingIntervals, round_payout

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "EngineConfig",
    "DEFAULT_ENGINE_CONFIG",
    # Digits and grouping
    "decompose",
    "recompose",
    "separate_prefix",
    "group_by_ignoring_digits",
    # Curves
    "PayoutCurve",
    "PayoutPoint",
    "LinePayoutCurve",
    "HyperbolaPayoutCurve",
    "curve_from_piece",
    "curve_to_piece",
    # Rounding and ranges
    "RoundingInterval",
    "RoundingIntervals",
    "round_payout",
    "PayoutRange",
    "split_into_ranges",
    "merge_payouts",
    "compute_payouts",
    # CETs
    "CetGroup",
    "compute_cet_groups",
    "contract_payouts",
    "contract_cet_groups",
    # Precision codec
    "get_precision",
    "from_precision",
    # Errors
    "PayoutEngineError",
    "InvalidDomain",
    "NoValidOutcome",
    "UnsupportedInversion",
    "InvalidCurve",
    "InvalidRoundingIntervals",
    "PrecisionError",
    "InvalidPayoutFunction",
]
