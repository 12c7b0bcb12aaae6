"""Payout curve implementations.

Provides the two curve families a payout function piece can use:
- LinePayoutCurve: straight segment between two payout points
- HyperbolaPayoutCurve: rational hyperbola (inverse and options payoffs)
"""

from dlc_engine.curves.base import PayoutCurve
from dlc_engine.curves.hyperbola import HyperbolaPayoutCurve
from dlc_engine.curves.line import LinePayoutCurve, PayoutPoint
from dlc_engine.curves.parsing import curve_from_piece, curve_to_piece

__all__ = [
    "PayoutCurve",
    "PayoutPoint",
    "LinePayoutCurve",
    "HyperbolaPayoutCurve",
    "curve_from_piece",
    "curve_to_piece",
]
