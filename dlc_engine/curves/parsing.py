"""Payout curve piece parsing.

Functions to turn decoded curve piece models into evaluable curves and back.
"""

from __future__ import annotations

from dlc_engine.curves.base import PayoutCurve
from dlc_engine.curves.hyperbola import HyperbolaPayoutCurve
from dlc_engine.curves.line import LinePayoutCurve
from dlc_engine.errors import InvalidCurve
from dlc_engine.models.payout_function import (
    HyperbolaPayoutCurvePiece,
    PayoutCurvePiece,
    PolynomialPayoutCurvePiece,
)


def curve_from_piece(piece: PayoutCurvePiece) -> PayoutCurve:
    """Build the curve described by a payout curve piece.

    Raises:
        InvalidCurve: If the piece is not a two-point polynomial or a hyperbola
            with usable coefficients
    """
    if isinstance(piece, PolynomialPayoutCurvePiece):
        return LinePayoutCurve.from_piece(piece)
    if isinstance(piece, HyperbolaPayoutCurvePiece):
        return HyperbolaPayoutCurve.from_piece(piece)
    raise InvalidCurve(f"Unknown payout curve piece: {type(piece).__name__}")


def curve_to_piece(curve: PayoutCurve) -> PayoutCurvePiece:
    """Encode a curve as its payout curve piece."""
    return curve.to_piece()
