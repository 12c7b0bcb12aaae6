"""Two-point line segment payout curve."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from dlc_engine.curves.base import PayoutCurve
from dlc_engine.errors import InvalidCurve
from dlc_engine.math.decimal_utils import high_precision, round_half_up, to_decimal
from dlc_engine.math.precision import split_coefficient
from dlc_engine.models.payout_function import PayoutPointModel, PolynomialPayoutCurvePiece


@dataclass(frozen=True)
class PayoutPoint:
    """A point (outcome, payout) on a payout curve."""

    outcome: int
    payout: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "payout", to_decimal(self.payout, "payout"))

    @classmethod
    def from_model(cls, point: PayoutPointModel) -> PayoutPoint:
        return cls(point.event_outcome, point.payout)

    def to_model(self) -> PayoutPointModel:
        """Encode the point; the payout keeps 16 fractional digits."""
        if self.payout < 0:
            raise InvalidCurve(f"Payout point at outcome {self.outcome} has negative payout")
        _, whole, extra = split_coefficient(self.payout)
        return PayoutPointModel(
            event_outcome=self.outcome,
            outcome_payout=whole,
            extra_precision=extra,
        )


@dataclass(frozen=True)
class LinePayoutCurve(PayoutCurve):
    """Line through two points.

        payout(x) = left.payout + (right.payout - left.payout)
                    * (x - left.outcome) / (right.outcome - left.outcome)

    The product is taken before the division so that integer-valued
    evaluations stay exact.
    """

    left: PayoutPoint
    right: PayoutPoint

    def __post_init__(self) -> None:
        if self.left.outcome == self.right.outcome:
            raise InvalidCurve(f"Line endpoints share the same outcome {self.left.outcome}")

    @classmethod
    def from_points(cls, points: Sequence[PayoutPoint]) -> LinePayoutCurve:
        """Build a line from exactly two points."""
        if len(points) != 2:
            raise InvalidCurve(f"A line payout curve needs exactly two points, got {len(points)}")
        return cls(points[0], points[1])

    @classmethod
    def from_piece(cls, piece: PolynomialPayoutCurvePiece) -> LinePayoutCurve:
        """Build a line from a two-point polynomial curve piece."""
        return cls.from_points([PayoutPoint.from_model(point) for point in piece.points])

    def to_piece(self) -> PolynomialPayoutCurvePiece:
        return PolynomialPayoutCurvePiece(points=[self.left.to_model(), self.right.to_model()])

    @property
    def slope(self) -> Decimal:
        with high_precision():
            return (self.right.payout - self.left.payout) / (self.right.outcome - self.left.outcome)

    def evaluate(self, outcome: int) -> Decimal:
        left, right = self.left, self.right
        with high_precision():
            rise = (right.payout - left.payout) * (outcome - left.outcome)
            return left.payout + rise / (right.outcome - left.outcome)

    def invert(self, payout: Decimal) -> int | None:
        left, right = self.left, self.right
        with high_precision():
            dy = right.payout - left.payout
            # Flat line: no unique outcome for any payout
            if dy == 0:
                return None
            outcome = left.outcome + (payout - left.payout) * (right.outcome - left.outcome) / dy
            if not outcome.is_finite():
                return None
            rounded = round_half_up(outcome)
        return rounded if rounded >= 0 else None
