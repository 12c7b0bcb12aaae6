"""Rational hyperbola payout curve.

General six-coefficient family:

    u(x)      = (x - f1) + sqrt((x - f1)^2 - 4ab)
    payout(x) = c * u / (2a) + 2ad / u + f2

Every payoff shape built by this engine sets b = c = 0, which reduces the
family to the translated rectangular hyperbola

    payout(x) = a * d / (x - f1) + f2

defined for x > f1 and strictly monotonic there. Closed-form inversion is
provided for c = 0 only.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import ROUND_FLOOR, Decimal

from dlc_engine.config import DEFAULT_MAX_SCAN_STEPS
from dlc_engine.curves.base import PayoutCurve
from dlc_engine.errors import InvalidCurve, UnsupportedInversion
from dlc_engine.math.decimal_utils import (
    DECIMAL_INFINITY,
    DECIMAL_NAN,
    high_precision,
    round_half_up,
    to_decimal,
)
from dlc_engine.models.payout_function import HyperbolaPayoutCurvePiece
from dlc_engine.models.types import Coefficient

_COEFFICIENTS = ("a", "b", "c", "d", "translate_outcome", "translate_payout")


@dataclass(frozen=True)
class HyperbolaPayoutCurve(PayoutCurve):
    """Hyperbola payout curve piece.

    Attributes:
        a, b, c, d: Shape coefficients (a must be non-zero)
        translate_outcome: f1, horizontal translation
        translate_payout: f2, vertical translation
        use_positive_piece: Branch selector carried through (de)serialization
    """

    a: Decimal
    b: Decimal
    c: Decimal
    d: Decimal
    translate_outcome: Decimal
    translate_payout: Decimal
    use_positive_piece: bool = True

    def __post_init__(self) -> None:
        for name in _COEFFICIENTS:
            value = to_decimal(getattr(self, name), name)
            if not value.is_finite():
                raise InvalidCurve(f"Hyperbola coefficient {name} must be finite, got {value}")
            object.__setattr__(self, name, value)
        if self.a == 0:
            raise InvalidCurve("Hyperbola coefficient a must be non-zero")

    @classmethod
    def from_piece(cls, piece: HyperbolaPayoutCurvePiece) -> HyperbolaPayoutCurve:
        """Build a hyperbola from its decoded curve piece."""
        return cls(
            a=piece.a.to_decimal(),
            b=piece.b.to_decimal(),
            c=piece.c.to_decimal(),
            d=piece.d.to_decimal(),
            translate_outcome=piece.translate_outcome.to_decimal(),
            translate_payout=piece.translate_payout.to_decimal(),
            use_positive_piece=piece.use_positive_piece,
        )

    def to_piece(self) -> HyperbolaPayoutCurvePiece:
        encoded = {
            name: Coefficient.from_decimal(value) for name, value in self.coefficients().items()
        }
        return HyperbolaPayoutCurvePiece(use_positive_piece=self.use_positive_piece, **encoded)

    @property
    def is_rectangular(self) -> bool:
        """True for the b = c = 0 sub-family used by all payoff builders."""
        return self.b == 0 and self.c == 0

    def evaluate(self, outcome: int) -> Decimal:
        a, b, c, d = self.a, self.b, self.c, self.d
        with high_precision():
            shifted = Decimal(outcome) - self.translate_outcome
            discriminant = shifted * shifted - 4 * a * b
            if discriminant < 0:
                return DECIMAL_NAN
            u = shifted + discriminant.sqrt()
            if u == 0:
                # 2ad / 0: signed infinity, or 0 / 0
                numerator = a * d
                if numerator == 0:
                    return DECIMAL_NAN
                return DECIMAL_INFINITY if numerator > 0 else -DECIMAL_INFINITY
            return c * u / (2 * a) + 2 * a * d / u + self.translate_payout

    def invert(self, payout: Decimal) -> int | None:
        if self.c != 0:
            raise UnsupportedInversion("Hyperbola inversion is only supported for c = 0")

        a, b, d = self.a, self.b, self.d
        f1, f2 = self.translate_outcome, self.translate_payout
        y = payout
        with high_precision():
            denominator = d * (f2 - y)
            if denominator == 0:
                return None
            numerator = (
                -a * d * d
                - b * f2 * f2
                + 2 * b * f2 * y
                - b * y * y
                + d * f1 * f2
                - d * f1 * y
            )
            outcome = numerator / denominator
            if not outcome.is_finite():
                return None
            rounded = round_half_up(outcome)
        return rounded if rounded >= 0 else None

    def first_defined_outcome(
        self,
        lower: int,
        upper: int,
        max_steps: int = DEFAULT_MAX_SCAN_STEPS,
    ) -> int | None:
        if self.b != 0:
            return super().first_defined_outcome(lower, upper, max_steps)

        # b = 0: u = (x - f1) + |x - f1| is non-zero exactly when x > f1
        first = int(self.translate_outcome.to_integral_value(rounding=ROUND_FLOOR)) + 1
        first = max(lower, first)
        return first if first <= upper else None

    def coefficients(self) -> dict[str, Decimal]:
        """Coefficient values by field name."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name in _COEFFICIENTS}
