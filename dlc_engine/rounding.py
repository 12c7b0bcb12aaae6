"""Piecewise payout rounding policy.

A contract rounds payouts to multiples of a modulus that may change with the
outcome: coarse rounding where the curve is flat, fine rounding where
precision matters. Each rounding interval applies from its begin outcome up to
the next interval's begin.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from decimal import Decimal

from dlc_engine.errors import InvalidRoundingIntervals
from dlc_engine.math.decimal_utils import high_precision

# Modulus used before the first interval begins (no rounding)
NO_ROUNDING = 1


@dataclass(frozen=True)
class RoundingInterval:
    """Rounding modulus applying from begin_interval onwards."""

    begin_interval: int
    rounding_mod: int

    def __post_init__(self) -> None:
        if self.begin_interval < 0:
            raise InvalidRoundingIntervals(
                f"Rounding interval cannot begin at a negative outcome: {self.begin_interval}"
            )
        if self.rounding_mod <= 0:
            raise InvalidRoundingIntervals(
                f"Rounding modulus must be positive, got {self.rounding_mod}"
            )


class RoundingIntervals:
    """Ordered rounding policy.

    Holds a sorted copy of the given intervals; the caller's sequence is
    never reordered. When several intervals share a begin outcome, the one
    listed last wins.
    """

    __slots__ = ("_intervals", "_begins")

    def __init__(self, intervals: Iterable[RoundingInterval]) -> None:
        ordered = sorted(intervals, key=lambda interval: interval.begin_interval)
        if not ordered:
            raise InvalidRoundingIntervals("At least one rounding interval is required")
        self._intervals: tuple[RoundingInterval, ...] = tuple(ordered)
        self._begins: tuple[int, ...] = tuple(i.begin_interval for i in ordered)

    @classmethod
    def of(cls, intervals: RoundingIntervals | Iterable[RoundingInterval]) -> RoundingIntervals:
        """Accept either a policy or a plain sequence of intervals."""
        if isinstance(intervals, RoundingIntervals):
            return intervals
        return cls(intervals)

    def __iter__(self) -> Iterator[RoundingInterval]:
        return iter(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)

    def __repr__(self) -> str:
        return f"RoundingIntervals({list(self._intervals)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RoundingIntervals):
            return self._intervals == other._intervals
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._intervals)

    def modulus_at(self, outcome: int) -> int:
        """Effective rounding modulus at outcome."""
        index = bisect_right(self._begins, outcome)
        if index == 0:
            return NO_ROUNDING
        return self._intervals[index - 1].rounding_mod

    def segment_at(self, outcome: int, upper: int) -> tuple[int, int]:
        """Rounding segment containing outcome.

        Args:
            outcome: Outcome inside the segment
            upper: Exclusive bound capping the segment end

        Returns:
            (modulus, segment_end) where segment_end is the exclusive end of
            the segment: the next interval's begin, or upper
        """
        index = bisect_right(self._begins, outcome)
        modulus = self._intervals[index - 1].rounding_mod if index > 0 else NO_ROUNDING
        segment_end = self._begins[index] if index < len(self._begins) else upper
        return modulus, min(segment_end, upper)


def round_payout(payout: Decimal, modulus: int) -> int:
    """Round a payout to the nearest multiple of modulus.

    Ties go to the higher multiple:

        low  = payout - (payout mod modulus)
        high = low + modulus
        result = high if |payout - high| <= |payout - low| else low

    Raises:
        ValueError: If payout is not finite or modulus is not positive
    """
    if not payout.is_finite():
        raise ValueError(f"Cannot round non-finite payout {payout}")
    if modulus <= 0:
        raise ValueError(f"Rounding modulus must be positive, got {modulus}")

    with high_precision():
        remainder = payout % modulus
        # Decimal % keeps the dividend's sign; floor semantics needed
        if remainder < 0:
            remainder += modulus
        low = payout - remainder
        high = low + modulus
        rounded = high if abs(payout - high) <= abs(payout - low) else low
    return int(rounded)


__all__ = ["RoundingInterval", "RoundingIntervals", "round_payout", "NO_ROUNDING"]
