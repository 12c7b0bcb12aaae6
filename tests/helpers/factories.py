"""Factory functions for creating test curves and rounding policies.

Usage:
    from tests.helpers.factories import hyperbola, single_modulus

    curve = hyperbola(a=1, d=500000)
"""

from decimal import Decimal

from dlc_engine.curves import HyperbolaPayoutCurve, LinePayoutCurve, PayoutCurve, PayoutPoint
from dlc_engine.math.decimal_utils import clamp_int
from dlc_engine.ranges import PayoutRange
from dlc_engine.rounding import RoundingInterval, RoundingIntervals, round_payout


def single_modulus(modulus: int) -> RoundingIntervals:
    """Rounding policy applying one modulus everywhere."""
    return RoundingIntervals([RoundingInterval(0, modulus)])


def rounding_intervals(*pairs: tuple[int, int]) -> RoundingIntervals:
    """Rounding policy from (begin_interval, rounding_mod) pairs."""
    return RoundingIntervals(RoundingInterval(begin, mod) for begin, mod in pairs)


def hyperbola(
    a: int | str = 1,
    d: int | str = 500000,
    translate_outcome: int | str = 0,
    translate_payout: int | str = 0,
) -> HyperbolaPayoutCurve:
    """Rectangular hyperbola payout(x) = a * d / (x - f1) + f2."""
    return HyperbolaPayoutCurve(
        a=Decimal(a),
        b=Decimal(0),
        c=Decimal(0),
        d=Decimal(d),
        translate_outcome=Decimal(translate_outcome),
        translate_payout=Decimal(translate_payout),
    )


def line(x0: int, y0: int | str, x1: int, y1: int | str) -> LinePayoutCurve:
    """Line through (x0, y0) and (x1, y1)."""
    return LinePayoutCurve(PayoutPoint(x0, Decimal(y0)), PayoutPoint(x1, Decimal(y1)))


def as_tuples(ranges: list[PayoutRange]) -> list[tuple[int, int, int]]:
    """(payout, index_from, index_to) triples, for compact expectations."""
    return [(r.payout, r.index_from, r.index_to) for r in ranges]


def assert_partition(ranges: list[PayoutRange], first: int, last: int) -> None:
    """Ranges are ascending and contiguous, covering exactly [first, last]."""
    assert ranges[0].index_from == first
    assert ranges[-1].index_to == last
    for rng in ranges:
        assert rng.index_from <= rng.index_to
    for prev, cur in zip(ranges, ranges[1:]):
        assert cur.index_from == prev.index_to + 1


def expected_payout(
    curve: PayoutCurve,
    policy: RoundingIntervals,
    total_collateral: int,
    outcome: int,
) -> int:
    """Payout of one outcome computed directly: round the curve value, then clamp."""
    value = curve.evaluate(outcome)
    if value.is_infinite():
        return total_collateral if value > 0 else 0
    rounded = round_payout(value, policy.modulus_at(outcome))
    return clamp_int(rounded, 0, total_collateral)


def payouts_by_outcome(ranges: list[PayoutRange]) -> list[int]:
    """Expand ranges into one payout per outcome."""
    return [rng.payout for rng in ranges for _ in range(rng.size)]


def payout_point(outcome: int, payout: int | str, extra_precision: int = 0) -> dict:
    """Wire payload of a payout point."""
    return {"eventOutcome": outcome, "outcomePayout": payout, "extraPrecision": extra_precision}


def ramp_piece(x0: int, y0: int, x1: int, y1: int) -> dict:
    """Wire payload of a straight piece from (x0, y0) to (x1, y1)."""
    return {
        "endPoint": payout_point(x1, y1),
        "payoutCurvePiece": {
            "type": "polynomial",
            "points": [payout_point(x0, y0), payout_point(x1, y1)],
        },
    }
