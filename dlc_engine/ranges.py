"""Rounding-aware payout range computation.

Walks a payout curve together with a rounding policy and emits the ordered
list of outcome ranges over which the rounded payout is constant. Instead of
evaluating every outcome, the curve is inverted at the midpoint between the
current rounded payout and its neighbour, which is exactly where the rounded
payout changes. The work done is proportional to the number of payout steps
(about total_collateral / modulus), not to the size of the outcome domain:
a domain of 2^62 price outcomes with 10^8 satoshis of collateral costs a few
thousand curve evaluations.

Payouts are rounded first and clamped to [0, total_collateral] afterwards.
All rounded levels at or above the collateral pay the same capped amount,
so the walk treats them as a single level, and likewise below zero.

Requirements on the curve: monotonic over the outcomes where it is defined,
and defined on a suffix of the domain. Both curve families satisfy this.
"""

from __future__ import annotations

import decimal
from collections.abc import Iterable
from dataclasses import dataclass, replace
from decimal import Decimal

import structlog

from dlc_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from dlc_engine.curves.base import PayoutCurve
from dlc_engine.errors import InvalidDomain, NoValidOutcome
from dlc_engine.math.decimal_utils import clamp_decimal, clamp_int
from dlc_engine.rounding import RoundingInterval, RoundingIntervals, round_payout

logger = structlog.get_logger()


@dataclass(frozen=True)
class PayoutRange:
    """Inclusive outcome range [index_from, index_to] paying a constant payout."""

    index_from: int
    index_to: int
    payout: int

    @property
    def size(self) -> int:
        """Number of outcomes in the range."""
        return self.index_to - self.index_from + 1


def _cap_level(modulus: int, total_collateral: int) -> int:
    """Smallest multiple of modulus at or above the collateral."""
    return -(-total_collateral // modulus) * modulus


def _curve_value(curve: PayoutCurve, outcome: int) -> Decimal:
    value = curve.evaluate(outcome)
    if value.is_nan():
        raise NoValidOutcome(f"Payout curve is undefined at outcome {outcome}")
    return value


def _payout_level(value: Decimal, modulus: int, cap: int) -> int:
    """Rounded payout level of a raw curve value.

    Every level at or above cap pays the full collateral and every level at
    or below zero pays nothing, so they collapse into cap and 0. Infinite
    values land on those two levels directly.
    """
    if value.is_infinite():
        return int(clamp_decimal(value, 0, cap))
    return clamp_int(round_payout(value, modulus), 0, cap)


def _resolve_payout(curve: PayoutCurve, outcome: int, modulus: int, total_collateral: int) -> int:
    """Curve payout at outcome, rounded to modulus and then clamped to the collateral."""
    level = _payout_level(
        _curve_value(curve, outcome), modulus, _cap_level(modulus, total_collateral)
    )
    return min(level, total_collateral)


def _boundary_outcome(curve: PayoutCurve, midpoint: Decimal, ascending: bool) -> int | None:
    """Last outcome whose payout still rounds to the current payout.

    Rounding ties go to the higher multiple, so an outcome paying exactly
    the midpoint belongs to the lower range on an ascending curve and to the
    upper range on a descending one.

    Returns:
        The boundary outcome, or None if the midpoint is never reached
    """
    candidate = curve.invert(midpoint)
    if candidate is None:
        return None
    value = curve.evaluate(candidate)
    if value.is_nan():
        return None
    crossed = value >= midpoint if ascending else value < midpoint
    return candidate - 1 if crossed else candidate


def _split_segment(
    curve: PayoutCurve,
    current: int,
    segment_end: int,
    modulus: int,
    total_collateral: int,
) -> list[PayoutRange]:
    """Split [current, segment_end) where a single rounding modulus applies."""
    ranges: list[PayoutRange] = []
    cap = _cap_level(modulus, total_collateral)
    ascending: bool | None = None

    while current < segment_end:
        value = _curve_value(curve, current)
        level = _payout_level(value, modulus, cap)
        payout = min(level, total_collateral)
        if ascending is None:
            ascending = _curve_value(curve, segment_end) > value

        # Already on the last level in the direction of travel
        if level == (cap if ascending else 0):
            ranges.append(PayoutRange(current, segment_end - 1, payout))
            break

        step = modulus if ascending else -modulus
        boundary = _boundary_outcome(curve, Decimal(level) + Decimal(step) / 2, ascending)

        # Payout never leaves the current level before the segment ends
        if boundary is None or boundary < current or boundary >= segment_end - 1:
            ranges.append(PayoutRange(current, segment_end - 1, payout))
            break

        ranges.append(PayoutRange(current, boundary, payout))

        # Next level is the last one, or the curve stops short of reaching
        # it: the rest of the segment pays it
        next_level = level + step
        next_outcome = None if next_level in (0, cap) else curve.invert(Decimal(next_level))
        if next_outcome is None or next_outcome >= segment_end:
            ranges.append(
                PayoutRange(boundary + 1, segment_end - 1, min(next_level, total_collateral))
            )
            break

        current = boundary + 1

    return ranges


def _find_start(
    curve: PayoutCurve,
    first: int,
    last: int,
    total_collateral: int,
    max_scan_steps: int,
) -> int:
    """First interior outcome at which the walk can begin.

    Raises:
        NoValidOutcome: If the curve is undefined on the whole interior, or
            its payouts are all above the collateral or all below zero
    """
    start = curve.first_defined_outcome(first, last, max_scan_steps)
    if start is None:
        logger.warning("no_valid_outcome", reason="undefined", first=first, last=last)
        raise NoValidOutcome(f"Payout curve is undefined on outcomes [{first}, {last}]")

    first_value = curve.evaluate(start)
    last_value = curve.evaluate(last)
    if first_value.is_nan() or last_value.is_nan():
        return start

    above = first_value > total_collateral and last_value > total_collateral
    below = first_value < 0 and last_value < 0
    if above or below:
        logger.warning(
            "no_valid_outcome",
            reason="out_of_collateral_range",
            first=start,
            last=last,
            total_collateral=total_collateral,
        )
        raise NoValidOutcome(
            f"No outcome in [{start}, {last}] pays within [0, {total_collateral}]"
        )
    return start


def _split_interior(
    first: int,
    to_outcome: int,
    total_collateral: int,
    curve: PayoutCurve,
    policy: RoundingIntervals,
    config: EngineConfig,
) -> list[PayoutRange]:
    """Ranges covering the open interval (from_outcome, to_outcome)."""
    last = to_outcome - 1
    start = _find_start(curve, first, last, total_collateral, config.max_scan_steps)

    ranges: list[PayoutRange] = []
    if start > first:
        # Curve undefined below start: extend its first payout backwards
        payout = _resolve_payout(curve, start, policy.modulus_at(start), total_collateral)
        ranges.append(PayoutRange(first, start - 1, payout))

    current = start
    while current < to_outcome:
        modulus, segment_end = policy.segment_at(current, to_outcome)
        ranges.extend(_split_segment(curve, current, segment_end, modulus, total_collateral))
        current = segment_end
    return ranges


def split_into_ranges(
    from_outcome: int,
    to_outcome: int,
    from_payout: int,
    to_payout: int,
    total_collateral: int,
    curve: PayoutCurve,
    rounding_intervals: RoundingIntervals | Iterable[RoundingInterval],
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[PayoutRange]:
    """Split [from_outcome, to_outcome] into constant rounded-payout ranges.

    The endpoint outcomes pay the caller-supplied from_payout and to_payout:
    curves can be asymptotic exactly at the domain edges. Every interior
    outcome x pays round_payout(curve.evaluate(x), modulus(x)) clamped to
    [0, total_collateral]: the raw value is rounded first, so a collateral
    that is not a multiple of the modulus is still paid wherever the curve
    rounds to or past it. An infinite curve value pays the collateral (or 0
    for negative infinity).

    Args:
        from_outcome: First outcome of the curve piece
        to_outcome: Last outcome of the curve piece (must be > from_outcome)
        from_payout: Payout at from_outcome
        to_payout: Payout at to_outcome
        total_collateral: Upper bound of every payout
        curve: Payout curve of the piece
        rounding_intervals: Rounding policy (never modified)
        config: Engine configuration

    Returns:
        Ascending, contiguous, merged ranges covering [from_outcome, to_outcome]

    Raises:
        InvalidDomain: If the domain is empty or an endpoint payout is out of range
        NoValidOutcome: If no interior outcome pays within [0, total_collateral]
    """
    if to_outcome <= from_outcome:
        raise InvalidDomain(
            f"to_outcome must be strictly greater than from_outcome: [{from_outcome}, {to_outcome}]"
        )
    if from_outcome < 0:
        raise InvalidDomain(f"Outcome cannot be negative: {from_outcome}")
    if total_collateral < 0:
        raise InvalidDomain(f"Total collateral cannot be negative: {total_collateral}")
    for name, value in (("from_payout", from_payout), ("to_payout", to_payout)):
        if not 0 <= value <= total_collateral:
            raise InvalidDomain(f"{name} {value} outside [0, {total_collateral}]")

    policy = RoundingIntervals.of(rounding_intervals)

    ranges = [PayoutRange(from_outcome, from_outcome, from_payout)]
    try:
        with decimal.localcontext(config.decimal_context()):
            if to_outcome - from_outcome > 1:
                ranges.extend(
                    _split_interior(
                        from_outcome + 1,
                        to_outcome,
                        total_collateral,
                        curve,
                        policy,
                        config,
                    )
                )
    except decimal.DecimalException as err:
        logger.warning(
            "payout_arithmetic_failed",
            from_outcome=from_outcome,
            to_outcome=to_outcome,
            error=str(err),
        )
        raise NoValidOutcome(
            f"Payout arithmetic failed on [{from_outcome}, {to_outcome}]: {err!r}"
        ) from err
    ranges.append(PayoutRange(to_outcome, to_outcome, to_payout))

    merged = merge_payouts(ranges)
    logger.debug(
        "ranges_split",
        from_outcome=from_outcome,
        to_outcome=to_outcome,
        total_collateral=total_collateral,
        ranges=len(merged),
    )
    return merged


def merge_payouts(ranges: Iterable[PayoutRange]) -> list[PayoutRange]:
    """Coalesce neighbouring ranges that pay the same amount.

    Two ranges merge when the second starts right after the first (or on
    the outcome shared by two consecutive curve pieces) and both pay the
    same. A range re-covering outcomes of its predecessor with a different
    payout keeps only the outcomes after it: the first piece owns a shared
    endpoint. The input is not modified.
    """
    merged: list[PayoutRange] = []
    for rng in ranges:
        if merged:
            prev = merged[-1]
            if rng.index_from <= prev.index_to + 1 and rng.payout == prev.payout:
                if rng.index_to > prev.index_to:
                    merged[-1] = replace(prev, index_to=rng.index_to)
                continue
            if rng.index_from <= prev.index_to:
                if rng.index_to <= prev.index_to:
                    continue
                rng = replace(rng, index_from=prev.index_to + 1)
        merged.append(rng)
    return merged


__all__ = ["PayoutRange", "split_into_ranges", "merge_payouts"]
