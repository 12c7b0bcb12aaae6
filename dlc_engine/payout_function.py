"""Piecewise payout function evaluation.

Each piece of a payout function is split independently between its
boundary outcomes and the results are concatenated. Consecutive pieces share
their boundary outcome; the merge pass folds the shared outcome into a
single range.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from dlc_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from dlc_engine.curves import LinePayoutCurve, PayoutCurve, PayoutPoint, curve_from_piece
from dlc_engine.errors import InvalidPayoutFunction
from dlc_engine.math.decimal_utils import clamp_int, round_half_up
from dlc_engine.models.payout_function import PayoutFunction, PayoutPointModel
from dlc_engine.ranges import PayoutRange, merge_payouts, split_into_ranges
from dlc_engine.rounding import RoundingInterval, RoundingIntervals

logger = structlog.get_logger()


def _endpoint_payout(point: PayoutPointModel, total_collateral: int) -> int:
    """Integer payout of an end point, which must not exceed the collateral."""
    payout = round_half_up(point.payout)
    if payout > total_collateral:
        logger.warning(
            "endpoint_payout_exceeds_collateral",
            outcome=point.event_outcome,
            payout=payout,
            total_collateral=total_collateral,
        )
        raise InvalidPayoutFunction(
            f"Payout {payout} at outcome {point.event_outcome} "
            f"exceeds the total collateral {total_collateral}"
        )
    return payout


def _first_endpoint(
    payout_function: PayoutFunction,
    first_curve: PayoutCurve,
    total_collateral: int,
) -> tuple[int, int]:
    """(outcome, payout) at which the first piece starts.

    Without an explicit first endpoint the function starts at outcome 0
    with the first curve's payout there.
    """
    if payout_function.first_endpoint is not None:
        point = payout_function.first_endpoint
        return point.event_outcome, _endpoint_payout(point, total_collateral)

    value = first_curve.evaluate(0)
    if not value.is_finite():
        raise InvalidPayoutFunction(
            "First payout curve is undefined at outcome 0 and no first endpoint is given"
        )
    return 0, clamp_int(round_half_up(value), 0, total_collateral)


def compute_payouts(
    payout_function: PayoutFunction,
    total_collateral: int,
    rounding_intervals: RoundingIntervals | Iterable[RoundingInterval],
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[PayoutRange]:
    """Compute the rounded payout ranges of a piecewise payout function.

    Args:
        payout_function: Decoded payout function
        total_collateral: Sum of both parties' collateral
        rounding_intervals: Rounding policy applied to every piece
        config: Engine configuration

    Returns:
        Ascending, contiguous, merged ranges from the first endpoint to the
        last piece's end point (or the last endpoint when given)

    Raises:
        InvalidCurve: If a curve piece cannot be built
        InvalidPayoutFunction: If end points are inconsistent with the collateral
        NoValidOutcome: If a piece pays nothing within [0, total_collateral]
    """
    policy = RoundingIntervals.of(rounding_intervals)
    pieces = payout_function.payout_function_pieces
    curves = [curve_from_piece(piece.payout_curve_piece) for piece in pieces]

    start_outcome, start_payout = _first_endpoint(payout_function, curves[0], total_collateral)

    ranges: list[PayoutRange] = []
    for index, (piece, curve) in enumerate(zip(pieces, curves)):
        end_outcome = piece.end_point.event_outcome
        end_payout = _endpoint_payout(piece.end_point, total_collateral)
        if end_outcome < start_outcome:
            raise InvalidPayoutFunction(
                f"Piece {index} ends at {end_outcome} before it starts at {start_outcome}"
            )
        # Zero-length piece: nothing to split, its end point starts the next one
        if end_outcome > start_outcome:
            ranges.extend(
                split_into_ranges(
                    start_outcome,
                    end_outcome,
                    start_payout,
                    end_payout,
                    total_collateral,
                    curve,
                    policy,
                    config,
                )
            )
        start_outcome, start_payout = end_outcome, end_payout

    last = payout_function.last_endpoint
    if last is not None and last.event_outcome > start_outcome:
        last_payout = _endpoint_payout(last, total_collateral)
        extension = LinePayoutCurve(
            PayoutPoint(start_outcome, start_payout),
            PayoutPoint(last.event_outcome, last_payout),
        )
        ranges.extend(
            split_into_ranges(
                start_outcome,
                last.event_outcome,
                start_payout,
                last_payout,
                total_collateral,
                extension,
                policy,
                config,
            )
        )

    if not ranges:
        raise InvalidPayoutFunction("Payout function covers no outcome range")

    merged = merge_payouts(ranges)
    logger.debug(
        "payout_function_computed",
        pieces=len(pieces),
        ranges=len(merged),
        total_collateral=total_collateral,
    )
    return merged


__all__ = ["compute_payouts"]
