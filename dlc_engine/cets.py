"""Payout ranges to CET digit-prefix groups.

One contract execution transaction (CET) is signed per digit prefix. A
payout range becomes one CetGroup holding every prefix of the range; the
external transaction builder turns each prefix into a CET paying the
group's payout.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from dlc_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from dlc_engine.grouping import group_by_ignoring_digits
from dlc_engine.models.contract import ContractDescriptor
from dlc_engine.payout_function import compute_payouts
from dlc_engine.ranges import PayoutRange

logger = structlog.get_logger()


@dataclass(frozen=True)
class CetGroup:
    """Payout range together with the digit prefixes covering it."""

    payout: int
    index_from: int
    index_to: int
    prefixes: tuple[tuple[int, ...], ...]

    @property
    def cet_count(self) -> int:
        return len(self.prefixes)


def compute_cet_groups(
    ranges: Iterable[PayoutRange],
    base: int,
    num_digits: int,
) -> list[CetGroup]:
    """Compress each payout range into its digit-prefix groups.

    Raises:
        InvalidDomain: If a range lies outside [0, base^num_digits - 1]
    """
    groups = []
    for rng in ranges:
        prefixes = group_by_ignoring_digits(rng.index_from, rng.index_to, base, num_digits)
        groups.append(
            CetGroup(
                payout=rng.payout,
                index_from=rng.index_from,
                index_to=rng.index_to,
                prefixes=tuple(tuple(prefix) for prefix in prefixes),
            )
        )
    return groups


def contract_payouts(
    descriptor: ContractDescriptor,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[PayoutRange]:
    """Rounded payout ranges of a contract descriptor."""
    return compute_payouts(
        descriptor.payout_function,
        descriptor.total_collateral,
        descriptor.rounding_intervals.to_rounding_intervals(),
        config,
    )


def contract_cet_groups(
    descriptor: ContractDescriptor,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[CetGroup]:
    """CET groups of a contract descriptor, in ascending outcome order."""
    ranges = contract_payouts(descriptor, config)
    groups = compute_cet_groups(ranges, descriptor.oracle_base, descriptor.oracle_num_digits)
    logger.debug(
        "cet_groups_computed",
        ranges=len(groups),
        cets=sum(group.cet_count for group in groups),
        oracle_base=descriptor.oracle_base,
        oracle_num_digits=descriptor.oracle_num_digits,
    )
    return groups


__all__ = ["CetGroup", "compute_cet_groups", "contract_payouts", "contract_cet_groups"]
