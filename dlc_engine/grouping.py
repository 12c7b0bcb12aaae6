"""Outcome range compression into digit-prefix groups.

A contiguous outcome range [start, end] is covered by a minimal list of digit
prefixes; every outcome whose leading digits equal one of the prefixes lies
in the range, and every outcome of the range matches exactly one prefix.
This is the numeral-base analogue of expressing an address range as CIDR
blocks: one CET is signed per prefix instead of one per outcome.

Groups are built from three zones of the divergent digit suffix:

    front  - from start up to the next roll-over of its leading digit
    middle - whole subtrees strictly between the two leading digits
    back   - from the last roll-over of the leading digit up to end

The result is ordered by ascending outcome coverage and holds
O(num_digits * base) groups regardless of end - start.
"""

from __future__ import annotations

import structlog

from dlc_engine.digits import separate_prefix
from dlc_engine.errors import InvalidDomain

logger = structlog.get_logger()


def _trailing_run(digits: list[int], value: int) -> int:
    """Length of the run of `value` digits at the end of digits."""
    run = 0
    for digit in reversed(digits):
        if digit != value:
            break
        run += 1
    return run


def front_groupings(digits: list[int], base: int) -> list[list[int]]:
    """Groups covering [digits, next roll-over of the leading digit).

    Trailing zero digits need no widening and become wildcards. Every other
    position below the leading one contributes one group per digit value
    strictly greater than its own, with all lower positions wildcarded.
    """
    significant = len(digits) - _trailing_run(digits, 0)
    if significant == 0:
        return [[0]]

    groups = [list(digits[:significant])]
    for position in range(significant - 1, 0, -1):
        fixed = list(digits[:position])
        for n in range(digits[position] + 1, base):
            groups.append(fixed + [n])
    return groups


def back_groupings(digits: list[int], base: int) -> list[list[int]]:
    """Groups covering [last roll-over of the leading digit, digits].

    Mirror image of front_groupings: trailing (base - 1) digits become
    wildcards and lower digit values are enumerated, in ascending order.
    """
    significant = len(digits) - _trailing_run(digits, base - 1)
    if significant == 0:
        return [[base - 1]]

    groups = []
    for position in range(1, significant):
        fixed = list(digits[:position])
        for n in range(digits[position]):
            groups.append(fixed + [n])
    groups.append(list(digits[:significant]))
    return groups


def middle_groupings(first_digit_start: int, first_digit_end: int) -> list[list[int]]:
    """Single-digit groups strictly between the two leading digits."""
    return [[n] for n in range(first_digit_start + 1, first_digit_end)]


def group_by_ignoring_digits(start: int, end: int, base: int, num_digits: int) -> list[list[int]]:
    """Compress the outcome range [start, end] into digit-prefix groups.

    Args:
        start: First outcome of the range
        end: Last outcome of the range (inclusive)
        base: Oracle numeral base
        num_digits: Number of digits the oracle attests to

    Returns:
        Digit prefixes in ascending outcome order; the union of the outcomes
        they match is exactly [start, end]

    Raises:
        InvalidDomain: If not 0 <= start <= end < base^num_digits

    Examples:
        group_by_ignoring_digits(100, 199, 10, 3) == [[1]]
        group_by_ignoring_digits(100, 200, 10, 3) == [[1], [2, 0, 0]]
    """
    if base < 2:
        raise InvalidDomain(f"Base must be at least 2, got {base}")
    if not 0 <= start <= end < base**num_digits:
        raise InvalidDomain(
            f"Invalid outcome range [{start}, {end}] for {num_digits} digits in base {base}"
        )

    prefix_digits, start_digits, end_digits = separate_prefix(start, end, base, num_digits)

    full_suffix = all(d == 0 for d in start_digits) and all(d == base - 1 for d in end_digits)
    if start == end or (full_suffix and prefix_digits):
        return [prefix_digits]

    if len(prefix_digits) == num_digits - 1:
        return [prefix_digits + [n] for n in range(start_digits[-1], end_digits[-1] + 1)]

    groupings = (
        front_groupings(start_digits, base)
        + middle_groupings(start_digits[0], end_digits[0])
        + back_groupings(end_digits, base)
    )
    groups = [prefix_digits + group for group in groupings]

    logger.debug(
        "outcome_range_grouped",
        start=start,
        end=end,
        base=base,
        num_digits=num_digits,
        groups=len(groups),
    )
    return groups


__all__ = [
    "group_by_ignoring_digits",
    "front_groupings",
    "middle_groupings",
    "back_groupings",
]
