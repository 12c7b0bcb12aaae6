"""Outcome <-> digit sequence conversion.

Oracles attest to numeric outcomes one digit at a time, most significant
digit first. An outcome is therefore handled as a fixed-length big-endian
digit sequence in the oracle's numeral base.
"""

from __future__ import annotations

from collections.abc import Sequence

from dlc_engine.errors import InvalidDomain


def _check_base(base: int, num_digits: int) -> None:
    if base < 2:
        raise InvalidDomain(f"Base must be at least 2, got {base}")
    if num_digits < 0:
        raise InvalidDomain(f"Number of digits cannot be negative: {num_digits}")


def max_outcome(base: int, num_digits: int) -> int:
    """Largest outcome representable with num_digits digits in base."""
    _check_base(base, num_digits)
    return base**num_digits - 1


def decompose(value: int, base: int, num_digits: int) -> list[int]:
    """Decompose an outcome into exactly num_digits big-endian digits.

    Digits above num_digits are dropped, i.e. the result encodes
    value mod base^num_digits. Callers bound value beforehand.

    Args:
        value: Non-negative outcome
        base: Numeral base (>= 2)
        num_digits: Number of digits to produce

    Returns:
        List of num_digits digits, each in [0, base - 1]

    Raises:
        InvalidDomain: If value is negative or base/num_digits are invalid

    Examples:
        decompose(123456789, 10, 9) == [1, 2, 3, 4, 5, 6, 7, 8, 9]
        decompose(2, 10, 2) == [0, 2]
    """
    _check_base(base, num_digits)
    if value < 0:
        raise InvalidDomain(f"Outcome cannot be negative: {value}")

    digits = []
    remaining = value
    for _ in range(num_digits):
        remaining, digit = divmod(remaining, base)
        digits.append(digit)
    digits.reverse()
    return digits


def recompose(digits: Sequence[int], base: int) -> int:
    """Rebuild the outcome encoded by big-endian digits."""
    value = 0
    for digit in digits:
        if not 0 <= digit < base:
            raise InvalidDomain(f"Digit {digit} out of range for base {base}")
        value = value * base + digit
    return value


def separate_prefix(
    start: int,
    end: int,
    base: int,
    num_digits: int,
) -> tuple[list[int], list[int], list[int]]:
    """Split start and end into their common leading digits and the rest.

    Returns:
        (prefix_digits, start_digits, end_digits) where start_digits and
        end_digits are the divergent suffixes, both of length
        num_digits - len(prefix_digits)
    """
    start_digits = decompose(start, base, num_digits)
    end_digits = decompose(end, base, num_digits)

    prefix_len = 0
    for start_digit, end_digit in zip(start_digits, end_digits):
        if start_digit != end_digit:
            break
        prefix_len += 1

    return start_digits[:prefix_len], start_digits[prefix_len:], end_digits[prefix_len:]


__all__ = ["decompose", "recompose", "separate_prefix", "max_outcome"]
