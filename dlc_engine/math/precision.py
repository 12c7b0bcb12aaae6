"""Fixed 16-fractional-digit precision codec.

Payout curve coefficients travel as a sign bit, an integer magnitude and a
precision remainder holding the first 16 fractional decimal digits:

    value = (+/-) (magnitude + precision * 10^-16)

This codec is only used when (de)serializing curves; computation itself
works on the decoded Decimal values.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from dlc_engine.errors import PrecisionError
from dlc_engine.math.decimal_utils import high_precision

PRECISION_DIGITS = 16
PRECISION_SCALE = 10**PRECISION_DIGITS

_QUANTUM = Decimal(1).scaleb(-PRECISION_DIGITS)


def get_precision(value: Decimal) -> int:
    """Extract the first 16 fractional digits of |value| as an integer.

    Digits beyond the 16th are rounded half-up, e.g.
    1.112233445566778899 -> 1122334455667789.

    Raises:
        PrecisionError: If value is not finite
    """
    if not value.is_finite():
        raise PrecisionError(f"Cannot extract precision of non-finite value {value}")
    with high_precision():
        rounded = abs(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
        fraction = rounded % 1
        return int(fraction.scaleb(PRECISION_DIGITS))


def from_precision(precision: int) -> Decimal:
    """Build the fractional value encoded by a precision remainder.

    Raises:
        PrecisionError: If precision is negative or has more than 16 digits
    """
    if precision < 0:
        raise PrecisionError(f"Precision cannot be negative: {precision}")
    if len(str(precision)) > PRECISION_DIGITS:
        raise PrecisionError(f"Precision is too large: {precision}")
    return Decimal(precision).scaleb(-PRECISION_DIGITS)


def split_coefficient(value: Decimal) -> tuple[bool, int, int]:
    """Split a coefficient into (sign, magnitude, precision).

    The value is rounded to 16 fractional digits first, so a fraction that
    rounds up to 1 carries into the magnitude instead of being lost.

    Returns:
        (sign, magnitude, precision) where sign is True for values >= 0
    """
    if not value.is_finite():
        raise PrecisionError(f"Cannot encode non-finite coefficient {value}")
    with high_precision():
        rounded = abs(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
        magnitude = int(rounded)
        precision = get_precision(rounded)
    return value >= 0, magnitude, precision


def join_coefficient(sign: bool, magnitude: int, precision: int) -> Decimal:
    """Rebuild a coefficient from its (sign, magnitude, precision) parts."""
    if magnitude < 0:
        raise PrecisionError(f"Magnitude cannot be negative: {magnitude}")
    with high_precision():
        value = Decimal(magnitude) + from_precision(precision)
        return value if sign else -value


__all__ = [
    "PRECISION_DIGITS",
    "PRECISION_SCALE",
    "get_precision",
    "from_precision",
    "split_coefficient",
    "join_coefficient",
]
