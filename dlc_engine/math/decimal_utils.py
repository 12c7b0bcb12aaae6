"""Shared high-precision Decimal utilities for payout calculations.

All curve and rounding arithmetic must run in a high-precision context:
outcome magnitudes and collateral amounts routinely exceed 10^9 and both
contract counterparties must derive bit-identical payouts.
"""

from __future__ import annotations

import decimal
from contextlib import AbstractContextManager
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from dlc_engine.config import DEFAULT_ENGINE_CONFIG

DECIMAL_HIGH_PREC_CONTEXT = DEFAULT_ENGINE_CONFIG.decimal_context()

DECIMAL_INFINITY = Decimal("Infinity")
DECIMAL_NAN = Decimal("NaN")


def high_precision() -> AbstractContextManager[decimal.Context]:
    """Enter a context with at least DECIMAL_HIGH_PREC_CONTEXT precision.

    A caller that already runs in a wider context (e.g. a configured
    splitter) keeps its own precision.
    """
    current = decimal.getcontext()
    if current.prec >= DECIMAL_HIGH_PREC_CONTEXT.prec:
        return decimal.localcontext(current)
    return decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT)


def to_decimal(value: Any, field_name: str = "value") -> Decimal:
    """Parse a coefficient or payout into a Decimal.

    Floats are rejected: their binary representation is not what either
    counterparty wrote down.

    Args:
        value: int, str or Decimal
        field_name: Name used in error messages

    Raises:
        ValueError: If value is a float, bool, or not a valid decimal string
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"{field_name} must be int, str or Decimal, got {type(value).__name__}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as err:
            raise ValueError(f"{field_name} is not a decimal number: '{value}'") from err
    raise ValueError(f"{field_name} must be int, str or Decimal, got {type(value).__name__}")


def round_half_up(value: Decimal) -> int:
    """Round a finite Decimal to the nearest integer, ties away from zero."""
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def clamp_decimal(value: Decimal, low: int, high: int) -> Decimal:
    """Clamp a non-NaN Decimal (infinities included) to [low, high]."""
    if value < low:
        return Decimal(low)
    if value > high:
        return Decimal(high)
    return value


def clamp_int(value: int, low: int, high: int) -> int:
    """Clamp an integer to [low, high]."""
    return max(low, min(value, high))


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "DECIMAL_INFINITY",
    "DECIMAL_NAN",
    "high_precision",
    "to_decimal",
    "round_half_up",
    "clamp_decimal",
    "clamp_int",
]
