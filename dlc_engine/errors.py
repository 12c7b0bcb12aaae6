"""Payout engine error classes.

Every failure surfaced by the engine is one of these. A failure aborts the
whole computation: an incomplete CET set is never returned.
"""


class PayoutEngineError(Exception):
    """Base error for payout engine operations."""

    pass


class InvalidDomain(PayoutEngineError, ValueError):
    """Outcome domain is empty, inverted or outside the oracle's digit range."""

    pass


class NoValidOutcome(PayoutEngineError):
    """No outcome in the domain yields a payout within [0, total_collateral].

    Indicates a structurally malformed contract.
    """

    pass


class UnsupportedInversion(PayoutEngineError):
    """Curve has no closed-form inverse for its parameter regime."""

    pass


class InvalidCurve(PayoutEngineError, ValueError):
    """Curve coefficients do not describe a usable curve."""

    pass


class InvalidRoundingIntervals(PayoutEngineError, ValueError):
    """Rounding policy is empty or has a non-positive modulus."""

    pass


class PrecisionError(PayoutEngineError, ValueError):
    """Value cannot be represented with 16 fractional digits of precision."""

    pass


class InvalidPayoutFunction(PayoutEngineError, ValueError):
    """Piecewise payout function is inconsistent (pieces, endpoints)."""

    pass
