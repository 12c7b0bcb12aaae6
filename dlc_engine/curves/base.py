"""Base class for payout curve implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from dlc_engine.config import DEFAULT_MAX_SCAN_STEPS


class PayoutCurve(ABC):
    """One continuous piece of a piecewise payout function.

    Curves are immutable values holding exact Decimal coefficients. All
    arithmetic happens in the engine's high-precision decimal context and
    never in binary floating point.
    """

    @abstractmethod
    def evaluate(self, outcome: int) -> Decimal:
        """Payout of the curve at an outcome.

        Returns a non-finite Decimal (infinity or NaN) where the curve is
        undefined instead of raising.
        """
        ...

    @abstractmethod
    def invert(self, payout: Decimal) -> int | None:
        """Outcome at which the curve reaches a payout, rounded to an integer.

        Returns:
            The outcome, or None when the payout is not attainable (undefined
            division, non-finite or negative outcome)

        Raises:
            UnsupportedInversion: If the curve has no closed-form inverse
        """
        ...

    @abstractmethod
    def to_piece(self) -> Any:
        """Encode the curve as its payout curve piece model."""
        ...

    def is_defined_at(self, outcome: int) -> bool:
        """True if the curve has a finite payout at outcome."""
        return self.evaluate(outcome).is_finite()

    def first_defined_outcome(
        self,
        lower: int,
        upper: int,
        max_steps: int = DEFAULT_MAX_SCAN_STEPS,
    ) -> int | None:
        """First outcome in [lower, upper] with a finite payout.

        Probes outcomes one by one, at most max_steps of them. Subclasses
        with a known domain override this with a closed form.
        """
        last = min(upper, lower + max_steps - 1)
        for outcome in range(lower, last + 1):
            if self.is_defined_at(outcome):
                return outcome
        return None
