"""Engine configuration."""

from __future__ import annotations

import decimal
import os
from dataclasses import dataclass

# 78 significant digits: enough for products of two 10^18-scale integers
# (strike price x contract size) plus fractional coefficient digits.
DEFAULT_DECIMAL_PRECISION = 78

# Upper bound on outcomes probed one by one when searching for the first
# outcome at which a curve is defined and no closed form is available.
DEFAULT_MAX_SCAN_STEPS = 100_000


@dataclass(frozen=True)
class EngineConfig:
    """Centralized configuration for payout computation.

    Attributes:
        decimal_precision: Significant digits of the decimal context used for
            all curve and rounding arithmetic (default: 78)
        max_scan_steps: Maximum number of outcomes probed when looking for the
            first outcome with a finite payout (default: 100,000)
    """

    decimal_precision: int = DEFAULT_DECIMAL_PRECISION
    max_scan_steps: int = DEFAULT_MAX_SCAN_STEPS

    def __post_init__(self) -> None:
        if self.decimal_precision < 28:
            raise ValueError(f"decimal_precision must be >= 28, got {self.decimal_precision}")
        if self.max_scan_steps < 1:
            raise ValueError(f"max_scan_steps must be positive, got {self.max_scan_steps}")

    def decimal_context(self) -> decimal.Context:
        """Build the decimal context used for engine arithmetic."""
        return decimal.Context(prec=self.decimal_precision, rounding=decimal.ROUND_HALF_EVEN)

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Load configuration from environment variables.

        Reads DLC_ENGINE_DECIMAL_PRECISION and DLC_ENGINE_MAX_SCAN_STEPS,
        falling back to the defaults when unset.
        """
        return cls(
            decimal_precision=int(
                os.environ.get("DLC_ENGINE_DECIMAL_PRECISION", str(DEFAULT_DECIMAL_PRECISION))
            ),
            max_scan_steps=int(
                os.environ.get("DLC_ENGINE_MAX_SCAN_STEPS", str(DEFAULT_MAX_SCAN_STEPS))
            ),
        )


# Default configuration instance
DEFAULT_ENGINE_CONFIG = EngineConfig()
