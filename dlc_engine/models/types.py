"""Shared type definitions for payout descriptor models.

Amounts and outcomes travel as unsigned integers, either JSON numbers or
decimal strings (collateral amounts can exceed the 2^53 range of JSON
numbers in some encoders). Curve coefficients travel as sign, magnitude and
16-digit precision remainder.
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from dlc_engine.math.decimal_utils import to_decimal
from dlc_engine.math.precision import PRECISION_SCALE, join_coefficient, split_coefficient


def validate_amount(value: Any) -> int:
    """Validate a non-negative integer given as int or decimal string.

    Raises:
        ValueError: If value is not a non-negative decimal integer
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, got bool")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    return int_value


# Non-negative integer as JSON number or decimal string
Amount = Annotated[
    int,
    BeforeValidator(validate_amount),
    Field(description="Non-negative integer as number or decimal string"),
]

# Fractional digits of a payout or coefficient, scaled by 10^16
Precision = Annotated[int, Field(ge=0, lt=PRECISION_SCALE)]


class Coefficient(BaseModel):
    """Signed curve coefficient: (+/-) (magnitude + precision * 10^-16)."""

    sign: bool = Field(default=True, description="True for non-negative values.")
    magnitude: Amount
    precision: Precision = 0

    model_config = {"frozen": True}

    def to_decimal(self) -> Decimal:
        """Decoded coefficient value."""
        return join_coefficient(self.sign, self.magnitude, self.precision)

    @classmethod
    def from_decimal(cls, value: Decimal) -> "Coefficient":
        """Encode a coefficient, rounding it to 16 fractional digits."""
        sign, magnitude, precision = split_coefficient(value)
        return cls(sign=sign, magnitude=magnitude, precision=precision)


def validate_coefficient(value: Any) -> Any:
    """Accept a plain decimal number wherever a coefficient is expected.

    Coefficient objects and dicts pass through unchanged; ints, decimal
    strings and Decimals are encoded. Floats are rejected.
    """
    if isinstance(value, (Coefficient, dict)):
        return value
    return Coefficient.from_decimal(to_decimal(value, "coefficient"))


# Coefficient given as object, int, decimal string or Decimal
CoefficientValue = Annotated[Coefficient, BeforeValidator(validate_coefficient)]
