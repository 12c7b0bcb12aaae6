"""Pydantic models for numeric-outcome contract descriptors."""

from pydantic import BaseModel, Field, model_validator

from dlc_engine.models.payout_function import PayoutFunction
from dlc_engine.models.types import Amount
from dlc_engine.rounding import RoundingInterval, RoundingIntervals


class RoundingIntervalModel(BaseModel):
    """Rounding modulus applying from begin_interval onwards."""

    begin_interval: Amount = Field(alias="beginInterval")
    rounding_mod: Amount = Field(alias="roundingMod", gt=0)

    model_config = {"populate_by_name": True}


class RoundingIntervalsModel(BaseModel):
    """Rounding policy of a contract."""

    intervals: list[RoundingIntervalModel] = Field(min_length=1)

    model_config = {"populate_by_name": True}

    def to_rounding_intervals(self) -> RoundingIntervals:
        """Build the engine's rounding policy."""
        return RoundingIntervals(
            RoundingInterval(i.begin_interval, i.rounding_mod) for i in self.intervals
        )


class ContractDescriptor(BaseModel):
    """Everything needed to compute the CET set of a numeric-outcome contract."""

    payout_function: PayoutFunction = Field(alias="payoutFunction")
    rounding_intervals: RoundingIntervalsModel = Field(alias="roundingIntervals")
    total_collateral: Amount = Field(alias="totalCollateral")
    oracle_base: int = Field(default=2, alias="oracleBase", ge=2)
    oracle_num_digits: int = Field(alias="oracleNumDigits", ge=1)

    model_config = {"populate_by_name": True}

    @property
    def max_outcome(self) -> int:
        """Largest outcome the oracle can attest to."""
        return self.oracle_base**self.oracle_num_digits - 1

    @model_validator(mode="after")
    def _check_outcomes_in_domain(self) -> "ContractDescriptor":
        function = self.payout_function
        points = [piece.end_point for piece in function.payout_function_pieces]
        if function.first_endpoint is not None:
            points.append(function.first_endpoint)
        if function.last_endpoint is not None:
            points.append(function.last_endpoint)
        for point in points:
            if point.event_outcome > self.max_outcome:
                raise ValueError(
                    f"Outcome {point.event_outcome} exceeds the oracle's maximum {self.max_outcome}"
                )
        return self
