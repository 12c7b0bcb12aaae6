"""Pydantic models for payout function descriptors.

A payout function is a sequence of curve pieces. Each piece runs from the
previous piece's end point (or the function's first endpoint) to its own
end point; consecutive pieces share that boundary outcome.
"""

from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Discriminator, Field, Tag, model_validator

from dlc_engine.math.precision import join_coefficient
from dlc_engine.models.types import Amount, CoefficientValue, Precision


class PayoutPointModel(BaseModel):
    """A point (outcome, payout) of a payout function."""

    event_outcome: Amount = Field(alias="eventOutcome")
    outcome_payout: Amount = Field(alias="outcomePayout")
    extra_precision: Precision = Field(
        default=0,
        alias="extraPrecision",
        description="Fractional payout digits, scaled by 10^16.",
    )

    model_config = {"populate_by_name": True}

    @property
    def payout(self) -> Decimal:
        """Exact payout including the fractional digits."""
        return join_coefficient(True, self.outcome_payout, self.extra_precision)


class PolynomialPayoutCurvePiece(BaseModel):
    """Polynomial curve interpolating its points.

    Only two-point (linear) polynomials are evaluated by the engine.
    """

    type: Literal["polynomial"] = "polynomial"
    points: list[PayoutPointModel] = Field(min_length=2)

    model_config = {"populate_by_name": True}


class HyperbolaPayoutCurvePiece(BaseModel):
    """Hyperbola curve piece with its six coefficients."""

    type: Literal["hyperbola"] = "hyperbola"
    use_positive_piece: bool = Field(default=True, alias="usePositivePiece")
    translate_outcome: CoefficientValue = Field(alias="translateOutcome")
    translate_payout: CoefficientValue = Field(alias="translatePayout")
    a: CoefficientValue
    b: CoefficientValue
    c: CoefficientValue
    d: CoefficientValue

    model_config = {"populate_by_name": True}


def _get_piece_type(
    v: dict[str, Any] | PolynomialPayoutCurvePiece | HyperbolaPayoutCurvePiece,
) -> str:
    """Discriminator function for PayoutCurvePiece union type."""
    if isinstance(v, dict):
        return str(v.get("type", "polynomial"))
    return v.type


PayoutCurvePiece = Annotated[
    Annotated[PolynomialPayoutCurvePiece, Tag("polynomial")]
    | Annotated[HyperbolaPayoutCurvePiece, Tag("hyperbola")],
    Discriminator(_get_piece_type),
]


class PayoutFunctionPiece(BaseModel):
    """Curve piece ending at end_point."""

    end_point: PayoutPointModel = Field(alias="endPoint")
    payout_curve_piece: PayoutCurvePiece = Field(alias="payoutCurvePiece")

    model_config = {"populate_by_name": True}


class PayoutFunction(BaseModel):
    """Piecewise payout function over the oracle's outcome domain.

    first_endpoint defaults to outcome 0 with the first curve's payout there.
    A last_endpoint beyond the last piece's end point extends the function
    with a straight line.
    """

    first_endpoint: PayoutPointModel | None = Field(default=None, alias="firstEndpoint")
    payout_function_pieces: list[PayoutFunctionPiece] = Field(
        alias="payoutFunctionPieces",
        min_length=1,
    )
    last_endpoint: PayoutPointModel | None = Field(default=None, alias="lastEndpoint")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_end_points_ascending(self) -> "PayoutFunction":
        outcomes = [piece.end_point.event_outcome for piece in self.payout_function_pieces]
        if self.first_endpoint is not None:
            outcomes.insert(0, self.first_endpoint.event_outcome)
        for previous, current in zip(outcomes, outcomes[1:]):
            if current < previous:
                raise ValueError(f"Piece end points must be ascending: {current} after {previous}")
        if self.last_endpoint is not None and self.last_endpoint.event_outcome < outcomes[-1]:
            raise ValueError(
                f"Last endpoint {self.last_endpoint.event_outcome} precedes "
                f"the last piece end point {outcomes[-1]}"
            )
        return self
