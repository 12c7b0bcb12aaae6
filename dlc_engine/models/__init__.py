"""Pydantic models for payout function and contract descriptors."""

from dlc_engine.models.contract import (
    ContractDescriptor,
    RoundingIntervalModel,
    RoundingIntervalsModel,
)
from dlc_engine.models.payout_function import (
    HyperbolaPayoutCurvePiece,
    PayoutCurvePiece,
    PayoutFunction,
    PayoutFunctionPiece,
    PayoutPointModel,
    PolynomialPayoutCurvePiece,
)
from dlc_engine.models.types import Amount, Coefficient, CoefficientValue

__all__ = [
    # Types
    "Amount",
    "Coefficient",
    "CoefficientValue",
    # Payout function models
    "PayoutPointModel",
    "PolynomialPayoutCurvePiece",
    "HyperbolaPayoutCurvePiece",
    "PayoutCurvePiece",
    "PayoutFunctionPiece",
    "PayoutFunction",
    # Contract models
    "RoundingIntervalModel",
    "RoundingIntervalsModel",
    "ContractDescriptor",
]
