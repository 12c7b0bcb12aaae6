"""Tests for piecewise payout function computation."""

import pytest

from dlc_engine.errors import InvalidPayoutFunction
from dlc_engine.models import PayoutFunction
from dlc_engine.payout_function import compute_payouts
from dlc_engine.ranges import PayoutRange
from dlc_engine.rounding import RoundingInterval
from tests.helpers import as_tuples, assert_partition, payout_point, ramp_piece, single_modulus
from tests.helpers.constants import DESCENDING_MOD_10

MAX_OUTCOME = 2**18 - 1


def hyperbola_piece(end_outcome: int, end_payout: int) -> dict:
    """Wire payload of the 500000 / x piece."""
    return {
        "endPoint": payout_point(end_outcome, end_payout),
        "payoutCurvePiece": {
            "type": "hyperbola",
            "translateOutcome": 0,
            "translatePayout": 0,
            "a": 1,
            "b": 0,
            "c": 0,
            "d": 500000,
        },
    }


class TestLinearPiecewise:
    """Flat 40, ramp to 60 over [40, 60], flat 60 up to 2^18 - 1."""

    def test_no_rounding(self, linear_piecewise_contract):
        """Each ramp outcome gets its own range; flats collapse."""
        ranges = compute_payouts(
            linear_piecewise_contract.payout_function, 60, single_modulus(1)
        )
        assert len(ranges) - 1 == 20
        assert ranges[0] == PayoutRange(0, 40, 40)
        for i in range(1, 19):
            assert ranges[i] == PayoutRange(40 + i, 40 + i, 40 + i)
        assert ranges[-1] == PayoutRange(60, MAX_OUTCOME, 60)

    def test_modulus_two(self, linear_piecewise_contract):
        """Ramp payouts are rounded to even amounts."""
        ranges = compute_payouts(
            linear_piecewise_contract.payout_function, 60, single_modulus(2)
        )
        assert len(ranges) - 1 == 10
        assert ranges[0] == PayoutRange(0, 40, 40)
        for i in range(1, 10):
            assert ranges[i] == PayoutRange(40 + 2 * (i - 1) + 1, 40 + 2 * i, 40 + 2 * i)
        assert ranges[-1] == PayoutRange(59, MAX_OUTCOME, 60)

    def test_covers_domain(self, linear_piecewise_contract):
        """Ranges partition the whole oracle domain."""
        ranges = compute_payouts(
            linear_piecewise_contract.payout_function, 60, single_modulus(5)
        )
        assert_partition(ranges, 0, MAX_OUTCOME)

    def test_accepts_interval_list(self, linear_piecewise_contract):
        """A plain list of intervals works as rounding policy."""
        ranges = compute_payouts(
            linear_piecewise_contract.payout_function, 60, [RoundingInterval(0, 1)]
        )
        assert len(ranges) == 21


class TestHyperbolaFunction:
    """Single hyperbola piece with an explicit first endpoint."""

    def test_matches_single_split(self, inverse_hyperbola_contract):
        """One piece gives exactly the splitter's ranges."""
        ranges = compute_payouts(
            inverse_hyperbola_contract.payout_function, 100, single_modulus(10)
        )
        assert as_tuples(ranges) == DESCENDING_MOD_10

    def test_missing_first_endpoint_at_pole(self):
        """Without a first endpoint the curve must be defined at outcome 0."""
        function = PayoutFunction.model_validate(
            {"payoutFunctionPieces": [hyperbola_piece(999999, 0)]}
        )
        with pytest.raises(InvalidPayoutFunction):
            compute_payouts(function, 100, single_modulus(10))


class TestEndpoints:
    """Function endpoints and piece boundaries."""

    def test_default_first_endpoint(self):
        """Without a first endpoint the function starts at (0, curve(0))."""
        function = PayoutFunction.model_validate(
            {"payoutFunctionPieces": [ramp_piece(0, 5, 10, 15)]}
        )
        ranges = compute_payouts(function, 20, single_modulus(1))
        assert ranges[0] == PayoutRange(0, 0, 5)
        assert ranges[-1] == PayoutRange(10, 10, 15)

    def test_last_endpoint_extends_with_line(self):
        """A last endpoint past the last piece adds a straight extension."""
        function = PayoutFunction.model_validate(
            {
                "payoutFunctionPieces": [ramp_piece(0, 0, 10, 10)],
                "lastEndpoint": payout_point(20, 20),
            }
        )
        ranges = compute_payouts(function, 20, single_modulus(1))
        assert as_tuples(ranges) == [(x, x, x) for x in range(21)]

    def test_zero_length_piece_skipped(self):
        """A piece ending where it starts contributes no ranges."""
        empty_piece = {**ramp_piece(0, 0, 10, 10), "endPoint": payout_point(0, 0)}
        function = PayoutFunction.model_validate(
            {
                "firstEndpoint": payout_point(0, 0),
                "payoutFunctionPieces": [empty_piece, ramp_piece(0, 0, 10, 10)],
            }
        )
        ranges = compute_payouts(function, 10, single_modulus(1))
        assert as_tuples(ranges) == [(x, x, x) for x in range(11)]

    def test_shared_boundary_merged(self):
        """Consecutive pieces sharing a boundary payout merge across it."""
        function = PayoutFunction.model_validate(
            {"payoutFunctionPieces": [ramp_piece(0, 10, 5, 10), ramp_piece(5, 10, 10, 10)]}
        )
        ranges = compute_payouts(function, 10, single_modulus(1))
        assert ranges == [PayoutRange(0, 10, 10)]

    def test_endpoint_payout_above_collateral(self):
        """End point payouts cannot exceed the collateral."""
        function = PayoutFunction.model_validate(
            {"payoutFunctionPieces": [ramp_piece(0, 0, 10, 50)]}
        )
        with pytest.raises(InvalidPayoutFunction):
            compute_payouts(function, 20, single_modulus(1))

    def test_single_outcome_function_rejected(self):
        """A function whose pieces all have zero length covers nothing."""
        function = PayoutFunction.model_validate(
            {"firstEndpoint": payout_point(5, 0), "payoutFunctionPieces": [ramp_piece(0, 0, 5, 5)]}
        )
        with pytest.raises(InvalidPayoutFunction):
            compute_payouts(function, 10, single_modulus(1))
