"""Tests for outcome <-> digit sequence conversion."""

import pytest

from dlc_engine.digits import decompose, max_outcome, recompose, separate_prefix
from dlc_engine.errors import InvalidDomain


class TestDecompose:
    """Tests for decompose()."""

    @pytest.mark.parametrize(
        "value,base,num_digits,expected",
        [
            (123456789, 10, 9, [1, 2, 3, 4, 5, 6, 7, 8, 9]),
            (4321, 2, 13, [1, 0, 0, 0, 0, 1, 1, 1, 0, 0, 0, 0, 1]),
            (0, 8, 4, [0, 0, 0, 0]),
            (2, 10, 2, [0, 2]),
            (1, 2, 1, [1]),
        ],
    )
    def test_known_values(self, value, base, num_digits, expected):
        """Outcomes decompose into big-endian, zero-padded digits."""
        assert decompose(value, base, num_digits) == expected

    def test_length_is_num_digits(self):
        """Result always has exactly num_digits digits."""
        assert len(decompose(5, 10, 7)) == 7

    def test_overflow_keeps_low_digits(self):
        """Digits above num_digits are silently dropped."""
        assert decompose(12345, 10, 3) == [3, 4, 5]

    def test_zero_digits(self):
        """Zero digits gives an empty sequence."""
        assert decompose(0, 10, 0) == []

    def test_negative_value_raises(self):
        """Negative outcomes are rejected."""
        with pytest.raises(InvalidDomain):
            decompose(-1, 10, 3)

    def test_invalid_base_raises(self):
        """Base below 2 is rejected."""
        with pytest.raises(InvalidDomain):
            decompose(1, 1, 3)

    def test_negative_num_digits_raises(self):
        """Negative digit counts are rejected."""
        with pytest.raises(InvalidDomain):
            decompose(1, 10, -1)


class TestRecompose:
    """Tests for recompose()."""

    @pytest.mark.parametrize("base,num_digits", [(2, 10), (3, 6), (8, 5), (10, 4), (16, 3)])
    def test_inverts_decompose(self, base, num_digits):
        """recompose(decompose(v)) == v for every representable outcome sampled."""
        for value in range(0, base**num_digits, max(1, base**num_digits // 97)):
            assert recompose(decompose(value, base, num_digits), base) == value

    def test_inverts_decompose_modulo_domain(self):
        """Overflowing values come back reduced modulo base^num_digits."""
        assert recompose(decompose(12345, 10, 3), 10) == 12345 % 1000

    def test_empty_sequence(self):
        """No digits encode zero."""
        assert recompose([], 10) == 0

    def test_digit_out_of_range_raises(self):
        """Digits must lie in [0, base - 1]."""
        with pytest.raises(InvalidDomain):
            recompose([1, 10], 10)


class TestSeparatePrefix:
    """Tests for separate_prefix()."""

    def test_common_prefix(self):
        """Common leading digits are split off."""
        prefix, start, end = separate_prefix(1201234, 1204321, 10, 8)
        assert prefix == [0, 1, 2, 0]
        assert start == [1, 2, 3, 4]
        assert end == [4, 3, 2, 1]

    def test_no_common_prefix(self):
        """Ranges diverging on the first digit have an empty prefix."""
        prefix, start, end = separate_prefix(1234, 4321, 10, 4)
        assert prefix == []
        assert start == [1, 2, 3, 4]
        assert end == [4, 3, 2, 1]

    def test_equal_outcomes(self):
        """Equal outcomes share every digit."""
        prefix, start, end = separate_prefix(123, 123, 10, 3)
        assert prefix == [1, 2, 3]
        assert start == []
        assert end == []


class TestMaxOutcome:
    """Tests for max_outcome()."""

    def test_binary(self):
        """18 binary digits reach 2^18 - 1."""
        assert max_outcome(2, 18) == 262143

    def test_decimal(self):
        """6 decimal digits reach 999999."""
        assert max_outcome(10, 6) == 999999
