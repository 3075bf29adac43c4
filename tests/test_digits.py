"""
Tests for the DigitArray storage layer and DigitLayout parameters.
"""

from __future__ import annotations

import pytest

from digits import DigitArray
from layout import BINARY_BYTE, BYTE_PAIR, DECIMAL_32, DigitLayout


# ---------------------------------------------------------------------------
# Layout construction
# ---------------------------------------------------------------------------

class TestLayoutConstruction:
    def test_digit_max_defaults_to_storage_range(self):
        layout = DigitLayout(width=8, count=2)
        assert layout.digit_max == 255
        assert layout.base == 256
        assert layout.capacity == 65536

    def test_explicit_digit_max(self):
        assert DECIMAL_32.base == 10
        assert DECIMAL_32.max_value == 10 ** 32 - 1

    def test_equal_layouts_compare_equal(self):
        assert DigitLayout(8, 2) == DigitLayout(8, 2, 255)
        assert hash(DigitLayout(8, 2)) == hash(BYTE_PAIR)

    def test_zero_count_rejected(self):
        with pytest.raises(ValueError, match="count"):
            DigitLayout(width=8, count=0)

    def test_zero_width_rejected(self):
        with pytest.raises(ValueError, match="width"):
            DigitLayout(width=0, count=4)

    @pytest.mark.parametrize("digit_max", [0, 256, -1])
    def test_digit_max_out_of_range_rejected(self, digit_max):
        with pytest.raises(ValueError, match="digit_max"):
            DigitLayout(width=8, count=2, digit_max=digit_max)

    def test_widened_keeps_base(self):
        wide = DECIMAL_32.widened(1)
        assert wide.count == 33
        assert wide.base == 10
        assert wide.same_base(DECIMAL_32)


# ---------------------------------------------------------------------------
# Digit access
# ---------------------------------------------------------------------------

class TestDigitAccess:
    def test_default_is_all_zero(self):
        arr = DigitArray(BYTE_PAIR)
        assert arr.as_tuple() == (0, 0)
        assert arr.is_zero()

    def test_digit_counts_from_least_significant(self):
        arr = DigitArray(BYTE_PAIR, [3, 232])   # 1000
        assert arr.digit(0) == 232
        assert arr.digit(1) == 3

    def test_read_past_top_is_zero(self):
        arr = DigitArray(BYTE_PAIR, [3, 232])
        assert arr.digit(2) == 0
        assert arr.digit(100) == 0

    def test_set_digit_reduces_mod_base(self):
        arr = DigitArray(BYTE_PAIR)
        arr.set_digit(0, 300)
        assert arr.digit(0) == 44

    def test_set_past_top_is_noop(self):
        arr = DigitArray(BYTE_PAIR, [1, 2])
        arr.set_digit(2, 7)
        assert arr.as_tuple() == (1, 2)

    def test_negative_power_raises(self):
        arr = DigitArray(BYTE_PAIR)
        with pytest.raises(IndexError):
            arr.digit(-1)
        with pytest.raises(IndexError):
            arr.set_digit(-1, 0)

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError, match="expected 2 digits"):
            DigitArray(BYTE_PAIR, [1, 2, 3])

    def test_digit_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="outside"):
            DigitArray(BINARY_BYTE, [0, 0, 0, 0, 0, 0, 0, 2])


class TestMostSignificantDigit:
    def test_zero(self):
        assert DigitArray(BINARY_BYTE).most_significant_digit() == 0

    def test_one(self):
        arr = DigitArray(BINARY_BYTE)
        arr.set_digit(0, 1)
        assert arr.most_significant_digit() == 1

    def test_top_digit_set(self):
        arr = DigitArray(BINARY_BYTE)
        arr.set_digit(7, 1)
        assert arr.most_significant_digit() == 8

    def test_leading_zeros_skipped(self):
        arr = DigitArray(BINARY_BYTE, [0, 0, 1, 0, 1, 0, 0, 0])
        assert arr.most_significant_digit() == 6


class TestResize:
    def test_zero_extend(self):
        arr = DigitArray(BYTE_PAIR, [3, 232])
        wide = arr.resized(BYTE_PAIR.widened(2))
        assert wide.as_tuple() == (0, 0, 3, 232)

    def test_drop_high_digits(self):
        arr = DigitArray(BYTE_PAIR.widened(2), [9, 9, 3, 232])
        assert arr.resized(BYTE_PAIR).as_tuple() == (3, 232)

    def test_copy_is_independent(self):
        arr = DigitArray(BYTE_PAIR, [1, 2])
        clone = arr.copy()
        clone.set_digit(0, 5)
        assert arr.as_tuple() == (1, 2)
        assert clone.as_tuple() == (1, 5)
