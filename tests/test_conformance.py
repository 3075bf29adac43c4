"""Exhaustive conformance tests.

Small layouts are checked against native arithmetic for *every*
operand pair, the way a hardware counter of the same width would
behave.  The named scenarios below pin down concrete, documented
behaviour.
"""
from __future__ import annotations

import itertools

import pytest

from integer import integer_type
from layout import BINARY_BYTE, BYTE_PAIR, DECIMAL_32, SMALL, TINY
from number import number_type

EXHAUSTIVE = [BINARY_BYTE, TINY, SMALL]


# ===================================================================
# EXHAUSTIVE: every pair of values
# ===================================================================

@pytest.mark.parametrize("layout", EXHAUSTIVE, ids=lambda layout: layout.describe())
class TestExhaustiveUnsigned:

    def test_add_sub_mul(self, layout):
        T = number_type(layout)
        cap = layout.capacity
        for a, b in itertools.product(range(cap), repeat=2):
            x, y = T(a), T(b)
            assert int(x + y) == (a + b) % cap, (a, b)
            assert int(x - y) == (a - b) % cap, (a, b)
            assert int(x * y) == (a * b) % cap, (a, b)

    def test_divide_modulus(self, layout):
        T = number_type(layout)
        cap = layout.capacity
        for a, b in itertools.product(range(cap), repeat=2):
            q, r = T(a).divmod(T(b))
            if b == 0:
                assert (q, r) == (0, 0), a
            else:
                assert (int(q), int(r)) == divmod(a, b), (a, b)

    def test_compare_is_total_order(self, layout):
        T = number_type(layout)
        ordered = sorted((T(v) for v in range(layout.capacity)), reverse=True)
        ordered.sort()
        assert [int(v) for v in ordered] == list(range(layout.capacity))

    def test_native_round_trip(self, layout):
        T = number_type(layout)
        for v in range(layout.capacity):
            assert int(T(v)) == v


class TestExhaustiveSigned:
    """Base 3, two digits: magnitudes 0..8."""

    I = integer_type(TINY)

    def test_every_pair(self):
        for a, b in itertools.product(range(-8, 9), repeat=2):
            x, y = self.I(a), self.I(b)
            if abs(a + b) <= 8:
                assert int(x + y) == a + b, (a, b)
            if abs(a - b) <= 8:
                assert int(x - y) == a - b, (a, b)
            if abs(a * b) <= 8:
                assert int(x * y) == a * b, (a, b)
            if b != 0:
                q = abs(a) // abs(b) * (1 if (a < 0) == (b < 0) else -1)
                assert int(x // y) == q, (a, b)
                assert int(x % y) == a - q * b, (a, b)
            assert x.compare(y) == (a > b) - (a < b), (a, b)


# ===================================================================
# SCENARIOS
# ===================================================================

class TestScenarios:

    def test_byte_pair_thousand(self):
        """Two base-256 digits holding 1000."""
        T = number_type(BYTE_PAIR)
        v = T(1000)
        assert v.to_string(10) == "1000"
        assert v // T(7) == 142
        assert v % T(7) == 6
        assert T.from_string("1000", 10) == v

    def test_binary_counter_wraps_like_uint8(self):
        T = number_type(BINARY_BYTE)
        assert T(255) + T(1) == 0
        assert T(0) - T(1) == 255
        assert T(16) * T(16) == 0
        assert T(255).digits == (1,) * 8

    def test_invalid_hex_character(self):
        T = number_type(BYTE_PAIR)
        assert T.from_string("10g", 16) is None

    def test_empty_string_is_zero(self):
        T = number_type(BYTE_PAIR)
        assert T.from_string("", 10) == 0

    def test_division_by_zero_is_zero(self):
        T = number_type(DECIMAL_32)
        assert T(10 ** 31) // T(0) == 0
        assert T(10 ** 31) % T(0) == 0

    def test_signed_division_by_zero_is_positive_zero(self):
        I = integer_type(BYTE_PAIR)
        assert (I(-5) // I(0)).positive
        assert (I(-5) % I(0)).positive
        assert I(-5) // I(0) == 0
