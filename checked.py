"""Checked arithmetic.

The default operations on ``Number`` and ``Integer`` never fail: they
wrap on overflow and return zero on division by zero.  This module
reports those events instead.

Two surfaces are provided:

``checked_*`` functions
    Return a ``Checked`` result holding the (silently wrapped) value and
    the ``Fault`` that occurred, if any.  Nothing is raised.

``Arithmetic``
    A policy object configured with ``OverflowMode`` and ``DivZeroMode``.
    In WRAP / ZERO mode it behaves like the plain operators; in ERROR
    mode it raises ``NumberOverflowError`` or
    ``NumberDivisionByZeroError``.

Overflow is detected from the engine's own carries, borrows and full
width products - never by comparing against native ints.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from integer import Integer
from layout import DivZeroMode, OverflowMode
from number import Number, add_digits, multiply_digits, subtract_digits

logger = logging.getLogger(__name__)

Value = Union[Number, Integer]


class Fault(str, Enum):
    OVERFLOW = "overflow"
    DIVISION_BY_ZERO = "division_by_zero"


class ArithmeticFaultError(ArithmeticError):
    """Raised by ``Arithmetic`` in ERROR mode."""

    def __init__(self, fault: Fault, operation: str, operands: tuple) -> None:
        self.fault = fault
        self.operation = operation
        self.operands = operands
        rendered = ", ".join(str(v) for v in operands)
        super().__init__(f"{fault.value} in {operation}({rendered})")


class NumberOverflowError(ArithmeticFaultError, OverflowError):
    pass


class NumberDivisionByZeroError(ArithmeticFaultError, ZeroDivisionError):
    pass


_ERRORS = {
    Fault.OVERFLOW: NumberOverflowError,
    Fault.DIVISION_BY_ZERO: NumberDivisionByZeroError,
}


@dataclass(frozen=True)
class Checked:
    """Outcome of a checked operation."""

    value: Value
    fault: Fault | None = None

    @property
    def ok(self) -> bool:
        return self.fault is None

    def unwrap(self, operation: str = "operation", operands: tuple = ()) -> Value:
        """Return the value, raising the matching error if a fault occurred."""
        if self.fault is not None:
            raise _ERRORS[self.fault](self.fault, operation, operands)
        return self.value


def _result(value: Value, fault: Fault | None, operation: str, a, b) -> Checked:
    if fault is not None:
        logger.debug("%s detected in %s(%s, %s)", fault.value, operation, a, b)
    return Checked(value, fault)


def _fits(product, count: int) -> bool:
    return product.most_significant_digit() <= count


# ---------------------------------------------------------------------------
# Checked operations
# ---------------------------------------------------------------------------

def checked_add(a: Value, b: Value | int) -> Checked:
    b = a.coerce(b)
    if isinstance(a, Integer):
        overflow = False
        if a.positive == b.positive:
            _, carry = add_digits(a.magnitude.to_array(), b.magnitude.to_array())
            overflow = bool(carry)
        return _result(a.add(b), Fault.OVERFLOW if overflow else None, "add", a, b)

    result, carry = add_digits(a.to_array(), b.to_array())
    return _result(
        type(a).from_array(result), Fault.OVERFLOW if carry else None, "add", a, b
    )


def checked_subtract(a: Value, b: Value | int) -> Checked:
    b = a.coerce(b)
    if isinstance(a, Integer):
        outcome = checked_add(a, b.negate())
        return _result(outcome.value, outcome.fault, "subtract", a, b)

    result, borrow = subtract_digits(a.to_array(), b.to_array())
    return _result(
        type(a).from_array(result), Fault.OVERFLOW if borrow else None, "subtract", a, b
    )


def checked_multiply(a: Value, b: Value | int) -> Checked:
    b = a.coerce(b)
    lhs, rhs = (a.magnitude, b.magnitude) if isinstance(a, Integer) else (a, b)
    product = multiply_digits(lhs.to_array(), rhs.to_array())
    fault = None if _fits(product, a.layout.count) else Fault.OVERFLOW
    return _result(a.multiply(b), fault, "multiply", a, b)


def checked_divide(a: Value, b: Value | int) -> Checked:
    b = a.coerce(b)
    fault = None if b else Fault.DIVISION_BY_ZERO
    return _result(a.divide(b), fault, "divide", a, b)


def checked_modulus(a: Value, b: Value | int) -> Checked:
    b = a.coerce(b)
    fault = None if b else Fault.DIVISION_BY_ZERO
    return _result(a.modulus(b), fault, "modulus", a, b)


def checked_power(a: Number, exponent: Number | int) -> Checked:
    """Square-and-multiply, flagging any overflow in a product that is used."""
    if isinstance(a, Integer):
        raise TypeError("power is only defined for unsigned numbers")
    exponent = requested = a.coerce(exponent)
    result = type(a)(1)
    b = a
    fault = None
    while exponent:
        exponent, bit = exponent.divmod_small(2)
        if bit:
            step = checked_multiply(result, b)
            result = step.value
            fault = fault or step.fault
        if exponent:
            step = checked_multiply(b, b)
            b = step.value
            fault = fault or step.fault

    return _result(result, fault, "power", a, requested)


# ---------------------------------------------------------------------------
# Policy object
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Arithmetic:
    """Arithmetic under an explicit overflow / division-by-zero policy."""

    overflow: OverflowMode = OverflowMode.WRAP
    div_zero: DivZeroMode = DivZeroMode.ZERO

    def _settle(self, outcome: Checked, operation: str, operands: tuple) -> Value:
        if outcome.fault is Fault.OVERFLOW and self.overflow == OverflowMode.ERROR:
            return outcome.unwrap(operation, operands)
        if outcome.fault is Fault.DIVISION_BY_ZERO and self.div_zero == DivZeroMode.ERROR:
            return outcome.unwrap(operation, operands)
        return outcome.value

    def add(self, a: Value, b: Value | int) -> Value:
        return self._settle(checked_add(a, b), "add", (a, b))

    def sub(self, a: Value, b: Value | int) -> Value:
        return self._settle(checked_subtract(a, b), "subtract", (a, b))

    def mul(self, a: Value, b: Value | int) -> Value:
        return self._settle(checked_multiply(a, b), "multiply", (a, b))

    def div(self, a: Value, b: Value | int) -> Value:
        return self._settle(checked_divide(a, b), "divide", (a, b))

    def mod(self, a: Value, b: Value | int) -> Value:
        return self._settle(checked_modulus(a, b), "modulus", (a, b))

    def pow(self, a: Number, exponent: Number | int) -> Number:
        return self._settle(checked_power(a, exponent), "power", (a, exponent))


LEGACY = Arithmetic()
STRICT = Arithmetic(overflow=OverflowMode.ERROR, div_zero=DivZeroMode.ERROR)
