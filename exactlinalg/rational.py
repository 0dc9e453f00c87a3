#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""
Exact rational numbers over arbitrary-precision integers.

A Rational stores a numerator and a positive denominator. Small fractions are
not reduced after every operation: the gcd is only divided out once the
numerator or the denominator reaches REDUCTION_THRESHOLD. Comparison, equality
and hashing cross-multiply or reduce on demand, so the reduction state never
shows up in results.
"""

import math
import numbers
from decimal import Decimal, InvalidOperation, localcontext
from fractions import Fraction
from typing import Optional, Union

import sympy

from .errors import DivisionByZeroError, InvalidParameterError
from .names import DEFAULT_DECIMAL_ROUNDING, REDUCTION_THRESHOLD

# Values accepted wherever a Rational is expected
RationalLike = Union['Rational', int, Fraction, Decimal, float, str, sympy.Rational]


def _as_int(value) -> int:
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"Expected an integer, got {type(value).__name__}")


def _integer_root(value: int, degree: int) -> int:
    """Floor of the degree-th root of a non-negative integer."""
    if value < 2:
        return value
    if degree == 2:
        return math.isqrt(value)
    # Newton iteration from above converges monotonically to the floor
    root = 1 << ((value.bit_length() + degree - 1) // degree)
    while True:
        candidate = ((degree - 1) * root + value // root**(degree - 1)) // degree
        if candidate >= root:
            return root
        root = candidate


def _exact_root(value: int, degree: int) -> Optional[int]:
    root = _integer_root(value, degree)
    return root if root**degree == value else None


class Rational:
    """
    Immutable exact fraction numerator / denominator.

    The denominator is always positive and zero is stored as 0 / 1. The
    numerator and denominator properties return the stored values, which may
    share a common factor below REDUCTION_THRESHOLD; use reduce() for the
    canonical form.
    """

    __slots__ = ('_numerator', '_denominator')

    def __init__(self, numerator: int = 0, denominator: int = 1):
        """
        Args:
            numerator: Integer numerator
            denominator: Integer denominator, must not be zero

        Raises:
            DivisionByZeroError: If denominator is zero
        """
        numerator = _as_int(numerator)
        denominator = _as_int(denominator)

        if denominator == 0:
            raise DivisionByZeroError(f"{numerator} / 0")

        if numerator == 0:
            denominator = 1
        elif denominator < 0:
            numerator = -numerator
            denominator = -denominator

        if abs(numerator) >= REDUCTION_THRESHOLD or denominator >= REDUCTION_THRESHOLD:
            gcd = math.gcd(numerator, denominator)
            numerator //= gcd
            denominator //= gcd

        self._numerator = numerator
        self._denominator = denominator

    # Factories
    @classmethod
    def of(cls, numerator: RationalLike, denominator: int = 1) -> 'Rational':
        """Create a Rational from an integer pair or from any single supported value."""
        if denominator == 1:
            return cls.value_of(numerator)
        return cls(numerator, denominator)

    @staticmethod
    def value_of(value: RationalLike) -> 'Rational':
        """
        Convert a supported value to a Rational.

        Floats are converted through the exact decimal expansion of their
        shortest representation, so 0.1 becomes 1/10 and not the binary
        approximation stored by the float.

        Args:
            value: Rational, int, Fraction, Decimal, float, sympy Rational, or
                a string such as "3", "-1.25", "3/4" or "3 / 4"

        Returns:
            Rational with the same value

        Raises:
            InvalidParameterError: For NaN or infinite values
            ValueError: For malformed strings
            TypeError: For unsupported types
        """
        if isinstance(value, Rational):
            return value
        if isinstance(value, numbers.Integral):
            return Rational(int(value))
        if isinstance(value, Fraction):
            return Rational(value.numerator, value.denominator)
        if isinstance(value, sympy.Rational):
            return Rational(int(value.p), int(value.q))
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise InvalidParameterError(f"Cannot convert {value} to a rational number")
            numerator, denominator = value.as_integer_ratio()
            return Rational(numerator, denominator)
        if isinstance(value, str):
            return Rational._parse(value)
        if isinstance(value, numbers.Real):
            value = float(value)
            if not math.isfinite(value):
                raise InvalidParameterError(f"Cannot convert {value} to a rational number")
            return Rational.value_of(Decimal(repr(value)))
        raise TypeError(f"Cannot convert {type(value).__name__} to Rational")

    @staticmethod
    def _parse(text: str) -> 'Rational':
        if '/' in text:
            numerator, denominator = text.split('/', 1)
            try:
                return Rational(int(numerator.strip()), int(denominator.strip()))
            except ValueError:
                raise ValueError(f"Invalid fraction format: {text}") from None
        try:
            value = Decimal(text.strip())
        except InvalidOperation:
            raise ValueError(f"Invalid number format: {text}") from None
        return Rational.value_of(value)

    # Accessors
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def signum(self) -> int:
        """Return -1, 0 or 1"""
        return (self._numerator > 0) - (self._numerator < 0)

    def is_zero(self) -> bool:
        return self._numerator == 0

    def is_one(self) -> bool:
        return self._numerator == self._denominator

    def is_integer(self) -> bool:
        return self._numerator % self._denominator == 0

    def reduce(self) -> 'Rational':
        """Return the same value in lowest terms."""
        gcd = math.gcd(self._numerator, self._denominator)
        if gcd == 1:
            return self
        return Rational(self._numerator // gcd, self._denominator // gcd)

    # Arithmetic
    def add(self, other: RationalLike) -> 'Rational':
        other = Rational.value_of(other)
        return Rational(self._numerator * other._denominator + other._numerator * self._denominator,
                        self._denominator * other._denominator)

    def subtract(self, other: RationalLike) -> 'Rational':
        return self.add(Rational.value_of(other).negate())

    def multiply(self, other: RationalLike) -> 'Rational':
        other = Rational.value_of(other)
        return Rational(self._numerator * other._numerator, self._denominator * other._denominator)

    def divide(self, other: RationalLike) -> 'Rational':
        other = Rational.value_of(other)
        if other._numerator == 0:
            raise DivisionByZeroError("Division by zero")
        return Rational(self._numerator * other._denominator, self._denominator * other._numerator)

    def negate(self) -> 'Rational':
        return Rational(-self._numerator, self._denominator)

    def invert(self) -> 'Rational':
        """Return 1 / self"""
        if self._numerator == 0:
            raise DivisionByZeroError("Division by zero")
        return Rational(self._denominator, self._numerator)

    def abs(self) -> 'Rational':
        return self.negate() if self._numerator < 0 else self

    def min(self, other: RationalLike) -> 'Rational':
        other = Rational.value_of(other)
        return self if self.compare_to(other) <= 0 else other

    def max(self, other: RationalLike) -> 'Rational':
        other = Rational.value_of(other)
        return self if self.compare_to(other) >= 0 else other

    def pow(self, exponent: RationalLike) -> 'Rational':
        """
        Raise to an integer or rational power.

        A negative exponent inverts first. A fractional exponent p/q is only
        accepted when the q-th root of this number is itself rational.

        Raises:
            DivisionByZeroError: Zero raised to a negative power
            InvalidParameterError: The result is not a rational number
        """
        if isinstance(exponent, numbers.Integral):
            exponent = int(exponent)
            if exponent < 0:
                return self.invert().pow(-exponent)
            return Rational(self._numerator**exponent, self._denominator**exponent)

        exponent = Rational.value_of(exponent).reduce()
        if exponent.is_integer():
            return self.pow(exponent._numerator)

        base = self.reduce()
        degree = exponent._denominator
        if base._numerator < 0 and degree % 2 == 0:
            raise InvalidParameterError(f"{self} has no real root of degree {degree}")

        numerator_root = _exact_root(abs(base._numerator), degree)
        denominator_root = _exact_root(base._denominator, degree)
        if numerator_root is None or denominator_root is None:
            raise InvalidParameterError(f"{self} has no exact rational root of degree {degree}")

        root = Rational(numerator_root if base._numerator >= 0 else -numerator_root, denominator_root)
        return root.pow(exponent._numerator)

    def shift_left(self, n: int) -> 'Rational':
        """Multiply by 2**n"""
        if n < 0:
            return self.shift_right(-n)
        return Rational(self._numerator << n, self._denominator)

    def shift_right(self, n: int) -> 'Rational':
        """Divide by 2**n"""
        if n < 0:
            return self.shift_left(-n)
        return Rational(self._numerator, self._denominator << n)

    # Rounding
    def floor(self) -> 'Rational':
        return Rational(self._numerator // self._denominator)

    def ceil(self) -> 'Rational':
        return Rational(-(-self._numerator // self._denominator))

    def round(self) -> 'Rational':
        """Round half up: floor(self + 1/2)"""
        return self.add(HALF).floor()

    # Conversions
    def to_int(self) -> int:
        """Integer part, truncated toward zero"""
        quotient = abs(self._numerator) // self._denominator
        return -quotient if self._numerator < 0 else quotient

    def to_fraction(self) -> Fraction:
        return Fraction(self._numerator, self._denominator)

    def to_decimal(self, scale: int, rounding: str = DEFAULT_DECIMAL_ROUNDING) -> Decimal:
        """
        Convert to a Decimal with a fixed number of fractional digits.

        The exact value is rounded once, so every decimal rounding mode
        behaves as it would on the infinitely precise quotient.

        Args:
            scale: Number of digits after the decimal point (may be negative)
            rounding: One of the decimal.ROUND_* modes

        Returns:
            Decimal with exponent -scale
        """
        numerator = self._numerator
        denominator = self._denominator
        if scale >= 0:
            numerator *= 10**scale
        else:
            denominator *= 10**-scale

        quotient, remainder = divmod(abs(numerator), denominator)

        # One digit standing in for the discarded tail; it falls in the same
        # rounding class (zero, below half, half, above half) as the remainder
        if remainder == 0:
            tail = ''
        elif 2 * remainder < denominator:
            tail = '.1'
        elif 2 * remainder == denominator:
            tail = '.5'
        else:
            tail = '.9'
        sign = '-' if numerator < 0 else ''

        with localcontext() as context:
            context.prec = len(str(quotient)) + 2
            rounded = Decimal(f"{sign}{quotient}{tail}").quantize(Decimal(1), rounding=rounding)
        if rounded.is_zero():
            rounded = Decimal(0)
        return Decimal(f"{rounded}E{-scale}")

    def to_string(self, scale: Optional[int] = None) -> str:
        """
        Render as a fraction, or as a plain decimal number when scale is given.

        With a scale the value is rounded half up to that many fractional
        digits and trailing zeros are dropped.
        """
        if scale is None:
            return str(self)
        value = self.to_decimal(scale, DEFAULT_DECIMAL_ROUNDING)
        with localcontext() as context:
            context.prec = max(len(value.as_tuple().digits), 1)
            value = value.normalize()
        return format(value, 'f')

    # Comparison
    def compare_to(self, other: RationalLike) -> int:
        """Return -1, 0 or 1 by cross-multiplication"""
        other = Rational.value_of(other)
        left = self._numerator * other._denominator
        right = other._numerator * self._denominator
        return (left > right) - (left < right)

    @staticmethod
    def _coerce(other) -> Optional['Rational']:
        if isinstance(other, str):
            return None
        try:
            return Rational.value_of(other)
        except (TypeError, ValueError):
            return None

    def __eq__(self, other) -> bool:
        other = Rational._coerce(other)
        if other is None:
            return NotImplemented
        return self.compare_to(other) == 0

    def __lt__(self, other) -> bool:
        other = Rational._coerce(other)
        if other is None:
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other) -> bool:
        other = Rational._coerce(other)
        if other is None:
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other) -> bool:
        other = Rational._coerce(other)
        if other is None:
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other) -> bool:
        other = Rational._coerce(other)
        if other is None:
            return NotImplemented
        return self.compare_to(other) >= 0

    def __hash__(self) -> int:
        # Same hash as the equal int / Fraction / Decimal / float
        return hash(Fraction(self._numerator, self._denominator))

    # Python number protocol
    def __add__(self, other):
        other = Rational._coerce(other)
        return NotImplemented if other is None else self.add(other)

    def __radd__(self, other):
        other = Rational._coerce(other)
        return NotImplemented if other is None else other.add(self)

    def __sub__(self, other):
        other = Rational._coerce(other)
        return NotImplemented if other is None else self.subtract(other)

    def __rsub__(self, other):
        other = Rational._coerce(other)
        return NotImplemented if other is None else other.subtract(self)

    def __mul__(self, other):
        other = Rational._coerce(other)
        return NotImplemented if other is None else self.multiply(other)

    def __rmul__(self, other):
        other = Rational._coerce(other)
        return NotImplemented if other is None else other.multiply(self)

    def __truediv__(self, other):
        other = Rational._coerce(other)
        return NotImplemented if other is None else self.divide(other)

    def __rtruediv__(self, other):
        other = Rational._coerce(other)
        return NotImplemented if other is None else other.divide(self)

    def __pow__(self, exponent):
        return self.pow(exponent)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    def __bool__(self) -> bool:
        return self._numerator != 0

    def __int__(self) -> int:
        return self.to_int()

    def __trunc__(self) -> int:
        return self.to_int()

    def __floor__(self) -> int:
        return self._numerator // self._denominator

    def __ceil__(self) -> int:
        return -(-self._numerator // self._denominator)

    def __round__(self, ndigits: Optional[int] = None):
        """Half up like round(); an int without ndigits, else a Rational"""
        if ndigits is None:
            return self.round().to_int()
        scale = Rational(10).pow(ndigits)
        return self.multiply(scale).round().divide(scale)

    def __float__(self) -> float:
        # int / int true division is correctly rounded
        return self._numerator / self._denominator

    def __str__(self) -> str:
        reduced = self.reduce()
        if reduced._denominator == 1:
            return str(reduced._numerator)
        return f"{reduced._numerator} / {reduced._denominator}"

    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"


ZERO = Rational(0, 1)
HALF = Rational(1, 2)
ONE = Rational(1, 1)
MINUS_ONE = Rational(-1, 1)

Rational.ZERO = ZERO
Rational.HALF = HALF
Rational.ONE = ONE
Rational.MINUS_ONE = MINUS_ONE
