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
Polynomials in one variable with Rational coefficients.

Coefficients are listed from the constant term upwards, so
Polynomial([1, 0, 3]) is 3x^2 + 1. Trailing zero coefficients are dropped and
the zero polynomial has degree -1. Polynomials are immutable; the derivative
is computed once and kept.
"""

from typing import Iterable, List, Optional, Union

from .rational import ONE, ZERO, Rational, RationalLike


class Polynomial:

    __slots__ = ('_coefficients', '_derivative')

    def __init__(self, coefficients: Iterable[RationalLike] = ()):
        values = [Rational.value_of(c) for c in coefficients]
        while values and values[-1].is_zero():
            values.pop()
        self._coefficients = values
        self._derivative = None

    @classmethod
    def monomial(cls, coefficient: RationalLike, exponent: int) -> 'Polynomial':
        """coefficient * x^exponent"""
        if exponent < 0:
            raise ValueError(f"negative exponent: {exponent}")
        return cls([ZERO] * exponent + [coefficient])

    @classmethod
    def constant(cls, value: RationalLike) -> 'Polynomial':
        return cls([value])

    def get_degree(self) -> int:
        return len(self._coefficients) - 1

    def is_zero(self) -> bool:
        return not self._coefficients

    def get_coefficient(self, exponent: int) -> Rational:
        """Coefficient of x^exponent, zero above the degree"""
        if exponent < 0:
            raise IndexError(f"negative exponent: {exponent}")
        if exponent >= len(self._coefficients):
            return ZERO
        return self._coefficients[exponent]

    def get_coefficients(self) -> List[Rational]:
        return list(self._coefficients)

    def evaluate(self, point: RationalLike) -> Rational:
        """Horner's scheme"""
        point = Rational.value_of(point)
        result = ZERO
        for coefficient in reversed(self._coefficients):
            result = result.multiply(point).add(coefficient)
        return result

    def differentiate(self) -> 'Polynomial':
        if self._derivative is None:
            self._derivative = Polynomial(c.multiply(e) for e, c in enumerate(self._coefficients) if e > 0)
        return self._derivative

    def negate(self) -> 'Polynomial':
        return Polynomial(c.negate() for c in self._coefficients)

    def add(self, other: 'Polynomial') -> 'Polynomial':
        size = max(len(self._coefficients), len(other._coefficients))
        return Polynomial(self.get_coefficient(i).add(other.get_coefficient(i)) for i in range(size))

    def subtract(self, other: 'Polynomial') -> 'Polynomial':
        return self.add(other.negate())

    def scale(self, scalar: RationalLike) -> 'Polynomial':
        scalar = Rational.value_of(scalar)
        return Polynomial(c.multiply(scalar) for c in self._coefficients)

    def multiply(self, other: Union['Polynomial', RationalLike]) -> 'Polynomial':
        """Product with another polynomial or with a scalar"""
        if not isinstance(other, Polynomial):
            return self.scale(other)
        if self.is_zero() or other.is_zero():
            return Polynomial()
        product = [ZERO] * (len(self._coefficients) + len(other._coefficients) - 1)
        for i, a in enumerate(self._coefficients):
            for j, b in enumerate(other._coefficients):
                product[i + j] = product[i + j].add(a.multiply(b))
        return Polynomial(product)

    def compose(self, other: 'Polynomial') -> 'Polynomial':
        """self(other(x)), expanded with Horner's scheme"""
        result = Polynomial()
        for coefficient in reversed(self._coefficients):
            result = other.multiply(result).add(Polynomial.constant(coefficient))
        return result

    # Python protocol
    @staticmethod
    def _coerce(other) -> Optional['Polynomial']:
        if isinstance(other, Polynomial):
            return other
        value = Rational._coerce(other)
        return None if value is None else Polynomial.constant(value)

    def __call__(self, point: RationalLike) -> Rational:
        return self.evaluate(point)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._coefficients == other._coefficients

    def __hash__(self) -> int:
        return hash(tuple(self._coefficients))

    def __neg__(self):
        return self.negate()

    def __add__(self, other):
        other = Polynomial._coerce(other)
        return NotImplemented if other is None else self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        other = Polynomial._coerce(other)
        return NotImplemented if other is None else self.subtract(other)

    def __rsub__(self, other):
        other = Polynomial._coerce(other)
        return NotImplemented if other is None else other.subtract(self)

    def __mul__(self, other):
        other = Polynomial._coerce(other)
        return NotImplemented if other is None else self.multiply(other)

    __rmul__ = __mul__

    def __str__(self) -> str:
        if self.is_zero():
            return "0"
        terms = []
        for exponent in range(self.get_degree(), -1, -1):
            coefficient = self._coefficients[exponent]
            if coefficient.is_zero():
                continue
            sign = '-' if coefficient < ZERO else '+'
            magnitude = coefficient.abs()
            if exponent == 0:
                text = str(magnitude)
            else:
                power = 'x' if exponent == 1 else f"x^{exponent}"
                if magnitude == ONE:
                    text = power
                elif magnitude.is_integer():
                    text = f"{magnitude}{power}"
                else:
                    text = f"({magnitude}){power}"
            terms.append((sign, text))

        first_sign, first_text = terms[0]
        rendered = ('-' if first_sign == '-' else '') + first_text
        for sign, text in terms[1:]:
            rendered += f" {sign} {text}"
        return rendered

    def __repr__(self) -> str:
        return f"Polynomial([{', '.join(str(c) for c in self._coefficients)}])"
