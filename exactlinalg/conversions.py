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
"""Conversion between exactlinalg types and fractions, numpy and sympy

numpy arrays are converted element by element. Exact exports use object
arrays of Fraction; float arrays are only produced on request. Floats coming
from numpy are read through their shortest decimal representation (see
Rational.value_of).
"""

from fractions import Fraction

import numpy as np
import sympy

from .errors import InvalidShapeError
from .matrix import Matrix
from .polynomial import Polynomial
from .rational import Rational, RationalLike
from .vector import Vector


# =============================================================================
# Scalars
# =============================================================================

def rational_to_fraction(value: RationalLike) -> Fraction:
    return Rational.value_of(value).to_fraction()


def rational_from_fraction(fraction: Fraction) -> Rational:
    return Rational(fraction.numerator, fraction.denominator)


def rational_to_sympy(value: RationalLike) -> sympy.Rational:
    value = Rational.value_of(value)
    return sympy.Rational(value.numerator, value.denominator)


# =============================================================================
# numpy
# =============================================================================

def matrix_from_numpy(array) -> Matrix:
    """Matrix from a 2-D array (or nested sequences numpy accepts)"""
    array = np.asarray(array)
    if array.ndim != 2:
        raise InvalidShapeError(f"Expected a 2-D array, got {array.ndim} dimensions")
    rows, columns = array.shape
    return Matrix.from_generator(rows, columns, lambda row, column: Rational.value_of(array[row, column]))


def matrix_to_numpy(matrix: Matrix, exact: bool = True) -> np.ndarray:
    """
    Array with the elements of matrix.

    Args:
        matrix: Matrix to export
        exact: If True, return an object array of Fraction, otherwise a
            float64 array

    Returns:
        Array of shape (rows, columns)
    """
    shape = (matrix.get_row_count(), matrix.get_column_count())
    if exact:
        result = np.empty(shape, dtype=object)
        for row in range(shape[0]):
            for column in range(shape[1]):
                result[row, column] = matrix.get(row, column).to_fraction()
        return result
    result = np.zeros(shape, dtype=np.float64)
    for row in range(shape[0]):
        for column in range(shape[1]):
            result[row, column] = float(matrix.get(row, column))
    return result


def vector_from_numpy(array) -> Vector:
    array = np.asarray(array)
    if array.ndim != 1:
        raise InvalidShapeError(f"Expected a 1-D array, got {array.ndim} dimensions")
    return Vector.from_generator(array.shape[0], lambda index: Rational.value_of(array[index]))


def vector_to_numpy(vector: Vector, exact: bool = True) -> np.ndarray:
    if exact:
        result = np.empty(vector.get_dimension(), dtype=object)
        for index, value in enumerate(vector):
            result[index] = value.to_fraction()
        return result
    return np.array([float(value) for value in vector], dtype=np.float64)


# =============================================================================
# sympy
# =============================================================================

def matrix_to_sympy(matrix: Matrix) -> sympy.Matrix:
    return sympy.Matrix(matrix.get_row_count(), matrix.get_column_count(),
                        lambda row, column: rational_to_sympy(matrix.get(row, column)))


def matrix_from_sympy(matrix: sympy.MatrixBase) -> Matrix:
    """Matrix from a sympy matrix with rational entries"""
    return Matrix.from_generator(matrix.rows, matrix.cols, lambda row, column: Rational.value_of(matrix[row, column]))


def polynomial_to_sympy(polynomial: Polynomial, symbol: sympy.Symbol = sympy.Symbol('x')) -> sympy.Poly:
    coefficients = [rational_to_sympy(c) for c in reversed(polynomial.get_coefficients())]
    return sympy.Poly(coefficients or [0], symbol, domain='QQ')


def polynomial_from_sympy(polynomial: sympy.Poly) -> Polynomial:
    """Polynomial from a univariate sympy Poly over the rationals"""
    return Polynomial(Rational.value_of(c) for c in reversed(polynomial.all_coeffs()))
