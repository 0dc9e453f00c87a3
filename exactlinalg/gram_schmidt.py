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
"""Gram-Schmidt orthogonalization (orthogonal, not normalized)"""

from .errors import DimensionMismatchError, InvalidParameterError
from .matrix import Matrix
from .names import ORTHOGONAL
from .rational import ONE, ZERO


def orthogonalize(matrix: Matrix, phase: str = ORTHOGONAL) -> Matrix:
    """
    Orthogonal basis from the columns of matrix.

    Column i of the result is column i of matrix minus its projections onto
    the result columns 0..i-1. A column that depends linearly on its
    predecessors becomes zero and any later projection onto it raises
    DivisionByZeroError.

    Args:
        matrix: Matrix whose columns are orthogonalized; it is not modified
        phase: Only ORTHOGONAL is available, normalization would leave the
            rationals

    Returns:
        New matrix of the same shape with pairwise orthogonal columns
    """
    if phase != ORTHOGONAL:
        raise InvalidParameterError(f"Unknown Gram-Schmidt phase '{phase}'")

    result = Matrix.zero(matrix.get_row_count(), matrix.get_column_count())
    for i in range(matrix.get_column_count()):
        column = matrix.get_column(i)
        orthogonal = column.copy()
        for j in range(i):
            orthogonal.subtract_and_set(column.project_onto(result.get_column(j)))
        result.set_column(i, orthogonal)
    return result


def orthogonalize_rows(basis: Matrix, shadow: Matrix, coefficients: Matrix) -> None:
    """
    Row-wise Gram-Schmidt into preallocated matrices.

    Writes the orthogonalized rows of basis into shadow and the coefficients
    mu[i][j] = dot(basis_i, shadow_j) / |shadow_j|^2 into coefficients, with
    mu[i][i] = 1 and zeros above the diagonal.
    """
    rows = basis.get_row_count()
    if shadow.get_row_count() != rows or shadow.get_column_count() != basis.get_column_count():
        raise DimensionMismatchError("Shadow basis must have the shape of the basis",
                                     (rows, basis.get_column_count()),
                                     (shadow.get_row_count(), shadow.get_column_count()))
    if coefficients.get_row_count() != rows or coefficients.get_column_count() != rows:
        raise DimensionMismatchError("Coefficient matrix must be square with one row per basis vector",
                                     (rows, rows), (coefficients.get_row_count(), coefficients.get_column_count()))

    for i in range(rows):
        row = basis.get_row(i)
        orthogonal = row.copy()
        for j in range(i):
            target = shadow.get_row(j)
            mu = row.gram_schmidt_coefficient(target)
            coefficients.set(i, j, mu)
            orthogonal.subtract_and_set(target.scale(mu))
        shadow.set_row(i, orthogonal)
        coefficients.set(i, i, ONE)
        for j in range(i + 1, rows):
            coefficients.set(i, j, ZERO)
