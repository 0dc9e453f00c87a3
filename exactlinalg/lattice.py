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
"""Lattice basis reduction

Bases are given row-wise: every row of the matrix is one basis vector.
Both reducers only apply unimodular row operations (integer multiples of one
row subtracted from another, row swaps), so the reduced basis spans the same
lattice.

    LagrangeGauss  exact reduction of two-dimensional lattices
    LLL            Lenstra-Lenstra-Lovasz reduction for any number of rows
"""

import logging

from .errors import InvalidParameterError, InvalidShapeError
from .gram_schmidt import orthogonalize_rows
from .matrix import Matrix
from .names import DEFAULT_DELTA, MAX_DELTA, MIN_DELTA
from .rational import Rational, RationalLike

LOG = logging.getLogger(__name__)


class LagrangeGauss:
    """Gauss' algorithm for bases of two row vectors in the plane"""

    @staticmethod
    def supports(basis: Matrix) -> bool:
        return basis.get_row_count() == 2 and basis.get_column_count() == 2

    @staticmethod
    def reduce(basis: Matrix) -> Matrix:
        return LagrangeGauss.reduce_and_set(basis.copy())

    @staticmethod
    def reduce_and_set(basis: Matrix) -> Matrix:
        """
        Reduce the two rows of basis in place.

        The longer vector is reduced by the rounded projection onto the
        shorter one, then both swap roles. This repeats until the vector that
        would be the shorter one is no longer shorter than the other.

        Raises:
            InvalidShapeError: If basis is not 2x2
        """
        if not LagrangeGauss.supports(basis):
            raise InvalidShapeError(
                f"Lagrange-Gauss reduction needs a 2x2 basis, got {basis.get_row_count()}x{basis.get_column_count()}")

        first, second = basis.get_row(0), basis.get_row(1)
        if first.magnitude_sq() <= second.magnitude_sq():
            shorter, longer = first, second
        else:
            shorter, longer = second, first

        steps = 0
        while True:
            shorter_norm = shorter.magnitude_sq()
            factor = shorter.dot(longer).divide(shorter_norm).round()
            longer.subtract_and_set(shorter.scale(factor))
            longer_norm = longer.magnitude_sq()
            shorter, longer = longer, shorter
            steps += 1
            if shorter_norm <= longer_norm:
                break

        LOG.debug(f"Lagrange-Gauss: reduced after {steps} steps")
        return basis


class LLL:
    """
    LLL reduction with parameter delta in (1/4, 1].

    The Gram-Schmidt shadow basis and the coefficients mu are recomputed from
    scratch after every change of the basis.

    Example:
        LLL(Rational(3, 4)).reduce(Matrix([[1, 1, 1], [-1, 0, 2], [3, 5, 6]]))
        # [[0, 1, 0], [1, 0, 1], [-2, 0, 1]]
    """

    def __init__(self, delta: RationalLike = Rational(*DEFAULT_DELTA)):
        delta = Rational.value_of(delta)
        if delta <= Rational(*MIN_DELTA) or delta > Rational(*MAX_DELTA):
            raise InvalidParameterError(f"Delta must be in the range (1/4, 1], got {delta}")
        self._delta = delta

    def get_delta(self) -> Rational:
        return self._delta

    @staticmethod
    def supports(basis: Matrix) -> bool:
        """Rows can only be independent if there are no more rows than columns"""
        return 0 < basis.get_row_count() <= basis.get_column_count()

    def reduce(self, basis: Matrix) -> Matrix:
        return self.reduce_and_set(basis.copy())

    def reduce_and_set(self, basis: Matrix) -> Matrix:
        """
        Reduce the rows of basis in place.

        Args:
            basis: Linearly independent row vectors

        Returns:
            basis

        Raises:
            InvalidShapeError: If there are more rows than columns
            DivisionByZeroError: If the rows are linearly dependent
        """
        if not self.supports(basis):
            raise InvalidShapeError(
                f"LLL needs at most as many rows as columns, got {basis.get_row_count()}x{basis.get_column_count()}")

        rows = basis.get_row_count()
        shadow = Matrix.zero(rows, basis.get_column_count())
        mu = Matrix.zero(rows, rows)
        orthogonalize_rows(basis, shadow, mu)

        swaps = 0
        size_reductions = 0
        k = 1
        while k < rows:
            for j in range(k - 1, -1, -1):
                rounded = mu.get(k, j).round()
                if rounded.is_zero():
                    continue
                basis.get_row(k).subtract_and_set(basis.get_row(j).scale(rounded))
                size_reductions += 1
                LOG.debug(f"LLL: row {k} size reduced by {rounded} times row {j}")
                orthogonalize_rows(basis, shadow, mu)

            previous_norm = shadow.get_row(k - 1).magnitude_sq()
            coefficient = mu.get(k, k - 1)
            lovasz = shadow.get_row(k).magnitude_sq().add(coefficient.multiply(coefficient).multiply(previous_norm))

            if lovasz < self._delta.multiply(previous_norm):
                LOG.debug(f"LLL: Lovasz condition fails at row {k}, swapping rows {k - 1} and {k}")
                basis.swap_rows_and_set(k - 1, k)
                swaps += 1
                orthogonalize_rows(basis, shadow, mu)
                k = max(k - 1, 1)
            else:
                k += 1

        LOG.info(f"LLL reduction finished: {rows} rows, {swaps} swaps, {size_reductions} size reductions")
        return basis

    def __repr__(self) -> str:
        return f"LLL(delta={self._delta})"
