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
"""LU decomposition with partial pivoting over exact rationals"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .errors import DimensionMismatchError, InvalidShapeError
from .matrix import Matrix
from .rational import ONE, ZERO, Rational
from .vector import Vector

LOG = logging.getLogger(__name__)


@dataclass
class _LUCache:
    """
    Results derived from one factorization.

    refresh() swaps the whole object, so a partially filled cache never
    mixes results of two different factorizations.
    """
    computed: bool = False
    singular: bool = False
    lu: Optional[Matrix] = None
    pivot: Optional[List[int]] = None
    swaps: Optional[int] = None
    p: Optional[Matrix] = None
    l: Optional[Matrix] = None
    u: Optional[Matrix] = None
    determinant: Optional[Rational] = None
    inverse: Optional[Matrix] = None


class LUDecomposition:
    """
    P·A = L·U for a square matrix A.

    The factorization runs lazily on the first query and works on a copy of
    the source matrix. L has a unit diagonal; L and U are stored together in
    a single matrix (get_lu). After mutating the source matrix, call refresh()
    to drop the cached results.

    For a singular matrix all factor accessors return None and the
    determinant is exactly zero.

    Example:
        lu = LUDecomposition(Matrix([[0, 1], [1, 0]]))
        lu.get_swaps()        # 1
        lu.get_determinant()  # Rational(-1, 1)
    """

    def __init__(self, matrix: Matrix):
        if not matrix.is_square():
            raise InvalidShapeError(
                f"LU decomposition needs a square matrix, got {matrix.get_row_count()}x{matrix.get_column_count()}")
        self._matrix = matrix
        self._size = matrix.get_row_count()
        self._cache = _LUCache()

    def refresh(self) -> 'LUDecomposition':
        self._cache = _LUCache()
        return self

    def get_matrix(self) -> Matrix:
        return self._matrix

    def get_size(self) -> int:
        return self._size

    # -------------------------------------------------------------------------
    # Factorization
    # -------------------------------------------------------------------------

    def _factorize(self) -> _LUCache:
        if self._cache.computed:
            return self._cache

        size = self._size
        lu = self._matrix.copy()
        pivot = []
        swaps = 0

        for i in range(size):
            # largest absolute value at or below the diagonal
            pivot_row = -1
            largest = ZERO
            for row in range(i, size):
                value = lu.get(row, i).abs()
                if not value.is_zero() and value > largest:
                    largest = value
                    pivot_row = row

            if pivot_row == -1:
                LOG.debug(f"LU: no pivot in column {i}, matrix is singular")
                self._cache = _LUCache(computed=True, singular=True)
                return self._cache

            pivot.append(pivot_row)
            if pivot_row != i:
                lu.swap_rows_and_set(i, pivot_row)
                swaps += 1

            divisor = lu.get(i, i)
            for row in range(i + 1, size):
                lu.set(row, i, lu.get(row, i).divide(divisor))

            for row in range(i + 1, size):
                factor = lu.get(row, i)
                if factor.is_zero():
                    continue
                for column in range(i + 1, size):
                    lu.set(row, column, lu.get(row, column).subtract(factor.multiply(lu.get(i, column))))

        LOG.debug(f"LU: factorized {size}x{size} matrix with {swaps} row swaps")
        self._cache = _LUCache(computed=True, lu=lu, pivot=pivot, swaps=swaps)
        return self._cache

    def is_singular(self) -> bool:
        return self._factorize().singular

    def get_lu(self) -> Optional[Matrix]:
        """Combined factors: strictly lower part of L and upper part of U"""
        lu = self._factorize().lu
        return None if lu is None else lu.copy()

    def get_pivot(self) -> Optional[List[int]]:
        """Row swapped into position i during step i"""
        pivot = self._factorize().pivot
        return None if pivot is None else list(pivot)

    def get_swaps(self) -> Optional[int]:
        return self._factorize().swaps

    def get_p(self) -> Optional[Matrix]:
        cache = self._factorize()
        if cache.singular:
            return None
        if cache.p is None:
            p = Matrix.identity(self._size)
            for i, row in enumerate(cache.pivot):
                p.swap_rows_and_set(i, row)
            cache.p = p
        return cache.p.copy()

    def get_l(self) -> Optional[Matrix]:
        cache = self._factorize()
        if cache.singular:
            return None
        if cache.l is None:
            cache.l = cache.lu.map(lambda row, column, old: old if row > column else ONE if row == column else ZERO)
        return cache.l.copy()

    def get_u(self) -> Optional[Matrix]:
        cache = self._factorize()
        if cache.singular:
            return None
        if cache.u is None:
            cache.u = cache.lu.map(lambda row, column, old: old if row <= column else ZERO)
        return cache.u.copy()

    # -------------------------------------------------------------------------
    # Derived results
    # -------------------------------------------------------------------------

    def get_determinant(self) -> Rational:
        cache = self._factorize()
        if cache.determinant is None:
            if cache.singular:
                cache.determinant = ZERO
            else:
                determinant = ONE
                for i in range(self._size):
                    determinant = determinant.multiply(cache.lu.get(i, i))
                cache.determinant = determinant.negate() if cache.swaps & 1 else determinant
        return cache.determinant

    def _substitute(self, rhs: Vector) -> Vector:
        """Solve L·U·x = rhs, overwriting and returning rhs"""
        lu = self._cache.lu
        size = self._size

        for row in range(size):
            value = rhs.get(row)
            for column in range(row):
                value = value.subtract(lu.get(row, column).multiply(rhs.get(column)))
            rhs.set(row, value)

        for row in range(size - 1, -1, -1):
            value = rhs.get(row)
            for column in range(row + 1, size):
                value = value.subtract(lu.get(row, column).multiply(rhs.get(column)))
            rhs.set(row, value.divide(lu.get(row, row)))

        return rhs

    def get_inverse(self) -> Optional[Matrix]:
        """Inverse of the source matrix, or None when it is singular"""
        cache = self._factorize()
        if cache.singular:
            return None
        if cache.inverse is None:
            inverse = self.get_p()
            for column in range(self._size):
                self._substitute(inverse.get_column(column))
            cache.inverse = inverse
        return cache.inverse.copy()

    def solve(self, rhs: Vector) -> Optional[Vector]:
        """
        Solve A·x = rhs.

        Args:
            rhs: Right hand side with one element per row of A

        Returns:
            Solution vector, or None when A is singular

        Raises:
            DimensionMismatchError: If rhs does not match the size of A
        """
        if rhs.get_dimension() != self._size:
            raise DimensionMismatchError("Right hand side does not match the matrix size",
                                         self._size, rhs.get_dimension())
        if self.is_singular():
            return None
        return self._substitute(self.get_p().multiply(rhs))

    def __repr__(self) -> str:
        return f"LUDecomposition({self._size}x{self._size})"
