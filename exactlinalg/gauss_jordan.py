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
"""Gauss-Jordan elimination on augmented matrices

The coefficient block is formed by the columns left of the split, everything
right of it is carried along (right hand sides, an identity for inversion).

The forward pass takes the first row with a non-zero entry as pivot, scales
the pivot row so that the pivot becomes 1 and clears the entries below it.
Columns without a pivot are skipped. The REDUCED phase also clears the
entries above every pivot.

Example:
    system = Matrix([[1, 2], [3, 4]]).merge_to_augmented(Matrix([[5], [6]]))
    solve(system).get_right()   # [[-4], [9 / 2]]
"""

import logging
from typing import List, Optional

from .errors import InvalidParameterError, InvalidShapeError
from .matrix import Matrix
from .names import ECHELON, GAUSS_JORDAN_PHASES, REDUCED
from .rational import ONE

LOG = logging.getLogger(__name__)


def _check_phase(phase: str) -> None:
    if phase not in GAUSS_JORDAN_PHASES:
        raise InvalidParameterError(f"Unknown Gauss-Jordan phase '{phase}', use one of {GAUSS_JORDAN_PHASES}")


def _resolve_split(matrix: Matrix, split: Optional[int]) -> int:
    if split is not None:
        if not 0 <= split <= matrix.get_column_count():
            raise InvalidShapeError(f"Split {split} outside of 0..{matrix.get_column_count()}")
        return split
    if matrix.is_augmented():
        return matrix.get_split()
    raise InvalidShapeError("Gauss-Jordan needs an augmented matrix or an explicit split")


def _eliminate(matrix: Matrix, split: int, reduced: bool) -> List[int]:
    """
    Row reduce matrix in place.

    Returns:
        Pivot row of every coefficient column, -1 for columns without pivot
    """
    rows = matrix.get_row_count()
    pivots = [-1] * split
    row = 0
    column = 0

    while row < rows and column < split:
        pivot_row = next((r for r in range(row, rows) if not matrix.get(r, column).is_zero()), None)
        if pivot_row is None:
            LOG.debug(f"Gauss-Jordan: no pivot in column {column}")
            column += 1
            continue
        if pivot_row != row:
            matrix.swap_rows_and_set(row, pivot_row)
        pivots[column] = row

        main = matrix.get_row(row)
        main.scale_and_set(ONE.divide(main.get(column)))

        for r in range(row + 1, rows):
            value = matrix.get(r, column)
            if value.is_zero():
                continue
            matrix.get_row(r).subtract_and_set(main.scale(value))

        row += 1
        column += 1

    if reduced:
        for column in range(split - 1, -1, -1):
            pivot_row = pivots[column]
            if pivot_row == -1:
                continue
            main = matrix.get_row(pivot_row)
            for r in range(pivot_row):
                value = matrix.get(r, column)
                if value.is_zero():
                    continue
                matrix.get_row(r).subtract_and_set(main.scale(value))

    LOG.debug(f"Gauss-Jordan: rank {row} of {rows}x{split} coefficient block")
    return pivots


def solve_and_set(matrix: Matrix, phase: str = REDUCED, split: Optional[int] = None) -> Matrix:
    """
    Row reduce matrix in place.

    Args:
        matrix: Augmented matrix, or any matrix together with split
        phase: ECHELON or REDUCED
        split: Number of coefficient columns. Defaults to the split of an
            augmented matrix.

    Returns:
        The reduced matrix as augmented matrix. This is matrix itself when it
        is augmented already, otherwise an augmented view onto it.

    Raises:
        InvalidParameterError: For an unknown phase
        InvalidShapeError: If no split is available
    """
    _check_phase(phase)
    split = _resolve_split(matrix, split)
    _eliminate(matrix, split, phase == REDUCED)
    return matrix if matrix.is_augmented() else matrix.split_to_augmented(split)


def solve(matrix: Matrix, phase: str = REDUCED, split: Optional[int] = None) -> Matrix:
    """Like solve_and_set, but on a copy; the result is augmented with the same split"""
    _check_phase(phase)
    split = _resolve_split(matrix, split)
    return solve_and_set(matrix.copy().split_to_augmented(split), phase)


def rank(matrix: Matrix) -> int:
    """Number of pivots in the echelon form of matrix"""
    pivots = _eliminate(matrix.copy(), matrix.get_column_count(), reduced=False)
    return sum(1 for pivot in pivots if pivot != -1)


def invert(matrix: Matrix) -> Optional[Matrix]:
    """
    Inverse by reducing [matrix | I] to [I | inverse].

    Returns:
        Inverse, or None for a singular matrix

    Raises:
        InvalidShapeError: For non-square matrices
    """
    if not matrix.is_square():
        raise InvalidShapeError(
            f"Cannot invert a {matrix.get_row_count()}x{matrix.get_column_count()} matrix")
    size = matrix.get_row_count()
    system = matrix.copy().merge_to_augmented(Matrix.identity(size))
    pivots = _eliminate(system, size, reduced=True)
    if -1 in pivots:
        LOG.debug("Gauss-Jordan: matrix is singular, no inverse")
        return None
    return system.get_right()
