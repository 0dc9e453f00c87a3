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
Matrices of exact rational numbers.

Like Vector, a Matrix delegates element access to a storage object with the
capabilities row count, column count, get and set:

- DenseMatrixStorage owns the elements in row-major lists
- ViewMatrixStorage forwards to a getter and a setter; sub() uses it to expose
  a rectangle of another matrix without copying
- AugmentedMatrixStorage places two matrices side by side. Columns below the
  split belong to the left matrix, the others to the right matrix.

Rows and columns handed out by get_row() and get_column() are vector views:
writing to them writes to the matrix.
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Union

from .errors import DimensionMismatchError, DivisionByZeroError, InvalidShapeError
from .rational import ONE, ZERO, Rational, RationalLike
from .vector import Vector

# generator(row, column) -> value
Generator = Callable[[int, int], Rational]
# mapper(row, column, old_value) -> new value
Mapper = Callable[[int, int, Rational], Rational]
# setter(row, column, value)
Setter = Callable[[int, int, Rational], None]


# Accessors for rows and columns, built from plain get/set callables
def row_getter(get: Generator, row: int) -> Callable[[int], Rational]:
    return lambda column: get(row, column)


def row_setter(set_value: Setter, row: int) -> Callable[[int, Rational], None]:
    return lambda column, value: set_value(row, column, value)


def column_getter(get: Generator, column: int) -> Callable[[int], Rational]:
    return lambda row: get(row, column)


def column_setter(set_value: Setter, column: int) -> Callable[[int, Rational], None]:
    return lambda row, value: set_value(row, column, value)


class MatrixStorage(ABC):
    """Element store behind a Matrix"""

    @abstractmethod
    def get_row_count(self) -> int:
        pass

    @abstractmethod
    def get_column_count(self) -> int:
        pass

    @abstractmethod
    def get(self, row: int, column: int) -> Rational:
        pass

    @abstractmethod
    def set(self, row: int, column: int, value: Rational) -> None:
        pass

    def _check_index(self, row: int, column: int) -> None:
        row_count, column_count = self.get_row_count(), self.get_column_count()
        if not (0 <= row < row_count and 0 <= column < column_count):
            raise IndexError(f"({row}, {column}) out of range for {row_count}x{column_count} matrix")


class DenseMatrixStorage(MatrixStorage):

    __slots__ = ('_rows', '_column_count')

    def __init__(self, rows: List[List[Rational]], column_count: int):
        self._rows = rows
        self._column_count = column_count

    def get_row_count(self) -> int:
        return len(self._rows)

    def get_column_count(self) -> int:
        return self._column_count

    def get(self, row: int, column: int) -> Rational:
        self._check_index(row, column)
        return self._rows[row][column]

    def set(self, row: int, column: int, value: Rational) -> None:
        self._check_index(row, column)
        self._rows[row][column] = value


class ViewMatrixStorage(MatrixStorage):
    """Storage-free window onto elements owned by someone else"""

    __slots__ = ('_row_count', '_column_count', '_getter', '_setter')

    def __init__(self, row_count: int, column_count: int, getter: Generator, setter: Setter):
        self._row_count = row_count
        self._column_count = column_count
        self._getter = getter
        self._setter = setter

    def get_row_count(self) -> int:
        return self._row_count

    def get_column_count(self) -> int:
        return self._column_count

    def get(self, row: int, column: int) -> Rational:
        self._check_index(row, column)
        return self._getter(row, column)

    def set(self, row: int, column: int, value: Rational) -> None:
        self._check_index(row, column)
        self._setter(row, column, value)


class AugmentedMatrixStorage(MatrixStorage):
    """Columns of left followed by the columns of right; split = left column count"""

    __slots__ = ('left', 'right', 'split')

    def __init__(self, left: 'Matrix', right: 'Matrix'):
        if left.get_row_count() != right.get_row_count():
            raise DimensionMismatchError("Merging two matrices with different row count",
                                         left.get_row_count(), right.get_row_count())
        self.left = left
        self.right = right
        self.split = left.get_column_count()

    def get_row_count(self) -> int:
        return self.left.get_row_count()

    def get_column_count(self) -> int:
        return self.split + self.right.get_column_count()

    def get(self, row: int, column: int) -> Rational:
        self._check_index(row, column)
        if column < self.split:
            return self.left.get(row, column)
        return self.right.get(row, column - self.split)

    def set(self, row: int, column: int, value: Rational) -> None:
        self._check_index(row, column)
        if column < self.split:
            self.left.set(row, column, value)
        else:
            self.right.set(row, column - self.split, value)


class Matrix:
    """
    Matrix of Rationals.

    Matrix([[1, 2], [3, '1/2']]) builds an owned dense matrix from nested
    values or from Vectors. The other factories are from_generator, from_rows,
    from_columns, zero, identity and view.
    """

    __slots__ = ('_storage',)

    def __init__(self, rows: Iterable[Iterable[RationalLike]] = ()):
        data = [[Rational.value_of(value) for value in row] for row in rows]
        column_count = len(data[0]) if data else 0
        for row in data:
            if len(row) != column_count:
                raise DimensionMismatchError("Rows have different lengths", column_count, len(row))
        self._storage = DenseMatrixStorage(data, column_count)

    @classmethod
    def _wrap(cls, storage: MatrixStorage) -> 'Matrix':
        matrix = cls.__new__(cls)
        matrix._storage = storage
        return matrix

    # Factories
    @classmethod
    def from_generator(cls, rows: int, columns: int, generator: Generator) -> 'Matrix':
        if rows < 0:
            raise ValueError(f"negative row count: {rows}")
        if columns < 0:
            raise ValueError(f"negative column count: {columns}")
        data = [[Rational.value_of(generator(row, column)) for column in range(columns)] for row in range(rows)]
        return cls._wrap(DenseMatrixStorage(data, columns))

    @classmethod
    def from_rows(cls, *rows: Vector) -> 'Matrix':
        if not rows:
            raise InvalidShapeError("At least one row is required")
        columns = rows[0].get_dimension()
        for row in rows:
            if row.get_dimension() != columns:
                raise DimensionMismatchError("Rows have different lengths", columns, row.get_dimension())
        return cls.from_generator(len(rows), columns, lambda row, column: rows[row].get(column))

    @classmethod
    def from_columns(cls, *columns: Vector) -> 'Matrix':
        return cls.from_rows(*columns).transpose()

    @classmethod
    def zero(cls, rows: int, columns: int) -> 'Matrix':
        return cls.from_generator(rows, columns, lambda row, column: ZERO)

    @classmethod
    def identity(cls, size: int) -> 'Matrix':
        return cls.from_generator(size, size, lambda row, column: ONE if row == column else ZERO)

    @classmethod
    def view(cls, rows: int, columns: int, getter: Generator, setter: Setter) -> 'Matrix':
        """Matrix without own storage, reading through getter and writing through setter"""
        return cls._wrap(ViewMatrixStorage(rows, columns, getter, setter))

    # Shape
    def get_row_count(self) -> int:
        return self._storage.get_row_count()

    def get_column_count(self) -> int:
        return self._storage.get_column_count()

    def is_square(self) -> bool:
        return self.get_row_count() == self.get_column_count()

    def _check_same_shape(self, other: 'Matrix', action: str) -> None:
        if self.get_row_count() != other.get_row_count() or self.get_column_count() != other.get_column_count():
            raise DimensionMismatchError(f"{action} two matrices with different dimensions",
                                         (self.get_row_count(), self.get_column_count()),
                                         (other.get_row_count(), other.get_column_count()))

    # Element access
    def get(self, row: int, column: int) -> Rational:
        return self._storage.get(row, column)

    def set(self, row: int, column: int, value: RationalLike) -> 'Matrix':
        self._storage.set(row, column, Rational.value_of(value))
        return self

    def with_value(self, row: int, column: int, value: RationalLike) -> 'Matrix':
        return self.copy().set(row, column, value)

    def to_list(self) -> List[List[Rational]]:
        return [[self.get(row, column) for column in range(self.get_column_count())]
                for row in range(self.get_row_count())]

    # Mapping
    def map(self, mapper: Mapper) -> 'Matrix':
        return Matrix.from_generator(self.get_row_count(), self.get_column_count(),
                                     lambda row, column: mapper(row, column, self.get(row, column)))

    def map_and_set(self, mapper: Mapper) -> 'Matrix':
        for row in range(self.get_row_count()):
            for column in range(self.get_column_count()):
                self.set(row, column, mapper(row, column, self.get(row, column)))
        return self

    def map_row(self, row: int, mapper: Callable[[int, Rational], Rational]) -> 'Matrix':
        return self.copy().map_row_and_set(row, mapper)

    def map_row_and_set(self, row: int, mapper: Callable[[int, Rational], Rational]) -> 'Matrix':
        for column in range(self.get_column_count()):
            self.set(row, column, mapper(column, self.get(row, column)))
        return self

    def map_column(self, column: int, mapper: Callable[[int, Rational], Rational]) -> 'Matrix':
        return self.copy().map_column_and_set(column, mapper)

    def map_column_and_set(self, column: int, mapper: Callable[[int, Rational], Rational]) -> 'Matrix':
        for row in range(self.get_row_count()):
            self.set(row, column, mapper(row, self.get(row, column)))
        return self

    # Rows and columns
    def get_row(self, row: int) -> Vector:
        """View of a row; writes go to this matrix"""
        if not 0 <= row < self.get_row_count():
            raise IndexError(f"row {row} out of range")
        return Vector.view(self.get_column_count(), row_getter(self.get, row), row_setter(self.set, row))

    def get_column(self, column: int) -> Vector:
        """View of a column; writes go to this matrix"""
        if not 0 <= column < self.get_column_count():
            raise IndexError(f"column {column} out of range")
        return Vector.view(self.get_row_count(), column_getter(self.get, column), column_setter(self.set, column))

    def get_row_copy(self, row: int) -> Vector:
        return Vector.from_generator(self.get_column_count(), row_getter(self.get, row))

    def get_column_copy(self, column: int) -> Vector:
        return Vector.from_generator(self.get_row_count(), column_getter(self.get, column))

    def get_rows(self) -> List[Vector]:
        return [self.get_row(row) for row in range(self.get_row_count())]

    def get_columns(self) -> List[Vector]:
        return [self.get_column(column) for column in range(self.get_column_count())]

    def get_rows_copy(self) -> List[Vector]:
        return [self.get_row_copy(row) for row in range(self.get_row_count())]

    def get_columns_copy(self) -> List[Vector]:
        return [self.get_column_copy(column) for column in range(self.get_column_count())]

    def set_row(self, row: int, value: Vector) -> 'Matrix':
        if value.get_dimension() != self.get_column_count():
            raise DimensionMismatchError("Row length differs from the column count", self.get_column_count(),
                                         value.get_dimension())
        return self.map_row_and_set(row, lambda index, old: value.get(index))

    def set_column(self, column: int, value: Vector) -> 'Matrix':
        if value.get_dimension() != self.get_row_count():
            raise DimensionMismatchError("Column length differs from the row count", self.get_row_count(),
                                         value.get_dimension())
        return self.map_column_and_set(column, lambda index, old: value.get(index))

    def with_row(self, row: int, value: Vector) -> 'Matrix':
        return self.copy().set_row(row, value)

    def with_column(self, column: int, value: Vector) -> 'Matrix':
        return self.copy().set_column(column, value)

    # Swaps
    def swap(self, r1: int, c1: int, r2: int, c2: int) -> 'Matrix':
        return self.copy().swap_and_set(r1, c1, r2, c2)

    def swap_and_set(self, r1: int, c1: int, r2: int, c2: int) -> 'Matrix':
        old_value = self.get(r1, c1)
        return self.set(r1, c1, self.get(r2, c2)).set(r2, c2, old_value)

    def swap_rows(self, r1: int, r2: int) -> 'Matrix':
        return self.copy().swap_rows_and_set(r1, r2)

    def swap_rows_and_set(self, r1: int, r2: int) -> 'Matrix':
        if r1 == r2:
            return self
        old_row = self.get_row_copy(r1)
        self.set_row(r1, self.get_row(r2))
        return self.set_row(r2, old_row)

    def swap_columns(self, c1: int, c2: int) -> 'Matrix':
        return self.copy().swap_columns_and_set(c1, c2)

    def swap_columns_and_set(self, c1: int, c2: int) -> 'Matrix':
        if c1 == c2:
            return self
        old_column = self.get_column_copy(c1)
        self.set_column(c1, self.get_column(c2))
        return self.set_column(c2, old_column)

    # Transposition
    def transpose(self) -> 'Matrix':
        return Matrix.from_generator(self.get_column_count(), self.get_row_count(),
                                     lambda row, column: self.get(column, row))

    def transpose_and_set(self) -> 'Matrix':
        if not self.is_square():
            raise InvalidShapeError(
                f"Cannot transpose a {self.get_row_count()}x{self.get_column_count()} matrix in place")
        # Swap across the diagonal so that no element is read after being overwritten
        for row in range(self.get_row_count()):
            for column in range(row + 1, self.get_column_count()):
                self.swap_and_set(row, column, column, row)
        return self

    # Arithmetic
    def add(self, other: 'Matrix') -> 'Matrix':
        self._check_same_shape(other, "Adding")
        return self.map(lambda row, column, old: old.add(other.get(row, column)))

    def add_and_set(self, other: 'Matrix') -> 'Matrix':
        self._check_same_shape(other, "Adding")
        return self.map_and_set(lambda row, column, old: old.add(other.get(row, column)))

    def subtract(self, other: 'Matrix') -> 'Matrix':
        self._check_same_shape(other, "Subtracting")
        return self.map(lambda row, column, old: old.subtract(other.get(row, column)))

    def subtract_and_set(self, other: 'Matrix') -> 'Matrix':
        self._check_same_shape(other, "Subtracting")
        return self.map_and_set(lambda row, column, old: old.subtract(other.get(row, column)))

    def multiply(self, other: Union['Matrix', Vector, RationalLike]) -> Union['Matrix', Vector]:
        """
        Multiply by a matrix, a column vector or a scalar.

        Args:
            other: Matrix with as many rows as this matrix has columns, Vector
                with as many elements as this matrix has columns, or a scalar

        Returns:
            New matrix, or new vector for a vector operand

        Raises:
            DimensionMismatchError: If the inner dimensions differ
        """
        if isinstance(other, Matrix):
            if self.get_column_count() != other.get_row_count():
                raise DimensionMismatchError("Multiplying two matrices with disallowed dimensions",
                                             self.get_column_count(), other.get_row_count())
            rows = self.get_rows()
            columns = other.get_columns()
            return Matrix.from_generator(len(rows), len(columns), lambda row, column: rows[row].dot(columns[column]))

        if isinstance(other, Vector):
            if self.get_column_count() != other.get_dimension():
                raise DimensionMismatchError("Vector length should equal the number of matrix columns",
                                             self.get_column_count(), other.get_dimension())
            return Vector.from_generator(self.get_row_count(), lambda row: self.get_row(row).dot(other))

        scalar = Rational.value_of(other)
        return self.map(lambda row, column, old: old.multiply(scalar))

    def multiply_and_set(self, other: Union['Matrix', Vector, RationalLike]) -> Union['Matrix', Vector]:
        """
        In-place variant of multiply.

        A matrix operand must be square so that the product keeps the shape of
        this matrix. A vector operand is overwritten with matrix times vector,
        which needs a square matrix as well.
        """
        if isinstance(other, Matrix):
            if not other.is_square() or other.get_row_count() != self.get_column_count():
                raise DimensionMismatchError("Multiplying mutable matrix with disallowed dimensions",
                                             (self.get_column_count(), self.get_column_count()),
                                             (other.get_row_count(), other.get_column_count()))
            product = self.multiply(other)
            return self.map_and_set(lambda row, column, old: product.get(row, column))

        if isinstance(other, Vector):
            if not self.is_square():
                raise InvalidShapeError("In-place multiplication of a vector needs a square matrix")
            product = self.multiply(other)
            return other.map_and_set(lambda index, old: product.get(index))

        scalar = Rational.value_of(other)
        return self.map_and_set(lambda row, column, old: old.multiply(scalar))

    def divide(self, scalar: RationalLike) -> 'Matrix':
        scalar = Rational.value_of(scalar)
        return self.map(lambda row, column, old: old.divide(scalar))

    def divide_and_set(self, scalar: RationalLike) -> 'Matrix':
        scalar = Rational.value_of(scalar)
        return self.map_and_set(lambda row, column, old: old.divide(scalar))

    # Decomposition based results
    def lu_decompose(self):
        """Return a fresh LUDecomposition of this matrix"""
        from .lu_decomposition import LUDecomposition
        return LUDecomposition(self)

    def invert(self) -> Optional['Matrix']:
        """Inverse, or None for a singular matrix"""
        return self.lu_decompose().get_inverse()

    def invert_and_set(self) -> 'Matrix':
        inverse = self.invert()
        if inverse is None:
            raise DivisionByZeroError("Cannot invert a singular matrix")
        return self.map_and_set(lambda row, column, old: inverse.get(row, column))

    def get_determinant(self) -> Rational:
        return self.lu_decompose().get_determinant()

    # Views and augmentation
    def sub(self, r1: int, c1: int, row_count: int, column_count: int) -> 'Matrix':
        """
        View of the rectangle starting at (r1, c1).

        Args:
            r1: First row
            c1: First column
            row_count: Number of rows of the view
            column_count: Number of columns of the view
        """
        if r1 < 0 or c1 < 0 or row_count < 0 or column_count < 0 \
                or r1 + row_count > self.get_row_count() or c1 + column_count > self.get_column_count():
            raise InvalidShapeError(f"Sub-matrix ({r1}, {c1}, {row_count}, {column_count}) exceeds "
                                    f"{self.get_row_count()}x{self.get_column_count()} matrix")
        return Matrix.view(row_count, column_count,
                           lambda row, column: self.get(r1 + row, c1 + column),
                           lambda row, column, value: self.set(r1 + row, c1 + column, value))

    def sub_copy(self, r1: int, c1: int, row_count: int, column_count: int) -> 'Matrix':
        return self.sub(r1, c1, row_count, column_count).copy()

    def merge_to_augmented(self, extra: 'Matrix') -> 'Matrix':
        """[self | extra] without copying either matrix"""
        return Matrix._wrap(AugmentedMatrixStorage(self, extra))

    def split_to_augmented(self, split: int) -> 'Matrix':
        """Treat columns [0, split) and [split, columns) of this matrix as the two halves"""
        if not 0 <= split <= self.get_column_count():
            raise InvalidShapeError(f"Split {split} outside of 0..{self.get_column_count()}")
        rows = self.get_row_count()
        left = self.sub(0, 0, rows, split)
        right = self.sub(0, split, rows, self.get_column_count() - split)
        return left.merge_to_augmented(right)

    def is_augmented(self) -> bool:
        return isinstance(self._storage, AugmentedMatrixStorage)

    def is_view(self) -> bool:
        return isinstance(self._storage, ViewMatrixStorage)

    def _augmented_storage(self) -> AugmentedMatrixStorage:
        if not self.is_augmented():
            raise InvalidShapeError("Matrix is not augmented")
        return self._storage

    def get_split(self) -> int:
        return self._augmented_storage().split

    def get_left(self) -> 'Matrix':
        return self._augmented_storage().left

    def get_right(self) -> 'Matrix':
        return self._augmented_storage().right

    def copy(self) -> 'Matrix':
        """Owned dense copy, also for views and augmented matrices"""
        return Matrix._wrap(DenseMatrixStorage(self.to_list(), self.get_column_count()))

    # Python protocol
    def __getitem__(self, index):
        if isinstance(index, tuple):
            return self.get(*index)
        return self.get_row(index)

    def __setitem__(self, index, value) -> None:
        if isinstance(index, tuple):
            self.set(index[0], index[1], value)
        else:
            self.set_row(index, value)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.get_row_count() != other.get_row_count() or self.get_column_count() != other.get_column_count():
            return False
        for row in range(self.get_row_count()):
            for column in range(self.get_column_count()):
                if self.get(row, column) != other.get(row, column):
                    return False
        return True

    __hash__ = None

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self):
        return self.map(lambda row, column, old: old.negate())

    def __mul__(self, scalar):
        scalar = Rational._coerce(scalar)
        return NotImplemented if scalar is None else self.multiply(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        scalar = Rational._coerce(scalar)
        return NotImplemented if scalar is None else self.divide(scalar)

    def __matmul__(self, other):
        if not isinstance(other, (Matrix, Vector)):
            return NotImplemented
        return self.multiply(other)

    def __str__(self) -> str:
        return '\n'.join(str(self.get_row(row)) for row in range(self.get_row_count()))

    def __repr__(self) -> str:
        rows = ', '.join(str(self.get_row(row)) for row in range(self.get_row_count()))
        return f"Matrix([{rows}])"
