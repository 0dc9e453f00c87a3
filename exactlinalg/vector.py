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
Vectors of exact rational numbers.

A Vector delegates element access to a storage object. Three storages share
the same small interface (dimension, get, set):

- DenseVectorStorage owns a list of Rationals
- ViewVectorStorage forwards reads and writes to a getter and a setter, for
  instance to a row or column of a matrix, and owns no elements
- AugmentedVectorStorage concatenates two vectors without copying them

Every operation comes in two flavours: the plain one returns a new dense
vector, the one ending in _and_set writes the result into this vector (and so
into whatever a view is backed by).
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional

from .errors import DimensionMismatchError, InvalidShapeError
from .rational import ONE, ZERO, Rational, RationalLike

# generator(index) -> value
Generator = Callable[[int], Rational]
# mapper(index, old_value) -> new value
Mapper = Callable[[int, Rational], Rational]
# setter(index, value)
Setter = Callable[[int, Rational], None]


class VectorStorage(ABC):
    """Element store behind a Vector"""

    @abstractmethod
    def get_dimension(self) -> int:
        pass

    @abstractmethod
    def get(self, index: int) -> Rational:
        pass

    @abstractmethod
    def set(self, index: int, value: Rational) -> None:
        pass

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.get_dimension():
            raise IndexError(f"index {index} out of range for dimension {self.get_dimension()}")


class DenseVectorStorage(VectorStorage):

    __slots__ = ('_elements',)

    def __init__(self, elements: List[Rational]):
        self._elements = elements

    def get_dimension(self) -> int:
        return len(self._elements)

    def get(self, index: int) -> Rational:
        self._check_index(index)
        return self._elements[index]

    def set(self, index: int, value: Rational) -> None:
        self._check_index(index)
        self._elements[index] = value


class ViewVectorStorage(VectorStorage):
    """Storage-free window onto elements owned by someone else"""

    __slots__ = ('_dimension', '_getter', '_setter')

    def __init__(self, dimension: int, getter: Generator, setter: Setter):
        self._dimension = dimension
        self._getter = getter
        self._setter = setter

    def get_dimension(self) -> int:
        return self._dimension

    def get(self, index: int) -> Rational:
        self._check_index(index)
        return self._getter(index)

    def set(self, index: int, value: Rational) -> None:
        self._check_index(index)
        self._setter(index, value)


class AugmentedVectorStorage(VectorStorage):
    """Concatenation left | right; indices below split go to left."""

    __slots__ = ('left', 'right', 'split')

    def __init__(self, left: 'Vector', right: 'Vector'):
        self.left = left
        self.right = right
        self.split = left.get_dimension()

    def get_dimension(self) -> int:
        return self.split + self.right.get_dimension()

    def get(self, index: int) -> Rational:
        self._check_index(index)
        if index < self.split:
            return self.left.get(index)
        return self.right.get(index - self.split)

    def set(self, index: int, value: Rational) -> None:
        self._check_index(index)
        if index < self.split:
            self.left.set(index, value)
        else:
            self.right.set(index - self.split, value)


# Norms
def SUM(vector: 'Vector') -> Rational:
    """Sum of all elements"""
    total = ZERO
    for i in range(vector.get_dimension()):
        total = total.add(vector.get(i))
    return total


def EUCLIDEAN_SQ(vector: 'Vector') -> Rational:
    """Squared euclidean length"""
    total = ZERO
    for i in range(vector.get_dimension()):
        value = vector.get(i)
        total = total.add(value.multiply(value))
    return total


class Vector:
    """
    Vector of Rationals with a fixed dimension.

    Vector([1, 2, '3/4']) builds an owned dense vector. Views and augmented
    vectors are created through Vector.view, Vector.augment, or the row and
    column accessors of Matrix.
    """

    __slots__ = ('_storage',)

    def __init__(self, elements: Iterable[RationalLike] = ()):
        self._storage = DenseVectorStorage([Rational.value_of(e) for e in elements])

    @classmethod
    def _wrap(cls, storage: VectorStorage) -> 'Vector':
        vector = cls.__new__(cls)
        vector._storage = storage
        return vector

    # Factories
    @classmethod
    def of(cls, *elements: RationalLike) -> 'Vector':
        return cls(elements)

    @classmethod
    def from_generator(cls, dimension: int, generator: Generator) -> 'Vector':
        if dimension < 0:
            raise ValueError(f"negative dimension: {dimension}")
        return cls._wrap(DenseVectorStorage([Rational.value_of(generator(i)) for i in range(dimension)]))

    @classmethod
    def zero(cls, dimension: int) -> 'Vector':
        return cls.from_generator(dimension, lambda i: ZERO)

    @classmethod
    def basis(cls, dimension: int, index: int, scale: RationalLike = ONE) -> 'Vector':
        """Unit vector along index, optionally scaled"""
        scale = Rational.value_of(scale)
        return cls.from_generator(dimension, lambda i: scale if i == index else ZERO)

    @classmethod
    def view(cls, dimension: int, getter: Generator, setter: Setter) -> 'Vector':
        """Vector without own storage, reading through getter and writing through setter"""
        return cls._wrap(ViewVectorStorage(dimension, getter, setter))

    @classmethod
    def augment(cls, left: 'Vector', right: 'Vector') -> 'Vector':
        """Concatenate two vectors without copying; writes go to the parts."""
        return cls._wrap(AugmentedVectorStorage(left, right))

    # Storage
    def is_view(self) -> bool:
        return isinstance(self._storage, ViewVectorStorage)

    def is_augmented(self) -> bool:
        return isinstance(self._storage, AugmentedVectorStorage)

    def get_split(self) -> int:
        if not self.is_augmented():
            raise InvalidShapeError("Vector is not augmented")
        return self._storage.split

    def get_dimension(self) -> int:
        return self._storage.get_dimension()

    def get(self, index: int) -> Rational:
        return self._storage.get(index)

    def set(self, index: int, value: RationalLike) -> 'Vector':
        self._storage.set(index, Rational.value_of(value))
        return self

    def get_elements(self) -> List[Rational]:
        return [self.get(i) for i in range(self.get_dimension())]

    def with_value(self, index: int, value: RationalLike) -> 'Vector':
        return self.copy().set(index, value)

    def _check_dimension(self, other: 'Vector') -> None:
        if self.get_dimension() != other.get_dimension():
            raise DimensionMismatchError("Vectors don't have the same size", self.get_dimension(),
                                         other.get_dimension())

    # Mapping
    def map(self, mapper: Mapper) -> 'Vector':
        return Vector.from_generator(self.get_dimension(), lambda i: mapper(i, self.get(i)))

    def map_and_set(self, mapper: Mapper) -> 'Vector':
        for i in range(self.get_dimension()):
            self.set(i, mapper(i, self.get(i)))
        return self

    def swap(self, i: int, j: int) -> 'Vector':
        return self.copy().swap_and_set(i, j)

    def swap_and_set(self, i: int, j: int) -> 'Vector':
        old_value = self.get(i)
        return self.set(i, self.get(j)).set(j, old_value)

    # Norms
    def norm(self, norm: Callable[['Vector'], Rational]) -> Rational:
        return norm(self)

    def sum(self) -> Rational:
        return self.norm(SUM)

    def magnitude_sq(self) -> Rational:
        return self.norm(EUCLIDEAN_SQ)

    def raised_norm(self, p: int) -> Rational:
        """Sum of the p-th powers of the elements"""
        total = ZERO
        for i in range(self.get_dimension()):
            value = self.get(i)
            if p == 1:
                total = total.add(value)
            elif p == 2:
                total = total.add(value.multiply(value))
            else:
                total = total.add(value.pow(p))
        return total

    def normalize(self, norm: Callable[['Vector'], Rational] = SUM) -> 'Vector':
        return self.copy().normalize_and_set(norm)

    def normalize_and_set(self, norm: Callable[['Vector'], Rational] = SUM) -> 'Vector':
        """Divide by the norm; a vector of norm zero is left as it is."""
        magnitude = norm(self)
        if magnitude.is_zero():
            return self
        return self.map_and_set(lambda i, old: old.divide(magnitude))

    # Arithmetic
    def add(self, other: 'Vector') -> 'Vector':
        self._check_dimension(other)
        return self.map(lambda i, old: old.add(other.get(i)))

    def add_and_set(self, other: 'Vector') -> 'Vector':
        self._check_dimension(other)
        return self.map_and_set(lambda i, old: old.add(other.get(i)))

    def subtract(self, other: 'Vector') -> 'Vector':
        self._check_dimension(other)
        return self.map(lambda i, old: old.subtract(other.get(i)))

    def subtract_and_set(self, other: 'Vector') -> 'Vector':
        self._check_dimension(other)
        return self.map_and_set(lambda i, old: old.subtract(other.get(i)))

    def scale(self, scalar: RationalLike) -> 'Vector':
        scalar = Rational.value_of(scalar)
        return self.map(lambda i, old: old.multiply(scalar))

    def scale_and_set(self, scalar: RationalLike) -> 'Vector':
        scalar = Rational.value_of(scalar)
        return self.map_and_set(lambda i, old: old.multiply(scalar))

    def divide(self, scalar: RationalLike) -> 'Vector':
        scalar = Rational.value_of(scalar)
        return self.map(lambda i, old: old.divide(scalar))

    def divide_and_set(self, scalar: RationalLike) -> 'Vector':
        scalar = Rational.value_of(scalar)
        return self.map_and_set(lambda i, old: old.divide(scalar))

    def multiply(self, matrix) -> 'Vector':
        """
        Matrix times this vector.

        Every element of the result is the dot product of one matrix row with
        this vector, the same as matrix.multiply(vector).

        Args:
            matrix: Matrix with as many columns as this vector has elements

        Returns:
            New vector with one element per matrix row
        """
        if matrix.get_column_count() != self.get_dimension():
            raise DimensionMismatchError("Vector length should equal the number of matrix columns",
                                         matrix.get_column_count(), self.get_dimension())
        return Vector.from_generator(matrix.get_row_count(), lambda i: matrix.get_row(i).dot(self))

    def multiply_and_set(self, matrix) -> 'Vector':
        """Matrix times this vector, written into this vector"""
        if not matrix.is_square():
            raise InvalidShapeError("In-place multiplication needs a square matrix")
        product = self.multiply(matrix)
        return self.map_and_set(lambda i, old: product.get(i))

    def dot(self, other: 'Vector') -> Rational:
        self._check_dimension(other)
        total = ZERO
        for i in range(self.get_dimension()):
            total = total.add(self.get(i).multiply(other.get(i)))
        return total

    # Projections
    def gram_schmidt_coefficient(self, target: 'Vector') -> Rational:
        """dot(self, target) / |target|^2; a zero target raises DivisionByZeroError"""
        return self.dot(target).divide(target.magnitude_sq())

    def project_onto(self, target: 'Vector') -> 'Vector':
        return target.scale(self.gram_schmidt_coefficient(target))

    def project_onto_matrix(self, matrix) -> 'Vector':
        """
        Orthogonal projection onto the column space of matrix.

        Uses A (A^T A)^-1 A^T, so the columns of the matrix must be linearly
        independent.

        Raises:
            InvalidShapeError: If the columns are linearly dependent
        """
        transposed = matrix.transpose()
        gram_inverse = transposed.multiply(matrix).invert()
        if gram_inverse is None:
            raise InvalidShapeError("Projection onto linearly dependent columns")
        return self.multiply(matrix.multiply(gram_inverse).multiply(transposed))

    def tensor(self, other: 'Vector') -> 'Vector':
        """Kronecker product, index i * other.dimension + j"""
        size = other.get_dimension()
        return Vector.from_generator(self.get_dimension() * size,
                                     lambda k: self.get(k // size).multiply(other.get(k % size)))

    # Conversion
    def to_matrix_row(self):
        from .matrix import Matrix
        return Matrix.from_generator(1, self.get_dimension(), lambda row, column: self.get(column))

    def to_matrix_column(self):
        from .matrix import Matrix
        return Matrix.from_generator(self.get_dimension(), 1, lambda row, column: self.get(row))

    def copy(self) -> 'Vector':
        """Owned dense copy, also for views and augmented vectors"""
        return Vector._wrap(DenseVectorStorage(self.get_elements()))

    # Python protocol
    def __len__(self) -> int:
        return self.get_dimension()

    def __iter__(self):
        for i in range(self.get_dimension()):
            yield self.get(i)

    def __getitem__(self, index: int) -> Rational:
        if index < 0:
            index += self.get_dimension()
        return self.get(index)

    def __setitem__(self, index: int, value: RationalLike) -> None:
        if index < 0:
            index += self.get_dimension()
        self.set(index, value)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Vector):
            return NotImplemented
        if self.get_dimension() != other.get_dimension():
            return False
        return all(self.get(i) == other.get(i) for i in range(self.get_dimension()))

    __hash__ = None

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self):
        return self.map(lambda i, old: old.negate())

    def __mul__(self, scalar):
        scalar = Rational._coerce(scalar)
        return NotImplemented if scalar is None else self.scale(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        scalar = Rational._coerce(scalar)
        return NotImplemented if scalar is None else self.divide(scalar)

    def __matmul__(self, other):
        if isinstance(other, Vector):
            return self.dot(other)
        if hasattr(other, 'get_row_count'):
            # row vector times matrix
            return self.multiply(other.transpose())
        return NotImplemented

    def __str__(self) -> str:
        return '[' + ', '.join(str(e) for e in self) + ']'

    def __repr__(self) -> str:
        return f"Vector({self})"
