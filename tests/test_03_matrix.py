"""Matrix: construction, views, augmentation, swaps, transposition and arithmetic."""
import pytest
from exactlinalg import Matrix, Vector, Rational, row_getter, column_setter
from exactlinalg.errors import DimensionMismatchError, InvalidShapeError, DivisionByZeroError

# =============================================================================
# Construction
# =============================================================================


def test_factories():
    assert Matrix.identity(2) == Matrix([[1, 0], [0, 1]])
    assert Matrix.zero(2, 3) == Matrix([[0, 0, 0], [0, 0, 0]])
    assert Matrix.from_generator(2, 2, lambda row, column: row * 2 + column) == Matrix([[0, 1], [2, 3]])
    assert Matrix.from_rows(Vector([1, 2]), Vector([3, 4])) == Matrix([[1, 2], [3, 4]])
    assert Matrix.from_columns(Vector([1, 2]), Vector([3, 4])) == Matrix([[1, 3], [2, 4]])
    assert Matrix([["1/2", 0.5]]).get(0, 0) == Matrix([["1/2", 0.5]]).get(0, 1)


def test_ragged_rows_are_rejected():
    with pytest.raises(DimensionMismatchError):
        Matrix([[1, 2], [3]])
    with pytest.raises(DimensionMismatchError):
        Matrix.from_rows(Vector([1, 2]), Vector([3]))


def test_shape_and_rendering():
    matrix = Matrix([[1, 2, 3], [4, 5, Rational(1, 2)]])
    assert matrix.get_row_count() == 2
    assert matrix.get_column_count() == 3
    assert not matrix.is_square()
    assert str(matrix) == "[1, 2, 3]\n[4, 5, 1 / 2]"
    assert matrix.to_list()[1][2] == Rational(1, 2)
    assert matrix[1, 2] == Rational(1, 2)


@pytest.mark.parametrize("row, column", [(-1, 0), (0, -1), (2, 0), (0, 3)])
def test_get_and_set_check_bounds(row, column):
    """Dense and augmented matrices reject indices outside their shape."""
    dense = Matrix([[1, 2, 3], [4, 5, 6]])
    augmented = Matrix([[1, 2], [4, 5]]).merge_to_augmented(Matrix([[3], [6]]))
    for matrix in (dense, augmented):
        with pytest.raises(IndexError):
            matrix.get(row, column)
        with pytest.raises(IndexError):
            matrix.set(row, column, 0)
    assert augmented == dense


# =============================================================================
# Rows, columns and views
# =============================================================================


def test_row_and_column_views_write_through():
    matrix = Matrix([[1, 2], [3, 4]])
    matrix.get_row(0).scale_and_set(10)
    assert matrix == Matrix([[10, 20], [3, 4]])
    matrix.get_column(1).set(1, 0)
    assert matrix == Matrix([[10, 20], [3, 0]])
    matrix[1] = Vector([7, 8])
    assert matrix.get_row_copy(1) == Vector([7, 8])


def test_row_copies_are_independent():
    matrix = Matrix([[1, 2], [3, 4]])
    row = matrix.get_row_copy(0)
    row.set(0, 99)
    assert matrix.get(0, 0) == Rational(1)
    assert matrix.get_columns_copy()[1] == Vector([2, 4])
    assert [r.is_view() for r in matrix.get_rows()] == [True, True]


def test_set_row_dimension_check():
    with pytest.raises(DimensionMismatchError):
        Matrix([[1, 2], [3, 4]]).set_row(0, Vector([1, 2, 3]))
    with pytest.raises(DimensionMismatchError):
        Matrix([[1, 2], [3, 4]]).set_column(0, Vector([1]))


def test_with_row_and_with_column():
    matrix = Matrix([[1, 2], [3, 4]])
    assert matrix.with_row(0, Vector([0, 0])) == Matrix([[0, 0], [3, 4]])
    assert matrix.with_column(1, Vector([9, 9])) == Matrix([[1, 9], [3, 9]])
    assert matrix.with_value(1, 1, 5) == Matrix([[1, 2], [3, 5]])
    assert matrix == Matrix([[1, 2], [3, 4]])


def test_sub_view():
    matrix = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    block = matrix.sub(1, 1, 2, 2)
    assert block.is_view()
    assert block == Matrix([[5, 6], [8, 9]])
    block.set(0, 0, 0)
    assert matrix.get(1, 1) == Rational(0)
    assert not matrix.sub_copy(0, 0, 1, 3).is_view()
    with pytest.raises(InvalidShapeError):
        matrix.sub(2, 2, 2, 2)
    with pytest.raises(IndexError):
        block.get(2, 0)


def test_custom_view_with_accessors():
    """Module level accessors build row and column callables from plain get/set functions."""
    backing = Matrix([[1, 2], [3, 4]])
    transposed = Matrix.view(2, 2, lambda row, column: backing.get(column, row),
                             lambda row, column, value: backing.set(column, row, value))
    assert transposed == Matrix([[1, 3], [2, 4]])
    first_row = row_getter(transposed.get, 0)
    assert first_row(1) == Rational(3)
    write_column = column_setter(transposed.set, 0)
    write_column(1, Rational(5))
    assert backing.get(0, 1) == Rational(5)


# =============================================================================
# Augmented matrices
# =============================================================================


def test_merge_to_augmented():
    left = Matrix([[1, 2], [3, 4]])
    right = Matrix([[5], [6]])
    augmented = left.merge_to_augmented(right)
    assert augmented.is_augmented()
    assert augmented.get_split() == 2
    assert augmented == Matrix([[1, 2, 5], [3, 4, 6]])
    augmented.set(1, 2, 0)
    assert right == Matrix([[5], [0]])
    assert augmented.get_left() is left
    assert augmented.get_right() is right
    with pytest.raises(DimensionMismatchError):
        left.merge_to_augmented(Matrix([[1]]))


def test_split_to_augmented():
    matrix = Matrix([[1, 2, 3], [4, 5, 6]])
    augmented = matrix.split_to_augmented(1)
    assert augmented.get_split() == 1
    assert augmented.get_left() == Matrix([[1], [4]])
    assert augmented.get_right() == Matrix([[2, 3], [5, 6]])
    augmented.get_right().set(0, 0, 0)
    assert matrix.get(0, 1) == Rational(0)
    with pytest.raises(InvalidShapeError):
        matrix.split_to_augmented(4)
    with pytest.raises(InvalidShapeError):
        matrix.get_split()


def test_copy_of_augmented_is_dense():
    augmented = Matrix([[1]]).merge_to_augmented(Matrix([[2]]))
    copy = augmented.copy()
    assert not copy.is_augmented()
    assert copy == Matrix([[1, 2]])


# =============================================================================
# Swaps and transposition
# =============================================================================


def test_swaps():
    matrix = Matrix([[1, 2], [3, 4]])
    assert matrix.swap_rows(0, 1) == Matrix([[3, 4], [1, 2]])
    assert matrix.swap_columns(0, 1) == Matrix([[2, 1], [4, 3]])
    assert matrix.swap(0, 0, 1, 1) == Matrix([[4, 2], [3, 1]])
    matrix.swap_rows_and_set(0, 1)
    assert matrix == Matrix([[3, 4], [1, 2]])


def test_swap_rows_of_augmented_matrix():
    left = Matrix([[1, 2], [3, 4]])
    right = Matrix([[5], [6]])
    left.merge_to_augmented(right).swap_rows_and_set(0, 1)
    assert left == Matrix([[3, 4], [1, 2]])
    assert right == Matrix([[6], [5]])


def test_transpose():
    matrix = Matrix([[1, 2, 3], [4, 5, 6]])
    assert matrix.transpose() == Matrix([[1, 4], [2, 5], [3, 6]])
    with pytest.raises(InvalidShapeError):
        matrix.transpose_and_set()


def test_transpose_and_set():
    """In-place transposition swaps across the diagonal."""
    matrix = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    assert matrix.transpose_and_set() is matrix
    assert matrix == Matrix([[1, 4, 7], [2, 5, 8], [3, 6, 9]])


# =============================================================================
# Arithmetic
# =============================================================================


def test_add_subtract():
    a = Matrix([[1, 2], [3, 4]])
    b = Matrix([[4, 3], [2, 1]])
    assert a + b == Matrix([[5, 5], [5, 5]])
    assert a - b == Matrix([[-3, -1], [1, 3]])
    assert -a == Matrix([[-1, -2], [-3, -4]])
    with pytest.raises(DimensionMismatchError):
        a.add(Matrix([[1, 2]]))


def test_multiply():
    a = Matrix([[1, 2], [3, 4]])
    b = Matrix([[0, 1], [1, 0]])
    assert a.multiply(b) == Matrix([[2, 1], [4, 3]])
    assert a @ b == Matrix([[2, 1], [4, 3]])
    assert a.multiply(Vector([1, 1])) == Vector([3, 7])
    assert a @ Vector([1, 1]) == Vector([3, 7])
    assert a * Rational(1, 2) == Matrix([[Rational(1, 2), 1], [Rational(3, 2), 2]])
    assert a / 2 == a * Rational(1, 2)
    assert Matrix([[1, 2, 3]]).multiply(Matrix([[1], [1], [1]])) == Matrix([[6]])
    with pytest.raises(DimensionMismatchError):
        a.multiply(Matrix([[1, 2, 3]]))


def test_multiply_and_set_uses_snapshot():
    """In-place products read the original operand even when it aliases the result."""
    matrix = Matrix([[1, 1], [0, 1]])
    matrix.multiply_and_set(matrix)
    assert matrix == Matrix([[1, 2], [0, 1]])

    vector = Vector([1, 2])
    Matrix([[0, 1], [1, 0]]).multiply_and_set(vector)
    assert vector == Vector([2, 1])

    with pytest.raises(DimensionMismatchError):
        Matrix([[1, 2]]).multiply_and_set(Matrix([[1, 2, 3], [4, 5, 6]]))


def test_map_rows_and_columns():
    matrix = Matrix([[1, 2], [3, 4]])
    assert matrix.map_row(0, lambda column, old: old.negate()) == Matrix([[-1, -2], [3, 4]])
    assert matrix.map_column(1, lambda row, old: old.add(row)) == Matrix([[1, 2], [3, 5]])
    assert matrix == Matrix([[1, 2], [3, 4]])


# =============================================================================
# Inversion and determinant
# =============================================================================


def test_invert(tridiagonal):
    inverse = tridiagonal.invert()
    assert tridiagonal.multiply(inverse) == Matrix.identity(3)
    assert tridiagonal.get_determinant() == Rational(4)


def test_invert_singular(singular):
    assert singular.invert() is None
    assert singular.get_determinant() == Rational(0)
    with pytest.raises(DivisionByZeroError):
        singular.invert_and_set()


def test_invert_and_set():
    matrix = Matrix([[2, 1], [1, 3]])
    matrix.invert_and_set()
    assert matrix == Matrix([[Rational(3, 5), Rational(-1, 5)], [Rational(-1, 5), Rational(2, 5)]])


def test_swapping_rows_negates_determinant(tridiagonal):
    assert tridiagonal.swap_rows(0, 2).get_determinant() == -tridiagonal.get_determinant()


def test_matrices_are_unhashable():
    with pytest.raises(TypeError):
        hash(Matrix.identity(2))
