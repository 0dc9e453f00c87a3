"""Gram-Schmidt orthogonalization of matrix columns and rows."""
import pytest
from exactlinalg import Matrix, Rational, gram_schmidt
from exactlinalg.errors import InvalidParameterError, DivisionByZeroError, DimensionMismatchError


def test_orthogonalize_columns():
    """The second column loses its projection onto the first."""
    matrix = Matrix([[4, 3], [-1, 6]])
    result = gram_schmidt.orthogonalize(matrix)
    assert result.get_column(0).dot(result.get_column(1)) == Rational(0)
    assert result.get_column_copy(0) == matrix.get_column_copy(0)
    assert result == Matrix([[4, Rational(27, 17)], [-1, Rational(108, 17)]])
    # input untouched
    assert matrix == Matrix([[4, 3], [-1, 6]])


def test_orthogonalize_three_columns():
    matrix = Matrix([[1, 1, 0], [1, 0, 1], [0, 1, 1]])
    result = gram_schmidt.orthogonalize(matrix)
    columns = result.get_columns()
    for i in range(3):
        for j in range(i):
            assert columns[i].dot(columns[j]) == Rational(0)


def test_dependent_column_breaks_later_projections():
    matrix = Matrix([[1, 2, 0], [1, 2, 1]])
    with pytest.raises(DivisionByZeroError):
        gram_schmidt.orthogonalize(matrix)


def test_unknown_phase():
    with pytest.raises(InvalidParameterError):
        gram_schmidt.orthogonalize(Matrix.identity(2), 'orthonormal')


def test_orthogonalize_rows(lattice_basis):
    """Row-wise variant fills the shadow basis and mu with a unit diagonal."""
    shadow = Matrix.zero(3, 3)
    mu = Matrix.zero(3, 3)
    gram_schmidt.orthogonalize_rows(lattice_basis, shadow, mu)

    assert shadow.get_row_copy(0) == lattice_basis.get_row_copy(0)
    assert mu.get(1, 0) == Rational(1, 3)
    assert mu.get(2, 0) == Rational(14, 3)
    assert mu.get(2, 1) == Rational(13, 14)
    for i in range(3):
        assert mu.get(i, i) == Rational(1)
        for j in range(i):
            assert mu.get(j, i) == Rational(0)
            assert shadow.get_row(i).dot(shadow.get_row(j)) == Rational(0)

    # basis_i = sum_j mu[i][j] * shadow_j
    assert mu.multiply(shadow) == lattice_basis


def test_orthogonalize_rows_shape_checks(lattice_basis):
    with pytest.raises(DimensionMismatchError):
        gram_schmidt.orthogonalize_rows(lattice_basis, Matrix.zero(2, 3), Matrix.zero(3, 3))
    with pytest.raises(DimensionMismatchError):
        gram_schmidt.orthogonalize_rows(lattice_basis, Matrix.zero(3, 3), Matrix.zero(3, 2))
