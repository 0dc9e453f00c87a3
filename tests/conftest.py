import pytest
from exactlinalg import Matrix
from exactlinalg.names import *


@pytest.fixture
def tridiagonal() -> Matrix:
    """Provide the 3x3 second difference matrix (determinant 4)."""
    return Matrix([[2, -1, 0], [-1, 2, -1], [0, -1, 2]])


@pytest.fixture
def singular() -> Matrix:
    """Provide a 3x3 matrix whose third row is the sum of the first two."""
    return Matrix([[1, 2, 3], [4, 5, 6], [5, 7, 9]])


@pytest.fixture
def lattice_basis() -> Matrix:
    """Provide a 3-dimensional lattice basis (rows) with a known LLL reduction."""
    return Matrix([[1, 1, 1], [-1, 0, 2], [3, 5, 6]])


@pytest.fixture(params=[ECHELON, REDUCED], scope="session")
def phase(request: pytest.FixtureRequest) -> str:
    """Provide session-level fixture for Gauss-Jordan phases."""
    return request.param
