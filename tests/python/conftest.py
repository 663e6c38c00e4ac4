"""
Pytest configuration and shared fixtures for SLA tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from sla import config  # noqa: E402
from sla.matrix import (  # noqa: E402
    CompressedColumn,
    CompressedRow,
    DenseMatrix,
    DictionaryOfKeys,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Restore default configuration around every test."""
    config.reset()
    yield
    config.reset()


@pytest.fixture
def dense_matrix_small():
    """Reference numpy matrix (3x4).

    Matrix:
    [[1, 0, 2, 0],
     [0, 3, 0, 4],
     [5, 0, 0, 6]]
    """
    return np.array([
        [1, 0, 2, 0],
        [0, 3, 0, 4],
        [5, 0, 0, 6]
    ], dtype=np.float64)


@pytest.fixture
def small_csr_matrix():
    """The 3x4 reference matrix in CSR layout."""
    return CompressedRow(
        3, 4,
        [0, 2, 4, 6],
        [0, 2, 1, 3, 0, 3],
        [1.0, 2.0, 3.0, 4.0, 5.0, 6.0],
    )


@pytest.fixture
def small_csc_matrix():
    """The 3x4 reference matrix in CSC layout."""
    return CompressedColumn(
        3, 4,
        [0, 2, 3, 4, 6],
        [0, 2, 1, 0, 1, 2],
        [1.0, 5.0, 3.0, 2.0, 4.0, 6.0],
    )


@pytest.fixture
def small_dense_matrix(dense_matrix_small):
    """The 3x4 reference matrix in dense layout."""
    return DenseMatrix.from_numpy(dense_matrix_small)


@pytest.fixture
def full_csr_2x3():
    """Fully populated 2x3 CSR matrix [[1, 2, 3], [4, 5, 6]]."""
    return CompressedRow(2, 3, [0, 3, 6], [0, 1, 2, 0, 1, 2], [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


@pytest.fixture
def left_6x5_csr():
    """Left factor of the 6x5 by 5x3 product case."""
    return CompressedRow(
        6, 5,
        [0, 2, 3, 4, 5, 8, 9],
        [1, 3, 3, 2, 3, 1, 2, 3, 4],
        [1.5, 1.25, 6.75, 2.0, 5.5, 4.0, 3.5, 2.25, 7.25],
    )


@pytest.fixture
def right_5x3_csr():
    """Right factor of the 6x5 by 5x3 product case."""
    return CompressedRow(
        5, 3,
        [0, 1, 2, 3, 6, 8],
        [0, 1, 0, 0, 1, 2, 0, 1],
        [3.5, 1.5, 5.0, 2.0, 3.0, 4.0, 0.5, 2.5],
    )


@pytest.fixture
def product_6x3_csr():
    """Expected product of ``left_6x5_csr`` and ``right_5x3_csr``."""
    return CompressedRow(
        6, 3,
        [0, 3, 6, 7, 10, 13, 15],
        [0, 1, 2, 0, 1, 2, 0, 0, 1, 2, 0, 1, 2, 0, 1],
        [2.5, 6.0, 5.0, 13.5, 20.25, 27.0, 10.0, 11.0, 16.5, 22.0,
         22.0, 12.75, 9.0, 3.625, 18.125],
    )


@pytest.fixture
def vector_csr_3x2():
    """3x2 CSR matrix [[4, 3], [2, -5], [-4, 1]]."""
    return CompressedRow(3, 2, [0, 2, 4, 6], [0, 1, 0, 1, 0, 1], [4.0, 3.0, 2.0, -5.0, -4.0, 1.0])


@pytest.fixture
def rank_deficient_dok():
    """Builder for the 3x3 matrix [[1, 1, 1], [2, 0, 0], [3, 3, 3]]."""
    dok = DictionaryOfKeys()
    for r, row in enumerate([[1, 1, 1], [2, 0, 0], [3, 3, 3]]):
        for c, v in enumerate(row):
            if v:
                dok.add(v, r, c)
    return dok


@pytest.fixture
def random_dense():
    """Factory for reproducible random sparse-ish numpy matrices."""
    rng = np.random.default_rng(42)

    def make(rows, cols, density=0.4):
        values = rng.integers(-5, 6, size=(rows, cols)).astype(np.float64)
        mask = rng.random((rows, cols)) < density
        return values * mask

    return make


# =============================================================================
# Helper Functions
# =============================================================================

def assert_array_equal(a1, a2, rtol=1e-7, atol=1e-10):
    """Assert two arrays are approximately equal."""
    if hasattr(a1, 'tolist'):
        a1 = np.array(a1.tolist())
    if hasattr(a2, 'tolist'):
        a2 = np.array(a2.tolist())

    np.testing.assert_allclose(a1, a2, rtol=rtol, atol=atol)


def assert_matrix_equal(mat, expected, atol=1e-10):
    """Assert an sla matrix equals a numpy array cell by cell."""
    assert mat.shape == tuple(np.shape(expected))
    np.testing.assert_allclose(mat.to_numpy(), expected, atol=atol)


def assert_compressed_equal(mat, pointers, indices, values):
    """Assert the exact storage arrays of a compressed matrix."""
    assert mat._pointers.tolist() == list(pointers)
    assert mat._indices.tolist() == list(indices)
    np.testing.assert_allclose(mat.values.tolist(), values)
