"""
Linear Algebra Operations.

Functional wrappers around the matrix classes that also accept numpy
arrays and scipy sparse matrices.

Implemented Operations:
    - Matrix-vector multiplication (SpMV) and its transpose
    - Matrix products
    - Rank and null-space basis by Gaussian elimination
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Union

from sla._config import get_config
from sla._kernel import matrix_rank, nullspace_basis
from sla._typing import (
    MatrixInput,
    VectorInput,
    ensure_matrix,
    ensure_vector,
    get_format,
)

if TYPE_CHECKING:
    import numpy as np
    from sla.matrix import DenseVector, Matrix, Vector

logger = logging.getLogger("sla.math.linalg")

__all__ = ["spmv", "spmv_transpose", "dot", "nullspace", "rank"]


def _is_foreign(obj) -> bool:
    return not get_format(obj).startswith("sla_")


# =============================================================================
# Matrix-Vector Multiplication
# =============================================================================

def spmv(mat: MatrixInput, x: VectorInput) -> Union["Vector", "np.ndarray"]:
    """Matrix-vector multiplication ``y = A @ x``.

    Algorithm:
        CSR: y[i] = sum(values[k] * x[indices[k]] for k in row i)
        CSC: y += x[j] * column j, for each j with x[j] != 0
        Dense: always a dense result

    Args:
        mat: Matrix (sla, scipy sparse, or numpy).
        x: Vector of length ``mat.cols``.

    Returns:
        An sla vector; a numpy array if ``mat`` was not an sla matrix.

    Raises:
        ShapeMismatchError: If the vector length does not match.

    Example:
        >>> y = spmv(csr, DenseVector([-2.0, 6.0]))
    """
    from sla.matrix import Matrix

    a = ensure_matrix(mat)
    y = Matrix.multiply(a, ensure_vector(x, a.cols))
    return y.to_numpy() if _is_foreign(mat) else y


def spmv_transpose(mat: MatrixInput, x: VectorInput) -> Union["Vector", "np.ndarray"]:
    """Transposed matrix-vector multiplication ``y = A^T @ x``.

    The transpose is never materialized: CSR scatters stored entries into
    the output by column, CSC dots each column with ``x``.
    """
    from sla.matrix import Matrix

    a = ensure_matrix(mat)
    y = Matrix.transpose_multiply(a, ensure_vector(x, a.rows))
    return y.to_numpy() if _is_foreign(mat) else y


# =============================================================================
# Matrix Products
# =============================================================================

def dot(a: MatrixInput, b: MatrixInput) -> "Matrix":
    """Matrix product ``a @ b``.

    The result is dense if either operand is dense, otherwise it takes the
    layout of ``a``.
    """
    from sla.matrix import Matrix

    return Matrix.multiply(ensure_matrix(a), ensure_matrix(b))


# =============================================================================
# Elimination
# =============================================================================

def _tolerance(tol: Optional[float]) -> float:
    return get_config().compute.epsilon if tol is None else tol


def rank(mat: MatrixInput, tol: Optional[float] = None) -> int:
    """Rank of ``mat`` by Gaussian elimination with partial pivoting.

    Args:
        mat: Any matrix input.
        tol: Relative pivot threshold, defaults to ``config.compute.epsilon``.
    """
    return matrix_rank(ensure_matrix(mat).to_numpy(), _tolerance(tol))


def nullspace(mat: MatrixInput, tol: Optional[float] = None) -> List["DenseVector"]:
    """Basis of the null space ``{x : A @ x = 0}``.

    The matrix is reduced to reduced row-echelon form on a dense copy. Each
    non-pivot column ``f`` gives one basis vector with ``x[f] = 1`` and the
    negated echelon entries of column ``f`` at the pivot columns. The
    vectors are linearly independent and their count is ``cols - rank``.

    Args:
        mat: Any matrix input.
        tol: Relative pivot threshold, defaults to ``config.compute.epsilon``.

    Returns:
        List of DenseVector, empty when the matrix has full column rank.

    Example:
        >>> m = CompressedRow.from_dense([[1, 1, 1], [2, 0, 0], [3, 3, 3]])
        >>> len(nullspace(m))
        1
    """
    from sla.matrix import DenseVector

    a = ensure_matrix(mat)
    basis = nullspace_basis(a.to_numpy(), _tolerance(tol))
    logger.debug("nullspace: %s shape=%s nullity=%d", a.format, a.shape, len(basis))
    return [DenseVector(v) for v in basis]
