"""
Input detection and coercion for the functional API.

Functions in ``sla.math`` accept sla matrices, numpy arrays, scipy sparse
matrices and nested sequences. This module detects what was passed and
converts it into an sla matrix or vector.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence, Union

if TYPE_CHECKING:
    import numpy as np
    from scipy import sparse as sp
    from sla.matrix import Matrix, Vector

MatrixInput = Union["Matrix", "np.ndarray", "sp.spmatrix", Sequence[Sequence[float]]]
VectorInput = Union["Vector", "np.ndarray", Sequence[float]]


# =============================================================================
# Format Detection
# =============================================================================

def is_sla_matrix(obj: Any) -> bool:
    """Check if object is any sla matrix."""
    from sla.matrix import Matrix
    return isinstance(obj, Matrix)


def is_scipy_sparse(obj: Any) -> bool:
    """Check if object is any scipy sparse matrix or array."""
    from scipy import sparse as sp
    return sp.issparse(obj)


def is_numpy_array(obj: Any) -> bool:
    """Check if object is a numpy ndarray."""
    import numpy as np
    return isinstance(obj, np.ndarray)


def get_format(obj: Any) -> str:
    """Detect the format of a matrix-like object.

    Returns:
        Format string: 'sla_dense', 'sla_csr', 'sla_csc', 'scipy_csr',
        'scipy_csc', 'scipy_other', 'numpy', 'sequence', or 'unknown'.
    """
    if is_sla_matrix(obj):
        return f"sla_{obj.format.value}"
    elif is_scipy_sparse(obj):
        fmt = getattr(obj, "format", None)
        return f"scipy_{fmt}" if fmt in ("csr", "csc") else "scipy_other"
    elif is_numpy_array(obj):
        return "numpy"
    elif isinstance(obj, (list, tuple)):
        return "sequence"
    else:
        return "unknown"


# =============================================================================
# Conversion Functions
# =============================================================================

def ensure_matrix(mat: MatrixInput) -> "Matrix":
    """Convert any matrix input into an sla matrix (no copy for sla input).

    scipy CSC input becomes a CompressedColumn, other scipy input a
    CompressedRow, numpy arrays and sequences a DenseMatrix.

    Raises:
        TypeError: If the input type is not supported.
    """
    from sla.matrix import DenseMatrix, from_scipy

    fmt = get_format(mat)
    if fmt.startswith("sla_"):
        return mat
    if fmt.startswith("scipy_"):
        return from_scipy(mat)
    if fmt == "numpy":
        return DenseMatrix.from_numpy(mat)
    if fmt == "sequence":
        return DenseMatrix.from_dense(mat)
    raise TypeError(
        f"Cannot convert {type(mat).__name__} to an sla matrix. "
        f"Supported types: sla matrices, scipy.sparse, numpy.ndarray, nested sequences"
    )


def ensure_vector(vec: VectorInput, size: int = None) -> "Vector":
    """Convert any vector input into an sla vector.

    Raises:
        ShapeMismatchError: If ``size`` is given and does not match.
    """
    from sla._errors import ShapeMismatchError
    from sla.matrix import DenseVector, Vector

    if isinstance(vec, Vector):
        result = vec
    elif is_numpy_array(vec):
        result = DenseVector(vec.ravel().tolist())
    else:
        result = DenseVector(list(vec))

    if size is not None and result.size != size:
        raise ShapeMismatchError(f"Vector size {result.size} != expected {size}")
    return result
