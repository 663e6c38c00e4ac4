"""
SLA Matrix Module

Dense and compressed sparse matrices with cross-format arithmetic.

Classes:
    DictionaryOfKeys  - unordered triplet builder (alias DOK)
    CompressedRow     - CSR layout (alias CSR)
    CompressedColumn  - CSC layout (alias CSC)
    DenseMatrix       - row-major dense layout
    Matrix            - abstract base, entry point for any-layout arithmetic
    SparseMatrix      - abstract base of the compressed layouts
    DenseVector, SparseVector - vectors for matrix-vector products

Example:
    >>> from sla.matrix import DictionaryOfKeys, CompressedRow, Matrix
    >>> dok = DictionaryOfKeys()
    >>> dok.add(1.0, 0, 0)
    >>> dok.add(2.0, 1, 1)
    >>> a = CompressedRow(2, 2, dok)
    >>> b = a.to_compressed_column()
    >>> Matrix.add(a, b)         # CompressedRow
"""

from ._dtypes import (
    DType,
    float64, int64,
    normalize_dtype, validate_dtype,
)
from ._array import Array, zeros, from_list
from ._vector import Vector, DenseVector, SparseVector
from ._dok import DictionaryOfKeys, DOK
from ._base import MatrixFormat, Matrix, SparseMatrix
from ._compressed import CompressedMatrix
from ._csr import CompressedRow, CSR
from ._csc import CompressedColumn, CSC
from ._dense import DenseMatrix
from ._ops import convert_format, from_scipy, from_numpy, zero, identity

__all__ = [
    # Data types
    'DType', 'float64', 'int64',
    'normalize_dtype', 'validate_dtype',

    # Storage
    'Array', 'zeros', 'from_list',

    # Vectors
    'Vector', 'DenseVector', 'SparseVector',

    # Builder
    'DictionaryOfKeys', 'DOK',

    # Matrices
    'MatrixFormat', 'Matrix', 'SparseMatrix', 'CompressedMatrix',
    'CompressedRow', 'CSR',
    'CompressedColumn', 'CSC',
    'DenseMatrix',

    # Functional helpers
    'convert_format', 'from_scipy', 'from_numpy', 'zero', 'identity',
]
