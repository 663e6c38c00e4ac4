"""
SLA - Sparse Linear Algebra

Dense and sparse matrix storage with cross-format arithmetic:
- Row- and column-compressed sparse layouts (CSR, CSC)
- Dictionary-of-keys triplet builder
- Dense row-major matrices
- Any-layout add / subtract / multiply with layout-preserving dispatch
- Matrix-vector and transpose-vector products
- Null-space extraction by Gaussian elimination

Modules:
- matrix: Matrix and vector types
- math: Functional API accepting sla, numpy and scipy inputs

Architecture:
    ┌──────────────────────────────────────────────┐
    │       Matrix  (Dense | CSR | CSC)            │
    ├──────────────────────────────────────────────┤
    │  SparseMatrix (CSR | CSC)  -> kernel(), nnz  │
    │  Dispatch: (format, format) -> algorithm     │
    └──────────────────────────────────────────────┘

Example:
    >>> import sla
    >>> from sla import CompressedRow, DenseMatrix, Matrix
    >>>
    >>> a = CompressedRow(2, 3, [0, 3, 6], [0, 1, 2, 0, 1, 2],
    ...                   [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
    >>> b = a.to_compressed_column()
    >>> Matrix.add(a, b).values.tolist()
    [2.0, 4.0, 6.0, 8.0, 10.0, 12.0]
    >>> len(DenseMatrix.from_dense([[1, 1, 1], [2, 0, 0], [3, 3, 3]]).kernel())
    1
"""

import logging

__version__ = '0.1.0'

from . import matrix
from . import math
from ._config import ComputeConfig, SlaConfig, config, get_config
from ._errors import (
    SlaError,
    IndexOutOfRangeError,
    ShapeMismatchError,
    DivisionByZeroError,
)

# Re-export common types
from .matrix import (
    # Storage
    Array,
    DType,
    float64,
    int64,

    # Vectors
    Vector,
    DenseVector,
    SparseVector,

    # Builder
    DictionaryOfKeys,
    DOK,

    # Matrices
    MatrixFormat,
    Matrix,
    SparseMatrix,
    CompressedRow,
    CompressedColumn,
    CSR,
    CSC,
    DenseMatrix,

    # Functional helpers
    convert_format,
    from_scipy,
    from_numpy,
)
from .math import spmv, spmv_transpose, dot, nullspace, rank

logging.getLogger("sla").addHandler(logging.NullHandler())

__all__ = [
    '__version__',

    # Submodules
    'matrix',
    'math',

    # Configuration
    'ComputeConfig', 'SlaConfig', 'config', 'get_config',

    # Errors
    'SlaError', 'IndexOutOfRangeError', 'ShapeMismatchError', 'DivisionByZeroError',

    # Storage
    'Array', 'DType', 'float64', 'int64',

    # Vectors
    'Vector', 'DenseVector', 'SparseVector',

    # Builder
    'DictionaryOfKeys', 'DOK',

    # Matrices
    'MatrixFormat', 'Matrix', 'SparseMatrix',
    'CompressedRow', 'CompressedColumn', 'CSR', 'CSC', 'DenseMatrix',

    # Functions
    'convert_format', 'from_scipy', 'from_numpy',
    'spmv', 'spmv_transpose', 'dot', 'nullspace', 'rank',
]
