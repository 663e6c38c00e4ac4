"""
Abstract Base Classes for Matrices.

This module defines the abstract interfaces shared by every matrix layout:

    Matrix          any layout: shape, indexed read, arithmetic entry points
    SparseMatrix    compressed layouts: stored-entry count, null space

Arithmetic entry points are classmethods so that the class they are called
on decides the layout of the result:

    >>> CompressedRow.add(a, b)      # always a CompressedRow
    >>> DenseMatrix.multiply(a, b)   # always a DenseMatrix
    >>> Matrix.add(a, b)             # Dense if either is Dense, else a's layout

The actual (format, format) resolution lives in ``_dispatch``.
"""

from abc import ABC, abstractmethod
from enum import Enum
from numbers import Number
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple, Union

from .._config import get_absolute_precision
from .._errors import check_index
from ._vector import Vector

if TYPE_CHECKING:
    import numpy as np
    from ._csr import CompressedRow
    from ._csc import CompressedColumn
    from ._dense import DenseMatrix

__all__ = ['MatrixFormat', 'Matrix', 'SparseMatrix']


class MatrixFormat(Enum):
    """Closed set of storage layouts."""

    DENSE = 'dense'
    CSR = 'csr'
    CSC = 'csc'

    def __str__(self) -> str:
        return self.value

    @property
    def is_sparse(self) -> bool:
        return self is not MatrixFormat.DENSE


Operand = Union['Matrix', Vector, Number]


class Matrix(ABC):
    """Abstract base class for all matrix layouts.

    Subclasses set ``_FORMAT`` and implement storage access, conversion and
    the in-place mutators. Everything else is derived here.
    """

    _FORMAT: Optional[MatrixFormat] = None

    # =========================================================================
    # Abstract Properties
    # =========================================================================

    @property
    @abstractmethod
    def shape(self) -> Tuple[int, int]:
        """Matrix shape (rows, cols)."""
        ...

    @property
    def format(self) -> MatrixFormat:
        """Storage layout tag."""
        return self._FORMAT

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self.shape[0]

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self.shape[1]

    @property
    def is_sparse(self) -> bool:
        return self._FORMAT.is_sparse

    # =========================================================================
    # Element Access
    # =========================================================================

    @abstractmethod
    def _get(self, row: int, col: int) -> float:
        """Unchecked element read."""
        ...

    def __getitem__(self, key: Tuple[int, int]) -> float:
        """Read element ``(row, col)``; missing sparse entries read 0.0."""
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"Matrix indices must be (row, col), got {key!r}")
        row, col = key
        check_index(row, self.rows, "row")
        check_index(col, self.cols, "column")
        return self._get(row, col)

    @abstractmethod
    def nonzeros(self) -> Iterator[Tuple[int, int, float]]:
        """Iterate stored ``(row, col, value)`` entries."""
        ...

    # =========================================================================
    # Conversion
    # =========================================================================

    @abstractmethod
    def copy(self) -> 'Matrix':
        """Independent deep copy."""
        ...

    @abstractmethod
    def to_dense(self) -> 'DenseMatrix':
        ...

    @abstractmethod
    def to_compressed_row(self) -> 'CompressedRow':
        ...

    @abstractmethod
    def to_compressed_column(self) -> 'CompressedColumn':
        ...

    def tocsr(self) -> 'CompressedRow':
        """Alias for ``to_compressed_row()``."""
        return self.to_compressed_row()

    def tocsc(self) -> 'CompressedColumn':
        """Alias for ``to_compressed_column()``."""
        return self.to_compressed_column()

    def to_numpy(self) -> 'np.ndarray':
        """Dense numpy array of shape ``(rows, cols)``."""
        import numpy as np

        out = np.zeros(self.shape, dtype=np.float64)
        for r, c, v in self.nonzeros():
            out[r, c] = v
        return out

    def tolist(self) -> List[List[float]]:
        out = [[0.0] * self.cols for _ in range(self.rows)]
        for r, c, v in self.nonzeros():
            out[r][c] = v
        return out

    @classmethod
    def _coerce(cls, mat: 'Matrix') -> 'Matrix':
        """Express ``mat`` in this class's layout (no copy when already there)."""
        raise TypeError(f"{cls.__name__} has no concrete layout")

    # =========================================================================
    # In-place Mutation
    # =========================================================================

    @abstractmethod
    def transpose(self) -> 'Matrix':
        """Transpose in place and return ``self``."""
        ...

    def transposed(self) -> 'Matrix':
        """New matrix holding the transpose."""
        return self.copy().transpose()

    @abstractmethod
    def _scale_inplace(self, factor: float) -> None:
        ...

    def opposite(self) -> 'Matrix':
        """Negate every entry in place and return ``self``."""
        self._scale_inplace(-1.0)
        return self

    # =========================================================================
    # Arithmetic Entry Points
    # =========================================================================

    @classmethod
    def add(cls, left: 'Matrix', right: 'Matrix') -> 'Matrix':
        """Entry-wise sum ``left + right``."""
        from . import _dispatch
        return _dispatch.binary('add', cls, left, right)

    @classmethod
    def subtract(cls, left: 'Matrix', right: 'Matrix') -> 'Matrix':
        """Entry-wise difference ``left - right``."""
        from . import _dispatch
        return _dispatch.binary('subtract', cls, left, right)

    @classmethod
    def multiply(cls, left: Operand, right: Operand) -> Union['Matrix', Vector]:
        """Matrix product, matrix-vector product, or scaling by a number.

        Args:
            left: Matrix or number
            right: Matrix, vector or number

        Returns:
            Matrix for matrix and scalar products, Vector for matrix-vector
        """
        from . import _dispatch

        if isinstance(right, Vector):
            if not isinstance(left, Matrix):
                raise TypeError(f"Cannot multiply {type(left).__name__} by a vector")
            return left._multiply_vector(right)
        if isinstance(left, Number) and isinstance(right, Matrix):
            return _dispatch.scale(cls, right, float(left))
        if isinstance(right, Number) and isinstance(left, Matrix):
            return _dispatch.scale(cls, left, float(right))
        return _dispatch.binary('multiply', cls, left, right)

    @classmethod
    def divide(cls, mat: 'Matrix', divisor: float) -> 'Matrix':
        """Divide every entry by a scalar.

        Raises:
            DivisionByZeroError: If ``divisor`` is zero
        """
        from . import _dispatch
        return _dispatch.divide(cls, mat, divisor)

    @classmethod
    def transpose_multiply(cls, mat: 'Matrix', vector: Vector) -> Vector:
        """``mat^T @ vector`` without building the transpose."""
        if not isinstance(vector, Vector):
            raise TypeError(f"Expected a vector, got {type(vector).__name__}")
        return mat._transpose_multiply_vector(vector)

    @abstractmethod
    def _multiply_vector(self, vector: Vector) -> Vector:
        ...

    @abstractmethod
    def _transpose_multiply_vector(self, vector: Vector) -> Vector:
        ...

    # =========================================================================
    # Operators
    # =========================================================================

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix.add(self, other)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix.subtract(self, other)

    def __matmul__(self, other):
        if not isinstance(other, (Matrix, Vector)):
            return NotImplemented
        return Matrix.multiply(self, other)

    def __mul__(self, other):
        if not isinstance(other, Number):
            return NotImplemented
        return Matrix.multiply(self, other)

    def __rmul__(self, other):
        if not isinstance(other, Number):
            return NotImplemented
        return Matrix.multiply(other, self)

    def __truediv__(self, other):
        if not isinstance(other, Number):
            return NotImplemented
        return Matrix.divide(self, other)

    def __neg__(self):
        return self.copy().opposite()

    # =========================================================================
    # Comparison
    # =========================================================================

    def equals(self, other: 'Matrix', tolerance: Optional[float] = None) -> bool:
        """True if shapes match and every cell differs by less than ``tolerance``.

        Args:
            other: Matrix of any layout
            tolerance: Absolute tolerance, defaults to the configured precision
        """
        if tolerance is None:
            tolerance = get_absolute_precision()
        if self.shape != other.shape:
            return False

        diff = {}
        for r, c, v in self.nonzeros():
            diff[(r, c)] = v
        for r, c, v in other.nonzeros():
            diff[(r, c)] = diff.get((r, c), 0.0) - v
        return all(abs(d) < tolerance for d in diff.values())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self.shape})"


class SparseMatrix(Matrix):
    """Abstract base class for compressed layouts (CSR and CSC)."""

    @property
    @abstractmethod
    def nnz(self) -> int:
        """Number of stored entries."""
        ...

    @property
    def density(self) -> float:
        """Stored entries divided by total cells."""
        total = self.rows * self.cols
        return self.nnz / total if total > 0 else 0.0

    # =========================================================================
    # Arithmetic Entry Points (abstract level accepts sparse operands only)
    # =========================================================================

    @classmethod
    def add(cls, left: 'SparseMatrix', right: 'SparseMatrix') -> 'SparseMatrix':
        from . import _dispatch
        return _dispatch.binary('add', cls, left, right, sparse_only=cls._FORMAT is None)

    @classmethod
    def subtract(cls, left: 'SparseMatrix', right: 'SparseMatrix') -> 'SparseMatrix':
        from . import _dispatch
        return _dispatch.binary('subtract', cls, left, right, sparse_only=cls._FORMAT is None)

    @classmethod
    def multiply(cls, left, right):
        from . import _dispatch

        if isinstance(right, Vector) or isinstance(left, Number) or isinstance(right, Number):
            return super().multiply(left, right)
        return _dispatch.binary('multiply', cls, left, right, sparse_only=cls._FORMAT is None)

    # =========================================================================
    # Null Space
    # =========================================================================

    def kernel(self) -> List[Vector]:
        """Basis of the null space, one DenseVector per free column."""
        from ..math.linalg import nullspace
        return nullspace(self)

    def rank(self) -> int:
        """Rank obtained by elimination."""
        from ..math.linalg import rank
        return rank(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self.shape}, nnz={self.nnz})"
