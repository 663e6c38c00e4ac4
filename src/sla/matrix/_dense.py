"""
Dense Matrix.

Every cell is stored in a flat row-major ``float64`` Array:
``values[r * cols + c]``. The dense layout is the fallback target of
cross-format arithmetic: any operand pair can produce a ``DenseMatrix``.
"""

from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .._errors import ShapeMismatchError, check_index, check_inner_dims, check_same_shape
from ._array import Array
from ._base import Matrix, MatrixFormat
from ._dtypes import VALUE_DTYPE
from ._vector import DenseVector, Vector

__all__ = ['DenseMatrix']


class DenseMatrix(Matrix):
    """Row-major dense matrix.

    Construction:
        ``DenseMatrix(rows, cols)``            zero-initialized
        ``DenseMatrix(rows, cols, values)``    flat row-major values

    Example:
        >>> m = DenseMatrix(2, 2, [1.0, 2.0, 3.0, 4.0])
        >>> m[1, 0]
        3.0
    """

    _FORMAT = MatrixFormat.DENSE

    def __init__(self, rows: int, cols: int, values: Optional[Sequence[float]] = None):
        rows, cols = int(rows), int(cols)
        if rows < 0 or cols < 0:
            raise ValueError(f"Shape must be non-negative, got ({rows}, {cols})")
        self._shape = (rows, cols)
        if values is None:
            self._values = Array.zeros(rows * cols, VALUE_DTYPE)
        else:
            if len(values) != rows * cols:
                raise ShapeMismatchError(
                    f"Expected {rows * cols} values for shape ({rows}, {cols}), got {len(values)}"
                )
            self._values = Array.from_list(values, VALUE_DTYPE)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        return self._shape

    @property
    def values(self) -> Array:
        """Flat row-major storage (shared with the matrix)."""
        return self._values

    # =========================================================================
    # Element Access
    # =========================================================================

    def _get(self, row: int, col: int) -> float:
        return self._values[row * self._shape[1] + col]

    def __setitem__(self, key: Tuple[int, int], value: float):
        row, col = key
        check_index(row, self.rows, "row")
        check_index(col, self.cols, "column")
        self._values[row * self._shape[1] + col] = value

    def nonzeros(self) -> Iterator[Tuple[int, int, float]]:
        cols = self._shape[1]
        for k, v in enumerate(self._values):
            if v != 0.0:
                yield k // cols, k % cols, v

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def zero(cls, rows: int, cols: int) -> 'DenseMatrix':
        return cls(rows, cols)

    @classmethod
    def identity(cls, n: int) -> 'DenseMatrix':
        mat = cls(n, n)
        for i in range(n):
            mat._values[i * n + i] = 1.0
        return mat

    @classmethod
    def from_dense(cls, data: Sequence[Sequence[float]]) -> 'DenseMatrix':
        """Create from nested row lists."""
        data = [list(row) for row in data]
        rows = len(data)
        cols = len(data[0]) if rows else 0
        flat: List[float] = []
        for i, row in enumerate(data):
            if len(row) != cols:
                raise ShapeMismatchError(f"Row {i} has length {len(row)}, expected {cols}")
            flat.extend(row)
        return cls(rows, cols, flat)

    @classmethod
    def from_numpy(cls, arr: Any) -> 'DenseMatrix':
        """Create from a 2D numpy array."""
        import numpy as np

        arr = np.asarray(arr, dtype=np.float64)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2D array, got {arr.ndim}D")
        return cls(arr.shape[0], arr.shape[1], arr.ravel())

    @classmethod
    def from_matrix(cls, mat: Matrix) -> 'DenseMatrix':
        rows, cols = mat.shape
        flat = [0.0] * (rows * cols)
        for r, c, v in mat.nonzeros():
            flat[r * cols + c] = v
        return cls(rows, cols, flat)

    @classmethod
    def _coerce(cls, mat: Matrix) -> 'DenseMatrix':
        if isinstance(mat, DenseMatrix):
            return mat
        return mat.to_dense()

    # =========================================================================
    # Conversion
    # =========================================================================

    def copy(self) -> 'DenseMatrix':
        return DenseMatrix(self._shape[0], self._shape[1], self._values)

    def to_dense(self) -> 'DenseMatrix':
        return self.copy()

    def to_compressed_row(self):
        from ._csr import CompressedRow
        return CompressedRow.from_matrix(self)

    def to_compressed_column(self):
        from ._csc import CompressedColumn
        return CompressedColumn.from_matrix(self)

    def to_numpy(self):
        return self._values.to_numpy().reshape(self._shape)

    def tolist(self) -> List[List[float]]:
        flat = self._values.tolist()
        cols = self._shape[1]
        return [flat[i * cols:(i + 1) * cols] for i in range(self._shape[0])]

    # =========================================================================
    # In-place Mutation
    # =========================================================================

    def transpose(self) -> 'DenseMatrix':
        """Transpose in place and return ``self``."""
        rows, cols = self._shape
        flat = self._values.tolist()
        self._values[:] = [flat[r * cols + c] for c in range(cols) for r in range(rows)]
        self._shape = (cols, rows)
        return self

    def _scale_inplace(self, factor: float) -> None:
        self._values[:] = [v * factor for v in self._values]

    def _scaled(self, factor: float) -> 'DenseMatrix':
        return DenseMatrix(self._shape[0], self._shape[1], [v * factor for v in self._values])

    # =========================================================================
    # Native Arithmetic (result always dense)
    # =========================================================================

    @classmethod
    def _combine(cls, left: Matrix, right: Matrix, sign: float, operation: str) -> 'DenseMatrix':
        check_same_shape(left.shape, right.shape, operation)
        rows, cols = left.shape
        if isinstance(left, DenseMatrix):
            flat = left._values.tolist()
        else:
            flat = [0.0] * (rows * cols)
            for r, c, v in left.nonzeros():
                flat[r * cols + c] = v
        for r, c, v in right.nonzeros():
            flat[r * cols + c] += sign * v
        return cls(rows, cols, flat)

    @classmethod
    def _add_native(cls, left: Matrix, right: Matrix) -> 'DenseMatrix':
        return cls._combine(left, right, 1.0, "add")

    @classmethod
    def _subtract_native(cls, left: Matrix, right: Matrix) -> 'DenseMatrix':
        return cls._combine(left, right, -1.0, "subtract")

    @classmethod
    def _multiply_native(cls, left: 'DenseMatrix', right: 'DenseMatrix') -> 'DenseMatrix':
        """Textbook triple loop."""
        check_inner_dims(left.shape, right.shape)
        m, inner = left.shape
        n = right.cols
        a = left._values.tolist()
        b = right._values.tolist()
        out = [0.0] * (m * n)
        for i in range(m):
            for k in range(inner):
                aik = a[i * inner + k]
                if aik == 0.0:
                    continue
                row = i * n
                col = k * n
                for j in range(n):
                    out[row + j] += aik * b[col + j]
        return cls(m, n, out)

    @classmethod
    def _multiply_sparse_left(cls, left: Matrix, right: 'DenseMatrix') -> 'DenseMatrix':
        """Scatter each stored ``(i, k, a)`` of ``left`` against row ``k`` of ``right``."""
        check_inner_dims(left.shape, right.shape)
        n = right.cols
        b = right._values.tolist()
        out = [0.0] * (left.rows * n)
        for i, k, a in left.nonzeros():
            row = i * n
            col = k * n
            for j in range(n):
                out[row + j] += a * b[col + j]
        return cls(left.rows, n, out)

    @classmethod
    def _multiply_sparse_right(cls, left: 'DenseMatrix', right: Matrix) -> 'DenseMatrix':
        """Scatter each stored ``(k, j, b)`` of ``right`` against column ``k`` of ``left``."""
        check_inner_dims(left.shape, right.shape)
        m, inner = left.shape
        n = right.cols
        a = left._values.tolist()
        out = [0.0] * (m * n)
        for k, j, b in right.nonzeros():
            for i in range(m):
                out[i * n + j] += a[i * inner + k] * b
        return cls(m, n, out)

    # =========================================================================
    # Matrix x Vector (always dense out)
    # =========================================================================

    def _multiply_vector(self, vector: Vector) -> DenseVector:
        rows, cols = self._shape
        if vector.size != cols:
            raise ShapeMismatchError(f"vector size {vector.size} does not match matrix columns {cols}")
        a = self._values.tolist()
        out = [0.0] * rows
        for j, x in vector.nonzeros():
            for i in range(rows):
                out[i] += a[i * cols + j] * x
        return DenseVector(out)

    def _transpose_multiply_vector(self, vector: Vector) -> DenseVector:
        rows, cols = self._shape
        if vector.size != rows:
            raise ShapeMismatchError(f"vector size {vector.size} does not match matrix rows {rows}")
        a = self._values.tolist()
        out = [0.0] * cols
        for i, x in vector.nonzeros():
            base = i * cols
            for j in range(cols):
                out[j] += a[base + j] * x
        return DenseVector(out)

    # =========================================================================
    # Null Space
    # =========================================================================

    def kernel(self) -> List[Vector]:
        """Basis of the null space, one DenseVector per free column."""
        from ..math.linalg import nullspace
        return nullspace(self)

    def rank(self) -> int:
        from ..math.linalg import rank
        return rank(self)

    def __repr__(self) -> str:
        return f"DenseMatrix(shape={self._shape})"
