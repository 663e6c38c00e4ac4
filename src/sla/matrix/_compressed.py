"""
Shared implementation of the compressed sparse layouts.

CSR and CSC store the same three arrays along different axes:

    pointers    major_count + 1 offsets, pointers[0] == 0, pointers[-1] == nnz
    indices     minor index of each stored entry, ascending within a run
    values      float64 value of each stored entry

``major`` is the row axis for CSR and the column axis for CSC. Everything
that only depends on this abstraction lives here; the subclasses name the
arrays and supply the orientation-specific product rules.
"""

import logging
from bisect import bisect_left
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .._config import get_config
from .._errors import (
    IndexOutOfRangeError,
    ShapeMismatchError,
    check_inner_dims,
    check_same_shape,
)
from .._kernel import merge_compressed, rebucket, spmv_gather, spmv_gather_sparse, spmv_scatter
from ._array import Array
from ._base import SparseMatrix
from ._dok import DictionaryOfKeys
from ._dtypes import INDEX_DTYPE, VALUE_DTYPE
from ._vector import DenseVector, SparseVector, Vector

logger = logging.getLogger("sla.matrix.compressed")

__all__ = ['CompressedMatrix']

Parts = Tuple[List[int], List[int], List[float]]


class CompressedMatrix(SparseMatrix):
    """Common base of ``CompressedRow`` and ``CompressedColumn``.

    Construction:
        ``Cls(rows, cols)``                                  empty pattern
        ``Cls(rows, cols, dok)``                             compact a builder
        ``Cls(rows, cols, pointers, indices, values)``       raw arrays

    Raw arrays are taken as given: runs must already be sorted and free of
    duplicates. Only their lengths, offsets and index ranges are checked.
    """

    _BY_COLUMN = False

    def __init__(
        self,
        rows: int,
        cols: int,
        pointers: Any = None,
        indices: Optional[Sequence[int]] = None,
        values: Optional[Sequence[float]] = None,
    ):
        rows, cols = int(rows), int(cols)
        if rows < 0 or cols < 0:
            raise ValueError(f"Shape must be non-negative, got ({rows}, {cols})")
        self._shape = (rows, cols)

        if isinstance(pointers, DictionaryOfKeys):
            if indices is not None or values is not None:
                raise TypeError("A DictionaryOfKeys is passed alone, without index/value arrays")
            parts = self._compact(pointers)
        elif pointers is None:
            if indices is not None or values is not None:
                raise TypeError("Index/value arrays given without pointers")
            parts = ([0] * (self._major_count + 1), [], [])
        else:
            if indices is None or values is None:
                raise TypeError("pointers, indices and values must be given together")
            parts = (pointers, indices, values)
            self._validate_arrays(*parts)

        self._set_parts(*parts)

    # =========================================================================
    # Orientation
    # =========================================================================

    @property
    def _major_count(self) -> int:
        return self._shape[1] if self._BY_COLUMN else self._shape[0]

    @property
    def _minor_count(self) -> int:
        return self._shape[0] if self._BY_COLUMN else self._shape[1]

    def _orient(self, row: int, col: int) -> Tuple[int, int]:
        """(row, col) -> (major, minor)."""
        return (col, row) if self._BY_COLUMN else (row, col)

    # =========================================================================
    # Storage
    # =========================================================================

    def _set_parts(self, pointers, indices, values) -> None:
        self._pointers = Array.from_list(pointers, INDEX_DTYPE)
        self._indices = Array.from_list(indices, INDEX_DTYPE)
        self._values = Array.from_list(values, VALUE_DTYPE)

    @classmethod
    def _from_parts(cls, rows: int, cols: int, pointers, indices, values) -> 'CompressedMatrix':
        """Build from arrays produced by a kernel (no validation)."""
        obj = cls.__new__(cls)
        obj._shape = (rows, cols)
        obj._set_parts(pointers, indices, values)
        return obj

    def _parts(self) -> Parts:
        """Storage as plain lists, for the kernels."""
        return self._pointers.tolist(), self._indices.tolist(), self._values.tolist()

    def _validate_arrays(self, pointers, indices, values) -> None:
        major, minor = self._major_count, self._minor_count
        if len(pointers) != major + 1:
            raise ShapeMismatchError(
                f"pointers length {len(pointers)} != {major + 1}"
            )
        if len(indices) != len(values):
            raise ShapeMismatchError(
                f"indices length {len(indices)} != values length {len(values)}"
            )
        if pointers[0] != 0:
            raise ValueError(f"pointers[0] must be 0, got {pointers[0]}")
        if pointers[major] != len(values):
            raise ShapeMismatchError(
                f"pointers[-1] = {pointers[major]} does not match nnz = {len(values)}"
            )
        for m in range(major):
            if pointers[m + 1] < pointers[m]:
                raise ValueError(f"pointers must be non-decreasing (position {m})")
        for idx in indices:
            if not 0 <= idx < minor:
                raise IndexOutOfRangeError(f"index {idx} out of bounds [0, {minor})")

    def _compact(self, dok: DictionaryOfKeys) -> Parts:
        """Group builder entries by major index, sorted by minor index."""
        rows, cols = self._shape
        for r, c, _ in dok.nonzeros():
            if r >= rows or c >= cols:
                raise IndexOutOfRangeError(
                    f"entry ({r}, {c}) outside shape ({rows}, {cols})"
                )

        groups = dok.grouped(by_column=self._BY_COLUMN)
        pointers = [0]
        indices: List[int] = []
        values: List[float] = []
        for m in range(self._major_count):
            run = groups.get(m)
            if run:
                for minor in sorted(run):
                    indices.append(minor)
                    values.append(run[minor])
            pointers.append(len(indices))
        return pointers, indices, values

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        return self._shape

    @property
    def nnz(self) -> int:
        return len(self._values)

    @property
    def values(self) -> Array:
        """Stored values (shared with the matrix)."""
        return self._values

    # =========================================================================
    # Element Access
    # =========================================================================

    def _get(self, row: int, col: int) -> float:
        major, minor = self._orient(row, col)
        start, end = self._pointers[major], self._pointers[major + 1]
        pos = bisect_left(self._indices, minor, start, end)
        if pos < end and self._indices[pos] == minor:
            return self._values[pos]
        return 0.0

    def _run(self, major: int) -> Tuple[List[int], List[float]]:
        start, end = self._pointers[major], self._pointers[major + 1]
        return self._indices[start:end], self._values[start:end]

    def nonzeros(self) -> Iterator[Tuple[int, int, float]]:
        pointers, indices, values = self._parts()
        for m in range(self._major_count):
            for k in range(pointers[m], pointers[m + 1]):
                if self._BY_COLUMN:
                    yield indices[k], m, values[k]
                else:
                    yield m, indices[k], values[k]

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def zero(cls, rows: int, cols: int) -> 'CompressedMatrix':
        """Matrix with no stored entries."""
        return cls(rows, cols)

    @classmethod
    def identity(cls, n: int) -> 'CompressedMatrix':
        """``n x n`` identity with exactly ``n`` stored ones."""
        return cls._from_parts(n, n, list(range(n + 1)), list(range(n)), [1.0] * n)

    @classmethod
    def from_dense(cls, data: Sequence[Sequence[float]]) -> 'CompressedMatrix':
        """
        Create from nested row lists; zero cells are not stored.

        Example:
            >>> mat = CompressedRow.from_dense([[1, 0], [0, 2]])
        """
        data = [list(row) for row in data]
        rows = len(data)
        cols = len(data[0]) if rows else 0
        dok = DictionaryOfKeys()
        for i, row in enumerate(data):
            if len(row) != cols:
                raise ShapeMismatchError(f"Row {i} has length {len(row)}, expected {cols}")
            for j, v in enumerate(row):
                if v != 0:
                    dok.add(v, i, j)
        return cls(rows, cols, dok)

    @classmethod
    def from_numpy(cls, arr: Any) -> 'CompressedMatrix':
        """Create from a 2D numpy array."""
        import numpy as np

        arr = np.asarray(arr, dtype=np.float64)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2D array, got {arr.ndim}D")
        return cls.from_dense(arr.tolist())

    @classmethod
    def from_matrix(cls, mat: SparseMatrix) -> 'CompressedMatrix':
        """Re-express any matrix in this layout (a copy)."""
        dok = DictionaryOfKeys()
        for r, c, v in mat.nonzeros():
            dok.add_or_replace(v, r, c)
        return cls(mat.rows, mat.cols, dok)

    @classmethod
    def _coerce(cls, mat) -> 'CompressedMatrix':
        if isinstance(mat, cls):
            return mat
        if isinstance(mat, CompressedMatrix):
            return mat.to_compressed_column() if cls._BY_COLUMN else mat.to_compressed_row()
        logger.debug("coerce: %s -> %s", type(mat).__name__, cls.__name__)
        return cls.from_matrix(mat)

    # =========================================================================
    # Conversion
    # =========================================================================

    def copy(self) -> 'CompressedMatrix':
        return self._from_parts(
            self._shape[0], self._shape[1],
            self._pointers, self._indices, self._values,
        )

    def _rebucketed(self) -> Parts:
        return rebucket(self._major_count, self._minor_count, *self._parts())

    def to_dense(self):
        from ._dense import DenseMatrix

        rows, cols = self._shape
        flat = [0.0] * (rows * cols)
        for r, c, v in self.nonzeros():
            flat[r * cols + c] = v
        return DenseMatrix(rows, cols, flat)

    def to_scipy(self) -> Any:
        """
        Convert to a scipy sparse matrix of the same layout.

        Returns:
            scipy.sparse.csr_matrix or scipy.sparse.csc_matrix
        """
        import scipy.sparse as sp

        factory = sp.csc_matrix if self._BY_COLUMN else sp.csr_matrix
        return factory(
            (self._values.to_numpy(), self._indices.to_numpy(), self._pointers.to_numpy()),
            shape=self._shape,
        )

    @classmethod
    def from_scipy(cls, mat: Any) -> 'CompressedMatrix':
        """
        Create from any scipy sparse matrix (converted to this layout).

        Duplicates are summed and runs sorted before import.
        """
        import scipy.sparse as sp

        if not sp.issparse(mat):
            raise TypeError(f"Expected scipy sparse matrix, got {type(mat).__name__}")
        converted = sp.csc_matrix(mat) if cls._BY_COLUMN else sp.csr_matrix(mat)
        converted = converted.copy()
        converted.sum_duplicates()
        converted.sort_indices()
        rows, cols = converted.shape
        return cls(rows, cols, converted.indptr, converted.indices, converted.data)

    # =========================================================================
    # In-place Mutation
    # =========================================================================

    def transpose(self) -> 'CompressedMatrix':
        """
        Turn this matrix into its transpose, keeping the layout.

        Shape is swapped and every entry ``(i, j)`` moves to ``(j, i)``.
        Any alias of this matrix sees the change.
        """
        pointers, indices, values = self._rebucketed()
        self._shape = (self._shape[1], self._shape[0])
        self._set_parts(pointers, indices, values)
        return self

    def _scale_inplace(self, factor: float) -> None:
        values = self._values
        for k in range(len(values)):
            values[k] = values[k] * factor

    def eliminate_zeros(self, tolerance: float = 0.0) -> int:
        """
        Remove stored entries with ``|value| <= tolerance``.

        Returns:
            Number of removed entries
        """
        pointers, indices, values = self._parts()
        new_pointers = [0]
        new_indices: List[int] = []
        new_values: List[float] = []
        for m in range(self._major_count):
            for k in range(pointers[m], pointers[m + 1]):
                if abs(values[k]) > tolerance:
                    new_indices.append(indices[k])
                    new_values.append(values[k])
            new_pointers.append(len(new_indices))
        removed = len(values) - len(new_values)
        self._set_parts(new_pointers, new_indices, new_values)
        return removed

    # =========================================================================
    # Native Arithmetic (operands already in this layout)
    # =========================================================================

    @classmethod
    def _merge(cls, left, right, sign: float, operation: str) -> 'CompressedMatrix':
        check_same_shape(left.shape, right.shape, operation)
        parts = merge_compressed(left._major_count, left._parts(), right._parts(), sign)
        return cls._from_parts(left.rows, left.cols, *parts)

    @classmethod
    def _add_native(cls, left, right) -> 'CompressedMatrix':
        return cls._merge(left, right, 1.0, "add")

    @classmethod
    def _subtract_native(cls, left, right) -> 'CompressedMatrix':
        return cls._merge(left, right, -1.0, "subtract")

    @classmethod
    def _multiply_native(cls, left, right) -> 'CompressedMatrix':
        check_inner_dims(left.shape, right.shape)
        prune = get_config().compute.prune_products
        parts = cls._product_parts(left, right, prune)
        return cls._from_parts(left.rows, right.cols, *parts)

    @classmethod
    def _product_parts(cls, left, right, prune: bool) -> Parts:
        raise NotImplementedError

    def _scaled(self, factor: float) -> 'CompressedMatrix':
        result = self.copy()
        result._scale_inplace(factor)
        return result

    # =========================================================================
    # Matrix x Vector
    # =========================================================================

    def _gather(self, vector: Vector, out_size: int) -> Vector:
        """Dot every major run with ``vector``."""
        if vector.is_sparse:
            acc = spmv_gather_sparse(self._major_count, self._parts(), vector.nonzeros())
            return SparseVector(out_size, {i: v for i, v in acc.items() if v != 0.0})
        x = vector.tolist()
        return DenseVector(spmv_gather(self._major_count, self._parts(), x.__getitem__))

    def _scatter(self, vector: Vector, out_size: int) -> Vector:
        """Accumulate ``vector[m] * run(m)`` over the majors."""
        if vector.is_sparse:
            acc = spmv_scatter(self._parts(), vector.nonzeros())
            return SparseVector(out_size, {i: v for i, v in acc.items() if v != 0.0})
        acc = spmv_scatter(self._parts(), enumerate(vector.tolist()))
        out = [0.0] * out_size
        for i, v in acc.items():
            out[i] = v
        return DenseVector(out)

    def _check_vector(self, vector: Vector, expected: int) -> None:
        if vector.size != expected:
            raise ShapeMismatchError(
                f"vector size {vector.size} does not match matrix dimension {expected}"
            )

    def _multiply_vector(self, vector: Vector) -> Vector:
        self._check_vector(vector, self.cols)
        if self._BY_COLUMN:
            return self._scatter(vector, self.rows)
        return self._gather(vector, self.rows)

    def _transpose_multiply_vector(self, vector: Vector) -> Vector:
        self._check_vector(vector, self.rows)
        if self._BY_COLUMN:
            return self._gather(vector, self.cols)
        return self._scatter(vector, self.cols)
