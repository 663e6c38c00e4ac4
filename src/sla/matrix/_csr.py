"""CSR (Compressed Sparse Row) Matrix.

Rows are stored as contiguous runs of ``(column, value)`` pairs:

    row_pointers     rows + 1 offsets into the runs
    column_indices   column of every stored entry, ascending within a row
    values           value of every stored entry

Design:
    Row access and row-wise products are native. Column-wise work
    (transpose-multiply, conversion to CSC) re-buckets entries by column.

Example:
    >>> mat = CompressedRow(2, 3, [0, 3, 6], [0, 1, 2, 0, 1, 2],
    ...                     [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
    >>> mat[1, 2]
    6.0
    >>> mat.to_compressed_column().column_pointers.tolist()
    [0, 2, 4, 6]
"""

from typing import TYPE_CHECKING, Tuple

from .._config import get_config
from .._errors import check_index, check_inner_dims
from .._kernel import spgemm, spmm_dense
from ._array import Array
from ._base import MatrixFormat
from ._compressed import CompressedMatrix, Parts

if TYPE_CHECKING:
    from ._csc import CompressedColumn
    from ._dense import DenseMatrix

__all__ = ['CompressedRow', 'CSR']


class CompressedRow(CompressedMatrix):
    """Row-compressed sparse matrix.

    Construction:
        ``CompressedRow(rows, cols)``
        ``CompressedRow(rows, cols, dok)``
        ``CompressedRow(rows, cols, row_pointers, column_indices, values)``

    Attributes:
        shape: (rows, cols)
        nnz: Number of stored entries
        row_pointers, column_indices, values: Storage arrays
    """

    _FORMAT = MatrixFormat.CSR
    _BY_COLUMN = False

    # =========================================================================
    # Storage Arrays
    # =========================================================================

    @property
    def row_pointers(self) -> Array:
        """Row offsets (length rows + 1)."""
        return self._pointers

    @property
    def column_indices(self) -> Array:
        """Column of each stored entry."""
        return self._indices

    # =========================================================================
    # Row Access
    # =========================================================================

    def get_row(self, i: int) -> Tuple[list, list]:
        """
        Stored entries of row ``i``.

        Returns:
            (column_indices, values) of the row
        """
        check_index(i, self.rows, "row")
        return self._run(i)

    def row_length(self, i: int) -> int:
        """Number of stored entries in row ``i``."""
        check_index(i, self.rows, "row")
        return self._pointers[i + 1] - self._pointers[i]

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_compressed_row(self) -> 'CompressedRow':
        """Copy in the same layout."""
        return self.copy()

    def to_compressed_column(self) -> 'CompressedColumn':
        """Same logical matrix in column-compressed layout."""
        from ._csc import CompressedColumn

        return CompressedColumn._from_parts(self.rows, self.cols, *self._rebucketed())

    # =========================================================================
    # Products
    # =========================================================================

    @classmethod
    def _product_parts(cls, left: 'CompressedRow', right: 'CompressedRow', prune: bool) -> Parts:
        return spgemm(left.rows, left._parts(), right._parts(), prune)

    @classmethod
    def _multiply_dense_right(cls, left: 'CompressedRow', right: 'DenseMatrix') -> 'CompressedRow':
        """Row-wise product against a dense right operand read in place."""
        check_inner_dims(left.shape, right.shape)
        parts = spmm_dense(
            left.rows, left._parts(), right._get, right.cols,
            get_config().compute.prune_products,
        )
        return cls._from_parts(left.rows, right.cols, *parts)


# Short alias
CSR = CompressedRow
