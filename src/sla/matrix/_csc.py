"""CSC (Compressed Sparse Column) Matrix.

The column dual of ``CompressedRow``:

    column_pointers  cols + 1 offsets into the runs
    row_indices      row of every stored entry, ascending within a column
    values           value of every stored entry

The CSC arrays of ``A`` are the CSR arrays of ``A^T``, so products are
computed by the row kernels with operands swapped.
"""

from typing import TYPE_CHECKING, Tuple

from .._config import get_config
from .._errors import check_index, check_inner_dims
from .._kernel import spgemm, spmm_dense
from ._array import Array
from ._base import MatrixFormat
from ._compressed import CompressedMatrix, Parts

if TYPE_CHECKING:
    from ._csr import CompressedRow
    from ._dense import DenseMatrix

__all__ = ['CompressedColumn', 'CSC']


class CompressedColumn(CompressedMatrix):
    """Column-compressed sparse matrix.

    Construction:
        ``CompressedColumn(rows, cols)``
        ``CompressedColumn(rows, cols, dok)``
        ``CompressedColumn(rows, cols, column_pointers, row_indices, values)``
    """

    _FORMAT = MatrixFormat.CSC
    _BY_COLUMN = True

    @property
    def column_pointers(self) -> Array:
        """Column offsets (length cols + 1)."""
        return self._pointers

    @property
    def row_indices(self) -> Array:
        """Row of each stored entry."""
        return self._indices

    def get_col(self, j: int) -> Tuple[list, list]:
        """
        Stored entries of column ``j``.

        Returns:
            (row_indices, values) of the column
        """
        check_index(j, self.cols, "column")
        return self._run(j)

    def col_length(self, j: int) -> int:
        """Number of stored entries in column ``j``."""
        check_index(j, self.cols, "column")
        return self._pointers[j + 1] - self._pointers[j]

    def to_compressed_row(self) -> 'CompressedRow':
        """Same logical matrix in row-compressed layout."""
        from ._csr import CompressedRow

        return CompressedRow._from_parts(self.rows, self.cols, *self._rebucketed())

    def to_compressed_column(self) -> 'CompressedColumn':
        """Copy in the same layout."""
        return self.copy()

    @classmethod
    def _product_parts(cls, left: 'CompressedColumn', right: 'CompressedColumn', prune: bool) -> Parts:
        # (A B)^T = B^T A^T, column runs of the product are row runs of B^T A^T
        return spgemm(right.cols, right._parts(), left._parts(), prune)

    @classmethod
    def _multiply_dense_left(cls, left: 'DenseMatrix', right: 'CompressedColumn') -> 'CompressedColumn':
        """Column-wise product against a dense left operand read in place."""
        check_inner_dims(left.shape, right.shape)
        parts = spmm_dense(
            right.cols, right._parts(), lambda k, i: left._get(i, k), left.rows,
            get_config().compute.prune_products,
        )
        return cls._from_parts(left.rows, right.cols, *parts)


# Short alias
CSC = CompressedColumn
