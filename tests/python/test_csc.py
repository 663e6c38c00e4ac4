"""
Tests for CompressedColumn (CSC).
"""

import pytest
import numpy as np
from sla import IndexOutOfRangeError, ShapeMismatchError
from sla.matrix import CompressedColumn, CompressedRow, CSC

from conftest import assert_compressed_equal, assert_matrix_equal


class TestCompressedColumnCreation:
    """Test CSC construction."""

    def test_from_arrays(self, small_csc_matrix, dense_matrix_small):
        """Test the raw-array constructor."""
        assert small_csc_matrix.shape == (3, 4)
        assert small_csc_matrix.nnz == 6
        assert_matrix_equal(small_csc_matrix, dense_matrix_small)

    def test_alias(self):
        """Test the short alias."""
        assert CSC is CompressedColumn

    def test_identity(self):
        """Test identity() stores exactly n ones."""
        mat = CompressedColumn.identity(3)
        assert_compressed_equal(mat, [0, 1, 2, 3], [0, 1, 2], [1.0, 1.0, 1.0])

    def test_zero(self):
        """Test zero() factory."""
        mat = CompressedColumn.zero(2, 3)
        assert mat.column_pointers.tolist() == [0, 0, 0, 0]

    def test_pointer_length_mismatch(self):
        """Test column pointer length is validated against cols."""
        with pytest.raises(ShapeMismatchError):
            CompressedColumn(2, 3, [0, 1, 2], [0, 1], [1.0, 2.0])

    def test_row_out_of_range(self):
        """Test row indices are bounds-checked."""
        with pytest.raises(IndexOutOfRangeError):
            CompressedColumn(2, 1, [0, 1], [2], [1.0])


class TestCompressedColumnAccess:
    """Test element and column access."""

    def test_indexer_matches_dense(self, small_csc_matrix, dense_matrix_small):
        """Test every cell reads its value or 0.0."""
        for r in range(3):
            for c in range(4):
                assert small_csc_matrix[r, c] == dense_matrix_small[r, c]

    def test_get_col(self, small_csc_matrix):
        """Test get_col()."""
        rows, values = small_csc_matrix.get_col(3)
        assert rows == [1, 2]
        assert values == [4.0, 6.0]
        assert small_csc_matrix.col_length(1) == 1
        with pytest.raises(IndexOutOfRangeError):
            small_csc_matrix.get_col(4)

    def test_out_of_range(self, small_csc_matrix):
        """Test out-of-range indices fail fast."""
        with pytest.raises(IndexOutOfRangeError):
            small_csc_matrix[0, 4]


class TestCompressedColumnConversion:
    """Test conversion and transposition."""

    def test_to_compressed_row(self, small_csc_matrix, small_csr_matrix):
        """Test CSC to CSR keeps the logical matrix."""
        csr = small_csc_matrix.to_compressed_row()
        assert isinstance(csr, CompressedRow)
        assert csr.row_pointers == small_csr_matrix.row_pointers
        assert csr.column_indices == small_csr_matrix.column_indices
        assert csr.values == small_csr_matrix.values

    def test_round_trip(self, small_csc_matrix):
        """Test CSC -> CSR -> CSC is logically equal."""
        back = small_csc_matrix.to_compressed_row().to_compressed_column()
        assert back.equals(small_csc_matrix)
        assert back.column_pointers == small_csc_matrix.column_pointers

    def test_transpose_in_place(self, small_csc_matrix, dense_matrix_small):
        """Test transpose() changes the represented matrix."""
        small_csc_matrix.transpose()
        assert isinstance(small_csc_matrix, CompressedColumn)
        assert small_csc_matrix.shape == (4, 3)
        assert_matrix_equal(small_csc_matrix, dense_matrix_small.T)

    def test_transpose_vs_conversion(self, small_csc_matrix, small_csr_matrix):
        """Test transposing is not the same as converting."""
        converted = small_csc_matrix.to_compressed_row()
        transposed = small_csc_matrix.transposed()
        assert converted.shape == (3, 4)
        assert transposed.shape == (4, 3)
        assert converted.equals(small_csr_matrix)
        assert not transposed.equals(small_csr_matrix)


class TestCompressedColumnArithmetic:
    """Test same-format arithmetic."""

    def test_add_and_subtract(self):
        """Test column-wise merge."""
        left = CompressedColumn(3, 2, [0, 3, 6], [0, 1, 2, 0, 1, 2], [1, 2, 3, 5, 6, 7])
        right = CompressedColumn(3, 2, [0, 3, 6], [0, 1, 2, 0, 1, 2], [4, 3, 2, 5, 4, 3])
        assert CompressedColumn.add(left, right).values.tolist() == [5, 5, 5, 10, 10, 10]
        diff = CompressedColumn.subtract(left, right)
        assert diff.column_pointers.tolist() == [0, 3, 5]
        assert diff.values.tolist() == [-3, -1, 1, 2, 4]

    def test_multiply(self, left_6x5_csr, right_5x3_csr, product_6x3_csr):
        """Test CSC x CSC product agrees with the CSR product."""
        left = left_6x5_csr.to_compressed_column()
        right = right_5x3_csr.to_compressed_column()
        result = CompressedColumn.multiply(left, right)
        assert isinstance(result, CompressedColumn)
        assert result.shape == (6, 3)
        np.testing.assert_allclose(result.to_numpy(), product_6x3_csr.to_numpy())
        assert result.to_compressed_row().row_pointers == product_6x3_csr.row_pointers

    def test_multiply_identity(self, small_csc_matrix):
        """Test multiplicative identity."""
        eye = CompressedColumn.identity(4)
        assert CompressedColumn.multiply(small_csc_matrix, eye).equals(small_csc_matrix)

    def test_opposite(self, small_csc_matrix, dense_matrix_small):
        """Test in-place negation."""
        assert small_csc_matrix.opposite() is small_csc_matrix
        assert_matrix_equal(small_csc_matrix, -dense_matrix_small)
