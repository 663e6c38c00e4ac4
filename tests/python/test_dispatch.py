"""
Tests for cross-format arithmetic dispatch.
"""

import itertools

import pytest
import numpy as np
from sla.matrix import (
    CompressedColumn,
    CompressedRow,
    DenseMatrix,
    Matrix,
    MatrixFormat,
    SparseMatrix,
    DenseVector,
    convert_format,
)

from conftest import assert_matrix_equal

LAYOUTS = [DenseMatrix, CompressedRow, CompressedColumn]


def _as(cls, arr):
    return cls.from_numpy(arr)


class TestResultLayout:
    """The class an operation is called on decides the result layout."""

    @pytest.mark.parametrize("target", LAYOUTS)
    @pytest.mark.parametrize("left_cls,right_cls", list(itertools.product(LAYOUTS, repeat=2)))
    def test_concrete_entry_points(self, target, left_cls, right_cls, dense_matrix_small):
        """Test X.op(a, b) always yields an X."""
        a = _as(left_cls, dense_matrix_small)
        b = _as(right_cls, dense_matrix_small)
        square = _as(right_cls, dense_matrix_small.T)

        assert type(target.add(a, b)) is target
        assert type(target.subtract(a, b)) is target
        assert type(target.multiply(a, square)) is target

    @pytest.mark.parametrize("left_cls,right_cls", list(itertools.product(LAYOUTS, repeat=2)))
    def test_matrix_entry_point(self, left_cls, right_cls, dense_matrix_small):
        """Test Matrix.add promotes to dense, otherwise keeps the left layout."""
        a = _as(left_cls, dense_matrix_small)
        b = _as(right_cls, dense_matrix_small)
        result = Matrix.add(a, b)
        if DenseMatrix in (left_cls, right_cls):
            assert isinstance(result, DenseMatrix)
        else:
            assert type(result) is left_cls

    def test_sparse_entry_point(self, small_csr_matrix, small_csc_matrix):
        """Test SparseMatrix.add keeps the left layout."""
        assert isinstance(SparseMatrix.add(small_csc_matrix, small_csr_matrix), CompressedColumn)
        assert isinstance(SparseMatrix.multiply(small_csr_matrix, small_csc_matrix.transposed()), CompressedRow)

    def test_sparse_entry_point_rejects_dense(self, small_csr_matrix, small_dense_matrix):
        """Test SparseMatrix operations refuse dense operands."""
        with pytest.raises(TypeError):
            SparseMatrix.add(small_csr_matrix, small_dense_matrix)

    def test_concrete_sparse_accepts_dense(self):
        """Test CompressedRow and CompressedColumn take dense operands."""
        csr = CompressedRow.from_dense([[1, 2], [3, 4]])
        dense = DenseMatrix.from_dense([[1, 0], [0, 1]])

        product = CompressedRow.multiply(csr, dense)
        assert isinstance(product, CompressedRow)
        assert_matrix_equal(product, [[1.0, 2.0], [3.0, 4.0]])

        total = CompressedColumn.add(dense, csr.to_compressed_column())
        assert isinstance(total, CompressedColumn)
        assert_matrix_equal(total, [[2.0, 2.0], [3.0, 5.0]])

        left = CompressedColumn.multiply(dense, csr.to_compressed_column())
        assert isinstance(left, CompressedColumn)
        assert_matrix_equal(left, [[1.0, 2.0], [3.0, 4.0]])

        difference = CompressedRow.subtract(dense, csr)
        assert isinstance(difference, CompressedRow)
        assert_matrix_equal(difference, [[0.0, -2.0], [-3.0, -3.0]])

    def test_non_matrix_operand(self, small_csr_matrix):
        """Test unsupported operand types."""
        with pytest.raises(TypeError):
            Matrix.add(small_csr_matrix, [[1, 2]])


class TestCrossFormatAgreement:
    """Every layout pair computes the same numbers."""

    @pytest.mark.parametrize("target", LAYOUTS)
    @pytest.mark.parametrize("left_cls,right_cls", list(itertools.product(LAYOUTS, repeat=2)))
    def test_arithmetic(self, target, left_cls, right_cls, random_dense):
        """Test add, subtract and multiply against numpy."""
        a_np = random_dense(5, 4)
        b_np = random_dense(5, 4)
        c_np = random_dense(4, 6)
        a = _as(left_cls, a_np)
        b = _as(right_cls, b_np)
        c = _as(right_cls, c_np)

        assert_matrix_equal(target.add(a, b), a_np + b_np)
        assert_matrix_equal(target.subtract(a, b), a_np - b_np)
        assert_matrix_equal(target.multiply(a, c), a_np @ c_np)

    def test_product_case(self, left_6x5_csr, right_5x3_csr, product_6x3_csr):
        """Test the 6x5 by 5x3 product through every layout pair."""
        expected = product_6x3_csr.to_numpy()
        for fmt_l, fmt_r in itertools.product(MatrixFormat, repeat=2):
            left = convert_format(left_6x5_csr, fmt_l)
            right = convert_format(right_5x3_csr, fmt_r)
            assert_matrix_equal(Matrix.multiply(left, right), expected)


class TestAlgebraicProperties:
    """Identity and inverse laws across layouts."""

    @pytest.mark.parametrize("cls", LAYOUTS)
    def test_additive_identity(self, cls, dense_matrix_small):
        """Test M + 0 equals M."""
        m = _as(cls, dense_matrix_small)
        assert cls.add(m, cls.zero(3, 4)).equals(m)

    @pytest.mark.parametrize("cls", LAYOUTS)
    def test_additive_inverse(self, cls, dense_matrix_small):
        """Test M + opposite(M) equals zero."""
        m = _as(cls, dense_matrix_small)
        result = cls.add(m, m.copy().opposite())
        assert result.equals(cls.zero(3, 4))
        if cls is not DenseMatrix:
            assert result.nnz == 0

    @pytest.mark.parametrize("cls", LAYOUTS)
    def test_multiplicative_identity(self, cls, dense_matrix_small):
        """Test M x I equals M."""
        m = _as(cls, dense_matrix_small)
        assert cls.multiply(m, cls.identity(4)).equals(m)
        assert cls.multiply(cls.identity(3), m).equals(m)


class TestOperators:
    """Python operators route through Matrix."""

    def test_add_sub(self, small_csr_matrix, small_csc_matrix):
        """Test + and -."""
        assert isinstance(small_csr_matrix + small_csc_matrix, CompressedRow)
        assert_matrix_equal(small_csr_matrix - small_csc_matrix, np.zeros((3, 4)))

    def test_matmul(self, small_csr_matrix, small_dense_matrix, dense_matrix_small):
        """Test @ with matrices and vectors."""
        product = small_csr_matrix @ small_dense_matrix.transposed()
        assert isinstance(product, DenseMatrix)
        assert_matrix_equal(product, dense_matrix_small @ dense_matrix_small.T)

        y = small_csr_matrix @ DenseVector([1.0, 1.0, 1.0, 1.0])
        assert y.tolist() == [3.0, 7.0, 11.0]

    def test_scalar(self, small_csc_matrix, dense_matrix_small):
        """Test *, / and unary minus."""
        assert_matrix_equal(small_csc_matrix * 2, dense_matrix_small * 2)
        assert_matrix_equal(3 * small_csc_matrix, dense_matrix_small * 3)
        assert_matrix_equal(small_csc_matrix / 2, dense_matrix_small / 2)
        negated = -small_csc_matrix
        assert isinstance(negated, CompressedColumn)
        assert small_csc_matrix[0, 0] == 1.0
        assert negated[0, 0] == -1.0

    def test_unsupported_operand(self, small_csr_matrix):
        """Test operators return NotImplemented for foreign types."""
        with pytest.raises(TypeError):
            small_csr_matrix + 1
        with pytest.raises(TypeError):
            small_csr_matrix * "a"


class TestEquality:
    """Tolerance-based comparison."""

    def test_equals_within_precision(self, small_csr_matrix):
        """Test differences below the configured precision are equal."""
        other = small_csr_matrix.copy()
        other.values[0] += 1e-10
        assert small_csr_matrix.equals(other)
        other.values[0] += 1e-3
        assert not small_csr_matrix.equals(other)
        assert small_csr_matrix.equals(other, tolerance=1e-2)

    def test_equals_shape(self, small_csr_matrix):
        """Test different shapes never compare equal."""
        assert not small_csr_matrix.equals(CompressedRow.zero(4, 3))
