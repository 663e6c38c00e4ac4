"""
Tests for the Array storage container.
"""

import pytest
import numpy as np
from sla.matrix import Array, zeros, from_list
from sla.matrix import DType, float64, int64, normalize_dtype, validate_dtype


class TestArrayCreation:
    """Test Array creation methods."""

    def test_array_creation(self):
        """Test allocating an array."""
        arr = Array(10, dtype='int64')
        assert arr.size == 10
        assert arr.dtype == 'int64'
        assert arr.nbytes == 80

    def test_array_zeros(self):
        """Test zeros() function."""
        arr = zeros(10, dtype='float64')
        assert arr.size == 10
        assert all(arr[i] == 0.0 for i in range(10))

    def test_array_from_list(self):
        """Test from_list() function."""
        data = [1.0, 2.5, -3.0]
        arr = from_list(data, dtype=float64)
        assert arr.dtype == 'float64'
        assert arr.tolist() == data

    def test_array_from_list_int64(self):
        """Test from_list() with int64."""
        arr = from_list([1, 2, 3], dtype=int64)
        assert arr.dtype == 'int64'
        assert arr.tolist() == [1, 2, 3]

    def test_array_from_numpy(self):
        """Test from_list() accepts numpy arrays."""
        arr = Array.from_list(np.array([0, 4, 7], dtype=np.int32), dtype='int64')
        assert arr.tolist() == [0, 4, 7]

    def test_array_zero_size(self):
        """Test creating zero-sized array."""
        arr = Array(0, dtype='float64')
        assert arr.size == 0
        assert arr.nbytes == 0
        assert arr.tolist() == []
        assert arr[0:0] == []

    def test_negative_size(self):
        """Test negative size is rejected."""
        with pytest.raises(ValueError):
            Array(-1)

    def test_invalid_dtype(self):
        """Test unsupported dtype is rejected."""
        with pytest.raises(ValueError):
            Array(3, dtype='complex128')


class TestArrayAccess:
    """Test element access."""

    def test_get_set(self):
        """Test indexing."""
        arr = Array.zeros(4)
        arr[1] = 2.5
        arr[-1] = 7.0
        assert arr[1] == 2.5
        assert arr[3] == 7.0

    def test_slice(self):
        """Test slicing returns a list."""
        arr = from_list([1.0, 2.0, 3.0, 4.0])
        assert arr[1:3] == [2.0, 3.0]
        arr[0:2] = [9.0, 8.0]
        assert arr.tolist() == [9.0, 8.0, 3.0, 4.0]

    def test_out_of_bounds(self):
        """Test out-of-bounds access raises."""
        arr = Array.zeros(3)
        with pytest.raises(IndexError):
            arr[3]
        with pytest.raises(IndexError):
            arr[-4] = 1.0

    def test_iteration(self):
        """Test iteration and len."""
        arr = from_list([1.0, 2.0])
        assert len(arr) == 2
        assert list(arr) == [1.0, 2.0]


class TestArrayConversion:
    """Test conversions and copies."""

    def test_to_numpy(self):
        """Test numpy conversion keeps dtype and values."""
        arr = from_list([1, 2, 3], dtype='int64')
        out = arr.to_numpy()
        assert out.dtype == np.int64
        np.testing.assert_array_equal(out, [1, 2, 3])

    def test_copy_is_independent(self):
        """Test copy() does not alias storage."""
        arr = from_list([1.0, 2.0])
        dup = arr.copy()
        dup[0] = 5.0
        assert arr[0] == 1.0
        assert dup == [5.0, 2.0]

    def test_repr(self):
        """Test representation."""
        assert repr(from_list([1.0])) == "Array([1.0], dtype=float64)"
        assert "..." in repr(Array.zeros(10))


class TestDTypes:
    """Test dtype helpers."""

    def test_normalize(self):
        """Test enum and string normalization."""
        assert normalize_dtype(DType.float64) == 'float64'
        assert normalize_dtype('int64') == 'int64'
        with pytest.raises(TypeError):
            normalize_dtype(3)

    def test_validate(self):
        """Test validation."""
        assert validate_dtype(float64) == 'float64'
        with pytest.raises(ValueError):
            validate_dtype('float32')
