"""
Lightweight Array Container

Contiguous ctypes-backed buffer used as the backing store of every matrix
layout: ``float64`` for values, ``int64`` for pointers and indices.
Element access is bounds-checked; bulk conversion to numpy goes through
the raw bytes.
"""

import ctypes
from typing import Union, List, Iterable, Iterator

from ._dtypes import DType, validate_dtype

__all__ = ['Array', 'zeros', 'from_list']


# =============================================================================
# Type Mapping
# =============================================================================

_TYPE_MAP = {
    'float64': (ctypes.c_double, 8),
    'int64': (ctypes.c_int64, 8),
}


# =============================================================================
# Array Class
# =============================================================================

class Array:
    """
    Lightweight contiguous array with C-compatible memory layout.

    Attributes:
        dtype (str): Data type ('float64', 'int64', etc.)
        size (int): Number of elements
        nbytes (int): Total bytes

    Example:
        >>> arr = Array.zeros(4, dtype='float64')
        >>> arr[0] = 3.5
        >>> arr.tolist()
        [3.5, 0.0, 0.0, 0.0]
    """

    __slots__ = ('_size', '_dtype', '_ctype', '_itemsize', '_data')

    def __init__(self, size: int, dtype: Union[str, DType] = 'float64'):
        """
        Allocate a zero-filled array.

        Args:
            size: Number of elements
            dtype: Data type (string or DType enum)
        """
        if size < 0:
            raise ValueError(f"Array size must be non-negative, got {size}")

        dtype = validate_dtype(dtype)
        self._size = size
        self._dtype = dtype
        self._ctype, self._itemsize = _TYPE_MAP[dtype]
        # ctypes arrays are zero-initialized on allocation
        self._data = (self._ctype * size)() if size else None

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._size

    @property
    def dtype(self) -> str:
        """Data type string."""
        return self._dtype

    @property
    def nbytes(self) -> int:
        """Total bytes."""
        return self._size * self._itemsize

    @property
    def itemsize(self) -> int:
        """Bytes per element."""
        return self._itemsize

    # -------------------------------------------------------------------------
    # Initialization Methods
    # -------------------------------------------------------------------------

    @classmethod
    def zeros(cls, size: int, dtype: Union[str, DType] = 'float64') -> 'Array':
        """Create zero-initialized array."""
        return cls(size, dtype)

    @classmethod
    def from_list(cls, data: Iterable, dtype: Union[str, DType] = 'float64') -> 'Array':
        """Create array from a Python sequence (or any iterable)."""
        if isinstance(data, Array):
            if data.dtype == validate_dtype(dtype):
                return data.copy()
            data = data.tolist()
        elif hasattr(data, 'tolist'):
            # numpy arrays: convert scalars to Python numbers first
            data = data.tolist()
        else:
            data = list(data)

        arr = cls(len(data), dtype)
        if arr._data is not None:
            cast = float if arr._dtype.startswith('float') else int
            try:
                arr._data[:] = [cast(v) for v in data]
            except (TypeError, ValueError) as e:
                raise TypeError(f"Cannot store values as {arr._dtype}: {e}") from e
        return arr

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def _check_index(self, idx: int) -> int:
        if idx < 0:
            idx += self._size
        if idx < 0 or idx >= self._size:
            raise IndexError(f"Index {idx} out of bounds [0, {self._size})")
        return idx

    def __getitem__(self, idx: Union[int, slice]):
        """Get element(s) by index."""
        if isinstance(idx, slice):
            start, stop, step = idx.indices(self._size)
            if self._data is None:
                return []
            return self._data[start:stop:step]
        return self._data[self._check_index(idx)]

    def __setitem__(self, idx: Union[int, slice], value):
        """Set element(s) by index."""
        if isinstance(idx, slice):
            indices = range(*idx.indices(self._size))
            if hasattr(value, '__iter__'):
                for i, v in zip(indices, value):
                    self._data[i] = v
            else:
                for i in indices:
                    self._data[i] = value
        else:
            self._data[self._check_index(idx)] = value

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator:
        if self._data is None:
            return iter(())
        return iter(self._data)

    def __eq__(self, other) -> bool:
        if isinstance(other, Array):
            return self.tolist() == other.tolist()
        if isinstance(other, list):
            return self.tolist() == other
        return NotImplemented

    __hash__ = None

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def tobytes(self) -> bytes:
        """Convert to bytes."""
        if self._data is None:
            return b''
        return bytes(self._data)

    def tolist(self) -> List:
        """Convert to Python list."""
        if self._data is None:
            return []
        return list(self._data)

    def to_numpy(self):
        """
        Convert to numpy array (a copy).

        Returns:
            numpy.ndarray
        """
        import numpy as np

        if self._data is None:
            return np.array([], dtype=self._dtype)
        return np.frombuffer(self.tobytes(), dtype=self._dtype).copy()

    # -------------------------------------------------------------------------
    # Copy Operations
    # -------------------------------------------------------------------------

    def copy(self) -> 'Array':
        """Create a deep copy."""
        new = Array(self._size, self._dtype)
        if self._data is not None:
            ctypes.memmove(new._data, self._data, self.nbytes)
        return new

    # -------------------------------------------------------------------------
    # Representation
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        if self._size == 0:
            return f"Array([], dtype={self._dtype})"
        elif self._size <= 6:
            data_str = str(self.tolist())
        else:
            values = self.tolist()
            data_str = str(values[:3] + ['...'] + values[-3:])
        return f"Array({data_str}, dtype={self._dtype})"


# =============================================================================
# Factory Functions
# =============================================================================

def zeros(size: int, dtype: Union[str, DType] = 'float64') -> Array:
    """Create zero-initialized array."""
    return Array.zeros(size, dtype)


def from_list(data: Iterable, dtype: Union[str, DType] = 'float64') -> Array:
    """Create array from Python list."""
    return Array.from_list(data, dtype)
