"""
Vector Types

Minimal dense and sparse vectors consumed by matrix-vector products.
Both expose a ``size``, bounds-checked indexed read/write, an
``is_sparse`` tag, and ``nonzeros()`` iteration.
"""

from typing import Dict, Iterable, Iterator, List, Tuple, Union

from .._errors import check_index
from ._array import Array

__all__ = ['Vector', 'DenseVector', 'SparseVector']


class Vector:
    """Common interface of dense and sparse vectors."""

    is_sparse = False

    @property
    def size(self) -> int:
        raise NotImplementedError

    def __len__(self) -> int:
        return self.size

    def nonzeros(self) -> Iterator[Tuple[int, float]]:
        raise NotImplementedError

    def tolist(self) -> List[float]:
        out = [0.0] * self.size
        for i, v in self.nonzeros():
            out[i] = v
        return out

    def to_numpy(self):
        import numpy as np
        return np.asarray(self.tolist(), dtype=np.float64)

    def equals(self, other: 'Vector', tolerance: float = None) -> bool:
        """Entry-wise comparison within ``tolerance`` (configured precision by default)."""
        if tolerance is None:
            from .._config import get_absolute_precision
            tolerance = get_absolute_precision()
        if self.size != other.size:
            return False
        return all(abs(a - b) < tolerance for a, b in zip(self.tolist(), other.tolist()))


class DenseVector(Vector):
    """
    Dense vector backed by a float64 ``Array``.

    Example:
        >>> v = DenseVector([1.0, 2.0])
        >>> w = DenseVector(3)   # zero vector of size 3
    """

    __slots__ = ('_values',)

    def __init__(self, values: Union[int, Iterable[float], Array]):
        if isinstance(values, int):
            self._values = Array.zeros(values, 'float64')
        else:
            self._values = Array.from_list(values, 'float64')

    @property
    def size(self) -> int:
        return len(self._values)

    @property
    def values(self) -> Array:
        return self._values

    def __getitem__(self, i: int) -> float:
        return self._values[check_index(i, self.size)]

    def __setitem__(self, i: int, value: float):
        self._values[check_index(i, self.size)] = value

    def nonzeros(self) -> Iterator[Tuple[int, float]]:
        for i, v in enumerate(self._values):
            if v != 0.0:
                yield i, v

    def tolist(self) -> List[float]:
        return self._values.tolist()

    def copy(self) -> 'DenseVector':
        return DenseVector(self._values)

    def __repr__(self) -> str:
        return f"DenseVector({self._values.tolist()})"


class SparseVector(Vector):
    """
    Sparse vector storing only assigned entries.

    Example:
        >>> v = SparseVector(5, {1: 2.0, 4: -1.0})
        >>> v[0]
        0.0
    """

    __slots__ = ('_size', '_entries')

    is_sparse = True

    def __init__(self, size: int, entries: Union[Dict[int, float], Iterable[Tuple[int, float]], None] = None):
        if size < 0:
            raise ValueError(f"Vector size must be non-negative, got {size}")
        self._size = size
        self._entries: Dict[int, float] = {}
        if entries is not None:
            items = entries.items() if isinstance(entries, dict) else entries
            for i, v in items:
                self[i] = v

    @classmethod
    def from_dense(cls, values: Iterable[float]) -> 'SparseVector':
        values = list(values)
        return cls(len(values), {i: v for i, v in enumerate(values) if v != 0.0})

    @property
    def size(self) -> int:
        return self._size

    @property
    def nnz(self) -> int:
        return len(self._entries)

    def __getitem__(self, i: int) -> float:
        return self._entries.get(check_index(i, self._size), 0.0)

    def __setitem__(self, i: int, value: float):
        self._entries[check_index(i, self._size)] = float(value)

    def nonzeros(self) -> Iterator[Tuple[int, float]]:
        for i in sorted(self._entries):
            yield i, self._entries[i]

    def copy(self) -> 'SparseVector':
        return SparseVector(self._size, dict(self._entries))

    def __repr__(self) -> str:
        return f"SparseVector(size={self._size}, nnz={self.nnz})"
