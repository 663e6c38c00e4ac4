"""
Dictionary of Keys (DOK) triplet builder.

Staging structure for sparse construction: ``(row, col) -> value`` entries
inserted in any order, then compacted by a ``CompressedRow`` or
``CompressedColumn`` constructor.

Duplicate policy:
    ``add`` accumulates into an existing key; ``add_or_replace`` overwrites.

Example:
    >>> dok = DictionaryOfKeys()
    >>> dok.add(1.0, 0, 2)
    >>> dok.add(2.0, 0, 2)      # accumulated -> 3.0
    >>> csr = CompressedRow(3, 3, dok)
"""

from typing import Dict, Iterator, Optional, Sequence, Tuple

from .._config import get_absolute_precision
from .._errors import IndexOutOfRangeError

__all__ = ['DictionaryOfKeys', 'DOK']

Key = Tuple[int, int]


class DictionaryOfKeys:
    """Unordered sparse storage keyed by ``(row, col)``."""

    __slots__ = ('_entries',)

    def __init__(
        self,
        values: Optional[Sequence[float]] = None,
        rows: Optional[Sequence[int]] = None,
        cols: Optional[Sequence[int]] = None,
    ):
        """
        Create an empty builder, or one filled from parallel sequences.

        Args:
            values: Entry values
            rows: Row index of each value
            cols: Column index of each value

        Raises:
            ValueError: If the three sequences differ in length
        """
        self._entries: Dict[Key, float] = {}
        if values is None and rows is None and cols is None:
            return
        if values is None or rows is None or cols is None:
            raise ValueError("values, rows and cols must be given together")
        if not len(values) == len(rows) == len(cols):
            raise ValueError(
                f"Length mismatch: values={len(values)}, rows={len(rows)}, cols={len(cols)}"
            )
        for v, r, c in zip(values, rows, cols):
            self.add(v, r, c)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def count(self) -> int:
        """Number of stored entries."""
        return len(self._entries)

    @property
    def row_count(self) -> int:
        """One more than the largest row index stored (0 if empty)."""
        return max((r for r, _ in self._entries), default=-1) + 1

    @property
    def column_count(self) -> int:
        """One more than the largest column index stored (0 if empty)."""
        return max((c for _, c in self._entries), default=-1) + 1

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Key) -> bool:
        return tuple(key) in self._entries

    def __getitem__(self, key: Key) -> float:
        return self._entries.get(tuple(key), 0.0)

    def __setitem__(self, key: Key, value: float):
        row, col = key
        self.add_or_replace(value, row, col)

    # =========================================================================
    # Mutation
    # =========================================================================

    @staticmethod
    def _key(row: int, col: int) -> Key:
        if row < 0 or col < 0:
            raise IndexOutOfRangeError(f"Negative index ({row}, {col})")
        return (int(row), int(col))

    def add(self, value: float, row: int, col: int) -> None:
        """Insert a value, accumulating into an existing entry."""
        key = self._key(row, col)
        self._entries[key] = self._entries.get(key, 0.0) + float(value)

    def add_or_replace(self, value: float, row: int, col: int) -> None:
        """Insert a value, overwriting any existing entry."""
        self._entries[self._key(row, col)] = float(value)

    def replace(self, value: float, row: int, col: int) -> None:
        """
        Overwrite an existing entry.

        Raises:
            KeyError: If no entry is stored at ``(row, col)``
        """
        key = self._key(row, col)
        if key not in self._entries:
            raise KeyError(f"No entry at ({row}, {col})")
        self._entries[key] = float(value)

    def remove(self, row: int, col: int) -> None:
        """
        Remove an existing entry.

        Raises:
            KeyError: If no entry is stored at ``(row, col)``
        """
        key = self._key(row, col)
        if key not in self._entries:
            raise KeyError(f"No entry at ({row}, {col})")
        del self._entries[key]

    def is_empty(self, row: int, col: int) -> bool:
        """True if nothing is stored at ``(row, col)``."""
        return (row, col) not in self._entries

    def clean(self, tolerance: Optional[float] = None) -> int:
        """
        Drop entries whose magnitude is below ``tolerance``.

        Args:
            tolerance: Threshold, defaults to the configured absolute precision

        Returns:
            Number of removed entries
        """
        if tolerance is None:
            tolerance = get_absolute_precision()
        small = [k for k, v in self._entries.items() if abs(v) < tolerance]
        for k in small:
            del self._entries[k]
        return len(small)

    def make_symmetric(self) -> None:
        """Replace the content with ``(A + A^T) / 2``."""
        entries: Dict[Key, float] = {}
        for (r, c), v in self._entries.items():
            half = 0.5 * v
            entries[(r, c)] = entries.get((r, c), 0.0) + half
            entries[(c, r)] = entries.get((c, r), 0.0) + half
        self._entries = entries

    # =========================================================================
    # Iteration
    # =========================================================================

    def nonzeros(self) -> Iterator[Tuple[int, int, float]]:
        """Iterate ``(row, col, value)`` in no particular order."""
        for (r, c), v in self._entries.items():
            yield r, c, v

    def __iter__(self) -> Iterator[Tuple[int, int, float]]:
        return self.nonzeros()

    def grouped(self, by_column: bool = False) -> Dict[int, Dict[int, float]]:
        """Group entries by row (or column) into ``{major: {minor: value}}``."""
        groups: Dict[int, Dict[int, float]] = {}
        for (r, c), v in self._entries.items():
            major, minor = (c, r) if by_column else (r, c)
            groups.setdefault(major, {})[minor] = v
        return groups

    def __repr__(self) -> str:
        return f"DictionaryOfKeys(count={len(self._entries)})"


# Short alias
DOK = DictionaryOfKeys
