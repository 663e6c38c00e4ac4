"""
Functional helpers over the matrix layouts.

These mirror the methods on the classes but accept any supported input
(an sla matrix, a numpy array, or a scipy sparse matrix) and a format name.
"""

from typing import Any, Union

from ._base import Matrix, MatrixFormat
from ._dispatch import layout_class

__all__ = ['convert_format', 'from_scipy', 'from_numpy', 'zero', 'identity']

FormatLike = Union[str, MatrixFormat]


def _format(fmt: FormatLike) -> MatrixFormat:
    if isinstance(fmt, MatrixFormat):
        return fmt
    try:
        return MatrixFormat(fmt.lower())
    except (AttributeError, ValueError):
        valid = [f.value for f in MatrixFormat]
        raise ValueError(f"Unknown format {fmt!r}, expected one of {valid}") from None


def convert_format(mat: Matrix, fmt: FormatLike) -> Matrix:
    """
    Re-express ``mat`` in another layout (always a new matrix).

    Example:
        >>> csc = convert_format(csr, 'csc')
    """
    target = _format(fmt)
    if target is MatrixFormat.DENSE:
        return mat.to_dense()
    if target is MatrixFormat.CSR:
        return mat.to_compressed_row()
    return mat.to_compressed_column()


def from_scipy(mat: Any) -> Matrix:
    """
    Import a scipy sparse matrix, keeping CSC as CSC and everything else as CSR.
    """
    fmt = getattr(mat, 'format', 'csr')
    target = MatrixFormat.CSC if fmt == 'csc' else MatrixFormat.CSR
    return layout_class(target).from_scipy(mat)


def from_numpy(arr: Any, fmt: FormatLike = 'dense') -> Matrix:
    """Import a 2D numpy array into the requested layout."""
    return layout_class(_format(fmt)).from_numpy(arr)


def zero(rows: int, cols: int, fmt: FormatLike = 'csr') -> Matrix:
    """Zero matrix in the requested layout."""
    return layout_class(_format(fmt)).zero(rows, cols)


def identity(n: int, fmt: FormatLike = 'csr') -> Matrix:
    """Identity matrix in the requested layout."""
    return layout_class(_format(fmt)).identity(n)
