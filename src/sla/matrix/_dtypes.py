"""
Data Type Definitions

Provides type-safe dtype constants and validation for matrix storage.
Values are stored as floating point, structure arrays (pointers and
indices) as signed integers.
"""

from typing import Union
from enum import Enum

__all__ = [
    'DType', 'float64', 'int64',
    'normalize_dtype', 'validate_dtype',
    'VALUE_DTYPE', 'INDEX_DTYPE',
]


class DType(Enum):
    """
    SLA Data Type Enumeration.

    Example:
        >>> from sla.matrix import DType, Array
        >>> arr = Array.zeros(100, dtype=DType.float64)
    """

    float64 = 'float64'
    int64 = 'int64'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DType.{self.name}"


# =============================================================================
# Module-Level Constants
# =============================================================================

float64 = DType.float64
int64 = DType.int64

# Storage types used by every matrix layout
VALUE_DTYPE = 'float64'
INDEX_DTYPE = 'int64'


# =============================================================================
# Type Utilities
# =============================================================================

def normalize_dtype(dtype: Union[str, DType]) -> str:
    """
    Normalize dtype to string.

    Example:
        >>> normalize_dtype(DType.float64)
        'float64'
    """
    if isinstance(dtype, DType):
        return dtype.value
    elif isinstance(dtype, str):
        return dtype
    else:
        raise TypeError(f"dtype must be str or DType, got {type(dtype)}")


def validate_dtype(dtype: Union[str, DType]) -> str:
    """
    Validate dtype and return its string form.

    Raises:
        ValueError: If dtype is not supported
    """
    dtype_str = normalize_dtype(dtype)
    valid = {e.value for e in DType}
    if dtype_str not in valid:
        raise ValueError(f"Invalid dtype: {dtype_str}. Valid: {sorted(valid)}")
    return dtype_str
