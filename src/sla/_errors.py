"""
Error handling for SLA.

Every error raised by the library derives from ``SlaError`` and carries a
numeric code. Concrete errors also derive from the matching builtin
exception so callers may catch either ``IndexError`` or
``IndexOutOfRangeError``.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

SLA_ERROR_UNKNOWN = 1
SLA_ERROR_DIMENSION_MISMATCH = 11
SLA_ERROR_INDEX_OUT_OF_BOUNDS = 14
SLA_ERROR_DIVISION_BY_ZERO = 51


_ERROR_MESSAGES = {
    SLA_ERROR_UNKNOWN: "Unknown error",
    SLA_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    SLA_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    SLA_ERROR_DIVISION_BY_ZERO: "Division by zero",
}


# =============================================================================
# Exception Classes
# =============================================================================

class SlaError(Exception):
    """Base exception for all SLA errors."""

    code = SLA_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is not None:
            self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(self.code, f"Unknown error (code={self.code})")
        self.message = message
        super().__init__(f"SLA Error {self.code}: {message}")

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "SlaError":
        """Create the exception matching ``code`` with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        exc_type = _CODE_TO_CLASS.get(code, cls)
        return exc_type(msg, code=code)


class IndexOutOfRangeError(SlaError, IndexError):
    """Row, column or vector index outside ``[0, count)``."""

    code = SLA_ERROR_INDEX_OUT_OF_BOUNDS


class ShapeMismatchError(SlaError, ValueError):
    """Operand dimensions are incompatible with the requested operation."""

    code = SLA_ERROR_DIMENSION_MISMATCH


class DivisionByZeroError(SlaError, ZeroDivisionError):
    """Division of a matrix by a zero scalar."""

    code = SLA_ERROR_DIVISION_BY_ZERO


_CODE_TO_CLASS = {
    SLA_ERROR_INDEX_OUT_OF_BOUNDS: IndexOutOfRangeError,
    SLA_ERROR_DIMENSION_MISMATCH: ShapeMismatchError,
    SLA_ERROR_DIVISION_BY_ZERO: DivisionByZeroError,
}


# =============================================================================
# Check Helpers
# =============================================================================

def check_index(index: int, count: int, axis: str = "index") -> int:
    """
    Validate ``0 <= index < count``.

    Raises:
        IndexOutOfRangeError: If the index is out of range
    """
    if not 0 <= index < count:
        raise IndexOutOfRangeError(f"{axis} {index} out of bounds [0, {count})")
    return index


def check_same_shape(left_shape, right_shape, operation: str) -> None:
    """Raise ShapeMismatchError unless both shapes are identical."""
    if tuple(left_shape) != tuple(right_shape):
        raise ShapeMismatchError(
            f"{operation}: shape mismatch {tuple(left_shape)} vs {tuple(right_shape)}"
        )


def check_inner_dims(left_shape, right_shape, operation: str = "multiply") -> None:
    """Raise ShapeMismatchError unless ``left.cols == right.rows``."""
    if left_shape[1] != right_shape[0]:
        raise ShapeMismatchError(
            f"{operation}: inner dimensions differ "
            f"{tuple(left_shape)} x {tuple(right_shape)}"
        )
