"""
Cross-format arithmetic dispatch.

Every result layout owns one table per operation, mapping the pair of
operand formats to a concrete algorithm::

    _tables()[CSR]["multiply"][(CSR, DENSE)]  ->  CompressedRow._multiply_dense_right

Entries not listed explicitly convert both operands into the result
layout and run the native same-format kernel. The layout of the result is
chosen by ``resolve``:

    CompressedRow.add(a, b)   -> CompressedRow (concrete class wins)
    Matrix.add(a, b)          -> DenseMatrix if either operand is dense,
                                 otherwise the layout of ``a``
    SparseMatrix.add(a, b)    -> layout of ``a``; dense operands rejected
"""

import logging
from functools import lru_cache
from itertools import product
from numbers import Number
from typing import Callable, Dict, Tuple, Type

from .._errors import DivisionByZeroError
from ._base import Matrix, MatrixFormat, SparseMatrix

logger = logging.getLogger("sla.matrix.dispatch")

__all__ = ['resolve', 'binary', 'scale', 'divide', 'layout_class']

DENSE, CSR, CSC = MatrixFormat.DENSE, MatrixFormat.CSR, MatrixFormat.CSC

Algorithm = Callable[[Matrix, Matrix], Matrix]
Table = Dict[Tuple[MatrixFormat, MatrixFormat], Algorithm]


# =============================================================================
# Layout Resolution
# =============================================================================

def layout_class(fmt: MatrixFormat) -> Type[Matrix]:
    """Concrete class implementing ``fmt``."""
    from ._csc import CompressedColumn
    from ._csr import CompressedRow
    from ._dense import DenseMatrix

    return {DENSE: DenseMatrix, CSR: CompressedRow, CSC: CompressedColumn}[fmt]


def _check_operand(value, sparse_only: bool) -> None:
    if not isinstance(value, Matrix):
        raise TypeError(f"Expected a matrix operand, got {type(value).__name__}")
    if sparse_only and not isinstance(value, SparseMatrix):
        raise TypeError(f"Expected a sparse matrix operand, got {type(value).__name__}")


def resolve(cls: Type[Matrix], left: Matrix, right: Matrix) -> MatrixFormat:
    """Layout of the result of ``cls.<op>(left, right)``."""
    if cls._FORMAT is not None:
        return cls._FORMAT
    if issubclass(cls, SparseMatrix):
        return left.format
    if left.format is DENSE or right.format is DENSE:
        return DENSE
    return left.format


# =============================================================================
# Dispatch Tables
# =============================================================================

def _converting(native: Callable, target: Type[Matrix]) -> Algorithm:
    """Convert both operands into ``target``'s layout, then run ``native``."""
    def run(left: Matrix, right: Matrix) -> Matrix:
        return native(target._coerce(left), target._coerce(right))
    return run


def _table(default: Algorithm, **special: Algorithm) -> Table:
    table: Table = {pair: default for pair in product(MatrixFormat, repeat=2)}
    for key, algorithm in special.items():
        left, right = key.split("_")
        table[(MatrixFormat(left), MatrixFormat(right))] = algorithm
    return table


@lru_cache(maxsize=None)
def _tables() -> Dict[MatrixFormat, Dict[str, Table]]:
    from ._csc import CompressedColumn
    from ._csr import CompressedRow
    from ._dense import DenseMatrix

    def csr_times_dense(left, right):
        return CompressedRow._multiply_dense_right(CompressedRow._coerce(left), right)

    def dense_times_csc(left, right):
        return CompressedColumn._multiply_dense_left(left, CompressedColumn._coerce(right))

    def dense_from_sparse_product(left, right):
        return CompressedRow._multiply_native(
            CompressedRow._coerce(left), CompressedRow._coerce(right)
        ).to_dense()

    dense_multiply = _table(
        DenseMatrix._multiply_native,
        csr_dense=DenseMatrix._multiply_sparse_left,
        csc_dense=DenseMatrix._multiply_sparse_left,
        dense_csr=DenseMatrix._multiply_sparse_right,
        dense_csc=DenseMatrix._multiply_sparse_right,
        csr_csr=dense_from_sparse_product,
        csr_csc=dense_from_sparse_product,
        csc_csr=dense_from_sparse_product,
        csc_csc=dense_from_sparse_product,
    )

    return {
        DENSE: {
            "add": _table(DenseMatrix._add_native),
            "subtract": _table(DenseMatrix._subtract_native),
            "multiply": dense_multiply,
        },
        CSR: {
            "add": _table(_converting(CompressedRow._add_native, CompressedRow)),
            "subtract": _table(_converting(CompressedRow._subtract_native, CompressedRow)),
            "multiply": _table(
                _converting(CompressedRow._multiply_native, CompressedRow),
                csr_dense=csr_times_dense,
                csc_dense=csr_times_dense,
            ),
        },
        CSC: {
            "add": _table(_converting(CompressedColumn._add_native, CompressedColumn)),
            "subtract": _table(_converting(CompressedColumn._subtract_native, CompressedColumn)),
            "multiply": _table(
                _converting(CompressedColumn._multiply_native, CompressedColumn),
                dense_csc=dense_times_csc,
                dense_csr=dense_times_csc,
            ),
        },
    }


# =============================================================================
# Entry Points
# =============================================================================

def binary(op: str, cls: Type[Matrix], left: Matrix, right: Matrix, sparse_only: bool = False) -> Matrix:
    """Run ``op`` on two matrices, producing the layout chosen by ``resolve``."""
    _check_operand(left, sparse_only)
    _check_operand(right, sparse_only)

    target = resolve(cls, left, right)
    algorithm = _tables()[target][op][(left.format, right.format)]
    logger.debug(
        "%s: %s x %s -> %s via %s",
        op, left.format, right.format, target, getattr(algorithm, "__qualname__", algorithm),
    )
    return algorithm(left, right)


def scale(cls: Type[Matrix], mat: Matrix, factor: float) -> Matrix:
    """Multiply every entry by ``factor`` into a new matrix."""
    _check_operand(mat, sparse_only=False)
    target = layout_class(cls._FORMAT if cls._FORMAT is not None else mat.format)
    converted = target._coerce(mat)
    return converted._scaled(factor)


def divide(cls: Type[Matrix], mat: Matrix, divisor: float) -> Matrix:
    """Divide every entry by ``divisor`` into a new matrix.

    Raises:
        DivisionByZeroError: If ``divisor`` is zero
    """
    if not isinstance(divisor, Number):
        raise TypeError(f"Divisor must be a number, got {type(divisor).__name__}")
    if divisor == 0:
        raise DivisionByZeroError(f"Cannot divide {type(mat).__name__} by zero")
    return scale(cls, mat, 1.0 / divisor)
