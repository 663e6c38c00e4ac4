"""
Pure-Python compute kernels.

Kernels operate on raw compressed arrays (``pointers``, ``indices``,
``values``) described along a *major* axis: rows for CSR, columns for CSC.
Because a CSC matrix is the CSR representation of its transpose, every
kernel serves both layouts.
"""

from .merge import merge_compressed
from .product import (
    rebucket,
    spgemm,
    spmm_dense,
    spmv_gather,
    spmv_gather_sparse,
    spmv_scatter,
)
from .elimination import row_echelon, matrix_rank, nullspace_basis

__all__ = [
    "merge_compressed",
    "rebucket",
    "spgemm",
    "spmm_dense",
    "spmv_gather",
    "spmv_gather_sparse",
    "spmv_scatter",
    "row_echelon",
    "matrix_rank",
    "nullspace_basis",
]
