"""
SLA Math Module

Functional linear algebra over any supported matrix input.
"""

from .linalg import spmv, spmv_transpose, dot, nullspace, rank

__all__ = ["spmv", "spmv_transpose", "dot", "nullspace", "rank"]
