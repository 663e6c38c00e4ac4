"""
Gaussian elimination, rank and null-space basis.

The matrix is copied into a dense numpy array and reduced to reduced
row-echelon form with partial pivoting. A column is free when its best
pivot candidate is not larger than ``tol * max(1, max|A|)``.
"""

import logging
from typing import List, Tuple

import numpy as np

logger = logging.getLogger("sla.kernel.elimination")


def row_echelon(a: np.ndarray, tol: float) -> Tuple[np.ndarray, List[int]]:
    """Reduce ``a`` to reduced row-echelon form.

    Args:
        a: 2D array (not modified)
        tol: Relative pivot threshold

    Returns:
        ``(R, pivots)`` where ``pivots[i]`` is the pivot column of row ``i``
    """
    r = np.array(a, dtype=np.float64, copy=True)
    if r.ndim != 2:
        raise ValueError(f"Expected a 2D array, got {r.ndim}D")

    m, n = r.shape
    threshold = tol * max(1.0, float(np.abs(r).max())) if r.size else tol
    pivots: List[int] = []
    row = 0

    for col in range(n):
        if row >= m:
            break
        p = row + int(np.argmax(np.abs(r[row:, col])))
        if abs(r[p, col]) <= threshold:
            r[row:, col] = 0.0
            continue
        if p != row:
            r[[row, p]] = r[[p, row]]
        r[row] /= r[row, col]

        factors = r[:, col].copy()
        factors[row] = 0.0
        r -= np.outer(factors, r[row])
        r[:, col] = 0.0
        r[row, col] = 1.0

        pivots.append(col)
        row += 1

    return r, pivots


def matrix_rank(a: np.ndarray, tol: float) -> int:
    """Number of pivots found by elimination."""
    return len(row_echelon(a, tol)[1])


def nullspace_basis(a: np.ndarray, tol: float) -> List[np.ndarray]:
    """Basis of ``{x : a @ x = 0}``.

    One vector per free column ``f``: ``x[f] = 1`` and, for every pivot row
    ``i`` with pivot column ``p``, ``x[p] = -R[i, f]``.

    Returns:
        ``n - rank`` vectors of length ``n``
    """
    r, pivots = row_echelon(a, tol)
    n = r.shape[1]
    pivot_set = set(pivots)
    free = [c for c in range(n) if c not in pivot_set]

    basis = []
    for f in free:
        v = np.zeros(n, dtype=np.float64)
        v[f] = 1.0
        for i, p in enumerate(pivots):
            v[p] = -r[i, f]
        basis.append(v)

    logger.debug("elimination: shape=%s rank=%d nullity=%d", r.shape, len(pivots), len(basis))
    return basis
