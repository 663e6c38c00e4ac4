"""
Re-bucketing and product kernels over compressed arrays.

Algorithm (sparse x sparse, major = row):
    For each output row i:
        acc = {}
        for (k, a) in left row i:
            for (j, b) in right row k:
                acc[j] += a * b
        emit sorted(acc)

The same loop computes CSC x CSC by swapping the operands, since
``(A B)^T = B^T A^T`` and CSC arrays of ``A`` are CSR arrays of ``A^T``.
"""

from bisect import bisect_left
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

Compressed = Tuple[Sequence[int], Sequence[int], Sequence[float]]


# =============================================================================
# Re-bucketing
# =============================================================================

def rebucket(
    major_count: int,
    minor_count: int,
    pointers: Sequence[int],
    indices: Sequence[int],
    values: Sequence[float],
) -> Tuple[List[int], List[int], List[float]]:
    """Regroup entries along the minor axis (counting sort).

    The output describes the same entries with the axes swapped: CSR arrays
    come back as the CSC arrays of the same matrix, which are also the CSR
    arrays of its transpose. Runs come out sorted because the input majors
    are visited in ascending order.

    Returns:
        ``(pointers, indices, values)`` with ``minor_count`` runs
    """
    nnz = pointers[major_count]

    counts = [0] * (minor_count + 1)
    for k in range(nnz):
        counts[indices[k] + 1] += 1
    for j in range(minor_count):
        counts[j + 1] += counts[j]

    out_pointers = list(counts)
    out_indices = [0] * nnz
    out_values = [0.0] * nnz
    cursor = counts[:minor_count]

    for m in range(major_count):
        for k in range(pointers[m], pointers[m + 1]):
            j = indices[k]
            dest = cursor[j]
            out_indices[dest] = m
            out_values[dest] = values[k]
            cursor[j] = dest + 1

    return out_pointers, out_indices, out_values


# =============================================================================
# Sparse x Sparse
# =============================================================================

def spgemm(
    major_count: int,
    left: Compressed,
    right: Compressed,
    prune: bool = False,
) -> Tuple[List[int], List[int], List[float]]:
    """Row-by-row accumulation product of two same-orientation matrices.

    Args:
        major_count: Number of output runs (left major count)
        left: ``(pointers, indices, values)`` of the left factor
        right: ``(pointers, indices, values)`` of the right factor
        prune: Drop accumulated entries that are exactly zero

    Returns:
        ``(pointers, indices, values)`` of the product
    """
    lp, li, lv = left
    rp, ri, rv = right

    pointers = [0]
    indices: List[int] = []
    values: List[float] = []

    for i in range(major_count):
        acc: Dict[int, float] = {}
        for a in range(lp[i], lp[i + 1]):
            k = li[a]
            scale = lv[a]
            for b in range(rp[k], rp[k + 1]):
                j = ri[b]
                acc[j] = acc.get(j, 0.0) + scale * rv[b]

        for j in sorted(acc):
            v = acc[j]
            if prune and v == 0.0:
                continue
            indices.append(j)
            values.append(v)
        pointers.append(len(indices))

    return pointers, indices, values


def spmm_dense(
    major_count: int,
    compressed: Compressed,
    read: Callable[[int, int], float],
    width: int,
    prune: bool = False,
) -> Tuple[List[int], List[int], List[float]]:
    """Product of a compressed matrix with an operand seen through ``read(k, j)``.

    Each stored ``(i, k, a)`` scatters ``a * read(k, j)`` for every ``j`` in
    ``range(width)`` into row ``i`` of the result.
    """
    p, idx, val = compressed

    pointers = [0]
    indices: List[int] = []
    values: List[float] = []

    for i in range(major_count):
        acc = [0.0] * width
        touched = False
        for a in range(p[i], p[i + 1]):
            k = idx[a]
            scale = val[a]
            touched = True
            for j in range(width):
                acc[j] += scale * read(k, j)
        if touched:
            for j, v in enumerate(acc):
                if v != 0.0 or not prune:
                    indices.append(j)
                    values.append(v)
        pointers.append(len(indices))

    return pointers, indices, values


# =============================================================================
# Sparse x Vector
# =============================================================================

def spmv_gather(
    major_count: int,
    compressed: Compressed,
    read: Callable[[int], float],
) -> List[float]:
    """``y[m] = sum(values[k] * x[indices[k]])`` over each major run.

    Direct product for CSR, transpose product for CSC.
    """
    p, idx, val = compressed
    out = [0.0] * major_count
    for m in range(major_count):
        s = 0.0
        for k in range(p[m], p[m + 1]):
            s += val[k] * read(idx[k])
        out[m] = s
    return out


def spmv_gather_sparse(
    major_count: int,
    compressed: Compressed,
    entries: Iterable[Tuple[int, float]],
) -> Dict[int, float]:
    """Dot every major run with a sparse vector.

    ``entries`` are the vector's stored ``(index, value)`` pairs in
    ascending index order. Each is located in a run by binary search, so
    only stored entries matching the vector's support are read.

    Returns:
        ``{major_index: value}`` for every run sharing an index with the vector
    """
    p, idx, val = compressed
    entries = list(entries)
    out: Dict[int, float] = {}
    if not entries:
        return out

    for m in range(major_count):
        lo, end = p[m], p[m + 1]
        if lo == end:
            continue
        s = 0.0
        hit = False
        for j, xj in entries:
            pos = bisect_left(idx, j, lo, end)
            if pos == end:
                break
            if idx[pos] == j:
                s += val[pos] * xj
                hit = True
                pos += 1
            lo = pos
        if hit:
            out[m] = s
    return out


def spmv_scatter(
    compressed: Compressed,
    entries: Iterable[Tuple[int, float]],
) -> Dict[int, float]:
    """Scatter ``x[m] * run(m)`` into an accumulator keyed by minor index.

    Only the majors listed in ``entries`` are visited. Direct product for
    CSC, transpose product for CSR.

    Returns:
        ``{minor_index: value}`` for every touched index
    """
    p, idx, val = compressed
    acc: Dict[int, float] = {}
    for m, xm in entries:
        if xm == 0.0:
            continue
        for k in range(p[m], p[m + 1]):
            j = idx[k]
            acc[j] = acc.get(j, 0.0) + val[k] * xm
    return acc
