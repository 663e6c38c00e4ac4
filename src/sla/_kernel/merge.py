"""
Sorted-run merge for sparse addition and subtraction.
"""

from typing import List, Sequence, Tuple

Compressed = Tuple[Sequence[int], Sequence[int], Sequence[float]]


def merge_compressed(
    major_count: int,
    left: Compressed,
    right: Compressed,
    sign: float = 1.0,
) -> Tuple[List[int], List[int], List[float]]:
    """Merge two compressed matrices of identical shape.

    Each major run of ``left`` and ``right`` is walked with two cursors, as
    when merging two sorted lists. Matching indices are combined as
    ``left + sign * right``; indices present in one operand only are copied
    through. A combined value that is exactly zero is not emitted.

    Args:
        major_count: Number of runs (rows for CSR, columns for CSC)
        left: ``(pointers, indices, values)`` of the left operand
        right: ``(pointers, indices, values)`` of the right operand
        sign: ``1.0`` for addition, ``-1.0`` for subtraction

    Returns:
        ``(pointers, indices, values)`` of the result
    """
    lp, li, lv = left
    rp, ri, rv = right

    pointers = [0]
    indices: List[int] = []
    values: List[float] = []

    for m in range(major_count):
        a, a_end = lp[m], lp[m + 1]
        b, b_end = rp[m], rp[m + 1]

        while a < a_end and b < b_end:
            ia, ib = li[a], ri[b]
            if ia == ib:
                v = lv[a] + sign * rv[b]
                if v != 0.0:
                    indices.append(ia)
                    values.append(v)
                a += 1
                b += 1
            elif ia < ib:
                indices.append(ia)
                values.append(lv[a])
                a += 1
            else:
                indices.append(ib)
                values.append(sign * rv[b])
                b += 1

        while a < a_end:
            indices.append(li[a])
            values.append(lv[a])
            a += 1
        while b < b_end:
            indices.append(ri[b])
            values.append(sign * rv[b])
            b += 1

        pointers.append(len(indices))

    return pointers, indices, values
