"""
Sorting and de-duplication of reduced polygon codes.
"""

from typing import Iterable, List

from polygon_codes import reduce_polygon


def merge_sort_codes(codes: Iterable[int]) -> List[int]:
    """
    Stable bottom-up merge sort.

    Runs of width 1, 2, 4, ... are merged pairwise into a work list, which
    then becomes the source of the next pass.
    """
    source = list(codes)
    n = len(source)
    work = [0] * n

    width = 1
    while width < n:
        for lo in range(0, n, 2 * width):
            mid = min(lo + width, n)
            hi = min(lo + 2 * width, n)
            i, j = lo, mid
            for out in range(lo, hi):
                # Ties take from the left run to keep the sort stable
                if i < mid and (j >= hi or source[i] <= source[j]):
                    work[out] = source[i]
                    i += 1
                else:
                    work[out] = source[j]
                    j += 1
        source, work = work, source
        width *= 2

    return source


def unique_sorted(codes: List[int]) -> List[int]:
    """Drop consecutive repeats from a sorted list."""
    unique: List[int] = []
    for code in codes:
        if not unique or code != unique[-1]:
            unique.append(code)
    return unique


def distinct_polygons(polygon_codes: Iterable[int], length: int, reduce: bool = True) -> List[int]:
    """
    Canonical codes of the geometrically distinct polygons, ascending.

    Mirror images stay separate unless the polygon is mirror symmetric.
    """
    if reduce:
        polygon_codes = [reduce_polygon(code, length) for code in polygon_codes]
    return unique_sorted(merge_sort_codes(polygon_codes))
