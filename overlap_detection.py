"""
Overlap detection for embedded honeycomb chains.

Two facts keep the scan short:
- no cycle on the honeycomb lattice has fewer than six bonds, so a site only
  needs comparing with sites at least six positions earlier;
- sites at L1 distance s are at least s bonds apart along any path, so after
  a comparison at distance s the next s-1 earlier positions cannot coincide
  with the current site and are skipped.
"""

from typing import Sequence

from chain_config import SHORTEST_CYCLE
from honeycomb_embedding import Point, lattice_distance


def find_overlap(start: int, length: int, points: Sequence[Point]) -> int:
    """
    Position of the first self-intersecting site at or after `start`.

    Sites before `start` are assumed to be free of overlaps already.
    Returns 0 when positions start..length contain no overlap.
    """
    for k1 in range(start, length + 1):
        target = points[k1]
        limit = k1 - (SHORTEST_CYCLE - 1)
        k2 = 0
        while k2 < limit:
            separation = lattice_distance(target, points[k2])
            if separation == 0:
                return k1
            k2 += separation
    return 0


def is_closed_loop(length: int, points: Sequence[Point]) -> bool:
    """
    True if the chain is a self-avoiding polygon.

    The free end must sit on the origin and no other pair of sites may
    coincide. Only even separations of at least six are examined because
    the embedding is bipartite.
    """
    if points[length] != points[0]:
        return False
    for k1 in range(0, length - (SHORTEST_CYCLE - 1)):
        for k2 in range(k1 + SHORTEST_CYCLE, length + 1, 2):
            if points[k2] == points[k1] and (k1 > 0 or k2 < length):
                return False
    return True


def closes_at_free_end(length: int, points: Sequence[Point]) -> bool:
    """
    Cheaper closure test for a chain whose first overlap is at its free end.

    Only valid when find_overlap(...) == length: the free end must not meet
    any interior site, so the coincidence found was with the origin.
    """
    end = points[length]
    for k in range(length - SHORTEST_CYCLE, 0, -1):
        if points[k] == end:
            return False
    return True


def has_overlap(length: int, points: Sequence[Point]) -> bool:
    """Exhaustive pairwise check, no distance skipping."""
    return len(set(points[: length + 1])) != length + 1
