"""
Honeycomb Lattice Embedding

The 2D honeycomb lattice is represented as a planar slice of the 3D cubic
grid Z³: every lattice site (n1, n2, n3) has n1 + n2 + n3 equal to 0 or 1,
and every bond changes exactly one coordinate by ±1. The two site parities
are the two honeycomb sublattices.

With this embedding the L1 distance between two sites is a lower bound on
the number of bonds of any path connecting them, which is what the overlap
scan uses to skip comparisons.

Bond orientation is an integer taken mod 6. A left turn at orientation d
adds LEFT_TURN_STEPS[d] and advances the orientation to d + 1; a right turn
adds RIGHT_TURN_STEPS[d] and moves it to d - 1.
"""

from typing import Sequence, Tuple

import numpy as np


Point = Tuple[int, int, int]

ORIGIN: Point = (0, 0, 0)

# Fixed head of every chain: start at the origin, go along +n1, turn left.
CHAIN_HEAD: Tuple[Point, Point, Point] = ((0, 0, 0), (1, 0, 0), (1, 0, -1))

# Coordinate steps indexed by normalized orientation
LEFT_TURN_STEPS: Tuple[Point, ...] = (
    (0, 0, -1),
    (0, 1, 0),
    (-1, 0, 0),
    (0, 0, 1),
    (0, -1, 0),
    (1, 0, 0),
)

RIGHT_TURN_STEPS: Tuple[Point, ...] = (
    (0, -1, 0),
    (1, 0, 0),
    (0, 0, -1),
    (0, 1, 0),
    (-1, 0, 0),
    (0, 0, 1),
)

# Array forms for vectorized lane builds: shape (2, 6, 3), index [turn_bit, orientation]
TURN_STEP_TABLE = np.array([LEFT_TURN_STEPS, RIGHT_TURN_STEPS], dtype=np.int64)


def turn_step(orientation: int, right: int) -> Point:
    """Coordinate delta for a turn taken at the given bond orientation."""
    if right:
        return RIGHT_TURN_STEPS[orientation % 6]
    return LEFT_TURN_STEPS[orientation % 6]


def next_orientation(orientation: int, right: int) -> int:
    return orientation - 1 if right else orientation + 1


def step_point(point: Point, orientation: int, right: int) -> Point:
    """Site reached from `point` by turning at `orientation`."""
    dx, dy, dz = turn_step(orientation, right)
    return (point[0] + dx, point[1] + dy, point[2] + dz)


def lattice_distance(p: Point, q: Point) -> int:
    """L1 distance between two embedded sites (lower bound on bond count)."""
    return abs(p[0] - q[0]) + abs(p[1] - q[1]) + abs(p[2] - q[2])


def bond_step(orientation: int) -> Point:
    """Direction of the bond that carries the given orientation."""
    return LEFT_TURN_STEPS[(orientation - 1) % 6]


def sublattice(point: Point) -> int:
    """0 or 1: which of the two honeycomb sublattices a site belongs to."""
    return point[0] + point[1] + point[2]


def is_lattice_site(point: Sequence[int]) -> bool:
    return len(point) == 3 and sum(point) in (0, 1)
