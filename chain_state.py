"""
Chain State: Build and Rebuild

A chain of N segments is stored as its turn code plus the N+1 embedded sites
it occupies. Positions 0-2 are the fixed chain head; the turn that places
site k (3 <= k <= N) is bit N-k of the code, so the lowest bits describe the
free end of the chain:

    bit 0  -> left turn
    bit 1  -> right turn

Consecutive codes in ascending order share a long common head, so the
enumerator keeps a single ChainState and only rebuilds the tail that starts
at the first differing turn.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from chain_config import INITIAL_ORIENTATION, validate_length
from honeycomb_embedding import CHAIN_HEAD, Point, next_orientation, step_point


def turn_bit(code: int, position: int, length: int) -> int:
    """Turn decision (0 = left, 1 = right) that places site `position`."""
    return (code >> (length - position)) & 1


def orientation_before(code: int, position: int, length: int) -> int:
    """
    Bond orientation in effect when site `position` is placed.

    Orientation is path dependent, so it is replayed from the head of the
    chain over positions 3 .. position-1.
    """
    orientation = INITIAL_ORIENTATION
    for k in range(3, position):
        orientation = next_orientation(orientation, (code >> (length - k)) & 1)
    return orientation


def branching_segment(code_a: int, code_b: int, length: int) -> int:
    """
    First chain position at which two codes make different turns.

    The most significant differing bit is the earliest differing decision.
    Identical codes give length + 1 (nothing to rebuild).
    """
    difference = code_a ^ code_b
    if difference == 0:
        return length + 1
    return length - (difference.bit_length() - 1)


def build_chain(code: int, length: int) -> List[Point]:
    """Translate a turn code into the complete list of occupied sites."""
    return ChainState(length, code=code).points


def format_chain(points: Sequence[Point]) -> str:
    """Render sites as '(x,y,z) (x,y,z) ...'."""
    return " ".join(f"({p[0]},{p[1]},{p[2]})" for p in points)


class ChainState:
    """
    The single mutable chain buffer owned by an enumeration.

    `points` always holds length + 1 sites; `build` fills it from scratch,
    `rebuild` rewrites only positions start..length.
    """

    def __init__(self, length: int, code: Optional[int] = None):
        self.length = validate_length(length)
        self.code: Optional[int] = None
        self.points: List[Point] = list(CHAIN_HEAD) + [CHAIN_HEAD[-1]] * (self.length - 2)
        if code is not None:
            self.build(code)

    def _check_code(self, code: int) -> None:
        if code < 0 or code >> (self.length - 2):
            raise ValueError(
                f"Code {code} is outside the code space of a {self.length}-segment chain"
            )

    def build(self, code: int) -> None:
        self._check_code(code)
        self.rebuild(code, 3)

    def rebuild(self, code: int, start: int) -> None:
        """
        Regenerate positions start..length for `code`, leaving 0..start-1 untouched.

        The caller guarantees that the sites before `start` already belong to
        `code` (i.e. start <= branching_segment(code, self.code, length)).
        """
        length = self.length
        start = max(start, 3)
        points = self.points

        orientation = orientation_before(code, start, length)
        for k in range(start, length + 1):
            right = (code >> (length - k)) & 1
            points[k] = step_point(points[k - 1], orientation, right)
            orientation = next_orientation(orientation, right)

        self.code = code

    def advance_to(self, code: int, previous: Optional[int] = None) -> int:
        """Move the buffer to `code`, rebuilding from the branch point. Returns it."""
        if previous is None:
            previous = self.code
        if previous is None:
            segment = 3
        else:
            segment = branching_segment(code, previous, self.length)
        self.rebuild(code, segment)
        return segment

    def as_array(self) -> np.ndarray:
        """Sites as an (length+1, 3) integer array."""
        return np.array(self.points, dtype=np.int64)

    def __str__(self) -> str:
        return format_chain(self.points)

    def __repr__(self):
        return f"ChainState(length={self.length}, code={self.code})"
