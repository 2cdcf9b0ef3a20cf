"""
Polygon Codes
=============

A closed chain of N segments makes one turn at each of its N sites, so it is
described by an N-bit code. Bit N-1 is the turn at site 1 and bit 0 the turn
at the origin, where the chain closes.

Polygon codes are built from open-chain codes: every chain starts with a
fixed left turn, so the open code is shifted up one bit (leaving a 0 on top)
and the closing turn is appended as the lowest bit.

Congruent polygons are identified through a canonical code:
- rotation: cyclically shift the code (start the walk at another site),
- reversal: read the code backwards and swap every turn (walk the other way).

Mirror images are NOT identified; a polygon is mirror symmetric when its
mirror image has the same canonical code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from chain_state import orientation_before
from honeycomb_embedding import ORIGIN, Point, bond_step, next_orientation, step_point


class PolygonClosureError(ValueError):
    """The accumulated orientation of a 'closed' chain does not close it."""


def _mask(length: int) -> int:
    return (1 << length) - 1


def closing_turn(chain_code: int, length: int) -> int:
    """
    Final turn (0 = left, 1 = right) that brings the bond back to the
    first bond's orientation.
    """
    d = orientation_before(chain_code, length + 1, length) % 6
    if d == 1:
        return 1
    if d == 5:
        return 0
    raise PolygonClosureError(
        f"Chain code {chain_code} (length {length}) ends with orientation {d}; "
        f"a closing turn needs 1 or 5"
    )


def polygon_code(chain_code: int, length: int) -> int:
    """Polygon code of a closed open-chain code (implicit leading left turn)."""
    return (chain_code << 1) | closing_turn(chain_code, length)


def rotate_right(code: int, length: int) -> int:
    """Move the last turn to the front."""
    return (code >> 1) | ((code & 1) << (length - 1))


def rotate_left(code: int, length: int) -> int:
    """Move the first turn to the end."""
    return ((code << 1) & _mask(length)) | (code >> (length - 1))


def revert(code: int, length: int) -> int:
    """Walk the polygon backwards: reverse the turn order and swap left/right."""
    reverted = 0
    for k in range(length):
        if not (code >> k) & 1:
            reverted |= 1 << (length - k - 1)
    return reverted


def reverse_bits(code: int, length: int) -> int:
    """Reverse the turn order without swapping turns (mirror image walked backwards)."""
    reversed_code = 0
    for k in range(length):
        if (code >> k) & 1:
            reversed_code |= 1 << (length - k - 1)
    return reversed_code


def reflect(code: int, length: int) -> int:
    """Mirror image: swap every left and right turn."""
    return code ^ _mask(length)


def rotations(code: int, length: int) -> List[int]:
    """All `length` cyclic rotations, starting with the code itself."""
    out = []
    for _ in range(length):
        out.append(code)
        code = rotate_right(code, length)
    return out


def reduce_polygon(code: int, length: int) -> int:
    """Smallest code over all rotations of the polygon and of its reversal."""
    return min(min(rotations(code, length)), min(rotations(revert(code, length), length)))


def rotational_symmetry(code: int, length: int) -> int:
    """Number of cyclic rotations that leave the code unchanged."""
    return sum(1 for r in rotations(code, length) if r == code)


def mirror_symmetry(code: int, length: int) -> bool:
    """
    True if the polygon equals its own mirror image.

    The mirror image walked backwards has the bit-reversed code (reflection
    and reversal both swap turns); the polygon is mirror symmetric when some
    rotation of that code is the code itself.
    """
    return code in rotations(reverse_bits(code, length), length)


def trace_polygon(code: int, length: int) -> List[Point]:
    """
    Sites visited by a polygon code, starting at the origin with the first
    bond along +n1. A valid polygon ends back on the origin.
    """
    points: List[Point] = [ORIGIN, bond_step(0)]
    orientation = 0
    for k in range(1, length):
        right = (code >> (length - k)) & 1
        points.append(step_point(points[-1], orientation, right))
        orientation = next_orientation(orientation, right)
    return points


def turn_balance(code: int, length: int) -> int:
    """Left turns minus right turns; +6 or -6 for every simple polygon."""
    rights = bin(code & _mask(length)).count('1')
    return length - 2 * rights


@dataclass(frozen=True)
class Polygon:
    """A closed chain identified by its turn code."""
    code: int
    length: int

    @classmethod
    def from_chain_code(cls, chain_code: int, length: int) -> 'Polygon':
        return cls(polygon_code(chain_code, length), length)

    def reduced(self) -> 'Polygon':
        return Polygon(reduce_polygon(self.code, self.length), self.length)

    def rotated(self, steps: int = 1) -> 'Polygon':
        code = self.code
        for _ in range(steps % self.length):
            code = rotate_right(code, self.length)
        return Polygon(code, self.length)

    def reverted(self) -> 'Polygon':
        return Polygon(revert(self.code, self.length), self.length)

    def reflected(self) -> 'Polygon':
        return Polygon(reflect(self.code, self.length), self.length)

    def rotational_symmetry(self) -> int:
        return rotational_symmetry(self.code, self.length)

    def has_mirror_symmetry(self) -> bool:
        return mirror_symmetry(self.code, self.length)

    def points(self) -> List[Point]:
        return trace_polygon(self.code, self.length)

    def is_congruent(self, other: 'Polygon') -> bool:
        """Same shape up to rotation, translation and walking direction."""
        return self.length == other.length and self.reduced() == other.reduced()

    def __str__(self) -> str:
        return f"{self.code:0{self.length}b}"
