"""
Symmetry classification of self-avoiding polygons.

Every polygon on the honeycomb lattice has 1-, 2-, 3- or 6-fold rotational
symmetry, with or without a mirror line, giving eight classes:

    1, 1m, 2, 2m, 3, 3m, 6, 6m
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from polygon_codes import mirror_symmetry, rotational_symmetry


ROTATION_ORDERS: Tuple[int, ...] = (1, 2, 3, 6)

CLASS_DESCRIPTIONS: Dict[str, str] = {
    '1': 'trivial symmetry group',
    '1m': 'only mirror symmetry',
    '2': 'symmetry under 180° rotations',
    '2m': '180° rotation & mirror symmetry',
    '3': 'symmetry under 120° rotations',
    '3m': '120° rotation & mirror symmetry',
    '6': 'symmetry under 60° rotations',
    '6m': '60° rotation & mirror symmetry',
}


class SymmetryInvariantError(ValueError):
    """A polygon reported a rotation order the lattice cannot produce."""


@dataclass(frozen=True)
class SymmetryClass:
    rotation_order: int
    mirror: bool

    @property
    def label(self) -> str:
        return f"{self.rotation_order}{'m' if self.mirror else ''}"

    @property
    def description(self) -> str:
        return CLASS_DESCRIPTIONS[self.label]


ALL_CLASSES: Tuple[SymmetryClass, ...] = tuple(
    SymmetryClass(order, mirror) for order in ROTATION_ORDERS for mirror in (False, True)
)


def symmetry_class(code: int, length: int) -> SymmetryClass:
    """Classify one polygon code."""
    order = rotational_symmetry(code, length)
    if order not in ROTATION_ORDERS:
        raise SymmetryInvariantError(
            f"Polygon {code:0{length}b} has {order}-fold rotational symmetry; "
            f"expected one of {ROTATION_ORDERS}"
        )
    return SymmetryClass(order, mirror_symmetry(code, length))


@dataclass
class SymmetryCensus:
    """Tally of polygons per symmetry class."""
    length: int
    counts: Dict[str, int] = field(default_factory=lambda: {c.label: 0 for c in ALL_CLASSES})

    def add(self, cls: SymmetryClass) -> None:
        self.counts[cls.label] += 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def __getitem__(self, label: str) -> int:
        return self.counts[label]

    def rows(self) -> List[Tuple[str, str, int]]:
        return [(c.label, c.description, self.counts[c.label]) for c in ALL_CLASSES]


def classify_polygons(codes: Iterable[int], length: int) -> SymmetryCensus:
    """Tally distinct polygon codes into the eight symmetry classes."""
    census = SymmetryCensus(length=length)
    for code in codes:
        census.add(symmetry_class(code, length))
    return census
