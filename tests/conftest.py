import os
import sys
from functools import lru_cache

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from chain_state import build_chain
from chain_enumerator import enumerate_chains


@lru_cache(maxsize=None)
def _brute_force_census(length):
    """Full build and set-based coincidence test for every code."""
    non_overlapping = 0
    closed = []
    for code in range(1 << (length - 2)):
        points = build_chain(code, length)
        if len(set(points)) == length + 1:
            non_overlapping += 1
        elif points[-1] == points[0] and len(set(points[:-1])) == length:
            closed.append(code)
    return non_overlapping, tuple(closed)


@lru_cache(maxsize=None)
def _enumeration(length):
    return enumerate_chains(length)


@pytest.fixture
def brute_force():
    return _brute_force_census


@pytest.fixture
def enumeration():
    return _enumeration


@pytest.fixture
def hexagon_points():
    return build_chain(0, 6)
