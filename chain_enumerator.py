"""
Chain Enumerator
================

Walks the full code space 0 .. 2^(N-2)-1 of an N-segment honeycomb chain in
ascending order and counts self-avoiding chains and closed polygons.

Each step:
1. find the branching segment between the new code and the previous one,
2. rebuild the chain tail from there,
3. scan that tail for the first overlap.

When a chain overlaps at position p, every code sharing the same turns up to
p overlaps at p as well. The "smart skip" drops the trailing N-p turns,
increments the remaining prefix and refills the tail with left turns, which
is the smallest code whose head differs from the rejected one.

Usage:
------
    from chain_enumerator import enumerate_chains

    result = enumerate_chains(10)
    result.non_overlapping, result.closed_chains, result.polygon_codes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from chain_config import DEFAULT_PROGRESS_INTERVAL, code_space_size, validate_length
from chain_state import ChainState, branching_segment, format_chain
from overlap_detection import closes_at_free_end, find_overlap, is_closed_loop
from polygon_codes import polygon_code


ProgressCallback = Callable[[int, int], None]


def print_progress(code: int, code_space: int) -> None:
    """Stock progress callback."""
    print(f"{100.0 * code / code_space:.1f}% done.")


@dataclass
class EnumerationResult:
    """Counts produced by one pass over the code space."""
    length: int
    non_overlapping: int = 0
    closed_chains: int = 0
    evaluations: int = 0       # codes rebuilt and tested
    skipped: int = 0           # codes jumped over by the smart skip
    polygon_codes: List[int] = field(default_factory=list)

    @property
    def code_space(self) -> int:
        return code_space_size(self.length)

    @property
    def overhead(self) -> float:
        """Evaluated codes per self-avoiding chain found."""
        if self.non_overlapping == 0:
            return float('inf')
        return self.evaluations / self.non_overlapping


class ChainEnumerator:
    """
    Sequential search state machine over the turn-code space.

    Owns the chain buffer and the polygon-code collection for the duration of
    the run; `run()` hands the finished result to the caller.
    """

    def __init__(
        self,
        length: int,
        progress: Optional[ProgressCallback] = None,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        fast_closure: bool = False,
        verbose: bool = False
    ):
        self.length = validate_length(length)
        self.code_space = code_space_size(self.length)
        self.progress = progress
        self.progress_interval = progress_interval
        self.fast_closure = fast_closure
        self.verbose = verbose

        self.chain = ChainState(self.length, code=0)
        self.code = 0
        # Sentinel previous code: differs from 0 in its top bit, forcing a full check
        self.previous = self.code_space - 1
        self.result = EnumerationResult(length=self.length)

    @property
    def finished(self) -> bool:
        return self.code >= self.code_space

    def smart_skip(self, code: int, overlap: int) -> int:
        """Smallest code whose turns up to `overlap` differ from those of `code`."""
        shift = self.length - overlap
        return ((code >> shift) + 1) << shift

    def _is_polygon(self) -> bool:
        if self.fast_closure:
            return closes_at_free_end(self.length, self.chain.points)
        return is_closed_loop(self.length, self.chain.points)

    def step(self) -> int:
        """
        Test the current code and advance to the next candidate.

        Returns the overlap position of the tested chain (0 if self-avoiding).
        """
        code = self.code
        result = self.result
        length = self.length

        segment = branching_segment(code, self.previous, length)
        self.chain.rebuild(code, segment)
        overlap = find_overlap(segment, length, self.chain.points)

        result.evaluations += 1
        self.previous = code

        if overlap == 0:
            result.non_overlapping += 1
            self.code = code + 1
            return overlap

        if overlap == length and self._is_polygon():
            result.polygon_codes.append(polygon_code(code, length))
            result.closed_chains += 1
            if self.verbose:
                print(f"Closed chain {code:0{length - 2}b}: {format_chain(self.chain.points)}")

        next_code = self.smart_skip(code, overlap)
        result.skipped += next_code - code - 1
        self.code = next_code
        return overlap

    def run(self) -> EnumerationResult:
        """Run to the end of the code space."""
        interval = self.progress_interval
        while self.code < self.code_space:
            self.step()
            if self.progress is not None and self.result.evaluations % interval == 0:
                self.progress(self.code, self.code_space)

        if self.verbose:
            r = self.result
            print(f"Evaluations performed: {r.evaluations} out of {self.code_space}")
        return self.result


def enumerate_chains(
    length: int,
    progress: Optional[ProgressCallback] = None,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    fast_closure: bool = False,
    verbose: bool = False
) -> EnumerationResult:
    """Convenience wrapper: build an enumerator and run it."""
    enumerator = ChainEnumerator(
        length,
        progress=progress,
        progress_interval=progress_interval,
        fast_closure=fast_closure,
        verbose=verbose
    )
    return enumerator.run()
