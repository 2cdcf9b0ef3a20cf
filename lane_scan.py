"""
Lane Scan: unpruned, data-parallel chain census
===============================================

Every code is tested independently by its own "lane": a full chain build
followed by a full pairwise coincidence scan, with no branch-point reuse and
no smart skip. Lanes are numpy rows, so one launch evaluates a whole block of
consecutive codes at once.

Per launch:
1. lane i takes code offset + i (lanes past the code space report nothing),
2. each lane writes two flags: self-avoiding? closed polygon?,
3. lanes are split into groups and each group is summed by a halving tree,
   leaving one pair of counts per group,
4. the host adds up the group results.

Launches share nothing but the final accumulation and run on a thread pool.
The sequential enumerator remains the reference; this variant must reproduce
its non-overlapping and closed-chain counts.
"""

from __future__ import annotations

import os
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from itertools import islice
from typing import Iterator, Optional, Tuple

import numpy as np

from chain_config import INITIAL_ORIENTATION, CensusConfig, code_space_size, validate_length
from honeycomb_embedding import CHAIN_HEAD, TURN_STEP_TABLE


@dataclass
class LaneScanResult:
    length: int
    non_overlapping: int = 0
    closed_chains: int = 0
    launches: int = 0


def build_lane_chains(codes: np.ndarray, length: int) -> np.ndarray:
    """
    Embedded sites for a block of codes.

    Returns an int64 array of shape (lanes, length + 1, 3).
    """
    codes = np.asarray(codes, dtype=np.int64)
    lanes = codes.shape[0]
    shifts = length - np.arange(3, length + 1, dtype=np.int64)

    bits = (codes[:, None] >> shifts[None, :]) & 1
    steps = np.where(bits == 0, 1, -1)
    # Orientation in effect before each turn
    orientation = INITIAL_ORIENTATION + np.cumsum(steps, axis=1) - steps

    deltas = TURN_STEP_TABLE[bits, orientation % 6]
    head = np.array(CHAIN_HEAD, dtype=np.int64)
    tail = head[-1] + np.cumsum(deltas, axis=1)

    return np.concatenate([np.broadcast_to(head, (lanes, 3, 3)), tail], axis=1)


def lane_outcomes(codes: np.ndarray, length: int) -> Tuple[np.ndarray, np.ndarray]:
    """(self_avoiding, closed) flags for each lane's code."""
    points = build_lane_chains(codes, length)
    same = np.all(points[:, :, None, :] == points[:, None, :, :], axis=-1)
    pairs = np.triu(np.ones((length + 1, length + 1), dtype=bool), k=1)
    coincidences = (same & pairs).sum(axis=(1, 2))

    self_avoiding = coincidences == 0
    closed = (coincidences == 1) & same[:, 0, length]
    return self_avoiding, closed


def halving_reduce(values: np.ndarray, group_size: int) -> np.ndarray:
    """
    Sum each group of `group_size` consecutive lanes with a halving tree.

    `group_size` must be a power of two dividing len(values).
    """
    groups = np.asarray(values, dtype=np.int64).reshape(-1, group_size).copy()
    width = group_size
    while width > 1:
        half = width // 2
        groups[:, :half] += groups[:, half:width]
        width = half
    return groups[:, 0]


def run_launch(offset: int, length: int, lanes: int, group_size: int) -> Tuple[int, int]:
    """Evaluate codes offset .. offset+lanes-1; return (non_overlapping, closed)."""
    code_space = code_space_size(length)
    codes = offset + np.arange(lanes, dtype=np.int64)
    active = codes < code_space

    self_avoiding, closed = lane_outcomes(np.where(active, codes, 0), length)
    self_avoiding &= active
    closed &= active

    non_overlapping = int(halving_reduce(self_avoiding, group_size).sum())
    closed_chains = int(halving_reduce(closed, group_size).sum())
    return non_overlapping, closed_chains


def scan_code_space(
    length: int,
    lanes_per_launch: int = 4096,
    lane_group_size: int = 256,
    max_workers: Optional[int] = None,
    verbose: bool = False
) -> LaneScanResult:
    """Count self-avoiding and closed chains by testing every code."""
    length = validate_length(length)
    config = CensusConfig(
        length=length,
        lanes_per_launch=lanes_per_launch,
        lane_group_size=lane_group_size,
        max_workers=max_workers,
        verbose=verbose
    )
    return scan_with_config(config)


def _launch_offsets(config: CensusConfig) -> Iterator[int]:
    for i in range(config.launch_count):
        yield i * config.lanes_per_launch


def scan_with_config(config: CensusConfig) -> LaneScanResult:
    result = LaneScanResult(length=config.length)

    if config.verbose:
        print(f"Lane scan: {config.code_space} codes in {config.launch_count} launch(es) "
              f"of {config.lanes_per_launch} lanes")

    # At most two launches per worker are pending at any time
    window = 2 * (config.max_workers or os.cpu_count() or 1)

    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        offsets = _launch_offsets(config)
        pending = set()
        while True:
            for offset in islice(offsets, window - len(pending)):
                pending.add(executor.submit(run_launch, offset, config.length,
                                            config.lanes_per_launch, config.lane_group_size))
            if not pending:
                break
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                non_overlapping, closed = future.result()
                result.non_overlapping += non_overlapping
                result.closed_chains += closed
                result.launches += 1

    return result
