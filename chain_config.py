"""
Chain Census Configuration
Length bounds, code-space helpers and run settings for the honeycomb chain census.
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np


# Codes are unsigned 64-bit quantities; a chain of N segments needs N-2 bits.
MIN_CHAIN_LENGTH = 3
MAX_CHAIN_LENGTH = 63

# No cycle on the honeycomb lattice is shorter than a hexagon
SHORTEST_CYCLE = 6

# Bond orientation after the two fixed initial segments
INITIAL_ORIENTATION = 1

DEFAULT_PROGRESS_INTERVAL = 1 << 16


def validate_length(length) -> int:
    """Check a chain length and return it as a plain int."""
    if isinstance(length, (bool, np.bool_)):
        raise ValueError(f"Chain length must be an integer, got {length!r}")
    if not isinstance(length, (int, np.integer)):
        raise ValueError(f"Chain length must be an integer, got {type(length).__name__}")
    length = int(length)
    if length < MIN_CHAIN_LENGTH:
        raise ValueError(f"Chain length must be at least {MIN_CHAIN_LENGTH}, got {length}")
    if length > MAX_CHAIN_LENGTH:
        raise ValueError(
            f"Chain length {length} does not fit a 64-bit turn code "
            f"(maximum {MAX_CHAIN_LENGTH})"
        )
    return length


def code_space_size(length: int) -> int:
    """Number of distinct turn codes for a chain of `length` segments."""
    return 1 << (validate_length(length) - 2)


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


@dataclass
class CensusConfig:
    """Settings for one census run."""
    length: int
    verbose: bool = False
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
    lane_group_size: int = 256      # lanes reduced together by the halving tree
    lanes_per_launch: int = 4096
    max_workers: Optional[int] = None
    fast_closure: bool = False      # test closure only at the free end

    def __post_init__(self):
        self.length = validate_length(self.length)
        if self.progress_interval <= 0:
            raise ValueError(f"progress_interval must be positive, got {self.progress_interval}")
        if not _is_power_of_two(self.lane_group_size):
            raise ValueError(f"lane_group_size must be a power of two, got {self.lane_group_size}")
        if self.lanes_per_launch <= 0 or self.lanes_per_launch % self.lane_group_size != 0:
            raise ValueError(
                f"lanes_per_launch ({self.lanes_per_launch}) must be a positive multiple "
                f"of lane_group_size ({self.lane_group_size})"
            )
        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")

    @property
    def code_space(self) -> int:
        return code_space_size(self.length)

    @property
    def launch_count(self) -> int:
        """Launches needed to cover the code space."""
        return -(-self.code_space // self.lanes_per_launch)
