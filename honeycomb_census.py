"""
Honeycomb Chain Census
Runs the full pipeline for one chain length:

    enumerate chains -> reduce polygon codes -> sort & de-duplicate -> classify symmetry

and tabulates the results.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd

from chain_config import CensusConfig
from chain_enumerator import ChainEnumerator, ProgressCallback, print_progress
from polygon_codes import reduce_polygon
from polygon_dedup import merge_sort_codes, unique_sorted
from symmetry_classes import SymmetryCensus, classify_polygons


@dataclass
class CensusResult:
    """Summary values of one census run."""
    length: int
    non_overlapping: int
    closed_chains: int
    evaluations: int
    code_space: int
    distinct_polygons: List[int]
    symmetry: SymmetryCensus

    @property
    def distinct_count(self) -> int:
        return len(self.distinct_polygons)

    def summary(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            'length': self.length,
            'non_overlapping': self.non_overlapping,
            'closed_chains': self.closed_chains,
            'distinct_polygons': self.distinct_count,
            'evaluations': self.evaluations,
            'code_space': self.code_space,
        }
        for label, count in self.symmetry.counts.items():
            out[f'class_{label}'] = count
        return out

    def to_frame(self) -> pd.DataFrame:
        """Symmetry classes as a table."""
        return pd.DataFrame(
            self.symmetry.rows(),
            columns=['class', 'description', 'polygons']
        ).set_index('class')

    def report(self) -> str:
        lines = [
            f" *** RESULTS for Chains on 2D Honeycomb Lattice with {self.length} Segments:",
            "",
            f"Number of Non-Overlapping Chains: {self.non_overlapping}",
            f"Number of Closed-Loop Chains: {self.closed_chains}",
            f"Number of Unique Polygons: {self.distinct_count} (includes mirror symmetric pairs)",
            "",
            "Self-Avoiding Polygon(s) By Symmetry Class:",
            "",
        ]
        for label, description, count in self.symmetry.rows():
            head = f"Class {label:<2} ({description}) "
            lines.append(f"{head:.<48} {count}")
        return "\n".join(lines)


def run_census(
    length: int,
    verbose: bool = False,
    progress: Optional[ProgressCallback] = None,
    config: Optional[CensusConfig] = None,
    fast_closure: bool = False
) -> CensusResult:
    """Enumerate, reduce, de-duplicate and classify all chains of `length` segments."""
    if config is None:
        config = CensusConfig(length=length, verbose=verbose, fast_closure=fast_closure)
    elif config.length != length:
        raise ValueError(f"Config is for length {config.length}, census requested for {length}")
    if progress is None and config.verbose:
        progress = print_progress

    if config.verbose:
        print(f"Calculating chains of length {config.length} ... ")

    enumerator = ChainEnumerator(
        config.length,
        progress=progress,
        progress_interval=config.progress_interval,
        fast_closure=config.fast_closure
    )
    enumeration = enumerator.run()

    if config.verbose:
        print(f"(Evaluations performed: {enumeration.evaluations} out of {enumeration.code_space})")
        print(f"Now examining {enumeration.closed_chains} self-avoiding polygons ...")
        print("Reduce to primitives ... ", end="")

    # Ownership of the polygon collection passes from the enumerator to this pipeline
    codes = enumeration.polygon_codes
    enumeration.polygon_codes = []
    codes = [reduce_polygon(code, config.length) for code in codes]

    if config.verbose:
        print("done.")
        print("Sort list of primitives ... ", end="")
    codes = merge_sort_codes(codes)

    if config.verbose:
        print("done.")
        print("Eliminate duplicates ... ", end="")
    distinct = unique_sorted(codes)

    if config.verbose:
        print("done.")
        print("Examine symmetry properties ... ", end="")
    symmetry = classify_polygons(distinct, config.length)

    if config.verbose:
        print("done.")
        print(f"(Found {len(distinct)} unique self-avoiding polygon(s))")

    return CensusResult(
        length=config.length,
        non_overlapping=enumeration.non_overlapping,
        closed_chains=enumeration.closed_chains,
        evaluations=enumeration.evaluations,
        code_space=enumeration.code_space,
        distinct_polygons=distinct,
        symmetry=symmetry
    )


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    length = int(argv[0]) if argv else 14

    print("=" * 70)
    print("HONEYCOMB CHAIN CENSUS")
    print("=" * 70)

    result = run_census(length, verbose=True)
    print()
    print(result.report())
    print()
    print(result.to_frame())
    return 0


if __name__ == "__main__":
    sys.exit(main())
