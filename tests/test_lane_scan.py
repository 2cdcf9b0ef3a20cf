from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

import lane_scan
from chain_config import CensusConfig
from chain_state import build_chain
from lane_scan import (
    build_lane_chains, halving_reduce, lane_outcomes, run_launch, scan_code_space, scan_with_config,
)


class TestLaneBuild:
    @pytest.mark.parametrize("length", [3, 6, 9])
    def test_matches_sequential_build(self, length):
        codes = np.arange(1 << (length - 2))
        points = build_lane_chains(codes, length)
        assert points.shape == (len(codes), length + 1, 3)
        for code in codes:
            assert [tuple(p) for p in points[code].tolist()] == build_chain(int(code), length)

    def test_outcomes(self):
        self_avoiding, closed = lane_outcomes(np.arange(16), 6)
        assert self_avoiding.sum() == 15
        assert closed.tolist() == [True] + [False] * 15
        assert not self_avoiding[0]


class TestHalvingReduce:
    def test_group_sums(self):
        assert halving_reduce(np.arange(16), 4).tolist() == [6, 22, 38, 54]

    def test_single_group(self):
        values = np.array([True, False, True, True, False, False, True, True])
        assert halving_reduce(values, 8).tolist() == [5]

    def test_group_of_one(self):
        assert halving_reduce(np.array([3, 4]), 1).tolist() == [3, 4]


class TestScan:
    @pytest.mark.parametrize("length", range(3, 13))
    def test_matches_enumerator(self, length, enumeration):
        result = scan_code_space(length, lanes_per_launch=64, lane_group_size=16, max_workers=4)
        expected = enumeration(length)
        assert result.non_overlapping == expected.non_overlapping
        assert result.closed_chains == expected.closed_chains

    def test_launch_count(self):
        result = scan_code_space(12, lanes_per_launch=128, lane_group_size=32)
        assert result.launches == 8

    def test_inactive_lanes_ignored(self):
        assert run_launch(0, 4, 64, 16) == (4, 0)
        assert run_launch(64, 4, 64, 16) == (0, 0)

    def test_partial_launch(self):
        # second half of the length-6 code space holds no hexagon
        assert run_launch(8, 6, 16, 4) == (8, 0)

    def test_verbose(self, capsys):
        scan_code_space(6, lanes_per_launch=8, lane_group_size=4, verbose=True)
        assert "2 launch(es)" in capsys.readouterr().out

    def test_bad_group_size(self):
        with pytest.raises(ValueError):
            scan_code_space(8, lanes_per_launch=60, lane_group_size=12)


class CountingExecutor(ThreadPoolExecutor):
    """Records the largest number of unfinished launches seen at submit time."""
    peak = 0

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.futures = []

    def submit(self, *args, **kwargs):
        future = super().submit(*args, **kwargs)
        self.futures.append(future)
        unfinished = sum(1 for f in self.futures if not f.done())
        CountingExecutor.peak = max(CountingExecutor.peak, unfinished)
        return future


class TestBoundedSubmission:
    def test_many_launches_few_workers(self, enumeration):
        config = CensusConfig(length=12, lanes_per_launch=8, lane_group_size=8, max_workers=2)
        result = scan_with_config(config)
        assert result.launches == config.launch_count == 128
        assert result.non_overlapping == enumeration(12).non_overlapping
        assert result.closed_chains == enumeration(12).closed_chains

    def test_pending_launches_bounded(self, monkeypatch):
        monkeypatch.setattr(lane_scan, "ThreadPoolExecutor", CountingExecutor)
        CountingExecutor.peak = 0
        config = CensusConfig(length=10, lanes_per_launch=4, lane_group_size=2, max_workers=1)
        result = scan_with_config(config)
        assert result.launches == 64
        assert 1 <= CountingExecutor.peak <= 2
