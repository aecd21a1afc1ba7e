"""End-to-end checks of the depth-14 benchmark scenario.

Timing assertions use generous bounds; they guard against accidental
quadratic behaviour, not against a slow CI machine.
"""

from __future__ import annotations

import json
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from click.testing import CliRunner

from threeway.cli import cli
from threeway.config.settings import ThreewaySettings
from threeway.domain.comparable import compare_via_two_way, three_way
from threeway.domain.order import Order
from threeway.services.bench import BenchService, build_operands, count_leaf_evaluations

DEPTH = 14

pytestmark = pytest.mark.slow


class TestDepthFourteen:
    def test_single_classification_is_fast(self) -> None:
        lhs, rhs = build_operands(DEPTH)
        start = time.perf_counter()
        order = three_way(lhs, rhs)
        elapsed = time.perf_counter() - start
        assert order is Order.DECREASING
        assert elapsed < 2.0

    def test_three_way_evaluates_half_as_many_leaves(self) -> None:
        three_order, three_count = count_leaf_evaluations(DEPTH, three_way)
        two_order, two_count = count_leaf_evaluations(DEPTH, compare_via_two_way)
        assert three_order is two_order is Order.DECREASING
        assert three_count == 2**DEPTH
        assert two_count == 2 * three_count

    def test_cli_bench_end_to_end(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "bench", "--depth", str(DEPTH), "--trials", "1", "--iterations", "1"],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["leaves"] == 2**DEPTH
        rows = {row["mode"]: row for row in data["modes"]}
        assert rows["three-way"]["leaf_evaluations"] == 2**DEPTH
        assert rows["two-way"]["leaf_evaluations"] == 2 * 2**DEPTH
        assert {row["order"] for row in rows.values()} == {"decreasing"}


class TestConcurrency:
    def test_shared_trees_classify_consistently(self) -> None:
        lhs, rhs = build_operands(10)
        with ThreadPoolExecutor(max_workers=8) as pool:
            forward = list(pool.map(lambda _: three_way(lhs, rhs), range(32)))
            backward = list(pool.map(lambda _: three_way(rhs, lhs), range(32)))
        assert set(forward) == {Order.DECREASING}
        assert set(backward) == {Order.INCREASING}

    def test_counters_are_per_call(self) -> None:
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: count_leaf_evaluations(8, three_way), range(8)))
        assert results == [(Order.DECREASING, 2**8)] * 8


class TestDefaultRun:
    def test_default_bench_finishes_promptly(self, settings: ThreewaySettings) -> None:
        start = time.perf_counter()
        result = BenchService(settings).run()
        elapsed = time.perf_counter() - start
        assert result.ok
        assert result.data["depth"] == 14
        assert elapsed < 60.0
