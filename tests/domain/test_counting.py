"""Tests for the instrumented CountingInt leaf."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from threeway.domain.counting import ComparisonCounter, CountingInt
from threeway.domain.order import Order


class TestComparisonCounter:
    def test_starts_at_zero(self) -> None:
        assert ComparisonCounter().count == 0

    def test_increment_and_reset(self) -> None:
        counter = ComparisonCounter()
        counter.increment()
        counter.increment()
        assert counter.count == 2
        counter.reset()
        assert counter.count == 0

    def test_exact_under_threads(self) -> None:
        counter = ComparisonCounter()

        def bump(_: int) -> None:
            for _ in range(1000):
                counter.increment()

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(bump, range(8)))
        assert counter.count == 8000


class TestCountingInt:
    def test_zero_value(self) -> None:
        leaf = CountingInt()
        assert leaf.value == 0
        assert leaf.counter.count == 0

    @pytest.mark.parametrize(
        "lhs,rhs,expected",
        [(1, 2, Order.INCREASING), (2, 2, Order.EQUAL), (3, 2, Order.DECREASING)],
    )
    def test_compare_counts_once(self, lhs: int, rhs: int, expected: Order) -> None:
        counter = ComparisonCounter()
        assert CountingInt(lhs, counter).compare(CountingInt(rhs, counter)) is expected
        assert counter.count == 1

    def test_arithmetic_keeps_counter(self, counter: ComparisonCounter) -> None:
        leaf = CountingInt(5, counter)
        assert (leaf + 1).value == 6
        assert (leaf - 1).counter is counter

    def test_rejects_plain_int(self) -> None:
        with pytest.raises(TypeError, match="CountingInt"):
            CountingInt(1).compare(1)

    def test_hash_and_repr(self) -> None:
        assert hash(CountingInt(3)) == hash(3)
        assert repr(CountingInt(3)) == "CountingInt(3)"
