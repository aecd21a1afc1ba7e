"""Instrumented leaf values for counting comparison work."""

from __future__ import annotations

import threading
from typing import Any

from threeway.domain.comparable import ThreeWayComparable
from threeway.domain.order import Order


class ComparisonCounter:
    """Thread-safe tally of leaf comparisons."""

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    @property
    def count(self) -> int:
        return self._count

    def increment(self) -> None:
        with self._lock:
            self._count += 1

    def reset(self) -> None:
        with self._lock:
            self._count = 0


class CountingInt(ThreeWayComparable):
    """An ``int`` leaf whose every ``compare`` is recorded on a counter.

    ``CountingInt()`` is the zero value, so the type works with
    ``Pair.default`` and ``nest`` (bind a shared counter with
    ``functools.partial``).
    """

    __slots__ = ("value", "counter")

    def __init__(self, value: int = 0, counter: ComparisonCounter | None = None) -> None:
        self.value = value
        self.counter = counter if counter is not None else ComparisonCounter()

    def compare(self, other: Any) -> Order:
        if not isinstance(other, CountingInt):
            msg = f"Cannot compare CountingInt with {type(other).__name__}"
            raise TypeError(msg)
        self.counter.increment()
        if self.value < other.value:
            return Order.INCREASING
        if self.value > other.value:
            return Order.DECREASING
        return Order.EQUAL

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"CountingInt({self.value})"

    def __add__(self, delta: int) -> CountingInt:
        return CountingInt(self.value + delta, self.counter)

    def __sub__(self, delta: int) -> CountingInt:
        return CountingInt(self.value - delta, self.counter)
