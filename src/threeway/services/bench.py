"""BenchService — time three-way against two-way classification.

Both operands are balanced Pair trees of zero-valued ``int`` leaves that
differ only in the last leaf (``rhs`` is one less), so every
classification has to walk the whole tree before it finds the
difference.  The two-way mode classifies with ``<`` followed by ``==``;
the three-way mode makes a single ``compare`` call.
"""

from __future__ import annotations

import functools
import logging
import statistics
import time
from collections.abc import Callable
from typing import Any

from threeway.domain.comparable import compare_via_two_way, three_way
from threeway.domain.counting import ComparisonCounter, CountingInt
from threeway.domain.order import Order
from threeway.domain.pair import last_leaf_path, nest
from threeway.services.base import BaseService
from threeway.services.result import ServiceResult, fail
from threeway.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

Classifier = Callable[[Any, Any], Order]

MODES: dict[str, Classifier] = {
    "three-way": three_way,
    "two-way": compare_via_two_way,
}

MODE_CHOICES: tuple[str, ...] = (*MODES, "both")


def build_operands(depth: int, value_type: Callable[[], Any] = int) -> tuple[Any, Any]:
    """Return ``(lhs, rhs)`` where ``rhs`` has its last leaf decremented by 1."""
    lhs = nest(depth, value_type)
    if depth == 0:
        return lhs, lhs - 1
    rhs = lhs.update_leaf(last_leaf_path(depth), lambda leaf: leaf - 1)
    return lhs, rhs


def count_leaf_evaluations(depth: int, classify: Classifier) -> tuple[Order, int]:
    """Classify one pair of instrumented trees and count leaf comparisons."""
    counter = ComparisonCounter()
    lhs, rhs = build_operands(depth, functools.partial(CountingInt, counter=counter))
    order = classify(lhs, rhs)
    return order, counter.count


def time_classifier(
    classify: Classifier,
    lhs: Any,
    rhs: Any,
    *,
    trials: int,
    iterations: int,
) -> list[float]:
    """Return per-trial wall-clock timings in milliseconds."""
    timings: list[float] = []
    for _ in range(trials):
        start = time.perf_counter()
        for _ in range(iterations):
            classify(lhs, rhs)
        timings.append((time.perf_counter() - start) * 1000)
    return timings


class BenchService(BaseService):
    """Microbenchmark for comparison of nested Pair trees."""

    @traced
    def run(
        self,
        *,
        depth: int | None = None,
        trials: int | None = None,
        iterations: int | None = None,
        mode: str | None = None,
    ) -> ServiceResult:
        op = "bench"
        cfg = self.settings.bench
        depth = cfg.depth if depth is None else depth
        trials = cfg.trials if trials is None else trials
        iterations = cfg.iterations if iterations is None else iterations
        mode = mode or cfg.mode

        if depth < 0:
            return fail(op, "INVALID_ARGUMENT", "depth must be non-negative", depth=depth)
        if trials < 1 or iterations < 1:
            return fail(
                op,
                "INVALID_ARGUMENT",
                "trials and iterations must be at least 1",
                trials=trials,
                iterations=iterations,
            )
        if mode not in MODE_CHOICES:
            return fail(
                op,
                "INVALID_ARGUMENT",
                f"Unknown mode: {mode}",
                mode=mode,
                choices=list(MODE_CHOICES),
            )

        selected = list(MODES) if mode == "both" else [mode]
        logger.debug(
            "bench depth=%d trials=%d iterations=%d modes=%s",
            depth,
            trials,
            iterations,
            selected,
        )

        with trace_span("build_operands") as span:
            lhs, rhs = build_operands(depth)
            if span:
                span.annotate(leaves=2**depth)

        rows: list[dict[str, Any]] = []
        for name in selected:
            classify = MODES[name]
            with trace_span(name) as span:
                order, evaluations = count_leaf_evaluations(depth, classify)
                timings = time_classifier(
                    classify, lhs, rhs, trials=trials, iterations=iterations
                )
                if span:
                    span.evaluations = evaluations
            rows.append(
                {
                    "mode": name,
                    "order": str(order),
                    "leaf_evaluations": evaluations,
                    "best_ms": round(min(timings), 4),
                    "mean_ms": round(statistics.fmean(timings), 4),
                }
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "depth": depth,
                "leaves": 2**depth,
                "trials": trials,
                "iterations": iterations,
                "modes": rows,
            },
        )
