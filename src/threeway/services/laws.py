"""LawsService — verify the ordering laws on reproducible samples."""

from __future__ import annotations

import logging
import random
from typing import Any

from threeway.domain.laws import LAWS, check_all
from threeway.domain.pair import Pair
from threeway.services.base import BaseService
from threeway.services.result import ServiceResult, fail
from threeway.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

# Small leaf range so that equal pairs show up in every sample.
LEAF_RANGE = (-2, 2)


def sample_ints(rng: random.Random, count: int) -> list[int]:
    return [rng.randint(*LEAF_RANGE) for _ in range(count)]


def sample_pair(rng: random.Random, depth: int) -> Any:
    """A random balanced tree of the given depth (a bare leaf at depth 0)."""
    level: list[Any] = sample_ints(rng, 2**depth)
    while len(level) > 1:
        level = [Pair(level[i], level[i + 1]) for i in range(0, len(level), 2)]
    return level[0]


class LawsService(BaseService):
    """Check totality, antisymmetry, transitivity and bridging."""

    @traced
    def check(
        self,
        *,
        samples: int | None = None,
        seed: int | None = None,
        depth: int | None = None,
    ) -> ServiceResult:
        op = "laws"
        cfg = self.settings.laws
        samples = cfg.samples if samples is None else samples
        seed = cfg.seed if seed is None else seed
        depth = cfg.depth if depth is None else depth

        if samples < 1:
            return fail(op, "INVALID_ARGUMENT", "samples must be at least 1", samples=samples)
        if depth < 0:
            return fail(op, "INVALID_ARGUMENT", "depth must be non-negative", depth=depth)

        rng = random.Random(seed)
        populations: dict[str, list[Any]] = {
            "int": sample_ints(rng, samples),
            "pair": [sample_pair(rng, depth) for _ in range(samples)],
        }

        violations: list[dict[str, Any]] = []
        for name, values in populations.items():
            with trace_span(f"check_{name}") as span:
                found = check_all(values)
                if span:
                    span.annotate(violations=len(found))
            logger.debug(
                "laws population=%s values=%d violations=%d", name, len(values), len(found)
            )
            violations.extend({"population": name, **v.model_dump()} for v in found)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "samples": samples,
                "seed": seed,
                "depth": depth,
                "checked": sorted(LAWS),
                "violations": violations,
                "count": len(violations),
                "healthy": not violations,
            },
        )
