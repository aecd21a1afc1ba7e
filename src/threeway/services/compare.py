"""CompareService — classify two JSON values with a single comparison."""

from __future__ import annotations

import json
import math
from typing import Any

from threeway.domain.comparable import OPERATORS, satisfies, three_way
from threeway.domain.pair import Pair
from threeway.services.base import BaseService
from threeway.services.result import ServiceResult, fail
from threeway.services.telemetry import traced


def _reject_constant(name: str) -> float:
    msg = f"{name} has no place in a total order"
    raise ValueError(msg)


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        msg = f"{text} overflows to {value}, which has no place in a total order"
        raise ValueError(msg)
    return value


def parse_operand(raw: str) -> Any:
    """Parse a JSON value; nested two-element lists become Pairs.

    ``NaN``, ``Infinity`` and numbers too large for a float are refused,
    since ``NaN`` breaks antisymmetry.

    Raises:
        ValueError: on invalid JSON, a non-finite number, or a list that
            is not two elements long.
        RecursionError: when the JSON decoder runs out of stack on very
            deep arrays.
    """
    value = json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    return Pair.from_nested(value)


class CompareService(BaseService):
    """Compare two operands once and report every derived relation."""

    @traced
    def compare(self, lhs: str, rhs: str) -> ServiceResult:
        op = "compare"
        operands: list[Any] = []
        for side, raw in (("lhs", lhs), ("rhs", rhs)):
            try:
                operands.append(parse_operand(raw))
            except ValueError as exc:
                return fail(op, "INVALID_INPUT", f"Invalid {side}: {exc}", side=side, raw=raw)
            except RecursionError:
                msg = f"Invalid {side}: arrays are nested too deeply to decode"
                return fail(op, "INVALID_INPUT", msg, side=side)

        try:
            order = three_way(*operands)
        except TypeError as exc:
            return fail(op, "INCOMPARABLE", str(exc), lhs=lhs, rhs=rhs)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "lhs": lhs,
                "rhs": rhs,
                "order": str(order),
                "relations": {operator: satisfies(order, operator) for operator in OPERATORS},
            },
        )
