"""Ordering-law checks over a sample of values.

Each check returns a list of :class:`LawViolation`; an empty list means the
law holds on the sample.  Checks are exhaustive over the sample (pairs for
the binary laws, triples for transitivity), so keep samples small.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from itertools import product
from typing import Any

from pydantic import BaseModel, Field

from threeway.domain.comparable import three_way
from threeway.domain.order import Order

CompareFn = Callable[[Any, Any], Order]

_MIRROR: dict[Order, Order] = {
    Order.INCREASING: Order.DECREASING,
    Order.EQUAL: Order.EQUAL,
    Order.DECREASING: Order.INCREASING,
}


class LawViolation(BaseModel):
    """A counterexample to one ordering law."""

    model_config = {"frozen": True}

    law: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


def _violation(law: str, message: str, **operands: Any) -> LawViolation:
    return LawViolation(
        law=law,
        message=message,
        detail={k: repr(v) for k, v in operands.items()},
    )


def check_totality(values: Sequence[Any], compare: CompareFn = three_way) -> list[LawViolation]:
    """Every pair classifies into exactly one Order, the same one each time."""
    violations: list[LawViolation] = []
    for x, y in product(values, repeat=2):
        first = compare(x, y)
        if not isinstance(first, Order):
            violations.append(_violation("totality", f"compare returned {first!r}", x=x, y=y))
            continue
        second = compare(x, y)
        if second is not first:
            violations.append(
                _violation("determinism", f"compare gave {first} then {second}", x=x, y=y)
            )
    return violations


def check_antisymmetry(
    values: Sequence[Any], compare: CompareFn = three_way
) -> list[LawViolation]:
    """Swapping the operands mirrors the Order."""
    violations: list[LawViolation] = []
    for x, y in product(values, repeat=2):
        forward = compare(x, y)
        backward = compare(y, x)
        if _MIRROR.get(forward) is not backward:
            violations.append(
                _violation(
                    "antisymmetry",
                    f"compare(x, y) is {forward} but compare(y, x) is {backward}",
                    x=x,
                    y=y,
                )
            )
    return violations


def check_transitivity(
    values: Sequence[Any], compare: CompareFn = three_way
) -> list[LawViolation]:
    """``x ~ y`` and ``y ~ z`` imply ``x ~ z`` for each of the three relations."""
    violations: list[LawViolation] = []
    for x, y, z in product(values, repeat=3):
        xy = compare(x, y)
        if xy is not compare(y, z):
            continue
        xz = compare(x, z)
        if xz is not xy:
            violations.append(
                _violation(
                    "transitivity",
                    f"x {xy} y and y {xy} z but x {xz} z",
                    x=x,
                    y=y,
                    z=z,
                )
            )
    return violations


def check_bridging(values: Sequence[Any], compare: CompareFn = three_way) -> list[LawViolation]:
    """``==`` and ``<`` agree with the Order for every pair."""
    violations: list[LawViolation] = []
    for x, y in product(values, repeat=2):
        order = compare(x, y)
        if (x == y) != (order is Order.EQUAL):
            violations.append(
                _violation("bridging", f"x == y is {x == y} but compare is {order}", x=x, y=y)
            )
        if (x < y) != (order is Order.INCREASING):
            violations.append(
                _violation("bridging", f"x < y is {x < y} but compare is {order}", x=x, y=y)
            )
    return violations


LAWS: dict[str, Callable[[Sequence[Any], CompareFn], list[LawViolation]]] = {
    "totality": check_totality,
    "antisymmetry": check_antisymmetry,
    "transitivity": check_transitivity,
    "bridging": check_bridging,
}


def check_all(values: Sequence[Any], compare: CompareFn = three_way) -> list[LawViolation]:
    """Run every law check and concatenate the violations."""
    violations: list[LawViolation] = []
    for check in LAWS.values():
        violations.extend(check(values, compare))
    return violations
