"""Comparison capabilities and the bridges between them.

Two capabilities live here:

- ``TwoWayOrdered``: the conventional ``==`` plus ``<`` pair.  ``>``, ``<=``
  and ``>=`` are derived from those two, and a default ``compare`` is
  bridged from them at the cost of up to two evaluations.
- ``ThreeWayComparable``: a single ``compare`` returning :class:`Order`.
  ``==`` and ``<`` are derived from it; the remaining operators come from
  ``TwoWayOrdered`` so there is exactly one derivation of each.

Anything a subclass defines explicitly takes precedence over the derived
defaults (plain MRO lookup).  ``derive_ordering`` offers the same bridging
as a class decorator for classes that do not inherit the mixins.
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from threeway.domain.order import Order

_T = TypeVar("_T")

# Relations deducible from a single Order, keyed by operator token.
_RELATIONS: dict[str, frozenset[Order]] = {
    "==": frozenset({Order.EQUAL}),
    "!=": frozenset({Order.INCREASING, Order.DECREASING}),
    "<": frozenset({Order.INCREASING}),
    "<=": frozenset({Order.INCREASING, Order.EQUAL}),
    ">": frozenset({Order.DECREASING}),
    ">=": frozenset({Order.DECREASING, Order.EQUAL}),
}

OPERATORS: tuple[str, ...] = tuple(_RELATIONS)


class OrderingDefinitionError(TypeError):
    """A class cannot be given an ordering from what it defines."""


@runtime_checkable
class SupportsThreeWay(Protocol):
    """Anything exposing ``compare(other) -> Order``."""

    def compare(self, other: Any, /) -> Order: ...


# --- Free-function bridges ---


def compare_via_two_way(lhs: Any, rhs: Any) -> Order:
    """Classify *lhs* against *rhs* using ``<`` then ``==``.

    Up to two evaluations of the operands' comparison logic.
    """
    if lhs < rhs:
        return Order.INCREASING
    if lhs == rhs:
        return Order.EQUAL
    return Order.DECREASING


@functools.lru_cache(maxsize=512)
def _compare_for(value_type: type) -> Callable[[Any, Any], Order] | None:
    """``value_type.compare`` if the type offers one, else None.

    Looked up on the type, the way Python resolves the comparison dunders,
    so the answer can be cached per type.
    """
    compare = getattr(value_type, "compare", None)
    return compare if callable(compare) else None


def three_way(lhs: Any, rhs: Any) -> Order:
    """Classify *lhs* against *rhs* with a single ``compare`` when available.

    Values without the capability (``int``, ``str``, ...) fall back to
    :func:`compare_via_two_way`.
    """
    compare = _compare_for(type(lhs))
    if compare is not None:
        return compare(lhs, rhs)
    return compare_via_two_way(lhs, rhs)


def _accepts(lhs: Any, rhs: Any) -> bool:
    """Whether *rhs* is something ``lhs.compare`` can be asked about."""
    return isinstance(rhs, type(lhs)) or _compare_for(type(rhs)) is not None


def _equal_by_compare(lhs: Any, rhs: Any) -> bool:
    # Operands that cannot be ordered against each other are unequal, as 1 == "1" is.
    try:
        return lhs.compare(rhs) is Order.EQUAL
    except TypeError:
        return False


def satisfies(order: Order, operator: str) -> bool:
    """Return whether *order* implies the relation named by *operator*.

    Supported operators: ``==``, ``!=``, ``<``, ``<=``, ``>``, ``>=``.
    """
    try:
        return order in _RELATIONS[operator]
    except KeyError:
        msg = f"Unknown comparison operator: {operator!r}"
        raise ValueError(msg) from None


# --- Mixins ---


class TwoWayOrdered(ABC):
    """Ordering defined by ``__eq__`` and ``__lt__``.

    Subclasses implement both; ``>``, ``<=``, ``>=`` and a bridged
    ``compare`` are provided.
    """

    __slots__ = ()

    @abstractmethod
    def __eq__(self, other: object) -> bool: ...

    @abstractmethod
    def __lt__(self, other: Any) -> bool: ...

    def __gt__(self, other: Any) -> bool:
        return not self < other and not self == other

    def __le__(self, other: Any) -> bool:
        return self < other or self == other

    def __ge__(self, other: Any) -> bool:
        return not self < other

    def compare(self, other: Any) -> Order:
        return compare_via_two_way(self, other)


class ThreeWayComparable(TwoWayOrdered):
    """Ordering defined by a single ``compare`` returning :class:`Order`.

    ``compare`` must be a strict total order: total, antisymmetric and
    transitive.  ``==`` and ``<`` are derived from it; ``>``, ``<=`` and
    ``>=`` are inherited from :class:`TwoWayOrdered`.
    """

    __slots__ = ()

    @abstractmethod
    def compare(self, other: Any) -> Order: ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ThreeWayComparable):
            return NotImplemented
        return _equal_by_compare(self, other)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, ThreeWayComparable):
            return NotImplemented
        return self.compare(other) is Order.INCREASING


# --- Class decorator ---


def _defines(cls: type, name: str) -> bool:
    """True if *cls* (or a base other than ``object``) defines *name*."""
    return getattr(cls, name, None) is not getattr(object, name, None)


def _eq_from_compare(self: Any, other: Any) -> bool:
    if not _accepts(self, other):
        return NotImplemented
    return _equal_by_compare(self, other)


def _lt_from_compare(self: Any, other: Any) -> bool:
    if not _accepts(self, other):
        return NotImplemented
    return self.compare(other) is Order.INCREASING


def _compare_from_two_way(self: Any, other: Any) -> Order:
    return compare_via_two_way(self, other)


_DERIVED_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "__gt__": TwoWayOrdered.__gt__,
    "__le__": TwoWayOrdered.__le__,
    "__ge__": TwoWayOrdered.__ge__,
}


def derive_ordering(cls: type[_T]) -> type[_T]:
    """Class decorator filling in whichever ordering operations are missing.

    A class defining ``compare`` gets ``__eq__``/``__lt__`` derived from it.
    A class defining ``__eq__`` and ``__lt__`` gets a bridged ``compare``.
    Either way, missing ``__gt__``/``__le__``/``__ge__`` are derived from
    ``<`` and ``==``.  Explicit definitions are never replaced.

    Raises:
        OrderingDefinitionError: if the class defines neither root.
    """
    has_compare = _defines(cls, "compare")
    has_two_way = _defines(cls, "__lt__") and _defines(cls, "__eq__")

    if has_compare:
        if not _defines(cls, "__eq__"):
            cls.__eq__ = _eq_from_compare  # type: ignore[method-assign,assignment]
        if not _defines(cls, "__lt__"):
            cls.__lt__ = _lt_from_compare  # type: ignore[operator]
    elif has_two_way:
        cls.compare = _compare_from_two_way  # type: ignore[attr-defined]
    else:
        msg = f"{cls.__name__} must define compare(), or both __eq__() and __lt__()"
        raise OrderingDefinitionError(msg)

    for name, derived in _DERIVED_OPERATORS.items():
        if not _defines(cls, name):
            setattr(cls, name, derived)
    return cls
