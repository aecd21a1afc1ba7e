"""Pair — a two-field composite ordered lexicographically.

Pairs nest by value: a ``Pair`` of ``Pair``s of ``Pair``s forms a balanced
binary tree of depth *d* holding ``2**d`` leaves.  Comparison walks that
tree with an explicit stack, so deep nesting never touches the
interpreter's recursion limit.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from threeway.domain.comparable import ThreeWayComparable, three_way
from threeway.domain.order import Order

Value = TypeVar("Value")

LEAF_STEPS = frozenset("ab")


class DefaultConstructionError(TypeError):
    """A value type offers no zero-argument constructor."""


def zero_value(value_type: Callable[[], Any]) -> Any:
    """Construct the zero value of *value_type* by calling it with no arguments.

    Raises:
        DefaultConstructionError: if *value_type* requires arguments.
    """
    try:
        return value_type()
    except TypeError as exc:
        name = getattr(value_type, "__name__", repr(value_type))
        msg = f"{name} has no zero-value constructor"
        raise DefaultConstructionError(msg) from exc


@dataclass(frozen=True, eq=False)
class Pair(ThreeWayComparable, Generic[Value]):
    """Two values of the same type, compared ``a`` first, then ``b``."""

    a: Value
    b: Value

    @classmethod
    def default(cls, value_type: Callable[[], Value]) -> Pair[Value]:
        """Build a pair whose fields are both the zero value of *value_type*."""
        return cls(zero_value(value_type), zero_value(value_type))

    def compare(self, other: Any) -> Order:
        """Lexicographic order: ``b`` is only inspected when ``a`` is equal.

        Each pair of leaves is evaluated at most once.

        Raises:
            TypeError: if the two trees differ in shape.
        """
        pending: list[tuple[Any, Any]] = [(self, other)]
        while pending:
            lhs, rhs = pending.pop()
            lhs_is_pair = isinstance(lhs, Pair)
            if lhs_is_pair != isinstance(rhs, Pair):
                msg = f"Cannot compare {type(lhs).__name__} with {type(rhs).__name__}"
                raise TypeError(msg)
            if lhs_is_pair:
                pending.append((lhs.b, rhs.b))
                pending.append((lhs.a, rhs.a))
                continue
            order = three_way(lhs, rhs)
            if order is not Order.EQUAL:
                return order
        return Order.EQUAL

    def __hash__(self) -> int:
        return hash(tuple(self.leaves()))

    @property
    def depth(self) -> int:
        """Nesting depth along the ``a`` spine; a bare leaf has depth 0."""
        depth = 0
        node: Any = self
        while isinstance(node, Pair):
            depth += 1
            node = node.a
        return depth

    def leaves(self) -> Iterator[Any]:
        """Yield leaf values in comparison order."""
        pending: list[Any] = [self]
        while pending:
            node = pending.pop()
            if isinstance(node, Pair):
                pending.append(node.b)
                pending.append(node.a)
            else:
                yield node

    def with_leaf(self, path: str, value: Any) -> Pair[Value]:
        """Return a copy with the leaf at *path* replaced by *value*.

        *path* is a sequence of ``"a"``/``"b"`` steps from this pair down
        to a leaf.
        """
        if not path or not set(path) <= LEAF_STEPS:
            msg = f"Invalid leaf path: {path!r}"
            raise ValueError(msg)

        spine: list[Pair[Any]] = []
        node: Any = self
        for step in path:
            if not isinstance(node, Pair):
                msg = f"Path {path!r} reaches a leaf after {len(spine)} steps"
                raise ValueError(msg)
            spine.append(node)
            node = getattr(node, step)
        if isinstance(node, Pair):
            msg = f"Path {path!r} ends on a Pair, not a leaf"
            raise ValueError(msg)

        replacement: Any = value
        for parent, step in zip(reversed(spine), reversed(path), strict=True):
            replacement = dataclasses.replace(parent, **{step: replacement})
        return replacement  # type: ignore[no-any-return]

    def update_leaf(self, path: str, fn: Callable[[Any], Any]) -> Pair[Value]:
        """Return a copy with the leaf at *path* replaced by ``fn(leaf)``."""
        return self.with_leaf(path, fn(self.leaf(path)))

    def leaf(self, path: str) -> Any:
        """Return the leaf value at *path*."""
        node: Any = self
        for step in path:
            if step not in LEAF_STEPS or not isinstance(node, Pair):
                msg = f"Invalid leaf path: {path!r}"
                raise ValueError(msg)
            node = getattr(node, step)
        if isinstance(node, Pair):
            msg = f"Path {path!r} ends on a Pair, not a leaf"
            raise ValueError(msg)
        return node

    # --- JSON-style nested lists ---

    @classmethod
    def from_nested(cls, obj: Any) -> Any:
        """Build pairs from nested two-element lists; other values are leaves.

        Raises:
            ValueError: on a list that is not two elements long.
        """
        return _build_bottom_up(obj, _split_list, cls)

    def to_nested(self) -> list[Any]:
        """Inverse of :meth:`from_nested`."""
        return _build_bottom_up(self, _split_pair, _join_list)  # type: ignore[no-any-return]


def _split_list(node: Any) -> tuple[Any, Any] | None:
    if not isinstance(node, list | tuple):
        return None
    if len(node) != 2:
        msg = f"Expected a two-element list, got {len(node)} elements"
        raise ValueError(msg)
    return node[0], node[1]


def _join_list(a: Any, b: Any) -> list[Any]:
    return [a, b]


def _split_pair(node: Any) -> tuple[Any, Any] | None:
    return (node.a, node.b) if isinstance(node, Pair) else None


def _build_bottom_up(
    root: Any,
    split: Callable[[Any], tuple[Any, Any] | None],
    join: Callable[[Any, Any], Any],
) -> Any:
    """Rebuild a binary tree, joining children only once both are built.

    *split* returns a node's two children, or None for a leaf.  Uses an
    explicit stack, so nesting depth is bounded by memory alone.
    """
    built: list[Any] = []
    pending: list[tuple[Any, bool]] = [(root, False)]
    while pending:
        node, children_built = pending.pop()
        if children_built:
            b = built.pop()
            a = built.pop()
            built.append(join(a, b))
            continue
        children = split(node)
        if children is None:
            built.append(node)
            continue
        pending.append((node, True))
        pending.append((children[1], False))
        pending.append((children[0], False))
    return built[0]


def nest(depth: int, value_type: Callable[[], Any]) -> Any:
    """Build a balanced tree of pairs with ``2**depth`` zero-valued leaves.

    ``depth == 0`` returns a bare leaf.  Every leaf is constructed
    separately, so no two fields share a value.
    """
    if depth < 0:
        msg = f"depth must be non-negative, got {depth}"
        raise ValueError(msg)
    level: list[Any] = [zero_value(value_type) for _ in range(2**depth)]
    while len(level) > 1:
        level = [Pair(level[i], level[i + 1]) for i in range(0, len(level), 2)]
    return level[0]


def last_leaf_path(depth: int) -> str:
    """Path to the innermost ``b`` field at the deepest level."""
    return "b" * depth
