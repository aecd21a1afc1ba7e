"""Timing spans for service calls, shown under ``--verbose``.

A ``@traced`` service method opens a root :class:`Span`; ``trace_span``
blocks inside it open children.  Benchmarks record leaf-comparison counts
on their spans through :attr:`Span.evaluations`.  The finished tree lands
in ``ServiceResult.meta["telemetry"]``.

Off by default.  While off, ``@traced`` costs one ``ContextVar.get`` and
``trace_span`` yields None.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from threeway.services.result import ServiceResult

log = structlog.get_logger("threeway.telemetry")

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_active: ContextVar[Span | None] = ContextVar("_active", default=None)


@dataclass
class Span:
    """One timed block, with the spans opened inside it."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    elapsed_ms: float | None = None
    evaluations: int | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    def close(self) -> None:
        self.elapsed_ms = (time.perf_counter() - self.started) * 1000

    def annotate(self, **values: Any) -> None:
        self.annotations.update(values)

    def to_dict(self) -> dict[str, Any]:
        tree: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.elapsed_ms or 0.0, 2),
        }
        if self.evaluations is not None:
            tree["evaluations"] = self.evaluations
        if self.annotations:
            tree["annotations"] = dict(self.annotations)
        if self.children:
            tree["children"] = [child.to_dict() for child in self.children]
        return tree

    def walk(self) -> Iterator[Span]:
        """This span and its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@contextmanager
def _opened(span: Span) -> Generator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.close()
        _active.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a block as a child of the enclosing ``@traced`` call.

    Yields None outside a traced call, so callers guard with ``if span:``.
    """
    parent = _active.get()
    if parent is None:
        yield None
        return
    child = Span(name)
    parent.children.append(child)
    with _opened(child):
        yield child


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and attach its span tree to the result's meta."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        with _opened(Span(func.__qualname__)) as span:
            result = func(*args, **kwargs)

        log.debug(
            "span.complete",
            span=span.name,
            duration_ms=round(span.elapsed_ms or 0.0, 2),
            evaluations=sum(s.evaluations or 0 for s in span.walk()),
        )
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry(enabled: bool = True) -> None:
    """Switch span collection on (``--verbose``) or off for this context."""
    _enabled.set(enabled)
