"""Human-readable rendering of service results.

:func:`render_result` draws one result onto a fresh StringIO console and
returns the text; :func:`render_quiet` reduces it to a single line.  Each
op has a body renderer in ``_BODIES``; ops without one list their data
as ``key: value`` lines.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich import box
from rich.padding import Padding
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from threeway.output.console import create_console, get_output, style_for_order

if TYPE_CHECKING:
    from rich.console import Console

    from threeway.services.result import ServiceResult

Body = Callable[["Console", dict[str, Any], bool], None]

# Span timings above these thresholds (ms) are highlighted.
_SLOW_SPANS: tuple[tuple[float, str], ...] = ((1000.0, "bold red"), (100.0, "yellow"))


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* for a terminal; plain text when output is not a TTY."""
    console = create_console()
    if not result.ok:
        _draw_failure(console, result, verbose=verbose)
        return get_output(console).rstrip("\n")

    console.print(_heading("OK", "tw.ok", result.op))
    _BODIES.get(result.op, _draw_fields)(console, result.data, verbose)
    for warning in result.warnings:
        console.print(Text(f"  ! {warning}", style="tw.warning"))
    if verbose and result.meta:
        _draw_meta(console, result.meta)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One line for ``--quiet``: the answer where there is one, else the status."""
    if not result.ok:
        reason = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {reason}"
    data = result.data
    if result.op == "compare":
        return str(data.get("order", ""))
    if result.op == "laws":
        return "healthy" if data.get("healthy") else f"violations: {data.get('count', 0)}"
    return f"OK: {result.op}"


# --- building blocks ---


def _heading(label: str, style: str, op: str, message: str | None = None) -> Text:
    line = Text.assemble((label, style), "  ", (op, "tw.op"))
    if message is not None:
        line.append(" — ")
        line.append(message)
    return line


def _kv(key: str, value: Any, value_style: str = "") -> Text:
    return Text.assemble((f"  {key}: ", "tw.key"), (str(value), value_style))


def _draw_fields(console: Console, data: dict[str, Any], verbose: bool) -> None:
    for key, value in data.items():
        console.print(_kv(key, value))


def _draw_failure(console: Console, result: ServiceResult, *, verbose: bool) -> None:
    err = result.error
    console.print(_heading("ERROR", "tw.error", result.op, err.message if err else "Unknown error"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(_kv(f"  {key}", value))


def _timing_style(ms: float) -> str:
    for threshold, style in _SLOW_SPANS:
        if ms > threshold:
            return style
    return "dim"


def _span_label(span: dict[str, Any]) -> Text:
    ms = float(span.get("duration_ms", 0.0))
    label = Text.assemble((f"{ms:.2f}ms", _timing_style(ms)), "  ", str(span.get("name", "?")))
    extras = []
    if span.get("evaluations") is not None:
        extras.append(f"evaluations={span['evaluations']}")
    extras.extend(f"{key}={value}" for key, value in span.get("annotations", {}).items())
    if extras:
        label.append(f"  ({', '.join(extras)})", style="dim")
    return label


def _span_tree(root: dict[str, Any]) -> Tree:
    tree = Tree(_span_label(root), guide_style="dim")
    pending: list[tuple[Tree, dict[str, Any]]] = [(tree, root)]
    while pending:
        node, span = pending.pop()
        for child in span.get("children", []):
            pending.append((node.add(_span_label(child)), child))
    return tree


def _draw_meta(console: Console, meta: dict[str, Any]) -> None:
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in meta.items():
        if key == "telemetry":
            console.print(Padding(_span_tree(value), (0, 0, 0, 4)))
        else:
            console.print(_kv(f"  {key}", value))


def _table(*columns: tuple[str, dict[str, Any]]) -> Table:
    table = Table(box=box.SIMPLE_HEAD, pad_edge=False, expand=False)
    for header, options in columns:
        table.add_column(header, **options)
    return table


# --- op bodies ---


def _draw_bench(console: Console, data: dict[str, Any], verbose: bool) -> None:
    console.print(_kv("depth", data.get("depth")))
    console.print(_kv("leaves", data.get("leaves")))
    console.print(_kv("trials", f"{data.get('trials')} x {data.get('iterations')} iterations"))

    table = _table(
        ("Mode", {"style": "tw.op", "no_wrap": True}),
        ("Order", {}),
        ("Leaf evals", {"justify": "right"}),
        ("Best ms", {"justify": "right", "style": "tw.timing"}),
        ("Mean ms", {"justify": "right"}),
    )
    for row in data.get("modes", []):
        order = str(row.get("order", ""))
        table.add_row(
            str(row.get("mode", "")),
            Text(order, style=style_for_order(order)),
            str(row.get("leaf_evaluations", "")),
            f"{float(row.get('best_ms', 0.0)):.4f}",
            f"{float(row.get('mean_ms', 0.0)):.4f}",
        )
    console.print(table)


def _draw_laws(console: Console, data: dict[str, Any], verbose: bool) -> None:
    console.print(_kv("laws", ", ".join(data.get("checked", []))))
    console.print(_kv("samples", data.get("samples")))
    console.print(_kv("seed", data.get("seed")))
    console.print(_kv("pair depth", data.get("depth")))

    violations: list[dict[str, Any]] = data.get("violations", [])
    if not violations:
        console.print(Text("  All laws hold.", style="tw.ok"))
        return

    console.print(Text(f"  {len(violations)} violation(s):", style="tw.error"))
    columns = [("Population", {}), ("Law", {"style": "tw.error"}), ("Message", {})]
    if verbose:
        columns.append(("Operands", {"style": "dim"}))
    table = _table(*columns)
    for violation in violations:
        cells = [str(violation.get(name, "")) for name in ("population", "law", "message")]
        if verbose:
            detail = violation.get("detail", {})
            cells.append(", ".join(f"{key}={value}" for key, value in detail.items()))
        table.add_row(*cells)
    console.print(table)


def _draw_compare(console: Console, data: dict[str, Any], verbose: bool) -> None:
    order = str(data.get("order", ""))
    console.print(_kv("lhs", data.get("lhs")))
    console.print(_kv("rhs", data.get("rhs")))
    console.print(_kv("order", order, style_for_order(order)))

    relations: dict[str, bool] = data.get("relations", {})
    if relations:
        line = Text("  ")
        for operator, holds in relations.items():
            line.append(f"{operator} ", style="tw.key")
            line.append(str(holds).lower(), style="tw.true" if holds else "tw.false")
            line.append("  ")
        console.print(line)


_BODIES: dict[str, Body] = {
    "bench": _draw_bench,
    "laws": _draw_laws,
    "compare": _draw_compare,
}
