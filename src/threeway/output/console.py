"""Rich Console factory and theme for threeway output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

THREEWAY_THEME = Theme(
    {
        "tw.ok": "bold green",
        "tw.error": "bold red",
        "tw.warning": "bold yellow",
        "tw.op": "bold cyan",
        "tw.key": "dim",
        "tw.order.increasing": "green",
        "tw.order.equal": "blue",
        "tw.order.decreasing": "magenta",
        "tw.true": "green",
        "tw.false": "dim",
        "tw.timing": "yellow",
    }
)

_ORDER_STYLES: dict[str, str] = {
    "increasing": "tw.order.increasing",
    "equal": "tw.order.equal",
    "decreasing": "tw.order.decreasing",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=THREEWAY_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_order(order: str) -> str:
    """Return the Rich style name for an Order value."""
    return _ORDER_STYLES.get(order, "")
