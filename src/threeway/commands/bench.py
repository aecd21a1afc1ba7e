"""Command: time three-way against two-way classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from threeway.commands._base import ThreewayCommand
from threeway.services.bench import MODE_CHOICES

if TYPE_CHECKING:
    from threeway.commands._context import AppContext


@click.command(
    cls=ThreewayCommand,
    examples="""\
  threeway bench
  threeway bench --depth 10 --trials 3
  threeway bench --mode three-way --iterations 200
  threeway --json bench --depth 4
  threeway -v bench --depth 12""",
)
@click.option("--depth", type=click.IntRange(min=0), default=None, help="Pair nesting depth.")
@click.option("--trials", type=click.IntRange(min=1), default=None, help="Timed trials per mode.")
@click.option(
    "--iterations",
    type=click.IntRange(min=1),
    default=None,
    help="Classifications per trial.",
)
@click.option(
    "--mode",
    type=click.Choice(MODE_CHOICES),
    default=None,
    help="Which classification to time.",
)
@click.pass_obj
def bench(
    app: AppContext,
    depth: int | None,
    trials: int | None,
    iterations: int | None,
    mode: str | None,
) -> None:
    """Benchmark one compare() against < followed by == on nested pairs."""
    from threeway.services.bench import BenchService

    app.emit(
        BenchService(app.settings).run(
            depth=depth,
            trials=trials,
            iterations=iterations,
            mode=mode,
        )
    )
