"""Command: verify the ordering laws on sampled values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from threeway.commands._base import ThreewayCommand

if TYPE_CHECKING:
    from threeway.commands._context import AppContext


@click.command(
    cls=ThreewayCommand,
    examples="""\
  threeway laws
  threeway laws --samples 40 --seed 7
  threeway laws --depth 5
  threeway --json laws""",
)
@click.option("--samples", type=click.IntRange(min=1), default=None, help="Values per population.")
@click.option("--seed", type=int, default=None, help="Random seed for the samples.")
@click.option("--depth", type=click.IntRange(min=0), default=None, help="Depth of sampled pairs.")
@click.pass_obj
def laws(app: AppContext, samples: int | None, seed: int | None, depth: int | None) -> None:
    """Check totality, antisymmetry, transitivity and bridging.

    Exits with status 1 if any law is violated.
    """
    from threeway.services.laws import LawsService

    result = LawsService(app.settings).check(samples=samples, seed=seed, depth=depth)
    app.emit(result, exit_code=0 if result.data.get("healthy", True) else 1)
