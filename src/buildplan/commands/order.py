"""Command: show project evaluation order."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildplan.commands._base import BuildCommand

if TYPE_CHECKING:
    from buildplan.commands._context import AppContext


@click.command(
    cls=BuildCommand,
    examples="""\
  buildplan order
  buildplan -q order""",
)
@click.pass_obj
def order(app: AppContext) -> None:
    """Show the order in which projects are configured (fails on cycles)."""
    from buildplan.services.evaluation import EvaluationService

    app.emit(EvaluationService(app.project).order())
