"""Command: show the relocated build directories."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildplan.commands._base import BuildCommand

if TYPE_CHECKING:
    from buildplan.commands._context import AppContext


@click.command(
    cls=BuildCommand,
    examples="""\
  buildplan dirs
  buildplan --json dirs""",
)
@click.pass_obj
def dirs(app: AppContext) -> None:
    """Show the root build directory and each subproject's build directory."""
    from buildplan.services.plan import PlanService

    app.emit(PlanService(app.project).build_dirs())
