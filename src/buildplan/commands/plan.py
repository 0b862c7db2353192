"""Command: show the fully resolved build configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildplan.commands._base import BuildCommand

if TYPE_CHECKING:
    from buildplan.commands._context import AppContext


@click.command(
    cls=BuildCommand,
    examples="""\
  buildplan plan
  buildplan --json plan
  buildplan -C android --json plan""",
)
@click.pass_obj
def plan(app: AppContext) -> None:
    """Show plugins, mirrors, build directories and evaluation constraints."""
    from buildplan.services.plan import PlanService

    app.emit(PlanService(app.project).plan())
