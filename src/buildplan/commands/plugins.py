"""Command: list declared plugins."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildplan.commands._base import BuildCommand

if TYPE_CHECKING:
    from buildplan.commands._context import AppContext


@click.command(
    cls=BuildCommand,
    examples="""\
  buildplan plugins
  buildplan -q plugins""",
)
@click.pass_obj
def plugins(app: AppContext) -> None:
    """List plugins declared at the root project."""
    from buildplan.services.plan import PlanService

    app.emit(PlanService(app.project).plugins())
