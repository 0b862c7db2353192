"""Command: delete the relocated build directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildplan.commands._base import BuildCommand

if TYPE_CHECKING:
    from buildplan.commands._context import AppContext


@click.command(
    cls=BuildCommand,
    examples="""\
  buildplan clean
  buildplan -C android clean""",
)
@click.pass_obj
def clean(app: AppContext) -> None:
    """Delete the root build directory (no-op if already absent)."""
    from buildplan.services.tasks import TaskService

    app.emit(TaskService(app.project).run("clean"))
