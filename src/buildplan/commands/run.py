"""Commands: list and run named tasks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildplan.commands._base import BuildCommand

if TYPE_CHECKING:
    from buildplan.commands._context import AppContext


@click.command(
    cls=BuildCommand,
    examples="""\
  buildplan run clean
  buildplan --json run clean""",
)
@click.argument("task_name")
@click.pass_obj
def run(app: AppContext, task_name: str) -> None:
    """Run a registered task by name."""
    from buildplan.services.tasks import TaskService

    app.emit(TaskService(app.project).run(task_name))


@click.command(
    cls=BuildCommand,
    examples="""\
  buildplan tasks
  buildplan -q tasks""",
)
@click.pass_obj
def tasks(app: AppContext) -> None:
    """List registered tasks."""
    from buildplan.services.tasks import TaskService

    app.emit(TaskService(app.project).list_tasks())
