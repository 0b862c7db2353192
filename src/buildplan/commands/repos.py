"""Command: list repository mirrors in resolution order."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildplan.commands._base import BuildCommand
from buildplan.domain.types import RepositoryScope

if TYPE_CHECKING:
    from buildplan.commands._context import AppContext


@click.command(
    cls=BuildCommand,
    examples="""\
  buildplan repos
  buildplan repos --scope plugins
  buildplan repos --project app
  buildplan -q repos""",
)
@click.option(
    "--scope",
    type=click.Choice([s.value for s in RepositoryScope]),
    default=RepositoryScope.DEPENDENCIES.value,
    help="Plugin resolution or dependency resolution mirrors.",
)
@click.option("--project", default=None, help="Merge in a subproject's own mirrors.")
@click.pass_obj
def repos(app: AppContext, scope: str, project: str | None) -> None:
    """List repository mirrors; first match wins when fetching."""
    from buildplan.services.plan import PlanService

    app.emit(PlanService(app.project).repositories(RepositoryScope(scope), project=project))
