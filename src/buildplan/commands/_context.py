"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy BuildProject resolution and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildplan.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from buildplan.config.settings import BuildPlanSettings
    from buildplan.infrastructure.project import BuildProject
    from buildplan.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. The project is resolved
    lazily on first use so ``--help`` and ``--version`` never read the
    filesystem beyond config discovery.
    """

    def __init__(self, settings: BuildPlanSettings) -> None:
        self.settings = settings
        self._project: BuildProject | None = None

        from buildplan.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from buildplan.services.timing import enable_timing

            enable_timing()

    @property
    def project(self) -> BuildProject:
        """The resolved project (created lazily on first access).

        A configuration-load failure aborts the command with exit code 1.
        """
        if self._project is None:
            from pydantic import ValidationError

            from buildplan.domain.paths import PlanError
            from buildplan.infrastructure.project import BuildProject

            try:
                self._project = BuildProject(self.settings)
            except (PlanError, ValidationError) as exc:
                msg = f"Configuration load failed: {exc}"
                raise click.ClickException(msg) from exc
        return self._project

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
