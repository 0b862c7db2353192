"""Root CLI group for buildplan with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError

from buildplan import __version__
from buildplan.commands import register_commands
from buildplan.commands._base import BuildGroup
from buildplan.commands._context import AppContext
from buildplan.config.settings import BuildPlanSettings


@click.group(cls=BuildGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="buildplan")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-C",
    "--project-dir",
    "project_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: directory of buildplan.toml, else CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    project_dir: Path | None,
) -> None:
    """buildplan: resolve multi-module build configuration."""
    ctx.ensure_object(dict)
    try:
        settings = BuildPlanSettings.from_cli(
            config_path=config_path,
            project_root=project_dir,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc}"
        raise click.ClickException(msg) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
