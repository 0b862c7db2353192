"""Subcommand modules for buildplan.

Provides register_commands() which uses deferred imports to keep
``buildplan --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from buildplan.commands.clean import clean
    from buildplan.commands.dirs import dirs
    from buildplan.commands.order import order
    from buildplan.commands.plan import plan
    from buildplan.commands.plugins import plugins
    from buildplan.commands.repos import repos
    from buildplan.commands.run import run, tasks

    cli.add_command(plan)
    cli.add_command(plugins)
    cli.add_command(repos)
    cli.add_command(dirs)
    cli.add_command(order)
    cli.add_command(tasks)
    cli.add_command(run)
    cli.add_command(clean)
