"""Subcommand modules for graphctl.

Provides register_commands() which uses deferred imports to keep
``graphctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    2 groups (have subcommands) + 2 standalone commands.
    """
    # --- Groups ---
    from graphctl.commands.analyze import analyze
    from graphctl.commands.traverse import traverse

    cli.add_command(traverse)
    cli.add_command(analyze)

    # --- Standalone commands ---
    from graphctl.commands.export import export
    from graphctl.commands.report import report

    cli.add_command(report)
    cli.add_command(export)
