"""Subcommand modules for postmeta.

Provides register_commands() which uses deferred imports to keep
``postmeta --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from postmeta.commands.new import new
    from postmeta.commands.show import show

    cli.add_command(new)
    cli.add_command(show)
