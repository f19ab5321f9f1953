"""Subcommand modules for scaffoldctl.

Provides register_commands() which uses deferred imports to keep
``scaffoldctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from scaffoldctl.commands.create import create
    from scaffoldctl.commands.generate import generate
    from scaffoldctl.commands.status import status

    cli.add_command(create)
    cli.add_command(generate)
    cli.add_command(status)
