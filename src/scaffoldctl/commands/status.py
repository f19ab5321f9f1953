"""Command: show which generation phase a project has reached."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from scaffoldctl.commands._base import ScaffoldCommand

if TYPE_CHECKING:
    from scaffoldctl.commands._context import AppContext

_STATUS_EXAMPLES = """\
  scaffoldctl status order-service
  scaffoldctl --json status order-service"""


@click.command("status", cls=ScaffoldCommand, examples=_STATUS_EXAMPLES)
@click.argument("name")
@click.option(
    "--into",
    "parent",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Parent directory of the project (default: current directory).",
)
@click.pass_obj
def status(app: AppContext, name: str, parent: Path | None) -> None:
    """Show the generation phase of project NAME."""
    from scaffoldctl.services.generate import GenerateService

    app.emit(GenerateService(app.settings).status(name.strip(), parent=parent))
