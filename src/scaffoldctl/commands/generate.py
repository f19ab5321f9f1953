"""Command: emit the next instruction document for an external generator."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from scaffoldctl.commands._base import ScaffoldCommand

if TYPE_CHECKING:
    from scaffoldctl.commands._context import AppContext

_GENERATE_EXAMPLES = """\
  scaffoldctl generate order-service
  scaffoldctl -q generate order-service > prompt.md
  scaffoldctl --json generate order-service --into ~/work"""


@click.command("generate", cls=ScaffoldCommand, examples=_GENERATE_EXAMPLES)
@click.argument("name")
@click.option(
    "--into",
    "parent",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Parent directory of the project (default: current directory).",
)
@click.pass_obj
def generate(app: AppContext, name: str, parent: Path | None) -> None:
    """Print generator instructions for the next phase of project NAME.

    The first run asks for the build descriptors. Once they all exist, the
    next run asks for the entry point, README and .gitignore.
    """
    from scaffoldctl.services.generate import GenerateService

    app.emit(GenerateService(app.settings).plan(name.strip(), parent=parent))
