"""Command: create a project by cloning the template."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from scaffoldctl.commands._base import ScaffoldCommand

if TYPE_CHECKING:
    from scaffoldctl.commands._context import AppContext

_CREATE_EXAMPLES = """\
  scaffoldctl create order-service
  scaffoldctl create billing --template ~/templates/sns-demo
  scaffoldctl create billing --into ~/work
  scaffoldctl --json create billing"""


@click.command("create", cls=ScaffoldCommand, examples=_CREATE_EXAMPLES)
@click.argument("name")
@click.option(
    "--template",
    "template",
    type=click.Path(path_type=Path),
    default=None,
    help="Template directory (overrides discovery).",
)
@click.option(
    "--into",
    "parent",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Parent directory for the new project (default: current directory).",
)
@click.pass_obj
def create(app: AppContext, name: str, template: Path | None, parent: Path | None) -> None:
    """Create project NAME from the template."""
    from scaffoldctl.services.scaffold import ScaffoldService

    service = ScaffoldService(app.settings, notify=app.notifier())
    app.emit(service.create_project(name.strip(), template=template, parent=parent))
