"""Shared Jinja2 template loading with per-workspace override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
)

OVERRIDE_DIR = Path(".scaffoldctl") / "templates"


def build_template_environment(group: str, *, workspace: Path | None = None) -> Environment:
    """Build a Jinja2 environment with workspace overrides before packaged defaults.

    Overrides are loaded from ``.scaffoldctl/templates/`` in the workspace,
    either namespaced (``.scaffoldctl/templates/files/``) or flat.
    """

    loaders: list[BaseLoader] = []
    if workspace is not None:
        template_root = workspace / OVERRIDE_DIR
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("scaffoldctl", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
