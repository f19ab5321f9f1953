"""Output mode dispatch: JSON, quiet, or Rich-rendered text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from scaffoldctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from scaffoldctl.services.result import ServiceResult, StatusMessage


class OutputSettings(BaseModel):
    """Output flags relevant to formatting."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    When *settings* is given it wins over the bare *json_output* flag.
    """
    settings = settings or OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)


def format_status(message: StatusMessage) -> str:
    """One-line rendering of a progress notice: ``[timestamp] kind: text``."""
    return f"[{message.timestamp}] {message.kind}: {message.text}"
