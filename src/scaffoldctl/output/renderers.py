"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.text import Text
from rich.tree import Tree

from scaffoldctl.output.console import create_console, get_output, style_for_phase

if TYPE_CHECKING:
    from rich.console import Console

    from scaffoldctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Instruction results print the bare document so it can be piped to the
    generator.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "generate_instructions" and result.data.get("instructions"):
        return str(result.data["instructions"]).rstrip("\n")
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="sc.ok"), Text(f"  {result.op}", style="sc.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="sc.key")
    if key == "project":
        v = Text(str(value), style="sc.project")
    elif key in ("path", "template"):
        v = Text(str(value), style="sc.path")
    elif key == "phase":
        v = Text(str(value), style=style_for_phase(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "green" if duration < 100 else "yellow" if duration < 1000 else "red"
    line = Text(" " * indent)
    line.append(str(span.get("name", "?")))
    line.append(f"  {duration:.2f}ms", style=style)
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 2)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="sc.error"),
        Text(f"  {result.op}", style="sc.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )
    if err and err.detail.get("hint"):
        console.print(Text(f"  {err.detail['hint']}", style="dim"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Scaffold renderers ───────────────────────────────────────────────


def _render_create(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create_project results with the generated module layout."""
    _status_line(console, result)
    d = result.data
    for key in ("project", "path", "template"):
        if key in d:
            _field(console, key, d[key])
    _field(console, "files_created", len(d.get("files_created", [])))

    tree = Tree(Text(f"{d.get('project', '?')}/", style="sc.project"))
    for entry in d.get("modules", []):
        style = "sc.module" if entry.endswith("/") else ""
        tree.add(Text(entry, style=style))
    console.print()
    console.print(tree)

    if verbose:
        for f in d.get("files_created", []):
            console.print(Text(f"    {f}"))
        _render_meta(console, result)


def _render_instructions(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render the instruction document for the external generator."""
    _status_line(console, result)
    d = result.data
    for key in ("project", "phase"):
        _field(console, key, d.get(key))
    if d.get("complete"):
        console.print(Text("  Project is complete. Nothing left to generate.", style="sc.ok"))
    else:
        _field(console, "files", len(d.get("files", [])))
        console.print()
        console.print(Text(str(d.get("instructions", "")).rstrip("\n")), soft_wrap=True)
    if verbose:
        _render_meta(console, result)


def _render_phase_status(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("project", "path", "phase", "recorded_phase"):
        if d.get(key) is not None:
            _field(console, key, d[key])
    for key in ("missing_markers", "missing_files"):
        missing = d.get(key) or []
        if missing:
            _field(console, key, len(missing))
            for path in missing:
                console.print(Text(f"    {path}", style="sc.warning"))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "create_project": _render_create,
    "generate_instructions": _render_instructions,
    "phase_status": _render_phase_status,
}
