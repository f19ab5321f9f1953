"""Rich Console factory and theme for scaffoldctl output.

Consoles render into a StringIO buffer so renderers keep a ``-> str``
contract. In non-TTY environments (tests, pipes) Rich drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SCAFFOLD_THEME = Theme(
    {
        "sc.ok": "bold green",
        "sc.error": "bold red",
        "sc.warning": "bold yellow",
        "sc.op": "bold cyan",
        "sc.key": "dim",
        "sc.path": "dim",
        "sc.project": "bold blue",
        "sc.module": "green",
        "sc.phase.not-started": "yellow",
        "sc.phase.structure-complete": "cyan",
        "sc.phase.fully-complete": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SCAFFOLD_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_phase(phase: str) -> str:
    return f"sc.phase.{phase}"
