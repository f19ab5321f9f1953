"""Template root resolution via an ordered chain of candidate providers.

The CLI has to work the same from a source checkout, an installed wheel, or a
bundled executable, without the user pointing at the template explicitly.
Each candidate is a ``(label, resolver)`` pair; the first resolved path that
is an existing directory wins.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

BUNDLED_TEMPLATE_DIR = "template"

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class TemplateCandidate:
    """A named provider of a possible template location."""

    label: str
    resolve: Callable[[], Path | None]


def _fixed(path: Path) -> Callable[[], Path | None]:
    return lambda: path


def default_candidates(
    placeholder: str,
    *,
    cwd: Path | None = None,
    executable: str | None = None,
) -> list[TemplateCandidate]:
    """Build the default probe order.

    1. Development workspace: ``<cwd>/<placeholder>``
    2. Development tree: ``<repo root>/<placeholder>``
    3. Packaged bundle: ``scaffoldctl/template``
    4. Executable-relative: ``template``, ``../template``, ``../lib/template``
    """
    base = cwd or Path.cwd()
    exe_dir = Path(executable or sys.argv[0]).resolve().parent

    return [
        TemplateCandidate("workspace", _fixed(base / placeholder)),
        TemplateCandidate("source-tree", _fixed(_PACKAGE_DIR.parent.parent / placeholder)),
        TemplateCandidate("bundle", _fixed(_PACKAGE_DIR / BUNDLED_TEMPLATE_DIR)),
        TemplateCandidate("executable", _fixed(exe_dir / BUNDLED_TEMPLATE_DIR)),
        TemplateCandidate(
            "executable-parent", _fixed(exe_dir.parent / BUNDLED_TEMPLATE_DIR)
        ),
        TemplateCandidate(
            "executable-lib", _fixed(exe_dir.parent / "lib" / BUNDLED_TEMPLATE_DIR)
        ),
    ]


def locate_template(
    candidates: Sequence[TemplateCandidate],
    fallback: Path,
    *,
    exists: Callable[[Path], bool] = Path.is_dir,
) -> Path:
    """Return the first candidate path that exists, else *fallback*.

    The fallback is returned unchecked; callers detect it as missing and
    report a configuration error naming it.
    """
    for candidate in candidates:
        path = candidate.resolve()
        if path is None:
            continue
        if exists(path):
            logger.debug("Template resolved via %s: %s", candidate.label, path)
            return path
        logger.debug("Template candidate %s not found: %s", candidate.label, path)
    logger.debug("No template candidate found, falling back to %s", fallback)
    return fallback
