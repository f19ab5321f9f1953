"""Recursive template cloning with token rewriting.

INVARIANT: The source tree is never written to.

I/O errors (unreadable source, unwritable destination, disk exhaustion) are
not caught here. The caller owns the destination and discards it wholesale on
failure; a clone is never resumed or patched up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from scaffoldctl.domain.rewrite import DEFAULT_SERVICE_KEY, rewrite_content, rewrite_name

logger = logging.getLogger(__name__)


@dataclass
class CloneReport:
    """Paths created by a clone, relative to the destination root."""

    files: list[str] = field(default_factory=list)
    dirs: list[str] = field(default_factory=list)


def clone_tree(
    src: Path,
    dest: Path,
    placeholder: str,
    target: str,
    *,
    namespace: str | None = None,
    service_key: str = DEFAULT_SERVICE_KEY,
) -> CloneReport:
    """Copy *src* into *dest*, rewriting names and contents.

    Entries are visited depth-first in sorted order so output is
    deterministic. Directories are created with ``parents=True,
    exist_ok=True``.
    """
    report = CloneReport()
    dest.mkdir(parents=True, exist_ok=True)
    _clone_dir(
        src,
        dest,
        dest,
        placeholder,
        target,
        namespace=namespace,
        service_key=service_key,
        report=report,
    )
    return report


def _clone_dir(
    src_dir: Path,
    dest_dir: Path,
    root: Path,
    placeholder: str,
    target: str,
    *,
    namespace: str | None,
    service_key: str,
    report: CloneReport,
) -> None:
    for entry in sorted(src_dir.iterdir(), key=lambda p: p.name):
        dest_path = dest_dir / rewrite_name(entry.name, placeholder, target)
        if entry.is_dir():
            dest_path.mkdir(parents=True, exist_ok=True)
            report.dirs.append(dest_path.relative_to(root).as_posix())
            _clone_dir(
                entry,
                dest_path,
                root,
                placeholder,
                target,
                namespace=namespace,
                service_key=service_key,
                report=report,
            )
        elif entry.is_file():
            copy_and_rewrite_file(
                entry,
                dest_path,
                placeholder,
                target,
                namespace=namespace,
                service_key=service_key,
            )
            report.files.append(dest_path.relative_to(root).as_posix())
        else:
            logger.debug("Skipping non-regular template entry: %s", entry)


def copy_and_rewrite_file(
    src_file: Path,
    dest_file: Path,
    placeholder: str,
    target: str,
    *,
    namespace: str | None = None,
    service_key: str = DEFAULT_SERVICE_KEY,
) -> None:
    """Read *src_file*, rewrite its content, and write it to *dest_file*.

    Bytes are decoded as UTF-8 without newline translation, so line endings
    survive the copy. Files that are not valid UTF-8 (jars, images) are
    copied byte for byte with no rewriting.
    """
    dest_file.parent.mkdir(parents=True, exist_ok=True)
    raw = src_file.read_bytes()
    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Copying non-UTF-8 file verbatim: %s", src_file)
        dest_file.write_bytes(raw)
        return
    rewritten = rewrite_content(
        content,
        placeholder,
        target,
        namespace=namespace,
        service_key=service_key,
    )
    dest_file.write_bytes(rewritten.encode("utf-8"))
