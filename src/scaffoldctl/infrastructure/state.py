"""Phase detection and the persisted phase record.

Probing answers "which descriptor files exist right now". The phase record
remembers the furthest phase a project has reached, so deleting one marker
file after structure generation does not send the generator back to the
beginning. Probing remains the fallback when no record exists, and it always
decides which files are still to be generated.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from scaffoldctl.domain.blueprint import Blueprint
from scaffoldctl.domain.phase import Phase, PhaseRecord, PhaseState

logger = logging.getLogger(__name__)

STATE_DIR = ".scaffoldctl"
PHASE_FILE = "phase.json"


def detect_phase(dest: Path, name: str, blueprint: Blueprint) -> PhaseState:
    """Probe *dest* for the blueprint's marker and phase-two files.

    Pure read; safe to call any number of times.
    """
    missing_markers = [p for p in blueprint.marker_paths(name) if not (dest / p).is_file()]
    missing_files = [p for p in blueprint.file_paths(name) if not (dest / p).is_file()]
    return PhaseState(
        structure_complete=not missing_markers,
        files_complete=not missing_files,
        missing_markers=missing_markers,
        missing_files=missing_files,
    )


class PhaseStore:
    """Read and atomically write ``<dest>/.scaffoldctl/phase.json``."""

    def __init__(self, dest: Path) -> None:
        self.path = dest / STATE_DIR / PHASE_FILE

    def load(self) -> PhaseRecord | None:
        """Return the stored record, or None if absent.

        Raises:
            ValueError: If the record exists but cannot be parsed.
        """
        if not self.path.is_file():
            return None
        raw = self.path.read_text(encoding="utf-8")
        try:
            return PhaseRecord.model_validate_json(raw)
        except ValidationError as exc:
            msg = f"Corrupt phase record at {self.path}: {exc.error_count()} error(s)"
            raise ValueError(msg) from exc

    def save(self, record: PhaseRecord) -> None:
        """Write *record* via a temp file and ``os.replace``."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".phase-", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(record.model_dump_json(indent=2))
                fh.write("\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Phase record written: %s -> %s", record.project, record.phase)


@dataclass
class ResolvedPhase:
    """Effective phase after reconciling the record with the probe."""

    phase: Phase
    probe: PhaseState
    record: PhaseRecord | None
    warnings: list[str] = field(default_factory=list)


def resolve_phase(
    dest: Path,
    name: str,
    blueprint: Blueprint,
    *,
    store: PhaseStore | None = None,
    now: str,
    persist: bool = True,
) -> ResolvedPhase:
    """Reconcile the stored phase record with a fresh filesystem probe.

    - No (usable) record: the probe decides.
    - Record behind the probe: the record is advanced to the probed phase.
    - Record ahead of the probe: the record is kept and the missing files
      are reported as warnings.

    With ``persist=False`` nothing is written; the returned record is
    whatever was stored.
    """
    store = store or PhaseStore(dest)
    probe = detect_phase(dest, name, blueprint)
    warnings: list[str] = []

    record: PhaseRecord | None = None
    try:
        record = store.load()
    except (OSError, ValueError) as exc:
        warnings.append(f"Ignoring phase record: {exc}")

    if record is not None and record.project != name:
        warnings.append(
            f"Ignoring phase record for project {record.project!r} (expected {name!r})"
        )
        record = None

    phase = probe.phase
    if record is not None and record.phase.rank > probe.phase.rank:
        phase = record.phase
        if not probe.structure_complete:
            warnings.append(
                f"Phase record says {record.phase} but marker file(s) are missing: "
                + ", ".join(probe.missing_markers)
            )
        elif record.phase is Phase.FULLY_COMPLETE and not probe.files_complete:
            warnings.append(
                f"Phase record says {record.phase} but file(s) are missing: "
                + ", ".join(probe.missing_files)
            )

    advance = record is None or probe.phase.rank > record.phase.rank
    if persist and advance and probe.phase is not Phase.NOT_STARTED and dest.is_dir():
        record = PhaseRecord(project=name, phase=probe.phase, updated=now)
        try:
            store.save(record)
        except OSError as exc:
            warnings.append(f"Could not write phase record: {exc}")

    return ResolvedPhase(phase=phase, probe=probe, record=record, warnings=warnings)
