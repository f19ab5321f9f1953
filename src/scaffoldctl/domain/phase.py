"""Generation phases for the generator-driven workflow.

Phases advance strictly: not-started → structure-complete → fully-complete.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class Phase(StrEnum):
    NOT_STARTED = "not-started"
    STRUCTURE_COMPLETE = "structure-complete"
    FULLY_COMPLETE = "fully-complete"

    @property
    def rank(self) -> int:
        return _PHASE_ORDER.index(self)


_PHASE_ORDER: list[Phase] = [Phase.NOT_STARTED, Phase.STRUCTURE_COMPLETE, Phase.FULLY_COMPLETE]


class PhaseState(BaseModel):
    """Result of probing a destination tree for expected files."""

    model_config = {"frozen": True}

    structure_complete: bool
    files_complete: bool = False
    missing_markers: list[str] = Field(default_factory=list)
    missing_files: list[str] = Field(default_factory=list)

    @property
    def phase(self) -> Phase:
        if not self.structure_complete:
            return Phase.NOT_STARTED
        if not self.files_complete:
            return Phase.STRUCTURE_COMPLETE
        return Phase.FULLY_COMPLETE


class PhaseRecord(BaseModel):
    """Persisted phase marker stored inside the destination tree."""

    model_config = {"frozen": True}

    project: str
    phase: Phase
    updated: str
