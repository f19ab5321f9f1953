"""GenerateService — drive an external generator through two phases.

Phase one asks for the build descriptors (root + one per module). Phase two
asks for the entry-point source, the README, and the ignore rules. The
service never writes project files itself: it inspects the destination,
keeps the phase record current, and emits an instruction document.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from scaffoldctl.domain.blueprint import FileTemplate, GenerationStep
from scaffoldctl.domain.phase import Phase
from scaffoldctl.infrastructure.state import ResolvedPhase, resolve_phase
from scaffoldctl.infrastructure.templates import build_template_environment
from scaffoldctl.services._helpers import now_iso
from scaffoldctl.services.base import BaseService
from scaffoldctl.services.result import ServiceResult
from scaffoldctl.services.telemetry import trace_span, traced

_LANGUAGES: dict[str, str] = {
    ".xml": "xml",
    ".java": "java",
    ".md": "markdown",
}

_INSTRUCTION_TEMPLATES: dict[GenerationStep, str] = {
    GenerationStep.STRUCTURE: "structure.md.j2",
    GenerationStep.FILES: "files.md.j2",
}


def _language(path: str) -> str:
    return _LANGUAGES.get(Path(path).suffix, "text")


class GenerateService(BaseService):
    """Emits phase-appropriate instructions for an external generator."""

    @traced
    def plan(self, name: str, *, parent: Path | None = None) -> ServiceResult:
        """Build the instruction document for the next phase of *name*."""
        op = "generate_instructions"

        invalid = self._check_name(op, name)
        if invalid is not None:
            return invalid

        dest = self._destination(name, parent)
        with trace_span("resolve_phase"):
            resolved = resolve_phase(dest, name, self.blueprint, now=now_iso())

        data: dict[str, Any] = {
            "project": name,
            "path": str(dest),
            "phase": str(resolved.phase),
        }
        probe = resolved.probe
        if probe.phase is Phase.FULLY_COMPLETE:
            data.update({"complete": True, "step": None, "files": [], "instructions": ""})
            return ServiceResult(ok=True, op=op, data=data, warnings=resolved.warnings)

        # A record ahead of the probe means files went missing after a phase
        # was done: ask only for those instead of starting the phase over.
        repair = resolved.phase.rank > probe.phase.rank
        if not probe.structure_complete:
            step = GenerationStep.STRUCTURE
            missing = probe.missing_markers
        else:
            step = GenerationStep.FILES
            missing = probe.missing_files
        with trace_span("render"):
            files = self._render_files(name, step, only=set(missing) if repair else None)
            instructions = self._render_instructions(name, dest, step, files, repair=repair)

        data.update(
            {
                "complete": False,
                "step": str(step),
                "files": [f["path"] for f in files],
                "repair": repair,
                "instructions": instructions,
            }
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=resolved.warnings)

    @traced
    def status(self, name: str, *, parent: Path | None = None) -> ServiceResult:
        """Report the phase of *name* without emitting instructions."""
        op = "phase_status"

        invalid = self._check_name(op, name)
        if invalid is not None:
            return invalid

        dest = self._destination(name, parent)
        resolved = resolve_phase(dest, name, self.blueprint, now=now_iso(), persist=False)
        return ServiceResult(
            ok=True,
            op=op,
            data=self._status_data(name, dest, resolved),
            warnings=resolved.warnings,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _status_data(name: str, dest: Path, resolved: ResolvedPhase) -> dict[str, Any]:
        probe = resolved.probe
        return {
            "project": name,
            "path": str(dest),
            "exists": dest.is_dir(),
            "phase": str(resolved.phase),
            "structure_complete": probe.structure_complete,
            "files_complete": probe.files_complete,
            "missing_markers": probe.missing_markers,
            "missing_files": probe.missing_files,
            "recorded_phase": str(resolved.record.phase) if resolved.record else None,
        }

    def _context(self, name: str) -> dict[str, Any]:
        blueprint = self.blueprint
        return {
            "name": name,
            "package": blueprint.package(name),
            "group_id": blueprint.namespace_root,
            "descriptor": blueprint.descriptor,
            "modules": [
                {"name": m, "dir": blueprint.module_dir(name, m)} for m in blueprint.modules
            ],
        }

    def _render_files(
        self, name: str, step: GenerationStep, *, only: set[str] | None = None
    ) -> list[dict[str, str]]:
        """Render each file template of *step* into ``{path, lang, body}``.

        With *only*, templates whose expanded path is not in it are skipped.
        """
        env = build_template_environment("files", workspace=self._settings.workspace)
        blueprint = self.blueprint
        base = self._context(name)
        rendered: list[dict[str, str]] = []
        for tpl in blueprint.templates_for(step):
            path = blueprint.expand(tpl, name)
            if only is not None and path not in only:
                continue
            body = env.get_template(tpl.template).render(**base, **self._file_context(name, tpl))
            rendered.append({"path": path, "lang": _language(path), "body": body})
        return rendered

    def _file_context(self, name: str, tpl: FileTemplate) -> dict[str, Any]:
        if tpl.module is None:
            return {"module": None, "module_dir": None, "depends_on": []}
        blueprint = self.blueprint
        return {
            "module": tpl.module,
            "module_dir": blueprint.module_dir(name, tpl.module),
            "depends_on": [
                blueprint.module_dir(name, dep) for dep in blueprint.dependencies_of(tpl.module)
            ],
        }

    def _render_instructions(
        self,
        name: str,
        dest: Path,
        step: GenerationStep,
        files: list[dict[str, str]],
        *,
        repair: bool = False,
    ) -> str:
        env = build_template_environment("instructions", workspace=self._settings.workspace)
        template = env.get_template(_INSTRUCTION_TEMPLATES[step])
        return template.render(
            **self._context(name), root=str(dest), files=files, repair=repair
        )
