"""ScaffoldService — create a project by cloning a template tree.

Pipeline: VALIDATE → LOCATE → CHECK DESTINATION → CLONE → RESPOND
Each step is terminal on failure. Nothing touches the filesystem before the
name is validated, and a failed clone leaves no destination behind.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from scaffoldctl.infrastructure.cloner import clone_tree
from scaffoldctl.infrastructure.locator import default_candidates, locate_template
from scaffoldctl.services._helpers import error_text
from scaffoldctl.services.base import BaseService
from scaffoldctl.services.result import ServiceError, ServiceResult
from scaffoldctl.services.telemetry import trace_span, traced


class ScaffoldService(BaseService):
    """Clones the configured template into a new project directory."""

    def locate(self, *, template: Path | None = None) -> Path:
        """Resolve the template root.

        An explicit path (``--template`` or ``[template] path``) is returned
        as-is so a typo surfaces as TEMPLATE_MISSING instead of silently
        falling through to another template.
        """
        explicit = template or self._settings.template_path
        if explicit is not None:
            return explicit
        cfg = self._settings.template
        workspace = self._settings.workspace
        candidates = default_candidates(cfg.placeholder, cwd=workspace)
        return locate_template(candidates, fallback=workspace / cfg.placeholder)

    @traced
    def create_project(
        self,
        name: str,
        *,
        template: Path | None = None,
        parent: Path | None = None,
    ) -> ServiceResult:
        """Create project *name* under *parent* (default: the workspace)."""
        op = "create_project"

        invalid = self._check_name(op, name)
        if invalid is not None:
            return invalid

        with trace_span("locate"):
            template_root = self.locate(template=template)
        if not template_root.is_dir():
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="TEMPLATE_MISSING",
                    message=f"Template not found: {template_root}",
                    detail={
                        "path": str(template_root),
                        "hint": (
                            f"Place a '{self._settings.template.placeholder}' template in "
                            "the workspace or set [template] path in scaffoldctl.toml."
                        ),
                    },
                ),
            )

        dest = self._destination(name, parent)
        if dest.exists():
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="DESTINATION_EXISTS",
                    message=f"Project directory already exists: {dest}",
                    detail={"path": str(dest)},
                ),
            )

        self._notify("info", f"Creating project {name}...")
        cfg = self._settings.template
        try:
            with trace_span("clone") as span:
                report = clone_tree(
                    template_root,
                    dest,
                    cfg.placeholder,
                    name,
                    namespace=cfg.namespace,
                    service_key=cfg.service_key,
                )
                if span:
                    span.annotate("files", len(report.files))
        except Exception as exc:
            return self._fail_clone(op, name, dest, exc)

        layout = self._layout(name, report.dirs, report.files)
        self._notify("success", f"Project {name} created at {dest}: " + ", ".join(layout))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "project": name,
                "path": str(dest),
                "template": str(template_root),
                "modules": layout,
                "files_created": report.files,
                "dirs_created": report.dirs,
            },
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _layout(self, name: str, dirs: list[str], files: list[str]) -> list[str]:
        """Top-level entries of the new project, modules first."""
        top_dirs = [d for d in dirs if "/" not in d]
        top_files = [f for f in files if "/" not in f]
        expected = self.blueprint.module_dirs(name)
        modules = [d for d in expected if d in top_dirs]
        others = [d for d in top_dirs if d not in modules]
        return [f"{d}/" for d in modules + others] + top_files

    def _fail_clone(
        self,
        op: str,
        name: str,
        dest: Path,
        exc: BaseException,
    ) -> ServiceResult:
        """Remove the partial destination and report the original failure."""
        warnings: list[str] = []
        detail: dict[str, str] = {"path": str(dest), "exception": type(exc).__name__}
        if dest.exists():
            try:
                shutil.rmtree(dest)
            except OSError as cleanup_exc:
                reason = error_text(cleanup_exc)
                warnings.append(f"CLEANUP_FAILED: could not remove {dest}: {reason}")
                detail["cleanup_error"] = reason
        message = f"Failed to create project {name}: {error_text(exc)}"
        self._notify("error", message)
        return ServiceResult(
            ok=False,
            op=op,
            warnings=warnings,
            error=ServiceError(code="CLONE_FAILED", message=message, detail=detail),
        )
