"""Project blueprint: module layout, marker set, and generator file templates.

The blueprint is data. Instruction documents are rendered from it, and the
phase detector probes the filesystem for the paths it lists, so neither has
to string-match large text blobs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from scaffoldctl.domain.names import collapse_name

DEFAULT_MODULES: tuple[str, ...] = ("app", "domain", "infrastructure", "common", "start")
DEFAULT_DESCRIPTOR = "pom.xml"
DEFAULT_NAMESPACE_ROOT = "com.xiaohongshu.sns"
ENTRY_POINT_MODULE = "start"

# Inter-module dependencies (module -> modules it depends on).
MODULE_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    "start": ("app",),
    "app": ("domain", "infrastructure"),
    "infrastructure": ("domain",),
    "domain": ("common",),
}


class GenerationStep(StrEnum):
    """Which conversation turn a file belongs to."""

    STRUCTURE = "structure"
    FILES = "files"


@dataclass(frozen=True)
class FileTemplate:
    """A file the external generator must produce.

    Attributes:
        path: Destination path relative to the project root. May contain
            ``{name}``, ``{collapsed}``, ``{module}`` and ``{package_path}``.
        template: Jinja2 template name under ``templates/files/``.
        order: Position in the instruction document.
        step: Generation step the file belongs to.
        module: Module the file belongs to (``None`` for root files).
    """

    path: str
    template: str
    order: int
    step: GenerationStep
    module: str | None = None


@dataclass(frozen=True)
class Blueprint:
    """Module layout for a generated project."""

    modules: tuple[str, ...] = DEFAULT_MODULES
    descriptor: str = DEFAULT_DESCRIPTOR
    namespace_root: str = DEFAULT_NAMESPACE_ROOT
    entry_point_module: str = ENTRY_POINT_MODULE

    def module_dir(self, name: str, module: str) -> str:
        return f"{name}-{module}"

    def module_dirs(self, name: str) -> list[str]:
        return [self.module_dir(name, m) for m in self.modules]

    def dependencies_of(self, module: str) -> list[str]:
        """Known dependencies of *module*, restricted to modules in this layout."""
        return [m for m in MODULE_DEPENDENCIES.get(module, ()) if m in self.modules]

    def package(self, name: str) -> str:
        """Dotted package for *name*, e.g. ``com.xiaohongshu.sns.myapp``."""
        return f"{self.namespace_root}.{collapse_name(name)}"

    def package_path(self, name: str) -> str:
        return self.package(name).replace(".", "/")

    # ------------------------------------------------------------------
    # File templates
    # ------------------------------------------------------------------

    def structure_templates(self) -> list[FileTemplate]:
        """Root descriptor followed by one descriptor per module."""
        templates = [
            FileTemplate(
                path=self.descriptor,
                template="root-descriptor.xml.j2",
                order=0,
                step=GenerationStep.STRUCTURE,
            )
        ]
        for index, module in enumerate(self.modules, start=1):
            templates.append(
                FileTemplate(
                    path=f"{{name}}-{module}/{self.descriptor}",
                    template="module-descriptor.xml.j2",
                    order=index,
                    step=GenerationStep.STRUCTURE,
                    module=module,
                )
            )
        return templates

    def file_templates(self) -> list[FileTemplate]:
        """Entry point source, readme, and ignore rules, in that order."""
        return [
            FileTemplate(
                path=(
                    f"{{name}}-{self.entry_point_module}/src/main/java/"
                    "{package_path}/Application.java"
                ),
                template="Application.java.j2",
                order=0,
                step=GenerationStep.FILES,
                module=self.entry_point_module,
            ),
            FileTemplate(
                path="README.md",
                template="README.md.j2",
                order=1,
                step=GenerationStep.FILES,
            ),
            FileTemplate(
                path=".gitignore",
                template="gitignore.j2",
                order=2,
                step=GenerationStep.FILES,
            ),
        ]

    def templates_for(self, step: GenerationStep) -> list[FileTemplate]:
        if step is GenerationStep.STRUCTURE:
            items = self.structure_templates()
        else:
            items = self.file_templates()
        return sorted(items, key=lambda t: t.order)

    def expand(self, template: FileTemplate, name: str) -> str:
        """Resolve a template path pattern for project *name*."""
        return template.path.format(
            name=name,
            collapsed=collapse_name(name),
            module=template.module or "",
            package_path=self.package_path(name),
        )

    def marker_paths(self, name: str) -> list[str]:
        """Relative descriptor paths whose presence marks structure completion."""
        return [self.expand(t, name) for t in self.templates_for(GenerationStep.STRUCTURE)]

    def file_paths(self, name: str) -> list[str]:
        return [self.expand(t, name) for t in self.templates_for(GenerationStep.FILES)]
