"""Shared pytest fixtures and test helpers for scaffoldctl tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from scaffoldctl.config.settings import ScaffoldSettings
from scaffoldctl.domain.blueprint import Blueprint
from scaffoldctl.services.telemetry import disable_telemetry

PLACEHOLDER = "sns-demo"

ROOT_POM = """\
<project>
    <groupId>com.xiaohongshu.sns</groupId>
    <artifactId>sns-demo-parent</artifactId>
    <name>sns-demo</name>
    <modules>
        <module>sns-demo-app</module>
        <module>sns-demo-start</module>
    </modules>
</project>
"""

APP_POM = """\
<project>
    <parent>
        <artifactId>sns-demo-parent</artifactId>
    </parent>
    <artifactId>sns-demo-app</artifactId>
    <name>sns-demo-app</name>
</project>
"""

APPLICATION_JAVA = """\
package com.xiaohongshu.sns.demo;

public class Application {
}
"""


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """The -v flag enables telemetry for the whole process; switch it back off."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working directory; CWD is switched to it for the test."""
    ws = tmp_path / "workspace"
    ws.mkdir()
    monkeypatch.chdir(ws)
    monkeypatch.delenv("SCAFFOLDCTL_CONFIG", raising=False)
    return ws


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A small template tree: 5 files in 7 directories.

    This is the single source of truth for the template layout used by
    cloner, service, and command tests.
    """
    root = tmp_path / "templates" / PLACEHOLDER
    (root / "sns-demo-app").mkdir(parents=True)
    java_dir = root / "sns-demo-start" / "src" / "main" / "java" / "demo"
    java_dir.mkdir(parents=True)
    (root / "sns-demo-start" / "src" / "main" / "resources").mkdir(parents=True)

    (root / "pom.xml").write_text(ROOT_POM, encoding="utf-8")
    (root / "README.md").write_text("# sns-demo\n\nSee sns-demo-app.\n", encoding="utf-8")
    (root / "sns-demo-app" / "pom.xml").write_text(APP_POM, encoding="utf-8")
    (java_dir / "Application.java").write_text(APPLICATION_JAVA, encoding="utf-8")
    (root / "sns-demo-start" / "src" / "main" / "resources" / "application.yml").write_text(
        "spring.application.name: sns-demo\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def settings(workspace: Path) -> ScaffoldSettings:
    """Settings rooted at the temporary workspace."""
    return ScaffoldSettings.from_cli(workspace=workspace)


@pytest.fixture
def blueprint() -> Blueprint:
    return Blueprint()


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_files(root: Path, paths: list[str], content: str = "x\n") -> None:
    """Create each relative path under *root* with *content*."""
    for rel in paths:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def tree_shape(root: Path) -> tuple[list[str], list[str]]:
    """Sorted relative (files, dirs) under *root*."""
    files = sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())
    dirs = sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_dir())
    return files, dirs
