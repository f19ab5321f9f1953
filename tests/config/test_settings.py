"""Tests for unified settings: CLI flags, env vars and TOML."""

from __future__ import annotations

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from scaffoldctl.config.models import LayoutConfig, TemplateConfig
from scaffoldctl.config.settings import ScaffoldSettings


class TestDefaults:
    def test_no_config_file(self, workspace: Path) -> None:
        settings = ScaffoldSettings.from_cli(workspace=workspace)
        assert settings.workspace == workspace
        assert settings.config_path is None
        assert settings.template.placeholder == "sns-demo"
        assert settings.template.namespace == "com.xiaohongshu.sns.demo"
        assert settings.template.service_key == "spring.application.name"
        assert settings.layout.modules == ("app", "domain", "infrastructure", "common", "start")
        assert settings.template_path is None

    def test_cli_flags(self, workspace: Path) -> None:
        settings = ScaffoldSettings.from_cli(workspace=workspace, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True
        assert settings.quiet is False


class TestToml:
    def test_sections_loaded(self, workspace: Path) -> None:
        (workspace / "scaffoldctl.toml").write_text(
            '[template]\nplaceholder = "acme-base"\n\n[layout]\ndescriptor = "build.xml"\n'
        )
        settings = ScaffoldSettings.from_cli(workspace=workspace)
        assert settings.template.placeholder == "acme-base"
        assert settings.layout.descriptor == "build.xml"
        assert settings.config_path is not None

    def test_walk_up_discovery(self, workspace: Path) -> None:
        (workspace / "scaffoldctl.toml").write_text('[template]\nplaceholder = "up"\n')
        nested = workspace / "a" / "b"
        nested.mkdir(parents=True)
        assert ScaffoldSettings.from_cli(workspace=nested).template.placeholder == "up"

    def test_explicit_config_path(self, workspace: Path, tmp_path: Path) -> None:
        cfg = tmp_path / "elsewhere.toml"
        cfg.write_text('[template]\nplaceholder = "explicit"\n')
        settings = ScaffoldSettings.from_cli(config_path=str(cfg), workspace=workspace)
        assert settings.template.placeholder == "explicit"

    def test_invalid_toml_is_click_error(self, workspace: Path) -> None:
        (workspace / "scaffoldctl.toml").write_text("[template\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ScaffoldSettings.from_cli(workspace=workspace)

    def test_relative_template_path_resolves_against_config(self, workspace: Path) -> None:
        sub = workspace / "conf"
        sub.mkdir()
        cfg = sub / "scaffoldctl.toml"
        cfg.write_text('[template]\npath = "../templates/base"\n')
        settings = ScaffoldSettings.from_cli(config_path=str(cfg), workspace=workspace)
        assert settings.template_path == sub / "../templates/base"

    def test_absolute_template_path_kept(self, workspace: Path, tmp_path: Path) -> None:
        target = tmp_path / "tpl"
        (workspace / "scaffoldctl.toml").write_text(f'[template]\npath = "{target.as_posix()}"\n')
        settings = ScaffoldSettings.from_cli(workspace=workspace)
        assert settings.template_path == target


class TestEnv:
    def test_env_overrides_toml(self, workspace: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (workspace / "scaffoldctl.toml").write_text('[template]\nplaceholder = "toml"\n')
        monkeypatch.setenv("SCAFFOLDCTL_TEMPLATE__PLACEHOLDER", "env")
        settings = ScaffoldSettings.from_cli(workspace=workspace)
        assert settings.template.placeholder == "env"

    def test_cli_overrides_env(self, workspace: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCAFFOLDCTL_QUIET", "true")
        settings = ScaffoldSettings.from_cli(workspace=workspace, quiet=False)
        assert settings.quiet is False


class TestModels:
    def test_empty_placeholder_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TemplateConfig(placeholder="")

    def test_layout_to_blueprint(self) -> None:
        bp = LayoutConfig(modules=("api",), namespace_root="org.example").to_blueprint()
        assert bp.modules == ("api",)
        assert bp.package("my-app") == "org.example.myapp"

