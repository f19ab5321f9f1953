"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``SCAFFOLDCTL_*`` prefix
  3. TOML file    — ``scaffoldctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from scaffoldctl.config.discovery import find_config
from scaffoldctl.config.models import LayoutConfig, TemplateConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``scaffoldctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class ScaffoldSettings(BaseSettings):
    """Unified settings for the scaffoldctl CLI.

    Attributes:
        workspace: Directory new projects are created in (CWD by default).
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SCAFFOLDCTL_",
        "env_nested_delimiter": "__",
    }

    workspace: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    template: TemplateConfig = Field(default_factory=TemplateConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        workspace: Path | None = None,
        **cli_flags: Any,
    ) -> ScaffoldSettings:
        """Construct settings from a CLI invocation.

        Discovers ``scaffoldctl.toml`` via walk-up from *workspace* (or uses
        the explicit *config_path*) and merges CLI flags on top.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(workspace)

        _tls.toml_path = toml_path
        try:
            return cls(
                workspace=workspace or Path.cwd(),
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    @property
    def template_path(self) -> Path | None:
        """Configured template path; relative paths resolve against the config file."""
        path = self.template.path
        if path is None or path.is_absolute():
            return path
        base = self.config_path.parent if self.config_path else self.workspace
        return base / path
