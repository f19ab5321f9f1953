"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, scaffoldctl.toml only contains
overrides. A workspace needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator

from scaffoldctl.domain.blueprint import (
    DEFAULT_DESCRIPTOR,
    DEFAULT_MODULES,
    DEFAULT_NAMESPACE_ROOT,
    ENTRY_POINT_MODULE,
    Blueprint,
)
from scaffoldctl.domain.rewrite import DEFAULT_SERVICE_KEY


class TemplateConfig(BaseModel):
    """[template] section — the clone source and its placeholder tokens."""

    model_config = {"frozen": True}

    path: Path | None = None
    placeholder: str = "sns-demo"
    namespace: str | None = "com.xiaohongshu.sns.demo"
    service_key: str = DEFAULT_SERVICE_KEY

    @field_validator("placeholder")
    @classmethod
    def _placeholder_not_empty(cls, value: str) -> str:
        if not value:
            msg = "template.placeholder must not be empty"
            raise ValueError(msg)
        return value


class LayoutConfig(BaseModel):
    """[layout] section — module layout for generated projects."""

    model_config = {"frozen": True}

    modules: tuple[str, ...] = DEFAULT_MODULES
    descriptor: str = DEFAULT_DESCRIPTOR
    namespace_root: str = DEFAULT_NAMESPACE_ROOT
    entry_point_module: str = ENTRY_POINT_MODULE

    def to_blueprint(self) -> Blueprint:
        return Blueprint(
            modules=self.modules,
            descriptor=self.descriptor,
            namespace_root=self.namespace_root,
            entry_point_module=self.entry_point_module,
        )

