"""BaseService — shared foundation for scaffoldctl services.

Every service receives the resolved :class:`ScaffoldSettings` at
construction time and derives template and layout details from it. Services
keep no state between operations.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from scaffoldctl.domain.names import INVALID_NAME_MESSAGE, validate_project_name
from scaffoldctl.services.result import Notifier, ServiceError, ServiceResult, StatusMessage

if TYPE_CHECKING:
    from scaffoldctl.config.settings import ScaffoldSettings
    from scaffoldctl.domain.blueprint import Blueprint

log = structlog.get_logger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ScaffoldService(BaseService):
            def create_project(self, name: str) -> ServiceResult:
                invalid = self._check_name("create_project", name)
                if invalid is not None:
                    return invalid
                ...
    """

    def __init__(self, settings: ScaffoldSettings, *, notify: Notifier | None = None) -> None:
        self._settings = settings
        self._notify_cb = notify

    @property
    def blueprint(self) -> Blueprint:
        return self._settings.layout.to_blueprint()

    def _destination(self, name: str, parent: Path | None) -> Path:
        return (parent or self._settings.workspace) / name

    def _notify(self, kind: str, text: str) -> None:
        """Send a status notice to the caller, if it asked for them."""
        log.info("status", kind=kind, text=text)
        if self._notify_cb is not None:
            self._notify_cb(StatusMessage(kind=kind, text=text))  # type: ignore[arg-type]

    @staticmethod
    def _check_name(op: str, name: str) -> ServiceResult | None:
        """Return an INVALID_NAME result, or None when *name* is usable."""
        if validate_project_name(name):
            return None
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="INVALID_NAME",
                message=INVALID_NAME_MESSAGE,
                detail={"name": name},
            ),
        )
