"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as standard ISO 8601."""
    return datetime.now(UTC).isoformat()


def error_text(exc: BaseException) -> str:
    """Render an exception for a user-facing message.

    ``OSError`` carries the offending path in ``filename``; include it when
    the message does not already.
    """
    if isinstance(exc, OSError) and exc.strerror:
        if exc.filename is not None:
            return f"{exc.strerror}: {exc.filename}"
        return exc.strerror
    return str(exc) or type(exc).__name__
