"""Project name validation and derived forms.

INVARIANT: A project name is validated before any filesystem side effect.
"""

from __future__ import annotations

import re

PROJECT_NAME_PATTERN: re.Pattern[str] = re.compile(r"^[a-z]$|^[a-z][a-z0-9-]*[a-z0-9]$")

INVALID_NAME_MESSAGE = (
    "Invalid project name. Use lowercase letters, digits and hyphens; "
    "start with a letter and do not start or end with a hyphen."
)


def validate_project_name(name: str) -> bool:
    """Check whether *name* is a usable project identifier.

    Examples:
        >>> validate_project_name("my-app2")
        True
        >>> validate_project_name("a")
        True
        >>> validate_project_name("-bad")
        False
        >>> validate_project_name("Bad")
        False
    """
    return PROJECT_NAME_PATTERN.fullmatch(name) is not None


def collapse_name(name: str) -> str:
    """Strip hyphens so *name* can be used as a package/namespace segment."""
    return name.replace("-", "")
