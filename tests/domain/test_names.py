"""Tests for project name validation."""

import pytest

from scaffoldctl.domain.names import collapse_name, validate_project_name


class TestValidateProjectName:
    @pytest.mark.parametrize(
        "name",
        ["a", "z", "my-app2", "app", "order-service", "a1", "a-b-c", "x9-y8"],
    )
    def test_valid(self, name: str) -> None:
        assert validate_project_name(name) is True

    @pytest.mark.parametrize(
        "name",
        [
            "",
            "-bad",
            "bad-",
            "Bad",
            "myApp",
            "my_app",
            "1app",
            "9",
            "-",
            "my app",
            "my.app",
            "app/evil",
            "über",
            "app\n",
        ],
    )
    def test_invalid(self, name: str) -> None:
        assert validate_project_name(name) is False

    def test_trailing_newline_rejected(self) -> None:
        """``$`` would accept a trailing newline; fullmatch must not."""
        assert validate_project_name("app\n") is False


class TestCollapseName:
    def test_strips_hyphens(self) -> None:
        assert collapse_name("my-app-2") == "myapp2"

    def test_no_hyphens_unchanged(self) -> None:
        assert collapse_name("zoo") == "zoo"
