"""Unit tests for name validation (momo.validators)."""

from __future__ import annotations

import pytest

from momo.errors import InvalidName
from momo.validators import default_scope, project_name, require_valid, scope_name

pytestmark = pytest.mark.unit


class TestProjectName:
    @pytest.mark.parametrize(
        "name", ["my-app", "web", "@momo/ui", "a.b_c~d", "app2", "x" * 214]
    )
    def test_valid(self, name: str):
        assert project_name(name) is None

    def test_empty(self):
        assert project_name("") == "Project name cannot be empty"
        assert project_name(None) == "Project name cannot be empty"

    def test_too_long(self):
        assert project_name("x" * 215) == "Project name is too long"

    @pytest.mark.parametrize("name", ["My App", "UPPER", "has space", ".hidden", "_under", "@scope"])
    def test_invalid_characters(self, name: str):
        assert "valid npm package name" in project_name(name)

    @pytest.mark.parametrize("name", ["node_modules", "favicon.ico"])
    def test_reserved(self, name: str):
        assert project_name(name) == "Project name is reserved"


class TestScopeName:
    @pytest.mark.parametrize("scope", ["@momo", "@acme-corp", "@a.b"])
    def test_valid(self, scope: str):
        assert scope_name(scope) is None

    @pytest.mark.parametrize("scope", ["momo", "@", "@Acme", "@acme/ui"])
    def test_invalid(self, scope: str):
        assert scope_name(scope) is not None

    def test_empty(self):
        assert scope_name("") == "Scope cannot be empty"


class TestHelpers:
    def test_default_scope(self):
        assert default_scope("My_App!") == "@myapp"
        assert default_scope("cool-repo") == "@cool-repo"

    def test_require_valid_passes_through(self):
        assert require_valid("web") == "web"
        assert require_valid("@acme", scope_name) == "@acme"

    def test_require_valid_raises(self):
        with pytest.raises(InvalidName) as exc_info:
            require_valid("Bad Name")
        assert exc_info.value.name == "Bad Name"
        assert "valid npm package name" in exc_info.value.reason
