"""Shared pytest fixtures for the momo test suite.

Provides reusable fixtures for:
- An isolated global config directory, clean ``MOMO_*`` environment and a
  wide console so assertions on output never hit line wrapping
- Temporary monorepo builders (root marker, apps, packages)
- A recording stand-in for the process executor
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

from momo.utils import console


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global config at a temp dir and clear ``MOMO_*`` overrides."""
    home = tmp_path / "momo-home"
    monkeypatch.setenv("MOMO_HOME", str(home))
    for name in ("MOMO_MANAGER", "MOMO_SCOPE", "MOMO_AUTHOR", "MOMO_LICENSE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("npm_config_user_agent", raising=False)
    monkeypatch.setattr(console, "width", 200)
    return home


# ---------------------------------------------------------------------------
# Monorepo builders
# ---------------------------------------------------------------------------

def write_manifest(directory: Path, manifest: dict[str, Any] | str) -> Path:
    """Create *directory* with a ``package.json``; strings are written raw."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    if isinstance(manifest, str):
        path.write_text(manifest, encoding="utf-8")
    else:
        path.write_text(json.dumps(manifest), encoding="utf-8")
    return path


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty momo project: ``momo.config.json`` plus ``apps/`` and ``packages/``."""
    root = tmp_path / "repo"
    (root / "apps").mkdir(parents=True)
    (root / "packages").mkdir()
    (root / "momo.config.json").write_text(
        json.dumps({"scope": "@momo", "manager": "pnpm"}), encoding="utf-8"
    )
    return root


@pytest.fixture
def add_member(project_root: Path) -> Callable[..., Path]:
    """Factory adding a member: ``add_member("apps", "web", name="web")``.

    ``name=None`` writes a manifest without a ``name`` field.
    """

    def factory(
        kind_dir: str,
        dir_name: str,
        name: str | None = "",
        manifest: dict[str, Any] | str | None = None,
    ) -> Path:
        if manifest is None:
            manifest = {"version": "0.0.0", "private": True}
            if name is not None:
                manifest["name"] = name or dir_name
        directory = project_root / kind_dir / dir_name
        write_manifest(directory, manifest)
        return directory

    return factory


@pytest.fixture
def sample_monorepo(project_root: Path, add_member: Callable[..., Path]) -> Path:
    """Monorepo with two apps and two packages.

    - ``apps/web``        -> ``web``
    - ``apps/admin-dir``  -> ``admin``
    - ``packages/ui``     -> ``@momo/ui``
    - ``packages/utils``  -> ``@momo/utils``
    """
    add_member("apps", "web")
    add_member("apps", "admin-dir", name="admin")
    add_member("packages", "ui", name="@momo/ui")
    add_member("packages", "utils", name="@momo/utils")
    return project_root


# ---------------------------------------------------------------------------
# Process executor
# ---------------------------------------------------------------------------

@pytest.fixture
def runner() -> AsyncMock:
    """Async stand-in for ``run_command`` that records calls and succeeds."""
    return AsyncMock(return_value=(0, "", ""))


@pytest.fixture
def failing_runner() -> AsyncMock:
    return AsyncMock(return_value=(1, "", "boom"))
