"""Unit tests for turbo forwarding and workspace cleaning (momo.turbo)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from momo.errors import CommandFailed, NotAProjectRoot
from momo.turbo import (
    REMOTE_CACHE_COMMANDS,
    clean_workspace,
    find_clean_targets,
    run_remote_cache,
    run_turbo,
    turbo_argv,
)


class TestTurboArgv:
    @pytest.mark.unit
    def test_plain(self):
        assert turbo_argv("build") == ["npx", "turbo", "build"]

    @pytest.mark.unit
    def test_filter_and_extra(self):
        assert turbo_argv("dev", "web", ["--force"]) == [
            "npx", "turbo", "dev", "--filter", "web", "--force",
        ]


class TestRunTurbo:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_runs_in_cwd(self, tmp_path: Path, runner: AsyncMock):
        argv = await run_turbo("lint", "ui", cwd=tmp_path, runner=runner)
        runner.assert_awaited_once_with(argv, cwd=tmp_path, capture=False)
        assert argv == ["npx", "turbo", "lint", "--filter", "ui"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure(self, tmp_path: Path, failing_runner: AsyncMock):
        with pytest.raises(CommandFailed) as exc_info:
            await run_turbo("build", cwd=tmp_path, runner=failing_runner)
        assert exc_info.value.command == "momo build"
        assert exc_info.value.returncode == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_command(self, runner: AsyncMock):
        with pytest.raises(ValueError):
            await run_turbo("deploy", runner=runner)
        runner.assert_not_called()


class TestRemoteCache:
    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("command", REMOTE_CACHE_COMMANDS)
    async def test_forwards_to_turbo(self, command: str, tmp_path: Path, runner: AsyncMock):
        argv = await run_remote_cache(command, cwd=tmp_path, runner=runner)
        assert argv == ["npx", "turbo", command]
        runner.assert_awaited_once_with(argv, cwd=tmp_path, capture=False)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure(self, tmp_path: Path, failing_runner: AsyncMock):
        with pytest.raises(CommandFailed) as exc_info:
            await run_remote_cache("login", cwd=tmp_path, runner=failing_runner)
        assert exc_info.value.command == "momo login"
        assert exc_info.value.exit_code == 1
        assert "Could not authenticate with Turborepo." in exc_info.value.message

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rejects_task_commands(self, runner: AsyncMock):
        with pytest.raises(ValueError):
            await run_remote_cache("build", runner=runner)
        runner.assert_not_called()


class TestClean:
    @pytest.fixture
    def dirty_repo(self, project_root: Path) -> Path:
        for relative in (
            "node_modules/zod",
            ".turbo",
            "apps/web/node_modules/react",
            "apps/web/dist",
            "apps/web/src",
            "packages/ui/.turbo",
            "packages/ui/src",
        ):
            (project_root / relative).mkdir(parents=True)
        (project_root / "apps" / "web" / "src" / "dist").write_text("a file named dist")
        return project_root

    @pytest.mark.unit
    def test_find_targets(self, dirty_repo: Path):
        found = {p.relative_to(dirty_repo).as_posix() for p in find_clean_targets(dirty_repo)}
        assert found == {
            "node_modules",
            ".turbo",
            "apps/web/node_modules",
            "apps/web/dist",
            "packages/ui/.turbo",
        }

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_clean_from_nested_dir(self, dirty_repo: Path):
        removed = await clean_workspace(dirty_repo / "apps" / "web" / "src")
        assert len(removed) == 5
        assert not (dirty_repo / "node_modules").exists()
        assert not (dirty_repo / "apps" / "web" / "dist").exists()
        assert (dirty_repo / "apps" / "web" / "src" / "dist").is_file()
        assert (dirty_repo / "packages" / "ui" / "src").is_dir()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_clean_outside_project(self, tmp_path: Path):
        outside = tmp_path / "elsewhere"
        outside.mkdir()
        with pytest.raises(NotAProjectRoot):
            await clean_workspace(outside)
