"""Unit tests for utility functions (momo.utils).

Tests cover:
- run_command (success, failure, missing binary, timeout, cwd, env, capture=False)
- load_json / write_json / save_json (use tmp_path)
- is_empty_dir
- Rich output helpers
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from momo.utils import (
    create_spinner,
    is_empty_dir,
    load_json,
    print_banner,
    print_error,
    print_info,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    save_json,
    write_json,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command_list(self):
        returncode, stdout, _ = await run_command([sys.executable, "-c", "print('hello')"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self):
        returncode, _, _ = await run_command(
            [sys.executable, "-c", "import sys; sys.exit(3)"]
        )
        assert returncode == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_binary(self):
        returncode, _, stderr = await run_command(["definitely-not-a-real-binary-xyz"])
        assert returncode == 127
        assert "Command not found" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"], timeout=1
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cwd(self, tmp_path: Path):
        _, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_env(self):
        _, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.environ['MOMO_TEST_VAR'])"],
            env={"MOMO_TEST_VAR": "42"},
        )
        assert stdout == "42"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_capture(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "pass"], capture=False
        )
        assert returncode == 0
        assert stdout == ""
        assert stderr == ""


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


class TestJson:
    @pytest.mark.unit
    def test_write_json_format(self, tmp_path: Path):
        path = write_json({"b": 1, "a": "é"}, tmp_path / "deep" / "out.json")
        text = path.read_text(encoding="utf-8")
        assert text.endswith("}\n")
        assert '  "b": 1' in text
        assert "é" in text

    @pytest.mark.unit
    def test_load_json(self, tmp_path: Path):
        path = tmp_path / "in.json"
        path.write_text(json.dumps({"name": "web"}))
        assert load_json(path) == {"name": "web"}

    @pytest.mark.unit
    def test_load_json_wraps_non_object(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        assert load_json(path) == {"_root": [1, 2]}

    @pytest.mark.unit
    def test_load_json_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_save_json(self, tmp_path: Path):
        path = await save_json({"ok": True}, tmp_path / "saved.json")
        assert json.loads(path.read_text()) == {"ok": True}


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestFileSystem:
    @pytest.mark.unit
    def test_is_empty_dir_missing(self, tmp_path: Path):
        assert is_empty_dir(tmp_path / "nope")

    @pytest.mark.unit
    def test_is_empty_dir_empty(self, tmp_path: Path):
        assert is_empty_dir(tmp_path)

    @pytest.mark.unit
    def test_is_empty_dir_git_only(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        assert is_empty_dir(tmp_path)

    @pytest.mark.unit
    def test_is_empty_dir_with_files(self, tmp_path: Path):
        (tmp_path / "README.md").write_text("hi")
        assert not is_empty_dir(tmp_path)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutput:
    @pytest.mark.unit
    def test_print_helpers(self, capsys):
        print_banner("MOMO")
        print_info("info line")
        print_step("step line")
        print_success("success line")
        print_warning("warning line")
        print_error("error line")
        out = capsys.readouterr().out
        for expected in ("MOMO", "info line", "step line", "success line", "warning line", "error line"):
            assert expected in out

    @pytest.mark.unit
    def test_print_summary_table(self, capsys):
        print_summary_table({"manager": "pnpm"}, title="Config")
        out = capsys.readouterr().out
        assert "manager" in out
        assert "pnpm" in out

    @pytest.mark.unit
    def test_create_spinner(self):
        spinner = create_spinner()
        with spinner:
            task = spinner.add_task("working", total=None)
            assert task is not None
