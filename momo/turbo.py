"""Build orchestration commands forwarded to Turborepo.

``momo build|dev|lint|start|test|graph`` run ``npx turbo <command>`` with the
operator's terminal attached, and ``momo login|logout|link|unlink`` manage
Remote Caching the same way.  ``momo clean`` removes build artefacts across
the workspace without shelling out.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Optional, Sequence

from momo.errors import CommandFailed, NotAProjectRoot
from momo.utils import print_info, print_success, run_command
from momo.workspace.discovery import find_project_root
from momo.workspace.installer import CommandRunner

TURBO_COMMANDS: tuple[str, ...] = ("build", "dev", "lint", "start", "test", "graph")

TURBO_DESCRIPTIONS: dict[str, str] = {
    "build": "Build all apps and packages",
    "dev": "Start development servers",
    "lint": "Lint all apps and packages",
    "start": "Start built apps",
    "test": "Run tests across the workspace",
    "graph": "Generate the task dependency graph",
}

REMOTE_CACHE_COMMANDS: tuple[str, ...] = ("login", "logout", "link", "unlink")

REMOTE_CACHE_DESCRIPTIONS: dict[str, str] = {
    "login": "Log in to Turborepo (Remote Caching)",
    "logout": "Log out from Turborepo",
    "link": "Link project to Vercel Team (Remote Caching)",
    "unlink": "Unlink project from Remote Caching",
}

_REMOTE_CACHE_FAILURES: dict[str, str] = {
    "login": "Could not authenticate with Turborepo.",
    "logout": "Could not revoke Turborepo authentication.",
    "link": "Could not link project to Vercel team.",
    "unlink": "Could not unlink project from remote caching.",
}

CLEAN_TARGETS: tuple[str, ...] = ("node_modules", "dist", ".turbo")


def turbo_argv(
    command: str,
    filter: Optional[str] = None,
    extra_args: Sequence[str] = (),
) -> list[str]:
    """Build ``npx turbo <command> [--filter F] [extra...]``."""
    args = [command]
    if filter:
        args.extend(["--filter", filter])
    args.extend(extra_args)
    return ["npx", "turbo", *args]


async def run_turbo(
    command: str,
    filter: Optional[str] = None,
    extra_args: Sequence[str] = (),
    *,
    cwd: str | Path | None = None,
    runner: CommandRunner = run_command,
) -> list[str]:
    """Run a turbo task in *cwd* and return the argv that was executed.

    Raises:
        ValueError: If *command* is not a forwarded turbo command.
        CommandFailed: If turbo exits non-zero.
    """
    if command not in TURBO_COMMANDS:
        raise ValueError(f"unsupported turbo command: {command}")

    argv = turbo_argv(command, filter, extra_args)
    print_info(f"Running {' '.join(argv[1:])}...")
    returncode, _, stderr = await runner(argv, cwd=cwd or Path.cwd(), capture=False)
    if returncode != 0:
        raise CommandFailed(f"momo {command}", returncode, stderr)
    return argv


async def run_remote_cache(
    command: str,
    *,
    cwd: str | Path | None = None,
    runner: CommandRunner = run_command,
) -> list[str]:
    """Run ``npx turbo login|logout|link|unlink`` interactively.

    Raises:
        ValueError: If *command* is not a Remote Caching command.
        CommandFailed: If turbo exits non-zero.
    """
    if command not in REMOTE_CACHE_COMMANDS:
        raise ValueError(f"unsupported remote cache command: {command}")

    argv = turbo_argv(command)
    returncode, _, _ = await runner(argv, cwd=cwd or Path.cwd(), capture=False)
    if returncode != 0:
        raise CommandFailed(f"momo {command}", returncode, _REMOTE_CACHE_FAILURES[command])
    return argv


def find_clean_targets(root: str | Path) -> list[Path]:
    """Return every ``node_modules``/``dist``/``.turbo`` directory under *root*.

    Matched directories are not descended into.
    """
    found: list[Path] = []
    pending = [Path(root)]
    while pending:
        directory = pending.pop()
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if not entry.is_dir() or entry.is_symlink():
                continue
            if entry.name in CLEAN_TARGETS:
                found.append(entry)
            else:
                pending.append(entry)
    return sorted(found)


def _remove_all(paths: list[Path]) -> None:
    for path in paths:
        shutil.rmtree(path)


async def clean_workspace(cwd: str | Path | None = None) -> list[Path]:
    """Remove build artefacts from the enclosing momo project.

    Returns:
        The directories that were removed.

    Raises:
        NotAProjectRoot: *cwd* is not inside a momo project.
        CommandFailed: A directory could not be removed.
    """
    start = Path(cwd or Path.cwd())
    root = find_project_root(start)
    if root is None:
        raise NotAProjectRoot(start)

    print_info("Cleaning workspace...")
    targets = find_clean_targets(root)
    try:
        await asyncio.to_thread(_remove_all, targets)
    except OSError as exc:
        raise CommandFailed("momo clean", 1, str(exc)) from exc

    print_success("Workspace cleaned successfully!")
    return targets
