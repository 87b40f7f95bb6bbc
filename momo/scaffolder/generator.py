"""Project scaffolding orchestrator.

Takes a ``ProjectOptions`` and writes a complete turbo monorepo: root
manifests, ``momo.config.json``, ``apps/`` and ``packages/`` and the shared
``config-typescript`` package.  ``create_project`` is the interactive wizard
wrapped around it.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from momo import __version__
from momo.config import CONFIG_FILE_NAME, PACKAGE_MANAGERS, MomoConfig
from momo.errors import OperationCancelled, ProjectExists
from momo.prompts import ask_text, select_option
from momo.utils import (
    create_spinner,
    is_empty_dir,
    print_info,
    print_step,
    print_success,
    run_command,
    save_json,
)
from momo.validators import default_scope, project_name, require_valid, scope_name
from momo.workspace.discovery import find_project_root

from . import manifests
from .templates import TemplateRenderer, write_text_file

# Used when ``<manager> --version`` cannot be run.
FALLBACK_MANAGER_VERSIONS: dict[str, str] = {
    "pnpm": "9.0.0",
    "yarn": "1.22.0",
    "bun": "1.0.0",
    "npm": "10.0.0",
}

MANAGER_LABELS: dict[str, str] = {
    "bun": "Bun",
    "npm": "NPM",
    "pnpm": "PNPM",
    "yarn": "Yarn",
}


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class ProjectOptions(BaseModel):
    """Pydantic model describing the monorepo to scaffold."""

    name: str = Field(..., description="Project name, used as the root package name")
    scope: str = Field(default="@momo", description="npm scope for workspace packages")
    manager: str = Field(default="pnpm", description="Package manager")
    momo_version: str = Field(default=__version__)
    manager_version: Optional[str] = Field(default=None)

    @field_validator("name")
    @classmethod
    def _valid_name(cls, value: str) -> str:
        error = project_name(value)
        if error:
            raise ValueError(error)
        return value

    @field_validator("scope")
    @classmethod
    def _valid_scope(cls, value: str) -> str:
        error = scope_name(value)
        if error:
            raise ValueError(error)
        return value

    @field_validator("manager")
    @classmethod
    def _known_manager(cls, value: str) -> str:
        if value not in PACKAGE_MANAGERS:
            raise ValueError(f"unknown package manager: {value}")
        return value


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Writes the monorepo tree for a ``ProjectOptions``.

    Generates:
    - root ``package.json``, ``turbo.json``, ``tsconfig.json``, ``.gitignore``
    - ``pnpm-workspace.yaml`` when the manager is pnpm
    - ``momo.config.json`` (marks the directory as a momo project)
    - ``apps/`` and ``packages/`` with the shared ``config-typescript`` package
    - ``README.md``
    """

    def __init__(
        self,
        options: ProjectOptions,
        renderer: TemplateRenderer | None = None,
        base_config: MomoConfig | None = None,
    ) -> None:
        self.options = options
        self.renderer = renderer or TemplateRenderer()
        self.base_config = base_config

    def _build_context(self) -> dict[str, Any]:
        return {
            "project_name": self.options.name,
            "scope": self.options.scope,
            "manager": self.options.manager,
        }

    async def generate(self, target_dir: str | Path) -> Path:
        """Generate the project inside *target_dir* and return its path."""
        root = Path(target_dir)
        opts = self.options
        context = self._build_context()

        for directory in ("apps", "packages"):
            await asyncio.to_thread((root / directory).mkdir, parents=True, exist_ok=True)

        await save_json(
            manifests.root_package_json(
                opts.name, opts.manager, opts.momo_version, opts.manager_version
            ),
            root / "package.json",
        )
        if opts.manager == "pnpm":
            await asyncio.to_thread(
                write_text_file, root / "pnpm-workspace.yaml", manifests.pnpm_workspace_yaml()
            )

        await save_json(manifests.turbo_json(), root / "turbo.json")
        await save_json(manifests.base_tsconfig(), root / "tsconfig.json")
        await self.renderer.render_to_file("gitignore.j2", root / ".gitignore", context)
        await self.renderer.render_to_file("README.md.j2", root / "README.md", context)
        await save_json(
            manifests.momo_config(opts.scope, opts.manager, self.base_config),
            root / CONFIG_FILE_NAME,
        )

        config_dir = root / "packages" / manifests.CONFIG_PACKAGE_DIR
        await save_json(manifests.config_package_json(opts.scope), config_dir / "package.json")
        await save_json(manifests.config_base_json(), config_dir / "base.json")

        return root


# ---------------------------------------------------------------------------
# Interactive wizard
# ---------------------------------------------------------------------------


def detect_package_manager(user_agent: str | None = None) -> str:
    """Guess the manager that launched us from ``npm_config_user_agent``."""
    agent = user_agent if user_agent is not None else os.environ.get("npm_config_user_agent", "")
    if "yarn" in agent:
        return "yarn"
    if "bun" in agent:
        return "bun"
    if "pnpm" in agent:
        return "pnpm"
    if "npm" in agent:
        return "npm"
    return "pnpm"


async def get_manager_version(manager: str) -> str:
    """Return ``<manager> --version``, or a known-good fallback."""
    returncode, stdout, _ = await run_command([manager, "--version"], timeout=15)
    if returncode == 0 and stdout:
        return stdout.splitlines()[0].strip()
    return FALLBACK_MANAGER_VERSIONS.get(manager, FALLBACK_MANAGER_VERSIONS["npm"])


def _resolve_name(name: Optional[str]) -> str:
    if not name:
        return ask_text(
            "What is the name of your monorepo?",
            default="my-momo-project",
            validate=lambda value: None if value == "." else project_name(value),
        )
    if name != ".":
        require_valid(name)
    return name


def _confirm_target_dir(target_dir: Path, label: str) -> None:
    if is_empty_dir(target_dir):
        return
    choice = select_option(
        f'Directory "{label}" is not empty. Proceed?',
        [("cancel", "Cancel operation"), ("ignore", "Ignore (files might be overwritten)")],
    )
    if choice == "cancel":
        raise OperationCancelled()


async def create_project(
    name: Optional[str] = None,
    *,
    cwd: str | Path | None = None,
    config: MomoConfig | None = None,
    scope: Optional[str] = None,
    manager: Optional[str] = None,
) -> Path:
    """Interactive ``momo create`` flow.

    Missing *name*, *scope* and *manager* are prompted for.  ``"."`` as the
    name scaffolds into *cwd* itself.

    Raises:
        ProjectExists: *cwd* is already inside a momo project.
        InvalidName: *name* or *scope* fails validation.
        OperationCancelled: The operator cancelled a prompt.
    """
    cwd = Path(cwd or Path.cwd())
    config = config or MomoConfig()

    existing = find_project_root(cwd)
    if existing is not None:
        raise ProjectExists(existing)

    name = _resolve_name(name)
    if name == ".":
        target_dir = cwd
        name = require_valid(cwd.name)
        label = "Current Directory"
    else:
        target_dir = (cwd / name).resolve()
        label = name

    _confirm_target_dir(target_dir, label)

    if scope is None:
        scope = ask_text(
            "What is the package scope?",
            default=config.package_scope or config.scope or default_scope(name),
            validate=scope_name,
        )
    else:
        require_valid(scope, scope_name)

    if manager is None:
        manager = select_option(
            "Which package manager do you want to use?",
            [(pm, MANAGER_LABELS[pm]) for pm in sorted(MANAGER_LABELS)],
            default=detect_package_manager(),
        )

    manager_version = await get_manager_version(manager)
    options = ProjectOptions(
        name=name, scope=scope, manager=manager, manager_version=manager_version
    )

    with create_spinner() as spinner:
        spinner.add_task("Scaffolding project...", total=None)
        root = await ProjectGenerator(options, base_config=config).generate(target_dir)

    print_success("Project scaffolded successfully!")
    print_info(f"Project created at {root}")
    print_info("Next steps:")
    if root != cwd:
        print_step(f"cd {name}")
    print_step(f"{manager} install")
    print_step(f"{manager} {'run ' if manager == 'npm' else ''}dev")
    return root
