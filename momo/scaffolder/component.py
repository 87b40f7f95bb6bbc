"""Scaffolding for new apps and packages inside an existing monorepo.

A component is written to ``apps/<name>`` or ``packages/<name>`` with a
``package.json``, a ``tsconfig.json`` extending the shared flavor config and a
``src/`` entry point.  The shared ``packages/config-typescript`` package and
the requested flavor file are created on demand.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

from momo.config import MomoConfig
from momo.prompts import ask_text, select_option
from momo.utils import create_spinner, is_empty_dir, print_info, print_success, save_json
from momo.validators import project_name, require_valid
from momo.workspace.discovery import require_project_root
from momo.workspace.models import WorkspaceKind

from . import manifests
from .templates import TemplateRenderer

KIND_PLACEHOLDERS: dict[WorkspaceKind, str] = {
    WorkspaceKind.APP: "web",
    WorkspaceKind.LIBRARY: "ui",
}


class ComponentGenerator:
    """Writes one app or package into a monorepo rooted at *root*."""

    def __init__(
        self,
        root: str | Path,
        scope: str = "@momo",
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.root = Path(root)
        self.scope = scope
        self.renderer = renderer or TemplateRenderer()

    @property
    def config_dir(self) -> Path:
        return self.root / "packages" / manifests.CONFIG_PACKAGE_DIR

    def target_dir(self, kind: WorkspaceKind, name: str) -> Path:
        """Directory a component named *name* is written to.

        Scoped names (``@momo/ui``) live in a directory named after the bare
        package name (``ui``).
        """
        return self.root / kind.root_dir / name.rsplit("/", 1)[-1]

    async def ensure_shared_config(self, flavor: str) -> list[Path]:
        """Create the shared config package and *flavor* file if missing.

        Returns:
            The files written (empty when everything already existed).
        """
        written: list[Path] = []
        if is_empty_dir(self.config_dir):
            written.append(
                await save_json(
                    manifests.config_package_json(self.scope),
                    self.config_dir / "package.json",
                )
            )
            written.append(
                await save_json(manifests.config_base_json(), self.config_dir / "base.json")
            )

        flavor_file = self.config_dir / f"{flavor}.json"
        content = manifests.flavor_config(flavor)
        if content is not None and not flavor_file.exists():
            written.append(await save_json(content, flavor_file))
            print_info(f"Added {flavor}.json to shared config.")
        return written

    async def generate(self, kind: WorkspaceKind, name: str, flavor: str) -> Path:
        """Write the component and return its directory."""
        target = self.target_dir(kind, name)
        context: dict[str, Any] = {
            "name": name,
            "kind_title": "Application" if kind is WorkspaceKind.APP else "Package",
            "project_name": self.root.name,
            "flavor_label": manifests.FLAVORS[flavor],
        }

        await asyncio.to_thread((target / "src").mkdir, parents=True, exist_ok=True)
        await save_json(manifests.component_package_json(name), target / "package.json")
        await self.ensure_shared_config(flavor)
        await save_json(manifests.component_tsconfig(flavor), target / "tsconfig.json")
        await self.renderer.render_to_file(
            "component/index.ts.j2", target / "src" / "index.ts", context
        )
        await self.renderer.render_to_file(
            "component/README.md.j2", target / "README.md", context
        )
        return target


def _select_kind() -> WorkspaceKind:
    return select_option(
        "What do you want to add?",
        [
            (WorkspaceKind.APP, "Application (in /apps) [dim]Next.js, Vite, etc.[/dim]"),
            (WorkspaceKind.LIBRARY, "Package (in /packages) [dim]Shared UI, utils, etc.[/dim]"),
        ],
    )


def _select_flavor(kind: WorkspaceKind) -> str:
    return select_option(
        f"Select the flavor for your {kind.label}",
        list(manifests.FLAVORS.items()),
        default="base",
    )


async def add_component(
    kind: Optional[WorkspaceKind] = None,
    name: Optional[str] = None,
    flavor: Optional[str] = None,
    *,
    cwd: str | Path,
    config: MomoConfig,
) -> Path:
    """Interactive ``momo add app|package`` flow.

    Missing *kind*, *name* and *flavor* are prompted for.

    Raises:
        NotAProjectRoot: *cwd* is not a momo project root.
        InvalidName: *name* fails validation.
        KeyError: *flavor* is not a known flavor.
        OperationCancelled: The operator cancelled a prompt.
    """
    root = require_project_root(cwd)

    if kind is None:
        kind = _select_kind()

    if name is None:
        name = ask_text(
            f"What is the name of your new {kind.label}?",
            default=KIND_PLACEHOLDERS[kind],
            validate=project_name,
        )
    else:
        require_valid(name)

    if flavor is None:
        flavor = _select_flavor(kind)
    elif flavor not in manifests.FLAVORS:
        raise KeyError(flavor)

    generator = ComponentGenerator(root, scope=config.scope)
    with create_spinner() as spinner:
        spinner.add_task(f"Creating {kind.label}...", total=None)
        target = await generator.generate(kind, name, flavor)

    title = "Application" if kind is WorkspaceKind.APP else "Package"
    print_success(f"{title} added successfully!")
    print_info(f"Created {name} in {target}")
    return target
