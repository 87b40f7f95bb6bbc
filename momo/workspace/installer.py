"""Installer command construction and the ``momo dep`` operation.

The builder is pure: it turns a resolved target and a request into the exact
argument vector for the configured package manager.  ``add_dependency`` wires
the guard, the resolver, the builder and the process executor together.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from momo.config import MomoConfig
from momo.errors import InstallerFailure
from momo.utils import print_info, print_success, run_command

from .discovery import discover_workspaces, is_internal_package, require_project_root
from .models import DependencyRequest, InstallationTarget, WorkspaceMember
from .resolver import WorkspaceChooser, resolve_target

WORKSPACE_PROTOCOL = "workspace:*"

CommandRunner = Callable[..., Awaitable[tuple[int, str, str]]]


# ---------------------------------------------------------------------------
# Package manager flags
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ManagerFlags:
    """How one package manager spells the parts of an add-dependency call.

    ``root_flag`` is ``None`` for managers that install at the workspace root
    by default.  ``scope_before_verb`` marks managers whose member selector
    precedes the verb (``yarn workspace <name> add ...``).
    """

    verb: str
    dev_flag: str
    root_flag: Optional[str]
    filter_flag: str
    scope_before_verb: bool = False


MANAGER_FLAGS: dict[str, ManagerFlags] = {
    "pnpm": ManagerFlags(verb="add", dev_flag="-D", root_flag="-w", filter_flag="--filter"),
    "npm": ManagerFlags(
        verb="add", dev_flag="--save-dev", root_flag=None, filter_flag="--workspace"
    ),
    "yarn": ManagerFlags(
        verb="add", dev_flag="-D", root_flag="-W", filter_flag="workspace", scope_before_verb=True
    ),
    "bun": ManagerFlags(verb="add", dev_flag="-D", root_flag=None, filter_flag="--filter"),
}



def manager_flags(manager: str) -> ManagerFlags:
    """Return the flag table for *manager*, raising ``KeyError`` if unknown."""
    return MANAGER_FLAGS[manager]


# ---------------------------------------------------------------------------
# Command builder
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InstallCommand:
    """A fully described installer invocation."""

    binary: str
    args: tuple[str, ...]
    cwd: Path

    @property
    def argv(self) -> list[str]:
        return [self.binary, *self.args]

    @property
    def display(self) -> str:
        return " ".join(self.argv)


def package_spec(request: DependencyRequest, internal: bool) -> str:
    """Final positional argument: workspace protocol, pinned version, or bare name."""
    if internal:
        return f"{request.package_name}@{WORKSPACE_PROTOCOL}"
    if request.version:
        return f"{request.package_name}@{request.version}"
    return request.package_name


def build_add_args(
    target: InstallationTarget,
    request: DependencyRequest,
    *,
    internal: bool,
    manager: str = "pnpm",
) -> list[str]:
    """Build the argument vector for the manager's add-dependency call.

    Examples (pnpm)::

        root, "zod"               -> ["add", "-w", "zod"]
        member "web", "lodash"    -> ["add", "--filter", "web", "lodash"]
        dev, internal "@momo/ui"  -> ["add", "-D", "-w", "@momo/ui@workspace:*"]

    Raises:
        UnresolvedTarget: If *target* names neither the root nor a member.
    """
    target.require_resolved()
    flags = manager_flags(manager)

    member: Optional[WorkspaceMember] = target.member
    scope = [] if member is None else [flags.filter_flag, member.name]

    args: list[str] = []
    if flags.scope_before_verb:
        args.extend(scope)
    args.append(flags.verb)
    if request.dev:
        args.append(flags.dev_flag)

    if target.is_workspace_root:
        if flags.root_flag:
            args.append(flags.root_flag)
    elif not flags.scope_before_verb:
        args.extend(scope)

    args.append(package_spec(request, internal))
    return args


def build_install_command(
    target: InstallationTarget,
    request: DependencyRequest,
    *,
    internal: bool,
    config: MomoConfig,
    cwd: str | Path,
) -> InstallCommand:
    """Combine the argument vector with the configured binary and directory."""
    manager = config.manager or "pnpm"
    args = build_add_args(target, request, internal=internal, manager=manager)
    return InstallCommand(binary=manager, args=tuple(args), cwd=Path(cwd))


# ---------------------------------------------------------------------------
# Operation
# ---------------------------------------------------------------------------


async def add_dependency(
    request: DependencyRequest,
    *,
    config: MomoConfig,
    cwd: str | Path,
    chooser: Optional[WorkspaceChooser] = None,
    runner: CommandRunner = run_command,
) -> InstallCommand:
    """Install ``request.package_name`` into the right place of the monorepo.

    Performs at most one interactive prompt and at most one installer call.

    Raises:
        NotAProjectRoot: ``momo.config.json`` is missing from *cwd*.
        TargetNotFound: An explicit target does not exist.
        OperationCancelled: The operator cancelled the picker.
        InstallerFailure: The package manager exited non-zero.
    """
    root = require_project_root(cwd)

    resolve_kwargs = {} if chooser is None else {"chooser": chooser}
    target = resolve_target(request, root, **resolve_kwargs)

    internal = is_internal_package(request.package_name, discover_workspaces(root))
    if internal:
        print_info(
            f"{request.package_name} is an internal workspace package. "
            "Using workspace protocol."
        )

    command = build_install_command(
        target, request, internal=internal, config=config, cwd=root
    )

    print_info(f"Installing {request.package_name} to {target.describe()}...")
    print_info(f"$ {command.display}")
    returncode, _, _ = await runner(command.argv, cwd=command.cwd, capture=False)
    if returncode != 0:
        raise InstallerFailure(request.package_name, returncode)

    print_success(f"Successfully installed {request.package_name}")
    return command
