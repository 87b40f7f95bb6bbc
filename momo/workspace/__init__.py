"""momo workspace -- discovers monorepo members and installs dependencies.

Quick usage::

    from momo.config import load_config
    from momo.workspace import DependencyRequest, add_dependency

    request = DependencyRequest(package_name="zod", app="web")
    command = await add_dependency(request, config=load_config(), cwd=".")
"""

from momo.workspace.discovery import (
    discover_workspaces,
    find_project_root,
    find_workspace,
    is_internal_package,
)
from momo.workspace.installer import (
    InstallCommand,
    add_dependency,
    build_add_args,
    build_install_command,
)
from momo.workspace.models import (
    DependencyRequest,
    InstallationTarget,
    WorkspaceKind,
    WorkspaceMember,
)
from momo.workspace.resolver import resolve_target

__all__ = [
    "DependencyRequest",
    "InstallCommand",
    "InstallationTarget",
    "WorkspaceKind",
    "WorkspaceMember",
    "add_dependency",
    "build_add_args",
    "build_install_command",
    "discover_workspaces",
    "find_project_root",
    "find_workspace",
    "is_internal_package",
    "resolve_target",
]
