"""Installation target resolution.

Maps a ``DependencyRequest`` plus the discovered workspace onto a single
``InstallationTarget``.  Precedence, first match wins:

1. ``root``     -> workspace root; discovery is never consulted.
2. ``app``      -> that app, or ``TargetNotFound``.
3. ``library``  -> that package, or ``TargetNotFound``.
4. no flags     -> discover; an empty workspace installs at the root,
                   otherwise the operator picks a member or the root.

An explicit flag never falls through to the interactive picker, even when its
value is wrong, so scripted callers are never surprised by a prompt.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional

from momo.errors import TargetNotFound
from momo.prompts import select_workspace
from momo.utils import print_warning

from .discovery import discover_workspaces, find_workspace
from .models import DependencyRequest, InstallationTarget, WorkspaceKind, WorkspaceMember

# Returns the chosen member, ``None`` for the workspace root, or raises
# ``OperationCancelled``.
WorkspaceChooser = Callable[[str, Sequence[WorkspaceMember]], Optional[WorkspaceMember]]


def _resolve_explicit(
    candidate: str,
    kind: WorkspaceKind,
    root: Path,
    members: Optional[list[WorkspaceMember]],
) -> InstallationTarget:
    member = find_workspace(candidate, kind, root, members=members)
    if member is None:
        raise TargetNotFound(kind.label, candidate)
    return InstallationTarget.for_member(member)


def resolve_target(
    request: DependencyRequest,
    root: str | Path,
    *,
    members: Optional[list[WorkspaceMember]] = None,
    chooser: WorkspaceChooser = select_workspace,
) -> InstallationTarget:
    """Decide where ``request.package_name`` is installed.

    Args:
        request: The validated dependency request.
        root: Monorepo root directory.
        members: Pre-discovered members; discovered on demand when omitted.
        chooser: Interactive picker used only when no targeting flag is set.

    Returns:
        A resolved ``InstallationTarget``.

    Raises:
        TargetNotFound: An explicit ``app``/``library`` does not exist.
        DuplicateWorkspaceName: An explicit target matches several members.
        OperationCancelled: The operator cancelled the picker.
    """
    root = Path(root)

    if request.root:
        return InstallationTarget.root()

    if request.app is not None:
        return _resolve_explicit(request.app, WorkspaceKind.APP, root, members)

    if request.library is not None:
        return _resolve_explicit(request.library, WorkspaceKind.LIBRARY, root, members)

    if members is None:
        members = discover_workspaces(root)

    if not members:
        print_warning("No apps or packages found. Adding to workspace root.")
        return InstallationTarget.root()

    selected = chooser(request.package_name, members)
    if selected is None:
        return InstallationTarget.root()
    return InstallationTarget.for_member(selected)
