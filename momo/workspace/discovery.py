"""Workspace discovery, lookup and internal-package classification.

Members are found by listing the immediate subdirectories of ``apps/`` and
``packages/`` and reading each one's ``package.json``.  Nothing is cached:
the filesystem is re-read on every call.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from momo.config import CONFIG_FILE_NAME
from momo.errors import DuplicateWorkspaceName, NotAProjectRoot
from momo.utils import print_warning

from .models import WorkspaceKind, WorkspaceMember

MANIFEST_FILE = "package.json"

# Apps are always enumerated before packages.
DISCOVERY_ORDER: tuple[WorkspaceKind, ...] = (WorkspaceKind.APP, WorkspaceKind.LIBRARY)


# ---------------------------------------------------------------------------
# Project root
# ---------------------------------------------------------------------------


def find_project_root(start: str | Path | None = None) -> Path | None:
    """Walk up from *start* to the nearest directory holding ``momo.config.json``."""
    current = Path(start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / CONFIG_FILE_NAME).exists():
            return directory
    return None


def require_project_root(cwd: str | Path) -> Path:
    """Return *cwd* if it is a momo project root, else raise ``NotAProjectRoot``."""
    root = Path(cwd)
    if not (root / CONFIG_FILE_NAME).exists():
        raise NotAProjectRoot(root)
    return root


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def _read_member(directory: Path, kind: WorkspaceKind) -> WorkspaceMember | None:
    manifest_path = directory / MANIFEST_FILE
    if not manifest_path.is_file():
        return None
    try:
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        print_warning(f"Skipping {directory}: unreadable {MANIFEST_FILE} ({exc})")
        return None
    if not isinstance(manifest, dict):
        print_warning(f"Skipping {directory}: {MANIFEST_FILE} is not a JSON object")
        return None

    declared = manifest.get("name")
    name = declared if isinstance(declared, str) and declared else directory.name
    return WorkspaceMember(
        name=name,
        path=directory.resolve(),
        kind=kind,
        manifest=manifest,
    )


def discover_kind(root: str | Path, kind: WorkspaceKind) -> list[WorkspaceMember]:
    """Discover members of a single *kind*, sorted by directory name.

    A missing ``apps/`` or ``packages/`` directory means zero members.
    """
    base = Path(root) / kind.root_dir
    if not base.is_dir():
        return []

    members: list[WorkspaceMember] = []
    for directory in sorted(base.iterdir(), key=lambda p: p.name):
        if not directory.is_dir():
            continue
        member = _read_member(directory, kind)
        if member is not None:
            members.append(member)
    return members


def discover_workspaces(root: str | Path) -> list[WorkspaceMember]:
    """Discover every workspace member under *root*: apps first, then packages."""
    members: list[WorkspaceMember] = []
    for kind in DISCOVERY_ORDER:
        members.extend(discover_kind(root, kind))
    return members


def find_duplicate_names(members: Iterable[WorkspaceMember]) -> dict[str, list[Path]]:
    """Return ``{name: [paths]}`` for every name declared more than once."""
    seen: dict[str, list[Path]] = {}
    for member in members:
        seen.setdefault(member.name, []).append(member.path)
    return {name: paths for name, paths in seen.items() if len(paths) > 1}


# ---------------------------------------------------------------------------
# Lookup & classification
# ---------------------------------------------------------------------------


def find_workspace(
    candidate: str,
    kind: WorkspaceKind,
    root: str | Path,
    members: list[WorkspaceMember] | None = None,
) -> WorkspaceMember | None:
    """Find the member of *kind* whose name or directory equals *candidate*.

    Args:
        candidate: Package name or directory basename.
        kind: Required member kind; members of the other kind never match.
        root: Monorepo root, used when *members* is not supplied.
        members: Pre-discovered members, to avoid a second scan.

    Returns:
        The matching member, or ``None`` when nothing matches.

    Raises:
        DuplicateWorkspaceName: If more than one member of *kind* matches.
    """
    if members is None:
        members = discover_kind(root, kind)
    matches = [m for m in members if m.kind is kind and m.matches(candidate)]
    if len(matches) > 1:
        raise DuplicateWorkspaceName(candidate, [m.path for m in matches])
    return matches[0] if matches else None


def is_internal_package(package_name: str, members: Iterable[WorkspaceMember]) -> bool:
    """Return ``True`` if *package_name* is exactly some member's name."""
    return any(member.name == package_name for member in members)
