"""Data models for workspace discovery and dependency installation.

``WorkspaceMember`` and ``InstallationTarget`` are plain dataclasses built
fresh for every command; ``DependencyRequest`` is a Pydantic v2 model because
it is the boundary where raw CLI flags are validated, exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from momo.errors import UnresolvedTarget


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class WorkspaceKind(str, Enum):
    """Kind of workspace member, determined by the directory it lives under."""
    APP = "app"
    LIBRARY = "package"

    @property
    def root_dir(self) -> str:
        """Name of the monorepo directory holding members of this kind."""
        return "apps" if self is WorkspaceKind.APP else "packages"

    @property
    def label(self) -> str:
        """Human-readable label used in prompts and errors."""
        return "app" if self is WorkspaceKind.APP else "package"


# ---------------------------------------------------------------------------
# Workspace members
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WorkspaceMember:
    """A buildable app or library living under ``apps/`` or ``packages/``."""

    name: str
    path: Path
    kind: WorkspaceKind
    manifest: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def dir_name(self) -> str:
        """Basename of the member directory (the lookup alias)."""
        return self.path.name

    def matches(self, candidate: str) -> bool:
        """Return ``True`` if *candidate* is this member's name or directory."""
        return self.name == candidate or self.dir_name == candidate


@dataclass(frozen=True)
class InstallationTarget:
    """Where a dependency gets installed.

    Exactly one of ``member`` / ``is_workspace_root`` is set once resolution
    succeeds.  A target with neither is unresolved and must not be installed.
    """

    member: Optional[WorkspaceMember] = None
    is_workspace_root: bool = False

    @classmethod
    def root(cls) -> "InstallationTarget":
        return cls(member=None, is_workspace_root=True)

    @classmethod
    def for_member(cls, member: WorkspaceMember) -> "InstallationTarget":
        return cls(member=member, is_workspace_root=False)

    @property
    def is_resolved(self) -> bool:
        return (self.member is not None) != self.is_workspace_root

    def require_resolved(self) -> "InstallationTarget":
        """Return ``self``, raising ``UnresolvedTarget`` if ambiguous."""
        if not self.is_resolved:
            raise UnresolvedTarget()
        return self

    def describe(self) -> str:
        """Short description for console output."""
        if self.is_workspace_root:
            return "workspace root"
        if self.member is not None:
            return self.member.name
        return "unresolved target"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class DependencyRequest(BaseModel):
    """A validated ``momo dep`` invocation."""

    package_name: str = Field(..., min_length=1, description="Package to install")
    dev: bool = Field(default=False, description="Install as a devDependency")
    app: Optional[str] = Field(default=None, description="Explicit app target")
    library: Optional[str] = Field(default=None, description="Explicit package target")
    root: bool = Field(default=False, description="Install to the workspace root")
    version: Optional[str] = Field(
        default=None, description="Version or tag for external packages"
    )

    @field_validator("package_name")
    @classmethod
    def _strip_package_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("package name must not be empty")
        return value

    @field_validator("app", "library")
    @classmethod
    def _strip_target(cls, value: Optional[str]) -> Optional[str]:
        # A supplied target stays set even when blank so it never reaches the picker.
        return None if value is None else value.strip()

    @field_validator("version")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

