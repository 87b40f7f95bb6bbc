"""Exceptions raised by momo commands.

Every failure a command can hit is a ``MomoError`` subclass carrying the
process exit code it maps to.  Library code raises; only ``momo.cli.main``
turns an error into console output and a process exit.
"""

from __future__ import annotations

from pathlib import Path


class MomoError(Exception):
    """Base class for all user-facing momo failures."""

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotAProjectRoot(MomoError):
    """Raised when a command needs ``momo.config.json`` in the working directory."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        super().__init__(
            f"Not inside a create-momo project ({self.directory}). "
            "Run this command from the project root."
        )


class TargetNotFound(MomoError):
    """Raised when an explicit ``--app`` / ``--pkg`` target does not exist."""

    def __init__(self, kind_label: str, name: str) -> None:
        self.kind_label = kind_label
        self.name = name
        super().__init__(f"{kind_label.capitalize()} '{name}' not found.")


class DuplicateWorkspaceName(MomoError):
    """Raised when a lookup matches more than one workspace member."""

    def __init__(self, name: str, paths: list[Path]) -> None:
        self.name = name
        self.paths = paths
        locations = ", ".join(str(p) for p in paths)
        super().__init__(f"Workspace name '{name}' is ambiguous: {locations}")


class UnresolvedTarget(MomoError):
    """Raised when an installer command is built for a target with no destination."""

    def __init__(self) -> None:
        super().__init__("Installation target is neither the workspace root nor a member.")


class OperationCancelled(MomoError):
    """Raised when the operator cancels an interactive prompt.

    Cancelling is a clean abort, so it exits with status 0.
    """

    exit_code = 0

    def __init__(self, message: str = "Operation cancelled.") -> None:
        super().__init__(message)


class InstallerFailure(MomoError):
    """Raised when the package manager exits non-zero."""

    def __init__(self, package_name: str, returncode: int) -> None:
        self.package_name = package_name
        self.returncode = returncode
        super().__init__(f"Failed to install {package_name} (exit {returncode}).")


class CommandFailed(MomoError):
    """Raised when a forwarded command (turbo, cleanup) fails."""

    def __init__(self, command: str, returncode: int, detail: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.detail = detail
        message = f"Failed to execute {command} (exit {returncode})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidName(MomoError):
    """Raised when a project, component or scope name fails validation."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name '{name}': {reason}")


class InvalidConfig(MomoError):
    """Raised when a configuration value would not validate."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration for '{key}': {reason}")


class ProjectExists(MomoError):
    """Raised when ``create`` is run inside an existing momo project."""

    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(
            f"Existing project detected at {root}. "
            f"Move outside of '{root.name}' to create a new project."
        )
