"""Name validation for projects, components and npm scopes.

Each validator returns an error message for invalid input and ``None`` for
valid input, so it can be passed straight to ``momo.prompts.ask_text``.
"""

from __future__ import annotations

import re
from typing import Optional

from momo.errors import InvalidName

_PACKAGE_NAME_RE = re.compile(r"^(?:@[a-z0-9-*~][a-z0-9-*._~]*/)?[a-z0-9-~][a-z0-9-._~]*$")
_SCOPE_RE = re.compile(r"^@[a-z0-9-~][a-z0-9-._~]*$")
_RESERVED_NAMES = frozenset({"node_modules", "favicon.ico"})
MAX_NAME_LENGTH = 214


def project_name(name: Optional[str]) -> Optional[str]:
    """Validate *name* against npm package naming rules.

    Examples::

        project_name("my-app")      -> None
        project_name("@momo/ui")    -> None
        project_name("My App")      -> "Project name must be a valid npm package name ..."
    """
    if not name:
        return "Project name cannot be empty"
    if len(name) > MAX_NAME_LENGTH:
        return "Project name is too long"
    if not _PACKAGE_NAME_RE.match(name):
        return (
            "Project name must be a valid npm package name "
            "(lowercase, no spaces, allowed special chars: -_.)"
        )
    if name in _RESERVED_NAMES:
        return "Project name is reserved"
    return None


def scope_name(scope: Optional[str]) -> Optional[str]:
    """Validate an npm scope such as ``@momo``."""
    if not scope:
        return "Scope cannot be empty"
    if not _SCOPE_RE.match(scope):
        return "Scope must start with @ and be a valid npm scope"
    return None


def default_scope(project: str) -> str:
    """Derive a scope from a project name: ``"My_App!"`` -> ``"@myapp"``."""
    return "@" + re.sub(r"[^a-zA-Z0-9-]", "", project).lower()


def require_valid(name: str, validator=project_name) -> str:
    """Return *name* unchanged, raising ``InvalidName`` if *validator* rejects it."""
    error = validator(name)
    if error is not None:
        raise InvalidName(name, error)
    return name
