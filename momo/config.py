"""momo configuration.

Typed configuration for the CLI.  Settings live in ``momo.config.json`` at a
project root, falling back to a global ``~/.momo/config.json``.  The model is
a Pydantic v2 model so values are validated on load and before every save.

A command loads its configuration once through :func:`load_config` and passes
the resulting ``MomoConfig`` down explicitly; there is no module-level state.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from momo.errors import InvalidConfig
from momo.utils import load_json, print_warning, write_json

CONFIG_FILE_NAME = "momo.config.json"
PACKAGE_MANAGERS: tuple[str, ...] = ("npm", "yarn", "pnpm", "bun")

PackageManager = Literal["npm", "yarn", "pnpm", "bun"]


def global_config_dir() -> Path:
    """Directory holding the global config (``$MOMO_HOME`` or ``~/.momo``)."""
    override = os.environ.get("MOMO_HOME")
    if override:
        return Path(override)
    return Path.home() / ".momo"


def global_config_path() -> Path:
    """Path to the global ``config.json``."""
    return global_config_dir() / "config.json"


def local_config_path(cwd: str | Path | None = None) -> Path:
    """Path where a project-local ``momo.config.json`` would live."""
    return Path(cwd or Path.cwd()) / CONFIG_FILE_NAME


def config_path(cwd: str | Path | None = None) -> Path:
    """Return the active config file: local if present, else global."""
    local = local_config_path(cwd)
    if local.exists():
        return local
    return global_config_path()


class MomoConfig(BaseModel):
    """CLI settings shared by every command.

    Unknown keys are preserved so that ``momo config set`` can store values
    this version does not interpret.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    scope: str = Field(default="@momo", description="npm scope for generated packages")
    package_scope: Optional[str] = Field(
        default=None,
        alias="packageScope",
        description="Scope override used when scaffolding new projects",
    )
    author: str = Field(default="Anonymous")
    license: str = Field(default="MIT")
    manager: PackageManager = Field(default="pnpm", description="Package manager binary")

    @field_validator("scope", "package_scope")
    @classmethod
    def _scope_starts_with_at(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.startswith("@"):
            raise ValueError("scope must start with '@'")
        return value

    # ------------------------------------------------------------------
    # Key access
    # ------------------------------------------------------------------

    def as_dict(self) -> dict[str, Any]:
        """Return the settings keyed by their on-disk (camelCase) names."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def get_value(self, key: str) -> Any:
        """Look up *key* by on-disk name or field name; ``None`` if unset."""
        data = self.model_dump(by_alias=True)
        if key in data:
            return data[key]
        field = type(self).model_fields.get(key)
        if field is not None and field.alias:
            return data.get(field.alias)
        return None

    def with_value(self, key: str, value: Any) -> "MomoConfig":
        """Return a validated copy with *key* set to *value*.

        Raises:
            InvalidConfig: If the resulting configuration does not validate.
        """
        field = type(self).model_fields.get(key)
        if field is not None and field.alias:
            key = field.alias
        data = self.model_dump(by_alias=True, exclude_none=True)
        data[key] = value
        try:
            return type(self).model_validate(data)
        except ValidationError as exc:
            reason = exc.errors()[0].get("msg", str(exc))
            raise InvalidConfig(key, reason) from exc

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to *path* as JSON.

        Returns:
            The path that was written.
        """
        return write_json(self.as_dict(), path)

    @classmethod
    def load(cls, path: Path) -> "MomoConfig":
        """Load a configuration file, falling back to defaults.

        A missing file yields the defaults silently.  A file that is not
        valid JSON or does not satisfy the schema yields the defaults with a
        warning, so a broken config never blocks a command.
        """
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            return cls.model_validate(load_json(path))
        except (OSError, json.JSONDecodeError, ValidationError):
            print_warning(f"Invalid configuration in {path}. Using defaults.")
            return cls()

    def with_env_overrides(self) -> "MomoConfig":
        """Apply ``MOMO_*`` environment overrides on top of this config.

        Recognised variables (all optional):
            MOMO_MANAGER, MOMO_SCOPE, MOMO_AUTHOR, MOMO_LICENSE.
        """
        overrides: dict[str, Any] = {}
        if os.environ.get("MOMO_MANAGER"):
            overrides["manager"] = os.environ["MOMO_MANAGER"]
        if os.environ.get("MOMO_SCOPE"):
            overrides["scope"] = os.environ["MOMO_SCOPE"]
        if os.environ.get("MOMO_AUTHOR"):
            overrides["author"] = os.environ["MOMO_AUTHOR"]
        if os.environ.get("MOMO_LICENSE"):
            overrides["license"] = os.environ["MOMO_LICENSE"]

        config = self
        for key, value in overrides.items():
            config = config.with_value(key, value)
        return config


def load_config(cwd: str | Path | None = None) -> MomoConfig:
    """Load the active configuration for a command invocation."""
    return MomoConfig.load(config_path(cwd)).with_env_overrides()


def save_config(config: MomoConfig, cwd: str | Path | None = None) -> Path:
    """Save *config* to the local file when one exists, else globally."""
    local = local_config_path(cwd)
    target = local if local.exists() else global_config_path()
    return config.save(target)
