"""Manifest and config builders for scaffolded monorepos.

Every JSON file the scaffolder writes is built here as a plain dictionary:
root ``package.json``, ``turbo.json``, ``tsconfig.json``, ``momo.config.json``,
the shared ``config-typescript`` package and per-component manifests.
``pnpm-workspace.yaml`` is produced with PyYAML.
"""

from __future__ import annotations

from typing import Any

import yaml

from momo.config import MomoConfig

WORKSPACE_GLOBS: list[str] = ["apps/*", "packages/*"]
CONFIG_PACKAGE_DIR = "config-typescript"


# ---------------------------------------------------------------------------
# Flavors
# ---------------------------------------------------------------------------

FLAVORS: dict[str, str] = {
    "base": "Vanilla / Base",
    "nextjs": "Next.js",
    "react": "React (Vite)",
    "node": "Node.js / Express",
}

FLAVOR_DESCRIPTIONS: dict[str, str] = {
    "base": "Vanilla / Generic TypeScript",
    "nextjs": "Next.js Optimized",
    "react": "React (Vite) Optimized",
    "node": "Node.js / Express Optimized",
}

_FLAVOR_COMPILER_OPTIONS: dict[str, dict[str, Any]] = {
    "nextjs": {
        "lib": ["dom", "dom.iterable", "esnext"],
        "module": "esnext",
        "moduleResolution": "bundler",
        "noEmit": True,
        "resolveJsonModule": True,
        "jsx": "preserve",
        "plugins": [{"name": "next"}],
    },
    "react": {
        "lib": ["dom", "dom.iterable", "esnext"],
        "module": "esnext",
        "moduleResolution": "bundler",
        "jsx": "react-jsx",
    },
    "node": {
        "lib": ["esnext"],
        "module": "node16",
        "moduleResolution": "node16",
    },
}


def flavor_config(flavor: str) -> dict[str, Any] | None:
    """Return the shared tsconfig for *flavor*; ``None`` for ``base``.

    Raises:
        KeyError: If *flavor* is unknown.
    """
    if flavor not in FLAVORS:
        raise KeyError(flavor)
    if flavor == "base":
        return None
    return {
        "extends": "./base.json",
        "display": FLAVORS[flavor],
        "compilerOptions": dict(_FLAVOR_COMPILER_OPTIONS[flavor]),
    }


# ---------------------------------------------------------------------------
# Root files
# ---------------------------------------------------------------------------


def root_package_json(
    name: str,
    manager: str,
    momo_version: str,
    manager_version: str | None = None,
) -> dict[str, Any]:
    """Build the monorepo's root ``package.json``.

    pnpm reads workspaces from ``pnpm-workspace.yaml`` and gets a
    ``packageManager`` pin; the other managers get a ``workspaces`` array.
    """
    manifest: dict[str, Any] = {
        "name": name,
        "private": True,
        "license": "MIT",
        "scripts": {
            "build": "turbo build",
            "dev": "turbo dev",
            "lint": "turbo lint",
            "clean": "turbo clean",
            "format": "biome format . --write",
            "check": "biome check .",
            "type-check": "turbo type-check",
        },
        "dependencies": {},
        "devDependencies": {
            "create-momo": f"^{momo_version}",
            "turbo": "latest",
            "typescript": "latest",
            "@biomejs/biome": "latest",
        },
        "engines": {"node": ">=18"},
    }
    if manager == "pnpm":
        manifest["packageManager"] = f"pnpm@{manager_version or 'latest'}"
    else:
        manifest["workspaces"] = list(WORKSPACE_GLOBS)
    return manifest


def pnpm_workspace_yaml() -> str:
    """Render ``pnpm-workspace.yaml`` listing the workspace globs."""
    return yaml.safe_dump({"packages": list(WORKSPACE_GLOBS)}, default_flow_style=False)


def turbo_json() -> dict[str, Any]:
    return {
        "$schema": "https://turbo.build/schema.json",
        "tasks": {
            "build": {
                "dependsOn": ["^build"],
                "inputs": ["$TURBO_DEFAULT$", ".env*"],
                "outputs": [".next/**", "!.next/cache/**", "dist/**"],
            },
            "lint": {"dependsOn": ["^lint"]},
            "dev": {"cache": False, "persistent": True},
            "type-check": {"dependsOn": ["^type-check"]},
        },
    }


def base_tsconfig() -> dict[str, Any]:
    """Root ``tsconfig.json``."""
    return {
        "compilerOptions": {
            "target": "ES2022",
            "lib": ["DOM", "DOM.Iterable", "ESNext"],
            "module": "ESNext",
            "skipLibCheck": True,
            "moduleResolution": "bundler",
            "allowImportingTsExtensions": True,
            "resolveJsonModule": True,
            "isolatedModules": True,
            "noEmit": True,
            "jsx": "react-jsx",
            "strict": True,
            "noUnusedLocals": True,
            "noUnusedParameters": True,
            "noFallthroughCasesInSwitch": True,
            "allowSyntheticDefaultImports": True,
            "forceConsistentCasingInFileNames": True,
        },
        "exclude": ["node_modules", "dist"],
    }


def momo_config(scope: str, manager: str, base: MomoConfig | None = None) -> dict[str, Any]:
    """Build the project-local ``momo.config.json`` (the project root marker)."""
    config = (base or MomoConfig()).with_value("scope", scope).with_value("manager", manager)
    return config.as_dict()


# ---------------------------------------------------------------------------
# Shared config-typescript package
# ---------------------------------------------------------------------------


def config_package_json(scope: str) -> dict[str, Any]:
    return {
        "name": f"{scope}/{CONFIG_PACKAGE_DIR}",
        "version": "0.0.0",
        "private": True,
        "files": ["*.json"],
    }


def config_base_json() -> dict[str, Any]:
    return {
        "$schema": "https://json.schemastore.org/tsconfig",
        "display": "Default",
        "compilerOptions": {
            "declaration": True,
            "declarationMap": True,
            "esModuleInterop": True,
            "incremental": False,
            "isolatedModules": True,
            "lib": ["es2022", "DOM", "DOM.Iterable"],
            "module": "NodeNext",
            "moduleDetection": "force",
            "moduleResolution": "NodeNext",
            "noUncheckedIndexedAccess": True,
            "resolveJsonModule": True,
            "skipLibCheck": True,
            "strict": True,
            "target": "ES2022",
        },
    }


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def component_package_json(name: str) -> dict[str, Any]:
    return {
        "name": name,
        "version": "0.0.0",
        "private": True,
        "scripts": {
            "build": "echo build",
            "dev": "echo dev",
        },
    }


def component_tsconfig(flavor: str) -> dict[str, Any]:
    """``tsconfig.json`` for a component extending the shared flavor file."""
    return {
        "extends": f"../../packages/{CONFIG_PACKAGE_DIR}/{flavor}.json",
        "compilerOptions": {"outDir": "dist", "rootDir": "src"},
        "include": ["src"],
        "exclude": ["node_modules", "dist"],
    }
