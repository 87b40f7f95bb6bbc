"""Tests for manifest builders (momo.scaffolder.manifests)."""

from __future__ import annotations

import pytest
import yaml

from momo.config import MomoConfig
from momo.scaffolder import manifests

pytestmark = pytest.mark.unit


class TestFlavors:
    def test_flavor_names(self):
        assert list(manifests.FLAVORS) == ["base", "nextjs", "react", "node"]
        assert set(manifests.FLAVOR_DESCRIPTIONS) == set(manifests.FLAVORS)

    def test_base_has_no_extra_file(self):
        assert manifests.flavor_config("base") is None

    @pytest.mark.parametrize("flavor", ["nextjs", "react", "node"])
    def test_flavor_extends_base(self, flavor: str):
        config = manifests.flavor_config(flavor)
        assert config["extends"] == "./base.json"
        assert config["display"] == manifests.FLAVORS[flavor]
        assert "module" in config["compilerOptions"]

    def test_flavor_config_is_a_copy(self):
        manifests.flavor_config("react")["compilerOptions"]["jsx"] = "mutated"
        assert manifests.flavor_config("react")["compilerOptions"]["jsx"] == "react-jsx"

    def test_unknown_flavor(self):
        with pytest.raises(KeyError):
            manifests.flavor_config("svelte")


class TestRootFiles:
    def test_pnpm_root_package_json(self):
        manifest = manifests.root_package_json("demo", "pnpm", "0.2.0", "9.1.0")
        assert manifest["name"] == "demo"
        assert manifest["private"] is True
        assert manifest["packageManager"] == "pnpm@9.1.0"
        assert "workspaces" not in manifest
        assert manifest["devDependencies"]["create-momo"] == "^0.2.0"
        assert manifest["scripts"]["build"] == "turbo build"

    @pytest.mark.parametrize("manager", ["npm", "yarn", "bun"])
    def test_other_managers_declare_workspaces(self, manager: str):
        manifest = manifests.root_package_json("demo", manager, "0.2.0")
        assert manifest["workspaces"] == ["apps/*", "packages/*"]
        assert "packageManager" not in manifest

    def test_pnpm_without_version(self):
        assert manifests.root_package_json("demo", "pnpm", "0.2.0")["packageManager"] == "pnpm@latest"

    def test_pnpm_workspace_yaml(self):
        assert yaml.safe_load(manifests.pnpm_workspace_yaml()) == {
            "packages": ["apps/*", "packages/*"]
        }

    def test_turbo_json(self):
        tasks = manifests.turbo_json()["tasks"]
        assert tasks["build"]["dependsOn"] == ["^build"]
        assert tasks["dev"]["persistent"] is True

    def test_base_tsconfig(self):
        assert manifests.base_tsconfig()["compilerOptions"]["strict"] is True

    def test_momo_config(self):
        data = manifests.momo_config("@acme", "bun")
        assert data["scope"] == "@acme"
        assert data["manager"] == "bun"
        assert data["license"] == "MIT"

    def test_momo_config_keeps_base_values(self):
        data = manifests.momo_config("@acme", "npm", MomoConfig(author="Ada"))
        assert data["author"] == "Ada"
        assert data["scope"] == "@acme"


class TestComponentFiles:
    def test_config_package_json(self):
        assert manifests.config_package_json("@acme")["name"] == "@acme/config-typescript"

    def test_config_base_json(self):
        assert manifests.config_base_json()["compilerOptions"]["target"] == "ES2022"

    def test_component_package_json(self):
        manifest = manifests.component_package_json("@momo/ui")
        assert manifest["name"] == "@momo/ui"
        assert manifest["private"] is True

    def test_component_tsconfig(self):
        tsconfig = manifests.component_tsconfig("nextjs")
        assert tsconfig["extends"] == "../../packages/config-typescript/nextjs.json"
        assert tsconfig["include"] == ["src"]
