"""Utility commands: ``momo list`` and ``momo doctor``."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from momo.config import MomoConfig
from momo.scaffolder.manifests import FLAVOR_DESCRIPTIONS
from momo.utils import console, print_info, print_step, print_success, print_warning
from momo.workspace.discovery import discover_workspaces, find_duplicate_names


class HealthCheck(BaseModel):
    """Result of one doctor check."""

    name: str
    passed: bool
    required: bool = True
    detail: str = ""


class HealthReport(BaseModel):
    """All doctor checks for one project directory."""

    root: Path
    checks: list[HealthCheck] = Field(default_factory=list)

    @property
    def healthy(self) -> bool:
        return all(check.passed for check in self.checks if check.required)

    @property
    def failures(self) -> list[HealthCheck]:
        return [check for check in self.checks if check.required and not check.passed]


def list_flavors() -> dict[str, str]:
    """Print the available component flavors and return them."""
    print_info("Available component flavors:")
    for flavor, description in FLAVOR_DESCRIPTIONS.items():
        console.print(f"  [cyan]{flavor:<10}[/cyan]{description}")
    return dict(FLAVOR_DESCRIPTIONS)


def _required_paths(config: MomoConfig) -> list[tuple[str, str]]:
    paths = [
        ("package.json", "package.json"),
        ("turbo.json", "turbo.json"),
        ("packages directory", "packages"),
        ("apps directory", "apps"),
    ]
    if config.manager == "pnpm":
        paths.append(("pnpm-workspace.yaml", "pnpm-workspace.yaml"))
    return paths


def _display_path(path: Path, root: Path) -> str:
    # Symlinked members may live outside the project.
    if path.is_relative_to(root):
        return str(path.relative_to(root))
    return str(path)


def check_health(cwd: str | Path, config: MomoConfig) -> HealthReport:
    """Run every doctor check against *cwd* without printing."""
    root = Path(cwd)
    report = HealthReport(root=root)

    for label, relative in _required_paths(config):
        report.checks.append(
            HealthCheck(name=label, passed=(root / relative).exists())
        )

    duplicates = find_duplicate_names(discover_workspaces(root))
    for name, paths in duplicates.items():
        locations = ", ".join(_display_path(p, root.resolve()) for p in paths)
        report.checks.append(
            HealthCheck(
                name=f"unique workspace name '{name}'",
                passed=False,
                detail=f"declared by {locations}",
            )
        )
    return report


def doctor(cwd: str | Path, config: MomoConfig) -> HealthReport:
    """Check project health and print a checklist.

    The caller decides the exit status from ``report.healthy``.
    """
    print_info("Checking project health...")
    report = check_health(cwd, config)

    for check in report.checks:
        if check.passed:
            print_step(f"[green]✔[/green] {check.name} found")
        elif check.detail:
            print_step(f"[red]✘[/red] {check.name}: {check.detail}")
        else:
            print_step(f"[red]✘[/red] {check.name} missing")

    if report.healthy:
        print_success("Project is healthy! All required monorepo files are in place.")
    else:
        print_warning("Some critical issues were found in your project setup.")
        print_info("Make sure you are in the root of your create-momo project.")
    return report
