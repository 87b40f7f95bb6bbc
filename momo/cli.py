"""Command-line interface for momo.

Every command handler returns an exit status.  Failures are raised as
``MomoError`` subclasses and turned into console output and an exit status
in one place, :func:`run`; :func:`main` is the only caller of ``sys.exit``.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from momo import __version__
from momo.config import PACKAGE_MANAGERS, MomoConfig, config_path, load_config, save_config
from momo.errors import MomoError, OperationCancelled
from momo.scaffolder import add_component, create_project
from momo.scaffolder.manifests import FLAVORS
from momo.turbo import (
    REMOTE_CACHE_COMMANDS,
    REMOTE_CACHE_DESCRIPTIONS,
    TURBO_COMMANDS,
    TURBO_DESCRIPTIONS,
    clean_workspace,
    run_remote_cache,
    run_turbo,
)
from momo.utility import doctor, list_flavors
from momo.utils import (
    console,
    print_banner,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)
from momo.workspace import DependencyRequest, WorkspaceKind, add_dependency, find_project_root

COMMAND_NAMES: frozenset[str] = frozenset(
    {
        "create", "add", "dep", "get", "config",
        *TURBO_COMMANDS, *REMOTE_CACHE_COMMANDS,
        "clean", "list", "doctor",
    }
)

EPILOG = (
    "Examples:\n"
    "  momo create my-monorepo\n"
    "  momo add app web --flavor nextjs\n"
    "  momo dep zod --app web\n"
    "  momo dep @momo/ui -p admin\n"
    "  momo dep typescript -D -w\n"
    "  momo build --filter web\n"
)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_dep_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("package", help="Package to install")
    parser.add_argument(
        "-D", "--dev", action="store_true", help="Install as devDependency"
    )
    parser.add_argument("-a", "--app", default=None, help="Install into this app")
    parser.add_argument(
        "-p", "--pkg", "--package",
        dest="library",
        default=None,
        help="Install into this package",
    )
    parser.add_argument(
        "-w", "--root", action="store_true", help="Install to the workspace root"
    )
    parser.add_argument(
        "--version",
        dest="version",
        default=None,
        help="Version or tag for external packages",
    )


def _add_component_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("name", nargs="?", default=None, help="Name of the new component")
    parser.add_argument(
        "--flavor", choices=sorted(FLAVORS), default=None, help="Component flavor"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ``momo`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="momo",
        description="A modern CLI tool for creating and managing monorepo projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"create-momo {__version__}"
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    # -- Core ---------------------------------------------------------------
    create = commands.add_parser("create", help="Create a new monorepo project")
    create.add_argument(
        "name", nargs="?", default=None, help="Project directory name ('.' for here)"
    )
    create.add_argument("--scope", default=None, help="npm scope, e.g. @acme")
    create.add_argument(
        "--manager", choices=PACKAGE_MANAGERS, default=None, help="Package manager"
    )

    add = commands.add_parser(
        "add", help="Add apps, packages or dependencies to the project"
    )
    add_kinds = add.add_subparsers(dest="add_kind", metavar="<kind>")
    _add_component_arguments(add_kinds.add_parser("app", help="Add an application"))
    _add_component_arguments(add_kinds.add_parser("package", help="Add a package"))
    _add_dep_arguments(
        add_kinds.add_parser("dep", aliases=["get"], help="Add a dependency")
    )

    _add_dep_arguments(
        commands.add_parser(
            "dep", aliases=["get"], help="Add a dependency to an app, package or the root"
        )
    )

    config = commands.add_parser("config", help="Manage create-momo CLI settings")
    config_actions = config.add_subparsers(dest="config_action", metavar="<action>")
    config_actions.add_parser("list", help="List all configurations")
    config_get = config_actions.add_parser("get", help="Show one configuration value")
    config_get.add_argument("key")
    config_set = config_actions.add_parser("set", help="Set a configuration value")
    config_set.add_argument("key")
    config_set.add_argument("value")

    # -- Turbo --------------------------------------------------------------
    for name in TURBO_COMMANDS:
        turbo = commands.add_parser(name, help=TURBO_DESCRIPTIONS[name])
        turbo.add_argument(
            "-f", "--filter", default=None, help="Filter to specific package(s)"
        )
    commands.add_parser(
        "clean", help="Remove node_modules, dist and .turbo across the workspace"
    )

    # -- Remote Caching -----------------------------------------------------
    for name in REMOTE_CACHE_COMMANDS:
        commands.add_parser(name, help=REMOTE_CACHE_DESCRIPTIONS[name])

    # -- Utility ------------------------------------------------------------
    commands.add_parser("list", help="List available component flavors")
    commands.add_parser("doctor", help="Check project health")

    return parser


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _dependency_request(args: argparse.Namespace) -> DependencyRequest:
    return DependencyRequest(
        package_name=args.package,
        dev=args.dev,
        app=args.app,
        library=args.library,
        root=args.root,
        version=args.version,
    )


async def _cmd_create(args: argparse.Namespace, cwd: Path) -> int:
    await create_project(
        args.name,
        cwd=cwd,
        config=load_config(cwd),
        scope=args.scope,
        manager=args.manager,
    )
    return 0


async def _cmd_dep(args: argparse.Namespace, cwd: Path) -> int:
    request = _dependency_request(args)
    await add_dependency(request, config=load_config(cwd), cwd=cwd)
    return 0


async def _cmd_add(args: argparse.Namespace, cwd: Path) -> int:
    if args.add_kind in ("dep", "get"):
        return await _cmd_dep(args, cwd)

    kind: Optional[WorkspaceKind] = None
    name = flavor = None
    if args.add_kind is not None:
        kind = WorkspaceKind(args.add_kind)
        name, flavor = args.name, args.flavor

    await add_component(kind, name, flavor, cwd=cwd, config=load_config(cwd))
    return 0


def _cmd_config(args: argparse.Namespace, cwd: Path) -> int:
    action = args.config_action or "list"

    if action == "list":
        print_info(f"Source: {config_path(cwd)}")
        print_summary_table(load_config(cwd).as_dict(), title="Current Configuration")
        return 0

    if action == "get":
        value = load_config(cwd).get_value(args.key)
        if value is None:
            print_warning(f'Key "{args.key}" not found.')
        else:
            console.print(f"{args.key}: {value}")
        return 0

    # Environment overrides are not persisted.
    stored = MomoConfig.load(config_path(cwd))
    updated = stored.with_value(args.key, args.value)
    saved = save_config(updated, cwd)
    print_success(f"Set {args.key} to {args.value}")
    print_info(f"Saved to {saved}")
    return 0


async def _cmd_turbo(args: argparse.Namespace, cwd: Path, extra: Sequence[str]) -> int:
    await run_turbo(args.command, args.filter, extra, cwd=cwd)
    return 0


async def _dispatch(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    extra: Sequence[str],
    cwd: Path,
) -> int:
    command = args.command

    if command is None:
        if find_project_root(cwd) is not None:
            parser.print_help()
            return 0
        command = "create"
        args = argparse.Namespace(command=command, name=None, scope=None, manager=None)

    if command == "create":
        return await _cmd_create(args, cwd)
    if command == "add":
        return await _cmd_add(args, cwd)
    if command in ("dep", "get"):
        return await _cmd_dep(args, cwd)
    if command == "config":
        return _cmd_config(args, cwd)
    if command in TURBO_COMMANDS:
        return await _cmd_turbo(args, cwd, extra)
    if command in REMOTE_CACHE_COMMANDS:
        await run_remote_cache(command, cwd=cwd)
        return 0
    if command == "clean":
        await clean_workspace(cwd)
        return 0
    if command == "list":
        list_flavors()
        return 0
    if command == "doctor":
        report = doctor(cwd, load_config(cwd))
        return 0 if report.healthy else 1

    parser.error(f"unknown command: {command}")
    return 2


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def run(argv: Optional[Sequence[str]] = None, cwd: str | Path | None = None) -> int:
    """Parse *argv*, execute the command and return its exit status."""
    argv = list(sys.argv[1:] if argv is None else argv)
    cwd = Path(cwd or Path.cwd())
    parser = build_parser()

    # ``momo my-app`` is shorthand for ``momo create my-app``.
    if argv and not argv[0].startswith("-") and argv[0] not in COMMAND_NAMES:
        argv = ["create", *argv]

    args, extra = parser.parse_known_args(argv)
    if extra and args.command not in TURBO_COMMANDS:
        parser.error(f"unrecognized arguments: {' '.join(extra)}")
    print_banner("MOMO")

    try:
        return asyncio.run(_dispatch(parser, args, extra, cwd))
    except OperationCancelled as exc:
        print_warning(exc.message)
        return exc.exit_code
    except MomoError as exc:
        print_error(f"Error: {exc.message}")
        return exc.exit_code
    except ValidationError as exc:
        print_error(f"Error: {exc.errors()[0].get('msg', exc)}")
        return 1


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console entry point for ``momo``."""
    sys.exit(run(argv))


def create_main(argv: Optional[Sequence[str]] = None) -> None:
    """Console entry point for ``create-momo``: always runs ``create``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("-v", "--version", "-h", "--help"):
        main(args)
    else:
        main(["create", *args])


if __name__ == "__main__":
    main()
