"""Interactive prompts built on Rich.

Every prompt converts an operator abort (Ctrl-C or end of input) into
``OperationCancelled`` so that callers never see a half-answered prompt and
the single top-level handler in ``momo.cli`` decides how to exit.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Optional, TypeVar

from rich.prompt import Prompt
from rich.table import Table

from momo.errors import OperationCancelled
from momo.utils import console, print_error

if TYPE_CHECKING:
    from momo.workspace.models import WorkspaceMember

T = TypeVar("T")

ROOT_CHOICE_LABEL = "Workspace Root"


def _ask(ask: Callable[[], T]) -> T:
    try:
        return ask()
    except (KeyboardInterrupt, EOFError) as exc:
        raise OperationCancelled() from exc


def select_option(
    message: str,
    options: Sequence[tuple[T, str]],
    default: Optional[T] = None,
) -> T:
    """Present a numbered single-choice menu and return the chosen value.

    Args:
        message: Question shown above the menu.
        options: ``(value, label)`` pairs, in display order.
        default: Value pre-selected when the operator just presses enter.

    Raises:
        OperationCancelled: If the operator aborts the prompt.
        ValueError: If *options* is empty.
    """
    if not options:
        raise ValueError("select_option needs at least one option")

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="bold cyan", justify="right")
    table.add_column()
    for index, (_, label) in enumerate(options, start=1):
        table.add_row(str(index), label)

    console.print(f"[bold]{message}[/bold]")
    console.print(table)

    choices = [str(i) for i in range(1, len(options) + 1)]
    default_choice = None
    for index, (value, _) in enumerate(options, start=1):
        if default is not None and value == default:
            default_choice = str(index)
            break

    if default_choice is None:
        answer = _ask(lambda: Prompt.ask("Select", console=console, choices=choices))
    else:
        answer = _ask(
            lambda: Prompt.ask(
                "Select", console=console, choices=choices, default=default_choice
            )
        )
    return options[int(answer) - 1][0]


def ask_text(
    message: str,
    default: Optional[str] = None,
    validate: Optional[Callable[[str], Optional[str]]] = None,
) -> str:
    """Ask for free text, re-prompting until *validate* returns ``None``.

    *validate* returns an error message for bad input, ``None`` for good input.
    """
    while True:
        if default is None:
            answer = _ask(lambda: Prompt.ask(message, console=console))
        else:
            answer = _ask(lambda: Prompt.ask(message, console=console, default=default))
        answer = answer.strip()
        error = validate(answer) if validate else None
        if error is None:
            return answer
        print_error(error)


def select_workspace(
    package_name: str, members: Sequence[WorkspaceMember]
) -> Optional[WorkspaceMember]:
    """Ask where *package_name* should be installed.

    Returns:
        The chosen member, or ``None`` when the operator picks the workspace
        root.

    Raises:
        OperationCancelled: If the operator aborts the prompt.
    """
    options: list[tuple[Optional[WorkspaceMember], str]] = [
        (member, f"{member.name} [dim]({member.kind.label})[/dim]") for member in members
    ]
    options.append(
        (None, f"[bold]{ROOT_CHOICE_LABEL}[/bold] [dim](shared dev dependencies)[/dim]")
    )
    return select_option(
        f"Where should [cyan]{package_name}[/cyan] be installed?", options
    )
