import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

_console = Console()


def is_interactive() -> bool:
    """Check if we are in an interactive TTY session."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def print_step(title: str) -> None:
    """Print a section header."""
    _console.rule(f"[bold blue]{title}[/]")


def print_success(message: str) -> None:
    _console.print(f"[bold green]SUCCESS:[/] {escape(message)}")


def print_warning(message: str) -> None:
    _console.print(f"[bold yellow]WARNING:[/] {escape(message)}")


def print_error(message: str, exit_code: Optional[int] = None) -> None:
    """Print an error message and optionally exit."""
    _console.print(f"[bold red]ERROR:[/] {escape(message)}")

    if exit_code is not None:
        sys.exit(exit_code)


def print_table(title: str, columns: List[str], rows: List[List[str]]) -> None:
    """Print a table with a title; an empty table prints a placeholder row."""
    table = Table(title=title)
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*row)
    if not rows:
        table.add_row(*(["(No data)"] + [""] * (len(columns) - 1)))
    _console.print(table)


def ask_input(prompt_text: str, default: Optional[str] = None, required: bool = True) -> str:
    """
    Prompt for user input (interactive only).
    If not interactive, returns default if present, else raises generic error.
    """
    if not is_interactive():
        if default is not None:
            return default
        raise RuntimeError("Interactive input required but not in TTY mode.")

    while True:
        if default:
            value = str(Prompt.ask(prompt_text, default=default, console=_console))
        else:
            value = str(Prompt.ask(prompt_text, default="", show_default=False, console=_console))
        if value.strip() or not required:
            return value
        print_warning("A value is required.")


def ask_confirm(prompt_text: str, default: bool = False) -> bool:
    """Ask for yes/no confirmation."""
    if not is_interactive():
        return default

    return bool(Confirm.ask(prompt_text, default=default, console=_console))


def ask_choice(prompt_text: str, choices: List[str], default: Optional[str] = None) -> str:
    """Prompt for one of a fixed set of values."""
    if not is_interactive():
        if default is not None:
            return default
        raise RuntimeError("Interactive input required but not in TTY mode.")

    if default in choices:
        return str(Prompt.ask(prompt_text, choices=choices, default=default, console=_console))
    return str(Prompt.ask(prompt_text, choices=choices, console=_console))
