"""Shared helpers for ``renew``.

Provides the Rich console used for every user-facing message, small output
helpers built on top of it, and the name conversions used when deriving
Elixir module names from application names.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def camelize(value: str) -> str:
    """Convert an application name to an Elixir module alias.

    Underscores separate words and ``/`` separates nested modules, the same
    way ``Macro.camelize`` does.

    Examples::

        camelize("hello_world")  -> "HelloWorld"
        camelize("shop/api")     -> "Shop.Api"
    """
    parts = []
    for segment in value.split("/"):
        words = [word for word in segment.split("_") if word]
        parts.append("".join(word[0].upper() + word[1:] for word in words))
    return ".".join(part for part in parts if part)


def elixir_atom(value: str) -> str:
    """Render ``value`` as an Elixir atom literal (``shop`` -> ``:shop``)."""
    return value if value.startswith(":") else f":{value}"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


OPERATION_STYLES: dict[str, str] = {
    "creating": "green",
    "appending": "cyan",
}


def print_operation(action: str, path: str | Path) -> None:
    """Print a ``* creating path`` style line for a filesystem operation."""
    color = OPERATION_STYLES.get(action, "white")
    console.print(f"[{color}]* {action}[/{color}] {path}")


def print_summary_table(rows: list[tuple[str, str]], title: str = "Summary") -> None:
    """Print a two-column table.

    Args:
        rows: Ordered ``(label, value)`` pairs.  Labels may repeat.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in rows:
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_panel(message: str, style: str = "green") -> None:
    """Print *message* inside a bordered panel."""
    console.print(Panel(message, style=style))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
