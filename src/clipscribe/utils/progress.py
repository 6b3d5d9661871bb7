"""Console logging helpers built on Rich."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console(stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable debug output."""
    global _verbose
    _verbose = enabled


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def log(message: str, *, style: str = "bold") -> None:
    """Log a timestamped message. ``message`` may contain Rich markup."""
    console.print(f"[dim]\\[{_timestamp()}][/dim] {message}", style=style, highlight=False)


def log_step(step: str, message: str) -> None:
    """Log a workflow step."""
    console.print(
        f"[dim]\\[{_timestamp()}][/dim] [bold cyan]{step}[/bold cyan] {escape(message)}",
        highlight=False,
    )


def log_debug(step: str, message: str) -> None:
    """Log a step only when verbose output is on."""
    if _verbose:
        console.print(
            f"[dim]\\[{_timestamp()}] {step} {escape(message)}[/dim]",
            highlight=False,
        )


def log_success(message: str) -> None:
    """Log a success message."""
    log(f"[green]✓[/green] {escape(message)}", style="")


def log_warning(message: str) -> None:
    """Log a warning message."""
    log(f"[yellow]⚠[/yellow] {escape(message)}", style="")


def log_error(message: str) -> None:
    """Log an error message."""
    log(f"[red]✗[/red] {escape(message)}", style="")


def show_summary(title: str, details: dict, *, border_style: str = "green") -> None:
    """Show a key/value summary panel."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    for key, value in details.items():
        table.add_row(key, escape(str(value)))

    console.print(Panel(table, title=f"[bold]{title}[/bold]", border_style=border_style))
