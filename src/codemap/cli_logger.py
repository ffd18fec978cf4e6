"""CLI output utilities for consistent messaging.

Status messages go to stderr so that command output written to stdout
(JSON schemas, tables) can be piped.
"""

from rich.console import Console

_console = Console()
_status_console = Console(stderr=True)


def success(message: str) -> None:
    """Print a success message with green checkmark."""
    _status_console.print(f"[green]✓[/green] {message}")


def error(message: str) -> None:
    """Print an error message with red X."""
    _status_console.print(f"[red]✗[/red] {message}")


def warning(message: str) -> None:
    """Print a warning message with yellow exclamation."""
    _status_console.print(f"[yellow]![/yellow] {message}")


def info(message: str) -> None:
    """Print an info message to stdout (no prefix)."""
    _console.print(message)


def dim(message: str) -> None:
    """Print a dimmed secondary message."""
    _status_console.print(f"[dim]{message}[/dim]")
