"""
Error types for assor.

Errors carry an optional suggestion and can render themselves in a rich
panel for the command line.
"""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel

__all__ = [
    "AssorError",
    "RawDataError",
    "display_error",
    "format_file_not_found",
]

console = Console(stderr=True)


class AssorError(Exception):
    """Base exception for assor errors with user-friendly formatting."""

    def __init__(self, message: str, suggestion: str | None = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)

    def display(self) -> None:
        """Display the error in a formatted panel."""
        display_error(self.message, self.suggestion)


class RawDataError(AssorError, ValueError):
    """A raw strand table could not be parsed."""


def format_file_not_found(path: str | Path, file_type: str = "File") -> str:
    path = Path(path)
    msg = f"{file_type} not found: {path}"
    if not path.parent.exists():
        msg += f"\n\nThe parent directory does not exist: {path.parent}"
    return msg


def display_error(message: str, suggestion: str | None = None) -> None:
    content = f"[red bold]Error:[/red bold] {message}"
    if suggestion:
        content += f"\n\n[yellow]Suggestion:[/yellow] {suggestion}"
    console.print(Panel(content, title="assor Error", border_style="red"))
