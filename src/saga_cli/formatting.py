"""Rich markup helpers for step labels and command output."""

from __future__ import annotations

from rich.markup import escape


def emphasize(value: object) -> str:
    """Highlight a user value (issue key, branch, status) in cyan."""
    return f"[cyan]{escape(str(value))}[/cyan]"


def success(message: str) -> str:
    return f"[green]✓[/green] {message}"


def failure(message: str) -> str:
    return f"[red]✗[/red] {message}"


def notice(message: str) -> str:
    return f"[yellow]![/yellow] {message}"
