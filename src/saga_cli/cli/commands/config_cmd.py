"""``saga config`` commands for reading and changing user settings."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from saga_cli.config import CONFIG_OPTIONS, ConfigError, SagaConfig

app = typer.Typer(help="Read and change saga settings")
console = Console()


def _config() -> SagaConfig:
    return SagaConfig()


def _run_or_exit(fn):
    try:
        return fn()
    except ConfigError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc


def _display(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@app.command("get")
def get_command(key: str = typer.Argument(..., help="The key of the config option to get")) -> None:
    """Print the value of a config option."""

    def _run() -> None:
        typer.echo(_display(_config().get(key)))

    _run_or_exit(_run)


@app.command("set")
def set_command(
    key: str = typer.Argument(..., help="The key of the config option to set"),
    value: Optional[str] = typer.Argument(None, help="The new value; omit to reset the option to empty"),
) -> None:
    """Change the value of a config option."""

    def _run() -> None:
        stored = _config().set(key, value if value is not None else "")
        typer.echo(f"{key}={_display(stored)}")

    _run_or_exit(_run)


@app.command("list")
def list_command(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show option descriptions as a table"),
) -> None:
    """List every config option and its value."""

    def _run() -> None:
        config = _config()
        if not verbose:
            for key, value in config.items():
                typer.echo(f"{key}={_display(value)}")
            return

        table = Table(title="saga configuration")
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Value", style="bold")
        table.add_column("Description", style="dim")
        for option in CONFIG_OPTIONS:
            table.add_row(option.key, _display(config.get(option.key)), option.description)
        console.print(table)

    _run_or_exit(_run)


@app.command("clear")
def clear_command() -> None:
    """Reset every config option to its default."""

    def _run() -> None:
        _config().clear()
        typer.echo("Configuration reset to defaults")

    _run_or_exit(_run)
