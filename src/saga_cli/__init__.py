"""
saga - move Jira issues from to-do to review without leaving the terminal.

Usage:
    saga config list
    saga config set project PROJ
"""

import typer

from saga_cli.cli.commands import config_app

__version__ = "0.1.0"

app = typer.Typer(
    name="saga",
    help="Developer workflow for Jira, git and GitHub",
    add_completion=False,
)
app.add_typer(config_app, name="config")


@app.callback()
def callback() -> None:
    """Developer workflow for Jira, git and GitHub."""


def main():
    app()


if __name__ == "__main__":
    main()
