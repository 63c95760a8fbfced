"""Run a workflow from a command and turn its failure into an exit code."""

from __future__ import annotations

import asyncio
import logging
from typing import TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from saga_cli.actions import ActionSequencer
from saga_cli.crash_log import CrashLog
from saga_cli.formatting import failure, notice
from saga_cli.services.errors import ServiceError

logger = logging.getLogger(__name__)

TContext = TypeVar("TContext")


def run_workflow(
    sequencer: ActionSequencer[TContext],
    context: TContext,
    *,
    crash_log: CrashLog,
    console: Console | None = None,
) -> TContext:
    """Run ``sequencer`` to completion and return the populated context.

    Collaborator errors are expected (missing tools, no pull request) and
    only print their message. ``typer.Exit`` and ``typer.Abort`` raised by a
    step pass through untouched. Anything else writes the crash log.
    """
    console = console or Console()

    try:
        asyncio.run(sequencer.run(context))
    except ServiceError as exc:
        logger.info("Workflow stopped: %s", exc)
        console.print()
        console.print(failure(escape(str(exc))))
        console.print()
        raise typer.Exit(1) from exc
    except (typer.Exit, typer.Abort):
        raise
    except Exception as exc:
        logger.exception("Workflow crashed")
        path = crash_log.save()
        console.print()
        console.print(notice(f"Something went wrong. A crash log has been generated.\n  {escape(str(path))}"))
        console.print()
        raise typer.Exit(1) from exc

    return context
