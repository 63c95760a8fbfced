"""Sequential step execution with skip and failure propagation."""

from __future__ import annotations

import inspect
import logging
from typing import Generic

from saga_cli.actions.errors import SkipActionError
from saga_cli.actions.renderers import LogRenderer
from saga_cli.actions.types import Renderer, Step, StepController, StepState, TContext

logger = logging.getLogger(__name__)


class ActionSequencer(Generic[TContext]):
    """Run an ordered list of steps against one shared context.

    Each step that is not ignored is rendered as running and then as
    exactly one of skipped, completed or failed. The first failing step
    aborts the run and its exception reaches the caller unchanged.
    """

    def __init__(self, renderer: Renderer | None = None) -> None:
        self._renderer: Renderer = renderer or LogRenderer()
        self._steps: list[Step[TContext]] = []

    @property
    def steps(self) -> tuple[Step[TContext], ...]:
        return tuple(self._steps)

    def add(self, *steps: Step[TContext]) -> None:
        self._steps.extend(steps)

    async def run(self, context: TContext) -> None:
        controller = StepController()

        for index, step in enumerate(self._steps):
            if step.is_ignored(context):
                logger.debug("Step %d ignored", index)
                continue

            titles = step.resolve_titles(context)
            self._renderer.render(StepState.RUNNING, titles.get(StepState.RUNNING, ""))
            logger.debug("Step %d running: %s", index, titles.get(StepState.RUNNING, ""))

            try:
                result = step.action(context, controller)
                if inspect.isawaitable(result):
                    await result
            except SkipActionError as skip:
                label = skip.reason or titles.get(StepState.SKIPPED, "")
                logger.debug("Step %d skipped: %s", index, label)
                self._renderer.render(StepState.SKIPPED, label)
                continue
            except BaseException:
                # Cancellation and interrupts also close the step as failed.
                logger.debug("Step %d failed", index, exc_info=True)
                self._renderer.render(StepState.FAILED, titles.get(StepState.FAILED, ""))
                raise

            logger.debug("Step %d completed", index)
            self._renderer.render(StepState.COMPLETED, titles.get(StepState.COMPLETED, ""))
