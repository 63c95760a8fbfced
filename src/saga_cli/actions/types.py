"""Step definitions consumed by :class:`~saga_cli.actions.sequencer.ActionSequencer`.

Workflows describe their work declaratively as a list of :class:`Step`
objects. The sequencer owns the HOW: state transitions, rendering and
failure propagation.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Generic, NoReturn, Protocol, TypeVar

from saga_cli.actions.errors import SkipActionError

TContext = TypeVar("TContext")


class StepState(str, Enum):
    """Execution state of a single step within a run."""

    RUNNING = "running"
    SKIPPED = "skipped"
    COMPLETED = "completed"
    FAILED = "failed"


StepTitles = Mapping[StepState, str]
TitleResolver = Callable[[TContext], "StepTitles | None"]
Action = Callable[[TContext, "StepController"], "Awaitable[None] | None"]


class StepController:
    """Handle passed to every action, letting it abort itself as skipped."""

    def skip(self, reason: str | None = None) -> NoReturn:
        """Skip the current step.

        Args:
            reason: Label to render for the skipped state. When omitted the
                step's own ``SKIPPED`` title is used.
        """
        raise SkipActionError(reason)


class Renderer(Protocol):
    """Sink turning step state transitions into user-visible feedback."""

    def render(self, state: StepState, title: str = "") -> None: ...


@dataclass(frozen=True)
class Step(Generic[TContext]):
    """A single unit of orchestrated work.

    ``titles`` is called with the context as it is when the step starts,
    so labels may use values written by earlier steps. ``rollback`` is
    stored for callers that want to compensate after a failed run; the
    sequencer never calls it.
    """

    titles: TitleResolver[TContext]
    action: Action[TContext]
    ignore_when: Callable[[TContext], bool] | None = None
    rollback: Action[TContext] | None = None

    def is_ignored(self, context: TContext) -> bool:
        return self.ignore_when is not None and bool(self.ignore_when(context))

    def resolve_titles(self, context: TContext) -> dict[StepState, str]:
        resolved = self.titles(context) or {}
        return {StepState(state): title for state, title in resolved.items() if title}
