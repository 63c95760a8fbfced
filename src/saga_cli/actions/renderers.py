"""Presentation-agnostic renderers for the action sequencer."""

from __future__ import annotations

from rich.console import Console

from saga_cli.actions.types import StepState

_PREFIXES = {
    StepState.RUNNING: "Running",
    StepState.SKIPPED: "Skipped",
    StepState.COMPLETED: "Completed",
    StepState.FAILED: "Failed",
}


class LogRenderer:
    """Default renderer: one plain line per state transition."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def render(self, state: StepState, title: str = "") -> None:
        self.console.print(f"{_PREFIXES[StepState(state)]}: {title}")


class RecordingRenderer:
    """Headless renderer that keeps every ``(state, title)`` call."""

    def __init__(self) -> None:
        self.calls: list[tuple[StepState, str]] = []

    def render(self, state: StepState, title: str = "") -> None:
        self.calls.append((StepState(state), title))

    @property
    def states(self) -> list[StepState]:
        return [state for state, _ in self.calls]

    def clear(self) -> None:
        self.calls.clear()
