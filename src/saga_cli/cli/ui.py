"""Rich renderers for step progress in the terminal."""

from __future__ import annotations

from typing import Callable

from rich.console import Console
from rich.status import Status
from rich.tree import Tree

from saga_cli.actions.types import StepState

_SYMBOLS = {
    StepState.RUNNING: "[cyan]○[/cyan]",
    StepState.COMPLETED: "[green]✓[/green]",
    StepState.SKIPPED: "[yellow]↓[/yellow]",
    StepState.FAILED: "[red]✗[/red]",
}


class SpinnerRenderer:
    """Spinner while a step runs, then a persisted line with its outcome."""

    def __init__(self, console: Console | None = None, spinner: str = "dots") -> None:
        self.console = console or Console()
        self.spinner = spinner
        self._status: Status | None = None

    def render(self, state: StepState, title: str = "") -> None:
        state = StepState(state)
        self.stop()

        if state is StepState.RUNNING:
            self._status = self.console.status(title, spinner=self.spinner)
            self._status.start()
            return

        self.console.print(f"{_SYMBOLS[state]} {title}")

    def stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None


class StepTracker:
    """Track and render every step of a run as a Rich tree."""

    def __init__(self, title: str):
        self.title = title
        self.steps: list[dict[str, str]] = []  # {label, status}
        self._refresh_cb: Callable[[], None] | None = None

    def attach_refresh(self, cb: Callable[[], None]) -> None:
        self._refresh_cb = cb

    def render(self, state: StepState, title: str = "") -> None:
        state = StepState(state)
        if state is StepState.RUNNING or not self.steps:
            self.steps.append({"label": title, "status": state.value})
        else:
            current = self.steps[-1]
            current["status"] = state.value
            if title:
                current["label"] = title
        self._maybe_refresh()

    def _maybe_refresh(self) -> None:
        if self._refresh_cb:
            self._refresh_cb()

    def __rich__(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = _SYMBOLS[StepState(step["status"])]
            label = step["label"]
            if step["status"] == StepState.RUNNING.value:
                tree.add(f"{symbol} [bright_black]{label}[/bright_black]")
            else:
                tree.add(f"{symbol} [white]{label}[/white]")
        return tree
