"""Issue transition step shared by the start and ready workflows."""

from __future__ import annotations

from typing import Protocol, TypeVar

from saga_cli.actions import ActionSequencerError, Step, StepController, StepState
from saga_cli.formatting import emphasize
from saga_cli.services.models import Issue, Transition
from saga_cli.services.protocols import IssueTracker


class TransitionContext(Protocol):
    issue: Issue | None
    transition: Transition | None


TTransitionContext = TypeVar("TTransitionContext", bound=TransitionContext)


def _issue_and_transition(ctx: TransitionContext) -> tuple[Issue, Transition]:
    if ctx.issue is None or ctx.transition is None:
        raise ActionSequencerError("Transition step requires both an issue and a transition")
    return ctx.issue, ctx.transition


def transition_step(tracker: IssueTracker) -> Step[TTransitionContext]:
    """Move ``ctx.issue`` through ``ctx.transition``.

    Ignored when either is missing; skipped when the issue already sits in
    the transition's status.
    """

    async def action(ctx: TTransitionContext, controller: StepController) -> None:
        issue, transition = _issue_and_transition(ctx)
        if issue.status.name == transition.name:
            controller.skip(
                f"Skipped transition. {emphasize(issue.key)} is already in {emphasize(transition.name)}"
            )
        await tracker.transition_issue(issue.key, transition.id)

    def titles(ctx: TTransitionContext) -> dict[StepState, str]:
        issue, transition = _issue_and_transition(ctx)
        key = emphasize(issue.key)
        target = emphasize(transition.name)
        return {
            StepState.RUNNING: f"Transitioning {key} to {target}",
            StepState.COMPLETED: f"Transitioned {key} from {emphasize(issue.status.name)} to {target}",
            StepState.FAILED: f"Could not transition {key} to {target}",
        }

    return Step(
        titles=titles,
        action=action,
        ignore_when=lambda ctx: ctx.issue is None or ctx.transition is None,
    )
