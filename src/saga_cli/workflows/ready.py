"""Mark an issue's pull request ready for review, or undo that."""

from __future__ import annotations

from dataclasses import dataclass, field

from saga_cli.actions import ActionSequencer, Renderer, Step, StepController, StepState
from saga_cli.formatting import emphasize
from saga_cli.services.errors import DraftPullRequestNotSupportedError
from saga_cli.services.models import Issue, Transition
from saga_cli.services.protocols import CodeHost, IssueTracker
from saga_cli.workflows.transition import transition_step


@dataclass
class ReadyContext:
    issue: Issue | None = None
    transition: Transition | None = None
    reviewers: list[str] = field(default_factory=list)


def _mark_ready_step(host: CodeHost) -> Step[ReadyContext]:
    async def action(ctx: ReadyContext, _: StepController) -> None:
        await host.mark_pull_request_as_ready()

    return Step(
        titles=lambda ctx: {
            StepState.RUNNING: "Marking pull request as ready for review",
            StepState.COMPLETED: "Marked pull request as ready for review",
            StepState.FAILED: "Could not mark pull request as ready for review",
        },
        action=action,
    )


def _mark_draft_step(host: CodeHost) -> Step[ReadyContext]:
    async def action(ctx: ReadyContext, controller: StepController) -> None:
        try:
            await host.mark_pull_request_as_draft()
        except DraftPullRequestNotSupportedError as exc:
            controller.skip(f"Skipped marking pull request as draft. {exc}")

    return Step(
        titles=lambda ctx: {
            StepState.RUNNING: "Marking pull request as draft",
            StepState.COMPLETED: "Marked pull request as draft",
            StepState.FAILED: "Could not mark pull request as draft",
        },
        action=action,
    )


def _request_reviewers_step(host: CodeHost) -> Step[ReadyContext]:
    async def action(ctx: ReadyContext, controller: StepController) -> None:
        if not ctx.reviewers:
            controller.skip("No reviewers requested for review")
        await host.add_reviewers(ctx.reviewers)

    return Step(
        titles=lambda ctx: {
            StepState.RUNNING: "Requesting reviewers for review",
            StepState.COMPLETED: f"Requested {emphasize(', '.join(ctx.reviewers))} for review",
            StepState.FAILED: "Could not request reviewers for review",
        },
        action=action,
    )


def build_ready_sequencer(
    tracker: IssueTracker,
    host: CodeHost,
    *,
    undo: bool = False,
    renderer: Renderer | None = None,
) -> ActionSequencer[ReadyContext]:
    """Build the sequencer that hands an issue over for review.

    With ``undo`` the pull request goes back to draft instead and no
    reviewers are requested; the caller passes the working status as the
    transition.
    """
    sequencer: ActionSequencer[ReadyContext] = ActionSequencer(renderer)
    sequencer.add(transition_step(tracker))

    if undo:
        sequencer.add(_mark_draft_step(host))
        return sequencer

    sequencer.add(_mark_ready_step(host), _request_reviewers_step(host))
    return sequencer
