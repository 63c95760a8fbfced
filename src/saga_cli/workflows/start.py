"""Start work on an issue: branch, assign, transition and open a draft PR."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from saga_cli.actions import ActionSequencer, Renderer, Step, StepController, StepState
from saga_cli.formatting import emphasize
from saga_cli.services.errors import UnexpectedBranchError
from saga_cli.services.models import Issue, Transition, User
from saga_cli.services.protocols import CodeHost, GitRepository, IssueTracker
from saga_cli.workflows.transition import transition_step

logger = logging.getLogger(__name__)

UPSTREAM_REMOTE = "origin"


@dataclass
class StartWorkContext:
    """Everything decided before the run, plus what the steps produce."""

    issue: Issue
    transition: Transition
    branch: str
    base_branch: str
    starting_point: str
    pull_request_title: str
    pull_request_body: str = ""
    commit_message: str = ""
    assignee_email: str | None = None

    previous_branch: str | None = None
    assignee: User | None = None
    pull_request_url: str | None = None


def _switch_branch_step(git: GitRepository) -> Step[StartWorkContext]:
    async def action(ctx: StartWorkContext, _: StepController) -> None:
        ctx.previous_branch = await git.get_current_branch()
        await git.fetch(prune=True)
        await git.checkout(ctx.starting_point)
        await git.pull()
        await git.create_branch(ctx.branch)
        await git.checkout(ctx.branch)
        await git.set_upstream(ctx.branch, UPSTREAM_REMOTE)

        current_branch = await git.get_current_branch()
        if current_branch != ctx.branch:
            raise UnexpectedBranchError(ctx.branch, current_branch)

    return Step(
        titles=lambda ctx: {
            StepState.RUNNING: f"Switching branch to {emphasize(ctx.branch)}",
            StepState.COMPLETED: f"Switched branch to {emphasize(ctx.branch)}",
            StepState.FAILED: f"Could not switch branch to {emphasize(ctx.branch)}",
        },
        action=action,
    )


def _assign_step(tracker: IssueTracker) -> Step[StartWorkContext]:
    async def action(ctx: StartWorkContext, _: StepController) -> None:
        user = await tracker.get_current_user()
        await tracker.assign_issue(ctx.issue.key, user.account_id)
        ctx.assignee = user

    return Step(
        titles=lambda ctx: {
            StepState.RUNNING: f"Assigning {emphasize(ctx.issue.key)} to {emphasize(ctx.assignee_email)}",
            StepState.COMPLETED: f"Assigned {emphasize(ctx.issue.key)} to {emphasize(ctx.assignee_email)}",
            StepState.FAILED: f"Could not assign {emphasize(ctx.issue.key)} to {emphasize(ctx.assignee_email)}",
        },
        action=action,
        ignore_when=lambda ctx: not ctx.assignee_email,
    )


def _create_pull_request_step(git: GitRepository, host: CodeHost) -> Step[StartWorkContext]:
    async def action(ctx: StartWorkContext, _: StepController) -> None:
        commits = await git.list_commits_between(ctx.base_branch, ctx.branch)
        if not commits:
            # A pull request needs at least one commit ahead of its base.
            logger.debug("No commits between %s and %s, creating an empty commit", ctx.base_branch, ctx.branch)
            await git.commit(ctx.commit_message or ctx.pull_request_title, allow_empty=True, no_verify=True)
            await git.push()

        ctx.pull_request_url = await host.create_pull_request(
            head=ctx.branch,
            base=ctx.base_branch,
            title=ctx.pull_request_title,
            body=ctx.pull_request_body,
            draft=True,
        )

    return Step(
        titles=lambda ctx: {
            StepState.RUNNING: (
                f"Creating pull request for {emphasize(ctx.branch)} into {emphasize(ctx.base_branch)}"
            ),
            StepState.COMPLETED: "Created pull request",
            StepState.FAILED: (
                f"Could not create pull request for {emphasize(ctx.branch)} into {emphasize(ctx.base_branch)}"
            ),
        },
        action=action,
    )


def build_start_sequencer(
    tracker: IssueTracker,
    git: GitRepository,
    host: CodeHost,
    *,
    renderer: Renderer | None = None,
) -> ActionSequencer[StartWorkContext]:
    """Build the sequencer that takes an issue from to-do to a draft pull request."""
    sequencer: ActionSequencer[StartWorkContext] = ActionSequencer(renderer)
    sequencer.add(
        _switch_branch_step(git),
        _assign_step(tracker),
        transition_step(tracker),
        _create_pull_request_step(git, host),
    )
    return sequencer
