"""Pure selection helpers used while preparing a workflow context."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from saga_cli.services.models import Issue, StatusCategory, Transition

__all__ = [
    "build_start_jql",
    "extract_issue_key",
    "filter_transitions",
    "find_transition",
    "merge_base_branches",
    "order_starting_points",
    "qualify_issue_key",
    "sort_issues_for_start",
]


def qualify_issue_key(project_key: str, issue_id: str) -> str:
    """Turn a bare issue number into a full key (``42`` -> ``PROJ-42``)."""
    issue_id = issue_id.strip()
    if issue_id.upper().startswith(project_key.upper()):
        return issue_id.upper()
    return f"{project_key}-{issue_id}"


def extract_issue_key(project_key: str, text: str) -> str | None:
    """Find the first ``PROJECT-123`` style key in a branch name or PR body."""
    if not project_key or not text:
        return None
    match = re.search(rf"{re.escape(project_key)}-\d+", text, re.IGNORECASE)
    return match.group(0).upper() if match else None


def build_start_jql(project_key: str) -> str:
    """Issues a user can start: mine or unassigned, not yet done."""
    return (
        f'project = "{project_key}" AND '
        "(assignee IN (currentUser()) OR assignee IS EMPTY) AND "
        f"statusCategory IN ({StatusCategory.TO_DO.value}, {StatusCategory.IN_PROGRESS.value}) "
        "ORDER BY lastViewed DESC"
    )


def sort_issues_for_start(issues: Iterable[Issue]) -> list[Issue]:
    """Order issues with to-do first, assigned before unassigned.

    The sort is stable so the tracker's own ordering (last viewed) is kept
    between otherwise equal issues.
    """

    def rank(issue: Issue) -> tuple[int, int]:
        category_rank = 0 if issue.status.category == StatusCategory.TO_DO else 1
        assignee_rank = 0 if issue.is_assigned else 1
        return category_rank, assignee_rank

    return sorted(issues, key=rank)


def filter_transitions(transitions: Iterable[Transition], *categories: StatusCategory) -> list[Transition]:
    wanted = set(categories)
    return [transition for transition in transitions if transition.to_category in wanted]


def find_transition(transitions: Iterable[Transition], name: str | None) -> Transition | None:
    if not name:
        return None
    return next((transition for transition in transitions if transition.name == name), None)


def merge_base_branches(popular: Sequence[str], remote: Sequence[str]) -> list[str]:
    """Candidate PR base branches, most popular first, existing remotely."""
    remote_set = set(remote)
    merged: list[str] = []
    for branch in [*popular, *remote]:
        if branch in remote_set and branch not in merged:
            merged.append(branch)
    return merged


def order_starting_points(branches: Sequence[str], base_branch: str) -> list[str]:
    """Put the PR base branch first; keep the rest in their given order."""
    return sorted(branches, key=lambda branch: branch != base_branch)
