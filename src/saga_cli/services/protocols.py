"""Capability interfaces the workflows require from external collaborators.

Concrete Jira, git and GitHub CLI adapters live outside this package; any
object with these async methods can be handed to a workflow builder.
"""

from __future__ import annotations

from typing import Protocol

from saga_cli.services.models import User


class IssueTracker(Protocol):
    async def get_current_user(self) -> User: ...

    async def assign_issue(self, issue_key: str, account_id: str) -> None: ...

    async def transition_issue(self, issue_key: str, transition_id: str) -> None: ...


class GitRepository(Protocol):
    async def fetch(self, *, prune: bool = False) -> None: ...

    async def checkout(self, branch: str) -> None: ...

    async def pull(self) -> None: ...

    async def create_branch(self, branch: str) -> None: ...

    async def set_upstream(self, branch: str, remote: str) -> None: ...

    async def get_current_branch(self) -> str: ...

    async def list_commits_between(self, base: str, head: str) -> list[str]: ...

    async def commit(self, message: str, *, allow_empty: bool = False, no_verify: bool = False) -> None: ...

    async def push(self) -> None: ...


class CodeHost(Protocol):
    async def create_pull_request(
        self,
        *,
        head: str,
        base: str,
        title: str,
        body: str,
        draft: bool,
    ) -> str:
        """Open a pull request and return its URL."""
        ...

    async def mark_pull_request_as_ready(self) -> None: ...

    async def mark_pull_request_as_draft(self) -> None: ...

    async def add_reviewers(self, reviewers: list[str]) -> None: ...
