"""Tracker domain records shared by workflows and adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StatusCategory(str, Enum):
    """Jira status category keys."""

    UNDEFINED = "undefined"
    TO_DO = "new"
    IN_PROGRESS = "indeterminate"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class IssueStatus:
    name: str
    category: StatusCategory = StatusCategory.UNDEFINED


@dataclass(frozen=True, slots=True)
class User:
    account_id: str
    email: str
    display_name: str = ""


@dataclass(frozen=True, slots=True)
class Issue:
    """Subset of a tracker issue used by the workflows."""

    key: str
    summary: str
    status: IssueStatus
    url: str = ""
    assignee: User | None = None

    @property
    def is_assigned(self) -> bool:
        return self.assignee is not None


@dataclass(frozen=True, slots=True)
class Transition:
    """Workflow transition available on an issue."""

    id: str
    name: str
    to_category: StatusCategory = StatusCategory.UNDEFINED
