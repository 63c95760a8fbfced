"""Collaborator surface: domain records, capability protocols and errors."""

from saga_cli.services.models import Issue, IssueStatus, StatusCategory, Transition, User
from saga_cli.services.protocols import CodeHost, GitRepository, IssueTracker

__all__ = [
    "CodeHost",
    "GitRepository",
    "Issue",
    "IssueStatus",
    "IssueTracker",
    "StatusCategory",
    "Transition",
    "User",
]
