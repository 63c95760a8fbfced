"""Errors raised by tracker, git and code-host collaborators.

Commands rely on these types to tell expected environment problems
(missing tools, no pull request) apart from unexpected crashes.
"""

from __future__ import annotations


class ServiceError(RuntimeError):
    """Base class for collaborator failures with a user-facing message."""


class GitServiceError(ServiceError):
    """Raised when git or the GitHub CLI cannot do what was asked."""


class GitMissingError(GitServiceError):
    def __init__(self) -> None:
        super().__init__(
            "Git is not installed\n"
            "  To install Git, visit https://git-scm.com/book/en/v2/Getting-Started-Installing-Git"
        )


class GitHubCliMissingError(GitServiceError):
    def __init__(self) -> None:
        super().__init__(
            "GitHub CLI is not installed\n"
            "  To install GitHub CLI, visit https://cli.github.com/manual"
        )


class GitHubCliUnauthenticatedError(GitServiceError):
    def __init__(self) -> None:
        super().__init__(
            "Unable to authenticate GitHub CLI.\n"
            "  Check your internet connection and ensure you are logged into GitHub CLI."
        )


class NoRepositoryError(GitServiceError):
    def __init__(self) -> None:
        super().__init__("Not in a git repository")


class PullRequestMissingError(GitServiceError):
    def __init__(self) -> None:
        super().__init__("No pull request found for the current branch.")


class DraftPullRequestNotSupportedError(GitServiceError):
    def __init__(self) -> None:
        super().__init__("Draft pull requests are not supported in this repository")


class UncommittedChangesError(GitServiceError):
    def __init__(self) -> None:
        super().__init__(
            "Uncommitted changes found.\n"
            "  Commit or stash your changes before continuing."
        )


class UnexpectedBranchError(GitServiceError):
    """The working copy ended up on a different branch than requested."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected current branch to be {expected} but got {actual}")


class JiraServiceError(ServiceError):
    """Raised when the issue tracker rejects a request."""


class JiraUnauthenticatedError(JiraServiceError):
    pass
