"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod

from comment_link.models import Comment


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Interface the driver needs from a Git hosting platform."""

    @abstractmethod
    def get_issue_comment(self, repo: str, comment_id: int) -> Comment:
        """Fetch a comment on an issue or on a PR conversation."""
        ...

    @abstractmethod
    def get_review_comment(self, repo: str, comment_id: int) -> Comment:
        """Fetch a line-level pull request review comment."""
        ...

    @abstractmethod
    def update_issue_comment(self, repo: str, comment_id: int, body: str) -> Comment:
        """Replace the body of an issue comment."""
        ...

    @abstractmethod
    def update_review_comment(self, repo: str, comment_id: int, body: str) -> Comment:
        """Replace the body of a review comment."""
        ...

    @abstractmethod
    def count_commits_ahead(self, repo: str, base: str, head: str) -> int:
        """Return the number of commits on head that are not on base."""
        ...

    def get_pr_summary(self, repo: str, pr_number: int) -> dict[str, object]:
        """Return state and comment counts of a PR. Override if needed."""
        raise NotImplementedError("get_pr_summary")
