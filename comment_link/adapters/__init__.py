"""Git platform adapters (base and implementations)."""

from comment_link.adapters.base import GitPlatformAdapter, GitPlatformError
from comment_link.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
