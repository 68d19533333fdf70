"""Decide whether the agent's branch should be advertised in the comment."""

import logging

from pydantic import BaseModel, Field

from comment_link.adapters.base import GitPlatformAdapter, GitPlatformError

LOG = logging.getLogger("comment_link.branch")


class BranchStatus(BaseModel):
    """Outcome of the branch activity check."""

    has_commits: bool = Field(..., description="True when the branch has commits not on the default branch")
    branch_link: str | None = Field(default=None, description="Legacy \"[View branch](...)\" text")


def legacy_branch_link(server_url: str, owner: str, repo: str, branch: str) -> str:
    """Build the "[View branch](...)" text the formatter parses the name
    from."""
    return f"\n[View branch]({server_url.rstrip('/')}/{owner}/{repo}/tree/{branch})"


def check_branch(
    adapter: GitPlatformAdapter,
    owner: str,
    repo: str,
    branch: str | None,
    default_branch: str,
    server_url: str,
) -> BranchStatus:
    """Check whether the branch has commits on top of the default branch.

    A branch without commits is not linked. When the comparison fails
    the branch is assumed to have commits. The branch is never deleted.
    """
    if not branch:
        return BranchStatus(has_commits=False, branch_link=None)
    try:
        ahead = adapter.count_commits_ahead(f"{owner}/{repo}", default_branch, branch)
    except GitPlatformError as e:
        LOG.error("Error comparing %s with %s: %s", branch, default_branch, e)
        return BranchStatus(has_commits=True, branch_link=legacy_branch_link(server_url, owner, repo, branch))
    if ahead == 0:
        LOG.info("Branch %s has no commits ahead of %s, not linking it", branch, default_branch)
        return BranchStatus(has_commits=False, branch_link=None)
    LOG.info("Branch %s has %s commit(s) ahead of %s", branch, ahead, default_branch)
    return BranchStatus(has_commits=True, branch_link=legacy_branch_link(server_url, owner, repo, branch))
