"""comment-link entry point.

Runs as the last step of a workflow: fetches the tracking comment, rewrites
it with the job outcome, duration and links, and writes it back.
Usage: comment-link [--config PATH] [--check] [--dry-run].
"""

import argparse
import logging
import sys
from pathlib import Path

from comment_link.adapters import GitHubAdapter, GitPlatformAdapter, GitPlatformError
from comment_link.branch import check_branch
from comment_link.config import AppConfig, load_config
from comment_link.context import GitHubContext, parse_github_context
from comment_link.execution import read_execution_details
from comment_link.formatter import update_comment_body
from comment_link.logging import CommentLinkLogging
from comment_link.models import Comment, CommentUpdateInput

log = logging.getLogger("comment_link")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="comment-link",
        description="Update the tracking comment with the job outcome and links",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file (optional; env is used otherwise)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the updated body instead of writing it back",
    )
    return parser.parse_args(argv)


def _log_fetch_debug_info(adapter: GitPlatformAdapter, context: GitHubContext, comment_id: int) -> None:
    log.error("Failed to fetch comment. Debug info:")
    log.error("Comment ID: %s", comment_id)
    log.error("Event name: %s", context.event_name)
    log.error("Entity number: %s", context.entity_number)
    log.error("Repository: %s", context.full_name)
    if context.entity_number is None:
        return
    try:
        pr = adapter.get_pr_summary(context.full_name, context.entity_number)
    except (GitPlatformError, NotImplementedError):
        log.error("Could not fetch PR info for debugging")
        return
    log.info("PR state: %s", pr.get("state"))
    log.info("PR comments count: %s", pr.get("comments"))
    log.info("PR review comments count: %s", pr.get("review_comments"))


def fetch_comment(adapter: GitPlatformAdapter, context: GitHubContext, comment_id: int) -> Comment:
    """Fetch the tracking comment.

    Review comments and issue comments live in separate id namespaces:
    for review comment events the pulls API is tried first, then the
    issues API.
    """
    repo = context.full_name
    if context.is_pull_request_review_comment_event:
        log.info("Fetching PR review comment %s", comment_id)
        try:
            comment = adapter.get_review_comment(repo, comment_id)
            log.info("Successfully fetched as PR review comment")
            return comment
        except GitPlatformError as e:
            log.warning("Could not fetch %s as PR review comment: %s", comment_id, e)

    log.info("Fetching issue comment %s", comment_id)
    try:
        comment = adapter.get_issue_comment(repo, comment_id)
    except GitPlatformError:
        _log_fetch_debug_info(adapter, context, comment_id)
        raise
    log.info("Successfully fetched as issue comment")
    return comment


def write_comment(adapter: GitPlatformAdapter, repo: str, comment: Comment, body: str) -> None:
    """Write the body back through the API the comment was fetched from."""
    kind = "PR review" if comment.is_review_comment else "issue"
    try:
        if comment.is_review_comment:
            adapter.update_review_comment(repo, comment.id, body)
        else:
            adapter.update_issue_comment(repo, comment.id, body)
    except GitPlatformError as e:
        log.error("Failed to update %s comment: %s", kind, e)
        raise
    log.info("Updated %s comment %s with job link", kind, comment.id)


def run_update(
    config: AppConfig,
    adapter: GitPlatformAdapter | None = None,
    dry_run: bool = False,
) -> str:
    """Fetch, rewrite and store the tracking comment; return the new body."""
    comment_id = config.claude.comment_id
    if comment_id is None:
        raise ValueError("CLAUDE_COMMENT_ID is not set")
    if adapter is None:
        token = config.github_token_resolved
        if not token:
            raise ValueError("GITHUB_TOKEN is not set")
        adapter = GitHubAdapter(token=token, api_url=config.github.api_url)

    context = parse_github_context(config)
    comment = fetch_comment(adapter, context, comment_id)

    branch = config.claude.branch
    status = check_branch(
        adapter,
        context.owner,
        context.repo,
        branch,
        config.action.default_branch,
        config.github.server_url,
    )

    update = CommentUpdateInput(
        current_body=comment.body,
        action_failed=config.claude.failed,
        execution_details=read_execution_details(config.action.output_file),
        job_url=config.job_url,
        branch_link=status.branch_link,
        branch_name=branch if status.has_commits else None,
        trigger_username=config.action.trigger_username,
        server_url=config.github.server_url,
    )
    body = update_comment_body(update)

    if dry_run:
        print(body)
    else:
        write_comment(adapter, context.full_name, comment, body)
    return body


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config and update the comment."""
    args = parse_args(argv)

    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            log.warning("config.yaml not found, using config.example.yaml")

    config = load_config(config_path)

    if args.check:
        print("Config OK:", config.github.repository, config.github.run_id)
        return 0

    CommentLinkLogging(config.logging).setup()
    try:
        run_update(config, dry_run=args.dry_run)
    except Exception as e:
        log.exception("Error updating comment with job link: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
