"""Rewrite a tracking comment body once the job has finished.

The comment starts as a "Claude Code is working…" placeholder. When the job
completes, the placeholder is replaced by a header block:

    **Claude finished @user's task in 1m 5s**
    —— [View job](https://github.com/owner/repo/actions/runs/1)
    • [`branch`](https://github.com/owner/repo/tree/branch)

    ---
    <rest of the original body>

Stale links and a header block left by an earlier run are removed first, so
formatting the same comment twice never duplicates the link lines.
"""

import math
import re
from urllib.parse import urlsplit

from comment_link.models import CommentUpdateInput

# "Claude Code is working…" (or "..."), optionally followed by an inline spinner image
_WORKING_RE = re.compile(
    r"Claude Code is working(?:…|\.{1,3})?(?:[ \t]*<img[^>]*>)?[ \t]*",
    re.IGNORECASE,
)
_MENTION_RE = re.compile(r"(?<![\w@])@([\w-]+)")
_TREE_URL_RE = re.compile(r"\(\s*[^)\s]*?/tree/([^)\s]+)\s*\)")

# Legacy links removed anywhere in the body (matched per line)
_STALE_LINK_RES = (
    re.compile(r"[ \t]*\[View job run\]\([^)]*\)"),
    re.compile(r"[ \t]*\[View branch\]\([^)]*\)"),
)
# Header block written by an earlier run: header, job line, optional branch bullet
_STALE_HEADER_RE = re.compile(
    r"\*\*Claude (?:finished|encountered an error)[^\n]*(?:\n|\Z)"
    r"(?:[ \t]*—— \[View job\]\([^)]*\)[ \t\r]*(?:\n|\Z))?"
    r"(?:[ \t]*• \[`[^`\n]*`\]\([^)\s]*\)[ \t\r]*(?:\n|\Z))?"
)
_LEADING_SEPARATOR_RE = re.compile(r"\A\s*---[ \t\r]*(?:\n|\Z)")
_LEADING_BLANK_LINES_RE = re.compile(r"\A(?:[ \t\r]*\n)+")

SEPARATOR = "---"


def format_duration(duration_ms: float | None) -> str | None:
    """Format milliseconds as "45s" or "1m 14s".

    Returns None when the duration is missing, non-finite or not
    positive. Seconds are rounded down.
    """
    if duration_ms is None or not math.isfinite(duration_ms) or duration_ms <= 0:
        return None
    ms = int(duration_ms)
    if ms < 60000:
        return f"{ms // 1000}s"
    return f"{ms // 60000}m {(ms % 60000) // 1000}s"


def extract_username(body: str) -> str | None:
    """Return the first @mention after the working placeholder, if any."""
    working = _WORKING_RE.search(body)
    start = working.end() if working else 0
    mention = _MENTION_RE.search(body, start)
    return mention.group(1) if mention else None


def extract_branch_name(branch_link: str | None) -> str | None:
    """Return the branch name from a legacy "[View branch](.../tree/<name>)"
    link."""
    if not branch_link:
        return None
    match = _TREE_URL_RE.search(branch_link)
    return match.group(1) if match else None


def repo_from_job_url(job_url: str) -> tuple[str, str]:
    """Return (owner, repo) from the first two path segments of the job URL.

    Both are empty strings when the URL does not have that shape.
    """
    try:
        path = urlsplit(job_url).path
    except ValueError:
        return "", ""
    segments = [s for s in path.split("/") if s]
    if len(segments) < 2:
        return "", ""
    return segments[0], segments[1]


def strip_working_placeholder(body: str) -> str:
    """Remove the "Claude Code is working…" indicator and its spinner."""
    return _WORKING_RE.sub("", body)


def strip_legacy_links(body: str) -> str:
    """Remove legacy "[View job run]" and "[View branch]" links.

    A line that holds nothing but such a link is dropped entirely; other
    text on the line is kept.
    """
    kept = []
    for line in body.split("\n"):
        cleaned = line
        for pattern in _STALE_LINK_RES:
            cleaned = pattern.sub("", cleaned)
        if cleaned == line:
            kept.append(line)
        elif cleaned.strip():
            kept.append(cleaned.rstrip())
    return "\n".join(kept)


def _strip_stale_header(body: str) -> str:
    """Remove the header block and separator an earlier run put at the top.

    Job and branch lines further down the body are user content and stay.
    """
    text = body.lstrip()
    match = _STALE_HEADER_RE.match(text)
    if not match:
        return body
    return _LEADING_SEPARATOR_RE.sub("", text[match.end() :], count=1)


def build_header(action_failed: bool, username: str | None, duration: str | None) -> str:
    if action_failed:
        if duration:
            return f"**Claude encountered an error after {duration}**"
        return "**Claude encountered an error**"
    subject = f"@{username}'s task" if username else "the task"
    suffix = f" in {duration}" if duration else ""
    return f"**Claude finished {subject}{suffix}**"


def build_branch_line(branch_name: str, job_url: str, server_url: str) -> str:
    owner, repo = repo_from_job_url(job_url)
    url = f"{server_url.rstrip('/')}/{owner}/{repo}/tree/{branch_name}"
    return f"• [`{branch_name}`]({url})"


def update_comment_body(data: CommentUpdateInput) -> str:
    """Build the final comment body from the current body and the job
    outcome.

    Args:
        data: Current body plus the facts about the finished job.

    Returns:
        Header, job link, optional branch link, a "---" separator and the
        remaining original content, in that order.
    """
    username = data.trigger_username or extract_username(data.current_body)
    duration = format_duration(data.execution_details.duration_ms if data.execution_details else None)
    branch_name = data.branch_name or extract_branch_name(data.branch_link)

    body = strip_working_placeholder(data.current_body)
    body = strip_legacy_links(body)
    body = _strip_stale_header(body)
    rest = _LEADING_BLANK_LINES_RE.sub("", body).rstrip()

    lines = [
        build_header(data.action_failed, username, duration),
        f"—— [View job]({data.job_url})",
    ]
    if branch_name:
        lines.append(build_branch_line(branch_name, data.job_url, data.server_url))
    return "\n".join(lines) + f"\n\n{SEPARATOR}\n" + rest
