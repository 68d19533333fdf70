"""Update a CI tracking comment with the job outcome, duration and links."""

from comment_link.formatter import format_duration, update_comment_body
from comment_link.models import Comment, CommentUpdateInput, ExecutionDetails

__all__ = [
    "Comment",
    "CommentUpdateInput",
    "ExecutionDetails",
    "format_duration",
    "update_comment_body",
]
