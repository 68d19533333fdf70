"""GitHub Actions run context: event type, repository and entity number."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from comment_link.config import AppConfig

log = logging.getLogger("comment_link.context")

PULL_REQUEST_REVIEW_COMMENT_EVENT = "pull_request_review_comment"


class GitHubContext(BaseModel):
    """What the workflow run was triggered by."""

    event_name: str = ""
    owner: str = ""
    repo: str = ""
    entity_number: int | None = Field(default=None, description="Issue or pull request number from the payload")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def is_pull_request_review_comment_event(self) -> bool:
        return self.event_name == PULL_REQUEST_REVIEW_COMMENT_EVENT


def _load_payload(event_path: str | None) -> dict[str, Any]:
    """Read the event payload JSON; empty dict when missing or unreadable."""
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Failed to read event payload %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _entity_number(payload: dict[str, Any]) -> int | None:
    for key in ("issue", "pull_request"):
        entity = payload.get(key)
        if isinstance(entity, dict) and isinstance(entity.get("number"), int):
            return entity["number"]
    number = payload.get("number")
    return number if isinstance(number, int) else None


def parse_github_context(config: AppConfig) -> GitHubContext:
    """Build the run context from config (GITHUB_* env) and the event
    payload."""
    owner, repo = config.owner_and_repo
    payload = _load_payload(config.github.event_path)
    return GitHubContext(
        event_name=config.github.event_name,
        owner=owner,
        repo=repo,
        entity_number=_entity_number(payload),
    )
