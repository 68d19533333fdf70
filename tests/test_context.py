"""Tests for GitHub Actions context parsing."""

import json
from pathlib import Path

from comment_link.config import AppConfig, GitHubConfig
from comment_link.context import parse_github_context


def _config(event_name: str = "issue_comment", event_path: str | None = None) -> AppConfig:
    return AppConfig(
        github=GitHubConfig(repository="owner/repo", event_name=event_name, event_path=event_path),
    )


def test_repository_and_event() -> None:
    context = parse_github_context(_config())
    assert context.owner == "owner"
    assert context.repo == "repo"
    assert context.full_name == "owner/repo"
    assert context.event_name == "issue_comment"
    assert context.is_pull_request_review_comment_event is False
    assert context.entity_number is None


def test_review_comment_event(tmp_path: Path) -> None:
    path = tmp_path / "event.json"
    path.write_text(json.dumps({"pull_request": {"number": 7}, "comment": {"id": 1}}))
    context = parse_github_context(_config("pull_request_review_comment", str(path)))
    assert context.is_pull_request_review_comment_event is True
    assert context.entity_number == 7


def test_issue_number_from_payload(tmp_path: Path) -> None:
    path = tmp_path / "event.json"
    path.write_text(json.dumps({"issue": {"number": 12}}))
    assert parse_github_context(_config(event_path=str(path))).entity_number == 12


def test_unreadable_payload(tmp_path: Path) -> None:
    path = tmp_path / "event.json"
    path.write_text("{broken")
    context = parse_github_context(_config(event_path=str(path)))
    assert context.entity_number is None
    assert context.event_name == "issue_comment"


def test_missing_payload_file(tmp_path: Path) -> None:
    context = parse_github_context(_config(event_path=str(tmp_path / "missing.json")))
    assert context.entity_number is None
