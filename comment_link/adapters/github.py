"""GitHub API adapter."""

from datetime import datetime
from typing import Any, Dict

import requests

from comment_link.adapters.base import GitPlatformAdapter, GitPlatformError
from comment_link.models import Comment


def _parse_iso(s: str | None) -> datetime | None:
    if not s:
        return None
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _comment_from_api(data: Dict[str, Any], is_review_comment: bool = False) -> Comment:
    user = data.get("user") or {}
    created = _parse_iso(data.get("created_at"))
    return Comment(
        id=data["id"],
        body=data.get("body") or "",
        author=user.get("login", ""),
        created_at=created,
        updated_at=_parse_iso(data.get("updated_at")) or created,
        is_review_comment=is_review_comment,
    )


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com") -> None:
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        resp = self._session.request(method, url, json=json, timeout=30)
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                data = resp.json()
            except ValueError:
                data = None
            if isinstance(data, dict):
                msg = data.get("message", msg)
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def get_issue_comment(self, repo: str, comment_id: int) -> Comment:
        resp = self._request("GET", f"/repos/{repo}/issues/comments/{comment_id}")
        return _comment_from_api(resp.json())

    def get_review_comment(self, repo: str, comment_id: int) -> Comment:
        resp = self._request("GET", f"/repos/{repo}/pulls/comments/{comment_id}")
        return _comment_from_api(resp.json(), is_review_comment=True)

    def update_issue_comment(self, repo: str, comment_id: int, body: str) -> Comment:
        resp = self._request("PATCH", f"/repos/{repo}/issues/comments/{comment_id}", json={"body": body})
        return _comment_from_api(resp.json())

    def update_review_comment(self, repo: str, comment_id: int, body: str) -> Comment:
        resp = self._request("PATCH", f"/repos/{repo}/pulls/comments/{comment_id}", json={"body": body})
        return _comment_from_api(resp.json(), is_review_comment=True)

    def get_pr_summary(self, repo: str, pr_number: int) -> dict[str, object]:
        data = self._request("GET", f"/repos/{repo}/pulls/{pr_number}").json()
        return {
            "state": data.get("state"),
            "comments": data.get("comments"),
            "review_comments": data.get("review_comments"),
        }

    def count_commits_ahead(self, repo: str, base: str, head: str) -> int:
        data = self._request("GET", f"/repos/{repo}/compare/{base}...{head}").json()
        return int(data.get("total_commits", data.get("ahead_by", 0)) or 0)
