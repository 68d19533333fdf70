"""Tests for comment_link.config (env, YAML, derived values)."""

from pathlib import Path

import pytest

from comment_link.config import AppConfig, ClaudeConfig, GitHubConfig, load_config

_ENV_KEYS = (
    "GITHUB_TOKEN",
    "GITHUB_TOKEN_FILE",
    "GITHUB_REPOSITORY",
    "GITHUB_RUN_ID",
    "GITHUB_SERVER_URL",
    "GITHUB_API_URL",
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "CLAUDE_COMMENT_ID",
    "CLAUDE_BRANCH",
    "CLAUDE_SUCCESS",
    "DEFAULT_BRANCH",
    "TRIGGER_USERNAME",
    "OUTPUT_FILE",
    "LOGGING_LEVEL",
    "LOGGING_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_file(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.yaml")
    assert config.github.api_url == "https://api.github.com"
    assert config.github.server_url == "https://github.com"
    assert config.action.default_branch == "main"
    assert config.claude.comment_id is None
    assert config.claude.failed is False
    assert config.logging.level == "INFO"


def test_reads_actions_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_REPOSITORY", "owner/repo")
    monkeypatch.setenv("GITHUB_RUN_ID", "123")
    monkeypatch.setenv("CLAUDE_COMMENT_ID", "456")
    monkeypatch.setenv("CLAUDE_BRANCH", "claude/issue-1")
    monkeypatch.setenv("DEFAULT_BRANCH", "develop")
    monkeypatch.setenv("TRIGGER_USERNAME", "octocat")
    monkeypatch.setenv("OUTPUT_FILE", "/tmp/output.json")

    config = load_config(tmp_path / "missing.yaml")

    assert config.owner_and_repo == ("owner", "repo")
    assert config.claude.comment_id == 456
    assert config.claude.branch == "claude/issue-1"
    assert config.action.default_branch == "develop"
    assert config.action.trigger_username == "octocat"
    assert config.action.output_file == "/tmp/output.json"
    assert config.job_url == "https://github.com/owner/repo/actions/runs/123"


@pytest.mark.parametrize(
    ("value", "failed"),
    [("false", True), ("FALSE", False), ("false ", False), ("true", False), ("", False), ("0", False)],
)
def test_only_literal_false_marks_failure(value: str, failed: bool) -> None:
    assert ClaudeConfig(success=value).failed is failed


def test_job_url_uses_server_url() -> None:
    config = AppConfig(
        github=GitHubConfig(server_url="https://ghe.example.com/", repository="acme/tool", run_id="9"),
    )
    assert config.job_url == "https://ghe.example.com/acme/tool/actions/runs/9"


def test_yaml_values_and_env_substitution(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MY_SERVER", "https://ghe.example.com")
    path = tmp_path / "config.yaml"
    path.write_text(
        "github:\n"
        "  server_url: ${MY_SERVER}\n"
        "  repository: acme/tool\n"
        "action:\n"
        "  default_branch: trunk\n"
        "logging:\n"
        "  level: DEBUG\n"
    )

    config = load_config(path)

    assert config.github.server_url == "https://ghe.example.com"
    assert config.github.repository == "acme/tool"
    assert config.action.default_branch == "trunk"
    assert config.logging.level == "DEBUG"


def test_empty_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path).action.default_branch == "main"


def test_token_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_abc")
    config = load_config(tmp_path / "missing.yaml")
    assert config.github_token_resolved == "ghp_abc"


def test_token_from_secret_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    secret = tmp_path / "token"
    secret.write_text("ghp_from_file\n")
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(secret))
    config = load_config(tmp_path / "missing.yaml")
    assert config.github_token_resolved == "ghp_from_file"


def test_no_token(tmp_path: Path) -> None:
    assert load_config(tmp_path / "missing.yaml").github_token_resolved is None
