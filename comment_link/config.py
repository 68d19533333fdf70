"""Configuration loading from YAML and environment.

In a workflow run everything comes from the environment GitHub Actions
provides (GITHUB_*) plus the step's own variables (CLAUDE_*, OUTPUT_FILE,
...). A YAML file is optional and mostly useful for logging settings and
local dry runs. Secrets (tokens) are taken from environment variables or
from files; never put real tokens in config files committed to the repo.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so properties can read env/file
_current_env: dict[str, str] = {}


class GitHubConfig(BaseSettings):
    """GitHub API and Actions run settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="Token for the REST API; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    server_url: str = Field(default="https://github.com", description="Web base URL for job and branch links")
    repository: str = Field(default="", description="owner/repo of the workflow run")
    run_id: str = Field(default="", description="Workflow run id")
    event_name: str = Field(default="", description="Event that triggered the workflow")
    event_path: str | None = Field(default=None, description="Path to the event payload JSON")


class ClaudeConfig(BaseSettings):
    """Values handed over by the agent step."""

    model_config = SettingsConfigDict(env_prefix="CLAUDE_", extra="ignore")

    comment_id: int | None = Field(default=None, description="Id of the tracking comment to update")
    branch: str | None = Field(default=None, description="Branch the agent worked on, if one was created")
    # Anything but the literal "false" counts as success
    success: str = Field(default="true", description="Agent step outcome")

    @property
    def failed(self) -> bool:
        return self.success == "false"


class ActionConfig(BaseSettings):
    """Unprefixed step inputs."""

    model_config = SettingsConfigDict(extra="ignore")

    default_branch: str = Field(default="main", description="Base branch for the branch activity check")
    trigger_username: str | None = Field(default=None, description="Login of the user who triggered the run")
    output_file: str | None = Field(default=None, description="Path to the agent's JSON output")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    claude: ClaudeConfig = Field(default_factory=ClaudeConfig)
    action: ActionConfig = Field(default_factory=ActionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")

    @property
    def owner_and_repo(self) -> tuple[str, str]:
        owner, _, repo = self.github.repository.partition("/")
        return owner, repo

    @property
    def job_url(self) -> str:
        """URL of the current workflow run."""
        owner, repo = self.owner_and_repo
        return f"{self.github.server_url.rstrip('/')}/{owner}/{repo}/actions/runs/{self.github.run_id}"


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from an optional YAML file and the environment.

    Values in the YAML file win over the environment. Secrets:
    GITHUB_TOKEN or GITHUB_TOKEN_FILE.
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    return AppConfig(
        github=GitHubConfig(**(raw.get("github") or {})),
        claude=ClaudeConfig(**(raw.get("claude") or {})),
        action=ActionConfig(**(raw.get("action") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
