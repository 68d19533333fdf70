"""Data models for comment updates (Pydantic)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SERVER_URL = "https://github.com"


class ExecutionDetails(BaseModel):
    """Metrics emitted by the agent run when it completes."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    cost_usd: float | None = Field(default=None, description="Total cost of the run in USD")
    duration_ms: float | None = Field(default=None, description="Wall clock duration in milliseconds")
    duration_api_ms: float | None = Field(default=None, description="Time spent in API calls in milliseconds")


class CommentUpdateInput(BaseModel):
    """Everything needed to rewrite a tracking comment once the job is done."""

    model_config = ConfigDict(frozen=True)

    current_body: str = Field(default="", description="Existing comment body")
    action_failed: bool = Field(default=False, description="True when the job ended in failure")
    execution_details: ExecutionDetails | None = Field(default=None, description="Run metrics, if any")
    job_url: str = Field(..., description="Absolute URL of the job run")
    branch_name: str | None = Field(default=None, description="Branch to advertise")
    branch_link: str | None = Field(
        default=None,
        description="Legacy '[View branch](...)' text, used only when branch_name is absent",
    )
    trigger_username: str | None = Field(default=None, description="Login of the user who triggered the job")
    server_url: str = Field(default=DEFAULT_SERVER_URL, description="Base URL for branch links")


class Comment(BaseModel):
    """Issue comment or pull request review comment."""

    id: int
    body: str
    author: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_review_comment: bool = Field(default=False, description="True when fetched from the pulls API")
