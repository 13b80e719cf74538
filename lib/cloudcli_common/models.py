"""Data models for the CloudCLI API.

These models define the shapes exchanged with the remote service and the host:
- Environment / EnvironmentStatus: a remote development environment
- CreateEnvironmentRequest / AgentExecutionRequest: request bodies
- OutputItem: one result record handed back to the host
- SearchResult: one entry of the environment picker list
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EnvironmentStatus(str, Enum):
    """Lifecycle states reported by the remote service."""

    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"
    ERROR = "error"


class Environment(BaseModel):
    """A remote environment as returned by ``GET /environments``.

    Every field is optional so partially populated entries still parse;
    unknown keys are kept.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = Field(default=None, description="Environment ID (UUID)")
    name: str | None = Field(default=None, description="Display name")
    subdomain: str | None = Field(default=None, description="Subdomain under cloudcli.ai")
    status: str | None = Field(default=None, description="One of EnvironmentStatus")
    access_url: str | None = Field(default=None, description="Browser access URL")
    github_url: str | None = Field(default=None, description="Cloned repository")

    @field_validator(
        "id", "name", "subdomain", "status", "access_url", "github_url", mode="before"
    )
    @classmethod
    def _stringify(cls, value: Any) -> str | None:
        """Scalars from the API are kept as text; None stays None."""
        return value if value is None else str(value)

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match on name, id or subdomain."""
        needle = needle.lower()
        return any(
            needle in (value or "").lower()
            for value in (self.name, self.id, self.subdomain)
        )

    def label(self) -> str:
        return f"{self.name or ''} ({self.status or ''})"


class CreateEnvironmentRequest(BaseModel):
    """Body for ``POST /environments``."""

    name: str = Field(..., description="Name for the environment (1-50 characters)")
    subdomain: str = Field(..., description="Lowercase alphanumeric and hyphens")
    github_url: str | None = Field(default=None, description="Repository to clone")
    github_token: str | None = Field(default=None, description="Token for private repos")

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"name": self.name, "subdomain": self.subdomain}
        if self.github_url:
            body["github_url"] = self.github_url
        if self.github_token:
            body["github_token"] = self.github_token
        return body


class AgentExecutionRequest(BaseModel):
    """Body for ``POST /agent/execute``.

    Optional flags are only sent when truthy.
    """

    model_config = ConfigDict(populate_by_name=True)

    environment_id: str = Field(..., alias="environmentId")
    project_name: str = Field(..., alias="projectName")
    message: str
    provider: Literal["claude", "codex", "cursor"] = "claude"
    create_branch: bool = Field(default=False, alias="createBranch")
    create_pr: bool = Field(default=False, alias="createPR")
    github_token: str | None = Field(default=None, alias="githubToken")

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "environmentId": self.environment_id,
            "projectName": self.project_name,
            "message": self.message,
            "provider": self.provider,
        }
        if self.create_branch:
            body["createBranch"] = True
        if self.create_pr:
            body["createPR"] = True
        if self.github_token:
            body["githubToken"] = self.github_token
        return body


class OutputItem(BaseModel):
    """One result record, paired with the index of the input item it came from."""

    model_config = ConfigDict(populate_by_name=True)

    data: dict[str, Any] = Field(..., alias="json")
    paired_item: int = Field(..., alias="pairedItem")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class SearchResult(BaseModel):
    """An entry of the searchable environment list."""

    label: str = Field(..., description="'name (status)'")
    value: str = Field(..., description="Environment ID")
    url: str | None = Field(default=None, description="Environment access URL")
