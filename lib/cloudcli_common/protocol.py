"""CloudCliApi protocol -- the interface the dispatcher and search talk to.

CloudCliClient implements it over HTTP; the wrappers (logging, read-only)
implement it by delegating to an inner client.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .models import AgentExecutionRequest, CreateEnvironmentRequest


@runtime_checkable
class CloudCliApi(Protocol):
    """Uniform interface over the CloudCLI REST API."""

    async def list_environments(self, status: str | None = None) -> list[dict[str, Any]]:
        """GET /environments[?status=X] and return the ``environments`` array."""
        ...

    async def get_environment(self, environment_id: str) -> dict[str, Any]:
        """GET /environments/{id}."""
        ...

    async def create_environment(
        self, request: CreateEnvironmentRequest
    ) -> dict[str, Any]:
        """POST /environments."""
        ...

    async def delete_environment(self, environment_id: str) -> dict[str, Any]:
        """DELETE /environments/{id}. Returns the raw response body."""
        ...

    async def start_environment(self, environment_id: str) -> dict[str, Any]:
        """POST /environments/{id}/start."""
        ...

    async def stop_environment(self, environment_id: str) -> dict[str, Any]:
        """POST /environments/{id}/stop."""
        ...

    async def execute_agent(self, request: AgentExecutionRequest) -> dict[str, Any]:
        """POST /agent/execute with the long agent timeout."""
        ...

    async def verify(self) -> None:
        """Credential test: GET /environments must answer 2xx."""
        ...

    async def aclose(self) -> None:
        """Release the underlying connection pool."""
        ...

    def info(self) -> dict[str, Any]:
        """Return non-secret metadata about this client."""
        ...
