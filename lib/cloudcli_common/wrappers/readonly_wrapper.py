"""ReadOnlyClient -- rejects mutating CloudCLI calls.

Wraps any CloudCliApi, blocking create/delete/start/stop and agent
execution while letting list, get and the credential test through.
"""

from __future__ import annotations

from typing import Any

from ..models import AgentExecutionRequest, CreateEnvironmentRequest
from ..protocol import CloudCliApi

_DENIED = "Mutating operations disabled in read-only mode"


class ReadOnlyClient:
    """Rejects all mutating operations. Reads pass through."""

    def __init__(self, inner: CloudCliApi) -> None:
        self._inner = inner

    # -- Metadata passthrough --------------------------------------------------

    def info(self) -> dict[str, Any]:
        return {**self._inner.info(), "readonly": True}

    # -- Blocked operations ----------------------------------------------------

    async def create_environment(
        self, request: CreateEnvironmentRequest
    ) -> dict[str, Any]:
        raise PermissionError(_DENIED)

    async def delete_environment(self, environment_id: str) -> dict[str, Any]:
        raise PermissionError(_DENIED)

    async def start_environment(self, environment_id: str) -> dict[str, Any]:
        raise PermissionError(_DENIED)

    async def stop_environment(self, environment_id: str) -> dict[str, Any]:
        raise PermissionError(_DENIED)

    async def execute_agent(self, request: AgentExecutionRequest) -> dict[str, Any]:
        raise PermissionError(_DENIED)

    # -- Passthrough operations ------------------------------------------------

    async def list_environments(self, status: str | None = None) -> list[dict[str, Any]]:
        return await self._inner.list_environments(status=status)

    async def get_environment(self, environment_id: str) -> dict[str, Any]:
        return await self._inner.get_environment(environment_id)

    async def verify(self) -> None:
        await self._inner.verify()

    async def aclose(self) -> None:
        await self._inner.aclose()
