"""LoggingClient -- composable logging for CloudCLI clients.

Wraps any CloudCliApi, logging calls as they pass through. Mutating calls
are logged at INFO with their duration, reads at DEBUG. Request bodies are
never logged since they may carry GitHub tokens.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from ..models import AgentExecutionRequest, CreateEnvironmentRequest
from ..protocol import CloudCliApi


class LoggingClient:
    """Logs API calls passing through to an inner client."""

    def __init__(self, inner: CloudCliApi, logger_name: str = "cloudcli") -> None:
        self._inner = inner
        self._logger = logging.getLogger(logger_name)

    # -- Metadata passthrough (no logging) ----------------------------------

    def info(self) -> dict[str, Any]:
        return self._inner.info()

    # -- Reads (debug) -------------------------------------------------------

    async def list_environments(self, status: str | None = None) -> list[dict[str, Any]]:
        self._logger.debug("cloudcli: list environments (status=%s)", status or "all")
        environments = await self._inner.list_environments(status=status)
        self._logger.debug("cloudcli: list → %d environments", len(environments))
        return environments

    async def get_environment(self, environment_id: str) -> dict[str, Any]:
        self._logger.debug("cloudcli: get %s", environment_id)
        return await self._inner.get_environment(environment_id)

    async def verify(self) -> None:
        self._logger.debug("cloudcli: verify credentials")
        await self._inner.verify()

    # -- Mutations (info, timed) ---------------------------------------------

    async def create_environment(
        self, request: CreateEnvironmentRequest
    ) -> dict[str, Any]:
        self._logger.info(
            "cloudcli: create %r (subdomain %s)", request.name, request.subdomain
        )
        t0 = time.monotonic()
        result = await self._inner.create_environment(request)
        self._logger.info(
            "cloudcli: create %r → %s in %dms",
            request.name,
            result.get("id", "?"),
            _elapsed_ms(t0),
        )
        return result

    async def delete_environment(self, environment_id: str) -> dict[str, Any]:
        self._logger.info("cloudcli: delete %s", environment_id)
        t0 = time.monotonic()
        result = await self._inner.delete_environment(environment_id)
        self._logger.info("cloudcli: delete %s in %dms", environment_id, _elapsed_ms(t0))
        return result

    async def start_environment(self, environment_id: str) -> dict[str, Any]:
        self._logger.info("cloudcli: start %s", environment_id)
        t0 = time.monotonic()
        result = await self._inner.start_environment(environment_id)
        self._logger.info("cloudcli: start %s in %dms", environment_id, _elapsed_ms(t0))
        return result

    async def stop_environment(self, environment_id: str) -> dict[str, Any]:
        self._logger.info("cloudcli: stop %s", environment_id)
        t0 = time.monotonic()
        result = await self._inner.stop_environment(environment_id)
        self._logger.info("cloudcli: stop %s in %dms", environment_id, _elapsed_ms(t0))
        return result

    async def execute_agent(self, request: AgentExecutionRequest) -> dict[str, Any]:
        self._logger.info(
            "cloudcli: agent %s on %s/%s",
            request.provider,
            request.environment_id,
            request.project_name,
        )
        t0 = time.monotonic()
        result = await self._inner.execute_agent(request)
        self._logger.info(
            "cloudcli: agent %s on %s finished in %dms",
            request.provider,
            request.environment_id,
            _elapsed_ms(t0),
        )
        return result

    async def aclose(self) -> None:
        self._logger.info("cloudcli: closing client")
        await self._inner.aclose()


def _elapsed_ms(t0: float) -> int:
    return int((time.monotonic() - t0) * 1000)
