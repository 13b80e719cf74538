"""CloudCliClient -- async HTTP client for the CloudCLI REST API.

Route map:
- list_environments: GET    /environments[?status=X]
- get_environment:   GET    /environments/{id}
- create_environment: POST  /environments
- delete_environment: DELETE /environments/{id}
- start_environment: POST   /environments/{id}/start
- stop_environment:  POST   /environments/{id}/stop
- execute_agent:     POST   /agent/execute   (agent_timeout)
- verify:            GET    /environments    (credential test)

Every call is a single request. There are no retries: a failed call raises
CloudCliApiError and that is the final outcome.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .credentials import TEST_PATH, CloudCliCredentials
from .errors import CloudCliApiError
from .models import AgentExecutionRequest, CreateEnvironmentRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_AGENT_TIMEOUT = 600.0


class CloudCliClient:
    """HTTP implementation of the CloudCliApi protocol.

    Args:
        credentials: Base URL and API key. The key is sent as ``X-API-KEY``
            on every request.
        timeout: Default per-request timeout in seconds.
        agent_timeout: Timeout for ``execute_agent``, which blocks until the
            remote agent finishes.
        transport: Optional httpx transport, used to fake the API in tests.
    """

    def __init__(
        self,
        credentials: CloudCliCredentials,
        timeout: float = DEFAULT_TIMEOUT,
        agent_timeout: float = DEFAULT_AGENT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._timeout = timeout
        self._agent_timeout = agent_timeout
        self._http = httpx.AsyncClient(
            base_url=credentials.host,
            headers=credentials.auth_headers(),
            timeout=timeout,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Send one request and return the decoded body.

        Raises CloudCliApiError on transport failure or non-2xx status, with
        the decoded response body attached as ``details``.
        """
        kwargs: dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if params:
            kwargs["params"] = params
        if timeout is not None:
            kwargs["timeout"] = timeout

        logger.debug("cloudcli: %s %s", method, path)
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise CloudCliApiError(str(e) or type(e).__name__) from e

        body = _decode(response)
        if not response.is_success:
            raise CloudCliApiError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
                details=body or None,
            )
        return body

    # ------------------------------------------------------------------
    # CloudCliApi interface
    # ------------------------------------------------------------------

    async def list_environments(self, status: str | None = None) -> list[dict[str, Any]]:
        params = {"status": status} if status else None
        body = await self._request("GET", "/environments", params=params)
        if not isinstance(body, dict):
            return []
        return list(body.get("environments") or [])

    async def get_environment(self, environment_id: str) -> dict[str, Any]:
        return _as_object(
            await self._request("GET", f"/environments/{environment_id}")
        )

    async def create_environment(
        self, request: CreateEnvironmentRequest
    ) -> dict[str, Any]:
        return _as_object(
            await self._request("POST", "/environments", json=request.to_body())
        )

    async def delete_environment(self, environment_id: str) -> dict[str, Any]:
        return _as_object(
            await self._request("DELETE", f"/environments/{environment_id}")
        )

    async def start_environment(self, environment_id: str) -> dict[str, Any]:
        return _as_object(
            await self._request("POST", f"/environments/{environment_id}/start")
        )

    async def stop_environment(self, environment_id: str) -> dict[str, Any]:
        return _as_object(
            await self._request("POST", f"/environments/{environment_id}/stop")
        )

    async def execute_agent(self, request: AgentExecutionRequest) -> dict[str, Any]:
        return _as_object(
            await self._request(
                "POST",
                "/agent/execute",
                json=request.to_body(),
                timeout=self._agent_timeout,
            )
        )

    async def verify(self) -> None:
        await self._request("GET", TEST_PATH)

    async def aclose(self) -> None:
        await self._http.aclose()

    def info(self) -> dict[str, Any]:
        return {
            "host": self._credentials.host,
            "timeout": self._timeout,
            "agent_timeout": self._agent_timeout,
        }


def _decode(response: httpx.Response) -> Any:
    """JSON body if there is one, raw text otherwise, {} when empty."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text


def _as_object(body: Any) -> dict[str, Any]:
    if isinstance(body, dict):
        return body
    return {"data": body}
