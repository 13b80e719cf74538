"""Shared fixtures for cloudcli_common tests.

FakeCloudCli serves an in-memory CloudCLI API through httpx.MockTransport
and records every request it receives.
"""

from __future__ import annotations

import json
import uuid
from typing import Any

import httpx
import pytest

from cloudcli_common.client import CloudCliClient
from cloudcli_common.credentials import CloudCliCredentials

HOST = "https://cloudcli.test/api/v1"
API_PREFIX = "/api/v1"
API_KEY = "test-key"


class FakeCloudCli:
    """In-memory CloudCLI API.

    ``fail`` maps (method, path) to a status code to answer with instead of
    the normal route, e.g. ``{("GET", "/environments/abc"): 500}``.
    """

    def __init__(self, environments: list[dict[str, Any]] | None = None) -> None:
        self.environments = list(environments or [])
        self.requests: list[httpx.Request] = []
        self.fail: dict[tuple[str, str], int] = {}

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self) -> list[tuple[str, str]]:
        """(method, path) pairs received, with the API prefix stripped."""
        return [(r.method, _path(r)) for r in self.requests]

    def body(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[index].content)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, _path(request)

        status = self.fail.get((method, path))
        if status is not None:
            return httpx.Response(status, json={"error": "boom", "path": path})

        parts = path.strip("/").split("/")
        if parts == ["environments"]:
            if method == "GET":
                wanted = request.url.params.get("status")
                envs = [
                    e for e in self.environments
                    if not wanted or e.get("status") == wanted
                ]
                return httpx.Response(200, json={"environments": envs})
            if method == "POST":
                env = {
                    "id": str(uuid.uuid4()),
                    "status": "starting",
                    **json.loads(request.content),
                }
                self.environments.append(env)
                return httpx.Response(201, json=env)

        if parts[0] == "environments" and len(parts) >= 2:
            env = self._find(parts[1])
            if env is None:
                return httpx.Response(404, json={"error": "Environment not found"})
            if len(parts) == 2 and method == "GET":
                return httpx.Response(200, json=env)
            if len(parts) == 2 and method == "DELETE":
                self.environments.remove(env)
                return httpx.Response(200, json={"message": "Environment deleted"})
            if len(parts) == 3 and method == "POST" and parts[2] in ("start", "stop"):
                env["status"] = "starting" if parts[2] == "start" else "stopping"
                return httpx.Response(200, json=env)

        if parts == ["agent", "execute"] and method == "POST":
            payload = json.loads(request.content)
            return httpx.Response(
                200, json={"success": True, "output": "done", "request": payload}
            )

        return httpx.Response(404, json={"error": f"No route for {method} {path}"})

    def _find(self, environment_id: str) -> dict[str, Any] | None:
        for env in self.environments:
            if env.get("id") == environment_id:
                return env
        return None


def _path(request: httpx.Request) -> str:
    path = request.url.path
    return path[len(API_PREFIX):] if path.startswith(API_PREFIX) else path


ENVIRONMENTS = [
    {
        "id": "aaaa1111-0000-0000-0000-000000000001",
        "name": "Backend API",
        "subdomain": "backend-abc",
        "status": "running",
        "access_url": "https://backend-abc.cloudcli.ai",
    },
    {
        "id": "bbbb2222-0000-0000-0000-000000000002",
        "name": "Frontend",
        "subdomain": "web-xyz",
        "status": "stopped",
        "access_url": "https://web-xyz.cloudcli.ai",
        "github_url": "https://github.com/acme/web",
    },
]


@pytest.fixture
def credentials() -> CloudCliCredentials:
    return CloudCliCredentials(host=HOST, api_key=API_KEY)


@pytest.fixture
def fake() -> FakeCloudCli:
    return FakeCloudCli([dict(e) for e in ENVIRONMENTS])


@pytest.fixture
def client(credentials: CloudCliCredentials, fake: FakeCloudCli) -> CloudCliClient:
    return CloudCliClient(credentials, transport=fake.transport)
