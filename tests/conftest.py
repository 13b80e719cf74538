"""Shared fixtures for the CloudCLI module tests.

RecordingApi mirrors lib/tests/conftest.py FakeCloudCli in a smaller form:
canned JSON per (method, path), every request recorded.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from cloudcli_common.client import CloudCliClient
from cloudcli_common.credentials import CloudCliCredentials

HOST = "https://cloudcli.test/api/v1"
API_PREFIX = "/api/v1"

BACKEND_ID = "aaaa1111-0000-0000-0000-000000000001"
FRONTEND_ID = "bbbb2222-0000-0000-0000-000000000002"

BACKEND = {
    "id": BACKEND_ID,
    "name": "backend",
    "subdomain": "backend-abc",
    "status": "running",
    "access_url": "https://backend-abc.cloudcli.ai",
}
FRONTEND = {
    "id": FRONTEND_ID,
    "name": "frontend",
    "subdomain": "web-xyz",
    "status": "stopped",
    "access_url": "https://web-xyz.cloudcli.ai",
}


class RecordingApi:
    """Answers from a route table and records requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {
            ("GET", "/environments"): (200, {"environments": [BACKEND, FRONTEND]}),
            ("GET", f"/environments/{BACKEND_ID}"): (200, BACKEND),
            ("GET", f"/environments/{FRONTEND_ID}"): (200, FRONTEND),
            ("POST", "/environments"): (201, {**BACKEND, "status": "starting"}),
            ("DELETE", f"/environments/{FRONTEND_ID}"): (200, {"message": "deleted"}),
            ("POST", f"/environments/{FRONTEND_ID}/start"): (200, {**FRONTEND, "status": "starting"}),
            ("POST", f"/environments/{BACKEND_ID}/stop"): (200, {**BACKEND, "status": "stopping"}),
            ("POST", "/agent/execute"): (200, {"success": True, "output": "Done"}),
        }

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, _path(r)) for r in self.requests]

    def body(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[index].content)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, payload = self.routes.get(
            (request.method, _path(request)), (404, {"error": "Not found"})
        )
        return httpx.Response(status, json=payload)


def _path(request: httpx.Request) -> str:
    path = request.url.path
    return path[len(API_PREFIX):] if path.startswith(API_PREFIX) else path


class MockCoordinator:
    """Minimal coordinator stub that tracks capabilities, mounts and hooks."""

    def __init__(self) -> None:
        self._capabilities: dict[str, Any] = {}
        self._mounted_tools: dict[str, Any] = {}
        self.hooks = _MockHooks()

    def register_capability(self, name: str, value: Any) -> None:
        self._capabilities[name] = value

    def get_capability(self, name: str) -> Any:
        return self._capabilities.get(name)

    async def mount(self, kind: str, tool: Any, name: str = "") -> None:
        if kind == "tools":
            self._mounted_tools[name] = tool


class _MockHooks:
    def __init__(self) -> None:
        self.registered: list[dict[str, Any]] = []

    def register(self, event: str, handler: Any, priority: int = 0, name: str = "") -> None:
        self.registered.append(
            {"event": event, "handler": handler, "priority": priority, "name": name}
        )


@pytest.fixture
def api() -> RecordingApi:
    return RecordingApi()


@pytest.fixture
def client(api: RecordingApi) -> CloudCliClient:
    credentials = CloudCliCredentials(host=HOST, api_key="test-key")
    return CloudCliClient(credentials, transport=api.transport)


@pytest.fixture
def coordinator(client: CloudCliClient) -> MockCoordinator:
    """Coordinator with the shared client already registered."""
    coordinator = MockCoordinator()
    coordinator.register_capability("cloudcli_client", client)
    return coordinator


@pytest.fixture
def module_config(tmp_path, monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Mount config that resolves without touching the real environment."""
    monkeypatch.delenv("CLOUDCLI_HOST", raising=False)
    monkeypatch.delenv("CLOUDCLI_API_KEY", raising=False)
    return {
        "host": HOST,
        "api_key": "cfg-key",
        "credentials_file": str(tmp_path / "none.yaml"),
    }


@pytest.fixture
def empty_coordinator() -> MockCoordinator:
    """Coordinator with no capabilities registered yet."""
    return MockCoordinator()
