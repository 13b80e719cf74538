"""Tests for ClientConfig and build_client."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from pydantic import ValidationError

from cloudcli_common.client import CloudCliClient
from cloudcli_common.config import ClientConfig, build_client
from cloudcli_common.errors import CloudCliValidationError
from cloudcli_common.wrappers.logging_wrapper import LoggingClient
from cloudcli_common.wrappers.readonly_wrapper import ReadOnlyClient


@pytest.fixture
def base_config(tmp_path, monkeypatch: pytest.MonkeyPatch) -> dict:
    monkeypatch.delenv("CLOUDCLI_HOST", raising=False)
    monkeypatch.delenv("CLOUDCLI_API_KEY", raising=False)
    return {
        "host": "https://cloudcli.test/api/v1",
        "api_key": "cfg-key",
        "credentials_file": str(tmp_path / "none.yaml"),
    }


class TestClientConfig:
    def test_defaults(self) -> None:
        settings = ClientConfig()
        assert settings.timeout == 30.0
        assert settings.agent_timeout == 600.0
        assert settings.search_cache_ttl == 0.0
        assert settings.wrappers == []

    def test_rejects_unknown_wrapper(self) -> None:
        with pytest.raises(ValidationError):
            ClientConfig(wrappers=["caching"])

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            ClientConfig(agent_timeout=0)


class TestBuildClient:
    def test_plain_client(self, base_config: dict) -> None:
        client = build_client(base_config)
        assert isinstance(client, CloudCliClient)
        assert client.info()["host"] == "https://cloudcli.test/api/v1"

    def test_timeouts_applied(self, base_config: dict) -> None:
        client = build_client({**base_config, "timeout": 5, "agent_timeout": 120})
        assert client.info()["timeout"] == 5.0
        assert client.info()["agent_timeout"] == 120.0

    def test_wrapper_order(self, base_config: dict) -> None:
        client = build_client({**base_config, "wrappers": ["readonly", "logging"]})
        assert isinstance(client, LoggingClient)
        assert isinstance(client._inner, ReadOnlyClient)
        assert client.info()["readonly"] is True

    def test_missing_api_key(self, base_config: dict) -> None:
        del base_config["api_key"]
        with pytest.raises(CloudCliValidationError):
            build_client(base_config)

    def test_transport_injection(self, base_config: dict) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"environments": []})

        client = build_client(base_config, transport=httpx.MockTransport(handler))
        asyncio.run(client.verify())
        assert seen[0].headers["X-API-KEY"] == "cfg-key"
