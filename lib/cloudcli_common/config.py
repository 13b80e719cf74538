"""Module configuration and client construction.

Both the hooks and tools modules receive the same config dict at mount time:

    host: https://cloudcli.ai/api/v1
    api_key: ...                 # or $CLOUDCLI_API_KEY / credentials file
    credentials_file: ~/.cloudcli/credentials.yaml
    timeout: 30                  # seconds, all calls except agent execute
    agent_timeout: 600           # seconds, agent execute
    search_cache_ttl: 0          # seconds, 0 disables the search cache
    wrappers: [logging, readonly]
"""

from __future__ import annotations

import logging
from typing import Any, Literal

import httpx
from pydantic import BaseModel, Field

from .client import DEFAULT_AGENT_TIMEOUT, DEFAULT_TIMEOUT, CloudCliClient
from .credentials import resolve_credentials
from .protocol import CloudCliApi

logger = logging.getLogger(__name__)


class ClientConfig(BaseModel):
    """Non-credential settings from the mount config."""

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    agent_timeout: float = Field(default=DEFAULT_AGENT_TIMEOUT, gt=0)
    search_cache_ttl: float = Field(default=0.0, ge=0)
    wrappers: list[Literal["logging", "readonly"]] = Field(default_factory=list)


def build_client(
    config: dict[str, Any] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CloudCliApi:
    """Resolve credentials and settings, then build a (possibly wrapped) client.

    Wrapper order: ReadOnly innermost, Logging outermost, so rejected calls
    are still logged.
    """
    config = config or {}
    credentials = resolve_credentials(config)
    settings = ClientConfig.model_validate(
        {k: v for k, v in config.items() if k in ClientConfig.model_fields}
    )

    client: CloudCliApi = CloudCliClient(
        credentials,
        timeout=settings.timeout,
        agent_timeout=settings.agent_timeout,
        transport=transport,
    )
    if "readonly" in settings.wrappers:
        from .wrappers.readonly_wrapper import ReadOnlyClient

        client = ReadOnlyClient(inner=client)
    if "logging" in settings.wrappers:
        from .wrappers.logging_wrapper import LoggingClient

        client = LoggingClient(inner=client)

    logger.info(
        "cloudcli: client for %s (wrappers: %s)",
        credentials.host,
        ", ".join(settings.wrappers) or "none",
    )
    return client
