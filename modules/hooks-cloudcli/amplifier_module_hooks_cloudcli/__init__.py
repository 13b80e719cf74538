"""Session lifecycle hook for the CloudCLI client.

Builds the shared CloudCLI client at mount time and registers for
session:end to close its connection pool. The client is shared with the
tools module via coordinator capabilities.
"""

from __future__ import annotations

import logging
from typing import Any

from amplifier_core import HookResult

from cloudcli_common.config import build_client
from cloudcli_common.protocol import CloudCliApi

logger = logging.getLogger(__name__)


class CloudCliSessionHandler:
    """Closes the shared client at session end."""

    def __init__(self, client: CloudCliApi) -> None:
        self._client = client

    async def handle_session_end(self, event: str, data: dict[str, Any]) -> HookResult:
        session_id = data.get("session_id", "unknown")
        logger.info("cloudcli-cleanup: closing client for session %s", session_id)
        try:
            await self._client.aclose()
        except Exception:
            logger.warning(
                "cloudcli-cleanup: failed to close client for session %s",
                session_id,
                exc_info=True,
            )
        return HookResult(action="continue")


async def mount(
    coordinator: Any, config: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Mount the session cleanup hook.

    Builds the shared client (unless the tools module already did), stores
    it as the ``cloudcli_client`` capability and registers the session:end
    handler that closes it.
    """
    config = config or {}

    client = coordinator.get_capability("cloudcli_client")
    if client is None:
        client = build_client(config)
        coordinator.register_capability("cloudcli_client", client)

    handler = CloudCliSessionHandler(client)
    coordinator.hooks.register(
        "session:end",
        handler.handle_session_end,
        priority=90,  # Late: close after everything else
        name="cloudcli-client-cleanup",
    )

    return {
        "name": "hooks-cloudcli",
        "version": "0.1.0",
        "description": "Session cleanup for the shared CloudCLI client",
    }
