"""CloudCLI tools for Amplifier.

Provides 4 tools:
- cloudcli_environment: create/start/stop/delete/get/list environments
- cloudcli_agent: execute an AI agent on a running environment
- cloudcli_search_environments: filtered environment list
- cloudcli_test_connection: credential check
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


async def mount(
    coordinator: Any, config: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Mount all 4 CloudCLI tools.

    Retrieves the shared client from coordinator capabilities (created by
    hooks-cloudcli at session start), or builds one from ``config`` when the
    hooks module has not been mounted yet.
    """
    from cloudcli_common.config import ClientConfig, build_client
    from cloudcli_common.search import EnvironmentSearch

    from .lookup import CloudCliSearchTool, CloudCliTestConnectionTool
    from .operations import CloudCliAgentTool, CloudCliEnvironmentTool

    config = config or {}

    # Get-or-create shared client (handles mount ordering)
    client = coordinator.get_capability("cloudcli_client")
    if client is None:
        client = build_client(config)
        coordinator.register_capability("cloudcli_client", client)
        logger.info("tools-cloudcli: created shared client")
    else:
        logger.info("tools-cloudcli: using existing client from hooks module")

    settings = ClientConfig.model_validate(
        {k: v for k, v in config.items() if k in ClientConfig.model_fields}
    )
    search = EnvironmentSearch(client, cache_ttl=settings.search_cache_ttl)

    all_tools = [
        CloudCliEnvironmentTool(client),
        CloudCliAgentTool(client),
        CloudCliSearchTool(search),
        CloudCliTestConnectionTool(client),
    ]

    for tool in all_tools:
        await coordinator.mount("tools", tool, name=tool.name)

    logger.info("tools-cloudcli: registered %d tools", len(all_tools))

    return {
        "name": "tools-cloudcli",
        "version": "0.1.0",
        "description": "CloudCLI environment and agent tools (4 tools)",
        "tools": [t.name for t in all_tools],
    }
