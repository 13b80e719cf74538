"""cloudcli_search_environments and cloudcli_test_connection."""

from __future__ import annotations

from typing import Any

from amplifier_core import ToolResult

from cloudcli_common.errors import CloudCliError
from cloudcli_common.protocol import CloudCliApi
from cloudcli_common.search import EnvironmentSearch


class CloudCliSearchTool:
    """Searchable environment list, as shown by environment pickers."""

    def __init__(self, search: EnvironmentSearch) -> None:
        self._search = search

    @property
    def name(self) -> str:
        return "cloudcli_search_environments"

    @property
    def description(self) -> str:
        return (
            "Search CloudCLI environments by name, ID or subdomain "
            "(case-insensitive substring). Returns label, ID and access URL."
        )

    @property
    def input_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {
                "filter": {
                    "type": "string",
                    "description": "Substring to match; omit to list all environments",
                },
            },
            "required": [],
        }

    async def execute(self, input: dict[str, Any]) -> ToolResult:
        try:
            results = await self._search.search(input.get("filter") or None)
        except CloudCliError as e:
            return ToolResult(success=False, error=e.to_tool_error())
        except Exception as e:
            return ToolResult(success=False, error={"message": str(e)})
        return ToolResult(
            success=True, output={"results": [r.model_dump() for r in results]}
        )


class CloudCliTestConnectionTool:
    """Check that the configured host and API key are accepted."""

    def __init__(self, client: CloudCliApi) -> None:
        self._client = client

    @property
    def name(self) -> str:
        return "cloudcli_test_connection"

    @property
    def description(self) -> str:
        return "Verify the CloudCLI host and API key by listing environments."

    @property
    def input_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {},
            "required": [],
        }

    async def execute(self, input: dict[str, Any]) -> ToolResult:
        host = self._client.info().get("host")
        try:
            await self._client.verify()
        except CloudCliError as e:
            return ToolResult(success=False, error=e.to_tool_error())
        except Exception as e:
            return ToolResult(success=False, error={"message": str(e)})
        return ToolResult(success=True, output={"connected": True, "host": host})
