"""cloudcli_environment and cloudcli_agent -- the node tools.

Each call is a batch: top-level parameters are shared by every item, and an
optional ``items`` array supplies per-item overrides. Items run in order, one
API call each, through the BatchRunner.
"""

from __future__ import annotations

import logging
from typing import Any

from amplifier_core import ToolResult

from cloudcli_common.errors import CloudCliError
from cloudcli_common.fields import input_schema, parse_bool
from cloudcli_common.protocol import CloudCliApi
from cloudcli_common.runner import BatchRunner

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shared batch helpers
# ---------------------------------------------------------------------------

_BATCH_KEYS = ("items", "continue_on_fail")

_BATCH_PROPERTIES = {
    "items": {
        "type": "array",
        "items": {"type": "object"},
        "description": (
            "Per-item parameter overrides, merged over the top-level parameters. "
            "Omit to run a single item."
        ),
    },
    "continue_on_fail": {
        "type": "boolean",
        "description": (
            "Emit {error, errorDetails} for failed items and keep going "
            "instead of aborting the batch (default: false)"
        ),
    },
}


def _build_items(
    resource: str, input: dict[str, Any]
) -> tuple[list[dict[str, Any]], ToolResult | None]:
    """Expand tool input into per-item parameter bags; return (items, None) or ([], error)."""
    shared = {k: v for k, v in input.items() if k not in _BATCH_KEYS}
    overrides = input.get("items")
    if overrides is None:
        return [{**shared, "resource": resource}], None
    if not isinstance(overrides, list) or not all(
        isinstance(o, dict) for o in overrides
    ):
        return [], ToolResult(
            success=False,
            error={"message": "Parameter 'items' must be an array of objects"},
        )
    return [{**shared, **o, "resource": resource} for o in overrides], None


class _NodeTool:
    """Runs one resource's operations for a batch of items."""

    resource = ""

    def __init__(self, client: CloudCliApi) -> None:
        self._client = client

    @property
    def input_schema(self) -> dict:
        schema = input_schema(self.resource)
        schema["properties"].update(_BATCH_PROPERTIES)
        return schema

    async def execute(self, input: dict[str, Any]) -> ToolResult:
        items, error = _build_items(self.resource, input)
        if error:
            return error

        try:
            continue_on_fail = parse_bool(
                "continue_on_fail", input.get("continue_on_fail", False)
            )
            output = await BatchRunner(self._client, continue_on_fail).run(items)
        except CloudCliError as e:
            logger.warning(
                "%s: item %s failed: %s", self.resource, e.item_index, e.message
            )
            return ToolResult(success=False, error=e.to_tool_error())
        except Exception as e:
            logger.warning("%s: batch failed", self.resource, exc_info=True)
            return ToolResult(success=False, error={"message": str(e)})

        return ToolResult(
            success=True, output={"items": [item.to_dict() for item in output]}
        )


# ---------------------------------------------------------------------------
# CloudCliEnvironmentTool
# ---------------------------------------------------------------------------


class CloudCliEnvironmentTool(_NodeTool):
    """Create, start, stop, delete, get and list CloudCLI environments."""

    resource = "environment"

    @property
    def name(self) -> str:
        return "cloudcli_environment"

    @property
    def description(self) -> str:
        return (
            "Manage CloudCLI development environments. "
            "Operations: 'list' (optionally by status), 'get', 'create' "
            "(name + subdomain, optional GitHub repo), 'start', 'stop', "
            "'delete' (environment must be stopped first)."
        )


# ---------------------------------------------------------------------------
# CloudCliAgentTool
# ---------------------------------------------------------------------------


class CloudCliAgentTool(_NodeTool):
    """Run an AI coding agent on a running CloudCLI environment."""

    resource = "agent"

    @property
    def name(self) -> str:
        return "cloudcli_agent"

    @property
    def description(self) -> str:
        return (
            "Run Claude Code, Codex or Cursor agent on a running CloudCLI "
            "environment. Blocks until the agent finishes (up to the agent timeout)."
        )
