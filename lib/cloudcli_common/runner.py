"""BatchRunner -- sequential per-item execution with two failure modes.

- fail-fast (default): the first failure is raised, tagged with the index of
  the failing item; later items are never processed.
- continue-on-fail: a failure becomes an ``{error, errorDetails}`` output
  item for that index and the batch carries on.
"""

from __future__ import annotations

import logging
from typing import Any

from .dispatcher import dispatch
from .errors import CloudCliError, CloudCliOperationError
from .models import OutputItem
from .protocol import CloudCliApi

logger = logging.getLogger(__name__)


def error_payload(error: Exception) -> dict[str, Any]:
    """Output item body for a failed item in continue-on-fail mode."""
    if isinstance(error, CloudCliError):
        message, details = error.message, error.details
    else:
        message, details = str(error), None
    return {
        "error": message or type(error).__name__,
        "errorDetails": details if details else None,
    }


class BatchRunner:
    """Runs a batch of parameter bags against one client, in order."""

    def __init__(self, client: CloudCliApi, continue_on_fail: bool = False) -> None:
        self._client = client
        self._continue_on_fail = continue_on_fail

    async def run(self, items: list[dict[str, Any]]) -> list[OutputItem]:
        output: list[OutputItem] = []
        for index, params in enumerate(items):
            try:
                payloads = await dispatch(self._client, params)
                produced = [OutputItem(data=p, paired_item=index) for p in payloads]
            except Exception as e:
                if not self._continue_on_fail:
                    if isinstance(e, CloudCliError):
                        e.item_index = index
                        raise
                    raise CloudCliOperationError(
                        str(e) or type(e).__name__,
                        item_index=index,
                        description=f"Failed to call CloudCLI API: {e}",
                    ) from e
                logger.warning("runner: item %d failed: %s", index, e)
                output.append(OutputItem(data=error_payload(e), paired_item=index))
                continue
            output.extend(produced)
        return output
