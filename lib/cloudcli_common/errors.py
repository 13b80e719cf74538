"""Error taxonomy for CloudCLI calls.

Three categories:
- validation: bad parameters or credentials, detected before any request
- api: the remote service answered non-2xx or could not be reached
- operation: anything else that failed while processing an input item
"""

from __future__ import annotations

from typing import Any


class CloudCliError(Exception):
    """Base class for all CloudCLI failures.

    ``item_index`` is filled in by the batch runner when the error escapes
    a batch, so the host can tell which input item failed.
    """

    error_type = "operation"

    def __init__(
        self,
        message: str,
        *,
        details: Any = None,
        item_index: int | None = None,
        description: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.item_index = item_index
        self.description = description

    def to_tool_error(self) -> dict[str, Any]:
        """Convert to the dict format expected by ToolResult.error."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "item_index": self.item_index,
            "description": self.description,
            "details": self.details,
        }


class CloudCliValidationError(CloudCliError):
    """Unknown resource/operation, missing or malformed parameter."""

    error_type = "validation"


class CloudCliApiError(CloudCliError):
    """Non-2xx response or transport failure from the CloudCLI API."""

    error_type = "api"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any = None,
        item_index: int | None = None,
        description: str | None = None,
    ) -> None:
        super().__init__(
            message, details=details, item_index=item_index, description=description
        )
        self.status_code = status_code

    def to_tool_error(self) -> dict[str, Any]:
        error = super().to_tool_error()
        error["status_code"] = self.status_code
        return error


class CloudCliOperationError(CloudCliError):
    """Wraps a non-CloudCLI exception raised while processing an item."""

    error_type = "operation"
