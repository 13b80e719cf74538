"""Declarative field definitions for the CloudCLI node.

Each field describes one parameter the host collects per input item: its
type, whether it is required, its default, allowed options and the
resource/operation combinations it applies to. The same definitions drive
parameter resolution (defaults + validation) and the JSON schemas used as
tool input schemas.
"""

from __future__ import annotations

import copy
import re
from typing import Any, Literal

from pydantic import BaseModel, Field

from .errors import CloudCliValidationError
from .models import EnvironmentStatus

FieldType = Literal["string", "options", "boolean", "resource_locator", "collection"]

ENVIRONMENT_ID_PATTERN = r"^[a-f0-9-]+$"


def parse_bool(name: str, value: Any) -> bool:
    """Strict boolean: real bools, or the strings "true"/"false" in any case."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise CloudCliValidationError(
        f"Parameter '{name}' must be a boolean, got {type(value).__name__}"
    )


class FieldOption(BaseModel):
    """One selectable value of an ``options`` field."""

    name: str
    value: str
    description: str | None = None


class FieldSpec(BaseModel):
    """A single node or credential parameter."""

    name: str
    display_name: str
    type: FieldType = "string"
    required: bool = False
    default: Any = None
    secret: bool = False
    description: str = ""
    placeholder: str | None = None
    options: list[FieldOption] = Field(default_factory=list)
    pattern: str | None = None
    pattern_error: str | None = None
    show: dict[str, list[str]] = Field(default_factory=dict)
    children: list[FieldSpec] = Field(default_factory=list)
    default_from: str | None = Field(
        default=None,
        description="Resource locator field whose cached name provides the default",
    )

    def applies_to(self, context: dict[str, Any]) -> bool:
        """True if every display condition matches the given resource/operation."""
        return all(context.get(key) in values for key, values in self.show.items())

    @property
    def option_values(self) -> list[str]:
        return [o.value for o in self.options]

    def resolve(self, value: Any, raw: dict[str, Any]) -> Any:
        """Apply the default and validate a single raw value."""
        if value is None and self.default_from:
            value = _cached_name_head(raw.get(self.default_from))
        if value is None:
            value = copy.deepcopy(self.default)

        if self.type == "boolean":
            return parse_bool(self.name, value)
        if self.type == "options":
            return self._resolve_option(value)
        if self.type == "resource_locator":
            return self._resolve_locator(value)
        if self.type == "collection":
            return self._resolve_collection(value)
        return self._resolve_string(value)

    def _resolve_string(self, value: Any) -> str:
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise CloudCliValidationError(
                f"Parameter '{self.name}' must be a string, got {type(value).__name__}"
            )
        if self.required and not value.strip():
            raise _missing(self.name)
        return value

    def _resolve_option(self, value: Any) -> str:
        if value is None:
            value = ""
        if value not in self.option_values:
            allowed = ", ".join(repr(v) for v in self.option_values)
            raise CloudCliValidationError(
                f"Invalid value for '{self.name}': {value!r}. Use: {allowed}"
            )
        return value

    def _resolve_locator(self, value: Any) -> str:
        if isinstance(value, dict):
            mode = value.get("mode", "list")
            locator = value.get("value") or ""
        else:
            mode = "id"
            locator = value or ""
        if not isinstance(locator, str):
            raise CloudCliValidationError(
                f"Parameter '{self.name}' must be a string, got {type(locator).__name__}"
            )
        if not locator:
            if self.required:
                raise _missing(self.name)
            return locator
        if mode == "id" and self.pattern and not re.match(self.pattern, locator):
            raise CloudCliValidationError(
                self.pattern_error or f"Invalid value for '{self.name}'"
            )
        return locator

    def _resolve_collection(self, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise CloudCliValidationError(
                f"Parameter '{self.name}' must be an object, got {type(value).__name__}"
            )
        children = {child.name: child for child in self.children}
        resolved: dict[str, Any] = {}
        for key, item in value.items():
            child = children.get(key)
            if child is None:
                raise CloudCliValidationError(
                    f"Unknown option '{key}' in '{self.name}'. "
                    f"Use: {', '.join(children)}"
                )
            resolved[key] = child.resolve(item, value)
        return resolved

    def to_schema(self) -> dict[str, Any]:
        """Render this field as a JSON schema property."""
        schema: dict[str, Any]
        if self.type == "boolean":
            schema = {"type": "boolean"}
        elif self.type == "options":
            schema = {"type": "string", "enum": self.option_values}
        elif self.type == "resource_locator":
            schema = {
                "type": ["string", "object"],
                "properties": {
                    "mode": {"type": "string", "enum": ["list", "id"]},
                    "value": {"type": "string"},
                    "cachedResultName": {"type": "string"},
                },
            }
        elif self.type == "collection":
            schema = {
                "type": "object",
                "properties": {c.name: c.to_schema() for c in self.children},
            }
        else:
            schema = {"type": "string"}

        description = self.description or self.display_name
        if self.placeholder:
            description = f"{description} ({self.placeholder})"
        schema["description"] = description
        if self.pattern:
            schema["pattern"] = self.pattern
        return schema


def _missing(name: str) -> CloudCliValidationError:
    return CloudCliValidationError(f"Missing required parameter: '{name}'")


def _cached_name_head(locator: Any) -> str | None:
    """First word of a locator's cached result name ('backend (running)' -> 'backend')."""
    if not isinstance(locator, dict):
        return None
    cached = locator.get("cachedResultName") or ""
    head = cached.split(" ")[0]
    return head or None


def _environment_locator(name: str, description: str, show: dict[str, list[str]]) -> FieldSpec:
    return FieldSpec(
        name=name,
        display_name="Environment",
        type="resource_locator",
        required=True,
        default={"mode": "list", "value": ""},
        description=description,
        placeholder="e.g. 550e8400-e29b-41d4-a716-446655440000",
        pattern=ENVIRONMENT_ID_PATTERN,
        pattern_error="Not a valid environment ID",
        show=show,
    )


_ENV = "environment"
_AGENT = "agent"

RESOURCE_FIELD = FieldSpec(
    name="resource",
    display_name="Resource",
    type="options",
    default=_ENV,
    options=[
        FieldOption(name="Environment", value=_ENV),
        FieldOption(name="Agent", value=_AGENT),
    ],
)

OPERATION_FIELDS: dict[str, FieldSpec] = {
    _ENV: FieldSpec(
        name="operation",
        display_name="Operation",
        type="options",
        default="list",
        show={"resource": [_ENV]},
        options=[
            FieldOption(name="Create", value="create", description="Create a new development environment"),
            FieldOption(name="Delete", value="delete", description="Delete an environment (must be stopped first)"),
            FieldOption(name="Get", value="get", description="Get details of a specific environment"),
            FieldOption(name="Get Many", value="list", description="Retrieve a list of environments"),
            FieldOption(name="Start", value="start", description="Start a stopped environment"),
            FieldOption(name="Stop", value="stop", description="Stop a running environment"),
        ],
    ),
    _AGENT: FieldSpec(
        name="operation",
        display_name="Operation",
        type="options",
        default="execute",
        show={"resource": [_AGENT]},
        options=[
            FieldOption(
                name="Execute",
                value="execute",
                description="Run Claude Code or Cursor agent on a running environment",
            ),
        ],
    ),
}

NODE_FIELDS: list[FieldSpec] = [
    _environment_locator(
        "environmentId",
        "The environment to operate on",
        {"resource": [_ENV], "operation": ["get", "delete", "start", "stop"]},
    ),
    FieldSpec(
        name="status",
        display_name="Status Filter",
        type="options",
        default="",
        description="Filter environments by status",
        show={"resource": [_ENV], "operation": ["list"]},
        options=[
            FieldOption(name="All", value=""),
            *(
                FieldOption(name=s.value.capitalize(), value=s.value)
                for s in sorted(EnvironmentStatus, key=lambda s: s.value)
            ),
        ],
    ),
    FieldSpec(
        name="name",
        display_name="Name",
        required=True,
        default="",
        description="Name for the environment (1-50 characters)",
        placeholder="e.g. My Backend API",
        show={"resource": [_ENV], "operation": ["create"]},
    ),
    FieldSpec(
        name="subdomain",
        display_name="Subdomain",
        required=True,
        default="",
        description="Subdomain for the environment (3-30 characters, lowercase alphanumeric and hyphens)",
        placeholder="e.g. mybackend-abc123",
        show={"resource": [_ENV], "operation": ["create"]},
    ),
    FieldSpec(
        name="githubUrl",
        display_name="GitHub URL",
        default="",
        description="Optional GitHub repository URL to clone",
        placeholder="e.g. https://github.com/username/repo",
        show={"resource": [_ENV], "operation": ["create"]},
    ),
    FieldSpec(
        name="githubToken",
        display_name="GitHub Token",
        default="",
        secret=True,
        description="GitHub personal access token for private repositories",
        show={"resource": [_ENV], "operation": ["create"]},
    ),
    _environment_locator(
        "agentEnvironmentId",
        "The running environment to execute the agent on",
        {"resource": [_AGENT], "operation": ["execute"]},
    ),
    FieldSpec(
        name="projectName",
        display_name="Project Name",
        required=True,
        default="",
        default_from="agentEnvironmentId",
        description=(
            "Name of the project inside /workspace/ directory. Defaults to the "
            "environment name selected from the list."
        ),
        placeholder="e.g. backend",
        show={"resource": [_AGENT], "operation": ["execute"]},
    ),
    FieldSpec(
        name="message",
        display_name="Message",
        required=True,
        default="",
        description="Task description for the AI agent",
        placeholder="e.g. Add user authentication with JWT",
        show={"resource": [_AGENT], "operation": ["execute"]},
    ),
    FieldSpec(
        name="provider",
        display_name="Provider",
        type="options",
        default="claude",
        description="AI provider to use",
        show={"resource": [_AGENT], "operation": ["execute"]},
        options=[
            FieldOption(name="Claude", value="claude"),
            FieldOption(name="Codex", value="codex"),
            FieldOption(name="Cursor", value="cursor"),
        ],
    ),
    FieldSpec(
        name="additionalOptions",
        display_name="Additional Options",
        type="collection",
        default={},
        show={"resource": [_AGENT], "operation": ["execute"]},
        children=[
            FieldSpec(
                name="createBranch",
                display_name="Create Branch",
                type="boolean",
                default=False,
                description="Whether to create a git branch for the changes",
            ),
            FieldSpec(
                name="createPR",
                display_name="Create Pull Request",
                type="boolean",
                default=False,
                description="Whether to create a pull request after completion",
            ),
            FieldSpec(
                name="githubToken",
                display_name="GitHub Token",
                default="",
                secret=True,
                description="GitHub token for private repos or PR creation",
            ),
        ],
    ),
]


def resolve_parameters(params: dict[str, Any]) -> dict[str, Any]:
    """Resolve one input item's parameter bag against the field definitions.

    Returns a dict holding ``resource``, ``operation`` and every field that
    applies to that pair, with defaults filled in. Fields that do not apply
    are dropped.

    Raises:
        CloudCliValidationError: unknown resource/operation, missing required
            parameter, value outside the allowed options, or malformed
            environment ID.
    """
    resource = params.get("resource")
    if resource is None:
        resource = RESOURCE_FIELD.default
    if resource not in RESOURCE_FIELD.option_values:
        raise CloudCliValidationError(f"Unknown resource: {resource}")

    operation_field = OPERATION_FIELDS[resource]
    operation = params.get("operation")
    if operation is None:
        operation = operation_field.default
    if operation not in operation_field.option_values:
        raise CloudCliValidationError(f"Unknown operation: {operation}")

    context = {"resource": resource, "operation": operation}
    resolved: dict[str, Any] = dict(context)
    for spec in NODE_FIELDS:
        if spec.applies_to(context):
            resolved[spec.name] = spec.resolve(params.get(spec.name), params)
    return resolved


def input_schema(resource: str) -> dict[str, Any]:
    """JSON schema for all parameters of one resource.

    A field is listed as required only when it is required by every
    operation of the resource and has no derived default.
    """
    operation_field = OPERATION_FIELDS[resource]
    operations = operation_field.option_values
    properties: dict[str, Any] = {"operation": operation_field.to_schema()}
    required: list[str] = []

    for spec in NODE_FIELDS:
        if resource not in spec.show.get("resource", [resource]):
            continue
        properties[spec.name] = spec.to_schema()
        shown_for = spec.show.get("operation", operations)
        if (
            spec.required
            and not spec.default_from
            and all(op in shown_for for op in operations)
        ):
            required.append(spec.name)

    return {"type": "object", "properties": properties, "required": required}
