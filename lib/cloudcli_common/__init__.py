"""Shared client, models and execution logic for the CloudCLI bundle.

This package defines everything the host modules build on:
- credentials: CloudCliCredentials and the resolution chain
- client: CloudCliClient -- async HTTP client for the CloudCLI API
- protocol: CloudCliApi -- the interface clients and wrappers implement
- fields: declarative node parameters, resolution and JSON schemas
- dispatcher / runner: one API call per item, fail-fast or continue-on-fail
- search: filtered environment list for pickers
"""

from .client import CloudCliClient
from .config import ClientConfig, build_client
from .credentials import CloudCliCredentials, resolve_credentials
from .dispatcher import OPERATIONS, dispatch
from .errors import (
    CloudCliApiError,
    CloudCliError,
    CloudCliOperationError,
    CloudCliValidationError,
)
from .fields import NODE_FIELDS, FieldSpec, input_schema, parse_bool, resolve_parameters
from .models import (
    AgentExecutionRequest,
    CreateEnvironmentRequest,
    Environment,
    EnvironmentStatus,
    OutputItem,
    SearchResult,
)
from .protocol import CloudCliApi
from .runner import BatchRunner
from .search import EnvironmentSearch, filter_environments

__all__ = [
    "CloudCliClient",
    "ClientConfig",
    "build_client",
    "CloudCliCredentials",
    "resolve_credentials",
    "OPERATIONS",
    "dispatch",
    "CloudCliApiError",
    "CloudCliError",
    "CloudCliOperationError",
    "CloudCliValidationError",
    "NODE_FIELDS",
    "FieldSpec",
    "input_schema",
    "parse_bool",
    "resolve_parameters",
    "AgentExecutionRequest",
    "CreateEnvironmentRequest",
    "Environment",
    "EnvironmentStatus",
    "OutputItem",
    "SearchResult",
    "CloudCliApi",
    "BatchRunner",
    "EnvironmentSearch",
    "filter_environments",
]
