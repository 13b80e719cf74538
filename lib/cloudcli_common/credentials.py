"""CloudCLI API credentials: declaration, resolution, and header injection.

Resolution chain (explicit values always win):
1. Mount config -- ``host`` / ``api_key``
2. Environment -- ``CLOUDCLI_HOST`` / ``CLOUDCLI_API_KEY``
3. Credentials file -- YAML with ``host`` and ``api_key`` (or ``apiKey``)
"""

from __future__ import annotations

import logging
import os
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from .errors import CloudCliValidationError
from .fields import FieldSpec

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://cloudcli.ai/api/v1"
DEFAULT_CREDENTIALS_FILE = "~/.cloudcli/credentials.yaml"
AUTH_HEADER = "X-API-KEY"
TEST_PATH = "/environments"

HOST_ENV_VAR = "CLOUDCLI_HOST"
API_KEY_ENV_VAR = "CLOUDCLI_API_KEY"

CREDENTIAL_FIELDS: list[FieldSpec] = [
    FieldSpec(
        name="host",
        display_name="Host",
        required=True,
        default=DEFAULT_HOST,
        description="CloudCLI API base URL",
    ),
    FieldSpec(
        name="apiKey",
        display_name="API Key",
        required=True,
        default="",
        secret=True,
        description="API key from https://cloudcli.ai/api-keys",
    ),
]


# Field name -> (mount config key, environment variable)
_CREDENTIAL_SOURCES = {
    "host": ("host", HOST_ENV_VAR),
    "apiKey": ("api_key", API_KEY_ENV_VAR),
}


class CloudCliCredentials(BaseModel):
    """Base URL and static API key for one CloudCLI connection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    host: str = Field(default=DEFAULT_HOST, description="CloudCLI API base URL")
    api_key: SecretStr = Field(..., alias="apiKey", description="API key")

    def auth_headers(self) -> dict[str, str]:
        """Headers that authenticate a request."""
        return {AUTH_HEADER: self.api_key.get_secret_value()}


def resolve_credentials(config: dict[str, Any] | None = None) -> CloudCliCredentials:
    """Build credentials from mount config, environment, and credentials file.

    The file is only read when config and environment leave a field unset.
    A broken file is fatal only if it was needed for a required field that
    has no default.

    Raises:
        CloudCliValidationError: no API key could be found, or the
            credentials file is malformed and the API key depends on it.
    """
    config = config or {}
    path = config.get("credentials_file") or DEFAULT_CREDENTIALS_FILE

    values: dict[str, Any] = {}
    for spec in CREDENTIAL_FIELDS:
        config_key, env_var = _CREDENTIAL_SOURCES[spec.name]
        values[spec.name] = config.get(config_key) or os.environ.get(env_var)

    unresolved = [spec for spec in CREDENTIAL_FIELDS if not values[spec.name]]
    if unresolved:
        try:
            from_file = _load_credentials_file(path)
        except CloudCliValidationError:
            if any(spec.required and not spec.default for spec in unresolved):
                raise
            logger.warning("credentials: ignoring unreadable %s", path, exc_info=True)
            from_file = {}
        for spec in unresolved:
            config_key, _ = _CREDENTIAL_SOURCES[spec.name]
            values[spec.name] = from_file.get(config_key) or from_file.get(spec.name)

    for spec in CREDENTIAL_FIELDS:
        if values[spec.name]:
            continue
        if spec.required and not spec.default:
            config_key, env_var = _CREDENTIAL_SOURCES[spec.name]
            raise CloudCliValidationError(
                f"Missing required credential: '{spec.name}'. Set '{config_key}' in "
                f"the module config, ${env_var}, or '{config_key}' in {path}"
            )
        values[spec.name] = spec.default

    return CloudCliCredentials(
        host=str(values["host"]), api_key=SecretStr(str(values["apiKey"]))
    )


def _load_credentials_file(path: str) -> dict[str, Any]:
    """Parse a YAML credentials file. Returns {} if the file does not exist."""
    full_path = os.path.expanduser(path)
    if not os.path.exists(full_path):
        return {}

    with open(full_path) as fh:
        try:
            content = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise CloudCliValidationError(
                f"Credentials file {full_path} is not valid YAML: {e}"
            ) from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise CloudCliValidationError(
            f"Credentials file {full_path} must contain a mapping"
        )
    logger.debug("credentials: loaded %s", full_path)
    return content
