"""Credentials and configuration loading."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator, model_validator

from .utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000

NETWORK_URLS = {
    "mainnet": "https://mainnet.era.zksync.io",
    "testnet": "https://sepolia.era.zksync.io",
}

# Environment variable -> credentials field
ENV_OVERRIDES = {
    "ZKSYNC_ENVIRONMENT": "environment",
    "ZKSYNC_RPC_URL": "rpc_url",
    "ZKSYNC_API_KEY": "api_key",
    "ZKSYNC_PRIVATE_KEY": "private_key",
    "ZKSYNC_TIMEOUT": "timeout",
}


class Credentials(BaseModel):
    """Per-invocation connection settings, read-only during execution.

    The private key is accepted for parity with the host credential form but
    is never used: write operations take an already-signed transaction.
    """

    environment: Literal["mainnet", "testnet", "custom"] = "mainnet"
    rpc_url: Optional[str] = Field(default=None, alias="rpcUrl")
    api_key: Optional[SecretStr] = Field(default=None, alias="apiKey")
    private_key: Optional[SecretStr] = Field(default=None, alias="privateKey")
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0, description="Request timeout in milliseconds")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("rpc_url")
    @classmethod
    def _check_url_scheme(cls, value: Optional[str]) -> Optional[str]:
        if value and not value.startswith(("http://", "https://")):
            raise ValueError(f"rpc_url must be an http(s) URL, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_custom_url(self) -> "Credentials":
        if self.environment == "custom" and not self.rpc_url:
            raise ValueError("rpc_url is required when environment is 'custom'")
        return self

    @property
    def base_url(self) -> str:
        if self.environment == "custom":
            return self.rpc_url
        return NETWORK_URLS[self.environment]

    @property
    def auth_token(self) -> Optional[str]:
        """Bearer token for the Authorization header, if an API key is set."""
        if self.api_key is None:
            return None
        return self.api_key.get_secret_value() or None


def _field_names(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Rename aliased keys (``rpcUrl``) to field names (``rpc_url``)."""
    aliases = {field.alias: name for name, field in Credentials.model_fields.items() if field.alias}
    return {aliases.get(key, key): value for key, value in settings.items()}


def load_credentials(path: Optional[Union[str, Path]] = None) -> Credentials:
    """Load credentials from an optional YAML file plus environment overrides.

    The YAML file may hold the settings at top level or under a ``zksync``
    key. Environment variables (``ZKSYNC_*``) win over the file.

    Raises:
        ConfigurationError: If the file is unreadable or the settings invalid
    """
    data: Dict[str, Any] = {}

    if path is not None:
        try:
            with open(path, "r") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config file {path}: {e}") from e
        settings = loaded.get("zksync", loaded) if isinstance(loaded, dict) else None
        if not isinstance(settings, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        data.update(_field_names(settings))
        logger.info(f"Loaded configuration from {path}")

    for env_var, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            data[field_name] = value

    try:
        credentials = Credentials(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid zkSync Era configuration: {e}") from e

    logger.info(f"Using {credentials.environment} endpoint {credentials.base_url}")
    return credentials
