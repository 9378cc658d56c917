"""
Configuration management for request signing

This module provides creation, validation and loading of the APIAuth signing
configuration. Configuration is read from explicit arguments, mappings or
JSON documents only; the SDK never consults environment variables.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ..exceptions import ConfigError, ErrorCodes
from .types import SigningConfig

logger = logging.getLogger(__name__)

# Accepted spellings of the configuration keys, camelCase first
ACCESS_ID_KEYS = ('accessId', 'access_id')
SECRET_KEY_KEYS = ('secretKey', 'secret_key')


def validate_signing_config(config: Any) -> None:
    """
    Validate a signing configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigError: If the configuration is not a usable SigningConfig
    """
    if config is None:
        raise ConfigError(
            "Signing configuration is required",
            ErrorCodes.INVALID_CONFIG
        )

    if not isinstance(config, SigningConfig):
        raise ConfigError(
            f"Signing configuration must be SigningConfig, got {type(config).__name__}",
            ErrorCodes.INVALID_CONFIG,
            {"config_type": type(config).__name__}
        )

    # Frozen dataclasses can still be bypassed with object.__setattr__
    if not config.access_id:
        raise ConfigError("Access ID is required for request signing", ErrorCodes.MISSING_ACCESS_ID)

    if not config.secret_key:
        raise ConfigError("Secret key is required for request signing", ErrorCodes.MISSING_SECRET_KEY)


def create_signing_config(access_id: str, secret_key: Union[str, bytes]) -> SigningConfig:
    """
    Create a signing configuration.

    Args:
        access_id: Access identifier issued to the caller
        secret_key: Shared secret

    Returns:
        SigningConfig: Validated configuration

    Raises:
        ConfigError: If either value is missing or empty
    """
    return SigningConfig(access_id=access_id, secret_key=secret_key)


class SigningConfigBuilder:
    """
    Builder for creating signing configurations with fluent API
    """

    def __init__(self):
        self._access_id: Optional[str] = None
        self._secret_key: Optional[Union[str, bytes]] = None

    def access_id(self, access_id: str) -> 'SigningConfigBuilder':
        """
        Set access identifier.

        Args:
            access_id: Access identifier issued to the caller

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._access_id = access_id
        return self

    def secret_key(self, secret_key: Union[str, bytes]) -> 'SigningConfigBuilder':
        """
        Set shared secret.

        Args:
            secret_key: Secret used as HMAC key

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._secret_key = secret_key
        return self

    def build(self) -> SigningConfig:
        """
        Build the signing configuration.

        Returns:
            SigningConfig: Immutable configuration

        Raises:
            ConfigError: If a required field was not set
        """
        if not self._access_id:
            raise ConfigError("Access ID is required", ErrorCodes.MISSING_ACCESS_ID)

        if not self._secret_key:
            raise ConfigError("Secret key is required", ErrorCodes.MISSING_SECRET_KEY)

        return SigningConfig(access_id=self._access_id, secret_key=self._secret_key)


def _lookup(data: Mapping[str, Any], keys) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def load_signing_config(data: Mapping[str, Any]) -> SigningConfig:
    """
    Load a signing configuration from a mapping.

    Both ``accessId``/``secretKey`` and ``access_id``/``secret_key`` are
    accepted. Unknown keys are ignored.

    Args:
        data: Mapping holding the configuration values

    Returns:
        SigningConfig: Validated configuration

    Raises:
        ConfigError: If the mapping is invalid or a required key is missing
    """
    if not isinstance(data, Mapping):
        raise ConfigError(
            f"Configuration must be a mapping, got {type(data).__name__}",
            ErrorCodes.INVALID_CONFIG
        )

    access_id = _lookup(data, ACCESS_ID_KEYS)
    if access_id is None:
        raise ConfigError(
            "Configuration is missing required key 'accessId'",
            ErrorCodes.MISSING_ACCESS_ID,
            {"keys": list(data.keys())}
        )

    secret_key = _lookup(data, SECRET_KEY_KEYS)
    if secret_key is None:
        raise ConfigError(
            "Configuration is missing required key 'secretKey'",
            ErrorCodes.MISSING_SECRET_KEY,
            {"keys": list(data.keys())}
        )

    return SigningConfig(access_id=access_id, secret_key=secret_key)


def load_signing_config_from_json(json_string: str) -> SigningConfig:
    """
    Load a signing configuration from a JSON document.

    Args:
        json_string: JSON object text

    Returns:
        SigningConfig: Validated configuration

    Raises:
        ConfigError: If the document cannot be parsed or is incomplete
    """
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Failed to parse configuration JSON: {e}",
            ErrorCodes.CONFIG_PARSE_ERROR
        ) from e

    return load_signing_config(data)


def load_signing_config_from_file(path: Union[str, Path]) -> SigningConfig:
    """
    Load a signing configuration from a JSON file.

    Args:
        path: Path to the configuration file

    Returns:
        SigningConfig: Validated configuration

    Raises:
        ConfigError: If the file cannot be read, parsed or is incomplete
    """
    config_path = Path(path)
    try:
        content = config_path.read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file {config_path}: {e}",
            ErrorCodes.CONFIG_PARSE_ERROR,
            {"path": str(config_path)}
        ) from e

    config = load_signing_config_from_json(content)
    logger.info(f"Loaded signing configuration for access ID {config.access_id} from {config_path}")
    return config
