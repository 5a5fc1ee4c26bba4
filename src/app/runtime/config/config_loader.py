"""Configuration loading with environment variable substitution."""

import os
from pathlib import Path
from typing import Any, Literal, overload

import yaml
from cachetools.func import lru_cache  # type: ignore
from loguru import logger
from pydantic_core import ValidationError

from src.app.runtime.config.config_data import ConfigData
from src.app.runtime.config.config_utils import (
    apply_environment_overrides,
    substitute_env_vars,
)

CONFIG_PATH = Path(os.getenv("CHANNEL_SYNC_CONFIG", "config.yaml"))


@overload
def load_config(
    file_path: Path = ..., processed: Literal[True] = ...
) -> ConfigData: ...


@overload
def load_config(
    file_path: Path = ..., *, processed: Literal[False]
) -> dict[str, Any]: ...


def load_config(
    file_path: Path = CONFIG_PATH, processed: bool = True
) -> ConfigData | dict[str, Any]:
    """
    Load a YAML configuration file with environment variable substitution.

    Args:
        file_path: Path to the YAML file (default: config.yaml)
        processed: Whether to substitute environment variables and validate.
                  - True (default): substitute env vars and validate as ConfigData
                  - False: return raw dict without validation or substitution

    Returns:
        ConfigData if processed is True, raw dict otherwise

    Raises:
        ValueError: If required environment variables are missing, validation fails,
                   or YAML structure is invalid (missing 'config' key)
        FileNotFoundError: If the YAML file doesn't exist

    Environment-Specific Behavior:
        Reads APP_ENVIRONMENT (default: 'development') and applies overrides from
        environment variables prefixed with the uppercased environment name
        (e.g., PRODUCTION_*, DEVELOPMENT_*) before substitution.
    """
    with open(file_path) as f:
        content = f.read()

    if processed:
        env_mode = os.getenv("APP_ENVIRONMENT", "development")
        logger.info(f"Loading configuration for environment: {env_mode}")

        applied = apply_environment_overrides(env_mode)
        logger.info(f"Applied {applied} environment-specific overrides")

        content = substitute_env_vars(content)

    try:
        loaded: dict[str, Any] = yaml.safe_load(content)
        if not processed:
            return loaded
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    if "config" not in loaded:
        raise ValueError("Invalid YAML structure: missing 'config' key")

    try:
        config = ConfigData(**(loaded["config"] or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    logger.debug(
        f"Store backend: {config.store.backend}, default namespace: {config.store.namespace}"
    )
    return config


@lru_cache(maxsize=1)
def get_config() -> ConfigData:
    """Load the configuration once; a missing config file yields defaults."""
    if not CONFIG_PATH.exists():
        logger.debug(f"{CONFIG_PATH} not found, using default configuration")
        return ConfigData()
    return load_config(CONFIG_PATH)
