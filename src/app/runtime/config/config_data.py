"""Configuration data models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from src.infra.constants import DEFAULT_CONSTANTS


class StoreConfig(BaseModel):
    """Resource store settings."""

    backend: Literal["kr8s", "memory"] = Field(
        default="kr8s", description="Store backend to use"
    )
    namespace: str = Field(
        default=DEFAULT_CONSTANTS.DEFAULT_NAMESPACE,
        description="Namespace for resource references given without one",
    )
    kubeconfig: str | None = Field(
        default=None, description="Kubeconfig path for the kr8s backend"
    )
    context: str | None = Field(
        default=None, description="Kubeconfig context for the kr8s backend"
    )
    manifests: str | None = Field(
        default=None, description="YAML file seeding the memory backend"
    )


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = Field(
        default=False, description="Serialize log records as JSON"
    )


class ConfigData(BaseModel):
    """Root configuration, the ``config:`` section of config.yaml."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
