"""
Pydantic configuration models for the signing engine and its providers.

Validates provider settings when a registry is built instead of
producing requests that the storage service later rejects.
"""

from __future__ import annotations

import os
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_EXPIRY_SECONDS = 900


class EngineConfig(BaseModel):
    """Provider-independent engine settings.

    ``default_expiry_seconds`` is resolved in order:
    1. Explicit value passed in the config dict.
    2. The BLOBSIGNER_DEFAULT_EXPIRY_SECONDS environment variable.
    3. 900 seconds (15 minutes).
    """

    model_config = ConfigDict(extra="forbid")

    default_expiry_seconds: int = Field(
        default=DEFAULT_EXPIRY_SECONDS, gt=0, description="Validity window used when none is given"
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to the environment for a missing default expiry."""
        if values.get("default_expiry_seconds") is None:
            env_value = os.environ.get("BLOBSIGNER_DEFAULT_EXPIRY_SECONDS")
            if env_value:
                values["default_expiry_seconds"] = env_value
        return values


class AzureBlobConfig(BaseModel):
    """Settings for Azure Blob service SAS signing.

    ``endpoint`` is a template; ``{identity}`` is replaced with the
    storage account name.
    """

    model_config = ConfigDict(extra="forbid")

    endpoint: str = Field(
        default="https://{identity}.blob.core.windows.net",
        description="Blob service endpoint template",
    )
    api_version: str = Field(default="2017-04-17", description="Signed version (sv)")

    @field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class S3Config(BaseModel):
    """Settings for AWS S3 signing (signature v2 and v4).

    ``endpoint`` is a template; ``{bucket}`` is replaced with the
    container name. The region is only used by signature v4 and falls
    back to AWS_DEFAULT_REGION, then ``us-east-1``.
    """

    model_config = ConfigDict(extra="forbid")

    endpoint: str = Field(
        default="https://{bucket}.s3.amazonaws.com",
        description="S3 endpoint template (virtual-hosted style by default)",
    )
    region: str = Field(default="us-east-1", description="AWS region for the v4 scope")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to AWS_DEFAULT_REGION for a missing region."""
        if not values.get("region"):
            env_region = os.environ.get("AWS_DEFAULT_REGION")
            if env_region:
                values["region"] = env_region
        return values

    @field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


# Map provider identifiers to their config models for dynamic validation
CONFIG_REGISTRY: dict[str, type[BaseModel]] = {
    "azureblob": AzureBlobConfig,
    "s3": S3Config,
    "s3-presigned": S3Config,
    "s3-v4": S3Config,
}


def validate_config(provider: str, config: dict | None = None) -> BaseModel:
    """Validate and return a typed config model for the given provider.

    Args:
        provider: The provider identifier (e.g. 'azureblob', 's3-v4').
        config: Raw configuration dictionary; ``None`` means defaults.

    Returns:
        A validated Pydantic config model.

    Raises:
        ValueError: If the provider is unknown.
        pydantic.ValidationError: If the config is invalid.
    """
    model = CONFIG_REGISTRY.get(provider)
    if model is None:
        raise ValueError(f"No config model registered for provider: {provider}")
    return model(**(config or {}))


__all__ = [
    "DEFAULT_EXPIRY_SECONDS",
    "EngineConfig",
    "AzureBlobConfig",
    "S3Config",
    "CONFIG_REGISTRY",
    "validate_config",
]
