"""Configuration management for schema-openapi."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProbingConfig(BaseModel):
    """Configuration for transform output probing."""

    enabled: bool = Field(default=True, description="Run transformation functions on a synthetic sample to infer their output shape. When disabled, Output mode falls back to the input shape.")


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="json", description="Log format ('json' or 'console')")
    file: Optional[Path] = Field(default=None, description="Log file path")


class Config(BaseSettings):
    """Main configuration for schema-openapi. Loads from environment variables prefixed with SCHEMA_OPENAPI_."""

    model_config = SettingsConfigDict(
        env_prefix='SCHEMA_OPENAPI_',
        env_nested_delimiter='__', # e.g., SCHEMA_OPENAPI_PROBING__ENABLED
        extra='ignore',
        env_file='.env',
        env_file_encoding='utf-8'
    )

    probing: ProbingConfig = Field(default_factory=ProbingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, file_path: Path) -> "Config":
        """Create configuration strictly from a JSON file.
        Note: This does not layer with environment variables.
        """
        with open(file_path) as f:
            config_data = json.load(f)
        return cls.model_validate(config_data)
