"""Configuration management for the table engine."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RenderConfig(BaseModel):
    """Grid rendering configuration."""

    margin: int = Field(default=1, ge=0, le=8, description="Spaces before each grid line")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="table_engine", description="Service name for tracing")
    console_traces: bool = Field(default=False, description="Export spans to the console")


class Config(BaseSettings):
    """Main configuration for the table engine."""

    model_config = SettingsConfigDict(
        env_prefix="TABLE_ENGINE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    render: RenderConfig = Field(default_factory=RenderConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
