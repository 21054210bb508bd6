"""Configuration management for the post service."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Database configuration."""

    url: str = Field(default="sqlite:///posts.db", description="SQLAlchemy database URL")
    pool_size: int = Field(default=5, ge=1, le=100, description="Connection pool size")
    echo: bool = Field(default=False, description="Log every SQL statement")
    create_schema: bool = Field(
        default=False, description="Create tables at startup (development only)"
    )


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=50051, ge=0, le=65535, description="gRPC port (0 = ephemeral)")
    max_workers: int = Field(default=10, ge=1, le=1000, description="gRPC worker threads")
    rest_port: int | None = Field(
        default=None, ge=1, le=65535, description="Optional REST gateway port"
    )
    default_page_size: int = Field(
        default=10, ge=1, le=1000, description="Page size used when a request asks for 0"
    )
    grace_period_seconds: float = Field(
        default=5.0, ge=0, description="Time allowed for in-flight calls on shutdown"
    )


class TLSConfig(BaseModel):
    """Transport security configuration. Both paths or neither."""

    cert_file: Path | None = Field(default=None, description="PEM certificate chain")
    key_file: Path | None = Field(default=None, description="PEM private key")

    @model_validator(mode="after")
    def _both_or_neither(self) -> TLSConfig:
        if (self.cert_file is None) != (self.key_file is None):
            raise ValueError("tls.cert_file and tls.key_file must be set together")
        return self

    @property
    def enabled(self) -> bool:
        return self.cert_file is not None and self.key_file is not None


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="post", description="Service name for tracing")
    metrics_port: int | None = Field(
        default=None, ge=1, le=65535, description="Prometheus metrics port"
    )


class Config(BaseSettings):
    """Main configuration for the post service."""

    model_config = SettingsConfigDict(
        env_prefix="POST_SERVICE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    tls: TLSConfig = Field(default_factory=TLSConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


# Variables read by earlier deployments of the service.
LEGACY_ENV = {
    "CONN": ("database", "url"),
    "PORT": ("server", "port"),
    "JAEGER_ADDR": ("observability", "otel_endpoint"),
}


def get_config(environ: dict[str, str] | None = None) -> Config:
    """Build configuration from the environment.

    ``POST_SERVICE_*`` variables take precedence over the legacy ``CONN``,
    ``PORT`` and ``JAEGER_ADDR`` variables.
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, dict[str, str]] = {}
    for name, (section, key) in LEGACY_ENV.items():
        value = environ.get(name)
        prefixed = f"POST_SERVICE_{section}__{key}".upper()
        if value and not any(k.upper() == prefixed for k in environ):
            overrides.setdefault(section, {})[key] = value

    config = Config()
    if not overrides:
        return config

    merged = config.model_dump()
    for section, values in overrides.items():
        merged[section].update(values)
    return Config.model_validate(merged)
