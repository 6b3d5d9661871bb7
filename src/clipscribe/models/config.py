"""Application configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from clipscribe.errors import ConfigError
from clipscribe.utils.io import read_yaml

DEFAULT_CONFIG_FILE = "clipscribe.yaml"


class BackendConfig(BaseModel):
    """Which backend gateway to talk to."""

    model_config = ConfigDict(extra="forbid")

    factory: str | None = None  # "package.module:callable"
    script: str | None = None  # replay script for the built-in backend


class LoggingConfig(BaseModel):
    """Console output options."""

    model_config = ConfigDict(extra="forbid")

    verbose: bool = False


class ReviewConfig(BaseModel):
    """Review gate options."""

    model_config = ConfigDict(extra="forbid")

    auto_approve: bool = False


class AppConfig(BaseModel):
    """Top-level configuration read from ``clipscribe.yaml``."""

    model_config = ConfigDict(extra="forbid")

    backend: BackendConfig = Field(default_factory=BackendConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    review: ReviewConfig = Field(default_factory=ReviewConfig)


def load_config(path: Path | str | None = None) -> AppConfig:
    """Load configuration from YAML; a missing default file yields defaults."""
    explicit = path is not None
    config_path = Path(path) if explicit else Path(DEFAULT_CONFIG_FILE)

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        return AppConfig()

    try:
        data = read_yaml(config_path)
    except Exception as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    try:
        config = AppConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e

    # Replay scripts are relative to the config file, not the working directory
    script = config.backend.script
    if script and not Path(script).is_absolute():
        config.backend.script = str(config_path.parent / script)
    return config
