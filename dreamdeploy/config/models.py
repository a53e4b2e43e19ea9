"""
dreamdeploy Config - Configuration models.

Pydantic models for type-safe configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from dreamdeploy.config.constants import (
    DEFAULT_INITIAL_LEDGER_SUPPLY,
    DEFAULT_LOG_DIR,
    DEFAULT_NETWORK,
)

LogLevelName = Literal["trace", "debug", "info", "success", "warning", "error", "critical"]


class DeployConfig(BaseModel):
    """Deployment run settings."""

    network: str = Field(default=DEFAULT_NETWORK, description="Target environment name")
    deployer: str | None = Field(
        default=None,
        description="Dotted path 'package.module:factory' of the target-environment client",
    )
    deployer_options: dict[str, Any] = Field(
        default_factory=dict, description="Keyword arguments passed to the deployer factory"
    )
    initial_ledger_supply: int = Field(
        default=DEFAULT_INITIAL_LEDGER_SUPPLY,
        gt=0,
        description="Initial supply passed as a literal to the ledger constructor",
    )
    validate_order: bool = Field(
        default=True, description="Reject forward references before any deploy call"
    )
    auto_order: bool = Field(
        default=False, description="Reorder specs topologically instead of trusting declared order"
    )


class LoggingConfig(BaseModel):
    """Logging settings."""

    file_level: LogLevelName = Field(default="debug", description="File log level")
    console_level: LogLevelName = Field(default="warning", description="Console log level")
    console_enabled: bool = Field(default=False, description="Log to stderr without --verbose")
    log_dir: Path = Field(default=DEFAULT_LOG_DIR, description="Directory for log files")
    rotation: str = Field(default="10 MB", description="Rotate the log file at this size")
    retention: str = Field(default="1 week", description="How long rotated logs are kept")
    json_logs: bool = Field(default=False, description="Write JSON lines to the log file")


class Config(BaseModel):
    """Root configuration."""

    deploy: DeployConfig = Field(default_factory=DeployConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
