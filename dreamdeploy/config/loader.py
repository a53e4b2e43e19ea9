"""
dreamdeploy Config - YAML loader with environment overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from dreamdeploy.config.constants import (
    DEFAULT_CONFIG_FILE,
    ENV_CONFIG_FILE,
    ENV_INITIAL_LEDGER_SUPPLY,
    ENV_LOG_LEVEL,
    ENV_NETWORK,
)
from dreamdeploy.config.models import Config
from dreamdeploy.core.exceptions import InvalidConfigError


def _config_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path).expanduser()
    env_path = os.environ.get(ENV_CONFIG_FILE)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise InvalidConfigError(f"Invalid YAML in {path}: {e}", {"path": str(path)}) from e

    # Empty file
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigError(
            f"Config file {path} must contain a mapping", {"path": str(path)}
        )
    return data


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    deploy = dict(data.get("deploy") or {})
    logging_cfg = dict(data.get("logging") or {})

    network = os.environ.get(ENV_NETWORK)
    if network:
        deploy["network"] = network

    supply = os.environ.get(ENV_INITIAL_LEDGER_SUPPLY)
    if supply:
        try:
            deploy["initial_ledger_supply"] = int(supply)
        except ValueError as e:
            raise InvalidConfigError(
                f"{ENV_INITIAL_LEDGER_SUPPLY} must be an integer, got {supply!r}",
                {"variable": ENV_INITIAL_LEDGER_SUPPLY},
            ) from e

    level = os.environ.get(ENV_LOG_LEVEL)
    if level:
        logging_cfg["console_level"] = level.lower()

    return {**data, "deploy": deploy, "logging": logging_cfg}


def load_config(path: str | Path | None = None) -> Config:
    """
    Load configuration.

    Lookup order: explicit ``path``, ``$DREAMDEPLOY_CONFIG``, then
    ``~/.dreamdeploy/config.yaml``. A missing file yields defaults.
    Environment variables override file values.

    Raises:
        InvalidConfigError: If the file is not valid YAML or a value fails validation
    """
    config_path = _config_path(path)
    data: dict[str, Any] = {}

    if config_path.exists():
        data = _read_yaml(config_path)
        logger.debug(f"Loaded config from {config_path}")
    elif path is not None:
        raise InvalidConfigError(
            f"Config file not found: {config_path}", {"path": str(config_path)}
        )

    data = _apply_env_overrides(data)

    try:
        return Config.model_validate(data)
    except PydanticValidationError as e:
        raise InvalidConfigError(f"Invalid configuration: {e}", {"path": str(config_path)}) from e


def save_config(config: Config, path: str | Path | None = None) -> Path:
    """Write ``config`` as YAML and return the path written."""
    config_path = _config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False))
    return config_path
