"""
Centralized logging for dreamdeploy.

Provides:
- A rotating file sink under the configured log directory
- An optional colourised console sink (--verbose)
- Run-bound loggers so every line of a deployment carries its run_id
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from dreamdeploy.config.models import LoggingConfig


def _format_record(config: LoggingConfig):
    def format_record(record) -> str:
        """Format log record with optional run_id."""
        rid = record["extra"].get("run_id", "")

        if config.json_logs:
            log_entry = {
                "timestamp": record["time"].isoformat(),
                "level": record["level"].name,
                "message": record["message"],
                "module": record["name"],
                "function": record["function"],
                "line": record["line"],
            }
            if rid:
                log_entry["run_id"] = rid
            # The returned string is itself a format template
            record["extra"]["_json"] = json.dumps(log_entry)
            return "{extra[_json]}\n"

        if rid:
            return (
                "{time:YYYY-MM-DD HH:mm:ss} | " + rid +
                " | {level: <8} | {name}:{function}:{line} - {message}\n{exception}"
            )
        return (
            "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
            "{name}:{function}:{line} - {message}\n{exception}"
        )

    return format_record


def setup_logger(verbose: bool = False, config: LoggingConfig | None = None) -> Path:
    """
    Configure the logger.

    Rules:
    1. FILE: Always log to <log_dir>/deploy.log (rotated).
    2. CONSOLE: DEBUG+ to stderr when verbose, configured level when
       console logging is enabled, nothing otherwise (the report is the UI).

    Args:
        verbose: Enable console logging at DEBUG
        config: Optional LoggingConfig override (defaults otherwise)

    Returns:
        Path of the log file
    """
    from dreamdeploy.config.constants import APP_LOG_NAME
    from dreamdeploy.config.models import LoggingConfig

    config = config or LoggingConfig()
    logger.remove()

    log_dir = Path(config.log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / APP_LOG_NAME

    logger.add(
        log_path,
        rotation=config.rotation,
        retention=config.retention,
        level=config.file_level.upper(),
        format=_format_record(config),
        enqueue=True,
    )

    if verbose or config.console_enabled:
        console_format = (
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        )
        logger.add(
            sys.stderr,
            format=console_format,
            level="DEBUG" if verbose else config.console_level.upper(),
            colorize=True,
        )

    return log_path


def get_run_logger(run_id: str):
    """
    Get a logger bound to a deployment run.

    Example:
        >>> log = get_run_logger("3f2a9c1b7d4e")
        >>> log.info("Deploying Government")
    """
    return logger.bind(run_id=run_id)
