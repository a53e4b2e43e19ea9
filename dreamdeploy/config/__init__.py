"""
dreamdeploy Config - Configuration management.
"""

from dreamdeploy.config.loader import load_config, save_config
from dreamdeploy.config.models import Config, DeployConfig, LoggingConfig

__all__ = [
    "Config",
    "DeployConfig",
    "LoggingConfig",
    "load_config",
    "save_config",
]
