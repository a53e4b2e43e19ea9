"""
dreamdeploy Configuration Constants.

Centralized defaults for the deployment run, logging and file locations.
"""
from pathlib import Path

# Deployment
DEFAULT_NETWORK = "memory"
DEFAULT_INITIAL_LEDGER_SUPPLY = 1_000_000_000_000_000_000_000  # 1000 units at 18 decimals

# Component kinds known to the development environment
GOVERNMENT_KIND = "DreamGovernment"
TOKEN_KIND = "DreamToken"
TAX_POOL_KIND = "TaxPool"

# Files
DEFAULT_CONFIG_DIR = Path.home() / ".dreamdeploy"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
DEFAULT_LOG_DIR = DEFAULT_CONFIG_DIR / "logs"
APP_LOG_NAME = "deploy.log"

# Environment variables
ENV_CONFIG_FILE = "DREAMDEPLOY_CONFIG"
ENV_NETWORK = "DREAMDEPLOY_NETWORK"
ENV_INITIAL_LEDGER_SUPPLY = "DREAMDEPLOY_INITIAL_LEDGER_SUPPLY"
ENV_LOG_LEVEL = "DREAMDEPLOY_LOG_LEVEL"
