"""
dreamdeploy Environments - target-environment clients.

``memory`` is built in; any other network is served by an external client
named in the config as ``package.module:factory``.
"""

from __future__ import annotations

import importlib
from typing import Any

from loguru import logger

from dreamdeploy.config.constants import GOVERNMENT_KIND, TAX_POOL_KIND, TOKEN_KIND
from dreamdeploy.config.models import DeployConfig
from dreamdeploy.core.exceptions import DeployerLoadError, InvalidConfigError
from dreamdeploy.core.protocols import Deployer
from dreamdeploy.environments.memory import InMemoryEnvironment, contract_address

MEMORY_NETWORK = "memory"


def load_deployer(path: str, **options: Any) -> Deployer:
    """
    Import ``package.module:factory`` and build a deployer with ``options``.

    Raises:
        DeployerLoadError: Bad path, import failure, factory failure, or a
            result that does not implement ``Deployer``
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise DeployerLoadError(path, "expected 'package.module:factory'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise DeployerLoadError(path, "module cannot be imported", e) from e

    factory = getattr(module, attr, None)
    if factory is None or not callable(factory):
        raise DeployerLoadError(path, f"'{attr}' is not a callable in {module_name}")

    try:
        deployer = factory(**options)
    except Exception as e:
        raise DeployerLoadError(path, "factory raised", e) from e

    if not isinstance(deployer, Deployer):
        raise DeployerLoadError(path, f"{type(deployer).__name__} does not implement deploy()")

    logger.debug(f"Loaded deployer {type(deployer).__name__} from {path}")
    return deployer


def create_deployer(config: DeployConfig) -> Deployer:
    """Build the deployer for the configured network."""
    if config.deployer:
        return load_deployer(config.deployer, **config.deployer_options)
    if config.network == MEMORY_NETWORK:
        options = {"known_kinds": (GOVERNMENT_KIND, TOKEN_KIND, TAX_POOL_KIND)}
        options.update(config.deployer_options)
        try:
            return InMemoryEnvironment(**options)
        except TypeError as e:
            raise InvalidConfigError(
                f"Invalid deployer_options for the memory network: {e}",
                {"network": config.network},
            ) from e
    raise InvalidConfigError(
        f"Network '{config.network}' needs a 'deploy.deployer' client in the config",
        {"network": config.network},
    )


__all__ = [
    "InMemoryEnvironment",
    "MEMORY_NETWORK",
    "contract_address",
    "create_deployer",
    "load_deployer",
]
