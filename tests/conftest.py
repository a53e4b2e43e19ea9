"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from dreamdeploy.config.constants import GOVERNMENT_KIND, TAX_POOL_KIND, TOKEN_KIND
from dreamdeploy.core.orchestrator import DeploymentOrchestrator
from dreamdeploy.core.types import ComponentSpec
from dreamdeploy.environments.memory import InMemoryEnvironment
from dreamdeploy.manifest import build_manifest

KNOWN_KINDS = (GOVERNMENT_KIND, TOKEN_KIND, TAX_POOL_KIND)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's DREAMDEPLOY_* variables out of the tests."""
    for var in (
        "DREAMDEPLOY_CONFIG",
        "DREAMDEPLOY_NETWORK",
        "DREAMDEPLOY_INITIAL_LEDGER_SUPPLY",
        "DREAMDEPLOY_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def environment() -> InMemoryEnvironment:
    """In-memory target environment that knows the DREAM kinds."""
    return InMemoryEnvironment(known_kinds=KNOWN_KINDS)


@pytest.fixture
def any_environment() -> InMemoryEnvironment:
    """In-memory target environment that accepts any kind."""
    return InMemoryEnvironment()


@pytest.fixture
def orchestrator(environment: InMemoryEnvironment) -> DeploymentOrchestrator:
    return DeploymentOrchestrator(environment)


@pytest.fixture
def manifest() -> list[ComponentSpec]:
    return build_manifest()
