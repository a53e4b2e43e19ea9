"""
dreamdeploy Core - Orchestrator, dependency graph and shared types.
"""

from dreamdeploy.core.exceptions import (
    DeploymentCancelledError,
    DeploymentRejectedError,
    DependencyCycleError,
    DependencyOrderError,
    DreamDeployError,
    DuplicateComponentError,
    UnresolvedDependencyError,
)
from dreamdeploy.core.graph import DependencyGraph, resolve_order
from dreamdeploy.core.orchestrator import DeploymentOrchestrator
from dreamdeploy.core.protocols import Deployer
from dreamdeploy.core.registry import HandleRegistry
from dreamdeploy.core.types import (
    ComponentSpec,
    DeploymentRecord,
    DeploymentRun,
    Literal,
    RecordStatus,
    Ref,
    RunStatus,
)

__all__ = [
    "ComponentSpec",
    "DependencyCycleError",
    "DependencyGraph",
    "DependencyOrderError",
    "Deployer",
    "DeploymentCancelledError",
    "DeploymentOrchestrator",
    "DeploymentRecord",
    "DeploymentRejectedError",
    "DeploymentRun",
    "DreamDeployError",
    "DuplicateComponentError",
    "HandleRegistry",
    "Literal",
    "RecordStatus",
    "Ref",
    "RunStatus",
    "UnresolvedDependencyError",
    "resolve_order",
]
