"""
Core Exceptions - Unified error hierarchy for dreamdeploy.

Every error carries a human readable message plus a ``details`` dict so the
run report can say which component, which step and which underlying cause.
"""

from __future__ import annotations

from typing import Any


class DreamDeployError(Exception):
    """Base exception for all dreamdeploy errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | {self.details}"
        return self.message


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(DreamDeployError):
    """Input validation failed."""
    pass


class DuplicateComponentError(ValidationError):
    """Two component specs share the same name."""

    def __init__(self, name: str):
        super().__init__(
            f"Component '{name}' is declared more than once",
            {"component": name}
        )
        self.component = name


class UnresolvedDependencyError(ValidationError):
    """A reference could not be resolved to a deployed identity handle."""

    def __init__(self, component: str, dependency: str, reason: str | None = None):
        reason = reason or "has no deployed record"
        super().__init__(
            f"Component '{component}' references '{dependency}' which {reason}",
            {"component": component, "dependency": dependency}
        )
        self.component = component
        self.dependency = dependency


class DependencyOrderError(UnresolvedDependencyError):
    """A spec references a component that is not declared before it."""

    def __init__(self, component: str, dependency: str, reason: str | None = None):
        super().__init__(
            component,
            dependency,
            reason or "is not declared earlier in the deployment order",
        )


class DependencyCycleError(DependencyOrderError):
    """The reference graph contains a cycle."""

    def __init__(self, cycle: list[str]):
        path = " -> ".join(cycle)
        super().__init__(cycle[0], cycle[1], f"closes a dependency cycle ({path})")
        self.cycle = cycle
        self.details["cycle"] = cycle


class InvalidTransitionError(ValidationError):
    """A deployment record was moved out of a terminal state."""

    def __init__(self, component: str, current: str, requested: str):
        super().__init__(
            f"Record '{component}' cannot move from {current} to {requested}",
            {"component": component, "current": current, "requested": requested}
        )


# =============================================================================
# Execution Errors
# =============================================================================

class ExecutionError(DreamDeployError):
    """A deployment step failed while talking to the target environment."""
    pass


class DeploymentRejectedError(ExecutionError):
    """The target environment refused or failed to create a component.

    The native error of the environment is kept in ``cause`` and is also
    chained as ``__cause__`` when raised with ``from``.
    """

    def __init__(
        self,
        component: str | None,
        kind: str | None,
        reason: str,
        cause: BaseException | None = None,
    ):
        details: dict[str, Any] = {"component": component, "kind": kind}
        if cause is not None:
            details["cause"] = str(cause)
            details["cause_type"] = type(cause).__name__
        label = f"'{component}'" if component else f"kind '{kind}'"
        super().__init__(f"Deployment of {label} rejected: {reason}", details)
        self.component = component
        self.kind = kind
        self.reason = reason
        self.cause = cause

    def for_component(self, component: str) -> DeploymentRejectedError:
        """Return a copy of this error naming the component that failed."""
        if self.component == component:
            return self
        return DeploymentRejectedError(component, self.kind, self.reason, self.cause)


class DeploymentCancelledError(ExecutionError):
    """The run was cancelled; no deploy call is issued after this component."""

    def __init__(self, component: str):
        super().__init__(
            f"Run cancelled at '{component}'",
            {"component": component}
        )
        self.component = component


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(DreamDeployError):
    """Configuration error."""
    pass


class InvalidConfigError(ConfigurationError):
    """Invalid configuration value."""
    pass


class DeployerLoadError(ConfigurationError):
    """The configured deployer factory could not be imported or built."""

    def __init__(self, path: str, reason: str, original_error: Exception | None = None):
        details = {"path": path, "reason": reason}
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__
        super().__init__(f"Cannot load deployer '{path}': {reason}", details)
        self.path = path
        self.reason = reason
        self.original_error = original_error
