"""
dreamdeploy Core - Shared types and enums.

Static component specs, argument descriptors and the runtime records a
deployment run produces.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from dreamdeploy.core.exceptions import InvalidTransitionError


class RecordStatus(StrEnum):
    """Lifecycle of one component deployment."""

    PENDING = "pending"
    DEPLOYED = "deployed"
    FAILED = "failed"


class RunStatus(StrEnum):
    """Overall outcome of a deployment run."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    ABORTED = "aborted"


# =============================================================================
# Argument descriptors
# =============================================================================

@dataclass(frozen=True)
class Literal:
    """Constructor argument passed through unchanged."""

    value: Any

    def __repr__(self) -> str:
        return f"Literal({self.value!r})"


@dataclass(frozen=True)
class Ref:
    """Constructor argument replaced by another component's identity handle."""

    name: str

    def __repr__(self) -> str:
        return f"Ref({self.name!r})"


ArgDescriptor = Literal | Ref


def as_descriptor(arg: Any) -> ArgDescriptor:
    """Wrap a bare value in ``Literal``; descriptors are returned as-is."""
    if isinstance(arg, (Literal, Ref)):
        return arg
    return Literal(arg)


@dataclass(frozen=True)
class ComponentSpec:
    """
    Static description of one deployable component.

    Attributes:
        name: Unique symbolic identifier (e.g. "Government")
        kind: Artifact passed to the deploy capability; defaults to ``name``
        constructor_args: Ordered ``Literal``/``Ref`` descriptors
    """

    name: str
    constructor_args: tuple[ArgDescriptor, ...] = ()
    kind: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ComponentSpec.name must not be empty")
        object.__setattr__(
            self, "constructor_args", tuple(as_descriptor(a) for a in self.constructor_args)
        )
        if not self.kind:
            object.__setattr__(self, "kind", self.name)

    @classmethod
    def of(cls, name: str, *args: Any, kind: str = "") -> ComponentSpec:
        """Shorthand: ``ComponentSpec.of("Token", 10, Ref("Government"))``."""
        return cls(name=name, constructor_args=tuple(args), kind=kind)

    @property
    def dependencies(self) -> tuple[str, ...]:
        """Names referenced by this spec, in argument order, without repeats."""
        seen: dict[str, None] = {}
        for arg in self.constructor_args:
            if isinstance(arg, Ref):
                seen.setdefault(arg.name, None)
        return tuple(seen)


# =============================================================================
# Runtime records
# =============================================================================

@dataclass
class DeploymentRecord:
    """Result of deploying one ComponentSpec."""

    name: str
    kind: str
    status: RecordStatus = RecordStatus.PENDING
    identity_handle: str | None = None
    resolved_args: tuple[Any, ...] = ()
    error: BaseException | None = None
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    @classmethod
    def for_spec(cls, spec: ComponentSpec) -> DeploymentRecord:
        return cls(name=spec.name, kind=spec.kind)

    def _leave_pending(self, requested: RecordStatus) -> None:
        if self.status is not RecordStatus.PENDING:
            raise InvalidTransitionError(self.name, self.status.value, requested.value)

    def mark_deployed(self, handle: str) -> None:
        """Capture the identity handle. Only allowed once, from pending."""
        self._leave_pending(RecordStatus.DEPLOYED)
        self.identity_handle = handle
        self.status = RecordStatus.DEPLOYED
        self.finished_at = datetime.now()

    def mark_failed(self, error: BaseException) -> None:
        self._leave_pending(RecordStatus.FAILED)
        self.error = error
        self.status = RecordStatus.FAILED
        self.finished_at = datetime.now()

    @property
    def duration_ms(self) -> float | None:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds() * 1000

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "status": self.status.value,
            "identity_handle": self.identity_handle,
            "resolved_args": [_jsonable(a) for a in self.resolved_args],
            "error": str(self.error) if self.error else None,
            "duration_ms": self.duration_ms,
        }


@dataclass
class DeploymentRun:
    """
    One end-to-end execution over a fixed set of specs.

    ``records`` follows the order actually used. Specs after a failure are
    never attempted and therefore never appear.
    """

    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    records: list[DeploymentRecord] = field(default_factory=list)
    status: RunStatus = RunStatus.RUNNING
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.SUCCEEDED

    @property
    def deployed(self) -> list[DeploymentRecord]:
        return [r for r in self.records if r.status is RecordStatus.DEPLOYED]

    @property
    def failed_record(self) -> DeploymentRecord | None:
        return next((r for r in self.records if r.status is RecordStatus.FAILED), None)

    @property
    def handles(self) -> dict[str, str]:
        """Name -> identity handle of every deployed component."""
        return {r.name: r.identity_handle for r in self.deployed if r.identity_handle}

    def abort(self, error: BaseException) -> None:
        self.status = RunStatus.ABORTED
        self.error = error

    def finish(self) -> None:
        if all(r.status is RecordStatus.DEPLOYED for r in self.records):
            self.status = RunStatus.SUCCEEDED
        else:
            self.status = RunStatus.ABORTED

    def raise_for_status(self) -> None:
        """Re-raise the failure that aborted this run, if any."""
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "status": self.status.value,
            "error": str(self.error) if self.error else None,
            "records": [r.to_dict() for r in self.records],
            "handles": self.handles,
        }


def _jsonable(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, Iterable) and not isinstance(value, (bytes, dict)):
        return [_jsonable(v) for v in value]
    return str(value)
