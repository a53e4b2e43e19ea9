"""
Handle Registry - run-scoped map of deployed components.

Each run owns exactly one registry. Records are added monotonically and a
reference resolves only once its record reached ``deployed``.
"""
from typing import Any, Dict, Optional

from dreamdeploy.core.exceptions import (
    DeploymentRejectedError,
    DuplicateComponentError,
    UnresolvedDependencyError,
)
from dreamdeploy.core.types import (
    ArgDescriptor,
    ComponentSpec,
    DeploymentRecord,
    Literal,
    RecordStatus,
    Ref,
)


class HandleRegistry:
    """
    Registry of deployment records for a single run.

    Usage:
        registry = HandleRegistry()
        registry.add(record)
        args = registry.resolve_args(spec)   # Ref -> identity handle
        registry.claim_handle(record, handle)
    """

    def __init__(self) -> None:
        self._records: Dict[str, DeploymentRecord] = {}
        self._owners: Dict[str, str] = {}

    def add(self, record: DeploymentRecord) -> None:
        """
        Register a new (pending) record.

        Raises:
            DuplicateComponentError: If a record with this name exists
        """
        if record.name in self._records:
            raise DuplicateComponentError(record.name)
        self._records[record.name] = record

    def handle_of(self, name: str) -> Optional[str]:
        record = self._records.get(name)
        if record is None or record.status is not RecordStatus.DEPLOYED:
            return None
        return record.identity_handle

    def resolve(self, descriptor: ArgDescriptor, component: str = "?") -> Any:
        """
        Resolve one argument descriptor.

        Args:
            descriptor: ``Literal`` or ``Ref``
            component: Name of the spec being resolved (for error context)

        Returns:
            The literal value, or the referenced identity handle

        Raises:
            UnresolvedDependencyError: If the reference has no deployed record
        """
        if isinstance(descriptor, Literal):
            return descriptor.value
        if isinstance(descriptor, Ref):
            handle = self.handle_of(descriptor.name)
            if handle is None:
                raise UnresolvedDependencyError(component, descriptor.name)
            return handle
        raise TypeError(f"Unknown argument descriptor: {descriptor!r}")

    def resolve_args(self, spec: ComponentSpec) -> tuple[Any, ...]:
        return tuple(self.resolve(arg, spec.name) for arg in spec.constructor_args)

    def claim_handle(self, record: DeploymentRecord, handle: Any) -> None:
        """
        Mark ``record`` deployed with ``handle`` after checking it.

        Raises:
            DeploymentRejectedError: Empty handle, or one already held by
                another record of this run
        """
        if not isinstance(handle, str) or not handle:
            raise DeploymentRejectedError(
                record.name, record.kind, f"environment returned an empty handle ({handle!r})"
            )
        owner = self._owners.get(handle)
        if owner is not None and owner != record.name:
            raise DeploymentRejectedError(
                record.name, record.kind, f"handle {handle} is already assigned to '{owner}'"
            )
        record.mark_deployed(handle)
        self._owners[handle] = record.name

    def __len__(self) -> int:
        return len(self._records)
