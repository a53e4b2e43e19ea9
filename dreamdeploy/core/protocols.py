"""
Core Protocols - the boundary between the orchestrator and the target environment.
"""
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Deployer(Protocol):
    """
    Protocol for target-environment clients.

    ``deploy`` submits one new component instance and waits until the
    environment confirms creation. It returns the opaque identity handle
    (an address) or raises; the orchestrator wraps any failure in
    ``DeploymentRejectedError``.
    """

    async def deploy(self, kind: str, args: Sequence[Any]) -> str:
        """Create a component of ``kind`` with constructor ``args``."""
        ...
