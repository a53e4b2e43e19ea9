"""
In-memory target environment.

A development stand-in for a ledger network: it assigns EVM-style addresses,
keeps every created instance and can be told to reject selected kinds.
"""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from loguru import logger

from dreamdeploy.core.exceptions import DeploymentRejectedError

DEFAULT_ACCOUNT = "0x" + "00" * 19 + "01"


@dataclass
class DeployedInstance:
    """One component instance created by the environment."""

    address: str
    kind: str
    args: tuple[Any, ...]
    nonce: int
    created_at: datetime = field(default_factory=datetime.now)


def contract_address(account: str, nonce: int) -> str:
    """Derive a deterministic 20-byte hex address from account and nonce."""
    digest = hashlib.sha256(f"{account.lower()}:{nonce}".encode()).hexdigest()
    return "0x" + digest[-40:]


class InMemoryEnvironment:
    """
    Development target environment implementing ``Deployer``.

    Args:
        account: Deploying account; addresses derive from it and the nonce
        known_kinds: If given, deploying any other kind is rejected
        reject: Kinds whose deployment is rejected (failure injection)
        latency: Seconds each deploy call takes
    """

    def __init__(
        self,
        account: str = DEFAULT_ACCOUNT,
        known_kinds: Iterable[str] | None = None,
        reject: Iterable[str] = (),
        latency: float = 0.0,
    ) -> None:
        self.account = account
        self.known_kinds = frozenset(known_kinds) if known_kinds is not None else None
        self.reject = set(reject)
        self.latency = latency
        self.nonce = 0
        self.instances: dict[str, DeployedInstance] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    async def deploy(self, kind: str, args: Sequence[Any]) -> str:
        args = tuple(args)
        self.calls.append((kind, args))

        if self.latency:
            await asyncio.sleep(self.latency)

        if self.known_kinds is not None and kind not in self.known_kinds:
            raise DeploymentRejectedError(None, kind, f"unknown artifact '{kind}'")
        if kind in self.reject:
            raise DeploymentRejectedError(None, kind, "transaction reverted")

        address = contract_address(self.account, self.nonce)
        self.instances[address] = DeployedInstance(address, kind, args, self.nonce)
        self.nonce += 1
        logger.debug(f"memory: created {kind} at {address}")
        return address

    def instance(self, address: str) -> DeployedInstance | None:
        return self.instances.get(address)
