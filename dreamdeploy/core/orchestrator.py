"""
Deployment Orchestrator.

Deploys component specs one at a time, in dependency order, threading each
identity handle into the constructor arguments of the specs that follow.

There is no rollback: every successful step created irreversible state in
the target environment. A failed run reports exactly how far it got so an
operator can resume by hand or start over.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from dreamdeploy.core.exceptions import (
    DeploymentCancelledError,
    DeploymentRejectedError,
    DreamDeployError,
)
from dreamdeploy.core.graph import resolve_order
from dreamdeploy.core.protocols import Deployer
from dreamdeploy.core.registry import HandleRegistry
from dreamdeploy.core.types import (
    ComponentSpec,
    DeploymentRecord,
    DeploymentRun,
    RecordStatus,
)
from dreamdeploy.utils.logger import get_run_logger


class DeploymentOrchestrator:
    """
    Sequential, abort-on-first-failure deployment.

    Usage:
        orchestrator = DeploymentOrchestrator(InMemoryEnvironment())
        run = await orchestrator.run(build_manifest())
        run.raise_for_status()
        print(run.handles["Token"])

    Args:
        deployer: Target-environment client implementing ``Deployer``
        validate_order: Reject forward references before any deploy call
        auto_order: Compute a topological order instead of trusting the
            declared one (implies validation)
    """

    def __init__(
        self,
        deployer: Deployer,
        *,
        validate_order: bool = True,
        auto_order: bool = False,
    ) -> None:
        if not callable(getattr(deployer, "deploy", None)):
            raise TypeError(f"{type(deployer).__name__} does not implement Deployer.deploy")
        self.deployer = deployer
        self.validate_order = validate_order
        self.auto_order = auto_order

    def plan(self, specs: Iterable[ComponentSpec]) -> list[ComponentSpec]:
        """
        Run the preflight checks and return the order ``run`` would use.

        Raises:
            DuplicateComponentError: Two specs share a name
            DependencyOrderError: A reference is undeclared, forward or cyclic
        """
        return resolve_order(specs, validate=self.validate_order, auto_order=self.auto_order)

    async def run(
        self,
        specs: Iterable[ComponentSpec],
        *,
        cancel_event: asyncio.Event | None = None,
        report: DeploymentRun | None = None,
    ) -> DeploymentRun:
        """
        Deploy every spec exactly once.

        Failures during the run are captured on the returned DeploymentRun
        (status ``aborted``, ``error`` set); call ``raise_for_status`` to
        re-raise. Preflight errors are raised directly since no deploy call
        has been made.

        Args:
            specs: Component specs, in deployment order unless ``auto_order``
            cancel_event: When set, no further deploy call is issued
            report: Run to fill in instead of a new one. A caller that may
                cancel the task keeps the partial records through it, since
                cancellation re-raises instead of returning

        Returns:
            DeploymentRun with one record per attempted spec
        """
        ordered = self.plan(specs)
        run = report if report is not None else DeploymentRun()
        log = get_run_logger(run.run_id)
        registry = HandleRegistry()

        log.info(
            f"Starting deployment run {run.run_id}: "
            f"{' -> '.join(s.name for s in ordered) or '(empty)'}"
        )

        for position, spec in enumerate(ordered, start=1):
            record = DeploymentRecord.for_spec(spec)
            registry.add(record)
            run.records.append(record)

            try:
                await self._deploy_one(spec, record, registry, cancel_event, log)
            except DreamDeployError as e:
                record.mark_failed(e)
                run.abort(e)
                log.error(f"Step {position}/{len(ordered)} '{spec.name}' failed: {e}")
                self._log_partial(run, log)
                return run
            except asyncio.CancelledError:
                cancelled = DeploymentCancelledError(spec.name)
                if record.status is RecordStatus.PENDING:
                    record.mark_failed(cancelled)
                run.abort(cancelled)
                self._log_partial(run, log)
                raise

        run.finish()
        log.success(f"Deployment run {run.run_id} succeeded ({len(run.records)} components)")
        return run

    async def _deploy_one(
        self,
        spec: ComponentSpec,
        record: DeploymentRecord,
        registry: HandleRegistry,
        cancel_event: asyncio.Event | None,
        log,
    ) -> None:
        record.resolved_args = registry.resolve_args(spec)
        log.debug(f"Resolved {spec.name} args: {list(record.resolved_args)!r}")

        if cancel_event is not None and cancel_event.is_set():
            raise DeploymentCancelledError(spec.name)

        log.info(f"Deploying {spec.name} ({spec.kind})")
        task = asyncio.ensure_future(self.deployer.deploy(spec.kind, record.resolved_args))
        try:
            # Shielded: an accepted call is never cancelled nor re-submitted
            handle = await asyncio.shield(task)
        except asyncio.CancelledError:
            log.warning(f"Run cancelled while {spec.name} was in flight, waiting for it to settle")
            await asyncio.wait({task})
            self._settle(task, spec, record, registry, log)
            raise
        except DeploymentRejectedError as e:
            raise e.for_component(spec.name) from e.cause
        except Exception as e:
            raise _rejected(spec, e) from e

        registry.claim_handle(record, handle)
        log.info(f"Deployed {spec.name} at {handle}")

    @staticmethod
    def _settle(
        task: asyncio.Future,
        spec: ComponentSpec,
        record: DeploymentRecord,
        registry: HandleRegistry,
        log,
    ) -> None:
        if task.cancelled():
            record.mark_failed(DeploymentCancelledError(spec.name))
            return
        exc = task.exception()
        if exc is not None:
            record.mark_failed(_rejected(spec, exc))
            log.warning(f"{spec.name} failed after cancellation: {exc!r}")
            return
        try:
            registry.claim_handle(record, task.result())
        except DeploymentRejectedError as e:
            record.mark_failed(e)
            return
        log.warning(f"{spec.name} was deployed at {record.identity_handle} after cancellation")

    @staticmethod
    def _log_partial(run: DeploymentRun, log) -> None:
        if not run.deployed:
            log.error("Run aborted before any component was deployed")
            return
        deployed = ", ".join(f"{name}={handle}" for name, handle in run.handles.items())
        log.error(f"Run aborted, already deployed and not rolled back: {deployed}")


def _rejected(spec: ComponentSpec, exc: BaseException) -> DeploymentRejectedError:
    if isinstance(exc, DeploymentRejectedError):
        return exc.for_component(spec.name)
    return DeploymentRejectedError(spec.name, spec.kind, str(exc) or type(exc).__name__, exc)
