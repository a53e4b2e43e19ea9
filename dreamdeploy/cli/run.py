"""
Non-interactive deployment run.

Handles `dreamdeploy deploy`: builds the manifest, picks the deployer for the
configured network, runs the orchestrator and reports the outcome.
"""

from __future__ import annotations

import asyncio
import json
import signal
import sys
from pathlib import Path

from loguru import logger

from dreamdeploy.config.models import Config
from dreamdeploy.core.orchestrator import DeploymentOrchestrator
from dreamdeploy.core.types import DeploymentRun
from dreamdeploy.environments import create_deployer
from dreamdeploy.manifest import build_manifest
from dreamdeploy.ui.console import ConsoleUI


def _install_stop_handler(cancel_event: asyncio.Event) -> bool:
    """SIGTERM asks the run to stop before its next deploy call."""
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGTERM, cancel_event.set)
    except (NotImplementedError, RuntimeError, ValueError):
        # Windows event loops, or not on the main thread
        logger.debug("SIGTERM handler not installed")
        return False
    return True


def write_report(run: DeploymentRun, path: str | Path) -> Path:
    """Write the JSON run report to ``path``."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(run.to_dict(), indent=2) + "\n")
    return out


async def run_deployment(
    config: Config,
    *,
    output_format: str = "text",
    output_file: str | None = None,
    ui: ConsoleUI | None = None,
) -> DeploymentRun:
    """
    Deploy the manifest once.

    Args:
        config: Loaded configuration (network, supply, ordering flags)
        output_format: "text" renders a table, "json" prints the report
        output_file: Optional path for the JSON report
        ui: Console to render to

    Returns:
        The finished (succeeded or aborted) DeploymentRun

    Raises:
        DreamDeployError: Configuration or preflight failure (nothing deployed)
        asyncio.CancelledError: After the partial run has been reported
    """
    ui = ui or ConsoleUI()
    specs = build_manifest(config.deploy.initial_ledger_supply)
    deployer = create_deployer(config.deploy)
    orchestrator = DeploymentOrchestrator(
        deployer,
        validate_order=config.deploy.validate_order,
        auto_order=config.deploy.auto_order,
    )

    cancel_event = asyncio.Event()
    installed = _install_stop_handler(cancel_event)

    if output_format == "text":
        ui.info(f"Deploying {len(specs)} components to '{config.deploy.network}'")

    run = DeploymentRun()
    try:
        await orchestrator.run(specs, cancel_event=cancel_event, report=run)
    except asyncio.CancelledError:
        # Ctrl-C: the in-flight call has settled, show how far the run got
        if run.records:
            _report(run, output_format, output_file, ui)
        raise
    finally:
        if installed:
            asyncio.get_running_loop().remove_signal_handler(signal.SIGTERM)

    _report(run, output_format, output_file, ui)
    return run


def _report(run: DeploymentRun, output_format: str, output_file: str | None, ui: ConsoleUI) -> None:
    if output_format == "json":
        print(json.dumps(run.to_dict(), indent=2))
    else:
        ui.render_run(run)

    if output_file:
        path = write_report(run, output_file)
        logger.info(f"Run report written to {path}")
        if output_format == "text":
            ui.info(f"Report written to {path}")


def report_error(message: str, output_format: str) -> None:
    """Report a failure that happened before any run existed."""
    if output_format == "json":
        print(json.dumps({"success": False, "error": message}))
    else:
        print(f"Error: {message}", file=sys.stderr)
