"""
dreamdeploy CLI - Command line interface.

Main entry point for the dreamdeploy application.
"""

import asyncio
import sys

import click
from loguru import logger

from dreamdeploy import __version__
from dreamdeploy.config import load_config
from dreamdeploy.core.exceptions import DreamDeployError
from dreamdeploy.core.graph import resolve_order
from dreamdeploy.manifest import build_manifest
from dreamdeploy.ui.console import ConsoleUI
from dreamdeploy.utils.logger import setup_logger

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (default: $DREAMDEPLOY_CONFIG or ~/.dreamdeploy/config.yaml)",
)


@click.group()
@click.version_option(__version__, prog_name="dreamdeploy")
def main() -> None:
    """Deploy the DREAM components in dependency order."""
    # Until setup_logger runs, loguru would print DEBUG lines on stderr
    logger.remove()


@main.command()
@config_option
def plan(config_path):
    """Validate the manifest and show the deployment order."""
    ui = ConsoleUI()
    try:
        config = load_config(config_path)
        setup_logger(config=config.logging)
        specs = resolve_order(
            build_manifest(config.deploy.initial_ledger_supply),
            validate=config.deploy.validate_order,
            auto_order=config.deploy.auto_order,
        )
    except DreamDeployError as e:
        ui.error(f"Invalid manifest: {e}")
        sys.exit(1)

    ui.render_plan(specs)


@main.command()
@config_option
@click.option("--network", default=None, help="Target environment (overrides config)")
@click.option(
    "--supply",
    type=click.IntRange(min=1),
    default=None,
    help="Initial ledger supply (overrides config)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
)
@click.option("--output", "output_file", type=click.Path(dir_okay=False), default=None,
              help="Also write the JSON run report here")
@click.option("-v", "--verbose", is_flag=True, help="Log to stderr")
def deploy(config_path, network, supply, output_format, output_file, verbose):
    """Deploy every component; exit 1 if the run aborts."""
    from dreamdeploy.cli.run import report_error, run_deployment

    try:
        config = load_config(config_path)
    except DreamDeployError as e:
        report_error(str(e), output_format)
        sys.exit(1)

    updates = {}
    if network:
        updates["network"] = network
    if supply is not None:
        updates["initial_ledger_supply"] = supply
    if updates:
        config.deploy = config.deploy.model_copy(update=updates)

    setup_logger(verbose=verbose, config=config.logging)

    try:
        run = asyncio.run(
            run_deployment(config, output_format=output_format, output_file=output_file)
        )
    except DreamDeployError as e:
        logger.error(f"Deployment not started: {e}")
        report_error(str(e), output_format)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(130)

    sys.exit(0 if run.succeeded else 1)


if __name__ == "__main__":
    main()
