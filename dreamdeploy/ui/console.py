"""
dreamdeploy UI - Console implementation.

Rich-based rendering of plans and run reports.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from dreamdeploy.core.types import ComponentSpec, DeploymentRun, RecordStatus

DREAMDEPLOY_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red bold",
        "success": "green",
        "muted": "dim",
    }
)

_STATUS_STYLE = {
    RecordStatus.DEPLOYED: "success",
    RecordStatus.FAILED: "error",
    RecordStatus.PENDING: "warning",
}


class ConsoleUI:
    """
    Console user interface.

    Provides rich formatting for output.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(theme=DREAMDEPLOY_THEME)

    def success(self, message: str) -> None:
        self.console.print(f"[success]{message}[/success]")

    def error(self, message: str) -> None:
        self.console.print(f"[error]{message}[/error]")

    def warning(self, message: str) -> None:
        self.console.print(f"[warning]{message}[/warning]")

    def info(self, message: str) -> None:
        self.console.print(f"[info]{message}[/info]")

    def render_plan(self, specs: list[ComponentSpec]) -> None:
        """Show deployment order and wiring."""
        table = Table(title="Deployment plan", show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Component")
        table.add_column("Kind")
        table.add_column("Constructor args")

        for i, spec in enumerate(specs, start=1):
            args = ", ".join(repr(a) for a in spec.constructor_args) or "-"
            table.add_row(str(i), spec.name, spec.kind, escape(args))

        self.console.print(table)

    def render_run(self, run: DeploymentRun) -> None:
        """Show every attempted record and a summary line."""
        table = Table(title=f"Deployment run {run.run_id}", show_header=True, header_style="bold")
        table.add_column("Component")
        table.add_column("Kind")
        table.add_column("Status")
        table.add_column("Identity handle")

        for record in run.records:
            style = _STATUS_STYLE[record.status]
            table.add_row(
                record.name,
                record.kind,
                f"[{style}]{record.status.value}[/{style}]",
                record.identity_handle or "-",
            )

        self.console.print(table)

        if run.succeeded:
            self.success(f"Deployed {len(run.records)} components")
            return

        failed = run.failed_record
        where = f" at '{failed.name}'" if failed else ""
        self.error(f"Run aborted{where}: {escape(str(run.error))}")
        if run.deployed:
            self.warning(
                "Already deployed components were not rolled back: "
                + ", ".join(r.name for r in run.deployed)
            )
