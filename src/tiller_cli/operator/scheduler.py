from typing import Any, Dict, Optional

import typer
from rich.markup import escape
from rich.table import Table

from tiller_cli.api import SchedulerConfig
from tiller_cli.errors import TillerError
from tiller_cli.utils import console, err_console, get_client


def _print_config(config: SchedulerConfig) -> None:
    table = Table(title="Scheduler Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Scheduler Algorithm", config.scheduler_algorithm)
    table.add_row("Pause Eval Broker", str(config.pause_eval_broker).lower())
    table.add_row("Reject Job Registration", str(config.reject_job_registration).lower())
    table.add_row("Memory Oversubscription", str(config.memory_oversubscription_enabled).lower())
    table.add_row("Modify Index", str(config.modify_index))
    console.print(table)


def get_config(
    address: Optional[str] = typer.Option(None, "--address", help="Control plane address"),
    token: Optional[str] = typer.Option(None, "--token", help="API token"),
) -> None:
    """Show the scheduler configuration."""
    try:
        with get_client(address, token) as client:
            config = client.get_scheduler_config()
    except TillerError as e:
        err_console.print(f"[red]Error querying scheduler configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    _print_config(config)


def set_config(
    pause_eval_broker: Optional[bool] = typer.Option(
        None, "--pause-eval-broker/--no-pause-eval-broker", help="Pause or resume the eval broker"
    ),
    reject_job_registration: Optional[bool] = typer.Option(
        None, "--reject-job-registration/--no-reject-job-registration", help="Reject new job registrations"
    ),
    scheduler_algorithm: Optional[str] = typer.Option(None, "--scheduler-algorithm", help="binpack or spread"),
    address: Optional[str] = typer.Option(None, "--address", help="Control plane address"),
    token: Optional[str] = typer.Option(None, "--token", help="API token"),
) -> None:
    """Update the scheduler configuration."""
    updates: Dict[str, Any] = {}
    if pause_eval_broker is not None:
        updates["pause_eval_broker"] = pause_eval_broker
    if reject_job_registration is not None:
        updates["reject_job_registration"] = reject_job_registration
    if scheduler_algorithm:
        updates["scheduler_algorithm"] = scheduler_algorithm
    if not updates:
        err_console.print("[red]No configuration changes given[/red]")
        raise typer.Exit(code=1)

    try:
        with get_client(address, token) as client:
            config = client.set_scheduler_config(**updates)
    except TillerError as e:
        err_console.print(f"[red]Error updating scheduler configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Scheduler configuration updated (modify index {config.modify_index})[/green]")
