from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from tiller_cli.errors import TillerError
from tiller_cli.utils import console, err_console, get_client


def list_evals(
    filter: str = typer.Option("", "--filter", help="Filter expression selecting evaluations"),
    address: Optional[str] = typer.Option(None, "--address", help="Control plane address"),
    token: Optional[str] = typer.Option(None, "--token", help="API token"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only output evaluation IDs"),
) -> None:
    """List evaluations."""
    try:
        with get_client(address, token) as client:
            evaluations = client.list_evaluations(filter)
    except TillerError as e:
        err_console.print(f"[red]Error listing evaluations: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if quiet:
        for evaluation in evaluations:
            console.print(escape(evaluation.id))
        return

    if not evaluations:
        console.print("No evaluations found.")
        return

    table = Table(title="Evaluations")
    table.add_column("ID", style="cyan")
    table.add_column("Job ID", style="green")
    table.add_column("Status", style="yellow")
    table.add_column("Type", style="white")
    table.add_column("Triggered By", style="blue")

    for evaluation in evaluations:
        table.add_row(
            escape(evaluation.id),
            escape(evaluation.job_id),
            escape(evaluation.status),
            escape(evaluation.type),
            escape(evaluation.triggered_by),
        )

    console.print(table)
