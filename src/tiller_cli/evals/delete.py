from typing import List, Optional

import typer
from rich.markup import escape

from tiller_cli.errors import BrokerNotPausedError, SelectorError, TillerError
from tiller_cli.evals.deletion import (
    check_broker_paused,
    format_outcome,
    pluralize,
    resolve_eval_ids,
    run_eval_delete,
)
from tiller_cli.evals.selector import verify_args_and_flags
from tiller_cli.utils import console, err_console, get_client

PAUSE_HINT = (
    "To delete evaluations you must first pause the eval broker by running "
    '"tiller operator scheduler set-config --pause-eval-broker"\n'
    "After the deletion is complete, unpause the eval broker by running "
    '"tiller operator scheduler set-config --no-pause-eval-broker"'
)


def delete_evals_command(
    eval_ids: Optional[List[str]] = typer.Argument(None, help="ID of the evaluation to delete", show_default=False),
    filter: str = typer.Option("", "--filter", help="Filter expression selecting the evaluations to delete"),
    address: Optional[str] = typer.Option(None, "--address", help="Control plane address"),
    token: Optional[str] = typer.Option(None, "--token", help="API token"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be deleted without actually deleting"),
) -> None:
    """Delete evaluations by ID or filter. The eval broker must be paused."""
    try:
        selector = verify_args_and_flags(eval_ids or [], filter)
    except SelectorError as e:
        err_console.print(f"[red]Error validating command args and flags: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    try:
        with get_client(address, token) as client:
            if dry_run:
                check_broker_paused(client)
                resolved = resolve_eval_ids(client, selector)
                for eval_id in resolved:
                    console.print(escape(eval_id))
                console.print(f"[yellow]DRY RUN: Would delete {pluralize(len(resolved))}[/yellow]")
                return
            outcome = run_eval_delete(client, selector)
    except BrokerNotPausedError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        err_console.print(escape(PAUSE_HINT))
        raise typer.Exit(code=1)
    except TillerError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]{format_outcome(outcome)}[/green]")
