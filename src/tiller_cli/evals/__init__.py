import typer

from tiller_cli.evals.delete import delete_evals_command
from tiller_cli.evals.list import list_evals

app = typer.Typer()

app.command(name="delete")(delete_evals_command)
app.command(name="list")(list_evals)
