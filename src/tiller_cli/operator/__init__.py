import typer

from tiller_cli.operator.scheduler import get_config, set_config

scheduler_app = typer.Typer()
scheduler_app.command(name="get-config")(get_config)
scheduler_app.command(name="set-config")(set_config)

app = typer.Typer()
app.add_typer(scheduler_app, name="scheduler", help="Scheduler configuration")
