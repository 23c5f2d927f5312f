"""Tiller CLI - Main entry point."""

import logging

import typer

from tiller_cli import evals, operator

app = typer.Typer(
    help="Tiller - scheduler operator CLI",
    no_args_is_help=True,
)

app.add_typer(evals.app, name="eval", help="Evaluation operations")
app.add_typer(operator.app, name="operator", help="Cluster operator commands")


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
