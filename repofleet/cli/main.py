"""CLI entrypoint that wires subcommands into a Typer app."""

import logging

import typer

from .commands.sync import app as sync_app

app = typer.Typer(add_completion=False, help="Clone and keep up to date a fleet of GitHub repositories.")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


app.add_typer(sync_app, help="Sync and list repositories")
