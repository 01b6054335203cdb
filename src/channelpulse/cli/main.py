"""
Main CLI entry point for channelpulse.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.panel import Panel

from channelpulse import __version__
from channelpulse.cli.channel_commands import channel_app
from channelpulse.cli.commands.api import api_app
from channelpulse.config.settings import settings

console = Console()

app = typer.Typer(
    name="channelpulse",
    help="YouTube channel statistics aggregator",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Add subcommands
app.add_typer(channel_app, name="channel", help="Channel statistics commands")
app.add_typer(api_app, name="api", help="API server management commands")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]channelpulse[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit"
    ),
) -> None:
    """
    channelpulse - YouTube channel statistics aggregator.

    Resolves the configured channel, merges statistics from the YouTube
    Data API and the channel pages, and serves them over HTTP.
    """
    if version:
        console.print(f"channelpulse v{__version__}")
        raise typer.Exit(code=0)

    logging.getLogger("channelpulse").setLevel(settings.log_level)

    if ctx.invoked_subcommand is None:
        console.print(
            "[yellow]Use 'channelpulse --help' for available commands[/yellow]"
        )
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
