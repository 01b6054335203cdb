"""
CLI commands for inspecting the configured channel.

``channelpulse channel show`` runs one aggregation directly (bypassing
the cache) and prints the merged record.
"""

from __future__ import annotations

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from channelpulse.container import container
from channelpulse.exceptions import AggregationFatal
from channelpulse.models.channel import ChannelRecord

console = Console()

channel_app = typer.Typer(
    name="channel",
    help="Channel statistics commands",
    no_args_is_help=True,
)


def _format_count(value: Optional[int], text: Optional[str] = None) -> str:
    if value is not None:
        return f"{value:,}"
    return text or "-"


def _render_record(record: ChannelRecord) -> Table:
    table = Table(title=f"{record.title} ({record.handle})", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Channel ID", record.channel_id)
    table.add_row("Subscribers", _format_count(record.subscriber_count, record.subscriber_text))
    table.add_row("Videos", _format_count(record.video_count))
    table.add_row("Views", _format_count(record.view_count, record.view_text))
    table.add_row("Avatar", record.avatar_url or "-")
    table.add_row("Fetched", record.fetched_at.isoformat(timespec="seconds"))
    return table


@channel_app.command()
def show(
    as_json: bool = typer.Option(
        False, "--json", help="Print the API JSON payload instead of a table"
    ),
) -> None:
    """
    Aggregate and display the configured channel's statistics.

    Examples:
        channelpulse channel show
        channelpulse channel show --json
    """
    try:
        record = asyncio.run(container.aggregator.fetch_channel_data())
    except AggregationFatal as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(json.dumps(record.to_payload(), ensure_ascii=False))
    else:
        console.print(_render_record(record))
