"""CLI command for serving the channel stats API."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from channelpulse.config.settings import settings

console = Console()

api_app = typer.Typer(
    name="api",
    help="API server management commands",
    no_args_is_help=True,
)


@api_app.command()
def start(
    host: Optional[str] = typer.Option(
        None, "--host", help="Interface to bind (default: CHANNELPULSE_API_HOST)"
    ),
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Port to listen on (default: CHANNELPULSE_API_PORT)"
    ),
    reload: Optional[bool] = typer.Option(
        None,
        "--reload/--no-reload",
        help="Restart on code changes (default: CHANNELPULSE_API_RELOAD)",
    ),
) -> None:
    """
    Serve /api/channel and /api/health with uvicorn.

    Runs a single worker: the channel cache lives in process memory, so
    extra workers would each aggregate the channel on their own.

    Examples:
        channelpulse api start
        channelpulse api start --port 3000 --reload
    """
    import uvicorn

    bind_host = host or settings.api_host
    bind_port = port if port is not None else settings.api_port
    use_reload = settings.api_reload if reload is None else reload

    console.print(
        f"Serving [bold]{settings.display_handle}[/bold] on "
        f"http://{bind_host}:{bind_port}/api/channel "
        f"(cache TTL {settings.cache_ttl_seconds:.0f}s)"
    )

    uvicorn.run(
        "channelpulse.api.main:app",
        host=bind_host,
        port=bind_port,
        reload=use_reload,
        log_level=settings.log_level.lower(),
    )
