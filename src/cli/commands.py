"""CLI commands for hookshot."""

import asyncio
from typing import Optional

import typer
from rich.console import Console

from src import __version__
from src.core.config import get_settings
from src.webhooks.client import WebhookClient
from src.webhooks.payloads import serialize

settings = get_settings()

app = typer.Typer(name="hookshot", help="Project webhook notification dispatcher")
console = Console()


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"[bold green]Hookshot v{__version__}[/bold green]")


@app.command()
def serve(
    host: str = typer.Option(settings.api_host, help="Host to bind"),
    port: int = typer.Option(settings.api_port, help="Port to bind"),
    workers: int = typer.Option(settings.api_workers, help="Number of worker processes"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Start API server.

    Args:
        host: Host to bind
        port: Port to bind
        workers: Number of worker processes
        reload: Reload on code changes
    """
    import uvicorn

    console.print(f"[yellow]Starting server on {host}:{port}[/yellow]")
    # uvicorn runs a single process when reloading
    uvicorn.run(
        "src.api.app:app",
        host=host,
        port=port,
        workers=None if reload else workers,
        reload=reload,
    )


@app.command("init-db")
def init_database() -> None:
    """Create database tables."""
    from src.storage.database.base import close_db, init_db

    async def _run() -> None:
        await init_db()
        await close_db()

    asyncio.run(_run())
    console.print("[green]✓ Database initialized[/green]")


@app.command()
def ping(
    url: str = typer.Argument(..., help="Payload URL to test"),
    message: Optional[str] = typer.Option(None, help="Text of the test notification"),
) -> None:
    """Send a test notification to a payload URL.

    Args:
        url: Payload URL to test
        message: Text of the test notification
    """
    document = {
        "text": message or f"[{settings.product_name}] Webhook test from {settings.app_name}",
        "attachments": [],
    }

    async def _send() -> Optional[int]:
        async with WebhookClient() as client:
            return await client.deliver(url, serialize(document))

    status_code = asyncio.run(_send())

    if status_code is None:
        console.print(f"[red]✗ Request failed at {url}[/red]")
        raise typer.Exit(code=1)
    if not 200 <= status_code < 300:
        console.print(f"[red]✗ {url} responded {status_code}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✓ {url} responded {status_code}[/green]")


if __name__ == "__main__":
    app()
