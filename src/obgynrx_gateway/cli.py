from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

import httpx
import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from obgynrx_gateway.config import Settings
from obgynrx_gateway.errors import GatewayError
from obgynrx_gateway.main import build_gateway, create_app
from obgynrx_gateway.models import SearchResponse

app = typer.Typer(help="obgynrx-gateway domain-restricted search gateway")
console = Console()


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except RuntimeError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (defaults to HOST)"),
    port: int | None = typer.Option(None, help="Listen port (defaults to PORT)"),
) -> None:
    """Run the HTTP gateway."""
    settings = _load_settings()
    if host is not None:
        settings = replace(settings, host=host)
    if port is not None:
        settings = replace(settings, port=port)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


@app.command("domains")
def domains() -> None:
    """List the allowlisted result domains."""
    settings = _load_settings()
    table = Table(title="Allowed Domains")
    table.add_column("#", style="dim")
    table.add_column("Domain", style="cyan")
    for index, domain in enumerate(settings.allowed_domains, start=1):
        table.add_row(str(index), domain)
    console.print(table)


@app.command("search")
def search(
    query: str = typer.Argument(..., help="Search query"),
    limit: int = typer.Option(10, help="Results per page (1-10)"),
    offset: int = typer.Option(0, help="Zero-based result offset"),
) -> None:
    """Run one domain-restricted search without starting the server."""
    settings = _load_settings()

    with console.status(f"Searching for '{query}'..."):
        try:
            response = asyncio.run(_run_search(settings, query, limit, offset))
        except GatewayError as exc:
            console.print(f"[red]{exc.error}:[/red] {exc.message or '-'}")
            raise typer.Exit(code=1) from exc

    if not response.results:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table(
        title=f"Results for '{response.query}' ({response.total} total)"
    )
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold cyan")
    table.add_column("Domain", style="green")
    table.add_column("URL", style="blue underline")
    for result in response.results:
        table.add_row(str(result.id), result.title, result.domain, result.url)

    console.print(table)


async def _run_search(
    settings: Settings, query: str, limit: int, offset: int
) -> SearchResponse:
    async with httpx.AsyncClient() as http_client:
        gateway = build_gateway(settings, http_client)
        return await gateway.search(query, limit, offset)


if __name__ == "__main__":
    app()
