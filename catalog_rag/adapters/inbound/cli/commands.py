"""CLI interface for Catalog RAG."""

import asyncio
import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain import IngestionStatus, Product
from ...common.exception_handler import format_exception_json
from ..api import deps

app = typer.Typer(
    name="catalog-rag",
    help="Catalog RAG - similar products and grounded answers for your Stripe catalog",
    add_completion=False,
)

console = Console()


def handle_cli_error(exc: Exception) -> None:
    """Show an error with its code; the full JSON form when DEBUG is on."""
    error_data = format_exception_json(exc, include_trace=settings.debug)

    if settings.debug:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error = error_data["error"]
    console.print(f"\n[red]Error [{error.get('code', 'UNKNOWN')}]:[/] {error['message']}")
    console.print(f"[dim]Type: {error['type']}[/]")
    console.print("[dim]Set DEBUG=true for full details[/]")


def _load_products(path: Path) -> list[Product]:
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    items = data if isinstance(data, list) else [data]
    return [Product.from_stripe(item) for item in items]


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, help="Logging level"),
) -> None:
    setup_logging(log_level, json_format=settings.log_json)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("catalog_rag.adapters.inbound.api.main:app", host=host, port=port)


@app.command()
def setup() -> None:
    """Create the product collection if it does not exist."""
    try:
        asyncio.run(deps.get_vector_store().ensure_collection())
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)
    console.print(f"[green]Collection '{settings.qdrant_collection}' is ready[/]")


@app.command()
def ingest(
    file: Path = typer.Argument(..., exists=True, readable=True, help="JSON product or list"),
) -> None:
    """Index products from a JSON file of Stripe product objects."""
    try:
        products = _load_products(file)
    except (ValueError, KeyError) as exc:
        console.print(f"[red]Could not read products from {file}:[/] {exc}")
        raise typer.Exit(1)

    service = deps.get_ingestion_service()

    async def _run() -> list:
        return [await service.ingest(product) for product in products]

    with console.status(f"[bold green]Indexing {len(products)} products...[/]"):
        results = asyncio.run(_run())

    failed = 0
    for result in results:
        if result.status is IngestionStatus.INDEXED:
            console.print(f"  [green]✓[/] {result.product_id}")
        else:
            failed += 1
            reason = result.error.message if result.error else result.status.value
            console.print(f"  [red]✗[/] {result.product_id} [dim]({result.stage.value})[/] {reason}")

    console.print(f"\nIndexed {len(results) - failed}/{len(results)} products")
    if failed:
        raise typer.Exit(1)


@app.command()
def similar(
    product_id: str = typer.Argument(..., help="Product identifier"),
    top_k: int = typer.Option(settings.similar_products_top_k, "--top-k", "-k"),
    include_same_name: bool = typer.Option(
        False, help="Keep products that share the source product's name"
    ),
) -> None:
    """Show products similar to an indexed product."""
    service = deps.get_retrieval_service()
    try:
        entry, matches = asyncio.run(
            service.lookup_with_similar(product_id, top_k, exclude_self=not include_same_name)
        )
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    console.print(f"[bold]{entry.metadata.get('name', product_id)}[/] [dim]({entry.id})[/]")
    table = Table("Product", "Name", "Score")
    for match in matches:
        name = (match.metadata or {}).get("name", "")
        table.add_row(match.id, str(name), f"{match.score:.3f}")
    console.print(table)


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question about the catalog"),
) -> None:
    """Ask a single question and get a grounded answer."""
    service = deps.get_generation_service()
    try:
        with console.status("[bold green]Thinking...[/]"):
            result = asyncio.run(service.answer(question))
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if result.message is not None:
        console.print(f"[yellow]{result.message}[/]")
        return

    output = result.output or {}
    console.print(Panel(Markdown(str(output.get("answer", ""))), border_style="blue"))
    if result.context and result.context.matches:
        console.print("[dim]Context:[/]")
        for match in result.context.matches:
            console.print(f"  [dim]{match.id} ({match.score:.3f})[/]")


@app.command()
def status() -> None:
    """Show configuration and index status."""
    console.print("[bold]Catalog RAG Status[/]\n")

    checks = [
        ("Google API key", bool(settings.google_api_key), "GOOGLE_API_KEY"),
        ("Stripe webhook secret", bool(settings.stripe_webhook_secret), "STRIPE_WEBHOOK_SECRET"),
    ]
    for label, ok, env_name in checks:
        if ok:
            console.print(f"✅ {label} configured")
        else:
            console.print(f"❌ {label} not set (set {env_name} in .env)")

    console.print(f"Qdrant: {settings.qdrant_url or 'in-process (:memory:)'}")
    try:
        total = asyncio.run(deps.get_vector_store().count())
        console.print(f"Collection '{settings.qdrant_collection}': {total} products")
    except Exception as exc:
        handle_cli_error(exc)


if __name__ == "__main__":
    app()
