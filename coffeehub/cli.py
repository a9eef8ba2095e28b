"""CLI for CoffeeHub."""

import sys
from typing import Any, Optional

import click
from rich.console import Console
from rich.panel import Panel

from . import __version__
from .client import (
    DEFAULT_BACKEND_URL,
    CatalogClient,
    CatalogClientError,
    CatalogSession,
    print_view,
    render_product_card,
    render_products,
    render_stats,
)

console = Console()
error_console = Console(stderr=True)


def _fail(error: CatalogClientError) -> None:
    error_console.print(f"[red]Error:[/red] {error}")
    sys.exit(1)


def _client(ctx: click.Context) -> CatalogClient:
    return CatalogClient(base_url=ctx.obj["backend_url"], timeout=ctx.obj["timeout"])


def _payload(**fields: Any) -> dict[str, Any]:
    """Keep only the options the user actually passed."""
    return {name: value for name, value in fields.items() if value is not None}


def product_options(required: bool):
    """Shared field options of ``add`` and ``edit``."""

    def decorator(func):
        options = [
            click.option("--name", required=required, help="Coffee name"),
            click.option("--origin", help="Country or region of origin"),
            click.option("--type", "type_", help="Bean type, e.g. Arabica"),
            click.option("--price", type=float, required=required, help="Price per lb"),
            click.option("--roast", help="Roast level"),
            click.option("--rating", type=float, help="Rating from 0 to 5"),
            click.option("--description", help="Free text description"),
        ]
        for option in reversed(options):
            func = option(func)
        return func

    return decorator


@click.group()
@click.version_option(version=__version__, prog_name="coffeehub")
@click.option(
    "--backend-url",
    envvar="BACKEND_URL",
    default=DEFAULT_BACKEND_URL,
    show_default=True,
    help="Base URL of the CoffeeHub API",
)
@click.option("--timeout", type=float, default=10.0, show_default=True, help="Request timeout in seconds")
@click.pass_context
def main(ctx: click.Context, backend_url: str, timeout: float) -> None:
    """CoffeeHub - coffee catalog API and client."""
    ctx.ensure_object(dict)
    ctx.obj["backend_url"] = backend_url
    ctx.obj["timeout"] = timeout


@main.command()
@click.option("--host", default=None, help="Bind address (default: server.host from config)")
@click.option("--port", default=None, type=int, help="Port (default: server.port from config)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the API server."""
    import uvicorn

    from .config import get_config

    config = get_config()
    uvicorn.run(
        "coffeehub.main:app",
        host=host or config.server.host,
        port=port or config.server.port,
        log_level=config.logging.level.lower(),
        reload=reload,
    )


@main.command(name="list")
@click.pass_context
def list_products(ctx: click.Context) -> None:
    """List coffees and catalog stats."""
    try:
        view = CatalogSession(_client(ctx)).refresh()
    except CatalogClientError as e:
        _fail(e)
        return
    print_view(console, view)


@main.command()
@click.argument("product_id")
@click.pass_context
def show(ctx: click.Context, product_id: str) -> None:
    """Show a single coffee."""
    try:
        product = _client(ctx).get_product(product_id)
    except CatalogClientError as e:
        _fail(e)
        return
    console.print(render_product_card(product))


@main.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show catalog statistics."""
    try:
        catalog_stats = _client(ctx).get_stats()
    except CatalogClientError as e:
        _fail(e)
        return
    console.print(render_stats(catalog_stats))


@main.command()
@click.pass_context
def health(ctx: click.Context) -> None:
    """Check that the API is up."""
    try:
        body = _client(ctx).health()
    except CatalogClientError as e:
        _fail(e)
        return
    console.print(f"[green]{body.get('status')}[/green] at {body.get('timestamp')}")


@main.command()
@product_options(required=True)
@click.pass_context
def add(ctx: click.Context, type_: Optional[str], **fields: Any) -> None:
    """Add a new coffee."""
    session = CatalogSession(_client(ctx))
    try:
        result = session.submit(_payload(type=type_, **fields))
    except CatalogClientError as e:
        _fail(e)
        return
    console.print(Panel(f"[green]Coffee added[/green] with id [bold]{result.product['id']}[/bold]"))
    print_view(console, result.view)


@main.command()
@click.argument("product_id")
@product_options(required=False)
@click.pass_context
def edit(ctx: click.Context, product_id: str, type_: Optional[str], **fields: Any) -> None:
    """Edit an existing coffee; only the given options change."""
    client = _client(ctx)
    session = CatalogSession(client)
    try:
        session.begin_edit(client.get_product(product_id))
        result = session.submit(_payload(type=type_, **fields))
    except CatalogClientError as e:
        _fail(e)
        return
    console.print(Panel(f"[green]Coffee updated:[/green] {result.product['name']}"))
    print_view(console, result.view)


@main.command()
@click.argument("product_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx: click.Context, product_id: str, yes: bool) -> None:
    """Delete a coffee after confirmation."""
    session = CatalogSession(_client(ctx))

    def confirm(label: str) -> bool:
        return yes or click.confirm(f'Are you sure you want to delete "{label}"?', default=False)

    try:
        result = session.delete(product_id, confirm=confirm)
    except CatalogClientError as e:
        _fail(e)
        return

    if result is None:
        console.print("[yellow]Cancelled.[/yellow]")
        return
    console.print(f"[green]Deleted coffee {result.deleted_id}[/green]")
    console.print(render_products(result.view.products))
    console.print(render_stats(result.view.stats))


if __name__ == "__main__":
    main()
