"""Terminal rendering of product cards and catalog stats."""

from typing import Iterable

from rich.columns import Columns
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from coffeehub.client.session import CatalogView

EMPTY_CATALOG_MESSAGE = "No coffees registered"


def render_product_card(product: dict) -> Panel:
    details = Table.grid(padding=(0, 1))
    details.add_column(style="cyan")
    details.add_column()
    details.add_row("Origin:", str(product.get("origin", "")))
    details.add_row("Price:", f"${product.get('price', 0)}/lb")
    details.add_row("Type:", str(product.get("type", "")))
    details.add_row("Roast:", str(product.get("roast", "")))
    details.add_row("Rating:", f"{product.get('rating', 0)}/5")

    description = Text(str(product.get("description", "")), style="dim")
    return Panel(
        Group(details, description),
        title=f"[bold]{product.get('name', '')}[/bold]",
        subtitle=f"id {product.get('id')}",
        width=40,
    )


def render_products(products: Iterable[dict]) -> RenderableType:
    cards = [render_product_card(product) for product in products]
    if not cards:
        return Text(EMPTY_CATALOG_MESSAGE, style="yellow")
    return Columns(cards)


def render_stats(stats: dict) -> Table:
    table = Table(title="Catalog Stats")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total coffees", str(stats.get("total") or 0))
    table.add_row("Average price", f"${stats.get('avgPrice') or 0}")
    table.add_row("Popular origin", str(stats.get("popularOrigin") or "N/A"))
    return table


def print_view(console: Console, view: CatalogView) -> None:
    """Print the product cards followed by the stats table."""
    console.print(render_products(view.products))
    console.print(render_stats(view.stats))
