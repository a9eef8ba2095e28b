"""Aggregate statistics over the catalog."""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from coffeehub.models import Product

NO_ORIGIN = "N/A"


@dataclass(frozen=True)
class CatalogStats:
    """Count, mean price and most frequent origin of the current catalog."""

    total: int
    avg_price: float
    popular_origin: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "avgPrice": self.avg_price,
            "popularOrigin": self.popular_origin,
        }


def round_price(value: Optional[float]) -> float:
    """Round an average price to cents; a missing average counts as 0."""
    if value is None:
        return 0.0
    return round(float(value), 2)


def summarize_products(products: Iterable[Product]) -> CatalogStats:
    """Compute catalog stats in a single pass over the products.

    Ties for the most frequent origin resolve to whichever tied origin
    was seen first in iteration order.
    """
    total = 0
    price_sum = 0.0
    origins: Counter = Counter()

    for product in products:
        total += 1
        price_sum += product.price
        origin = (product.origin or "").strip()
        if origin:
            origins[origin] += 1

    avg_price = round_price(price_sum / total) if total else 0.0
    popular_origin = origins.most_common(1)[0][0] if origins else NO_ORIGIN

    return CatalogStats(total=total, avg_price=avg_price, popular_origin=popular_origin)
