"""Tests for catalog statistics.

These tests verify:
- The pure single-pass summary over products
- The SQL aggregate of the SQLite store agrees with the pure summary
- StatsService recomputes on every call
"""

import pytest

from coffeehub.models import Product
from coffeehub.statistics import CatalogStats, round_price, summarize_products
from coffeehub.storage import StorageError


def _product(product_id: int, origin: str, price: float) -> Product:
    return Product(
        id=product_id,
        name=f"Coffee {product_id}",
        origin=origin,
        type="Arabica",
        price=price,
        roast="Medium",
        rating=4.0,
        description="No description",
    )


class TestSummarizeProducts:
    """Test summarize_products()."""

    def test_empty_catalog(self):
        stats = summarize_products([])

        assert stats == CatalogStats(total=0, avg_price=0.0, popular_origin="N/A")

    def test_count_average_and_popular_origin(self):
        products = [
            _product(1, "Brazil", 10),
            _product(2, "Brazil", 20),
            _product(3, "Colombia", 30),
        ]

        stats = summarize_products(products)

        assert stats.total == 3
        assert stats.avg_price == 20.0
        assert stats.popular_origin == "Brazil"

    def test_average_is_rounded_to_cents(self):
        products = [_product(1, "Peru", 10), _product(2, "Peru", 10), _product(3, "Peru", 10.01)]

        assert summarize_products(products).avg_price == 10.0

    def test_blank_origins_are_ignored(self):
        products = [_product(1, "", 5), _product(2, "  ", 5)]

        stats = summarize_products(products)

        assert stats.total == 2
        assert stats.popular_origin == "N/A"

    def test_tie_returns_one_of_the_tied_origins(self):
        products = [_product(1, "Kenya", 5), _product(2, "Peru", 5)]

        assert summarize_products(products).popular_origin in {"Kenya", "Peru"}

    def test_to_dict_uses_api_field_names(self):
        stats = CatalogStats(total=2, avg_price=7.5, popular_origin="Kenya")

        assert stats.to_dict() == {"total": 2, "avgPrice": 7.5, "popularOrigin": "Kenya"}

    def test_round_price_of_missing_average(self):
        assert round_price(None) == 0.0
        assert round_price(12.345678) == 12.35


class TestStatsService:
    """Test StatsService against every local store."""

    async def test_empty_store(self, stats_service):
        stats = await stats_service.compute_stats()

        assert stats.to_dict() == {"total": 0, "avgPrice": 0.0, "popularOrigin": "N/A"}

    async def test_brazil_scenario(self, product_service, stats_service):
        for origin, price in [("Brazil", 10), ("Brazil", 20), ("Colombia", 30)]:
            await product_service.create_product({"name": f"{origin} {price}", "origin": origin, "price": price})

        stats = await stats_service.compute_stats()

        assert stats.total == 3
        assert stats.avg_price == 20.0
        assert stats.popular_origin == "Brazil"

        print(f"Stats: {stats.to_dict()}")

    async def test_reflects_every_mutation(self, product_service, stats_service):
        first = await product_service.create_product({"name": "A", "origin": "Kenya", "price": 10})
        assert (await stats_service.compute_stats()).total == 1

        await product_service.create_product({"name": "B", "origin": "Peru", "price": 30})
        await product_service.create_product({"name": "C", "origin": "Peru", "price": 20})
        stats = await stats_service.compute_stats()
        assert stats.total == 3
        assert stats.popular_origin == "Peru"

        await product_service.delete_product(first.id)
        stats = await stats_service.compute_stats()
        assert stats.total == 2
        assert stats.avg_price == 25.0

    async def test_storage_failure_becomes_internal_error(self, memory_store):
        from coffeehub.services import InternalError, StatsService

        async def broken_aggregate():
            raise StorageError("disk I/O error")

        memory_store.aggregate = broken_aggregate

        with pytest.raises(InternalError) as exc_info:
            await StatsService(memory_store).compute_stats()

        assert "disk" not in exc_info.value.message
