"""Tests for the presentation client.

These tests verify:
- CatalogClient maps non-2xx statuses and transport errors to CatalogClientError
- CatalogSession keeps a single edit target and refreshes after mutations
- Failed requests leave the edit target unchanged
- Rendering of product cards and stats
"""

import json

import pytest
import requests
from rich.console import Console

from coffeehub.client import (
    CatalogClient,
    CatalogClientError,
    CatalogSession,
    CatalogView,
    print_view,
    render_products,
    render_stats,
)

PRODUCT = {
    "id": 1,
    "name": "Sumatra Mandheling",
    "origin": "Indonesia",
    "type": "Arabica",
    "price": 16.0,
    "roast": "Dark",
    "rating": 4.4,
    "description": "Earthy",
    "createdAt": "2024-01-01T00:00:00+00:00",
    "updatedAt": "2024-01-01T00:00:00+00:00",
}
STATS = {"total": 1, "avgPrice": 16.0, "popularOrigin": "Indonesia"}


class FakeResponse:
    def __init__(self, status_code: int, body=None):
        self.status_code = status_code
        self._body = body

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("No JSON")
        return json.loads(json.dumps(self._body))


class FakeSession:
    """Records requests and answers from a routing table."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.requests = []
        self.closed = False

    def request(self, method, url, json=None, timeout=None):
        path = url.split("://", 1)[-1].split("/", 1)[-1]
        self.requests.append((method, "/" + path, json))
        answer = self.routes.get((method, "/" + path))
        if isinstance(answer, Exception):
            raise answer
        if answer is None:
            return FakeResponse(404, {"error": "Not Found"})
        return answer

    def close(self):
        self.closed = True


def _catalog_routes(extra=None):
    routes = {
        ("GET", "/api/products"): FakeResponse(200, [PRODUCT]),
        ("GET", "/api/stats"): FakeResponse(200, STATS),
    }
    routes.update(extra or {})
    return routes


class TestCatalogClient:
    """Test CatalogClient request handling."""

    def test_list_products(self):
        session = FakeSession(_catalog_routes())
        client = CatalogClient("http://api.test/", session=session)

        assert client.list_products() == [PRODUCT]
        assert session.requests == [("GET", "/api/products", None)]

    def test_create_sends_json(self):
        session = FakeSession({("POST", "/api/products"): FakeResponse(201, PRODUCT)})
        client = CatalogClient("http://api.test", session=session)

        assert client.create_product({"name": "Sumatra", "price": 16}) == PRODUCT
        assert session.requests[0][2] == {"name": "Sumatra", "price": 16}

    def test_error_status_raises_with_details(self):
        body = {"error": "Validation failed", "details": ["price is required"]}
        session = FakeSession({("POST", "/api/products"): FakeResponse(400, body)})
        client = CatalogClient("http://api.test", session=session)

        with pytest.raises(CatalogClientError) as exc_info:
            client.create_product({"name": "No price"})

        error = exc_info.value
        assert error.status_code == 400
        assert error.message == "Validation failed"
        assert error.details == ["price is required"]
        assert str(error) == "Validation failed (HTTP 400): price is required"

    def test_error_status_without_json_body(self):
        session = FakeSession({("GET", "/api/stats"): FakeResponse(502)})
        client = CatalogClient("http://api.test", session=session)

        with pytest.raises(CatalogClientError) as exc_info:
            client.get_stats()

        assert exc_info.value.message == "HTTP error 502"

    def test_network_error(self):
        session = FakeSession({("GET", "/api/health"): requests.ConnectionError("refused")})
        client = CatalogClient("http://api.test", session=session)

        with pytest.raises(CatalogClientError) as exc_info:
            client.health()

        assert exc_info.value.status_code is None
        assert "http://api.test" in exc_info.value.message

    def test_context_manager_closes_session(self):
        session = FakeSession()

        with CatalogClient("http://api.test", session=session):
            pass

        assert session.closed is True


class TestCatalogSession:
    """Test the client-side edit state."""

    def test_refresh_fetches_products_and_stats(self):
        session = CatalogSession(CatalogClient("http://api.test", session=FakeSession(_catalog_routes())))

        view = session.refresh()

        assert view == CatalogView(products=[PRODUCT], stats=STATS)

    def test_submit_without_edit_target_creates(self):
        http = FakeSession(_catalog_routes({("POST", "/api/products"): FakeResponse(201, PRODUCT)}))
        session = CatalogSession(CatalogClient("http://api.test", session=http))

        result = session.submit({"name": "Sumatra", "price": 16})

        assert result.product == PRODUCT
        assert result.view.stats == STATS
        assert [request[:2] for request in http.requests] == [
            ("POST", "/api/products"),
            ("GET", "/api/products"),
            ("GET", "/api/stats"),
        ]

    def test_submit_with_edit_target_updates_and_clears_it(self):
        updated = {**PRODUCT, "price": 17.0}
        http = FakeSession(_catalog_routes({("PUT", "/api/products/1"): FakeResponse(200, updated)}))
        session = CatalogSession(CatalogClient("http://api.test", session=http))

        session.begin_edit(PRODUCT)
        assert session.is_editing is True

        result = session.submit({"price": 17})

        assert result.product == updated
        assert session.editing_id is None
        assert http.requests[0] == ("PUT", "/api/products/1", {"price": 17})

    def test_failed_update_keeps_edit_target(self):
        http = FakeSession(_catalog_routes({
            ("PUT", "/api/products/1"): FakeResponse(400, {"error": "Validation failed", "details": ["x"]}),
        }))
        session = CatalogSession(CatalogClient("http://api.test", session=http))
        session.begin_edit(PRODUCT)

        with pytest.raises(CatalogClientError):
            session.submit({"rating": 12})

        assert session.editing_id == 1
        # No refresh after a failure
        assert len(http.requests) == 1

    def test_network_failure_keeps_edit_target(self):
        http = FakeSession({("PUT", "/api/products/1"): requests.Timeout("slow")})
        session = CatalogSession(CatalogClient("http://api.test", session=http))
        session.begin_edit(PRODUCT)

        with pytest.raises(CatalogClientError):
            session.submit({"price": 1})

        assert session.editing_id == 1

    def test_cancel_edit(self):
        session = CatalogSession(CatalogClient("http://api.test", session=FakeSession()))
        session.begin_edit(PRODUCT)

        session.cancel_edit()

        assert session.is_editing is False

    def test_delete_asks_for_confirmation(self):
        http = FakeSession(_catalog_routes({
            ("DELETE", "/api/products/1"): FakeResponse(200, {"message": "Product deleted", "deletedId": 1}),
        }))
        session = CatalogSession(CatalogClient("http://api.test", session=http))
        asked = []

        def confirm(label):
            asked.append(label)
            return True

        result = session.delete(1, confirm=confirm, label="Sumatra Mandheling")

        assert asked == ["Sumatra Mandheling"]
        assert result.deleted_id == 1
        assert result.view.products == [PRODUCT]

    def test_declined_delete_sends_nothing(self):
        http = FakeSession(_catalog_routes())
        session = CatalogSession(CatalogClient("http://api.test", session=http))

        assert session.delete(1, confirm=lambda label: False) is None
        assert http.requests == []


class TestRender:
    """Test rich rendering."""

    def _render(self, renderable) -> str:
        console = Console(width=120, record=True)
        console.print(renderable)
        return console.export_text()

    def test_product_cards(self):
        text = self._render(render_products([PRODUCT]))

        assert "Sumatra Mandheling" in text
        assert "Indonesia" in text
        assert "$16.0/lb" in text

    def test_empty_catalog(self):
        assert "No coffees registered" in self._render(render_products([]))

    def test_stats(self):
        text = self._render(render_stats(STATS))

        assert "Total coffees" in text
        assert "$16.0" in text
        assert "Indonesia" in text

    def test_stats_fallbacks(self):
        text = self._render(render_stats({}))

        assert "N/A" in text
        assert "$0" in text

    def test_print_view(self):
        console = Console(width=120, record=True)

        print_view(console, CatalogView(products=[PRODUCT], stats=STATS))

        text = console.export_text()
        assert "Sumatra Mandheling" in text
        assert "Catalog Stats" in text
