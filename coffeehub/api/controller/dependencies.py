"""Request-scoped service construction from the process-wide store."""

from typing import Any

from fastapi import Request

from coffeehub.services import BadRequestError, ProductService, StatsService
from coffeehub.storage import ProductStore


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_product_service(request: Request) -> ProductService:
    return ProductService(get_store(request))


def get_stats_service(request: Request) -> StatsService:
    return StatsService(get_store(request))


async def read_json_body(request: Request) -> Any:
    """Decode the request body, rejecting malformed JSON as a bad request."""
    try:
        return await request.json()
    except ValueError:
        raise BadRequestError("Malformed JSON body")
