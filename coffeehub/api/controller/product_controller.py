"""REST controller for catalog products."""

import logging
from typing import Any, List

from fastapi import APIRouter, Depends
from starlette import status

from coffeehub.api.controller.dependencies import get_product_service, read_json_body
from coffeehub.api.schemas import DeleteResponse, ProductResponse
from coffeehub.services import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[ProductResponse])
async def list_products(service: ProductService = Depends(get_product_service)) -> List[dict]:
    """Return every product in store order."""
    products = await service.list_products()
    return [product.to_dict() for product in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> dict:
    product = await service.get_product(product_id)
    return product.to_dict()


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: Any = Depends(read_json_body),
    service: ProductService = Depends(get_product_service),
) -> dict:
    """Create a product; the response includes the id assigned by the store."""
    product = await service.create_product(payload)
    return product.to_dict()


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    payload: Any = Depends(read_json_body),
    service: ProductService = Depends(get_product_service),
) -> dict:
    """Merge the supplied fields into an existing product."""
    product = await service.update_product(product_id, payload)
    return product.to_dict()


@router.delete("/{product_id}", response_model=DeleteResponse)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> dict:
    deleted_id = await service.delete_product(product_id)
    return {"message": "Product deleted", "deletedId": deleted_id}
