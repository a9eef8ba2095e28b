"""Response bodies of the HTTP API."""

from typing import Optional, Union

from pydantic import BaseModel


class ProductResponse(BaseModel):
    """A product as returned to clients."""

    id: Union[int, str]
    name: str
    origin: str
    type: str
    price: float
    roast: str
    rating: float
    description: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class DeleteResponse(BaseModel):
    message: str
    deletedId: Union[int, str]


class StatsResponse(BaseModel):
    total: int
    avgPrice: float
    popularOrigin: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str

