"""Product model shared by the service and every store."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

ProductId = Union[int, str]

DEFAULT_ORIGIN = "Unknown"
DEFAULT_TYPE = "Unknown"
DEFAULT_ROAST = "Medium"
DEFAULT_RATING = 0.0
DEFAULT_DESCRIPTION = "No description"


@dataclass(frozen=True)
class Product:
    """A coffee in the catalog."""

    id: ProductId  # Integer for SQLite/memory stores, UUID string for Cosmos DB
    name: str
    origin: str
    type: str
    price: float
    roast: str
    rating: float
    description: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the JSON field names of the HTTP API."""
        return {
            "id": self.id,
            "name": self.name,
            "origin": self.origin,
            "type": self.type,
            "price": self.price,
            "roast": self.roast,
            "rating": self.rating,
            "description": self.description,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
