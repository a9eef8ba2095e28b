"""Client-side catalog session: the edit target plus the refresh-after-mutation flow."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from coffeehub.client.catalog_client import CatalogClient

logger = logging.getLogger(__name__)

ProductRef = Union[int, str]


@dataclass(frozen=True)
class CatalogView:
    """What the client shows: the product cards and the stats panel."""

    products: list[dict]
    stats: dict


@dataclass(frozen=True)
class MutationResult:
    """A successful create/update/delete and the view re-fetched after it."""

    product: Optional[dict]
    deleted_id: Optional[ProductRef]
    view: CatalogView


class CatalogSession:
    """Drives the catalog through a ``CatalogClient``.

    The only state kept is ``editing_id``: the product currently being
    edited, or None. Failed requests raise ``CatalogClientError`` and leave
    ``editing_id`` untouched.
    """

    def __init__(self, client: CatalogClient):
        self._client = client
        self.editing_id: Optional[ProductRef] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def refresh(self) -> CatalogView:
        """Fetch the product list and the statistics."""
        products = self._client.list_products()
        stats = self._client.get_stats()
        return CatalogView(products=products, stats=stats)

    def begin_edit(self, product: dict) -> None:
        self.editing_id = product["id"]
        logger.debug(f"Editing product {self.editing_id}")

    def cancel_edit(self) -> None:
        self.editing_id = None

    def submit(self, payload: dict[str, Any]) -> MutationResult:
        """Update the edit target if one is set, otherwise create a product."""
        if self.editing_id is not None:
            saved = self._client.update_product(self.editing_id, payload)
        else:
            saved = self._client.create_product(payload)

        self.cancel_edit()
        return MutationResult(product=saved, deleted_id=None, view=self.refresh())

    def delete(
        self,
        product_id: ProductRef,
        confirm: Callable[[str], bool],
        label: Optional[str] = None,
    ) -> Optional[MutationResult]:
        """Delete a product after ``confirm`` approves it.

        Returns:
            None when the confirmation is declined.
        """
        if not confirm(label or str(product_id)):
            return None

        body = self._client.delete_product(product_id)
        return MutationResult(
            product=None,
            deleted_id=body.get("deletedId", product_id),
            view=self.refresh(),
        )
