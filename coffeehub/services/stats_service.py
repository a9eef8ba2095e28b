import logging

from coffeehub.services.errors import InternalError
from coffeehub.statistics import CatalogStats
from coffeehub.storage import ProductStore, StorageError

logger = logging.getLogger(__name__)


class StatsService:
    """Recomputes catalog statistics from the store on every call."""

    def __init__(self, store: ProductStore):
        self._store = store

    async def compute_stats(self) -> CatalogStats:
        try:
            return await self._store.aggregate()
        except StorageError:
            logger.exception("Storage failure while computing catalog statistics")
            raise InternalError("Could not compute statistics")
