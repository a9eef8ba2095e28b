"""API controllers."""

from coffeehub.api.controller.product_controller import router as product_router
from coffeehub.api.controller.stats_controller import router as stats_router

__all__ = ["product_router", "stats_router"]
