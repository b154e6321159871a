"""API routers."""

from wormwatch.routers.admin import router as admin_router
from wormwatch.routers.health import router as health_router
from wormwatch.routers.metrics import router as metrics_router
from wormwatch.routers.reports import router as reports_router
from wormwatch.routers.stats import router as stats_router

__all__ = [
    "admin_router",
    "health_router",
    "metrics_router",
    "reports_router",
    "stats_router",
]
