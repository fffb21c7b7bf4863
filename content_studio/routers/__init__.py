"""API routers."""
from content_studio.routers.brands_router import router as brands_router
from content_studio.routers.content_router import router as content_router
from content_studio.routers.dashboard_router import router as dashboard_router
from content_studio.routers.health_router import router as health_router
from content_studio.routers.ideas_router import router as ideas_router
from content_studio.routers.mock_n8n import router as mock_n8n_router
from content_studio.routers.n8n_router import router as n8n_router
from content_studio.routers.strategy_router import router as strategy_router

__all__ = [
    "brands_router",
    "content_router",
    "dashboard_router",
    "health_router",
    "ideas_router",
    "mock_n8n_router",
    "n8n_router",
    "strategy_router",
]
