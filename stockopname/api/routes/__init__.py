"""API route modules."""

from stockopname.api.routes.auth import router as auth_router
from stockopname.api.routes.health import router as health_router
from stockopname.api.routes.items import router as items_router
from stockopname.api.routes.locations import router as locations_router
from stockopname.api.routes.reports import router as reports_router
from stockopname.api.routes.sessions import router as sessions_router
from stockopname.api.routes.users import router as users_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "locations_router",
    "sessions_router",
    "items_router",
    "reports_router",
]
