"""API route modules."""

from .catalog_routes import router as catalog_router
from .certificates_routes import router as certificates_router
from .health_routes import router as health_router

__all__ = [
    "catalog_router",
    "certificates_router",
    "health_router",
]
