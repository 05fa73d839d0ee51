"""
Router package for the hierarchy engine API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- hierarchy: Subtree duplication, cascade count and cascade delete
"""

from api.routers.health import router as health_router
from api.routers.hierarchy import router as hierarchy_router

__all__ = [
    "health_router",
    "hierarchy_router",
]
