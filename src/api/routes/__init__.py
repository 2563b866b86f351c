"""API route modules."""

from .grid import router as grid_router
from .health import router as health_router
from .layout import router as layout_router

__all__ = ["health_router", "layout_router", "grid_router"]
