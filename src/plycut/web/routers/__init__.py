"""API routers for the REST API."""

from plycut.web.routers.optimize import router as optimize_router
from plycut.web.routers.presets import router as presets_router

__all__ = [
    "optimize_router",
    "presets_router",
]
