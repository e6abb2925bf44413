"""API routers for the REST API."""

from profilecut.web.routers.jobs import router as jobs_router
from profilecut.web.routers.profiles import router as profiles_router
from profilecut.web.routers.units import router as units_router

__all__ = [
    "jobs_router",
    "profiles_router",
    "units_router",
]
