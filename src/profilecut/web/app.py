"""FastAPI application for profile cutting estimates."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from profilecut import __version__
from profilecut.web.exceptions import register_exception_handlers
from profilecut.web.routers import jobs_router, profiles_router, units_router

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    """Build the API app with CORS, error handlers and all routers."""
    app = FastAPI(
        title="Profile Cutting API",
        description="Pipe consumption estimates and stock-limited cutting plans "
        "for profile materials",
        version=__version__,
    )
    # Browser clients call the API directly
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in (profiles_router, units_router, jobs_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


# ASGI entry point: uvicorn profilecut.web.app:app
app = create_app()
