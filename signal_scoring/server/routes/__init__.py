"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .reports import router as reports_router
from .root import router as root_router
from .scoring import router as scoring_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(scoring_router, prefix="/api/users", tags=["scoring"])
    app.include_router(reports_router, prefix="/api", tags=["reports"])
