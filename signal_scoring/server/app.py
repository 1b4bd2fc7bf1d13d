"""
Signal Scoring API: FastAPI app factory.

Use: uvicorn signal_scoring.server.app:app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .state import get_state


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup."""
    app = FastAPI(
        title="Signal Scoring API",
        description="Preference centroid scoring and model validation for saved/skipped signals",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    def _startup():
        config = get_config()
        logging.basicConfig(
            level=config.log_level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
        ok, errors = config.validate()
        for error in errors:
            logging.getLogger(__name__).warning("[startup] CONFIG_ERROR %s", error)
        if ok:
            get_state()

    return app


app = create_app()
