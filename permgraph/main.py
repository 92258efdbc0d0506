"""FastAPI application entry point: wiring only.

create_app() resolves settings, so tests can set DATABASE_URL (and clear
the get_settings cache) before building an app. `uvicorn permgraph.main:app`
serves the module-level instance.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from permgraph.api.v1 import api_router
from permgraph.core.config import Settings, get_settings
from permgraph.core.exception_handlers import register_exception_handlers
from permgraph.core.lifespan import create_lifespan
from permgraph.middleware import ActorContextMiddleware, RequestIDMiddleware
from permgraph.shared.telemetry.logging import setup_logging


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    # Last added runs first: request id, then CORS, then the actor context closest to the routes.
    app.add_middleware(ActorContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)


def create_app() -> FastAPI:
    """Build the permission dependency graph API."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Permission dependency graph: traversal, cycle-safe edge management, auto-resolve.",
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    register_exception_handlers(app)
    _install_middleware(app, settings)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
