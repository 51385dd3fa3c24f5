"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers. The record
store and fault injector are created by medialib.core.lifespan; tests set
them on app.state before the first request instead.

Settings are read inside create_app(), so tests can change the environment
and call get_settings.cache_clear() first.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from medialib.api.v1 import api_router
from medialib.core.config import Settings, get_settings
from medialib.core.exception_handlers import register_exception_handlers
from medialib.core.lifespan import create_lifespan
from medialib.middleware import RequestIDMiddleware
from medialib.pages import render_root_page

API_PREFIX = "/api/v1"


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    # Last added is outermost: the request id exists before CORS and routing run.
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
    """Build the FastAPI application for the current settings."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="In-memory media library: folders, media, collections, tags and users.",
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)
    _add_middleware(app, settings)
    app.include_router(api_router, prefix=API_PREFIX)

    landing_page = render_root_page(settings.app_name, settings.app_version)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def root() -> HTMLResponse:
        return HTMLResponse(content=landing_page)

    return app


app = create_app()
