import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from prometheus_client import make_asgi_app

from recipe_catalog.core.config import (
    APP_NAME,
    CORS_HEADERS,
    CORS_METHODS,
    VERSION,
    Settings,
)
from recipe_catalog.core.dependencies import AppContext, build_context
from recipe_catalog.routes import api
from recipe_catalog.services.files import UPLOADS_URL_PREFIX

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None, context: Optional[AppContext] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    When ``context`` is omitted the database and upload directory named in
    ``settings`` are opened at startup.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "context", None) is None:
            app.state.context = build_context(settings)
            logger.info("Uploads stored in %s", app.state.context.images.directory)
        yield

    app = FastAPI(title=APP_NAME, version=VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    # Uploaded images, read-only
    upload_dir = context.images.directory if context is not None else settings.upload_dir
    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=upload_dir, check_dir=False),
        name="uploads",
    )
    app.mount("/metrics", make_asgi_app())

    app.include_router(api.router)

    # Basic health check
    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


def run() -> None:
    """Console entry point: serve the API on the configured port."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
