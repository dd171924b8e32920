"""FastAPI application entrypoint for the YouTube media info service."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Final

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from yt_media_info.api.http import error_response, router as api_router
from yt_media_info.core.config import Settings, get_settings
from yt_media_info.core.logging_cfg import setup_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Notes
    -----
    - Logging is configured up front based on settings; settings are loaded once.
    - CORS is open to ``settings.cors_origins`` (``*`` by default) since browser
      clients call the API directly.
    - Anything that escapes a route is turned into the same error envelope the
      routes use, with status 500.

    Returns
    -------
    FastAPI
        The configured FastAPI application.
    """

    settings: Settings = get_settings()
    setup_logging(settings.debug)

    app: FastAPI = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)

    @app.exception_handler(Exception)
    async def unhandled(_: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error", exc_info=exc)
        return error_response(500, str(exc) or "Something went wrong!", settings)

    @app.get("/", tags=["system"])
    def index() -> dict[str, Any]:
        """List the available endpoints."""

        return {
            "message": settings.app_name,
            "endpoints": {
                "youtube": "POST /youtube",
                "status": "GET /status",
            },
        }

    @app.get("/status", tags=["system"])
    def status() -> dict[str, str]:
        """Liveness probe; does not call the provider."""

        return {
            "status": "OK",
            "service": f"{settings.service_name} API",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app: Final[FastAPI] = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings: Settings = get_settings()
    uvicorn.run("yt_media_info.main:app", host=_settings.host, port=_settings.port)
