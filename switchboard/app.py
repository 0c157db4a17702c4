from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .api_models import ConfigResponse, ServiceStatus, ToggleRequest, ToggleResponse
from .config import AppConfig
from .reconciler import reconcile_stream
from .status_source import StatusFetchError, StatusSource
from .toggle import ToggleForwarder, ToggleRejected, ToggleUnavailable


logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig,
    *,
    static_dir: str | None = "static",
    status_source: StatusSource | None = None,
    toggler: ToggleForwarder | None = None,
    http_timeout_s: float = 10.0,
) -> FastAPI:
    """Build the dashboard API around an already-loaded config snapshot."""
    source = status_source or StatusSource(config.docker_status_url, timeout_s=http_timeout_s)
    forwarder = toggler or ToggleForwarder(config.toggle_service_url, timeout_s=http_timeout_s)

    app = FastAPI(title="SwitchBoard", version=__version__)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": "Invalid request body"})

    @app.get("/api/config", response_model=ConfigResponse)
    def get_config() -> ConfigResponse:
        return ConfigResponse(services=list(config.services), poll_interval_seconds=config.poll_interval_seconds)

    @app.get("/api/status", response_model=list[ServiceStatus])
    def get_status() -> list[ServiceStatus]:
        try:
            body = source.fetch()
        except StatusFetchError as e:
            logger.error("Error fetching docker status: %s", e)
            raise HTTPException(status_code=500, detail="Failed to fetch service status")
        return reconcile_stream(config.services, body)

    @app.post("/api/toggle", response_model=ToggleResponse)
    def toggle_service(req: ToggleRequest) -> ToggleResponse:
        try:
            forwarder.forward(req)
        except ToggleUnavailable as e:
            logger.error("Error toggling service %s: %s", req.target, e)
            raise HTTPException(status_code=500, detail="Failed to toggle service")
        except ToggleRejected as e:
            logger.warning("Toggle service returned status: %d", e.status_code)
            # Codes below 400 cannot carry an error body; report them as a bad gateway.
            code = e.status_code if e.status_code >= 400 else status.HTTP_502_BAD_GATEWAY
            raise HTTPException(status_code=code, detail=str(e))
        return ToggleResponse()

    if static_dir and os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    elif static_dir:
        logger.warning("Static directory %s not found; UI will not be served", static_dir)

    return app
