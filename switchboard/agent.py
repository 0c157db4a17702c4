"""Docker-backed status feed and toggle controller.

Runs next to the Docker daemon and serves the two endpoints the dashboard
consumes:

  GET  /containers  one `docker ps`-style JSON object per line
  POST /toggle      {"up": name} or {"down": name}

Containers are matched to a service with the same resolver the dashboard
uses, so a compose stack is toggled as a whole.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable

import docker
import requests
from docker.errors import APIError, DockerException
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from . import __version__
from .api_models import ToggleRequest
from .containers import ContainerRecord, resolve_service_name


logger = logging.getLogger(__name__)

NDJSON = "application/x-ndjson"


def feed_line(attrs: dict[str, Any]) -> str:
    """Render Engine API list attrs the way `docker ps --format json` does."""
    names = [n.removeprefix("/") for n in attrs.get("Names") or []]
    labels = attrs.get("Labels") or {}
    return json.dumps(
        {
            "Command": attrs.get("Command") or "",
            "State": attrs.get("State") or "",
            "Status": attrs.get("Status") or "",
            "Names": ",".join(names),
            "Labels": labels,
        },
        separators=(",", ":"),
    )


def record_for(attrs: dict[str, Any]) -> ContainerRecord:
    return ContainerRecord.model_validate(
        {
            "Command": attrs.get("Command"),
            "State": attrs.get("State"),
            "Status": attrs.get("Status"),
            "Names": attrs.get("Names"),
            "Labels": attrs.get("Labels"),
        }
    )


class DockerUnavailable(Exception):
    pass


class ToggleInterrupted(Exception):
    """A start/stop call failed after `touched` containers were already changed."""

    def __init__(self, action: str, name: str, touched: list[str], reason: str):
        super().__init__(f"docker {action} failed for {name}: {reason}")
        self.action = action
        self.name = name
        self.touched = touched
        self.reason = reason


class ContainerOps:
    """Thin wrapper over docker-py; a new client per call."""

    def __init__(self, client_factory: Callable[[], Any] = docker.from_env):
        self._client_factory = client_factory

    def _client(self) -> Any:
        try:
            return self._client_factory()
        except DockerException as e:
            raise DockerUnavailable(str(e)) from e

    def list_containers(self) -> list[Any]:
        try:
            return self._client().containers.list(all=True, sparse=True)
        except (DockerException, requests.exceptions.ConnectionError) as e:
            raise DockerUnavailable(str(e)) from e

    def matching(self, service: str) -> list[Any]:
        return [c for c in self.list_containers() if resolve_service_name(record_for(c.attrs)) == service]

    def toggle(self, req: ToggleRequest) -> list[str]:
        """Start or stop every container of a service; returns the names touched."""
        touched: list[str] = []
        for cont in self.matching(req.target):
            name = record_for(cont.attrs).name.removeprefix("/")
            try:
                if req.action == "up":
                    cont.start()
                else:
                    cont.stop()
            except (APIError, requests.exceptions.RequestException) as e:
                action = "start" if req.action == "up" else "stop"
                reason = getattr(e, "explanation", None) or str(e)
                logger.error("docker %s failed for %s after %s: %s", action, name, touched, reason)
                raise ToggleInterrupted(action, name, list(touched), reason) from e
            logger.info("%s container %s (%s)", "Started" if req.action == "up" else "Stopped", name, req.target)
            touched.append(name)
        return touched


def create_agent_app(ops: ContainerOps | None = None) -> FastAPI:
    ops = ops or ContainerOps()
    app = FastAPI(title="SwitchBoard agent", version=__version__)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": "Invalid request body"})

    @app.get("/containers")
    def containers() -> Response:
        try:
            items = ops.list_containers()
        except DockerUnavailable as e:
            logger.error("Docker is not available: %s", e)
            raise HTTPException(status_code=503, detail="Docker is not available")
        body = "".join(feed_line(c.attrs) + "\n" for c in items)
        return Response(content=body, media_type=NDJSON)

    @app.post("/toggle", status_code=status.HTTP_202_ACCEPTED)
    def toggle(req: ToggleRequest) -> dict[str, Any]:
        try:
            touched = ops.toggle(req)
        except DockerUnavailable as e:
            logger.error("Docker is not available: %s", e)
            raise HTTPException(status_code=503, detail="Docker is not available")
        except ToggleInterrupted as e:
            done = ", ".join(e.touched) or "none"
            raise HTTPException(
                status_code=502,
                detail=f"Docker failed to {e.action} {e.name} ({req.target}): {e.reason}; already changed: {done}",
            )
        if not touched:
            raise HTTPException(status_code=404, detail=f"No containers found for service '{req.target}'")
        return {"status": "accepted", "action": req.action, "service": req.target, "containers": touched}

    return app


def main() -> None:
    import uvicorn

    from .logging_config import setup_logging
    from .settings import Settings

    settings = Settings()
    setup_logging("agent", settings.log_level)
    uvicorn.run(create_agent_app(), host=settings.host, port=settings.agent_port, log_config=None)


if __name__ == "__main__":
    main()
