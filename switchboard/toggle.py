from __future__ import annotations

import logging

import httpx

from .api_models import ToggleRequest


logger = logging.getLogger(__name__)

SUCCESS_CODES = frozenset({200, 202})


class ToggleRejected(Exception):
    """The controller answered with a non-success status."""

    def __init__(self, status_code: int):
        super().__init__(f"Service toggle failed with status {status_code}")
        self.status_code = status_code


class ToggleUnavailable(Exception):
    """The controller could not be reached."""


class ToggleForwarder:
    """Forwards start/stop requests to the downstream controller. No retries."""

    def __init__(self, url: str, timeout_s: float = 10.0, transport: httpx.BaseTransport | None = None):
        self.url = url
        self.timeout_s = timeout_s
        self._transport = transport

    def forward(self, req: ToggleRequest) -> int:
        """POST the request downstream and return the controller's status code."""
        try:
            with httpx.Client(timeout=self.timeout_s, follow_redirects=True, transport=self._transport) as client:
                resp = client.post(self.url, json=req.payload())
        except httpx.HTTPError as e:
            raise ToggleUnavailable(f"{type(e).__name__}: {e}") from e

        if resp.status_code not in SUCCESS_CODES:
            raise ToggleRejected(resp.status_code)
        logger.info("Toggle %s %s accepted (HTTP %d)", req.action, req.target, resp.status_code)
        return resp.status_code
