from __future__ import annotations

import logging
import time

import httpx


logger = logging.getLogger(__name__)


class StatusFetchError(Exception):
    """The runtime status feed could not be fetched."""


class StatusSource:
    """Fetches the newline-delimited container feed from the runtime."""

    def __init__(self, url: str, timeout_s: float = 10.0, transport: httpx.BaseTransport | None = None):
        self.url = url
        self.timeout_s = timeout_s
        self._transport = transport

    def fetch(self) -> str:
        """Return the raw response body.

        Raises StatusFetchError on transport errors, timeouts and non-2xx replies.
        """
        start = time.time()
        try:
            with httpx.Client(timeout=self.timeout_s, follow_redirects=True, transport=self._transport) as client:
                resp = client.get(self.url)
        except httpx.HTTPError as e:
            raise StatusFetchError(f"{type(e).__name__}: {e}") from e

        latency_ms = round((time.time() - start) * 1000.0, 2)
        if not resp.is_success:
            raise StatusFetchError(f"HTTP {resp.status_code} from {self.url}")

        logger.debug("Fetched %d bytes from %s in %sms", len(resp.content), self.url, latency_ms)
        return resp.text
