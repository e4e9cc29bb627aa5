"""Blocking HTTP transport used by provider adapters."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .providers.base import NetworkError

LOGGER = logging.getLogger("paip.transport")


@dataclass(frozen=True)
class TransportResponse:
    """Raw status and body of one HTTP exchange."""

    status_code: int
    body: str


class HttpTransport:
    """Issue one JSON POST per call with a bounded timeout (seconds)."""

    def __init__(self, *, timeout: float, client: Optional[httpx.Client] = None) -> None:
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)

    def post(
        self,
        url: str,
        json_body: Dict[str, Any],
        *,
        params: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        try:
            response = self._client.post(url, json=json_body, params=params, timeout=self.timeout)
        except httpx.TransportError as exc:
            LOGGER.debug("Transport failure posting to %s", url, exc_info=True)
            raise NetworkError(
                f"Request to LLM provider failed: {exc}",
                details={"exception_type": type(exc).__name__},
            ) from exc
        LOGGER.debug("POST %s -> %s (%s bytes)", url, response.status_code, len(response.content))
        return TransportResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self._client.close()
