"""Error types and the HTTP request executor."""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Dict, Optional

import requests

from bestbuy.version import USER_AGENT

if TYPE_CHECKING:  # pragma: no cover - typing only
    from bestbuy.utils.config import ClientConfig


class BestBuyError(Exception):
    """Base class for every error raised by the client."""


class AuthorizationError(BestBuyError):
    """Raised when no API key is available to sign a request."""


class InvalidArgumentError(BestBuyError, ValueError):
    """Raised for parameter combinations the service cannot accept."""


class ServiceError(BestBuyError):
    """Raised when communication with the service fails."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class RequestExecutor:
    """Issues GET requests through a ``requests.Session``.

    The forced options below always win over caller overrides: redirects are
    followed, the body is read eagerly, HTTP error statuses fail the call and
    the client User-Agent is sent.
    """

    FORCED_OPTIONS: Dict[str, Any] = {
        "allow_redirects": True,
        "stream": False,
    }

    def __init__(self, session: Optional[requests.Session] = None, logger: Any | None = None) -> None:
        self.session = session or requests.Session()
        self.logger = logger

    def request_options(self, config: "ClientConfig") -> Dict[str, Any]:
        options = dict(config.transport_options)
        options.update(self.FORCED_OPTIONS)
        headers = dict(options.get("headers") or {})
        headers["User-Agent"] = USER_AGENT
        options["headers"] = headers
        return options

    def execute(self, url: str, config: "ClientConfig") -> str:
        start = time.perf_counter()
        try:
            response = self.session.get(url, **self.request_options(config))
            response.raise_for_status()
        except requests.RequestException as exc:
            if self.logger is not None:
                self.logger.error("request failed url=%s error=%s", url, exc)
            status = getattr(getattr(exc, "response", None), "status_code", None)
            raise ServiceError(
                "An error occurred when communicating with the service", status=status
            ) from exc

        if config.debug and self.logger is not None:
            self.logger.info(
                "url=%s status=%s elapsed_ms=%.2f redirects=%s",
                response.url,
                response.status_code,
                (time.perf_counter() - start) * 1000,
                len(response.history),
            )
        return response.text
