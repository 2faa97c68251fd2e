"""HTTP transport used by the routing client and credential checks."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol

import requests

from tourmap.exceptions import TransportError
from tourmap.logging import get_logger

logger = get_logger(__name__)


class Transport(Protocol):
    """Fetches a URL with query parameters."""

    def get_json(self, url: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Return the decoded JSON body of a GET request."""
        ...

    def get_status(self, url: str, params: Mapping[str, Any]) -> int:
        """Return the HTTP status code of a GET request."""
        ...


class RequestsTransport:
    """`Transport` backed by a shared ``requests.Session``.

    Args:
        session: Session to use; a new one is created when omitted.
        timeout: Seconds to wait for the server, None for the library default.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def get_json(self, url: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.get(url, params=dict(params), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc
        if not isinstance(data, dict):
            raise TransportError(
                f"GET {url} returned {type(data).__name__}, expected a JSON object"
            )
        return data

    def get_status(self, url: str, params: Mapping[str, Any]) -> int:
        try:
            response = self.session.get(url, params=dict(params), timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc
        logger.debug("GET %s -> %d", url, response.status_code)
        return response.status_code

    def close(self) -> None:
        self.session.close()
