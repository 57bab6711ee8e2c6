"""
HTTP client for a remote gas container.

Implements GasContainerContract over the JSON routes in server.py. The
client never retries; retry policy belongs to the drivers.
"""

import json
from http import client as http_client
from typing import Any, Optional
from urllib import error as url_error
from urllib import request as url_request

from .service import GasContainerContract
from .constants import CLIENT_TIMEOUT_SECONDS


class TransportError(Exception):
    """Raised when the server cannot be reached"""
    pass


class ServiceError(Exception):
    """Raised when the server answers with a non-success status"""

    def __init__(self, status: int, detail: str):
        super().__init__(f"HTTP {status}: {detail}")
        self.status = status
        self.detail = detail


class GasContainerClient(GasContainerContract):
    """Remote gas container proxy"""

    def __init__(self, base_url: str, timeout: float = CLIENT_TIMEOUT_SECONDS):
        """
        Args:
            base_url: Server URL including the path prefix
                      (e.g. "http://127.0.0.1:5001/gasrpc")
            timeout: Per-request socket timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _call(self, method: str, route: str, payload: Optional[dict] = None) -> Any:
        """
        Perform one round trip.

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            TransportError: Connection refused, timeout, bad response
            ServiceError: Server returned 4xx/5xx
        """
        data = None
        headers = {"Accept": "application/json"}
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = url_request.Request(
            f"{self.base_url}{route}",
            method=method,
            data=data,
            headers=headers,
        )
        try:
            with url_request.urlopen(req, timeout=self.timeout) as resp:
                body = resp.read().decode("utf-8")
        except url_error.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace")
            raise ServiceError(exc.code, detail) from exc
        except (http_client.HTTPException, OSError, UnicodeDecodeError) as exc:
            # URLError, timeouts and resets are all OSError subclasses
            raise TransportError(f"{method} {route} failed: {exc}") from exc

        if not body:
            return None
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise TransportError(f"{method} {route} returned invalid JSON: {exc}") from exc

    def _field(self, route: str, key: str) -> Any:
        """
        GET a route and pull one key from its JSON object body.

        Raises:
            TransportError: Empty body, non-object body, or missing key
        """
        body = self._call("GET", route)
        if not isinstance(body, dict) or key not in body:
            raise TransportError(f"GET {route} returned no '{key}' field: {body!r}")
        return body[key]

    def increase_mass(self, mass: float) -> None:
        self._call("POST", "/increase-mass", {"mass": mass})

    def decrease_mass(self, mass: float) -> None:
        self._call("POST", "/decrease-mass", {"mass": mass})

    def get_pressure(self) -> float:
        return float(self._field("/pressure", "pressure"))

    def is_destroyed(self) -> bool:
        return bool(self._field("/destroyed", "destroyed"))
