"""Thin httpx wrapper around the attendance endpoints."""
import logging
from typing import Any, Optional

import httpx

from app.errors import NetworkError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response; ``message`` is the server's ``error`` text when present."""

    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.code = code
        super().__init__(f"{status_code}: {message}")


class MembershipApiClient:
    def __init__(
        self,
        base_url: str = "",
        access_token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.access_token = access_token
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(self, method: str, path: str, fallback: str, json: Any = None) -> Any:
        try:
            response = self._http.request(method, path, headers=self._headers(), json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError(f"Network error during {fallback.lower()}.") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.is_success:
            return data
        error = data.get("error") if isinstance(data, dict) else None
        code = data.get("code") if isinstance(data, dict) else None
        raise ApiError(response.status_code, error or f"{fallback} failed.", code)

    def list_events(self) -> list[dict[str, Any]]:
        return self._request("GET", "/events", "Loading events")

    def list_public_events(self) -> list[dict[str, Any]]:
        return self._request("GET", "/events/public", "Loading events")

    def get_event(self, event_id: str) -> dict[str, Any]:
        return self._request("GET", f"/events/{event_id}", "Loading event")

    def rsvp(self, event_id: str) -> dict[str, Any]:
        return self._request("POST", f"/events/rsvp/{event_id}", "RSVP")

    def unrsvp(self, event_id: str) -> dict[str, Any]:
        return self._request("POST", f"/events/unrsvp/{event_id}", "Un-RSVP")

    def check_in(self, event_id: str, latitude: float, longitude: float, accuracy: float) -> dict[str, Any]:
        body = {"latitude": latitude, "longitude": longitude, "accuracy": accuracy}
        return self._request("POST", f"/events/checkin/{event_id}", "Check-in", json=body)
