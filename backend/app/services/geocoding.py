"""Address geocoding through the Geoapify search API."""
import logging

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when an address cannot be resolved to coordinates."""


def geocode_address(address: str, timeout: float = 10.0) -> tuple[float, float]:
    """Return ``(lat, lon)`` for the first Geoapify match of ``address``."""
    params = {"text": address, "apiKey": settings.GEOAPIFY_API_KEY}
    try:
        response = httpx.get(settings.GEOAPIFY_URL, params=params, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.error("Geocoding request failed for %r: %s", address, exc)
        raise GeocodingError(f"Geocoding service unavailable: {exc}") from exc

    features = response.json().get("features") or []
    if not features:
        raise GeocodingError("No location found for the given address")

    props = features[0].get("properties", {})
    return float(props["lat"]), float(props["lon"])
