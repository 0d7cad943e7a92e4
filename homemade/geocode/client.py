from __future__ import annotations

import logging
from typing import Any

import httpx

from ..exceptions import GeocodingError, InvalidInputError
from ..listings.models import CamelModel
from ..locations.states import normalize_state
from ..locations.zip_table import clean_zip, nearest_zip
from .config import DEFAULT_GEOCODE_CONFIG, GeocodeConfig

logger = logging.getLogger(__name__)


class GeocodeResult(CamelModel):
    zip_code: str
    city: str | None = None
    state: str | None = None


def _zip_from_postcode(postcode: Any) -> str | None:
    # "87505-1234" -> "87505"; non-US postcodes give None
    if not postcode:
        return None
    return clean_zip(str(postcode).split("-")[0])


def _state(value: str | None) -> str | None:
    if not value:
        return None
    return normalize_state(value) or value


def _from_bigdatacloud(client: httpx.Client, lat: float, lon: float, config: GeocodeConfig) -> dict[str, Any] | None:
    response = client.get(
        config.bigdatacloud_url,
        params={"latitude": lat, "longitude": lon, "localityLanguage": "en"},
    )
    if not response.is_success:
        logger.warning("BigDataCloud returned HTTP %s", response.status_code)
        return None
    data = response.json()
    return {
        "zip_code": _zip_from_postcode(data.get("postcode")),
        "city": data.get("city") or data.get("locality") or None,
        "state": _state(data.get("principalSubdivision")),
    }


def _from_nominatim(client: httpx.Client, lat: float, lon: float, config: GeocodeConfig) -> dict[str, Any] | None:
    response = client.get(
        config.nominatim_url,
        params={"format": "json", "lat": lat, "lon": lon, "zoom": 18, "addressdetails": 1},
        headers={"User-Agent": config.user_agent},
    )
    if not response.is_success:
        logger.warning("Nominatim returned HTTP %s", response.status_code)
        return None
    address = response.json().get("address") or {}
    return {
        "zip_code": _zip_from_postcode(address.get("postcode") or address.get("postal_code")),
        "city": (
            address.get("city") or address.get("town") or address.get("village")
            or address.get("county") or None
        ),
        "state": _state(address.get("state")),
    }


def _query_remote(lat: float, lon: float, config: GeocodeConfig, client: httpx.Client) -> dict[str, Any] | None:
    """Ask each remote service in turn; the first answer carrying a zip wins."""
    partial: dict[str, Any] | None = None
    for source in (_from_bigdatacloud, _from_nominatim):
        try:
            found = source(client, lat, lon, config)
        except (httpx.HTTPError, ValueError):
            logger.warning("%s lookup failed", source.__name__, exc_info=True)
            continue
        if found and found["zip_code"]:
            return found
        partial = partial or found
    return partial


def reverse_geocode(
    lat: float,
    lon: float,
    config: GeocodeConfig = DEFAULT_GEOCODE_CONFIG,
    client: httpx.Client | None = None,
) -> GeocodeResult:
    """
    Resolve a coordinate to ``{zipCode, city, state}``.

    Remote services are skipped when ``config.enabled`` is false. When no
    service yields a zip, the nearest zip in the local table within
    ``config.local_fallback_miles`` is used. Raises ``GeocodingError`` if
    nothing places the coordinate.
    """
    if not (-90.0 <= lat <= 90.0) or not (-180.0 <= lon <= 180.0):
        raise InvalidInputError("lat and lon are out of range")

    found: dict[str, Any] | None = None
    if config.enabled:
        owns_client = client is None
        client = client or httpx.Client(timeout=config.timeout)
        try:
            found = _query_remote(lat, lon, config, client)
        finally:
            if owns_client:
                client.close()

    if not found or not found["zip_code"]:
        local = nearest_zip(lat, lon, config.local_fallback_miles)
        if local is not None:
            logger.info("Using nearest local zip %s for (%s, %s)", local["zip"], lat, lon)
            found = {
                "zip_code": local["zip"],
                "city": (found or {}).get("city") or local["city"],
                "state": (found or {}).get("state") or local["state"],
            }

    if not found or not found["zip_code"]:
        raise GeocodingError()
    return GeocodeResult(**found)
