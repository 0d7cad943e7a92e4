from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from homemade.exceptions import GeocodingError, InvalidInputError
from homemade.geocode.client import GeocodeResult, reverse_geocode
from homemade.geocode.config import GeocodeConfig

CONFIG = GeocodeConfig(enabled=True, timeout=1.0, local_fallback_miles=15.0)

BIGDATACLOUD_SANTA_FE = {
    "postcode": "87505",
    "city": "Santa Fe",
    "principalSubdivision": "New Mexico",
}

NOMINATIM_SANTA_FE = {
    "address": {"postcode": "87501-2345", "city": "Santa Fe", "state": "New Mexico"},
}


def _client(bigdatacloud=None, nominatim=None, seen=None):
    """httpx client answering both services from canned (status, json) pairs."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        reply = bigdatacloud if "bigdatacloud" in request.url.host else nominatim
        if reply is None:
            return httpx.Response(500)
        if isinstance(reply, Exception):
            raise reply
        return httpx.Response(200, json=reply)

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_bigdatacloud_answer():
    seen = []
    result = reverse_geocode(35.62, -105.87, CONFIG, client=_client(BIGDATACLOUD_SANTA_FE, seen=seen))
    assert result == GeocodeResult(zip_code="87505", city="Santa Fe", state="NM")
    assert len(seen) == 1
    assert seen[0].url.params["latitude"] == "35.62"


def test_falls_back_to_nominatim():
    seen = []
    client = _client({"postcode": "", "city": "Santa Fe"}, NOMINATIM_SANTA_FE, seen=seen)
    result = reverse_geocode(35.69, -105.94, CONFIG, client=client)
    assert result.zip_code == "87501"
    assert result.state == "NM"
    assert seen[1].headers["User-Agent"] == "HomeMade-App/1.0"


def test_nominatim_town_when_no_city():
    client = _client(None, {"address": {"postcode": "87574", "town": "Tesuque", "state": "NM"}})
    result = reverse_geocode(35.75, -105.92, CONFIG, client=client)
    assert result.city == "Tesuque"


def test_network_error_falls_through():
    client = _client(httpx.ConnectError("down"), NOMINATIM_SANTA_FE)
    result = reverse_geocode(35.69, -105.94, CONFIG, client=client)
    assert result.zip_code == "87501"


def test_local_fallback_when_services_fail():
    result = reverse_geocode(35.69, -105.94, CONFIG, client=_client())
    assert result == GeocodeResult(zip_code="87501", city="Santa Fe", state="NM")


def test_local_fallback_keeps_remote_city():
    client = _client({"postcode": None, "city": "La Cienega", "principalSubdivision": "New Mexico"})
    result = reverse_geocode(35.69, -105.94, CONFIG, client=client)
    assert result.zip_code == "87501"
    assert result.city == "La Cienega"


def test_disabled_uses_local_table_only():
    config = GeocodeConfig(enabled=False, local_fallback_miles=15.0)
    result = reverse_geocode(35.75, -105.92, config)
    assert result.zip_code == "87574"


def test_nothing_found_raises():
    config = GeocodeConfig(enabled=False, local_fallback_miles=15.0)
    with pytest.raises(GeocodingError):
        reverse_geocode(0.0, 0.0, config)


def test_out_of_range_coordinates():
    with pytest.raises(InvalidInputError):
        reverse_geocode(91.0, 0.0, CONFIG, client=_client())


# ── Endpoint ─────────────────────────────────────────────────────────────


def test_geocode_endpoint(client):
    found = GeocodeResult(zip_code="87505", city="Santa Fe", state="NM")
    with patch("homemade.app.reverse_geocode", return_value=found) as mock_geocode:
        resp = client.get("/api/geocode", params={"lat": "35.62", "lon": "-105.87"})
    assert resp.status_code == 200
    assert resp.json() == {"zipCode": "87505", "city": "Santa Fe", "state": "NM"}
    mock_geocode.assert_called_once_with(35.62, -105.87)


def test_geocode_endpoint_missing_params(client):
    resp = client.get("/api/geocode", params={"lat": "35.62"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Latitude and longitude are required"}


def test_geocode_endpoint_non_numeric(client):
    resp = client.get("/api/geocode", params={"lat": "north", "lon": "-105.87"})
    assert resp.status_code == 400


def test_geocode_endpoint_service_error(client):
    with patch("homemade.app.reverse_geocode", side_effect=GeocodingError()):
        resp = client.get("/api/geocode", params={"lat": "0", "lon": "0"})
    assert resp.status_code == 502
    assert resp.json() == {"error": "Geocoding service error"}
