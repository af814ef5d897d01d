"""Geocoder Client — resolves free-text addresses over a MapQuest-compatible HTTP API.

Used endpoint:
- GET /geocoding/v1/address?key=...&location=...
  -> {"results": [{"locations": [{"latLng": {"lat", "lng"}, "street",
      "adminArea5" (city), "adminArea3" (state), "postalCode", "adminArea1" (country)}]}]}

Invariants:
    - One HTTP call per geocode()
    - Transport errors, non-200 answers and malformed bodies raise GeocodingError
    - An empty candidate list is returned as [] (the lifecycle stage decides)
"""

import logging
from typing import Any

import httpx

from tasker_api.core.domain_types import GeocodeResult
from tasker_api.core.errors import GeocodingError

logger = logging.getLogger(__name__)


def _format_address(location: dict[str, Any]) -> str:
    parts = [
        location.get("street"),
        location.get("adminArea5"),
        " ".join(p for p in (location.get("adminArea3"), location.get("postalCode")) if p),
        location.get("adminArea1"),
    ]
    return ", ".join(p for p in parts if p)


def _to_result(location: dict[str, Any]) -> GeocodeResult:
    lat_lng = location.get("latLng") or {}
    return GeocodeResult(
        longitude=float(lat_lng["lng"]),
        latitude=float(lat_lng["lat"]),
        formatted_address=_format_address(location) or None,
        street_name=location.get("street") or None,
        city=location.get("adminArea5") or None,
        state_code=location.get("adminArea3") or None,
        zipcode=location.get("postalCode") or None,
        country_code=location.get("adminArea1") or None,
    )


class HttpGeocoder:
    """Geocoder protocol implementation backed by httpx."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or "").strip().rstrip("/")
        self._api_key = api_key
        self._timeout_s = timeout_s
        self._transport = transport

    async def geocode(self, address: str) -> list[GeocodeResult]:
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout_s,
            transport=self._transport,
        ) as client:
            try:
                resp = await client.get(
                    "/geocoding/v1/address",
                    params={"key": self._api_key, "location": address},
                )
            except httpx.HTTPError as e:
                logger.error(f"Geocoder request failed: {e}")
                raise GeocodingError(address, "geocoder unreachable") from e

        if resp.status_code != 200:
            logger.error(
                f"Geocoder answered {resp.status_code}: {resp.text[:200]}",
            )
            raise GeocodingError(address, f"geocoder answered {resp.status_code}")

        try:
            data: dict[str, Any] = resp.json()
            results = data.get("results") or []
            locations = results[0].get("locations") or [] if results else []
            return [_to_result(loc) for loc in locations]
        except (ValueError, KeyError, TypeError) as e:
            raise GeocodingError(address, "malformed geocoder response") from e
