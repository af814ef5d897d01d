"""Profile Lifecycle — pure pipeline stages run on every Profile save.

Invariants:
    - slug is a deterministic function of name (lowercase ASCII, single hyphens)
    - location is built only from geocoder result 0
    - address never survives a stage that consumed it
    - Stages return new dicts; input fields are never mutated

Design Decisions:
    - Geocoding IO stays in the shell: the controller awaits the geocoder and
      hands the results to apply_location (impureim sandwich)
    - Empty geocoder answer is an error, never a partial location
"""

import re
import unicodedata

from tasker_api.core.domain_types import GeocodeResult
from tasker_api.core.errors import GeocodingError

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """'Acme Movers!!' -> 'acme-movers'."""
    ascii_value = (
        unicodedata.normalize("NFKD", value)
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    return _NON_ALNUM.sub("-", ascii_value.lower()).strip("-")


def apply_slug(fields: dict) -> dict:
    """Recompute slug when the save carries a name."""
    if not fields.get("name"):
        return dict(fields)
    return {**fields, "slug": slugify(fields["name"])}


def build_location(result: GeocodeResult) -> dict:
    """GeoJSON point plus locality fields."""
    return {
        "type": "Point",
        "coordinates": [result.longitude, result.latitude],
        "formatted_address": result.formatted_address,
        "street": result.street_name,
        "city": result.city,
        "state": result.state_code,
        "zipcode": result.zipcode,
        "country": result.country_code,
    }


def apply_location(fields: dict, results: list[GeocodeResult]) -> dict:
    """Replace address with the location derived from the first result."""
    address = fields.get("address")
    if not results:
        raise GeocodingError(address or "")
    staged = {k: v for k, v in fields.items() if k != "address"}
    staged["location"] = build_location(results[0])
    return staged


def needs_geocoding(fields: dict) -> bool:
    return bool(fields.get("address"))
