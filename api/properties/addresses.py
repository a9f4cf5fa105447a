"""
Address resolution for listings.

Addresses are deduplicated on the exact decimal strings of their coordinates.
`33.5` and `33.50` are different keys here; the text form comes from
`coordinate_text`, so the same float always yields the same key.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Protocol

logger = logging.getLogger(__name__)

# Scale of the google_addresses latitude/longitude numeric columns.
COORDINATE_QUANTUM = Decimal("0.00000001")


class AddressStore(Protocol):
    async def find_by_coordinates(self, latitude: str, longitude: str) -> dict[str, Any] | None: ...

    async def create(self, *, latitude: str, longitude: str, geocoding: dict[str, Any]) -> str: ...


def coordinate_text(value: float) -> str:
    """
    Plain decimal text of a coordinate at column precision (8 places):
    33.5 -> "33.5", -7.0 -> "-7", 1e-05 -> "0.00001",
    33.573112345678901 -> "33.57311235".
    """
    number = Decimal(repr(float(value)))
    if number.as_tuple().exponent < COORDINATE_QUANTUM.as_tuple().exponent:
        number = number.quantize(COORDINATE_QUANTUM, rounding=ROUND_HALF_UP)
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def placeholder_geocoding(latitude: float, longitude: float, full_address: str | None = None) -> dict[str, Any]:
    address = full_address or f"{coordinate_text(latitude)}, {coordinate_text(longitude)}"
    return {
        "address": address,
        "formattedAddress": address,
        "placeId": "",
        "latitude": latitude,
        "longitude": longitude,
        "components": {},
    }


class AddressResolver:
    def __init__(self, store: AddressStore) -> None:
        self._store = store

    async def resolve(self, latitude: float, longitude: float, full_address: str | None = None) -> str:
        """
        Return the id of the address for these coordinates, creating it on first sight.
        """
        lat_text = coordinate_text(latitude)
        lng_text = coordinate_text(longitude)

        existing = await self._store.find_by_coordinates(lat_text, lng_text)
        if existing is not None:
            return str(existing["id"])

        address_id = await self._store.create(
            latitude=lat_text,
            longitude=lng_text,
            geocoding=placeholder_geocoding(latitude, longitude, full_address),
        )
        logger.info("address_created id=%s latitude=%s longitude=%s", address_id, lat_text, lng_text)
        return address_id
