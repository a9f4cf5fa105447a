"""
Property persistence.
This module is where property- and address-related SQL lives.
"""

from __future__ import annotations

import json
from typing import Any

from core.db import Database


def _json_arg(value: Any) -> str | None:
    """
    asyncpg does not automatically encode Python objects for json/jsonb parameters.
    We pass JSON as a string and cast it in SQL.
    """
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=True)


class AddressRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def find_by_coordinates(self, latitude: str, longitude: str) -> dict[str, Any] | None:
        """
        Exact lookup on the coordinate strings (no spatial tolerance), cast to the
        column scale so the comparison matches what an insert stores.
        """
        return await self._db.fetch_one(
            """
            SELECT id, latitude, longitude
            FROM google_addresses
            WHERE latitude = $1::text::numeric(10, 8)
              AND longitude = $2::text::numeric(11, 8)
            LIMIT 1
            """,
            latitude,
            longitude,
        )

    async def create(self, *, latitude: str, longitude: str, geocoding: dict[str, Any]) -> str:
        row = await self._db.fetch_one(
            """
            INSERT INTO google_addresses (latitude, longitude, google_address_json)
            VALUES ($1::text::numeric(10, 8), $2::text::numeric(11, 8), $3::jsonb)
            RETURNING id
            """,
            latitude,
            longitude,
            _json_arg(geocoding),
        )
        if row is None or "id" not in row:
            raise RuntimeError("Failed to insert address.")
        return str(row["id"])


# Column order of the INSERT below; values are looked up by the same names.
PROPERTY_COLUMNS = (
    "owner_id",
    "status",
    "title",
    "slug",
    "description",
    "type",
    "transaction_type",
    "property_style",
    "property_usage",
    "is_furnished",
    "finishing_quality",
    "sun_light_level",
    "year_built",
    "price",
    "is_negotiable",
    "property_rent_contract_months",
    "property_rent_deposit_months",
    "full_address",
    "compact_address",
    "google_address_id",
    "latitude",
    "longitude",
    "floor_number",
    "total_floor",
    "total_water_closets",
    "total_bathrooms",
    "total_bedrooms",
    "total_salons",
    "total_kitchens",
    "area_size",
    "building_size",
    "cover_filename",
    "cover_file_url",
    "cover_content_type",
    "gallery_images",
    "youtube_video_url",
    "matter_port_url",
    "floor_plan_url",
    "visit_days",
)

_CASTS = {
    "owner_id": "::uuid",
    "google_address_id": "::uuid",
    "gallery_images": "::json",
}


def _insert_property_sql() -> str:
    columns = ", ".join(PROPERTY_COLUMNS)
    placeholders = ", ".join(f"${i}{_CASTS.get(name, '')}" for i, name in enumerate(PROPERTY_COLUMNS, start=1))
    return f"INSERT INTO properties ({columns}) VALUES ({placeholders}) RETURNING id"


INSERT_PROPERTY_SQL = _insert_property_sql()


class PropertyRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def insert(self, record: dict[str, Any]) -> str:
        """
        Insert one property row and return its id.

        `record` is keyed by column name; missing columns are stored as NULL.
        """
        values = dict(record)
        values["gallery_images"] = _json_arg(values.get("gallery_images"))
        args = [values.get(name) for name in PROPERTY_COLUMNS]

        row = await self._db.fetch_one(INSERT_PROPERTY_SQL, *args)
        if row is None or "id" not in row:
            raise RuntimeError("Failed to insert property.")
        return str(row["id"])
