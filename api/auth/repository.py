"""
Auth persistence helpers.
"""

from __future__ import annotations

from core.db import Database


class AuthRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def get_api_key(self, api_key: str) -> dict | None:
        return await self._db.fetch_one(
            """
            SELECT id, api_key, user_id, created_at
            FROM plugin_api_keys
            WHERE api_key = $1
            """,
            api_key,
        )

    async def get_user_by_id(self, user_id: str) -> dict | None:
        return await self._db.fetch_one(
            """
            SELECT id, contact_email, first_name, last_name, role, profile_picture_url
            FROM users
            WHERE id = $1::uuid
            """,
            user_id,
        )
