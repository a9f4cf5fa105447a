"""
Auth business logic.

Plugins authenticate with long-lived API keys. A key maps to exactly one user;
there is no session, refresh or expiry model.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from . import schemas
from .repository import AuthRepository


def _to_profile_response(user_row: dict) -> schemas.ProfileResponse:
    return schemas.ProfileResponse(
        id=str(user_row["id"]),
        contact_email=str(user_row["contact_email"]),
        first_name=user_row.get("first_name"),
        last_name=user_row.get("last_name"),
        role=str(user_row["role"]),
        profile_picture_url=user_row.get("profile_picture_url"),
    )


async def resolve_api_key(repository: AuthRepository, api_key: str) -> str:
    """
    Return the owning user id for an API key, or reject with 401.
    """
    row = await repository.get_api_key(api_key)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )
    return str(row["user_id"])


async def me(repository: AuthRepository, user_id: str) -> schemas.ProfileResponse:
    user_row = await repository.get_user_by_id(user_id)
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return _to_profile_response(user_row)
