"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from core.db import Database, get_database

from . import service
from .repository import AuthRepository

INVALID_HEADER_DETAIL = "Missing or invalid Authorization header"


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_HEADER_DETAIL,
        )

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_HEADER_DETAIL,
        )
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


def get_auth_repository(database: Database = Depends(get_database)) -> AuthRepository:
    return AuthRepository(database)


async def get_current_user_id(
    api_key: str = Depends(get_bearer_token),
    repository: AuthRepository = Depends(get_auth_repository),
) -> str:
    return await service.resolve_api_key(repository, api_key)
