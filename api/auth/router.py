"""
Caller profile endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from . import dependencies, service
from .repository import AuthRepository

router = APIRouter()


@router.get("/me")
async def get_me(
    user_id: str = Depends(dependencies.get_current_user_id),
    repository: AuthRepository = Depends(dependencies.get_auth_repository),
) -> dict:
    profile = await service.me(repository, user_id)
    return profile.model_dump(by_alias=True)
