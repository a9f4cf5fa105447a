"""
FastAPI router for staging image uploads.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from auth import dependencies as auth_dependencies
from core import settings
from core.storage import BlobStorage, get_storage

from . import service

router = APIRouter()


@router.post("/file/temp")
async def upload_temp_file(
    file: UploadFile | None = File(default=None),
    _: str = Depends(auth_dependencies.get_current_user_id),
    storage: BlobStorage = Depends(get_storage),
) -> dict:
    """
    Stage an image in the temp bucket.

    The returned `fileId` is what plugins send later as `coverImageId` or in
    `galleryImageIds`.
    """
    result = await service.upload_temp_file(file, storage, max_bytes=settings.max_upload_bytes())
    return result.as_dict()
