"""
Temp upload "service layer".

This file contains logic that is independent of FastAPI's routing layer:
- Validate uploads (content type, size)
- Read file bytes with a size limit
- Store the file in the temp bucket under a generated id

Nothing is written to storage until every check has passed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from fastapi import HTTPException, UploadFile

from core.storage import BlobStorage, StorageError

ALLOWED_MIME_TYPES = ("image/jpeg", "image/jpg", "image/png")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TempUploadResult:
    file_id: str
    file_name: str
    file_size: int
    mime_type: str
    temp_url: str

    def as_dict(self) -> dict:
        return {
            "success": True,
            "fileId": self.file_id,
            "fileName": self.file_name,
            "fileSize": self.file_size,
            "mimeType": self.mime_type,
            "tempUrl": self.temp_url,
            "message": "File uploaded to temporary storage successfully",
        }


def validate_upload(file: UploadFile) -> str:
    """
    Return the upload's content type if it is an accepted image type.
    """
    content_type = (file.content_type or "").lower()
    if content_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type. Allowed types: {', '.join(ALLOWED_MIME_TYPES)}",
        )
    return content_type


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.
    """
    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise HTTPException(
                status_code=400,
                detail=f"File size exceeds maximum allowed size of {max_bytes // (1024 * 1024)}MB",
            )

    return bytes(buf)


def temp_file_id(filename: str, content_type: str) -> str:
    """
    `<uuid4>.<ext>`, keeping the original extension when there is one.
    """
    ext = Path(filename).suffix.lstrip(".").lower()
    if not ext:
        ext = "png" if content_type == "image/png" else "jpg"
    return f"{uuid4()}.{ext}"


async def upload_temp_file(file: UploadFile | None, storage: BlobStorage, *, max_bytes: int) -> TempUploadResult:
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    content_type = validate_upload(file)
    data = await read_upload_bytes(file, max_bytes=max_bytes)

    file_name = file.filename or ""
    file_id = temp_file_id(file_name, content_type)
    try:
        temp_url = await storage.upload(storage.temp_bucket, file_id, data, content_type=content_type)
    except StorageError as exc:
        logger.exception("temp_upload_failed file_name=%s", file_name)
        raise HTTPException(status_code=400, detail=f"Failed to upload temp file: {exc}") from exc

    return TempUploadResult(
        file_id=file_id,
        file_name=file_name,
        file_size=len(data),
        mime_type=content_type,
        temp_url=temp_url,
    )
