"""
Moves staged uploads from the temp bucket to the permanent properties bucket.

Migration is copy-then-delete with no rollback:
- copy fails: nothing changed, the error propagates
- delete fails: the permanent copy stays (duplicate blob), the error propagates
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Callable

from core.storage import BlobStorage, StorageError

DEFAULT_CONTENT_TYPE = "image/jpeg"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigratedMedia:
    filename: str
    url: str
    content_type: str

    def as_gallery_entry(self) -> dict[str, str]:
        return {"filename": self.filename, "url": self.url, "contentType": self.content_type}


def _extension_for(content_type: str) -> str:
    return "png" if content_type == "image/png" else "jpg"


def _object_token(temp_id: str) -> str:
    stem = temp_id.rsplit(".", 1)[0]
    return re.sub(r"[^a-z0-9]", "", stem.lower())[:12] or "media"


def epoch_millis() -> int:
    return int(time.time() * 1000)


class MediaMigrator:
    def __init__(self, storage: BlobStorage, *, clock: Callable[[], int] = epoch_millis) -> None:
        self._storage = storage
        self._clock = clock

    def filename_for(self, role: str, content_type: str, temp_id: str) -> str:
        """
        `property-<epoch-ms>-<temp-token>-<role>.<ext>`, unique per source object
        even within one millisecond.
        """
        token = _object_token(temp_id)
        return f"property-{self._clock()}-{token}-{role}.{_extension_for(content_type)}"

    async def content_type_of(self, temp_id: str) -> str:
        try:
            content_type = await self._storage.content_type(self._storage.temp_bucket, temp_id)
        except StorageError:
            logger.warning("content_type_unreadable temp_id=%s fallback=%s", temp_id, DEFAULT_CONTENT_TYPE)
            return DEFAULT_CONTENT_TYPE
        return content_type or DEFAULT_CONTENT_TYPE

    async def migrate(self, temp_id: str, *, role: str) -> MigratedMedia:
        content_type = await self.content_type_of(temp_id)
        filename = self.filename_for(role, content_type, temp_id)

        try:
            url = await self._storage.copy(
                source_bucket=self._storage.temp_bucket,
                source_key=temp_id,
                dest_bucket=self._storage.properties_bucket,
                dest_key=filename,
            )
        except StorageError as exc:
            raise StorageError(f"Failed to move file from temp: {exc}") from exc

        try:
            await self._storage.delete(self._storage.temp_bucket, temp_id)
        except StorageError as exc:
            logger.error(
                "temp_delete_failed temp_id=%s kept=%s/%s",
                temp_id,
                self._storage.properties_bucket,
                filename,
            )
            raise StorageError(f"Failed to move file from temp: {exc}") from exc

        return MigratedMedia(filename=filename, url=url, content_type=content_type)
