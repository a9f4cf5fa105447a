"""
Bulk property ingestion.

Items are processed one after another. Each item runs
validate -> resolve address -> migrate cover -> migrate gallery -> insert
and ends in an `ItemOutcome`; a failed item is recorded against its index and
the batch moves on.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, Sequence

from .addresses import AddressResolver, coordinate_text
from .media import MediaMigrator, MigratedMedia, epoch_millis
from .schemas import PublishStatus, ValidatedProperty
from .validation import validate_submission

logger = logging.getLogger(__name__)

MAX_SLUG_BASE_CHARS = 80


class PropertyStore(Protocol):
    async def insert(self, record: dict[str, Any]) -> str: ...


@dataclass(frozen=True)
class ItemOutcome:
    property_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def succeeded(cls, property_id: str) -> "ItemOutcome":
        return cls(property_id=property_id)

    @classmethod
    def failed(cls, error: str) -> "ItemOutcome":
        return cls(error=error or "Unknown error")


@dataclass(frozen=True)
class ItemError:
    index: int
    error: str

    def as_dict(self) -> dict[str, Any]:
        return {"index": self.index, "error": self.error}


@dataclass
class IngestionResult:
    success: int = 0
    failed: int = 0
    errors: list[ItemError] = field(default_factory=list)

    def record(self, index: int, outcome: ItemOutcome) -> None:
        if outcome.ok:
            self.success += 1
            return
        self.failed += 1
        self.errors.append(ItemError(index=index, error=outcome.error or "Unknown error"))

    def as_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "failed": self.failed,
            "errors": [error.as_dict() for error in self.errors],
        }


def slugify(title: str) -> str:
    ascii_title = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_title.lower()).strip("-")
    return slug[:MAX_SLUG_BASE_CHARS].rstrip("-")


def build_slug(title: str | None, stamp: int) -> str | None:
    """
    `<slugified-title>-<epoch-ms>`, or None for untitled listings.
    """
    if not title:
        return None
    base = slugify(title)
    return f"{base}-{stamp}" if base else str(stamp)


def build_record(
    listing: ValidatedProperty,
    *,
    owner_id: str,
    address_id: str,
    slug: str | None,
    cover: MigratedMedia,
    gallery: list[MigratedMedia],
) -> dict[str, Any]:
    """
    Flatten a validated listing into `properties` column values.
    """
    record = listing.model_dump(mode="json", exclude_none=True)
    full_address = listing.full_address or (
        f"{coordinate_text(listing.latitude)}, {coordinate_text(listing.longitude)}"
    )
    record.update(
        owner_id=owner_id,
        status=PublishStatus.UNDER_REVIEW.value,
        slug=slug,
        full_address=full_address,
        compact_address=listing.compact_address or full_address,
        google_address_id=address_id,
        cover_filename=cover.filename,
        cover_file_url=cover.url,
        cover_content_type=cover.content_type,
        gallery_images=[item.as_gallery_entry() for item in gallery] if gallery else None,
    )
    return record


class BulkIngestor:
    def __init__(
        self,
        *,
        addresses: AddressResolver,
        media: MediaMigrator,
        properties: PropertyStore,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        self._addresses = addresses
        self._media = media
        self._properties = properties
        self._clock = clock

    async def ingest(self, submissions: Sequence[Any], *, owner_id: str) -> IngestionResult:
        result = IngestionResult()
        for index, raw in enumerate(submissions):
            outcome = await self.ingest_one(raw, owner_id=owner_id, index=index)
            result.record(index, outcome)

        logger.info(
            "bulk_ingest_complete owner_id=%s total=%s success=%s failed=%s",
            owner_id,
            len(submissions),
            result.success,
            result.failed,
        )
        return result

    async def ingest_one(self, raw: Any, *, owner_id: str, index: int = 0) -> ItemOutcome:
        validation = validate_submission(raw)
        if not validation.ok or validation.listing is None:
            logger.info("bulk_item_invalid index=%s errors=%s", index, len(validation.errors))
            return ItemOutcome.failed(validation.summary())

        listing = validation.listing
        migrated: list[MigratedMedia] = []
        try:
            address_id = await self._addresses.resolve(
                listing.latitude,
                listing.longitude,
                listing.full_address,
            )

            cover = await self._media.migrate(listing.cover_image_id, role="cover")
            migrated.append(cover)

            gallery: list[MigratedMedia] = []
            for position, temp_id in enumerate(listing.gallery_image_ids or [], start=1):
                item = await self._media.migrate(temp_id, role=f"gallery-{position}")
                migrated.append(item)
                gallery.append(item)

            record = build_record(
                listing,
                owner_id=owner_id,
                address_id=address_id,
                slug=build_slug(listing.title, self._clock()),
                cover=cover,
                gallery=gallery,
            )
            property_id = await self._properties.insert(record)
        except Exception as exc:
            logger.exception("bulk_item_failed index=%s owner_id=%s", index, owner_id)
            if migrated:
                # No rollback: media already moved stays in permanent storage.
                logger.warning(
                    "bulk_item_orphaned_media index=%s files=%s",
                    index,
                    ",".join(item.filename for item in migrated),
                )
            return ItemOutcome.failed(str(exc))

        logger.info("bulk_item_created index=%s property_id=%s", index, property_id)
        return ItemOutcome.succeeded(property_id)
