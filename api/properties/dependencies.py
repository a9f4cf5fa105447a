"""
Wires the ingestion pipeline from the app-owned database and blob storage.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database, get_database
from core.storage import BlobStorage, get_storage

from .addresses import AddressResolver
from .media import MediaMigrator
from .repository import AddressRepository, PropertyRepository
from .service import BulkIngestor


def get_bulk_ingestor(
    database: Database = Depends(get_database),
    storage: BlobStorage = Depends(get_storage),
) -> BulkIngestor:
    return BulkIngestor(
        addresses=AddressResolver(AddressRepository(database)),
        media=MediaMigrator(storage),
        properties=PropertyRepository(database),
    )
