"""Pytest configuration, in-memory collaborators and fixtures."""

from __future__ import annotations

import copy
import itertools
from typing import Any

import pytest

from core.storage import StorageError
from properties.addresses import AddressResolver
from properties.media import MediaMigrator
from properties.service import BulkIngestor

OWNER_ID = "6f1c2d3e-0000-4000-8000-000000000001"
API_KEY = "plugin-key-123"


class FakeBlobStorage:
    """Dict-backed stand-in for `core.storage.BlobStorage`."""

    def __init__(self) -> None:
        self.temp_bucket = "temp"
        self.properties_bucket = "properties-images"
        self.objects: dict[tuple[str, str], tuple[bytes, str]] = {}
        self.writes: list[tuple[str, str]] = []
        self.fail_upload = False
        self.fail_copy: set[str] = set()
        self.fail_delete: set[str] = set()
        self.unreadable: set[str] = set()

    def put_temp(self, key: str, content_type: str = "image/jpeg", data: bytes = b"img") -> None:
        self.objects[(self.temp_bucket, key)] = (data, content_type)

    def object_url(self, bucket: str, key: str) -> str:
        return f"https://blobs.test/{bucket}/{key}"

    async def upload(self, bucket: str, key: str, data: bytes, *, content_type: str) -> str:
        if self.fail_upload:
            raise StorageError("upload refused")
        self.objects[(bucket, key)] = (data, content_type)
        self.writes.append((bucket, key))
        return self.object_url(bucket, key)

    async def content_type(self, bucket: str, key: str) -> str | None:
        if key in self.unreadable or (bucket, key) not in self.objects:
            raise StorageError(f"NoSuchKey: {bucket}/{key}")
        return self.objects[(bucket, key)][1]

    async def copy(self, *, source_bucket: str, source_key: str, dest_bucket: str, dest_key: str) -> str:
        if source_key in self.fail_copy or (source_bucket, source_key) not in self.objects:
            raise StorageError(f"copy failed for {source_key}")
        self.objects[(dest_bucket, dest_key)] = self.objects[(source_bucket, source_key)]
        self.writes.append((dest_bucket, dest_key))
        return self.object_url(dest_bucket, dest_key)

    async def delete(self, bucket: str, key: str) -> None:
        if key in self.fail_delete:
            raise StorageError(f"delete failed for {key}")
        self.objects.pop((bucket, key), None)

    def keys(self, bucket: str) -> list[str]:
        return sorted(key for (b, key) in self.objects if b == bucket)


class FakeAddressStore:
    def __init__(self) -> None:
        self.rows: dict[tuple[str, str], dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self.fail = False

    async def find_by_coordinates(self, latitude: str, longitude: str) -> dict[str, Any] | None:
        if self.fail:
            raise RuntimeError("address lookup failed")
        return self.rows.get((latitude, longitude))

    async def create(self, *, latitude: str, longitude: str, geocoding: dict[str, Any]) -> str:
        address_id = f"addr-{next(self._ids)}"
        self.rows[(latitude, longitude)] = {"id": address_id, "geocoding": geocoding}
        return address_id


class FakePropertyStore:
    def __init__(self) -> None:
        self.inserted: list[dict[str, Any]] = []
        self._ids = itertools.count(1)
        self.fail_descriptions: set[str] = set()

    async def insert(self, record: dict[str, Any]) -> str:
        if record.get("description") in self.fail_descriptions:
            raise RuntimeError("insert failed")
        self.inserted.append(record)
        return f"prop-{next(self._ids)}"


class FakeAuthRepository:
    def __init__(self) -> None:
        self.api_keys = {API_KEY: {"id": "key-1", "api_key": API_KEY, "user_id": OWNER_ID}}
        self.users = {
            OWNER_ID: {
                "id": OWNER_ID,
                "contact_email": "agent@example.com",
                "first_name": "Sam",
                "last_name": "Idrissi",
                "role": "agent",
                "profile_picture_url": None,
            }
        }
        self.lookups = 0

    async def get_api_key(self, api_key: str) -> dict | None:
        self.lookups += 1
        return self.api_keys.get(api_key)

    async def get_user_by_id(self, user_id: str) -> dict | None:
        return self.users.get(user_id)


BASE_SUBMISSION: dict[str, Any] = {
    "title": "Bright apartment near the Corniche",
    "description": "Three bedroom apartment with sea view.",
    "type": "apartment",
    "transactionType": "for_sale",
    "propertyStyle": "modern",
    "propertyUsage": "residential",
    "isFurnished": False,
    "finishingQuality": "high",
    "sunLightLevel": "medium",
    "yearBuilt": 2015,
    "price": 1500000,
    "latitude": 33.5731,
    "longitude": -7.5898,
    "floorNumber": 3,
    "totalBedrooms": 3,
    "totalBathrooms": 2,
    "totalSalons": 1,
    "totalKitchens": 1,
    "buildingSize": 120,
    "coverImageId": "cover-1.jpg",
    "visitDays": ["monday", "saturday"],
}


@pytest.fixture
def make_submission():
    """Build a valid apartment submission, overriding or removing fields."""

    def _make(remove: tuple[str, ...] = (), **overrides: Any) -> dict[str, Any]:
        data = copy.deepcopy(BASE_SUBMISSION)
        for key in remove:
            data.pop(key, None)
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def storage() -> FakeBlobStorage:
    return FakeBlobStorage()


@pytest.fixture
def address_store() -> FakeAddressStore:
    return FakeAddressStore()


@pytest.fixture
def property_store() -> FakePropertyStore:
    return FakePropertyStore()


@pytest.fixture
def auth_repository() -> FakeAuthRepository:
    return FakeAuthRepository()


@pytest.fixture
def clock():
    ticks = itertools.count(1_700_000_000_000)
    return lambda: next(ticks)


@pytest.fixture
def ingestor(storage, address_store, property_store, clock) -> BulkIngestor:
    return BulkIngestor(
        addresses=AddressResolver(address_store),
        media=MediaMigrator(storage, clock=clock),
        properties=property_store,
        clock=clock,
    )
