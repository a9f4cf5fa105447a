"""Tests for the boto3-backed blob storage wrapper and settings helpers."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from core import settings
from core.storage import BlobStorage, StorageError


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def blob_storage(s3_client) -> BlobStorage:
    return BlobStorage(
        s3_client,
        temp_bucket="temp",
        properties_bucket="properties-images",
        public_base_url="https://cdn.example.com/",
    )


class TestBlobStorage:
    def test_object_url_uses_public_base(self, blob_storage):
        assert blob_storage.object_url("temp", "a.png") == "https://cdn.example.com/temp/a.png"

    def test_object_url_without_base(self, s3_client):
        storage = BlobStorage(s3_client, temp_bucket="temp", properties_bucket="p")

        assert storage.object_url("temp", "a.png") == "s3://temp/a.png"

    @pytest.mark.asyncio
    async def test_upload_sets_content_type(self, blob_storage, s3_client):
        url = await blob_storage.upload("temp", "a.png", b"data", content_type="image/png")

        s3_client.put_object.assert_called_once_with(
            Bucket="temp", Key="a.png", Body=b"data", ContentType="image/png"
        )
        assert url == "https://cdn.example.com/temp/a.png"

    @pytest.mark.asyncio
    async def test_copy_uses_copy_source(self, blob_storage, s3_client):
        url = await blob_storage.copy(
            source_bucket="temp",
            source_key="a.png",
            dest_bucket="properties-images",
            dest_key="property-1-cover.png",
        )

        s3_client.copy_object.assert_called_once_with(
            Bucket="properties-images",
            Key="property-1-cover.png",
            CopySource={"Bucket": "temp", "Key": "a.png"},
        )
        assert url.endswith("/properties-images/property-1-cover.png")

    @pytest.mark.asyncio
    async def test_content_type_from_head(self, blob_storage, s3_client):
        s3_client.head_object.return_value = {"ContentType": "image/png"}

        assert await blob_storage.content_type("temp", "a.png") == "image/png"

    @pytest.mark.asyncio
    async def test_client_errors_become_storage_errors(self, blob_storage, s3_client):
        s3_client.delete_object.side_effect = _client_error("AccessDenied", "DeleteObject")

        with pytest.raises(StorageError, match="AccessDenied"):
            await blob_storage.delete("temp", "a.png")


class TestSettings:
    def test_max_upload_defaults_to_five_mib(self, monkeypatch):
        monkeypatch.delenv("MAX_UPLOAD_BYTES", raising=False)

        assert settings.max_upload_bytes() == 5 * 1024 * 1024

    @pytest.mark.parametrize("raw", ["abc", "-5", "0"])
    def test_invalid_max_upload_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", raw)

        assert settings.max_upload_bytes() == settings.DEFAULT_MAX_UPLOAD_BYTES

    def test_bucket_defaults(self, monkeypatch):
        monkeypatch.delenv("STORAGE_TEMP_BUCKET", raising=False)
        monkeypatch.delenv("STORAGE_PROPERTIES_BUCKET", raising=False)

        assert settings.temp_bucket() == "temp"
        assert settings.properties_bucket() == "properties-images"

    def test_cors_origins_split(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example,")

        assert settings.cors_allow_origins() == ["https://a.example", "https://b.example"]
