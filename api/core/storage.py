"""
Blob storage (S3-compatible object storage) via boto3.

Two buckets are involved:
- temp: staging area for uploads that are not attached to a property yet
- properties: permanent home of listing media

boto3 is blocking, so every call runs in Starlette's thread pool.
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Request
from fastapi.concurrency import run_in_threadpool

from . import settings

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    pass


class BlobStorage:
    def __init__(
        self,
        client: Any,
        *,
        temp_bucket: str,
        properties_bucket: str,
        public_base_url: str | None = None,
    ) -> None:
        self._client = client
        self.temp_bucket = temp_bucket
        self.properties_bucket = properties_bucket
        self._public_base_url = (public_base_url or "").rstrip("/")

    def object_url(self, bucket: str, key: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{bucket}/{key}"
        return f"s3://{bucket}/{key}"

    async def upload(self, bucket: str, key: str, data: bytes, *, content_type: str) -> str:
        try:
            await run_in_threadpool(
                self._client.put_object,
                Bucket=bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(str(exc)) from exc
        logger.info("blob_uploaded bucket=%s key=%s bytes=%s", bucket, key, len(data))
        return self.object_url(bucket, key)

    async def content_type(self, bucket: str, key: str) -> str | None:
        try:
            head = await run_in_threadpool(self._client.head_object, Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(str(exc)) from exc
        return head.get("ContentType") or None

    async def copy(self, *, source_bucket: str, source_key: str, dest_bucket: str, dest_key: str) -> str:
        try:
            await run_in_threadpool(
                self._client.copy_object,
                Bucket=dest_bucket,
                Key=dest_key,
                CopySource={"Bucket": source_bucket, "Key": source_key},
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(str(exc)) from exc
        return self.object_url(dest_bucket, dest_key)

    async def delete(self, bucket: str, key: str) -> None:
        try:
            await run_in_threadpool(self._client.delete_object, Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(str(exc)) from exc
        logger.info("blob_deleted bucket=%s key=%s", bucket, key)


def create_storage_from_env() -> BlobStorage:
    client = boto3.client(
        "s3",
        endpoint_url=settings.storage_endpoint_url(),
        aws_access_key_id=settings.env_str("STORAGE_ACCESS_KEY_ID") or None,
        aws_secret_access_key=settings.env_str("STORAGE_SECRET_ACCESS_KEY") or None,
        region_name=settings.env_str("STORAGE_REGION") or None,
        config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
    )
    return BlobStorage(
        client,
        temp_bucket=settings.temp_bucket(),
        properties_bucket=settings.properties_bucket(),
        public_base_url=settings.storage_public_base_url(),
    )


def get_storage(request: Request) -> BlobStorage:
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise RuntimeError("Blob storage is not initialized. Create it in the app lifespan.")
    return storage
