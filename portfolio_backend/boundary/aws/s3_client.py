"""
S3 blob store for portfolio images.

Uploads, deletes and lists image objects in the media bucket. boto3 is
synchronous, so every call runs in a worker thread.

Dependencies: boto3, botocore
System role: BlobStore implementation backed by S3
"""

import asyncio
import logging
from uuid import uuid4

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from portfolio_backend.boundary.aws.blob_store import BlobObject
from portfolio_backend.configs.s3_storage import S3StorageSettings
from portfolio_backend.core.exceptions import StorageError, ValidationError
from portfolio_backend.models.upload import ImageUpload

logger = logging.getLogger(__name__)


class S3BlobStore:
    """
    S3-backed blob store.

    Objects are keyed {folder}/{uuid}{ext} and addressed by URL. Any boto3
    or botocore failure is raised as StorageError.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "ap-northeast-2",
        endpoint_url: str | None = None,
        public_base_url: str | None = None,
        s3_client=None,
    ) -> None:
        """
        Initialize S3 blob store.

        Args:
            bucket: S3 bucket name for image storage
            region: AWS region for S3 bucket
            endpoint_url: Custom endpoint (MinIO, LocalStack)
            public_base_url: Base URL objects are served from
            s3_client: Preconfigured boto3 S3 client (created if None)
        """
        if not bucket:
            raise ValueError("bucket is required")

        self._bucket = bucket
        self._region = region
        self._s3_client = s3_client or boto3.client(
            "s3", region_name=region, endpoint_url=endpoint_url
        )

        if public_base_url:
            self._base_url = public_base_url.rstrip("/")
        elif endpoint_url:
            self._base_url = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            self._base_url = f"https://{bucket}.s3.{region}.amazonaws.com"

    @classmethod
    def from_settings(cls, settings: S3StorageSettings) -> "S3BlobStore":
        """Build a store from S3 storage settings."""
        return cls(
            bucket=settings.bucket,
            region=settings.region,
            endpoint_url=settings.endpoint_url,
            public_base_url=settings.public_base_url,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def url_for(self, key: str) -> str:
        """Return the public URL of an object key."""
        return f"{self._base_url}/{key}"

    def key_from_url(self, url: str) -> str:
        """
        Return the object key behind a URL issued by this store.

        Raises:
            StorageError: If the URL does not point into this bucket
        """
        prefix = f"{self._base_url}/"
        if not url.startswith(prefix) or len(url) == len(prefix):
            raise StorageError(
                "URL does not belong to this bucket",
                operation="resolve",
                url=url,
                details={"bucket": self._bucket},
            )
        return url[len(prefix):]

    async def put(self, upload: ImageUpload, folder: str) -> str:
        """
        Upload an image and return its URL.

        Args:
            upload: Image payload, must be non-empty
            folder: Key prefix (e.g. "images")

        Returns:
            str: Public URL of the stored object

        Raises:
            ValidationError: If the upload is empty
            StorageError: If S3 rejects the upload
        """
        if upload.is_empty:
            raise ValidationError("Cannot store an empty file", field="upload")

        key = f"{folder.strip('/')}/{uuid4()}{upload.extension}"
        logger.debug(
            f"{__name__}:put - Uploading to S3 key={key}, size={upload.size} bytes"
        )

        try:
            await asyncio.to_thread(
                self._s3_client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=upload.data,
                ContentType=upload.content_type,
                Metadata={"original-filename": upload.filename},
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:put - {type(e).__name__}: {e}", extra={"s3_key": key})
            raise StorageError(
                f"Failed to upload {upload.filename}",
                operation="put",
                details={"s3_key": key, "error": str(e)},
            ) from e

        url = self.url_for(key)
        logger.info(f"{__name__}:put - Uploaded s3_key={key}")
        return url

    async def delete(self, url: str) -> None:
        """
        Delete the object behind a URL.

        Deleting a key that no longer exists succeeds (S3 semantics).

        Raises:
            StorageError: If the URL is foreign or S3 rejects the delete
        """
        key = self.key_from_url(url)
        try:
            await asyncio.to_thread(
                self._s3_client.delete_object,
                Bucket=self._bucket,
                Key=key,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:delete - {type(e).__name__}: {e}", extra={"s3_key": key})
            raise StorageError(
                "Failed to delete object",
                operation="delete",
                url=url,
                details={"error": str(e)},
            ) from e

        logger.info(f"{__name__}:delete - Deleted s3_key={key}")

    async def list_objects(self, folder: str) -> list[BlobObject]:
        """
        List every object under a folder.

        Raises:
            StorageError: If listing fails
        """
        try:
            return await asyncio.to_thread(self._list_objects_sync, folder)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:list_objects - {type(e).__name__}: {e}")
            raise StorageError(
                "Failed to list objects",
                operation="list",
                details={"folder": folder, "error": str(e)},
            ) from e

    def _list_objects_sync(self, folder: str) -> list[BlobObject]:
        paginator = self._s3_client.get_paginator("list_objects_v2")
        objects: list[BlobObject] = []
        for page in paginator.paginate(Bucket=self._bucket, Prefix=f"{folder.strip('/')}/"):
            for item in page.get("Contents", []):
                objects.append(
                    BlobObject(
                        url=self.url_for(item["Key"]),
                        last_modified=item["LastModified"],
                        size=item.get("Size", 0),
                    )
                )
        return objects
