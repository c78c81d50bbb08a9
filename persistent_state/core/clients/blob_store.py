"""S3-compatible blob store for the durable tier.

Blobs have no TTL and no practical size limit. boto3 is synchronous, so
every call runs in the default executor to keep the event loop free.
"""

import asyncio
from typing import Any, Protocol, runtime_checkable

import boto3
from botocore.exceptions import ClientError

from persistent_state.core.config import Settings, get_settings
from persistent_state.core.exceptions import BlobNotFoundError, StorageConfigError
from persistent_state.core.logging import get_logger


logger = get_logger(__name__)

# Error codes S3 and S3-compatible services use for a missing object
NOT_FOUND_ERROR_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


@runtime_checkable
class BlobStore(Protocol):
    """Protocol for the durable blob tier."""

    async def read(self, path: str) -> bytes:
        """Read a blob; raises BlobNotFoundError when it does not exist."""
        ...

    async def write(self, path: str, value: str) -> None:
        """Write (overwrite) a blob."""
        ...

    async def delete(self, path: str) -> None:
        """Delete a blob; deleting a missing blob is not an error."""
        ...


def is_not_found_error(error: ClientError) -> bool:
    """Check whether a botocore ClientError means the object is missing."""
    code = str(error.response.get("Error", {}).get("Code", ""))
    return code in NOT_FOUND_ERROR_CODES


class S3BlobStore:
    """Blob store backed by a single S3 (or R2) bucket.

    Attributes:
        bucket: Bucket name
        key_prefix: Prefix prepended to every blob path
    """

    def __init__(self, s3_client: Any, bucket: str, key_prefix: str = "") -> None:
        """Initialize blob store.

        Args:
            s3_client: boto3 S3 client
            bucket: Bucket name
            key_prefix: Optional prefix for object keys (e.g. "state/")
        """
        self._s3 = s3_client
        self.bucket = bucket
        self.key_prefix = key_prefix

    def _object_key(self, path: str) -> str:
        return f"{self.key_prefix}{path}"

    async def read(self, path: str) -> bytes:
        """Read an object body.

        Args:
            path: Blob path (without prefix)

        Returns:
            Raw object bytes

        Raises:
            BlobNotFoundError: If the object does not exist
        """
        loop = asyncio.get_running_loop()
        object_key = self._object_key(path)

        def _read() -> bytes:
            response = self._s3.get_object(Bucket=self.bucket, Key=object_key)
            return response["Body"].read()

        try:
            return await loop.run_in_executor(None, _read)
        except ClientError as e:
            if is_not_found_error(e):
                raise BlobNotFoundError(path, bucket=self.bucket) from e
            raise

    async def write(self, path: str, value: str) -> None:
        """Write an object, replacing any previous content."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            lambda: self._s3.put_object(
                Bucket=self.bucket,
                Key=self._object_key(path),
                Body=value.encode("utf-8"),
                ContentType="application/json",
            ),
        )

    async def delete(self, path: str) -> None:
        """Delete an object. S3 treats a missing key as success."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            lambda: self._s3.delete_object(
                Bucket=self.bucket,
                Key=self._object_key(path),
            ),
        )

    def __repr__(self) -> str:
        return f"S3BlobStore(bucket={self.bucket!r}, key_prefix={self.key_prefix!r})"


async def create_blob_store(settings: Settings | None = None) -> S3BlobStore:
    """Create the durable blob store from settings.

    Credentials fall back to the standard AWS credential chain when
    s3_access_key_id / s3_secret_access_key are not set.

    Args:
        settings: Application settings. Uses get_settings() if not provided.

    Returns:
        S3BlobStore for the configured bucket

    Raises:
        StorageConfigError: If no bucket is configured
    """
    settings = settings or get_settings()
    if not settings.s3_bucket:
        raise StorageConfigError(
            "PERSISTENT_STATE_S3_BUCKET must be set to use the blob tier",
            field="s3_bucket",
        )

    client_kwargs: dict[str, Any] = {}
    if settings.s3_endpoint_url:
        client_kwargs["endpoint_url"] = settings.s3_endpoint_url
    if settings.s3_region:
        client_kwargs["region_name"] = settings.s3_region
    if settings.s3_access_key_id and settings.s3_secret_access_key:
        client_kwargs["aws_access_key_id"] = settings.s3_access_key_id.get_secret_value()
        client_kwargs["aws_secret_access_key"] = settings.s3_secret_access_key.get_secret_value()

    loop = asyncio.get_running_loop()
    s3_client = await loop.run_in_executor(
        None, lambda: boto3.client("s3", **client_kwargs)
    )

    logger.info(
        "Blob store initialized",
        bucket=settings.s3_bucket,
        endpoint=settings.s3_endpoint_url,
    )
    return S3BlobStore(s3_client, settings.s3_bucket, settings.s3_key_prefix)
