"""Custom exceptions for the persistent-state storage layer.

All exceptions are namespaced under StorageError so callers can catch any
configuration problem with a single except clause. Failures raised by the
underlying stores (redis, botocore, pymongo) are never wrapped: they reach
the caller unchanged.

Pattern: Namespaced Custom Exceptions
"""

from typing import Any


class StorageError(Exception):
    """Base exception for all storage-layer errors."""

    def __init__(self, message: str, key: str | None = None) -> None:
        """Initialize storage error.

        Args:
            message: Error description
            key: Raw storage key the error relates to
        """
        self.key = key
        super().__init__(message)


class StorageConfigError(StorageError):
    """Raised when a storage client or backend is misconfigured.

    Configuration errors are raised before any I/O and are fatal to the
    client instance; the caller must reconfigure.
    """

    def __init__(
        self,
        message: str,
        field: str,
        value: Any | None = None,
        key: str | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error description
            field: The configuration field that failed validation
            value: The invalid value
            key: Raw storage key if applicable
        """
        self.field = field
        self.value = value
        super().__init__(message, key)


class KeyTooLongError(StorageConfigError):
    """Raised when an encoded key exceeds the fast tier key size."""

    def __init__(self, key: str, encoded_length: int, max_length: int) -> None:
        """Initialize key size error.

        Args:
            key: The raw key that was encoded
            encoded_length: Length of the encoded key
            max_length: Maximum permitted encoded length
        """
        self.encoded_length = encoded_length
        self.max_length = max_length
        super().__init__(
            f"Encoded key exceeds maximum size of {max_length} characters",
            field="key",
            value=key,
            key=key,
        )


class BlobNotFoundError(StorageError):
    """Raised by the blob store when an object does not exist.

    The storage client normalises this to a ``None`` result; it is not an
    error from the caller's point of view.
    """

    def __init__(self, path: str, bucket: str | None = None) -> None:
        """Initialize not-found error.

        Args:
            path: Blob path that was requested
            bucket: Bucket that was searched
        """
        self.path = path
        self.bucket = bucket
        location = f"{bucket}/{path}" if bucket else path
        super().__init__(f"Blob not found: {location}")
