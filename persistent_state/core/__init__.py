"""Core module - Configuration, logging, store adapters, and shared constants.

Exports:
    - Settings, get_settings: Pydantic Settings configuration
    - configure_logging, get_logger: Structured logging (structlog)
    - Storage limits: MAX_KEY_SIZE, MAX_FAST_TIER_VALUE_SIZE, default TTL
    - Exception classes: StorageError, StorageConfigError, etc.
"""

from persistent_state.core.config import Settings, get_settings
from persistent_state.core.constants import (
    BLOB_PATH_SUFFIX,
    DEFAULT_ONE_YEAR_TTL_SECONDS,
    DOCUMENT_ID_FIELD,
    MAX_FAST_TIER_VALUE_SIZE,
    MAX_KEY_SIZE,
    StorageTier,
)
from persistent_state.core.exceptions import (
    BlobNotFoundError,
    KeyTooLongError,
    StorageConfigError,
    StorageError,
)
from persistent_state.core.logging import configure_logging, get_logger


__all__ = [
    "BLOB_PATH_SUFFIX",
    "DEFAULT_ONE_YEAR_TTL_SECONDS",
    "DOCUMENT_ID_FIELD",
    "MAX_FAST_TIER_VALUE_SIZE",
    "MAX_KEY_SIZE",
    # Exceptions
    "BlobNotFoundError",
    "KeyTooLongError",
    # Configuration
    "Settings",
    "StorageConfigError",
    "StorageError",
    "StorageTier",
    # Logging
    "configure_logging",
    "get_logger",
    "get_settings",
]
