"""Storage key encoding.

Raw keys are arbitrary strings; the fast tier only accepts keys matching
``^[a-zA-Z0-9-_.]{1,1024}$``. Unpadded base64url maps any string into that
alphabet reversibly, so the only remaining constraint is length.
"""

import base64

from persistent_state.core.constants import BLOB_PATH_SUFFIX, MAX_KEY_SIZE
from persistent_state.core.exceptions import KeyTooLongError, StorageConfigError


def encode_key(key: str) -> str:
    """Encode a raw key into a fast-tier-safe identifier.

    Args:
        key: The original key string

    Returns:
        The unpadded base64url-encoded key

    Raises:
        StorageConfigError: If the key is empty
        KeyTooLongError: If the encoded key exceeds MAX_KEY_SIZE characters

    Example:
        >>> encode_key("testKey")
        'dGVzdEtleQ'
    """
    if not key:
        raise StorageConfigError("key cannot be empty", field="key", value=key)

    encoded = base64.urlsafe_b64encode(key.encode("utf-8")).decode("ascii").rstrip("=")
    if len(encoded) > MAX_KEY_SIZE:
        raise KeyTooLongError(key, encoded_length=len(encoded), max_length=MAX_KEY_SIZE)
    return encoded


def decode_key(encoded: str) -> str:
    """Decode a key produced by encode_key().

    Example:
        >>> decode_key("dGVzdEtleQ")
        'testKey'
    """
    padding = "=" * (-len(encoded) % 4)
    return base64.urlsafe_b64decode(encoded + padding).decode("utf-8")


def blob_path(key: str) -> str:
    """Durable blob path for a raw key."""
    return f"{key}{BLOB_PATH_SUFFIX}"
