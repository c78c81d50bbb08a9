"""Storage limits and defaults shared by both tiers.

The fast tier (Redis, configured to mirror a managed key/value state service)
enforces:
- keys matching ``^[a-zA-Z0-9-_.]{1,1024}$``
- values of at most 1 MB
- a TTL of at most one year
"""

from enum import Enum


# =============================================================================
# Fast Tier Limits
# =============================================================================

# Default TTL for the fast tier: 1 year in seconds (maximum allowed)
DEFAULT_ONE_YEAR_TTL_SECONDS: int = 31536000  # 365 * 24 * 60 * 60

# Maximum length (in characters) of an encoded key
MAX_KEY_SIZE: int = 1024

# Maximum value size (in bytes) the fast tier accepts
MAX_FAST_TIER_VALUE_SIZE: int = 1024 * 1024  # 1MB


# =============================================================================
# Durable Tier Conventions
# =============================================================================

BLOB_PATH_SUFFIX = ".json"

# Identifier field added to documents in the durable collection
DOCUMENT_ID_FIELD = "_id"


class StorageTier(str, Enum):
    """Tier names used in log events."""
    FAST = "fast"
    BLOB = "blob"
    DOCUMENT = "document"
