"""HybridStorageClient - fast tier cache in front of a durable tier.

The fast tier (Redis) expires every entry after its TTL and cannot hold
values larger than 1 MB. The durable tier (blob storage or a document
collection) has neither restriction. Writing durably and caching in the
fast tier gives fast reads without losing data to expiry.

Write flow: durable tier first, then fast tier if the value fits (1 MB).
Read flow: fast tier, then durable tier fallback, then self-heal (restore
the value to the fast tier if it fits).

```
┌────────────────────────────────────────────────────────────┐
│  Fast tier (TTL, <= 1 MB)  <──cache──>  Durable tier       │
└────────────────────────────────────────────────────────────┘
```

A fast-tier miss can mean "never written" or "expired"; both fall through
to the durable tier.
"""

import asyncio
from dataclasses import dataclass
from typing import Generic, TypeVar

from persistent_state.core.clients.fast_tier import FastTierClient
from persistent_state.core.constants import (
    DEFAULT_ONE_YEAR_TTL_SECONDS,
    MAX_FAST_TIER_VALUE_SIZE,
    StorageTier,
)
from persistent_state.core.exceptions import StorageConfigError
from persistent_state.core.logging import Logger, get_logger
from persistent_state.storage.accessors import LazyHandle
from persistent_state.storage.codecs import Codec, byte_size
from persistent_state.storage.durable import DurableBackend
from persistent_state.storage.keys import encode_key


logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, kw_only=True)
class StorageClientConfig:
    """Configuration shared by every hybrid storage client.

    Attributes:
        key: Key identifying the value in the fast tier
        ttl: Fast tier TTL in seconds. Default: 31536000 (1 year, the maximum)
    """

    key: str
    ttl: int = DEFAULT_ONE_YEAR_TTL_SECONDS

    def __post_init__(self) -> None:
        if isinstance(self.ttl, bool) or not isinstance(self.ttl, int):
            raise StorageConfigError(
                "ttl must be an integer number of seconds",
                field="ttl",
                value=self.ttl,
                key=self.key,
            )
        if not 1 <= self.ttl <= DEFAULT_ONE_YEAR_TTL_SECONDS:
            raise StorageConfigError(
                f"ttl must be between 1 and {DEFAULT_ONE_YEAR_TTL_SECONDS} seconds",
                field="ttl",
                value=self.ttl,
                key=self.key,
            )


def _as_text(raw: str | bytes) -> str:
    return raw.decode("utf-8") if isinstance(raw, bytes) else raw


class HybridStorageClient(Generic[T]):
    """Two-tier storage client managing exactly one value.

    Clients are lightweight: they hold the configuration, the pre-computed
    encoded key and references to the shared store handles. Concurrent
    calls on one client are safe to interleave; concurrent writers to the
    same key are last-write-wins on each tier independently.

    Every operation accepts an optional ``logger`` that replaces the module
    logger for that call.

    Raises:
        KeyTooLongError: At construction, if the encoded key is too long.
    """

    def __init__(
        self,
        config: StorageClientConfig,
        fast: LazyHandle[FastTierClient],
        durable: DurableBackend[T],
        codec: Codec[T],
    ) -> None:
        self._config = config
        self._fast = fast
        self._durable = durable
        self._codec = codec
        self._encoded_key = encode_key(config.key)

    @property
    def config(self) -> StorageClientConfig:
        """The configuration used to create this client."""
        return self._config

    @property
    def encoded_key(self) -> str:
        """Fast tier key derived from config.key."""
        return self._encoded_key

    def _log(self, operation: str, override: Logger | None) -> Logger:
        return (override or logger).bind(
            operation=operation,
            key=self._config.key,
            durable_tier=self._durable.tier.value,
        )

    @staticmethod
    def _fits_fast_tier(serialized: str) -> bool:
        return byte_size(serialized) <= MAX_FAST_TIER_VALUE_SIZE

    async def put(self, value: T, logger: Logger | None = None) -> None:
        """Store a value durably, then cache it in the fast tier.

        1. Always writes to the durable tier first (no TTL).
        2. Values exceeding 1 MB are stored in the durable tier only.
        3. Otherwise the value is also written to the fast tier with the
           configured TTL.

        If the fast tier write fails the error propagates even though the
        durable write already succeeded.

        Args:
            value: Value to store
            logger: Optional logger override for this call
        """
        log = self._log("put", logger)
        try:
            # Cache exactly what a durable read would return
            value = self._durable.normalize(value)
            serialized = self._codec.encode(value)

            await self._durable.write(value)
            log.debug(
                "Data saved to durable tier",
                location=self._durable.location,
            )

            size = byte_size(serialized)
            if size > MAX_FAST_TIER_VALUE_SIZE:
                log.warning(
                    "Value exceeds fast tier size limit, storing in durable tier only",
                    size_bytes=size,
                    limit_bytes=MAX_FAST_TIER_VALUE_SIZE,
                )
                return

            fast = await self._fast.get()
            await fast.set(self._encoded_key, serialized, ex=self._config.ttl)
            log.debug("Data saved to fast tier", ttl=self._config.ttl)
        except Exception:
            log.error("Failed to put key", exc_info=True)
            raise

    async def get(self, logger: Logger | None = None) -> T | None:
        """Retrieve the value using fast-tier-first, durable-fallback reads.

        On a fast tier miss the durable value is written back into the fast
        tier when it fits (self-healing), so the next read is a cache hit.

        Args:
            logger: Optional logger override for this call

        Returns:
            The stored value, or None if neither tier has it
        """
        log = self._log("get", logger)
        try:
            fast = await self._fast.get()
            cached = await fast.get(self._encoded_key)
            if cached is not None:
                log.debug("Data retrieved from fast tier", tier=StorageTier.FAST.value)
                return self._codec.decode(_as_text(cached))

            log.debug("Fast tier miss - trying durable tier fallback")
            value = await self._durable.read()
            if value is None:
                log.debug("Data not found in fast tier or durable tier")
                return None

            serialized = self._codec.encode(value)
            if self._fits_fast_tier(serialized):
                await fast.set(self._encoded_key, serialized, ex=self._config.ttl)
                log.debug("Data restored from durable tier to fast tier (self-healing)")
            else:
                log.debug(
                    "Value exceeds fast tier size limit, serving from durable tier only",
                    size_bytes=byte_size(serialized),
                )
            return value
        except Exception:
            log.error("Failed to get key", exc_info=True)
            raise

    async def exists(self, logger: Logger | None = None) -> bool:
        """Check if a value exists.

        Delegates to get(), so a durable-only value is also restored to the
        fast tier.
        """
        return await self.get(logger) is not None

    async def delete(self, logger: Logger | None = None) -> None:
        """Delete the value from both tiers.

        Both deletions are attempted even if one fails; the first failure is
        re-raised afterwards. Deleting a missing value is not an error.
        """
        log = self._log("delete", logger)

        async def _delete_fast() -> None:
            fast = await self._fast.get()
            await fast.delete(self._encoded_key)

        results = await asyncio.gather(
            _delete_fast(),
            self._durable.delete(),
            return_exceptions=True,
        )
        errors = [result for result in results if isinstance(result, BaseException)]
        if errors:
            log.error("Failed to delete key", exc_info=errors[0])
            raise errors[0]

        log.debug("Data deleted from fast tier and durable tier")

    def __repr__(self) -> str:
        return (
            f"HybridStorageClient(key={self._config.key!r}, "
            f"durable={self._durable.tier.value}, ttl={self._config.ttl}s)"
        )
