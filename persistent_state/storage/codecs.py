"""Serialization strategies between client values and fast-tier strings.

The encoded form is also what the 1 MB fast-tier limit is measured against.
"""

import json
from typing import Any, Generic, Mapping, Protocol, TypeVar


T = TypeVar("T")

Document = Mapping[str, Any]


class Codec(Protocol[T]):
    """Converts a client value to and from its fast-tier string form."""

    def encode(self, value: T) -> str:
        ...

    def decode(self, raw: str) -> T:
        ...


class StringCodec:
    """Identity codec for string payloads."""

    def encode(self, value: str) -> str:
        return value

    def decode(self, raw: str) -> str:
        return raw


class JsonCodec(Generic[T]):
    """Compact JSON codec for document payloads.

    Values that cannot be serialized (datetimes, sets, cyclic structures)
    raise TypeError/ValueError from ``json.dumps``; that is the caller's
    responsibility.
    """

    def encode(self, value: T) -> str:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)

    def decode(self, raw: str) -> T:
        return json.loads(raw)


def byte_size(serialized: str) -> int:
    """UTF-8 size of a serialized value in bytes."""
    return len(serialized.encode("utf-8"))
