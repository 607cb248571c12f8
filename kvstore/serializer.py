"""Snapshot codec: dict[str, V] <-> UTF-8 JSON object bytes.

The store only relies on the `Serializer` protocol, so another encoding can be
swapped in without touching store logic.
"""
from __future__ import annotations

import json
from typing import Any, Protocol

from kvstore.errors import StoreDecodeError, StoreEncodeError


class Serializer(Protocol):
    def encode(self, data: dict[str, Any]) -> bytes:
        """Encode the full mapping as snapshot bytes."""
        ...

    def decode(self, raw: bytes) -> dict[str, Any]:
        """Decode snapshot bytes into a mapping."""
        ...


def encode_store_data(data: dict[str, Any]) -> bytes:
    """Encode a mapping as a JSON object (sorted keys, so equal data gives equal bytes)."""
    for key in data:
        if not isinstance(key, str):
            raise StoreEncodeError(f"Key must be a string, got {type(key).__name__}")
    try:
        txt = json.dumps(
            data,
            indent=2,
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise StoreEncodeError(f"Cannot encode store data: {e}") from e
    return (txt + "\n").encode("utf-8")


def decode_store_data(raw: bytes) -> dict[str, Any]:
    """Decode JSON object bytes into a mapping."""
    try:
        parsed = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise StoreDecodeError(f"Snapshot is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise StoreDecodeError(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise StoreDecodeError(
            f"Snapshot must be a JSON object, got {type(parsed).__name__}"
        )
    return parsed


class JsonSerializer:
    """Default serializer."""

    def encode(self, data: dict[str, Any]) -> bytes:
        return encode_store_data(data)

    def decode(self, raw: bytes) -> dict[str, Any]:
        return decode_store_data(raw)
