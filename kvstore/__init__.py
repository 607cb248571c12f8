from kvstore.base import StoreBase
from kvstore.errors import StoreDecodeError, StoreEncodeError, StoreError
from kvstore.serializer import (
    JsonSerializer,
    Serializer,
    decode_store_data,
    encode_store_data,
)
from kvstore.store import DEFAULT_STORE_FILENAME, AutoSaveStore, Store

__all__ = [
    "DEFAULT_STORE_FILENAME",
    "StoreBase",
    "Store",
    "AutoSaveStore",
    "Serializer",
    "JsonSerializer",
    "encode_store_data",
    "decode_store_data",
    "StoreError",
    "StoreDecodeError",
    "StoreEncodeError",
]
