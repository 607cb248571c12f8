"""Exceptions raised by the store when a snapshot cannot be decoded or encoded.

Filesystem failures are not wrapped: they surface as the `OSError` subclass
the operating system reported.
"""


class StoreError(Exception):
    """Base class for store errors."""


class StoreDecodeError(StoreError, ValueError):
    """The backing file exists but its contents are not a valid snapshot."""


class StoreEncodeError(StoreError, ValueError):
    """The in-memory mapping cannot be turned into a snapshot."""
