"""
Key-Value Storage Protocol (Abstract Interface)
Contract for the synchronous string store underneath ExpiringStore
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IKeyValueStorage(Protocol):
    """
    Synchronous string-keyed, string-valued storage.

    Implementations persist raw text only; wrapping values with expiration
    metadata and deciding staleness belongs to ExpiringStore.
    """

    def get_item(self, key: str) -> str | None:
        """
        Read the raw text stored under key.

        Args:
            key: Storage key

        Returns:
            Stored text, or None if nothing is stored
        """
        ...

    def set_item(self, key: str, value: str) -> None:
        """
        Store text under key, replacing any previous value.

        Args:
            key: Storage key
            value: Serialized entry
        """
        ...

    def remove_item(self, key: str) -> None:
        """
        Remove key. Removing a key that does not exist is a no-op.

        Args:
            key: Storage key
        """
        ...
