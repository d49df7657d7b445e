"""Abstract base class for key/value storage backends.

This module defines the interface the transcript is persisted through.
The abstraction hides:
- Storage location (process memory, file on disk)
- Write mechanics (atomic replace, flushing)
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """String key/value store with browser-storage semantics.

    Values are opaque strings. Implementations may raise OSError on
    I/O failures; callers decide how to degrade.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
