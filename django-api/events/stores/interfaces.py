"""Store interfaces (repository pattern).

Stores must be swappable. The key-value store is the single persistence
seam: CRUD collections and form drafts are both kept as JSON text under
string keys.
"""

from abc import ABC, abstractmethod

EVENTS_KEY = "events"
REGISTRATIONS_KEY = "registrations"


class KeyValueStore(ABC):
    """Interface for asynchronous string key-value persistence."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent.

        Raises:
            StorageError: If the backend cannot be read.
        """
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            StorageError: If the backend cannot be written.
        """
        ...

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete key. Removing an absent key is not an error.

        Raises:
            StorageError: If the backend cannot be written.
        """
        ...
