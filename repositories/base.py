"""
Base document store interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class BaseDocumentStore(ABC):
    """
    Write-only document store.

    Implementations must be safe to call concurrently from many requests
    without external locking, and must enforce their own I/O timeouts.
    """

    @abstractmethod
    async def create(self, index: str, document: Dict[str, Any]) -> None:
        """Persist one document into `index`.

        Raises DocumentStoreException on any failure.
        """
        pass

    async def close(self) -> None:
        """Release client resources."""
        return None
