"""
In-memory document store for local development and tests.
"""

from typing import Any, Dict, List, Optional, Tuple

from repositories.base import BaseDocumentStore
from common.exceptions import DocumentStoreException
from common.logging import get_logger

logger = get_logger("memory_repository")


class InMemoryDocumentStore(BaseDocumentStore):
    """Keeps every (index, document) pair it receives.

    Set `fail_with` to make every create() raise DocumentStoreException.
    """

    def __init__(self, fail_with: Optional[str] = None):
        self.fail_with = fail_with
        self.documents: List[Tuple[str, Dict[str, Any]]] = []
        self.create_calls = 0

    async def create(self, index: str, document: Dict[str, Any]) -> None:
        self.create_calls += 1
        if self.fail_with is not None:
            raise DocumentStoreException(detail=self.fail_with, index=index)
        self.documents.append((index, dict(document)))
        logger.debug(f"Stored telemetry document in memory index {index}")
