"""Abstract base class for document database operations."""

from abc import ABC, abstractmethod
from typing import Any

from src.commons.infrastructure.blob.base import HealthStatus


class DocumentDBBase(ABC):
    """Abstract base class for document database operations.

    Documents carry their identifier in an ``id`` field; implementations
    map it to whatever primary key the engine uses.
    """

    @abstractmethod
    async def insert(
        self,
        collection: str,
        document: dict[str, Any],
    ) -> str:
        """Insert a document.

        Args:
            collection: Collection/table name.
            document: Document to insert.

        Returns:
            Document ID.
        """

    @abstractmethod
    async def find_by_id(
        self,
        collection: str,
        document_id: str,
    ) -> dict[str, Any] | None:
        """Find a document by ID.

        Args:
            collection: Collection/table name.
            document_id: Document ID to find.

        Returns:
            Document if found, None otherwise.
        """

    @abstractmethod
    async def find(
        self,
        collection: str,
        filters: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort: list[tuple[str, int]] | None = None,
    ) -> list[dict[str, Any]]:
        """Find documents matching filters.

        Args:
            collection: Collection/table name.
            filters: Query filters.
            skip: Number of documents to skip.
            limit: Maximum documents to return.
            sort: Sort specification [(field, direction)].
                  Direction: 1 for ascending, -1 for descending.

        Returns:
            List of matching documents.
        """

    @abstractmethod
    async def update(
        self,
        collection: str,
        document_id: str,
        updates: dict[str, Any],
    ) -> bool:
        """Set fields on a document.

        Args:
            collection: Collection/table name.
            document_id: Document ID to update.
            updates: Fields to set.

        Returns:
            True if a document matched, False otherwise.
        """

    @abstractmethod
    async def health_check(self) -> HealthStatus:
        """Check service health."""

    @abstractmethod
    async def close(self) -> None:
        """Release client resources."""
