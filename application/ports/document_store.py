"""
Document store port (interface).

The engine needs only a handful of primitives from the underlying document
database: point reads, ordered child listings, bounded atomic batch commits,
id generation and a clock. Infrastructure implementations (e.g. Firestore)
must satisfy this interface.
"""

from concurrent.futures import Future
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Sequence


class WriteKind(str, Enum):
    UPSERT = "upsert"
    DELETE = "delete"


@dataclass(frozen=True)
class WriteOperation:
    """A single write inside a batch."""

    kind: WriteKind
    path: str
    payload: Optional[Dict[str, Any]] = field(default=None, compare=False)

    @classmethod
    def upsert(cls, path: str, payload: Dict[str, Any]) -> "WriteOperation":
        return cls(WriteKind.UPSERT, path, payload)

    @classmethod
    def delete(cls, path: str) -> "WriteOperation":
        return cls(WriteKind.DELETE, path)


@dataclass(frozen=True)
class StoredDocument:
    """A document read from the store."""

    id: str
    path: str
    data: Dict[str, Any]


class DocumentStore(Protocol):
    """
    Repository interface for path-addressed document storage.

    Paths are slash-separated alternating collection/document segments,
    e.g. "users/u1/programs/p1/weeks/w1".
    """

    def get(self, path: str) -> Optional[StoredDocument]:
        """
        Read a single document.

        Args:
            path: Document path

        Returns:
            The document, or None if it does not exist
        """
        ...

    def list_children(self, collection_path: str, order_by: str) -> List[StoredDocument]:
        """
        List every document of a collection in ascending order.

        Args:
            collection_path: Collection path
            order_by: Field to sort ascending by

        Returns:
            Ordered list of documents (empty if the collection is empty)
        """
        ...

    def commit_batch(self, operations: Sequence[WriteOperation]) -> "Future[None]":
        """
        Submit a batch of writes for atomic commit.

        Returns immediately with a future; the future raises if the
        commit failed. Either every operation of the batch lands or none.

        Args:
            operations: Writes to apply together

        Returns:
            Future resolving once the commit completed
        """
        ...

    def new_id(self) -> str:
        """Generate a fresh document identifier."""
        ...

    def now(self) -> datetime:
        """Current timestamp for createdAt/updatedAt fields."""
        ...
