"""
Firestore Document Store Implementation.

Implements the DocumentStore protocol on top of google-cloud-firestore.

Reads are synchronous. Batch commits are submitted to a small thread pool so
several commits can be in flight while the caller keeps enqueueing; each
commit is still one Firestore WriteBatch and therefore atomic.
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

from google.cloud import firestore

from application.ports.document_store import StoredDocument, WriteKind, WriteOperation
from domain.models.hierarchy import USERS_COLLECTION

logger = logging.getLogger(__name__)

# Firestore rejects batches above this size.
FIRESTORE_MAX_BATCH_OPERATIONS = 500


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _sort_key(value: Any):
    # Missing values sort last; mixed types fall back to their string form.
    if value is None:
        return (1, 0, "")
    if isinstance(value, bool):
        return (0, 1, str(value))
    if isinstance(value, (int, float)):
        return (0, 0, value)
    if isinstance(value, datetime):
        return (0, 0, value.timestamp())
    return (0, 2, str(value))


def create_firestore_client(
    project_id: Optional[str] = None,
    database: str = "(default)",
    emulator_host: Optional[str] = None,
) -> firestore.Client:
    """
    Create a Firestore client.

    Args:
        project_id: GCP project; falls back to application default credentials
        database: Firestore database id
        emulator_host: host:port of a local emulator, if any

    Returns:
        firestore.Client
    """
    if emulator_host:
        # The client library picks the emulator up from the environment.
        os.environ["FIRESTORE_EMULATOR_HOST"] = emulator_host
        logger.info(f"Using Firestore emulator at {emulator_host}")
    return firestore.Client(project=project_id, database=database)


class FirestoreDocumentStore:
    """
    Firestore-backed implementation of DocumentStore.

    Usage:
        >>> client = create_firestore_client(project_id="fittrack-prod")
        >>> store = FirestoreDocumentStore(client, commit_max_workers=4)
        >>> store.get("users/u1/programs/p1")
    """

    def __init__(
        self,
        client: firestore.Client,
        commit_max_workers: int = 4,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        """
        Initialize with Firestore client.

        Args:
            client: Firestore client instance
            commit_max_workers: Maximum number of batch commits in flight
            executor: Optional shared executor for commits
        """
        self.client = client
        self._executor = executor or ThreadPoolExecutor(
            max_workers=commit_max_workers,
            thread_name_prefix="firestore_commit_",
        )

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, path: str) -> Optional[StoredDocument]:
        snapshot = self.client.document(path).get()
        if not snapshot.exists:
            return None
        return StoredDocument(id=snapshot.id, path=path, data=snapshot.to_dict() or {})

    def list_children(self, collection_path: str, order_by: str) -> List[StoredDocument]:
        """
        List a collection ordered by order_by.

        Firestore's order_by drops documents that lack the field, so the
        whole collection is streamed and sorted here instead.
        """
        documents = [
            StoredDocument(
                id=snapshot.id,
                path=f"{collection_path}/{snapshot.id}",
                data=snapshot.to_dict() or {},
            )
            for snapshot in self.client.collection(collection_path).stream()
        ]
        documents.sort(key=lambda d: (_sort_key(d.data.get(order_by)), d.id))
        logger.debug("Listed %d documents under %s", len(documents), collection_path)
        return documents

    # =========================================================================
    # Writes
    # =========================================================================

    def commit_batch(self, operations: Sequence[WriteOperation]) -> "Future[None]":
        if len(operations) > FIRESTORE_MAX_BATCH_OPERATIONS:
            raise ValueError(
                f"Batch of {len(operations)} operations exceeds the Firestore limit "
                f"of {FIRESTORE_MAX_BATCH_OPERATIONS}"
            )

        batch = self.client.batch()
        for op in operations:
            ref = self.client.document(op.path)
            if op.kind is WriteKind.DELETE:
                batch.delete(ref)
            else:
                batch.set(ref, op.payload or {})

        return self._executor.submit(self._commit, batch, len(operations))

    @staticmethod
    def _commit(batch, size: int) -> None:
        batch.commit()
        logger.debug("Committed Firestore batch of %d operations", size)

    # =========================================================================
    # Ids and time
    # =========================================================================

    def new_id(self) -> str:
        # Auto-ids are generated client-side; no document is created.
        return self.client.collection(USERS_COLLECTION).document().id

    def now(self) -> datetime:
        return _utcnow()

    def close(self) -> None:
        """Wait for in-flight commits and release the commit pool."""
        self._executor.shutdown(wait=True)
