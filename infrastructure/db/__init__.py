"""
Infrastructure Database Layer.

This package provides the Firestore-backed implementation of the
DocumentStore interface defined in application.ports.

Usage:
    from infrastructure.db import FirestoreDocumentStore, create_firestore_client

    client = create_firestore_client(project_id="fittrack-prod")
    store = FirestoreDocumentStore(client, commit_max_workers=4)
"""

from infrastructure.db.firestore_document_store import (
    FirestoreDocumentStore,
    create_firestore_client,
)

__all__ = [
    "FirestoreDocumentStore",
    "create_firestore_client",
]
