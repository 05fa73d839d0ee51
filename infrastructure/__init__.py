"""
Infrastructure Layer for the hierarchy engine.

This package contains concrete implementations of the ports:
- db/: Firestore document store
"""

from infrastructure.db import FirestoreDocumentStore, create_firestore_client

__all__ = [
    "FirestoreDocumentStore",
    "create_firestore_client",
]
