"""
Repository Interfaces (Ports) for the hierarchy engine.

This package defines abstract interfaces that decouple the engine from
infrastructure. Implementations are provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import DocumentStore

    class CascadeCountUseCase:
        def __init__(self, store: DocumentStore):
            self._store = store
"""

from application.ports.document_store import (
    DocumentStore,
    StoredDocument,
    WriteKind,
    WriteOperation,
)

__all__ = [
    "DocumentStore",
    "StoredDocument",
    "WriteKind",
    "WriteOperation",
]
