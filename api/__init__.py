"""
API package for the hierarchy engine.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_engine_config,
    get_firestore_store,
    get_document_store,
    get_duplicate_subtree_use_case,
    get_cascade_count_use_case,
    get_cascade_delete_use_case,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    "get_engine_config",
    # Database
    "get_firestore_store",
    "get_document_store",
    # Use cases
    "get_duplicate_subtree_use_case",
    "get_cascade_count_use_case",
    "get_cascade_delete_use_case",
    # Authentication
    "get_current_user",
]
