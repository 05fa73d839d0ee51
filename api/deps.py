"""
FastAPI Dependency Providers for the hierarchy engine.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and the Firestore document store are cached per-process (lru_cache)
- Use case providers create new instances per-request
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_cascade_count_use_case, get_current_user

    @router.post("/hierarchy/cascade-count")
    def cascade_count(
        user_id: str = Depends(get_current_user),
        use_case: CascadeCountUseCase = Depends(get_cascade_count_use_case),
    ):
        ...

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_document_store] = lambda: FakeDocumentStore()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from application.engine.config import EngineConfig
from application.ports import DocumentStore
from application.use_cases import (
    CascadeCountUseCase,
    CascadeDeleteUseCase,
    DuplicateSubtreeUseCase,
)
from infrastructure import FirestoreDocumentStore, create_firestore_client

from backend.settings import Settings, get_settings as _get_settings
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


def get_engine_config(settings: Settings = Depends(get_settings)) -> EngineConfig:
    """Engine tunables derived from settings."""
    return EngineConfig.from_settings(settings)


# =============================================================================
# Document Store Provider
# =============================================================================


@lru_cache
def get_firestore_store() -> Optional[FirestoreDocumentStore]:
    """
    Get the Firestore document store (cached).

    Returns None if Firestore is not configured. The store owns the commit
    thread pool, so one instance is shared for the lifetime of the process.

    Returns:
        FirestoreDocumentStore, or None if not configured
    """
    settings = _get_settings()

    if not settings.firestore_configured:
        return None

    client = create_firestore_client(
        project_id=settings.firestore_project_id,
        database=settings.firestore_database,
        emulator_host=settings.firestore_emulator_host,
    )
    return FirestoreDocumentStore(client, commit_max_workers=settings.commit_max_workers)


def get_document_store() -> DocumentStore:
    """
    Get the document store, raising if not configured.

    Raises:
        HTTPException: 503 if Firestore is not configured
    """
    store = get_firestore_store()
    if store is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Firestore is not configured.",
        )
    return store


# =============================================================================
# Use Case Providers
# =============================================================================


def get_duplicate_subtree_use_case(
    store: DocumentStore = Depends(get_document_store),
    config: EngineConfig = Depends(get_engine_config),
) -> DuplicateSubtreeUseCase:
    return DuplicateSubtreeUseCase(store=store, config=config)


def get_cascade_count_use_case(
    store: DocumentStore = Depends(get_document_store),
    config: EngineConfig = Depends(get_engine_config),
) -> CascadeCountUseCase:
    return CascadeCountUseCase(store=store, config=config)


def get_cascade_delete_use_case(
    store: DocumentStore = Depends(get_document_store),
    config: EngineConfig = Depends(get_engine_config),
) -> CascadeDeleteUseCase:
    return CascadeDeleteUseCase(store=store, config=config)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.

    Returns:
        str: User ID from authentication

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(authorization=authorization, x_api_key=x_api_key)


# =============================================================================
# Exports
# =============================================================================

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
