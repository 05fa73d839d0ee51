"""
Test Fixtures and Helpers for the Fake Document Store.

This module provides pytest fixtures and helper functions for easily overriding
FastAPI dependencies with fake implementations.

Usage:
    # In your test file
    def test_something(override_deps, fake_store):
        override_deps(get_document_store, fake_store)

        # Now the API will use your fake
        response = client.post("/hierarchy/cascade-count", json={...})
        assert response.status_code == 200

Or use the standalone functions:
    from tests.fakes.conftest import override_dependency, reset_overrides

    def test_something():
        reset_overrides()  # Clear any previous overrides
        override_dependency(get_document_store, FakeDocumentStore())

        # Test code here...

        reset_overrides()  # Clean up after test
"""

from typing import Any, Callable

import pytest

from application.ports import DocumentStore

# Type for dependency getters
DependencyGetter = Callable[..., Any]


# =============================================================================
# Reset and Override Functions
# =============================================================================


def reset_overrides() -> None:
    """
    Reset all FastAPI dependency overrides.

    Call this in test setup/teardown to ensure clean state.
    """
    from backend.main import app

    app.dependency_overrides.clear()


def override_dependency(
    getter: DependencyGetter,
    implementation: Any,
) -> None:
    """
    Override a FastAPI dependency with a fake implementation.

    Args:
        getter: The dependency getter function (e.g., get_document_store)
        implementation: The fake implementation instance or factory

    Example:
        store = FakeDocumentStore()
        override_dependency(get_document_store, lambda: store)
    """
    from backend.main import app

    # Handle both direct instances and factory functions
    if callable(implementation) and not isinstance(implementation, type):
        app.dependency_overrides[getter] = implementation
    else:
        app.dependency_overrides[getter] = lambda: implementation


# =============================================================================
# pytest Fixtures
# =============================================================================


@pytest.fixture
def override_deps() -> Callable[[DependencyGetter, Any], Any]:
    """
    Fixture that provides a dependency override helper.

    Automatically resets overrides before each test and cleans up after.

    Returns:
        Function that accepts (getter, implementation) and returns the implementation
    """
    reset_overrides()

    def _override(getter: DependencyGetter, implementation: Any) -> Any:
        override_dependency(getter, implementation)
        return implementation

    yield _override

    reset_overrides()


@pytest.fixture
def fake_store() -> DocumentStore:
    """
    Fixture providing a fresh, empty FakeDocumentStore.

    Returns:
        A new FakeDocumentStore instance
    """
    from tests.fakes import FakeDocumentStore
    return FakeDocumentStore()


@pytest.fixture
def w1_store() -> DocumentStore:
    """
    Fixture providing a FakeDocumentStore seeded with Week "W1".

    Returns:
        FakeDocumentStore from create_w1_store()
    """
    from tests.fakes import create_w1_store
    return create_w1_store()
