"""
Application Use Cases for the hierarchy engine.

This package contains application-level use cases that orchestrate the
engine components and the document store port. Use cases are the entry
points for the three operations exposed to callers.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, not API responses

Usage:
    from application.use_cases import (
        DuplicateSubtreeUseCase,
        DuplicateSubtreeResult,
        CascadeCountUseCase,
        CascadeCountResult,
        CascadeDeleteUseCase,
        CascadeDeleteResult,
    )
"""

from application.use_cases.cascade_count import CascadeCountResult, CascadeCountUseCase
from application.use_cases.cascade_delete import CascadeDeleteResult, CascadeDeleteUseCase
from application.use_cases.duplicate_subtree import (
    DuplicateSubtreeResult,
    DuplicateSubtreeUseCase,
)

__all__ = [
    # Duplicate
    "DuplicateSubtreeUseCase",
    "DuplicateSubtreeResult",
    # Cascade count
    "CascadeCountUseCase",
    "CascadeCountResult",
    # Cascade delete
    "CascadeDeleteUseCase",
    "CascadeDeleteResult",
]
