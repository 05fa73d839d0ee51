"""
Domain models for the hierarchy engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core concepts:
- NodeKind / NodePath: the five-level Program > Week > Workout > Exercise > Set
  tree and its path-addressed nodes
- ExerciseType / SetCopyPolicy: which Set fields survive duplication
- *Document: pydantic validation of source documents
- CascadeCounts: descendant counts shown before destructive operations
- DuplicationMapping: old id -> new id tree returned by a duplication
- PartialFailure: report of a multi-batch write that did not fully land

Usage:
    >>> from domain.models import NodePath, NodeKind

    >>> path = NodePath("user-1", "prog-1", "week-1")
    >>> path.kind
    <NodeKind.WEEK: 'week'>
    >>> path.document_path
    'users/user-1/programs/prog-1/weeks/week-1'
"""

from domain.models.cascade_counts import CascadeCounts
from domain.models.copy_policy import (
    SET_COPY_POLICIES,
    ExerciseType,
    SetCopyPolicy,
    StrengthWeightPolicy,
    policy_for,
)
from domain.models.documents import (
    DOCUMENT_MODELS,
    ExerciseDocument,
    HierarchyDocument,
    ProgramDocument,
    SetDocument,
    WeekDocument,
    WorkoutDocument,
)
from domain.models.hierarchy import OWNER_FIELD, NodeKind, NodePath
from domain.models.id_mapping import DuplicationMapping, IdMappingNode
from domain.models.write_report import (
    BatchReport,
    BatchStatus,
    FailureReason,
    FlushResult,
    PartialFailure,
)

__all__ = [
    # Tree
    "NodeKind",
    "NodePath",
    "OWNER_FIELD",
    # Copy policy
    "ExerciseType",
    "SetCopyPolicy",
    "SET_COPY_POLICIES",
    "StrengthWeightPolicy",
    "policy_for",
    # Documents
    "HierarchyDocument",
    "ProgramDocument",
    "WeekDocument",
    "WorkoutDocument",
    "ExerciseDocument",
    "SetDocument",
    "DOCUMENT_MODELS",
    # Results
    "CascadeCounts",
    "DuplicationMapping",
    "IdMappingNode",
    "BatchReport",
    "BatchStatus",
    "FailureReason",
    "FlushResult",
    "PartialFailure",
]
