"""
Hierarchy router for subtree duplication and cascades.

This router provides:
- Deep copy of a Program, Week, Workout or Exercise subtree
- Descendant counts for delete confirmations
- Cascade delete of a subtree

The caller identity always comes from authentication. A request path may
name its owner explicitly, but only the caller's own tree can be touched.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from api.deps import (
    get_cascade_count_use_case,
    get_cascade_delete_use_case,
    get_current_user,
    get_duplicate_subtree_use_case,
)
from application.exceptions import INVALID_REQUEST, STORE_ERROR
from application.use_cases import (
    CascadeCountUseCase,
    CascadeDeleteUseCase,
    DuplicateSubtreeUseCase,
)
from domain.models.cascade_counts import CascadeCounts
from domain.models.hierarchy import NodeKind, NodePath
from domain.models.id_mapping import DuplicationMapping
from domain.models.write_report import PartialFailure

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/hierarchy",
    tags=["Hierarchy"],
)

ERROR_STATUS = {
    "not_found": 404,
    "permission_denied": 403,
    INVALID_REQUEST: 400,
    "validation_failed": 422,
    STORE_ERROR: 503,
}

# Partial completion: some writes landed, others did not.
PARTIAL_FAILURE_STATUS = 207


# =============================================================================
# Request/Response Models
# =============================================================================


class HierarchyPathModel(BaseModel):
    """Ancestor chain addressing a node; the deepest id given is the node."""
    owner_id: Optional[str] = Field(None, description="Defaults to the authenticated user")
    program_id: str = Field(..., min_length=1)
    week_id: Optional[str] = None
    workout_id: Optional[str] = None
    exercise_id: Optional[str] = None

    def to_node_path(self, caller_id: str) -> NodePath:
        try:
            return NodePath(
                owner_id=self.owner_id or caller_id,
                program_id=self.program_id,
                week_id=self.week_id,
                workout_id=self.workout_id,
                exercise_id=self.exercise_id,
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))


class DuplicateRequest(BaseModel):
    """Request model for duplicating a subtree."""
    path: HierarchyPathModel


class CascadeCountRequest(BaseModel):
    """Request model for counting descendants."""
    path: HierarchyPathModel
    context_level: Optional[NodeKind] = Field(
        None, description="Kind being deleted (program, week, workout or exercise)"
    )


class CascadeDeleteRequest(BaseModel):
    """Request model for deleting a subtree."""
    path: HierarchyPathModel


class DuplicateResponse(BaseModel):
    success: bool
    new_root_id: Optional[str] = None
    mapping: Optional[DuplicationMapping] = None
    batch_count: int = 0


class CascadeCountResponse(BaseModel):
    success: bool
    counts: CascadeCounts
    summary: str


class CascadeDeleteResponse(BaseModel):
    success: bool
    deleted_count: int
    counts: Optional[CascadeCounts] = None
    batch_count: int = 0


# =============================================================================
# Helpers
# =============================================================================


def _raise_for_error(error: Optional[str], error_code: Optional[str]) -> None:
    status = ERROR_STATUS.get(error_code or "", 500)
    raise HTTPException(status_code=status, detail={"error": error, "error_code": error_code})


def _partial_failure_response(
    partial_failure: PartialFailure,
    error_code: Optional[str],
    body: Dict[str, Any],
) -> JSONResponse:
    # A validation failure is the caller's data; the report still lists committed batches.
    status = ERROR_STATUS["validation_failed"] if error_code == "validation_failed" else PARTIAL_FAILURE_STATUS
    content: Dict[str, Any] = {
        "success": False,
        "error_code": error_code or partial_failure.reason.value,
        "partial_failure": partial_failure.to_dict(),
    }
    content.update(body)
    return JSONResponse(status_code=status, content=content)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/duplicate", response_model=DuplicateResponse)
def duplicate_subtree(
    request: DuplicateRequest,
    user_id: str = Depends(get_current_user),
    use_case: DuplicateSubtreeUseCase = Depends(get_duplicate_subtree_use_case),
):
    """
    Deep-copy a subtree next to its source.

    The copied root is renamed ("Week 1 (Copy)") and every descendant down
    to Set level is copied with fresh ids. Returns the old -> new id tree.
    """
    root = request.path.to_node_path(user_id)
    result = use_case.execute(user_id, root)

    if result.partial_failure is not None:
        return _partial_failure_response(
            result.partial_failure,
            result.error_code,
            {
                "mapping": result.mapping.model_dump(mode="json") if result.mapping else None,
                "batch_count": result.batch_count,
            },
        )
    if not result.success:
        _raise_for_error(result.error, result.error_code)

    return DuplicateResponse(
        success=True,
        new_root_id=result.new_root_id,
        mapping=result.mapping,
        batch_count=result.batch_count,
    )


@router.post("/cascade-count", response_model=CascadeCountResponse)
def cascade_count(
    request: CascadeCountRequest,
    user_id: str = Depends(get_current_user),
    use_case: CascadeCountUseCase = Depends(get_cascade_count_use_case),
):
    """
    Count what deleting a node would also remove.

    Read-only; used to build "This will also delete ..." confirmations.
    """
    root = request.path.to_node_path(user_id)
    result = use_case.execute(user_id, root, request.context_level)

    if not result.success:
        _raise_for_error(result.error, result.error_code)

    return CascadeCountResponse(
        success=True,
        counts=result.counts,
        summary=result.counts.summary(),
    )


@router.post("/cascade-delete", response_model=CascadeDeleteResponse)
def cascade_delete(
    request: CascadeDeleteRequest,
    user_id: str = Depends(get_current_user),
    use_case: CascadeDeleteUseCase = Depends(get_cascade_delete_use_case),
):
    """
    Delete a node together with all of its descendants.

    On partial completion the response lists the batches that did and did
    not commit so the remainder can be retried.
    """
    root = request.path.to_node_path(user_id)
    result = use_case.execute(user_id, root)

    if result.partial_failure is not None:
        return _partial_failure_response(
            result.partial_failure,
            result.error_code,
            {
                "deleted_count": result.deleted_count,
                "counts": result.counts.model_dump() if result.counts else None,
                "batch_count": result.batch_count,
            },
        )
    if not result.success:
        _raise_for_error(result.error, result.error_code)

    return CascadeDeleteResponse(
        success=True,
        deleted_count=result.deleted_count,
        counts=result.counts,
        batch_count=result.batch_count,
    )
