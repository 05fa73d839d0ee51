"""
CascadeCount Use Case.

Read-only count of what a cascade delete of some root would remove. Powers
destructive-operation confirmations ("This will also delete 3 workouts,
9 exercises, 27 sets").

Uses the same walker as CascadeDelete, so with no mutation in between the
two calls, a delete removes exactly counts.total_items + 1 documents. No
isolation is provided across the two calls.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from application.engine.config import EngineConfig
from application.engine.subtree_walker import SubtreeWalker
from application.exceptions import INVALID_REQUEST, STORE_ERROR, HierarchyError
from application.ports.document_store import DocumentStore
from domain.models.cascade_counts import CascadeCounts
from domain.models.hierarchy import NodeKind, NodePath

logger = logging.getLogger(__name__)

COUNT_CONTEXTS = frozenset({NodeKind.PROGRAM, NodeKind.WEEK, NodeKind.WORKOUT, NodeKind.EXERCISE})


@dataclass
class CascadeCountResult:
    """Result of the CascadeCount use case execution."""

    success: bool
    counts: Optional[CascadeCounts] = None
    error: Optional[str] = None
    error_code: Optional[str] = None


class CascadeCountUseCase:
    """
    Use case for counting the descendants of a node.

    Usage:
        >>> use_case = CascadeCountUseCase(store=store)
        >>> result = use_case.execute(
        ...     caller_id="user-123",
        ...     root=NodePath("user-123", "p1", "w1"),
        ...     context_level=NodeKind.WEEK,
        ... )
        >>> result.counts.summary()
        '2 workouts, 3 exercises, 7 sets'
    """

    def __init__(self, store: DocumentStore, config: Optional[EngineConfig] = None) -> None:
        config = config or EngineConfig()
        self._walker = SubtreeWalker(store, max_workers=config.read_max_workers)

    def execute(
        self,
        caller_id: str,
        root: NodePath,
        context_level: Optional[NodeKind] = None,
    ) -> CascadeCountResult:
        """
        Count descendants relevant to deleting root.

        Args:
            caller_id: Identity of the requesting user
            root: Path of the node about to be deleted
            context_level: Kind of node being deleted; defaults to root's
                kind and must match it when given

        Returns:
            CascadeCountResult with counts; kinds at or above the context
            level are always 0
        """
        context = context_level or root.kind
        if context not in COUNT_CONTEXTS:
            return CascadeCountResult(
                success=False,
                error=f"Cascade counts are not available for {context.value} nodes",
                error_code=INVALID_REQUEST,
            )
        if context is not root.kind:
            return CascadeCountResult(
                success=False,
                error=f"Context {context.value} does not match a {root.kind.value} path",
                error_code=INVALID_REQUEST,
            )

        try:
            tree = self._walker.traverse(caller_id, root, count_only=True)
        except HierarchyError as e:
            logger.warning("Cascade count rejected for %s: %s", root, e.message)
            return CascadeCountResult(success=False, error=e.message, error_code=e.code)
        except Exception as e:
            logger.exception(f"Cascade count for {root} failed: {e}")
            return CascadeCountResult(success=False, error=str(e), error_code=STORE_ERROR)

        counts = CascadeCounts.from_kind_totals(tree.descendant_totals())
        logger.info("Cascade count for %s: %s", root, counts.summary() or "no descendants")
        return CascadeCountResult(success=True, counts=counts)
