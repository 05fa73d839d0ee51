"""
CascadeDelete Use Case.

Deletes a node and every descendant down to Set level through bounded
batches. Children are enqueued before their parent and the root goes last,
though a document store enforces no ordering between them.

On a partial failure some descendants may be left orphaned; the result lists
which batches committed and which paths remain so the caller can retry.
Nothing is retried automatically.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from application.engine.batch_writer import BatchWriter
from application.engine.cancellation import CancellationToken, OperationCancelled
from application.engine.config import EngineConfig
from application.engine.subtree_walker import SubtreeWalker
from application.exceptions import STORE_ERROR, HierarchyError
from application.ports.document_store import DocumentStore
from domain.models.cascade_counts import CascadeCounts
from domain.models.hierarchy import NodePath
from domain.models.write_report import FailureReason, PartialFailure

logger = logging.getLogger(__name__)


@dataclass
class CascadeDeleteResult:
    """Result of the CascadeDelete use case execution."""

    success: bool
    deleted_count: int = 0
    counts: Optional[CascadeCounts] = None
    partial_failure: Optional[PartialFailure] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    batch_count: int = 0


class CascadeDeleteUseCase:
    """
    Use case for deleting a subtree.

    Usage:
        >>> use_case = CascadeDeleteUseCase(store=store, config=EngineConfig())
        >>> result = use_case.execute(
        ...     caller_id="user-123",
        ...     root=NodePath("user-123", "p1", "w1", "wo1"),
        ... )
        >>> result.deleted_count
        8
    """

    def __init__(self, store: DocumentStore, config: Optional[EngineConfig] = None) -> None:
        self._store = store
        self._config = config or EngineConfig()
        self._walker = SubtreeWalker(store, max_workers=self._config.read_max_workers)

    def execute(
        self,
        caller_id: str,
        root: NodePath,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> CascadeDeleteResult:
        """
        Execute the cascade delete workflow.

        Args:
            caller_id: Identity of the requesting user
            root: Path of the node to delete with its descendants
            cancel_token: Optional token; cancelling stops further deletes

        Returns:
            CascadeDeleteResult with the number of documents removed
        """
        logger.info("Cascade deleting %s %s for %s", root.kind.value, root.node_id, caller_id)
        try:
            tree = self._walker.traverse(caller_id, root, count_only=True)
        except HierarchyError as e:
            logger.warning("Cascade delete rejected for %s: %s", root, e.message)
            return CascadeDeleteResult(success=False, error=e.message, error_code=e.code)
        except Exception as e:
            logger.exception(f"Reading subtree {root} failed: {e}")
            return CascadeDeleteResult(success=False, error=str(e), error_code=STORE_ERROR)

        counts = CascadeCounts.from_kind_totals(tree.descendant_totals())
        writer = BatchWriter(self._store, self._config.batch_max_operations)

        failure_reason: Optional[FailureReason] = None
        detail: Optional[str] = None
        try:
            for node in tree.iter_postorder():
                if cancel_token is not None:
                    cancel_token.raise_if_cancelled()
                writer.delete(node.path.document_path)
        except OperationCancelled:
            writer.abandon()
            failure_reason = FailureReason.CANCELLED
            detail = "Cancelled before all deletes were submitted"
            logger.warning("Cascade delete of %s cancelled", root)

        flush = writer.flush_all()
        deleted = len(flush.committed_paths)
        if failure_reason is None and not flush.ok:
            failure_reason = FailureReason.COMMIT_FAILED
            detail = f"{len(flush.batches) - len(flush.committed_batches)} of {len(flush.batches)} batches failed"

        if failure_reason is not None:
            partial = PartialFailure.from_flush(failure_reason, flush, detail=detail)
            logger.warning(
                "Cascade delete of %s partially completed: %d of %d documents removed",
                root, deleted, counts.total_items + 1,
            )
            return CascadeDeleteResult(
                success=False,
                deleted_count=deleted,
                counts=counts,
                partial_failure=partial,
                error=partial.message,
                batch_count=flush.commit_count,
            )

        logger.info(
            "Cascade deleted %s (%d documents, %d batches)", root, deleted, flush.commit_count
        )
        return CascadeDeleteResult(
            success=True,
            deleted_count=deleted,
            counts=counts,
            batch_count=flush.commit_count,
        )
