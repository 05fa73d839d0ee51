"""
DuplicateSubtree Use Case.

Deep-copies a Program, Week, Workout or Exercise together with every
descendant down to Set level. The copy is written next to the source (same
parent) through bounded batches and an ID mapping tree is returned.

Flow:
1. Walk the source subtree (ownership and existence checked first)
2. Work out the root's copy name and sibling position
3. Transform each node into a new payload and enqueue it, depth-first
4. Flush every batch and wait for all commits
5. Record an audit entry (best effort) and return the mapping
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from application.engine.batch_writer import BatchWriter
from application.engine.cancellation import CancellationToken, OperationCancelled
from application.engine.config import CopyNaming, EngineConfig, RootOrdering
from application.engine.duplication_transformer import DuplicationTransformer, RootOverrides
from application.engine.subtree_walker import SubtreeNode, SubtreeWalker
from application.exceptions import INVALID_REQUEST, STORE_ERROR, HierarchyError, ValidationFailure
from application.ports.document_store import DocumentStore, WriteOperation
from domain.converters.copy_naming import numbered_copy_name, suffix_copy_name
from domain.models.copy_policy import ExerciseType
from domain.models.hierarchy import (
    OWNER_FIELD,
    SIBLING_ORDER_FIELDS,
    USERS_COLLECTION,
    NodeKind,
    NodePath,
)
from domain.models.id_mapping import DuplicationMapping, IdMappingNode
from domain.models.write_report import FailureReason, PartialFailure

logger = logging.getLogger(__name__)

AUDIT_COLLECTION = "duplicationLogs"


@dataclass
class DuplicateSubtreeResult:
    """Result of the DuplicateSubtree use case execution."""

    success: bool
    mapping: Optional[DuplicationMapping] = None
    partial_failure: Optional[PartialFailure] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    batch_count: int = 0

    @property
    def new_root_id(self) -> Optional[str]:
        return self.mapping.root_new_id if self.mapping else None


class DuplicateSubtreeUseCase:
    """
    Use case for duplicating a hierarchy subtree.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = DuplicateSubtreeUseCase(store=store, config=EngineConfig())
        >>> result = use_case.execute(
        ...     caller_id="user-123",
        ...     root=NodePath("user-123", "p1", "w1"),
        ... )
        >>> if result.success:
        ...     print(f"New week: {result.new_root_id}")
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
    ) -> DuplicateSubtreeResult:
        """
        Execute the duplication workflow.

        Args:
            caller_id: Identity of the requesting user
            root: Path of the subtree to copy
            cancel_token: Optional token; cancelling stops further writes

        Returns:
            DuplicateSubtreeResult with the ID mapping or a partial failure
        """
        if root.kind is NodeKind.SET:
            return DuplicateSubtreeResult(
                success=False,
                error="Sets cannot be duplicated on their own",
                error_code=INVALID_REQUEST,
            )

        logger.info("Duplicating %s %s for %s", root.kind.value, root.node_id, caller_id)
        try:
            tree = self._walker.traverse(caller_id, root)
            overrides = self._root_overrides(tree)
        except HierarchyError as e:
            logger.warning("Duplicate rejected for %s: %s", root, e.message)
            return DuplicateSubtreeResult(success=False, error=e.message, error_code=e.code)
        except Exception as e:
            logger.exception(f"Reading subtree {root} failed: {e}")
            return DuplicateSubtreeResult(success=False, error=str(e), error_code=STORE_ERROR)

        transformer = DuplicationTransformer(
            caller_id,
            self._store.now(),
            strength_weight=self._config.strength_weight_policy,
        )
        writer = BatchWriter(self._store, self._config.batch_max_operations)
        mapping_holder: List[IdMappingNode] = []

        failure_reason: Optional[FailureReason] = None
        detail: Optional[str] = None
        error_code: Optional[str] = None
        try:
            self._enqueue_copy(tree, overrides, transformer, writer, mapping_holder, cancel_token)
        except ValidationFailure as e:
            writer.abandon()
            failure_reason = FailureReason.VALIDATION_FAILED
            error_code = e.code
            detail = "; ".join([e.message] + e.errors)
            logger.warning("Duplicate of %s stopped: %s", root, detail)
        except OperationCancelled:
            writer.abandon()
            failure_reason = FailureReason.CANCELLED
            detail = "Cancelled before all writes were submitted"
            logger.warning("Duplicate of %s cancelled", root)

        flush = writer.flush_all()
        if failure_reason is None and not flush.ok:
            failure_reason = FailureReason.COMMIT_FAILED
            detail = f"{len(flush.batches) - len(flush.committed_batches)} of {len(flush.batches)} batches failed"

        mapping_root = mapping_holder[0] if mapping_holder else None

        if failure_reason is not None:
            partial = PartialFailure.from_flush(failure_reason, flush, detail=detail)
            kept = mapping_root.pruned(flush.committed_paths) if mapping_root else None
            logger.warning(
                "Duplicate of %s partially completed: %d committed, %d failed, %d abandoned",
                root,
                len(partial.committed_batches),
                len(partial.failed_batches),
                len(partial.abandoned_batches),
            )
            return DuplicateSubtreeResult(
                success=False,
                mapping=DuplicationMapping.from_root(kept),
                partial_failure=partial,
                error=partial.message,
                error_code=error_code,
                batch_count=flush.commit_count,
            )

        mapping = DuplicationMapping.from_root(mapping_root)
        if self._config.duplication_audit_enabled:
            self._write_audit_entry(caller_id, root, mapping_root)

        logger.info(
            "Duplicated %s %s -> %s (%d documents, %d batches)",
            root.kind.value, root.node_id, mapping.root_new_id,
            sum(len(b.paths) for b in flush.batches), flush.commit_count,
        )
        return DuplicateSubtreeResult(success=True, mapping=mapping, batch_count=flush.commit_count)

    def _enqueue_copy(
        self,
        tree: SubtreeNode,
        overrides: RootOverrides,
        transformer: DuplicationTransformer,
        writer: BatchWriter,
        mapping_holder: List[IdMappingNode],
        cancel_token: Optional[CancellationToken],
    ) -> None:
        """
        Transform and enqueue every node depth-first.

        The mapping root is published into mapping_holder before any child
        is processed, so a failure midway still leaves the partial tree
        reachable.
        """
        new_root = tree.path.sibling(self._store.new_id())
        # (source node, new path, parent mapping node, owning exercise type)
        stack: List[Tuple[SubtreeNode, NodePath, Optional[IdMappingNode], Optional[ExerciseType]]]
        stack = [(tree, new_root, None, None)]

        while stack:
            node, new_path, parent_mapping, exercise_type = stack.pop()
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

            source = transformer.validate(node.kind, node.data, node.path.document_path)
            if node.kind is NodeKind.EXERCISE:
                exercise_type = source.type_tag

            payload = transformer.transform(
                node.kind,
                node.data,
                new_path,
                exercise_type=exercise_type,
                root=overrides if parent_mapping is None else None,
                source_path=node.path.document_path,
            )
            writer.upsert(new_path.document_path, payload)

            mapping_node = IdMappingNode(
                kind=node.kind,
                old_id=node.id,
                new_id=new_path.node_id,
                old_path=node.path.document_path,
                new_path=new_path.document_path,
            )
            if parent_mapping is None:
                mapping_holder.append(mapping_node)
            else:
                parent_mapping.children.append(mapping_node)

            # Reversed so children pop in source order.
            for child in reversed(node.children):
                stack.append((child, new_path.child(self._store.new_id()), mapping_node, exercise_type))

    def _root_overrides(self, tree: SubtreeNode) -> RootOverrides:
        """Copy name and sibling position for the new root."""
        name = tree.data.get("name")
        naming = self._config.copy_naming
        order_field = SIBLING_ORDER_FIELDS.get(tree.kind)
        needs_siblings = naming is CopyNaming.NUMBERED or (
            order_field is not None and self._config.root_ordering is RootOrdering.APPEND
        )
        if not needs_siblings:
            return RootOverrides(name=suffix_copy_name(name, tree.kind))

        siblings = self._store.list_children(tree.path.parent_collection_path, tree.kind.order_field)
        if naming is CopyNaming.NUMBERED:
            copy_name = numbered_copy_name(name, tree.kind, [s.data.get("name") for s in siblings])
        else:
            copy_name = suffix_copy_name(name, tree.kind)

        ordering = None
        if order_field is not None and self._config.root_ordering is RootOrdering.APPEND:
            values = [s.data.get(order_field) for s in siblings]
            numeric = [v for v in values if isinstance(v, (int, float)) and not isinstance(v, bool)]
            if numeric:
                ordering = int(max(numeric)) + 1
        return RootOverrides(name=copy_name, ordering=ordering)

    def _write_audit_entry(
        self,
        caller_id: str,
        root: NodePath,
        mapping_root: Optional[IdMappingNode],
    ) -> None:
        """Best-effort audit log; a failure here never fails the duplication."""
        if mapping_root is None:
            return
        entry_path = f"{USERS_COLLECTION}/{caller_id}/{AUDIT_COLLECTION}/{self._store.new_id()}"
        entry = {
            "type": f"duplicate{root.kind.label}",
            "sourceId": mapping_root.old_id,
            "newId": mapping_root.new_id,
            "sourcePath": mapping_root.old_path,
            "newPath": mapping_root.new_path,
            "programId": root.program_id,
            OWNER_FIELD: caller_id,
            "createdAt": self._store.now(),
        }
        try:
            self._store.commit_batch([WriteOperation.upsert(entry_path, entry)]).result()
        except Exception as e:
            logger.warning("Duplication audit log failed for %s: %s", root, e)
