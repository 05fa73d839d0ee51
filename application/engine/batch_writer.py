"""
Bounded batch writer.

Wraps the store's atomic batch primitive with a hard per-batch operation
ceiling. When the open batch reaches the ceiling it is submitted for commit
(the future is kept, not awaited) and a fresh batch is opened, so several
commits can be in flight while enqueuing continues. flush_all() submits the
remainder and waits for every commit.

Batches are atomic individually, never together: a failed batch k does not
roll back batches 1..k-1.
"""

import logging
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Dict, List

from application.ports.document_store import DocumentStore, WriteOperation
from domain.models.write_report import BatchReport, BatchStatus, FlushResult

logger = logging.getLogger(__name__)

# Firestore rejects batches above 500 writes; stay well under it.
DEFAULT_MAX_OPERATIONS = 450


@dataclass
class _SubmittedBatch:
    index: int
    operations: List[WriteOperation]
    future: "Future[None]"


class BatchWriter:
    """
    Chunk an arbitrary number of writes into store batches.

    Usage:
        >>> writer = BatchWriter(store, max_operations=450)
        >>> writer.upsert("users/u1/programs/p1", {...})
        >>> writer.delete("users/u1/programs/p1/weeks/w1")
        >>> result = writer.flush_all()
        >>> result.ok
        True
    """

    def __init__(self, store: DocumentStore, max_operations: int = DEFAULT_MAX_OPERATIONS):
        if max_operations < 1:
            raise ValueError("max_operations must be at least 1")
        self._store = store
        self._max_operations = max_operations
        self._open: List[WriteOperation] = []
        self._submitted: List[_SubmittedBatch] = []
        self._abandoned: List[List[WriteOperation]] = []
        self._flushed = False

    @property
    def max_operations(self) -> int:
        return self._max_operations

    @property
    def submitted_count(self) -> int:
        return len(self._submitted)

    @property
    def open_operation_count(self) -> int:
        return len(self._open)

    def enqueue(self, operation: WriteOperation) -> None:
        if self._flushed:
            raise RuntimeError("BatchWriter already flushed")
        self._open.append(operation)
        if len(self._open) >= self._max_operations:
            self._submit_open()

    def upsert(self, path: str, payload: Dict[str, Any]) -> None:
        self.enqueue(WriteOperation.upsert(path, payload))

    def delete(self, path: str) -> None:
        self.enqueue(WriteOperation.delete(path))

    def abandon(self) -> None:
        """Drop the open batch without submitting it."""
        if self._open:
            logger.info("Abandoning open batch of %d operations", len(self._open))
            self._abandoned.append(self._open)
            self._open = []

    def flush_all(self) -> FlushResult:
        """
        Submit the open batch (if any) and wait for every commit.

        Returns:
            FlushResult with one report per batch, in submission order,
            followed by any abandoned batches.
        """
        if self._open:
            self._submit_open()
        self._flushed = True

        reports: List[BatchReport] = []
        for batch in self._submitted:
            paths = [op.path for op in batch.operations]
            try:
                batch.future.result()
            except Exception as e:
                logger.warning(
                    "Batch %d (%d ops) failed to commit: %s",
                    batch.index, len(paths), e,
                )
                reports.append(BatchReport(batch.index, paths, BatchStatus.FAILED, str(e)))
            else:
                reports.append(BatchReport(batch.index, paths, BatchStatus.COMMITTED))

        next_index = len(self._submitted)
        for offset, operations in enumerate(self._abandoned):
            reports.append(
                BatchReport(
                    next_index + offset,
                    [op.path for op in operations],
                    BatchStatus.ABANDONED,
                )
            )

        result = FlushResult(reports)
        logger.debug(
            "Flushed %d batches (%d committed)",
            len(reports), len(result.committed_batches),
        )
        return result

    def _submit_open(self) -> None:
        operations, self._open = self._open, []
        index = len(self._submitted)
        try:
            future = self._store.commit_batch(operations)
        except Exception as e:
            # Submission itself failed; record it like a failed commit.
            future = Future()
            future.set_exception(e)
        self._submitted.append(_SubmittedBatch(index, operations, future))
        logger.debug("Submitted batch %d with %d operations", index, len(operations))
