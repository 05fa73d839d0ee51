"""
Outcome of a multi-batch write.

Batches commit atomically on their own but not together. When some commit
and others do not, the operation ends in a PartialFailure value listing
exactly which batches landed, which failed and which were never submitted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

PARTIAL_FAILURE_MESSAGE = (
    "Operation partially completed: some items may be duplicated or deleted, "
    "please check and retry."
)


class BatchStatus(str, Enum):
    COMMITTED = "committed"
    FAILED = "failed"
    ABANDONED = "abandoned"


class FailureReason(str, Enum):
    COMMIT_FAILED = "commit_failed"
    VALIDATION_FAILED = "validation_failed"
    CANCELLED = "cancelled"


@dataclass
class BatchReport:
    """One batch: its position, the paths it wrote, and how it ended."""

    index: int
    paths: List[str]
    status: BatchStatus
    error: Optional[str] = None

    @property
    def operation_count(self) -> int:
        return len(self.paths)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "operation_count": self.operation_count,
            "status": self.status.value,
            "error": self.error,
            "paths": list(self.paths),
        }


@dataclass
class FlushResult:
    """Every batch a writer produced, in submission order."""

    batches: List[BatchReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(batch.status is BatchStatus.COMMITTED for batch in self.batches)

    @property
    def committed_batches(self) -> List[BatchReport]:
        return [b for b in self.batches if b.status is BatchStatus.COMMITTED]

    @property
    def committed_paths(self) -> set:
        return {path for batch in self.committed_batches for path in batch.paths}

    @property
    def commit_count(self) -> int:
        """Batches actually handed to the store (committed or failed)."""
        return sum(1 for b in self.batches if b.status is not BatchStatus.ABANDONED)


@dataclass
class PartialFailure:
    """
    A multi-batch write that did not complete.

    Committed batches are not rolled back; callers decide whether to retry
    the uncommitted paths or clean up the committed ones.
    """

    reason: FailureReason
    batches: List[BatchReport]
    detail: Optional[str] = None
    message: str = PARTIAL_FAILURE_MESSAGE

    @property
    def committed_batches(self) -> List[BatchReport]:
        return [b for b in self.batches if b.status is BatchStatus.COMMITTED]

    @property
    def failed_batches(self) -> List[BatchReport]:
        return [b for b in self.batches if b.status is BatchStatus.FAILED]

    @property
    def abandoned_batches(self) -> List[BatchReport]:
        return [b for b in self.batches if b.status is BatchStatus.ABANDONED]

    @property
    def committed_paths(self) -> List[str]:
        return [p for b in self.committed_batches for p in b.paths]

    @property
    def uncommitted_paths(self) -> List[str]:
        return [p for b in self.batches if b.status is not BatchStatus.COMMITTED for p in b.paths]

    @classmethod
    def from_flush(
        cls,
        reason: FailureReason,
        flush: FlushResult,
        detail: Optional[str] = None,
    ) -> "PartialFailure":
        return cls(reason=reason, batches=list(flush.batches), detail=detail)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reason": self.reason.value,
            "message": self.message,
            "detail": self.detail,
            "committed_batches": len(self.committed_batches),
            "failed_batches": len(self.failed_batches),
            "abandoned_batches": len(self.abandoned_batches),
            "batches": [b.to_dict() for b in self.batches],
        }
