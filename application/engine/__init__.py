"""
Hierarchy engine building blocks.

- BatchWriter: chunks writes into bounded atomic store batches
- SubtreeWalker: ordered, level-by-level read of a subtree
- CancellationToken: cooperative cancellation between enqueues
- EngineConfig: explicit tunables handed to use cases
"""

from application.engine.batch_writer import DEFAULT_MAX_OPERATIONS, BatchWriter
from application.engine.cancellation import CancellationToken, OperationCancelled
from application.engine.config import CopyNaming, EngineConfig, RootOrdering
from application.engine.subtree_walker import SubtreeNode, SubtreeWalker

__all__ = [
    "BatchWriter",
    "DEFAULT_MAX_OPERATIONS",
    "CancellationToken",
    "OperationCancelled",
    "CopyNaming",
    "EngineConfig",
    "RootOrdering",
    "SubtreeNode",
    "SubtreeWalker",
]
