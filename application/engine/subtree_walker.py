"""
Subtree walker.

Reads a root node and every descendant down to Set level. Reads go level by
level: all children collections of one level are listed in a single
concurrent fan-out before the next level starts, so the number of read rounds
is bounded by tree depth rather than by document count. Within each parent,
children come back ordered (weeks by order, workouts and exercises by
orderIndex, sets by setNumber).

The root is checked for existence and ownership before anything else; both
checks raise before any write can be enqueued.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

from application.exceptions import NotFound, PermissionDenied
from application.ports.document_store import DocumentStore, StoredDocument
from domain.models.hierarchy import LEGACY_OWNER_FIELD, OWNER_FIELD, NodeKind, NodePath

logger = logging.getLogger(__name__)


@dataclass
class SubtreeNode:
    """One source document and its ordered children."""

    path: NodePath
    data: Dict[str, Any]
    children: List["SubtreeNode"] = field(default_factory=list)

    @property
    def kind(self) -> NodeKind:
        return self.path.kind

    @property
    def id(self) -> str:
        return self.path.node_id

    def iter_preorder(self) -> Iterator["SubtreeNode"]:
        yield self
        for child in self.children:
            yield from child.iter_preorder()

    def iter_postorder(self) -> Iterator["SubtreeNode"]:
        for child in self.children:
            yield from child.iter_postorder()
        yield self

    def iter_families(self) -> Iterator[Tuple["SubtreeNode", List["SubtreeNode"]]]:
        """(node, children) pairs in depth-first order."""
        for node in self.iter_preorder():
            yield node, node.children

    def descendant_totals(self) -> Dict[NodeKind, int]:
        totals: Dict[NodeKind, int] = {kind: 0 for kind in self.kind.descendants}
        for node in self.iter_preorder():
            if node is not self:
                totals[node.kind] += 1
        return totals


class SubtreeWalker:
    """
    Ordered, read-only traversal of a hierarchy subtree.

    Usage:
        >>> walker = SubtreeWalker(store, max_workers=8)
        >>> tree = walker.traverse("user-1", NodePath("user-1", "p1", "w1"))
        >>> [w.data["name"] for w in tree.children]
        ['Push', 'Pull']
    """

    def __init__(self, store: DocumentStore, max_workers: int = 8):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._store = store
        self._max_workers = max_workers

    def load_root(self, caller_id: str, root: NodePath) -> StoredDocument:
        """
        Read the root document and check it belongs to the caller.

        Raises:
            PermissionDenied: If the path or the document's ownerId names
                another user
            NotFound: If the root document does not exist
        """
        if root.owner_id != caller_id:
            raise PermissionDenied(
                f"{root.kind.label} does not belong to the caller", path=root.document_path
            )
        document = self._store.get(root.document_path)
        if document is None:
            raise NotFound(f"{root.kind.label} not found", path=root.document_path)
        # Legacy documents name the owner in userId; with neither, the path owner stands.
        owner = document.data.get(OWNER_FIELD)
        if owner is None:
            owner = document.data.get(LEGACY_OWNER_FIELD)
        if owner is not None and owner != caller_id:
            logger.warning(
                "Ownership mismatch on %s: caller=%s owner=%s",
                root.document_path, caller_id, owner,
            )
            raise PermissionDenied(
                f"{root.kind.label} does not belong to the caller", path=root.document_path
            )
        return document

    def traverse(self, caller_id: str, root: NodePath, *, count_only: bool = False) -> SubtreeNode:
        """
        Load the whole subtree under root.

        Args:
            caller_id: Identity of the requesting user
            root: Path of the subtree root
            count_only: Drop document fields from descendants (only the
                shape is kept)

        Returns:
            The root SubtreeNode with children populated to Set level
        """
        document = self.load_root(caller_id, root)
        tree = SubtreeNode(root, document.data)

        frontier = [tree]
        reads = 1
        with ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="subtree_walk_"
        ) as executor:
            while frontier and frontier[0].kind.child is not None:
                child_kind = frontier[0].kind.child
                listings = self._list_level(executor, frontier, child_kind)
                reads += len(frontier)

                next_frontier: List[SubtreeNode] = []
                for parent, documents in zip(frontier, listings):
                    for doc in documents:
                        child = SubtreeNode(parent.path.child(doc.id), {} if count_only else doc.data)
                        parent.children.append(child)
                        next_frontier.append(child)
                logger.debug(
                    "Walked %d %s under %s", len(next_frontier), child_kind.collection, root
                )
                frontier = next_frontier

        logger.debug("Traversal of %s finished after %d reads", root, reads)
        return tree

    def _list_level(
        self,
        executor: ThreadPoolExecutor,
        parents: List[SubtreeNode],
        child_kind: NodeKind,
    ) -> List[List[StoredDocument]]:
        def list_children(parent: SubtreeNode) -> List[StoredDocument]:
            return self._store.list_children(
                parent.path.children_collection_path, child_kind.order_field
            )

        if len(parents) == 1 or self._max_workers == 1:
            return [list_children(parent) for parent in parents]
        return list(executor.map(list_children, parents))
