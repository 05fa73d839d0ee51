"""
ID mapping returned by a duplication.

Mirrors the shape of the source subtree; each node pairs a source document
id with the id of the copy created for it.
"""

from __future__ import annotations

from typing import Collection, Iterator, List, Optional

from pydantic import BaseModel, Field

from domain.models.hierarchy import NodeKind


class IdMappingNode(BaseModel):
    kind: NodeKind
    old_id: str
    new_id: str
    old_path: str
    new_path: str
    children: List[IdMappingNode] = Field(default_factory=list)

    def walk(self) -> Iterator[IdMappingNode]:
        """Pre-order iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def pruned(self, keep_paths: Collection[str]) -> Optional[IdMappingNode]:
        """
        Copy of this subtree restricted to nodes whose new_path is kept.

        A node that is dropped takes its descendants with it; they are
        still reported by path in the partial-failure batch list.
        """
        if self.new_path not in keep_paths:
            return None
        children = [c.pruned(keep_paths) for c in self.children]
        return self.model_copy(update={"children": [c for c in children if c is not None]})


class DuplicationMapping(BaseModel):
    """
    Result tree of a duplication plus the new root id for convenience.

    root is None only when a partial failure left the new root itself
    uncommitted.
    """

    root_new_id: Optional[str] = None
    root: Optional[IdMappingNode] = None

    def count(self, kind: NodeKind) -> int:
        if self.root is None:
            return 0
        return sum(1 for node in self.root.walk() if node.kind is kind)

    @classmethod
    def from_root(cls, root: Optional[IdMappingNode]) -> "DuplicationMapping":
        return cls(root_new_id=root.new_id if root else None, root=root)
