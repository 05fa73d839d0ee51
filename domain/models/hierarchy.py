"""
Tree schema for the training hierarchy.

Program -> Week -> Workout -> Exercise -> Set, stored path-addressed:

    users/{ownerId}/programs/{programId}/weeks/{weekId}/workouts/{workoutId}
        /exercises/{exerciseId}/sets/{setId}

Nodes are addressed by NodePath values (arena-by-path), never by in-memory
parent pointers. Every stored document also carries its ancestor ids as flat
fields (ownerId, programId, weekId, ...) so it can be authorised and opened
without a traversal.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

OWNER_FIELD = "ownerId"
# Older documents carry the owner under userId only.
LEGACY_OWNER_FIELD = "userId"
USERS_COLLECTION = "users"


class NodeKind(str, Enum):
    """The five levels of the hierarchy, outermost first."""

    PROGRAM = "program"
    WEEK = "week"
    WORKOUT = "workout"
    EXERCISE = "exercise"
    SET = "set"

    @property
    def depth(self) -> int:
        return _KIND_ORDER.index(self)

    @property
    def collection(self) -> str:
        return _COLLECTIONS[self]

    @property
    def order_field(self) -> str:
        """Field children of this kind's parent are listed by."""
        return _ORDER_FIELDS[self]

    @property
    def id_field(self) -> str:
        """Denormalized ancestor-id field descendants carry for this kind."""
        return _ID_FIELDS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def child(self) -> Optional["NodeKind"]:
        depth = self.depth
        if depth + 1 < len(_KIND_ORDER):
            return _KIND_ORDER[depth + 1]
        return None

    @property
    def descendants(self) -> List["NodeKind"]:
        return list(_KIND_ORDER[self.depth + 1:])

    @classmethod
    def from_collection(cls, collection: str) -> "NodeKind":
        for kind, name in _COLLECTIONS.items():
            if name == collection:
                return kind
        raise ValueError(f"Unknown collection '{collection}'")


_KIND_ORDER: Tuple[NodeKind, ...] = (
    NodeKind.PROGRAM,
    NodeKind.WEEK,
    NodeKind.WORKOUT,
    NodeKind.EXERCISE,
    NodeKind.SET,
)

_COLLECTIONS: Dict[NodeKind, str] = {
    NodeKind.PROGRAM: "programs",
    NodeKind.WEEK: "weeks",
    NodeKind.WORKOUT: "workouts",
    NodeKind.EXERCISE: "exercises",
    NodeKind.SET: "sets",
}

# Programs have no sibling ordering field; they list by creation time.
_ORDER_FIELDS: Dict[NodeKind, str] = {
    NodeKind.PROGRAM: "createdAt",
    NodeKind.WEEK: "order",
    NodeKind.WORKOUT: "orderIndex",
    NodeKind.EXERCISE: "orderIndex",
    NodeKind.SET: "setNumber",
}

_ID_FIELDS: Dict[NodeKind, str] = {
    NodeKind.PROGRAM: "programId",
    NodeKind.WEEK: "weekId",
    NodeKind.WORKOUT: "workoutId",
    NodeKind.EXERCISE: "exerciseId",
    NodeKind.SET: "setId",
}

# Ordering fields that carry a sibling sequence (program createdAt does not).
SIBLING_ORDER_FIELDS = {
    NodeKind.WEEK: "order",
    NodeKind.WORKOUT: "orderIndex",
    NodeKind.EXERCISE: "orderIndex",
    NodeKind.SET: "setNumber",
}


@dataclass(frozen=True)
class NodePath:
    """
    Full ancestor chain addressing one node in the store.

    The deepest populated id determines the node kind. Ids must be
    contiguous: a workout_id without a week_id is rejected.

    Examples:
        >>> path = NodePath(owner_id="u1", program_id="p1", week_id="w1")
        >>> path.kind
        <NodeKind.WEEK: 'week'>
        >>> path.document_path
        'users/u1/programs/p1/weeks/w1'
    """

    owner_id: str
    program_id: str
    week_id: Optional[str] = None
    workout_id: Optional[str] = None
    exercise_id: Optional[str] = None
    set_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.owner_id:
            raise ValueError("owner_id is required")
        if not self.program_id:
            raise ValueError("program_id is required")
        seen_gap = False
        for name, value in zip(
            ("week_id", "workout_id", "exercise_id", "set_id"),
            (self.week_id, self.workout_id, self.exercise_id, self.set_id),
        ):
            if not value:
                seen_gap = True
            elif seen_gap:
                raise ValueError(f"{name} given without its ancestor ids")

    @property
    def ids(self) -> List[str]:
        """Node ids from program down to this node."""
        chain = [self.program_id, self.week_id, self.workout_id, self.exercise_id, self.set_id]
        return [node_id for node_id in chain if node_id]

    @property
    def kind(self) -> NodeKind:
        return _KIND_ORDER[len(self.ids) - 1]

    @property
    def node_id(self) -> str:
        return self.ids[-1]

    @property
    def document_path(self) -> str:
        parts = [USERS_COLLECTION, self.owner_id]
        for kind, node_id in zip(_KIND_ORDER, self.ids):
            parts.extend([kind.collection, node_id])
        return "/".join(parts)

    @property
    def parent_collection_path(self) -> str:
        """Path of the collection this node lives in."""
        return self.document_path.rsplit("/", 1)[0]

    @property
    def children_collection_path(self) -> str:
        child = self.kind.child
        if child is None:
            raise ValueError("Set nodes have no children")
        return f"{self.document_path}/{child.collection}"

    @property
    def parent(self) -> Optional["NodePath"]:
        if self.kind is NodeKind.PROGRAM:
            return None
        return self._with_ids(self.ids[:-1])

    def child(self, node_id: str) -> "NodePath":
        if self.kind.child is None:
            raise ValueError("Set nodes have no children")
        return self._with_ids(self.ids + [node_id])

    def sibling(self, node_id: str) -> "NodePath":
        return self._with_ids(self.ids[:-1] + [node_id])

    def with_owner(self, owner_id: str) -> "NodePath":
        return NodePath(owner_id, *self.ids)

    def ancestor_fields(self) -> Dict[str, str]:
        """
        Denormalized ancestor ids for a document stored at this path.

        The node's own id is not included; a Workout gets ownerId,
        programId and weekId.
        """
        fields = {OWNER_FIELD: self.owner_id}
        for kind, node_id in zip(_KIND_ORDER, self.ids[:-1]):
            fields[kind.id_field] = node_id
        return fields

    def _with_ids(self, ids: List[str]) -> "NodePath":
        return NodePath(self.owner_id, *ids)

    @classmethod
    def from_document_path(cls, document_path: str) -> "NodePath":
        """Parse 'users/{uid}/programs/{pid}/...' back into a NodePath."""
        parts = [part for part in document_path.strip("/").split("/") if part]
        if len(parts) < 4 or len(parts) % 2 != 0 or parts[0] != USERS_COLLECTION:
            raise ValueError(f"Not a hierarchy document path: '{document_path}'")
        owner_id = parts[1]
        ids: List[str] = []
        for expected, (collection, node_id) in zip(
            _KIND_ORDER, zip(parts[2::2], parts[3::2])
        ):
            if collection != expected.collection:
                raise ValueError(f"Unexpected collection '{collection}' in '{document_path}'")
            ids.append(node_id)
        if len(ids) * 2 + 2 != len(parts):
            raise ValueError(f"Path is deeper than the hierarchy: '{document_path}'")
        return cls(owner_id, *ids)

    def __str__(self) -> str:
        return self.document_path
