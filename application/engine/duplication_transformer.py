"""
Duplication transformer: source document -> payload of its copy.

For every copied node:
- scalar fields are copied verbatim, except system fields
- ownerId is the caller, never the source's value
- ancestor ids point at the new chain built in the same operation
- createdAt/updatedAt are the operation's timestamp
- the subtree root gets a copy name and, optionally, a new sibling position

Sets are built from the copy policy of their owning exercise's type tag
instead of a verbatim copy, and always come back with completed=False.
"""

import copy
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import ValidationError

from application.exceptions import ValidationFailure
from domain.models.copy_policy import ExerciseType, StrengthWeightPolicy, policy_for
from domain.models.documents import DOCUMENT_MODELS, HierarchyDocument
from domain.models.hierarchy import (
    LEGACY_OWNER_FIELD,
    OWNER_FIELD,
    SIBLING_ORDER_FIELDS,
    NodeKind,
    NodePath,
)

# Never copied from a source document; rewritten for every copy.
SYSTEM_FIELDS = frozenset(
    {"id", OWNER_FIELD, LEGACY_OWNER_FIELD, "createdAt", "updatedAt"}
    | {kind.id_field for kind in NodeKind}
)


@dataclass(frozen=True)
class RootOverrides:
    """What changes on the subtree root only."""

    name: str
    ordering: Optional[int] = None


class DuplicationTransformer:
    """
    Builds new document payloads for one duplication.

    One instance serves one operation: every payload it produces shares the
    same caller identity and timestamp.

    Usage:
        >>> transformer = DuplicationTransformer("user-1", now)
        >>> exercise = transformer.validate(NodeKind.EXERCISE, data, path)
        >>> payload = transformer.transform(NodeKind.SET, set_data, new_set_path,
        ...                                 exercise_type=exercise.type_tag)
    """

    def __init__(
        self,
        caller_id: str,
        timestamp: datetime,
        strength_weight: StrengthWeightPolicy = StrengthWeightPolicy.RESET,
    ):
        self._caller_id = caller_id
        self._timestamp = timestamp
        self._strength_weight = strength_weight

    def validate(self, kind: NodeKind, data: Dict[str, Any], path: str) -> HierarchyDocument:
        """
        Validate a source document.

        Raises:
            ValidationFailure: If the document is malformed
        """
        try:
            return DOCUMENT_MODELS[kind].model_validate(data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc']) or kind.value}: {err['msg']}"
                for err in e.errors()
            ]
            raise ValidationFailure(
                f"Malformed {kind.value} document at {path}", path=path, errors=errors
            ) from e

    def transform(
        self,
        kind: NodeKind,
        data: Dict[str, Any],
        new_path: NodePath,
        *,
        exercise_type: Optional[ExerciseType] = None,
        root: Optional[RootOverrides] = None,
        source_path: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Build the payload of the copy of one node.

        Args:
            kind: Node kind of the source document
            data: Source document fields
            new_path: Path the copy will be written at
            exercise_type: Owning exercise's type tag (sets only)
            root: Overrides applied when this node is the subtree root
            source_path: Store path of the source document, for error reports

        Returns:
            Payload ready to upsert at new_path

        Raises:
            ValidationFailure: If the copy of a set would prescribe none of
                reps, duration or distance under its exercise type
        """
        if kind is NodeKind.SET:
            payload = self._set_fields(data, exercise_type or ExerciseType.CUSTOM)
        else:
            payload = {
                key: copy.deepcopy(value)
                for key, value in data.items()
                if key not in SYSTEM_FIELDS
            }
            if kind is NodeKind.EXERCISE:
                payload["exerciseType"] = ExerciseType.parse(data.get("exerciseType")).value

        if root is not None:
            payload["name"] = root.name
            order_field = SIBLING_ORDER_FIELDS.get(kind)
            if order_field and root.ordering is not None:
                payload[order_field] = root.ordering

        payload.update(new_path.ancestor_fields())
        payload[OWNER_FIELD] = self._caller_id
        payload["createdAt"] = self._timestamp
        payload["updatedAt"] = self._timestamp

        if kind is NodeKind.SET:
            # The copy policy may drop every prescription field the source had.
            self.validate(kind, payload, source_path or new_path.document_path)
        return payload

    def _set_fields(self, data: Dict[str, Any], exercise_type: ExerciseType) -> Dict[str, Any]:
        policy = policy_for(exercise_type, self._strength_weight)
        payload = {"setNumber": data.get("setNumber")}
        payload.update(policy.apply(data))
        return payload
