"""
Descendant counts shown before a destructive cascade.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field

from domain.models.hierarchy import NodeKind


class CascadeCounts(BaseModel):
    """
    Number of descendants a cascade delete of some root would remove.

    The root itself is not counted; a delete removes total_items + 1
    documents.

    Examples:
        >>> counts = CascadeCounts(workouts=3, exercises=9, sets=27)
        >>> counts.total_items
        39
        >>> counts.summary()
        '3 workouts, 9 exercises, 27 sets'
    """

    model_config = ConfigDict(frozen=True)

    weeks: int = Field(default=0, ge=0)
    workouts: int = Field(default=0, ge=0)
    exercises: int = Field(default=0, ge=0)
    sets: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_items(self) -> int:
        return self.weeks + self.workouts + self.exercises + self.sets

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_items(self) -> bool:
        return self.total_items > 0

    def summary(self) -> str:
        """Comma-separated, pluralised list of the non-zero kinds."""
        parts: List[str] = []
        for label, count in (
            ("week", self.weeks),
            ("workout", self.workouts),
            ("exercise", self.exercises),
            ("set", self.sets),
        ):
            if count > 0:
                parts.append(f"{count} {label}{'s' if count > 1 else ''}")
        return ", ".join(parts)

    @classmethod
    def from_kind_totals(cls, totals: dict[NodeKind, int]) -> "CascadeCounts":
        return cls(
            weeks=totals.get(NodeKind.WEEK, 0),
            workouts=totals.get(NodeKind.WORKOUT, 0),
            exercises=totals.get(NodeKind.EXERCISE, 0),
            sets=totals.get(NodeKind.SET, 0),
        )
