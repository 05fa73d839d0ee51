"""
Pydantic shapes of the stored hierarchy documents.

Documents are stored camelCase; fields are exposed snake_case with camelCase
aliases. These models are used to validate source documents before they are
copied, not to build payloads, so unknown fields are tolerated.
"""

from datetime import datetime
from typing import Optional, Type

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.models.copy_policy import ExerciseType
from domain.models.hierarchy import NodeKind


class HierarchyDocument(BaseModel):
    """Fields shared by every node kind."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    owner_id: Optional[str] = Field(default=None, alias="ownerId")
    name: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class ProgramDocument(HierarchyDocument):
    description: Optional[str] = None
    is_archived: bool = Field(default=False, alias="isArchived")


class WeekDocument(HierarchyDocument):
    program_id: Optional[str] = Field(default=None, alias="programId")
    order: Optional[int] = Field(default=None, ge=1, description="1-based position in program")


class WorkoutDocument(HierarchyDocument):
    program_id: Optional[str] = Field(default=None, alias="programId")
    week_id: Optional[str] = Field(default=None, alias="weekId")
    day_of_week: Optional[int] = Field(default=None, ge=1, le=7, alias="dayOfWeek")
    order_index: Optional[int] = Field(default=None, ge=0, alias="orderIndex")


class ExerciseDocument(HierarchyDocument):
    program_id: Optional[str] = Field(default=None, alias="programId")
    week_id: Optional[str] = Field(default=None, alias="weekId")
    workout_id: Optional[str] = Field(default=None, alias="workoutId")
    exercise_type: Optional[str] = Field(default=None, alias="exerciseType")
    order_index: Optional[int] = Field(default=None, ge=0, alias="orderIndex")

    @property
    def type_tag(self) -> ExerciseType:
        return ExerciseType.parse(self.exercise_type)


class SetDocument(HierarchyDocument):
    program_id: Optional[str] = Field(default=None, alias="programId")
    week_id: Optional[str] = Field(default=None, alias="weekId")
    workout_id: Optional[str] = Field(default=None, alias="workoutId")
    exercise_id: Optional[str] = Field(default=None, alias="exerciseId")
    set_number: int = Field(..., ge=1, alias="setNumber")
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, ge=0, description="Seconds")
    distance: Optional[float] = Field(default=None, ge=0, description="Meters")
    rest_time: Optional[int] = Field(default=None, ge=0, alias="restTime")
    completed: bool = False

    @model_validator(mode="after")
    def validate_prescription(self) -> "SetDocument":
        """A set must prescribe at least reps, duration or distance."""
        if self.reps is None and self.duration is None and self.distance is None:
            raise ValueError("Set must have at least one of reps, duration or distance")
        return self


DOCUMENT_MODELS: dict[NodeKind, Type[HierarchyDocument]] = {
    NodeKind.PROGRAM: ProgramDocument,
    NodeKind.WEEK: WeekDocument,
    NodeKind.WORKOUT: WorkoutDocument,
    NodeKind.EXERCISE: ExerciseDocument,
    NodeKind.SET: SetDocument,
}
