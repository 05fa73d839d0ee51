"""
Exercise type tags and the set field-copy policy they drive.

When a Set is duplicated, which of its prescription fields carry over is
decided by the owning Exercise's type tag. The table below is the single
source of truth; every ExerciseType member must have an entry.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional


class ExerciseType(str, Enum):
    """Closed set of exercise type tags."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    BODYWEIGHT = "bodyweight"
    TIME_BASED = "time-based"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ExerciseType":
        """
        Lenient parse of a stored tag.

        Missing or unrecognised tags fall back to CUSTOM, which copies
        every prescription field.
        """
        if not value:
            return cls.CUSTOM
        normalized = str(value).strip().lower().replace("_", "-")
        if normalized == "timebased":
            normalized = cls.TIME_BASED.value
        try:
            return cls(normalized)
        except ValueError:
            return cls.CUSTOM


class StrengthWeightPolicy(str, Enum):
    """What happens to a strength set's weight on duplication."""

    RESET = "reset"
    KEEP = "keep"


# Every set prescription field a policy may copy.
SET_PRESCRIPTION_FIELDS = ("reps", "weight", "duration", "distance", "restTime", "notes")


@dataclass(frozen=True)
class SetCopyPolicy:
    """Fields copied verbatim and fields forced to a reset value."""

    copied: FrozenSet[str]
    reset: Mapping[str, Any]

    def apply(self, source: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Build the prescription part of a duplicated set.

        Fields neither copied nor reset are written as None.
        """
        payload: Dict[str, Any] = {field: None for field in SET_PRESCRIPTION_FIELDS}
        for field in self.copied:
            payload[field] = source.get(field)
        payload.update(self.reset)
        return payload


_COMPLETED_RESET = {"completed": False}

SET_COPY_POLICIES: Dict[ExerciseType, SetCopyPolicy] = {
    ExerciseType.STRENGTH: SetCopyPolicy(
        copied=frozenset({"reps", "restTime", "notes"}),
        reset={"weight": None, **_COMPLETED_RESET},
    ),
    ExerciseType.CARDIO: SetCopyPolicy(
        copied=frozenset({"duration", "distance", "notes"}),
        reset=_COMPLETED_RESET,
    ),
    ExerciseType.TIME_BASED: SetCopyPolicy(
        copied=frozenset({"duration", "distance", "notes"}),
        reset=_COMPLETED_RESET,
    ),
    ExerciseType.BODYWEIGHT: SetCopyPolicy(
        copied=frozenset({"reps", "restTime", "notes"}),
        reset=_COMPLETED_RESET,
    ),
    ExerciseType.CUSTOM: SetCopyPolicy(
        copied=frozenset(SET_PRESCRIPTION_FIELDS),
        reset=_COMPLETED_RESET,
    ),
}

_missing = set(ExerciseType) - set(SET_COPY_POLICIES)
if _missing:
    raise RuntimeError(f"SET_COPY_POLICIES has no entry for {sorted(t.value for t in _missing)}")


def policy_for(
    exercise_type: ExerciseType,
    strength_weight: StrengthWeightPolicy = StrengthWeightPolicy.RESET,
) -> SetCopyPolicy:
    """
    Look up the copy policy for an exercise type.

    With StrengthWeightPolicy.KEEP, strength sets carry their weight over
    instead of resetting it.
    """
    policy = SET_COPY_POLICIES[exercise_type]
    if exercise_type is ExerciseType.STRENGTH and strength_weight is StrengthWeightPolicy.KEEP:
        return SetCopyPolicy(
            copied=policy.copied | {"weight"},
            reset={k: v for k, v in policy.reset.items() if k != "weight"},
        )
    return policy
