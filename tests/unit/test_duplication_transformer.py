"""
Unit tests for application/engine/duplication_transformer.py
"""

from datetime import datetime, timezone

import pytest

from application.engine.duplication_transformer import DuplicationTransformer, RootOverrides
from application.exceptions import ValidationFailure
from domain.models.copy_policy import ExerciseType, StrengthWeightPolicy
from domain.models.hierarchy import NodeKind, NodePath

pytestmark = pytest.mark.unit

NOW = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
OLD = datetime(2020, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def transformer() -> DuplicationTransformer:
    return DuplicationTransformer("user-1", NOW)


class TestTransform:
    def test_workout_fields_copied_and_ancestors_rewritten(self, transformer):
        source = {
            "name": "Push",
            "notes": "heavy",
            "dayOfWeek": 2,
            "orderIndex": 1,
            "ownerId": "user-1",
            "programId": "p-old",
            "weekId": "w-old",
            "createdAt": OLD,
            "updatedAt": OLD,
            "tags": ["upper"],
        }
        new_path = NodePath("user-1", "p-new", "w-new", "wo-new")

        payload = transformer.transform(NodeKind.WORKOUT, source, new_path)

        assert payload["name"] == "Push"
        assert payload["notes"] == "heavy"
        assert payload["dayOfWeek"] == 2
        assert payload["orderIndex"] == 1
        assert payload["programId"] == "p-new"
        assert payload["weekId"] == "w-new"
        assert payload["createdAt"] == NOW
        assert payload["updatedAt"] == NOW
        assert "workoutId" not in payload

    def test_nested_values_are_not_shared(self, transformer):
        source = {"name": "Push", "tags": ["upper"]}
        payload = transformer.transform(NodeKind.WORKOUT, source, NodePath("user-1", "p", "w", "wo"))
        payload["tags"].append("lower")
        assert source["tags"] == ["upper"]

    def test_owner_is_caller_not_source(self):
        transformer = DuplicationTransformer("caller", NOW)
        payload = transformer.transform(
            NodeKind.PROGRAM, {"name": "P", "ownerId": "someone-else", "userId": "x"},
            NodePath("caller", "p2"),
        )
        assert payload["ownerId"] == "caller"
        assert "userId" not in payload

    def test_root_overrides_name_and_order(self, transformer):
        payload = transformer.transform(
            NodeKind.WEEK,
            {"name": "W1", "order": 1},
            NodePath("user-1", "p1", "w-new"),
            root=RootOverrides(name="W1 (Copy)", ordering=4),
        )
        assert payload["name"] == "W1 (Copy)"
        assert payload["order"] == 4

    def test_root_ordering_none_preserves_source_order(self, transformer):
        payload = transformer.transform(
            NodeKind.WEEK,
            {"name": "W1", "order": 1},
            NodePath("user-1", "p1", "w-new"),
            root=RootOverrides(name="W1 (Copy)"),
        )
        assert payload["order"] == 1

    def test_exercise_type_is_normalised(self, transformer):
        payload = transformer.transform(
            NodeKind.EXERCISE,
            {"name": "Plank", "exerciseType": "timebased"},
            NodePath("user-1", "p", "w", "wo", "e"),
        )
        assert payload["exerciseType"] == "time-based"


class TestSetTransform:
    SOURCE = {
        "setNumber": 3,
        "reps": 8,
        "weight": 100,
        "restTime": 60,
        "completed": True,
        "ownerId": "user-1",
        "exerciseId": "e-old",
        "rpe": 9,
    }
    NEW_PATH = NodePath("user-1", "p", "w", "wo", "e-new", "s-new")

    def test_strength_set(self, transformer):
        payload = transformer.transform(
            NodeKind.SET, self.SOURCE, self.NEW_PATH, exercise_type=ExerciseType.STRENGTH
        )
        assert payload["setNumber"] == 3
        assert payload["reps"] == 8
        assert payload["weight"] is None
        assert payload["completed"] is False
        assert payload["exerciseId"] == "e-new"
        assert payload["workoutId"] == "wo"
        assert "rpe" not in payload

    def test_keep_weight_policy(self):
        transformer = DuplicationTransformer("user-1", NOW, strength_weight=StrengthWeightPolicy.KEEP)
        payload = transformer.transform(
            NodeKind.SET, self.SOURCE, self.NEW_PATH, exercise_type=ExerciseType.STRENGTH
        )
        assert payload["weight"] == 100

    def test_unknown_owner_type_copies_everything(self, transformer):
        payload = transformer.transform(NodeKind.SET, self.SOURCE, self.NEW_PATH)
        assert payload["weight"] == 100
        assert payload["completed"] is False


class TestValidate:
    def test_valid_set(self, transformer):
        doc = transformer.validate(NodeKind.SET, {"setNumber": 1, "reps": 5}, "x")
        assert doc.set_number == 1

    def test_set_without_prescription_fails(self, transformer):
        with pytest.raises(ValidationFailure) as exc:
            transformer.validate(NodeKind.SET, {"setNumber": 1, "weight": 20}, "users/u/sets/s1")
        assert exc.value.path == "users/u/sets/s1"
        assert exc.value.code == "validation_failed"
        assert any("reps, duration or distance" in e for e in exc.value.errors)

    @pytest.mark.parametrize(
        "exercise_type,source",
        [
            (ExerciseType.CARDIO, {"setNumber": 1, "reps": 20}),
            (ExerciseType.TIME_BASED, {"setNumber": 1, "reps": 12, "weight": 5}),
            (ExerciseType.STRENGTH, {"setNumber": 1, "duration": 30}),
        ],
    )
    def test_set_copy_without_prescription_fails(self, transformer, exercise_type, source):
        with pytest.raises(ValidationFailure) as exc:
            transformer.transform(
                NodeKind.SET,
                source,
                NodePath("user-1", "p", "w", "wo", "e-new", "s-new"),
                exercise_type=exercise_type,
                source_path="users/user-1/sets/s-old",
            )
        assert exc.value.path == "users/user-1/sets/s-old"
        assert exc.value.code == "validation_failed"
        assert any("reps, duration or distance" in e for e in exc.value.errors)

    @pytest.mark.parametrize(
        "kind,data",
        [
            (NodeKind.SET, {"reps": 5}),
            (NodeKind.SET, {"setNumber": 0, "reps": 5}),
            (NodeKind.SET, {"setNumber": 1, "reps": -1}),
            (NodeKind.WORKOUT, {"dayOfWeek": 8}),
            (NodeKind.WEEK, {"order": 0}),
            (NodeKind.EXERCISE, {"orderIndex": -1}),
        ],
    )
    def test_malformed_documents(self, transformer, kind, data):
        with pytest.raises(ValidationFailure):
            transformer.validate(kind, data, "path")

    def test_exercise_type_tag(self, transformer):
        doc = transformer.validate(NodeKind.EXERCISE, {"exerciseType": "Cardio"}, "p")
        assert doc.type_tag is ExerciseType.CARDIO
