"""
Unit tests for the hierarchy tree schema (NodeKind, NodePath).
"""

import pytest

from domain.models.hierarchy import NodeKind, NodePath

pytestmark = pytest.mark.unit


class TestNodeKind:
    def test_child_chain(self):
        assert NodeKind.PROGRAM.child is NodeKind.WEEK
        assert NodeKind.WEEK.child is NodeKind.WORKOUT
        assert NodeKind.WORKOUT.child is NodeKind.EXERCISE
        assert NodeKind.EXERCISE.child is NodeKind.SET
        assert NodeKind.SET.child is None

    def test_order_fields(self):
        assert NodeKind.WEEK.order_field == "order"
        assert NodeKind.WORKOUT.order_field == "orderIndex"
        assert NodeKind.EXERCISE.order_field == "orderIndex"
        assert NodeKind.SET.order_field == "setNumber"

    def test_descendants(self):
        assert NodeKind.WORKOUT.descendants == [NodeKind.EXERCISE, NodeKind.SET]
        assert NodeKind.SET.descendants == []

    def test_label_and_collection(self):
        assert NodeKind.EXERCISE.label == "Exercise"
        assert NodeKind.EXERCISE.collection == "exercises"
        assert NodeKind.from_collection("weeks") is NodeKind.WEEK

    def test_unknown_collection_raises(self):
        with pytest.raises(ValueError):
            NodeKind.from_collection("blocks")


class TestNodePath:
    def test_kind_from_deepest_id(self):
        assert NodePath("u1", "p1").kind is NodeKind.PROGRAM
        assert NodePath("u1", "p1", "w1", "wo1").kind is NodeKind.WORKOUT
        assert NodePath("u1", "p1", "w1", "wo1", "e1", "s1").kind is NodeKind.SET

    def test_document_path(self):
        path = NodePath("u1", "p1", "w1", "wo1", "e1")
        assert path.document_path == "users/u1/programs/p1/weeks/w1/workouts/wo1/exercises/e1"
        assert path.children_collection_path == path.document_path + "/sets"
        assert path.parent_collection_path == "users/u1/programs/p1/weeks/w1/workouts/wo1/exercises"

    def test_gap_in_ids_rejected(self):
        with pytest.raises(ValueError, match="workout_id"):
            NodePath("u1", "p1", workout_id="wo1")

    def test_owner_and_program_required(self):
        with pytest.raises(ValueError):
            NodePath("", "p1")
        with pytest.raises(ValueError):
            NodePath("u1", "")

    def test_parent_child_sibling(self):
        week = NodePath("u1", "p1", "w1")
        workout = week.child("wo1")
        assert workout.parent == week
        assert workout.sibling("wo2") == NodePath("u1", "p1", "w1", "wo2")
        assert NodePath("u1", "p1").parent is None

    def test_set_has_no_children(self):
        set_path = NodePath("u1", "p1", "w1", "wo1", "e1", "s1")
        with pytest.raises(ValueError):
            set_path.child("x")
        with pytest.raises(ValueError):
            set_path.children_collection_path

    def test_ancestor_fields_exclude_own_id(self):
        path = NodePath("u1", "p1", "w1", "wo1")
        assert path.ancestor_fields() == {
            "ownerId": "u1",
            "programId": "p1",
            "weekId": "w1",
        }

    def test_from_document_path_round_trip(self):
        path = NodePath("u1", "p1", "w1", "wo1", "e1", "s1")
        assert NodePath.from_document_path(path.document_path) == path

    @pytest.mark.parametrize(
        "document_path",
        [
            "users/u1",
            "accounts/u1/programs/p1",
            "users/u1/programs/p1/workouts/wo1",
            "users/u1/programs/p1/weeks",
        ],
    )
    def test_from_document_path_rejects_foreign_paths(self, document_path):
        with pytest.raises(ValueError):
            NodePath.from_document_path(document_path)
