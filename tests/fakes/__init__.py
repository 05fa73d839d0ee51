"""
Fake Implementations for Testing.

This package provides in-memory fake implementations of the port interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- FakeDocumentStore implements the same Protocol as FirestoreDocumentStore
- Supports seeding with test data and per-batch failure injection
- Factory functions for common hierarchy shapes

Usage:
    from tests.fakes import FakeDocumentStore, create_w1_store

    # Direct instantiation
    store = FakeDocumentStore()
    store.seed("users/u1/programs/p1", {"ownerId": "u1", "name": "P"})

    # Factory function with the reference Week "W1"
    store = create_w1_store()
"""
from typing import Any, Dict, List, Optional

from domain.models.hierarchy import NodePath
from tests.fakes.document_store import FIXED_NOW, FakeDocumentStore, operations_paths

TEST_USER_ID = "user-1"
OTHER_USER_ID = "user-2"

PROGRAM = NodePath(TEST_USER_ID, "prog-1")
WEEK_W1 = NodePath(TEST_USER_ID, "prog-1", "week-1")
WORKOUT_A = WEEK_W1.child("workout-a")
WORKOUT_B = WEEK_W1.child("workout-b")
STRENGTH_EXERCISE = WORKOUT_A.child("ex-strength")
CUSTOM_EXERCISE = WORKOUT_A.child("ex-custom")
CARDIO_EXERCISE = WORKOUT_B.child("ex-cardio")


# =============================================================================
# Seeding helpers
# =============================================================================


def seed_node(store: FakeDocumentStore, path: NodePath, **fields: Any) -> NodePath:
    """Seed one document with its denormalized ancestor ids filled in."""
    data: Dict[str, Any] = {"createdAt": FIXED_NOW, "updatedAt": FIXED_NOW}
    data.update(path.ancestor_fields())
    data.update(fields)
    store.seed(path.document_path, data)
    return path


def seed_sets(
    store: FakeDocumentStore,
    exercise: NodePath,
    sets: List[Dict[str, Any]],
) -> List[NodePath]:
    """Seed sets under an exercise, numbering them 1..N."""
    paths = []
    for number, fields in enumerate(sets, start=1):
        path = exercise.child(f"{exercise.node_id}-set-{number}")
        seed_node(store, path, setNumber=number, completed=True, **fields)
        paths.append(path)
    return paths


# =============================================================================
# Factory Functions
# =============================================================================


def create_w1_store(store: Optional[FakeDocumentStore] = None) -> FakeDocumentStore:
    """
    Create a store holding Program "Strength Block" with Week "W1".

    W1
    - Workout A (orderIndex 0)
      - Bench Press, strength: 3 sets, reps 9/10/11, weight 125/135/145
      - Finisher, custom: 2 sets
    - Workout B (orderIndex 1)
      - Row Erg, cardio: 2 sets of 300 s

    Returns:
        Pre-populated FakeDocumentStore
    """
    store = store or FakeDocumentStore()

    seed_node(store, PROGRAM, name="Strength Block", description="12 weeks", isArchived=False)
    seed_node(store, WEEK_W1, name="W1", order=1, notes="Intro week")

    # Seeded out of order so listing has to sort.
    seed_node(store, WORKOUT_B, name="Workout B", orderIndex=1, dayOfWeek=3)
    seed_node(store, WORKOUT_A, name="Workout A", orderIndex=0, dayOfWeek=1)

    seed_node(store, STRENGTH_EXERCISE, name="Bench Press", exerciseType="strength", orderIndex=0)
    seed_sets(store, STRENGTH_EXERCISE, [
        {"reps": 9, "weight": 125, "restTime": 90, "notes": "warm-up"},
        {"reps": 10, "weight": 135, "restTime": 120},
        {"reps": 11, "weight": 145, "restTime": 120},
    ])

    seed_node(store, CUSTOM_EXERCISE, name="Finisher", exerciseType="custom", orderIndex=1)
    seed_sets(store, CUSTOM_EXERCISE, [
        {"reps": 20, "weight": 10, "duration": 60, "distance": 0, "restTime": 30},
        {"reps": 15, "duration": 45},
    ])

    seed_node(store, CARDIO_EXERCISE, name="Row Erg", exerciseType="cardio", orderIndex=0)
    seed_sets(store, CARDIO_EXERCISE, [
        {"duration": 300, "distance": 1000, "restTime": 60},
        {"duration": 300, "distance": 1000, "restTime": 60},
    ])

    return store


def create_week_store(
    *,
    workouts: int,
    exercises_per_workout: int,
    sets_per_exercise: int,
    exercise_type: str = "strength",
) -> FakeDocumentStore:
    """
    Create a store with one Week of uniform shape.

    Returns:
        FakeDocumentStore with PROGRAM and WEEK_W1 populated
    """
    store = FakeDocumentStore()
    seed_node(store, PROGRAM, name="Generated")
    seed_node(store, WEEK_W1, name="W1", order=1)
    for w in range(workouts):
        workout = seed_node(store, WEEK_W1.child(f"wo-{w}"), name=f"Workout {w}", orderIndex=w)
        for e in range(exercises_per_workout):
            exercise = seed_node(
                store,
                workout.child(f"wo-{w}-ex-{e}"),
                name=f"Exercise {e}",
                exerciseType=exercise_type,
                orderIndex=e,
            )
            seed_sets(store, exercise, [{"reps": 5, "weight": 100}] * sets_per_exercise)
    return store


__all__ = [
    "FakeDocumentStore",
    "FIXED_NOW",
    "operations_paths",
    "TEST_USER_ID",
    "OTHER_USER_ID",
    "PROGRAM",
    "WEEK_W1",
    "WORKOUT_A",
    "WORKOUT_B",
    "STRENGTH_EXERCISE",
    "CUSTOM_EXERCISE",
    "CARDIO_EXERCISE",
    "seed_node",
    "seed_sets",
    "create_w1_store",
    "create_week_store",
]
