"""
Unit tests for infrastructure/db/firestore_document_store.py

The Firestore client is replaced by MagicMock; no emulator is needed.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from application.ports.document_store import WriteOperation
from infrastructure.db.firestore_document_store import (
    FIRESTORE_MAX_BATCH_OPERATIONS,
    FirestoreDocumentStore,
    create_firestore_client,
)


def _snapshot(doc_id, data, exists=True):
    snapshot = MagicMock()
    snapshot.id = doc_id
    snapshot.exists = exists
    snapshot.to_dict.return_value = data
    return snapshot


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def store(client):
    executor = ThreadPoolExecutor(max_workers=1)
    yield FirestoreDocumentStore(client, executor=executor)
    executor.shutdown(wait=True)


@pytest.mark.unit
class TestReads:
    def test_get_existing(self, client, store):
        client.document.return_value.get.return_value = _snapshot("w1", {"name": "W1"})

        doc = store.get("users/u1/programs/p1/weeks/w1")

        client.document.assert_called_with("users/u1/programs/p1/weeks/w1")
        assert doc.id == "w1"
        assert doc.path == "users/u1/programs/p1/weeks/w1"
        assert doc.data == {"name": "W1"}

    def test_get_missing(self, client, store):
        client.document.return_value.get.return_value = _snapshot("w1", None, exists=False)
        assert store.get("users/u1/programs/p1/weeks/w1") is None

    def test_list_children_sorts_client_side(self, client, store):
        client.collection.return_value.stream.return_value = [
            _snapshot("c", {"orderIndex": 2}),
            _snapshot("none", {}),
            _snapshot("a", {"orderIndex": 0}),
            _snapshot("b", {"orderIndex": 1}),
        ]

        docs = store.list_children("users/u1/programs/p1/weeks/w1/workouts", "orderIndex")

        client.collection.assert_called_with("users/u1/programs/p1/weeks/w1/workouts")
        assert [d.id for d in docs] == ["a", "b", "c", "none"]
        assert docs[0].path == "users/u1/programs/p1/weeks/w1/workouts/a"

    def test_list_children_orders_timestamps(self, client, store):
        early = datetime(2024, 1, 1, tzinfo=timezone.utc)
        late = datetime(2024, 6, 1, tzinfo=timezone.utc)
        client.collection.return_value.stream.return_value = [
            _snapshot("p2", {"createdAt": late}),
            _snapshot("p1", {"createdAt": early}),
        ]
        docs = store.list_children("users/u1/programs", "createdAt")
        assert [d.id for d in docs] == ["p1", "p2"]

    def test_list_children_empty(self, client, store):
        client.collection.return_value.stream.return_value = []
        assert store.list_children("users/u1/programs/p1/weeks", "order") == []


@pytest.mark.unit
class TestWrites:
    def test_commit_batch_builds_one_write_batch(self, client, store):
        batch = client.batch.return_value
        ops = [
            WriteOperation.upsert("users/u1/programs/p2", {"name": "P2"}),
            WriteOperation.delete("users/u1/programs/p1"),
        ]

        store.commit_batch(ops).result(timeout=5)

        client.batch.assert_called_once()
        batch.set.assert_called_once_with(client.document.return_value, {"name": "P2"})
        batch.delete.assert_called_once_with(client.document.return_value)
        batch.commit.assert_called_once()

    def test_commit_failure_surfaces_on_future(self, client, store):
        client.batch.return_value.commit.side_effect = RuntimeError("aborted")
        future = store.commit_batch([WriteOperation.delete("users/u1/programs/p1")])
        with pytest.raises(RuntimeError, match="aborted"):
            future.result(timeout=5)

    def test_oversized_batch_rejected(self, store):
        ops = [WriteOperation.delete(f"users/u1/programs/p{i}") for i in range(FIRESTORE_MAX_BATCH_OPERATIONS + 1)]
        with pytest.raises(ValueError):
            store.commit_batch(ops)


@pytest.mark.unit
class TestIdsAndTime:
    def test_new_id_uses_client_auto_id(self, client, store):
        client.collection.return_value.document.return_value.id = "auto123"
        assert store.new_id() == "auto123"

    def test_now_is_utc(self, store):
        assert store.now().tzinfo == timezone.utc


@pytest.mark.unit
class TestClientFactory:
    def test_creates_client_for_project(self, monkeypatch):
        monkeypatch.delenv("FIRESTORE_EMULATOR_HOST", raising=False)
        with patch("infrastructure.db.firestore_document_store.firestore.Client") as mock_client:
            create_firestore_client(project_id="fittrack", database="(default)")
        mock_client.assert_called_once_with(project="fittrack", database="(default)")

    def test_emulator_host_exported(self, monkeypatch):
        # setenv first so monkeypatch restores the original value afterwards
        monkeypatch.setenv("FIRESTORE_EMULATOR_HOST", "unset")
        with patch("infrastructure.db.firestore_document_store.firestore.Client"):
            create_firestore_client(project_id="demo", emulator_host="localhost:8080")
        assert os.environ["FIRESTORE_EMULATOR_HOST"] == "localhost:8080"
