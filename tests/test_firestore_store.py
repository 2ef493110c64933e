from datetime import datetime, timezone

import pytest
from google.api_core.exceptions import PermissionDenied, ServiceUnavailable
from google.cloud import firestore

from quiz_backend.core.errors import PersistenceError
from quiz_backend.db.firestore import SubmissionStore

CREATED = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


class FakeWriteResult:
    def __init__(self, update_time):
        self.update_time = update_time


class FakeDocRef:
    def __init__(self, db, doc_id, fail_on_set=None):
        self.db = db
        self.id = doc_id
        self.fail_on_set = fail_on_set

    def set(self, data):
        if self.fail_on_set:
            raise self.fail_on_set
        stored = dict(data)
        if stored.get("created_at") is firestore.SERVER_TIMESTAMP:
            stored["created_at"] = CREATED
        self.db.docs[self.id] = stored
        self.db.calls.append("set")
        return FakeWriteResult(CREATED)

    def get(self):
        self.db.calls.append("get")
        raise ServiceUnavailable("read timed out")


class FakeCollection:
    def __init__(self, db, name):
        self.db = db
        self.name = name

    def document(self):
        return FakeDocRef(self.db, f"{self.name}-{len(self.db.docs) + 1}", self.db.fail_on_set)


class FakeClient:
    def __init__(self, fail_on_set=None):
        self.docs = {}
        self.calls = []
        self.collections = []
        self.fail_on_set = fail_on_set

    def collection(self, name):
        self.collections.append(name)
        return FakeCollection(self, name)


RECORD = {
    "visitor_name": "Ada Lovelace",
    "visitor_id": "2023-0042",
    "visitor_class": "BSCS-2A",
    "visitor_email": "ada@example.com",
    "visitor_phone": "555-0100",
    "score": 8,
    "total_questions": 10,
    "quiz_chapter": 2,
    "course_chapter_formatted": "Chapter 2",
}


def test_insert_returns_stored_row():
    client = FakeClient()
    store = SubmissionStore(client, "quiz_results")

    rows = store.insert(RECORD)

    assert client.collections == ["quiz_results"]
    assert len(rows) == 1
    assert rows[0]["id"] == "quiz_results-1"
    assert rows[0]["visitor_name"] == "Ada Lovelace"
    assert rows[0]["created_at"] == CREATED.isoformat()
    assert len(client.docs) == 1


def test_each_insert_creates_a_new_document():
    client = FakeClient()
    store = SubmissionStore(client)
    store.insert(RECORD)
    store.insert(RECORD)
    assert len(client.docs) == 2


@pytest.mark.parametrize("exc, reason", [
    (ServiceUnavailable("backend unavailable"), "backend unavailable"),
    (PermissionDenied("missing permissions"), "missing permissions"),
])
def test_store_errors_are_wrapped(exc, reason):
    store = SubmissionStore(FakeClient(fail_on_set=exc))

    with pytest.raises(PersistenceError) as info:
        store.insert(RECORD)

    assert str(info.value) == f"Database error: {reason}"


def test_insert_is_a_single_write():
    client = FakeClient()
    store = SubmissionStore(client)

    rows = store.insert(RECORD)

    assert client.calls == ["set"]
    assert rows[0]["id"] in client.docs
    assert rows[0]["score"] == 8


def test_created_at_comes_from_write_result():
    client = FakeClient()
    store = SubmissionStore(client)
    stored = client.docs

    rows = store.insert(RECORD)

    assert rows[0]["created_at"] == CREATED.isoformat()
    assert stored[rows[0]["id"]]["created_at"] == CREATED
