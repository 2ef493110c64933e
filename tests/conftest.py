import pytest
from fastapi.testclient import TestClient

from quiz_backend.core.config import Settings
from quiz_backend.core.errors import PersistenceError
from quiz_backend.main import create_app


class FakeStore:
    def __init__(self, fail_with=None, raise_exc=None):
        self.collection = "submissions"
        self.rows = []
        self.calls = 0
        self.fail_with = fail_with
        self.raise_exc = raise_exc

    def insert(self, record):
        self.calls += 1
        if self.raise_exc is not None:
            raise self.raise_exc
        if self.fail_with:
            raise PersistenceError(f"Database error: {self.fail_with}")
        row = {"id": f"doc-{len(self.rows) + 1}", **record}
        self.rows.append(row)
        return [row]


@pytest.fixture
def static_dir(tmp_path):
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<h1>Quizzes</h1>")
    (root / "chap2.html").write_text("<h1>Chapter 2</h1>")
    return root


@pytest.fixture
def make_settings(static_dir):
    def _make(**overrides):
        values = {"STATIC_DIR": str(static_dir)}
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def make_client(make_settings):
    def _make(store, **overrides):
        app = create_app(make_settings(**overrides), store=store)
        return TestClient(app, raise_server_exceptions=False)
    return _make


@pytest.fixture
def client(make_client, store):
    return make_client(store)


@pytest.fixture
def payload():
    return {
        "name": "Ada Lovelace",
        "id_number": "2023-0042",
        "section": "BSCS-2A",
        "email": "ada@example.com",
        "phone": "555-0100",
        "score": 8,
        "totalQuestions": 10,
        "quizChapter": 2,
        "course_chapter_formatted": "Chapter 2: Variables and Types",
    }
