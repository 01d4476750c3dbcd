"""
Tests for api/main.py

Database is an in-memory SQLite; OCR and execution use fakes.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from api.main import app, get_codeify_service
from app.database import get_db, init_db, make_engine
from app.services import CodeifyService
from core.config import MAX_SURFACE_EXTENT
from core.jdoodle_client import JDoodleClient
from core.languages import PYTHON_TEMPLATE
from core.types import RecognitionError
from core.workflow import CodeifyPipeline

from tests.fakes import FakeEngine, FakeSession, registry_with

SURFACE = {
    "width": 40,
    "height": 20,
    "strokes": [{"points": [[2, 2], [38, 18]], "width": 2.0}],
}


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def http():
    return FakeSession()


@pytest.fixture
def service(engine, http):
    return CodeifyService(
        CodeifyPipeline(registry_with(engine), scale=1.0),
        JDoodleClient("id", "secret", session=http),
    )


@pytest.fixture
def client(service):
    db_engine = make_engine("sqlite://")
    init_db(bind=db_engine)
    SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = SessionTesting()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_codeify_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_file(client, name="hello") -> dict:
    response = client.post("/files", json={"name": name})
    assert response.status_code == 200
    return response.json()


class TestFiles:
    def test_create_and_get(self, client):
        created = create_file(client)
        assert created["name"] == "hello"
        assert created["script"] == ""
        assert created["has_drawing"] is False

        response = client.get(f"/files/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_create_blank_name(self, client):
        assert client.post("/files", json={"name": " "}).status_code == 400

    def test_list(self, client):
        create_file(client, "a")
        create_file(client, "b")
        names = {f["name"] for f in client.get("/files").json()}
        assert names == {"a", "b"}

    def test_update_script(self, client):
        file_id = create_file(client)["id"]
        response = client.put(f"/files/{file_id}/script", json={"script": "print(1)"})
        assert response.status_code == 200
        assert response.json()["script"] == "print(1)"

    def test_delete(self, client):
        file_id = create_file(client)["id"]
        assert client.delete(f"/files/{file_id}").status_code == 200
        assert client.get(f"/files/{file_id}").status_code == 404
        assert client.delete(f"/files/{file_id}").status_code == 404


class TestReconstruct:
    def test_reconstruct(self, client):
        response = client.post("/reconstruct", json={"text": "for i in x:\nprint(i)\n\ntotal = 0"})
        assert response.status_code == 200
        assert response.json() == {"code": "for i in x:\n    print(i)\n\n    total = 0\n"}


class TestCodeify:
    def test_codeify_merges_into_template(self, client, engine):
        engine.results.append("if x:\nreturn 1")
        file_id = create_file(client)["id"]

        response = client.post(f"/files/{file_id}/codeify", json={"surface": SURFACE})

        assert response.status_code == 200
        body = response.json()
        assert body["recognized_text"] == "if x:\nreturn 1"
        assert body["reconstructed_text"] == "if x:\n    return 1\n"
        assert body["script"] == PYTHON_TEMPLATE + "\nif x:\n    return 1\n"

        stored = client.get(f"/files/{file_id}").json()
        assert stored["script"] == body["script"]
        assert stored["has_drawing"] is True

    def test_empty_canvas(self, client, engine):
        file_id = create_file(client)["id"]
        response = client.post(
            f"/files/{file_id}/codeify",
            json={"surface": {"width": 40, "height": 20, "strokes": []}},
        )
        assert response.status_code == 422
        assert engine.calls == 0
        assert client.get(f"/files/{file_id}").json()["script"] == ""

    def test_recognition_failure_keeps_script(self, client, engine):
        engine.results.append(RecognitionError("No text regions detected"))
        file_id = create_file(client)["id"]
        client.put(f"/files/{file_id}/script", json={"script": "x = 1"})

        response = client.post(f"/files/{file_id}/codeify", json={"surface": SURFACE})

        assert response.status_code == 422
        assert "No text regions detected" in response.json()["detail"]
        assert client.get(f"/files/{file_id}").json()["script"] == "x = 1"

    def test_missing_file(self, client, service):
        assert client.post("/files/nope/codeify", json={"surface": SURFACE}).status_code == 404
        assert len(service._locks) == 0

    def test_repeated_codeify_merges_both(self, client, engine):
        engine.results.extend(["a = 1", "b = 2"])
        file_id = create_file(client)["id"]

        first = client.post(f"/files/{file_id}/codeify", json={"surface": SURFACE})
        second = client.post(f"/files/{file_id}/codeify", json={"surface": SURFACE})

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["script"] == PYTHON_TEMPLATE + "\nb = 2\n\na = 1\n"

    def test_oversized_surface_rejected(self, client, engine):
        file_id = create_file(client)["id"]
        surface = dict(SURFACE, width=MAX_SURFACE_EXTENT + 1)

        response = client.post(f"/files/{file_id}/codeify", json={"surface": surface})

        assert response.status_code == 422
        assert engine.calls == 0

    def test_unsupported_language(self, client, engine):
        file_id = create_file(client)["id"]
        response = client.post(
            f"/files/{file_id}/codeify",
            json={"surface": SURFACE, "language": "Cobol"},
        )
        assert response.status_code == 400
        assert engine.calls == 0


class TestExecute:
    def test_execute(self, client, http):
        http.responses.append((200, '{"output": "1\\n"}'))
        file_id = create_file(client)["id"]
        client.put(f"/files/{file_id}/script", json={"script": "print(1)"})

        response = client.post(f"/files/{file_id}/execute", json={"language": "Python 3"})

        assert response.status_code == 200
        assert response.json() == {"file_id": file_id, "language": "Python 3", "output": "1\n"}
        assert http.calls[0]["json"]["script"] == "print(1)"

    def test_bad_status(self, client, http):
        http.responses.append((401, "Unauthorized"))
        file_id = create_file(client)["id"]
        response = client.post(f"/files/{file_id}/execute", json={})
        assert response.status_code == 502

    def test_unsupported_language_makes_no_call(self, client, http):
        file_id = create_file(client)["id"]
        response = client.post(f"/files/{file_id}/execute", json={"language": "Cobol"})
        assert response.status_code == 400
        assert http.calls == []

    def test_missing_file(self, client):
        assert client.post("/files/nope/execute", json={}).status_code == 404


class TestMeta:
    def test_languages(self, client):
        body = client.get("/languages").json()
        assert body["default"] == "Python 3"
        assert "C++" in body["languages"]

    def test_root(self, client):
        assert client.get("/").json()["message"] == "CodeScribe API"
