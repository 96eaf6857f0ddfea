import inspect

from fastapi.testclient import TestClient
import pytest

from splitter_service.main import app


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_languages(client: TestClient):
    resp = client.get("/split/languages")
    assert resp.status_code == 200
    assert {"python", "markdown", "js"} <= set(resp.json()["languages"])


def test_split_text(client: TestClient):
    body = {"text": "foo bar baz 123", "chunk_size": 3, "chunk_overlap": 0}
    resp = client.post("/split", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["profile"] == "default"
    assert data["total_chunks"] == 4
    assert [c["content"] for c in data["chunks"]] == ["foo", "bar", "baz", "123"]
    assert [c["start_offset"] for c in data["chunks"]] == [0, 4, 8, 12]
    assert [c["chunk_index"] for c in data["chunks"]] == [0, 1, 2, 3]
    ids = [c["chunk_id"] for c in data["chunks"]]
    assert len(set(ids)) == 4
    assert all(i.startswith("chunk_") for i in ids)

    again = client.post("/split", json=body).json()
    assert [c["chunk_id"] for c in again["chunks"]] == ids


def test_split_with_profile_and_config(client: TestClient):
    body = {
        "text": "# A\nintro\n## B\nbody",
        "profile": "markdown",
        "chunk_size": 12,
        "chunk_overlap": 0,
        "config": {"strip_whitespace": True},
    }
    resp = client.post("/split", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["profile"] == "markdown"
    assert [c["content"] for c in data["chunks"]] == ["# A\nintro", "## B\nbody"]


def test_invalid_overlap_is_422(client: TestClient):
    resp = client.post("/split", json={"text": "abc", "chunk_size": 3, "chunk_overlap": 3})
    assert resp.status_code == 422


def test_bad_config_type_is_422(client: TestClient):
    resp = client.post("/split", json={"text": "abc", "config": {"keep_separator": "middle"}})
    assert resp.status_code == 422


def test_unknown_profile_is_400(client: TestClient):
    resp = client.post("/split", json={"text": "abc", "profile": "nope"})
    assert resp.status_code == 400


def test_strict_unknown_language_is_400(client: TestClient):
    body = {"text": "abc", "language": "klingon", "config": {"strict_language": True}}
    resp = client.post("/split", json=body)
    assert resp.status_code == 400
    assert "klingon" in resp.json()["detail"]


def test_split_documents(client: TestClient):
    body = {
        "documents": [
            {"page_content": "foo bar", "metadata": {"source": "a.txt"}},
            {"page_content": "baz", "metadata": {"source": "b.txt"}},
        ],
        "chunk_size": 3,
        "chunk_overlap": 0,
        "config": {"add_start_index": True},
    }
    resp = client.post("/split/documents", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["documents_split"] == 2
    assert data["total_chunks"] == 3
    assert data["documents"] == [
        {"page_content": "foo", "metadata": {"source": "a.txt", "start_index": 0}},
        {"page_content": "bar", "metadata": {"source": "a.txt", "start_index": 4}},
        {"page_content": "baz", "metadata": {"source": "b.txt", "start_index": 0}},
    ]


def test_split_documents_requires_documents(client: TestClient):
    resp = client.post("/split/documents", json={"documents": []})
    assert resp.status_code == 422


def test_misspelled_config_field_is_422(client: TestClient):
    resp = client.post("/split", json={"text": "abc", "config": {"chunk_overlp": 5}})
    assert resp.status_code == 422
    assert any("chunk_overlp" in err["loc"] for err in resp.json()["detail"])


def test_split_handlers_run_in_threadpool():
    endpoints = {route.path: route.endpoint for route in app.routes if route.path.startswith("/split")}
    assert endpoints.keys() == {"/split", "/split/documents", "/split/languages"}
    assert not any(inspect.iscoroutinefunction(endpoint) for endpoint in endpoints.values())
