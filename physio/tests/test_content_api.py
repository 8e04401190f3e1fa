import pytest
from fastapi.testclient import TestClient

from physio.api.api_run import app
from physio.infra.Content_Repository import ContentRepository, get_content_repository


@pytest.fixture
def client(tmp_path):
    repo = ContentRepository(tmp_path / "content.json")
    app.dependency_overrides[get_content_repository] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_announcements_crud(client):
    first = client.post("/api/announcements", json={"title": "Clinic closed", "content": "Monday only"}).json()
    second = client.post("/api/announcements", json={"title": "New videos", "content": "Check them out"}).json()
    assert first["id"].startswith("ann_")

    listed = client.get("/api/announcements").json()
    assert [a["id"] for a in listed] == [second["id"], first["id"]]

    resp = client.put(f"/api/announcements/{first['id']}", json={"title": "Clinic open", "content": "All week"})
    assert resp.json()["title"] == "Clinic open"
    assert resp.json()["createdAt"] == first["createdAt"]

    assert client.delete(f"/api/announcements/{first['id']}").status_code == 204
    assert client.delete(f"/api/announcements/{first['id']}").status_code == 404
    assert len(client.get("/api/announcements").json()) == 1


def test_journals_crud(client):
    payload = {"title": "Exercise therapy for knee OA", "publisher": "BMJ", "year": 2021,
               "link": "https://example.org/knee"}
    journal = client.post("/api/journals", json=payload).json()
    assert journal["id"].startswith("journal_")

    resp = client.put(f"/api/journals/{journal['id']}", json={**payload, "year": 2022})
    assert resp.json()["year"] == 2022
    assert client.put("/api/journals/missing", json=payload).status_code == 404

    assert client.post("/api/journals", json={**payload, "link": "ftp://x"}).status_code == 422
    assert client.delete(f"/api/journals/{journal['id']}").status_code == 204
    assert client.get("/api/journals").json() == []
