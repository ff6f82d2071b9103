from fastapi.testclient import TestClient

import main


def test_lifespan_waits_for_database_before_serving(monkeypatch):
    calls = []
    monkeypatch.setattr(main, "wait_for_database", lambda: calls.append("wait"))

    with TestClient(main.create_app()) as client:
        assert calls == ["wait"]
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert calls == ["wait"]
