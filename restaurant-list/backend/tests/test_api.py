from __future__ import annotations

import json

from fastapi.testclient import TestClient

from main import app


def _values(best_match: float, distance: int) -> dict:
    return {
        "bestMatch": best_match,
        "newest": 1.0,
        "ratingAverage": 4.0,
        "distance": distance,
        "popularity": 1.0,
        "averageProductPrice": 1000,
        "deliveryCosts": 0,
        "minCost": 1000,
    }


def _write_data(tmp_path) -> str:
    path = tmp_path / "restaurants.json"
    payload = {
        "restaurants": [
            {"name": "Sushi One", "status": "open", "sortingValues": _values(3.0, 1618)},
            {"name": "Pizza Heart", "status": "open", "sortingValues": _values(5.0, 1005)},
            {"name": "Mama Mia", "status": "closed", "sortingValues": _values(9.0, 200)},
        ]
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def _env(monkeypatch, path: str) -> None:
    monkeypatch.setenv("RESTAURANTS_PATH", path)
    monkeypatch.delenv("DEFAULT_SORT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


def test_list_sort_search_and_select(tmp_path, monkeypatch) -> None:
    _env(monkeypatch, _write_data(tmp_path))
    with TestClient(app) as client:
        body = client.get("/restaurants").json()
        assert body["sort"] == "bestMatch"
        assert [r["title"] for r in body["rows"]] == ["Pizza Heart", "Sushi One", "Mama Mia"]
        assert body["rows"][0]["subtitle"] == "open\nBest match: 5.0"

        body = client.post("/sort", json={"option": "distance"}).json()
        assert [r["title"] for r in body["rows"]] == ["Pizza Heart", "Sushi One", "Mama Mia"]
        assert body["rows"][1]["subtitle"] == "open\nDistance: 1618"

        body = client.post("/search", json={"text": "SUSHI"}).json()
        assert [r["title"] for r in body["rows"]] == ["Sushi One"]

        selected = client.post("/restaurants/0/select").json()
        assert selected["name"] == "Sushi One"
        assert client.post("/restaurants/3/select").status_code == 404


def test_unknown_sort_option_is_rejected(tmp_path, monkeypatch) -> None:
    _env(monkeypatch, _write_data(tmp_path))
    with TestClient(app) as client:
        assert client.post("/sort", json={"option": "cheapest"}).status_code == 400
        options = client.get("/sort-options").json()
        assert options[0] == {"title": "Best match", "option_key": "bestMatch"}
        assert len(options) == 8


def test_missing_data_reports_unavailable(tmp_path, monkeypatch) -> None:
    _env(monkeypatch, str(tmp_path / "missing.json"))
    with TestClient(app) as client:
        assert client.get("/healthz").json() == {"status": "ok"}
        resp = client.get("/restaurants")
        assert resp.status_code == 503
