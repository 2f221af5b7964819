# tests/test_api.py
"""
Tests for the HTTP API (graph_backend/main.py).

Each test gets its own app, so sessions never leak between tests.
"""
import json

import pytest
from fastapi.testclient import TestClient

from graph_backend.config import Settings
from graph_backend.main import create_app


@pytest.fixture
def client():
    return TestClient(create_app(Settings.from_env({})))


@pytest.fixture
def loaded_client(client, sample_text):
    response = client.post("/api/graph/parse", json={"text": sample_text})
    assert response.status_code == 200
    return client


# ═════════════════════════════════════════════════════════════════
#  GRAPH STATE
# ═════════════════════════════════════════════════════════════════

class TestGraphEndpoints:

    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}

    def test_initial_state(self, client):
        data = client.get("/api/graph").json()
        assert data["graph"] == {"nodes": [], "edges": [], "is_directed": False}
        assert data["text"] == {"edges": "", "matrix": ""}
        assert data["node_range"] is None

    def test_parse_edge_list(self, loaded_client):
        data = loaded_client.get("/api/graph").json()
        assert data["stats"]["node_count"] == 6
        assert data["stats"]["edge_count"] == 8
        assert data["stats"]["has_cycle"] is True
        assert data["node_range"] == [0, 5]

    def test_parse_matrix(self, client):
        response = client.post(
            "/api/graph/parse",
            json={"text": "0 1\n1 0", "format": "matrix"},
        )
        data = response.json()
        assert data["format"] == "matrix"
        assert data["stats"]["edge_count"] == 1
        assert data["stats"]["is_tree"] is True
        assert data["text"]["edges"] == "0 1 1"

    def test_parse_malformed_matrix(self, loaded_client):
        response = loaded_client.post(
            "/api/graph/parse",
            json={"text": "0 1\n1", "format": "matrix"},
        )
        assert response.status_code == 400
        assert "Row 1" in response.json()["detail"]
        assert loaded_client.get("/api/graph").json()["stats"]["edge_count"] == 8

    def test_parse_unknown_format(self, client):
        response = client.post("/api/graph/parse", json={"text": "0 1", "format": "csv"})
        assert response.status_code == 422

    def test_analyze_is_stateless(self, client, sample_text):
        response = client.post("/api/graph/analyze", json={"text": sample_text, "directed": True})
        data = response.json()
        assert data["stats"]["is_directed"] is True
        assert data["stats"]["edge_count"] == 8
        assert data["summary"]["valid"] is True
        assert client.get("/api/graph").json()["stats"]["node_count"] == 0

    def test_analyze_reports_issues(self, client):
        data = client.post("/api/graph/analyze", json={"text": "0 0\n5"}).json()
        types = sorted(issue["type"] for issue in data["issues"])
        assert types == ["info", "warning"]

    def test_toggle_directed(self, loaded_client):
        data = loaded_client.patch("/api/graph", json={"directed": True}).json()
        assert data["graph"]["is_directed"] is True
        assert all(edge["directed"] for edge in data["graph"]["edges"])

    def test_clear(self, loaded_client):
        data = loaded_client.post("/api/graph/clear").json()
        assert data["graph"]["nodes"] == []


# ═════════════════════════════════════════════════════════════════
#  NODES & EDGES
# ═════════════════════════════════════════════════════════════════

class TestEditing:

    def test_create_nodes_with_auto_ids(self, client):
        first = client.post("/api/nodes", json={}).json()
        second = client.post("/api/nodes", json={"x": 5, "y": 6}).json()
        assert first["node"]["id"] == 0
        assert second["node"] == {"id": 1, "x": 5.0, "y": 6.0}

    def test_create_duplicate_node(self, client):
        client.post("/api/nodes", json={"id": 3})
        response = client.post("/api/nodes", json={"id": 3})
        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    def test_create_negative_node(self, client):
        assert client.post("/api/nodes", json={"id": -1}).status_code == 422

    def test_create_edge(self, client):
        client.post("/api/nodes", json={})
        client.post("/api/nodes", json={})
        data = client.post("/api/edges", json={"source": 0, "target": 1, "weight": 4}).json()
        assert data["edge"]["source"] == 0
        assert data["edge"]["weight"] == 4
        assert data["edge"]["directed"] is False

    def test_create_edge_unknown_node(self, client):
        client.post("/api/nodes", json={})
        response = client.post("/api/edges", json={"source": 0, "target": 9})
        assert response.status_code == 400
        assert "unknown node: 9" in response.json()["detail"]

    def test_delete_node_cascades(self, loaded_client):
        assert loaded_client.delete("/api/nodes/4").json() == {"success": True}
        data = loaded_client.get("/api/graph").json()
        assert data["stats"]["node_count"] == 5
        assert data["stats"]["edge_count"] == 4

    def test_delete_missing_node(self, client):
        assert client.delete("/api/nodes/42").status_code == 404

    def test_delete_edge(self, loaded_client):
        edge_id = loaded_client.get("/api/graph").json()["graph"]["edges"][0]["id"]
        assert loaded_client.delete(f"/api/edges/{edge_id}").status_code == 200
        assert loaded_client.delete(f"/api/edges/{edge_id}").status_code == 404


# ═════════════════════════════════════════════════════════════════
#  REPORTS, LAYOUT, EXPORT
# ═════════════════════════════════════════════════════════════════

class TestReports:

    def test_stats(self, loaded_client):
        stats = loaded_client.get("/api/graph/stats").json()["stats"]
        assert stats["diameter"] == 3
        assert stats["radius"] == 2
        assert stats["is_bipartite"] is False

    def test_validate(self, client):
        data = client.get("/api/graph/validate").json()
        assert data["summary"]["total"] == 1
        assert data["issues"][0]["type"] == "info"

    def test_layout(self, loaded_client):
        response = loaded_client.post("/api/layout", json={"strategy": "grid"})
        assert response.json() == {"success": True, "strategy": "grid"}

    def test_layout_unknown_strategy(self, loaded_client):
        assert loaded_client.post("/api/layout", json={"strategy": "force"}).status_code == 422

    def test_layout_without_nodes(self, client):
        response = client.post("/api/layout", json={})
        assert response.status_code == 400
        assert response.json()["detail"] == "No nodes to layout"

    def test_export_edge_list(self, loaded_client, sample_text):
        response = loaded_client.get("/api/graph/export/edges")
        assert response.text == sample_text
        assert response.headers["content-type"].startswith("text/plain")

    def test_export_json(self, loaded_client):
        response = loaded_client.get("/api/graph/export/json")
        assert response.headers["content-type"].startswith("application/json")
        data = json.loads(response.text)
        assert len(data["nodes"]) == 6
        assert data["isDirected"] is False

    def test_export_unknown_format(self, loaded_client):
        assert loaded_client.get("/api/graph/export/png").status_code == 400


class TestAppIsolation:

    def test_apps_do_not_share_sessions(self, sample_text):
        first = TestClient(create_app(Settings()))
        second = TestClient(create_app(Settings()))
        first.post("/api/graph/parse", json={"text": sample_text})
        assert second.get("/api/graph").json()["stats"]["node_count"] == 0
