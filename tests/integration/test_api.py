"""Integration tests for the API endpoints."""

import pytest
from fastapi.testclient import TestClient
from lexicon_search.core.exceptions import IndexNotBuiltError
from lexicon_search.core.loader import parse_entries
from lexicon_search.engine_instance import search_engine
from lexicon_search.main import app


SAMPLE_ENTRIES = [
    {"lemma": "vén", "pos": "s.m.", "senses": [{"text": "vino"}]},
    {"lemma": "furmaśén", "pos": "s.m.", "senses": [{"text": "forma di formaggio piccola"}]},
    {"lemma": "pan", "pos": "s.m.", "senses": [{"label": "a", "text": "pane"}, {"label": "b", "text": "pagnotta"}]},
    {"lemma": "panèra", "pos": "s.f.", "senses": [{"text": "cestino del pane"}]},
    {"lemma": "furmâi", "pos": "s.m.", "senses": [{"text": "formaggio"}]},
]


class TestAPI:
    """Integration tests for API endpoints."""

    @pytest.fixture(autouse=True)
    def loaded_engine(self):
        """Load the sample lexicon into the shared engine."""
        search_engine.load_entries(parse_entries(SAMPLE_ENTRIES))
        search_engine.reset_stats()
        yield search_engine
        search_engine.clear()

    @pytest.fixture
    def client(self):
        """Create a test client."""
        return TestClient(app)

    def test_root_endpoint(self, client):
        """Test the root endpoint."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Lexicon Search"
        assert data["version"] == "1.0.0"
        assert data["status"] == "running"

    def test_api_info_endpoint(self, client):
        """Test the API info endpoint."""
        response = client.get("/api")
        assert response.status_code == 200

        data = response.json()
        assert "endpoints" in data
        assert "features" in data
        assert data["paging"]["page_size"] == 40

    def test_search_forward(self, client):
        """Test forward search."""
        response = client.get("/api/v1/search", params={"q": "furm"})
        assert response.status_code == 200

        data = response.json()
        assert data["mode"] == "forward"
        assert data["total_results"] == 2
        assert data["total_entries"] == 5
        assert [r["lemma"] for r in data["results"]] == ["furmâi", "furmaśén"]
        assert [r["rank"] for r in data["results"]] == [1, 1]

    def test_search_reverse(self, client):
        """Test reverse search."""
        response = client.get("/api/v1/search", params={"q": "pane", "mode": "reverse"})
        assert response.status_code == 200

        data = response.json()
        assert data["mode"] == "reverse"
        assert [r["lemma"] for r in data["results"]] == ["pan", "panèra"]
        assert [r["rank"] for r in data["results"]] == [0, 0]

    def test_search_accent_insensitive(self, client):
        """Test that accents in the query are ignored."""
        plain = client.get("/api/v1/search", params={"q": "ven"}).json()
        accented = client.get("/api/v1/search", params={"q": "VÉN"}).json()

        assert plain["results"] == accented["results"]
        assert accented["normalized_query"] == "ven"

    def test_search_empty_query(self, client):
        """Test that an empty query lists the collection in order."""
        response = client.get("/api/v1/search")
        assert response.status_code == 200

        data = response.json()
        assert data["total_results"] == 5
        assert [r["position"] for r in data["results"]] == [0, 1, 2, 3, 4]

    def test_search_paging(self, client):
        """Test offset and limit paging."""
        first = client.get("/api/v1/search", params={"limit": 2}).json()
        last = client.get("/api/v1/search", params={"offset": 4, "limit": 2}).json()

        assert [r["position"] for r in first["results"]] == [0, 1]
        assert first["has_more"] is True
        assert first["limit"] == 2
        assert [r["position"] for r in last["results"]] == [4]
        assert last["has_more"] is False

    def test_search_raw_text(self, client):
        """Test that raw sense text is included on request."""
        plain = client.get("/api/v1/search", params={"q": "pan"}).json()
        raw = client.get("/api/v1/search", params={"q": "pan", "raw": True}).json()

        assert plain["results"][0]["raw_text"] is None
        assert raw["results"][0]["raw_text"] == "pane pagnotta"

    def test_search_no_match(self, client):
        """Test search with no matches."""
        response = client.get("/api/v1/search", params={"q": "xyz123"})
        assert response.status_code == 200

        data = response.json()
        assert data["total_results"] == 0
        assert data["results"] == []

    def test_search_query_too_long(self, client):
        """Test that overlong queries are rejected."""
        response = client.get("/api/v1/search", params={"q": "a" * 101})
        assert response.status_code == 400

    def test_search_invalid_mode(self, client):
        """Test that an unknown mode is a validation error."""
        response = client.get("/api/v1/search", params={"q": "pan", "mode": "sideways"})
        assert response.status_code == 422

    def test_search_with_body(self, client):
        """Test search with request body."""
        request_data = {
            "query": "formaggio",
            "mode": "reverse",
            "limit": 1,
            "include_raw": True
        }

        response = client.post("/api/v1/search", json=request_data)
        assert response.status_code == 200

        data = response.json()
        assert data["total_results"] == 2
        assert data["has_more"] is True
        assert data["results"][0]["lemma"] == "furmâi"
        assert data["results"][0]["raw_text"] == "formaggio"

    def test_search_with_body_query_too_long(self, client):
        """Test that the body query follows the configured length limit."""
        response = client.post("/api/v1/search", json={"query": "a" * 101})
        assert response.status_code == 400

    def test_search_lexicon_error(self, client, monkeypatch):
        """Test that index errors during search reach the lexicon error handler."""
        def stale_search(**kwargs):
            raise IndexNotBuiltError("Index table was not built from this collection of 5 entries")

        monkeypatch.setattr(search_engine, "search", stale_search)

        response = client.get("/api/v1/search", params={"q": "pan"})
        assert response.status_code == 422

        data = response.json()
        assert data["error"] == "IndexNotBuiltError"
        assert "5 entries" in data["message"]

    def test_count_entries(self, client):
        """Test the entry count endpoint."""
        response = client.get("/api/v1/entries/count")
        assert response.status_code == 200
        assert response.json() == {"total_entries": 5}

    def test_get_entry(self, client):
        """Test fetching an entry by position."""
        response = client.get("/api/v1/entries/2")
        assert response.status_code == 200

        data = response.json()
        assert data["lemma"] == "pan"
        assert [sense["label"] for sense in data["senses"]] == ["a", "b"]

    def test_get_entry_not_found(self, client):
        """Test fetching a position past the end."""
        response = client.get("/api/v1/entries/99")
        assert response.status_code == 404

    def test_load_entries(self, client):
        """Test replacing the collection."""
        response = client.post("/api/v1/entries", json={
            "entries": [{"lemma": "lat", "senses": [{"text": "latte"}]}]
        })
        assert response.status_code == 200
        assert response.json()["total_entries"] == 1

        data = client.get("/api/v1/search", params={"q": "latte", "mode": "reverse"}).json()
        assert [r["lemma"] for r in data["results"]] == ["lat"]

    def test_load_entries_invalid(self, client):
        """Test that entries without senses are rejected."""
        response = client.post("/api/v1/entries", json={"entries": [{"lemma": "lat"}]})
        assert response.status_code == 422

        assert client.get("/api/v1/entries/count").json() == {"total_entries": 5}

    def test_load_entries_empty_lemma(self, client):
        """Test that blank headwords are rejected."""
        response = client.post("/api/v1/entries", json={"entries": [{"lemma": " ", "senses": []}]})
        assert response.status_code == 422

    def test_health_endpoint(self, client):
        """Test the health check."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["lexicon"] == "healthy"

    def test_health_degraded_without_lexicon(self, client, loaded_engine):
        """Test that an empty lexicon is reported as degraded."""
        loaded_engine.clear()

        assert client.get("/api/v1/health").json()["status"] == "degraded"
        assert client.get("/api/v1/health/ready").status_code == 503

    def test_readiness_and_liveness(self, client):
        """Test readiness and liveness checks."""
        ready = client.get("/api/v1/health/ready")
        live = client.get("/api/v1/health/live")

        assert ready.status_code == 200
        assert ready.json()["index_stats"]["total_entries"] == 5
        assert live.status_code == 200
        assert live.json()["status"] == "alive"

    def test_status_endpoint(self, client):
        """Test the status endpoint."""
        response = client.get("/api/v1/status")
        assert response.status_code == 200

        data = response.json()
        assert data["configuration"]["default_mode"] == "forward"
        assert data["statistics"]["index_stats"]["total_entries"] == 5

    def test_metrics_endpoint(self, client):
        """Test the metrics endpoint."""
        client.get("/api/v1/search", params={"q": "furm"})
        client.get("/api/v1/search", params={"q": "pane", "mode": "reverse"})
        client.get("/api/v1/search", params={"q": "xyz123"})

        response = client.get("/api/v1/metrics")
        assert response.status_code == 200

        data = response.json()
        assert data["total_queries"] == 3
        assert data["forward_queries"] == 2
        assert data["reverse_queries"] == 1
        assert data["no_match_rate"] == pytest.approx(1 / 3)
        assert data["total_entries"] == 5
        assert data["memory_usage_mb"] > 0

    def test_metrics_reset(self, client):
        """Test resetting metrics."""
        client.get("/api/v1/search", params={"q": "furm"})

        assert client.post("/api/v1/metrics/reset").status_code == 200
        assert client.get("/api/v1/metrics").json()["total_queries"] == 0
