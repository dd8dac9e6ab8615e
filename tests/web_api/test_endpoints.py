"""
Web API Endpoint Tests
======================
Integration tests for the HTTP surface.

Usage:
    pip install code-quality-analyzer[api]
    pytest tests/web_api/test_endpoints.py -v
"""
import pytest
from pathlib import Path


# Skip entire module if FastAPI not installed
pytest.importorskip("fastapi")


from fastapi.testclient import TestClient
from code_quality.web_api.main import app


FIXTURE_REPO = Path(__file__).resolve().parents[1] / "fixtures" / "repos" / "java_mixed"


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


# ============================================================================
# HEALTH ENDPOINTS
# ============================================================================

class TestHealthEndpoint:
    """Tests for GET /health and GET /ready"""

    def test_health_returns_ok_status(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_health_includes_version(self, client):
        from code_quality import __version__

        assert client.get("/health").json()["version"] == __version__

    def test_ready_parses_probe(self, client):
        """Readiness means the Java grammar loads and parses."""
        data = client.get("/ready").json()
        assert data == {"status": "ready", "language": "java"}

    def test_root_describes_api(self, client):
        data = client.get("/").json()
        assert data["name"] == "Code Quality API"


# ============================================================================
# ANALYZE ENDPOINT
# ============================================================================

class TestAnalyzeEndpoint:
    """Tests for POST /analyze/"""

    def test_analyze_directory(self, client):
        response = client.post("/analyze/", json={"path": str(FIXTURE_REPO)})
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "complete"
        assert data["summary"]["files_analyzed"] == 3
        assert data["summary"]["total_issues"] == len(data["issues"])
        assert set(data["summary"]["by_type"]) == {
            "bug", "vulnerability", "performance", "style",
        }
        assert data["summary_text"].startswith("Code Analysis Summary")
        assert data["recommendations"].startswith("Recommendations")

    def test_analyze_single_file(self, client):
        target = FIXTURE_REPO / "app" / "util" / "Strings.java"
        data = client.post("/analyze/", json={"path": str(target)}).json()

        assert data["summary"]["files_analyzed"] == 1
        assert [i["rule_id"] for i in data["issues"]] == ["BUG_REF_EQUALITY_001"]
        assert data["issues"][0]["file_name"] == "Strings.java"

    def test_max_method_lines_override(self, client):
        target = FIXTURE_REPO / "app" / "util" / "Strings.java"
        data = client.post(
            "/analyze/", json={"path": str(target), "max_method_lines": 1},
        ).json()

        assert "STY_LONG_METHOD_001" in [i["rule_id"] for i in data["issues"]]

    def test_missing_path_returns_404(self, client):
        response = client.post("/analyze/", json={"path": "/nonexistent/path/xyz"})
        assert response.status_code == 404
        assert "not found" in response.json()["detail"].lower()

    def test_invalid_threshold_rejected(self, client):
        response = client.post(
            "/analyze/", json={"path": str(FIXTURE_REPO), "max_method_lines": 0},
        )
        assert response.status_code == 422

    def test_missing_body_field_rejected(self, client):
        assert client.post("/analyze/", json={}).status_code == 422


# ============================================================================
# SETTINGS
# ============================================================================

class TestSettings:
    """Tests for the API Settings and app factory"""

    def test_from_env_mapping(self):
        from code_quality.web_api.config import Settings

        settings = Settings.from_env({
            "CODE_QUALITY_API_PORT": "9001",
            "CODE_QUALITY_API_DEBUG": "yes",
            "CODE_QUALITY_API_CORS_ORIGINS": "http://a.test, http://b.test",
        })
        assert settings.port == 9001
        assert settings.debug is True
        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.host == "127.0.0.1"

    def test_analysis_config_request_threshold_wins(self, monkeypatch):
        from code_quality.web_api.config import Settings

        monkeypatch.setenv("CODE_QUALITY_MAX_METHOD_LINES", "12")
        monkeypatch.setenv("CODE_QUALITY_MAX_WORKERS", "2")

        assert Settings.analysis_config().max_method_lines == 12
        config = Settings.analysis_config(5)
        assert config.max_method_lines == 5
        assert config.max_workers == 2

    def test_docs_follow_debug_flag(self):
        from code_quality.web_api.config import Settings
        from code_quality.web_api.main import create_app

        debug_client = TestClient(create_app(Settings(debug=True)))
        assert debug_client.get("/").json()["docs"] == "/docs"
        assert debug_client.get("/docs").status_code == 200

        quiet_client = TestClient(create_app(Settings(debug=False)))
        assert quiet_client.get("/").json()["docs"] == "disabled"
        assert quiet_client.get("/docs").status_code == 404
