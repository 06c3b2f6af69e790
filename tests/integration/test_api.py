"""Integration tests for the lookup API."""
import inspect
import pytest
from fastapi.testclient import TestClient

from domainscope.api.main import app, get_rules, health_check
from domainscope.config import settings
from domainscope.rules import loader
from domainscope.rules.loader import RulesetLoadError, reset_ruleset
from domainscope.rules.ruleset import parse_rules


@pytest.fixture
def client():
    rules = parse_rules("uk\nco.uk\n*.ck\n!www.ck\n")
    app.dependency_overrides[get_rules] = lambda: rules
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def fresh_ruleset():
    reset_ruleset()
    yield
    reset_ruleset()


class TestPublicSuffixEndpoint:
    """Test GET /v1/public-suffix."""
    
    def test_matched_host(self, client):
        response = client.get("/v1/public-suffix", params={"host": "www.bbc.co.uk"})
        
        assert response.status_code == 200
        assert response.json() == {"host": "www.bbc.co.uk", "public_suffix": "co.uk", "matched": True}
    
    def test_unmatched_host(self, client):
        response = client.get("/v1/public-suffix", params={"host": "example.com"})
        
        assert response.status_code == 200
        assert response.json()["public_suffix"] is None
        assert response.json()["matched"] is False
    
    def test_host_required(self, client):
        assert client.get("/v1/public-suffix").status_code == 422


class TestBaseDomainEndpoint:
    """Test GET /v1/base-domain."""
    
    def test_default_one_part(self, client):
        response = client.get("/v1/base-domain", params={"host": "www.bbc.co.uk"})
        data = response.json()
        
        assert response.status_code == 200
        assert data["additional_parts"] == 1
        assert data["public_suffix"] == "co.uk"
        assert data["base_domain"] == "bbc.co.uk"
        assert data["matched"] is True
    
    def test_explicit_parts(self, client):
        response = client.get("/v1/base-domain", params={"host": "a.b.foo.ck", "additional_parts": 2})
        assert response.json()["base_domain"] == "a.b.foo.ck"
    
    def test_unmatched_host(self, client):
        response = client.get("/v1/base-domain", params={"host": "example.com"})
        assert response.json()["base_domain"] is None
    
    def test_negative_parts_rejected(self, client):
        response = client.get("/v1/base-domain", params={"host": "www.bbc.co.uk", "additional_parts": -1})
        assert response.status_code == 422


class TestBatchLookup:
    """Test POST /v1/lookups."""
    
    def test_results_in_order(self, client):
        response = client.post("/v1/lookups", json={"hosts": ["www.ck", "example.com", "www.bbc.co.uk"]})
        results = response.json()["results"]
        
        assert response.status_code == 200
        assert [r["base_domain"] for r in results] == ["www.ck", None, "bbc.co.uk"]
        assert [r["public_suffix"] for r in results] == ["ck", None, "co.uk"]
    
    def test_empty_batch_rejected(self, client):
        response = client.post("/v1/lookups", json={"hosts": []})
        assert response.status_code == 422


class TestRulesetAvailability:
    """Test behavior with and without a loadable ruleset."""
    
    def test_health_with_bundled_ruleset(self):
        response = TestClient(app).get("/healthz")
        
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["rules"] > 0
    
    def test_health_without_ruleset(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "ruleset_path", str(tmp_path / "missing.dat"))
        response = TestClient(app).get("/healthz")
        
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
    
    def test_lookup_without_ruleset(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "ruleset_path", str(tmp_path / "missing.dat"))
        response = TestClient(app).get("/v1/public-suffix", params={"host": "www.bbc.co.uk"})
        
        assert response.status_code == 503
        assert response.json()["error"] == "Suffix ruleset unavailable"
        assert "missing.dat" in response.json()["detail"]
    
    def test_health_with_failing_url_source(self, monkeypatch):
        calls = []
        
        def failing_fetch(url, timeout):
            calls.append(url)
            raise RulesetLoadError(f"Cannot fetch ruleset from {url}: connection refused")
        
        monkeypatch.setattr(settings, "ruleset_url", "https://publicsuffix.org/list/public_suffix_list.dat")
        monkeypatch.setattr(loader, "fetch_ruleset_text", failing_fetch)
        client = TestClient(app)
        
        first = client.get("/healthz")
        second = client.get("/healthz")
        
        assert first.status_code == 503
        assert second.status_code == 503
        assert "connection refused" in first.json()["error"]
        assert len(calls) == 2
    
    def test_health_check_runs_in_threadpool(self):
        assert not inspect.iscoroutinefunction(health_check)
    
    def test_ruleset_error_documented(self):
        paths = app.openapi()["paths"]
        
        for path, method in [("/v1/public-suffix", "get"), ("/v1/base-domain", "get"), ("/v1/lookups", "post")]:
            response = paths[path][method]["responses"]["503"]
            assert response["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
