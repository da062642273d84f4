"""Integration tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from planright.main import create_app


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAssessmentEndpoint:
    def test_exempt_shed(self, client, make_proposal):
        response = client.post("/api/v1/assessments", json=make_proposal())
        assert response.status_code == 200
        data = response.json()
        assert data["decision"] == "Likely Exempt"
        assert len(data["checks"]) == 15
        assert data["errors"] == []
        assert set(data["checks"][0]) == {"rule_id", "clause_ref", "pass", "note", "killer"}

    def test_failed_check_reported(self, client, make_proposal):
        response = client.post(
            "/api/v1/assessments",
            json=make_proposal("patio", dimensions={"height_m": 3.4}),
        )
        data = response.json()
        assert data["decision"] == "Likely Not Exempt"
        failed = [c for c in data["checks"] if not c["pass"]]
        assert [c["rule_id"] for c in failed] == ["P-HEIGHT-1"]

    def test_cannot_assess_is_200(self, client, make_proposal):
        response = client.post(
            "/api/v1/assessments",
            json=make_proposal(property={"zone_text": "INVALID_ZONE"}),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["decision"] == "Cannot assess"
        assert data["checks"] == []
        assert data["errors"][0]["field"] == "property.zone_text"

    def test_strict_rejects_invalid_input(self, client, make_proposal):
        response = client.post(
            "/api/v1/assessments",
            params={"strict": "true"},
            json=make_proposal(property={"zone_text": "INVALID_ZONE"}),
        )
        assert response.status_code == 400
        assert "Unknown zone" in response.json()["detail"]

    def test_strict_rejects_malformed_input(self, client, make_proposal):
        response = client.post(
            "/api/v1/assessments",
            params={"strict": "true"},
            json=make_proposal(dimensions={"height_m": "tall"}),
        )
        assert response.status_code == 400
        assert response.json()["detail"].startswith("VALIDATION [")
        assert "dimensions.height_m" in response.json()["detail"]

    def test_out_of_range_number_is_cannot_assess(self, client, make_proposal):
        response = client.post(
            "/api/v1/assessments",
            json=make_proposal(dimensions={"height_m": 10**400}),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["decision"] == "Cannot assess"
        assert data["errors"][0]["field"] == "dimensions.height_m"

    def test_strict_valid_input(self, client, make_proposal):
        response = client.post("/api/v1/assessments", params={"strict": "true"}, json=make_proposal())
        assert response.status_code == 200
        assert response.json()["decision"] == "Likely Exempt"

    def test_body_must_be_object(self, client):
        response = client.post("/api/v1/assessments", json=["shed"])
        assert response.status_code == 422


class TestClauseEndpoint:
    def test_known_clause(self, client):
        response = client.get("/api/v1/clauses/2.9(1)(a)")
        assert response.status_code == 200
        data = response.json()
        assert data["citation"] == "2.9(1)(a)"
        assert data["title"] == "Maximum Height - Sheds"
        assert data["found"] is True

    def test_compound_citation(self, client):
        response = client.get("/api/v1/clauses/2.6(1)(e)/2.9(1)(e)/2.10(1)(e)")
        assert response.status_code == 200
        assert response.json()["found"] is True

    def test_unknown_clause(self, client):
        response = client.get("/api/v1/clauses/9.9")
        assert response.status_code == 200
        assert response.json()["title"] == "Clause Not Found"
        assert response.json()["found"] is False


class TestRulesEndpoint:
    def test_catalogue(self, client):
        response = client.get("/api/v1/rules")
        assert response.status_code == 200
        assert len(response.json()) == 28

    def test_filtered_by_structure(self, client):
        rules = client.get("/api/v1/rules", params={"structure": "carport"}).json()
        assert len(rules) == 13
        assert rules[0]["rule_id"] == "G-HERITAGE-1"
        assert rules[0]["killer"] is True

    def test_unknown_structure(self, client):
        assert client.get("/api/v1/rules", params={"structure": "garage"}).status_code == 422


class TestPropertiesEndpoint:
    def test_list(self, client):
        data = client.get("/api/v1/properties").json()
        assert len(data) == 10
        assert data[0]["id"] == "ALB-001"

    def test_get(self, client):
        data = client.get("/api/v1/properties/ALB-008").json()
        assert data["zone_text"] == "RU1"
        assert data["zone_group"] == "rural"

    def test_not_found(self, client):
        response = client.get("/api/v1/properties/ALB-999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Sample property not found: ALB-999"
