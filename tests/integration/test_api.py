"""Integration tests for API endpoints"""

import json
import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from tradesman_finance.api.dependencies import get_lead_client
from tradesman_finance.infrastructure.clients.leads import LeadWebhookClient
from tradesman_finance.infrastructure.database.store import SqlSessionStore


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/calculators/business_loan", json={})
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "tradesman_calculations_total" in response.text


def test_list_calculators(client: TestClient):
    response = client.get("/v1/calculators")

    assert response.status_code == 200
    keys = [c["key"] for c in response.json()["calculators"]]
    assert keys == ["business_loan", "affordability", "equipment_finance", "vehicle_finance", "invoice_finance"]


def test_calculator_config(client: TestClient):
    response = client.get("/v1/calculators/business_loan/config")

    assert response.status_code == 200
    fields = response.json()["fields"]
    assert fields["loan_amount"]["min"] == 5_000
    assert fields["loan_amount"]["max"] == 500_000
    assert [o["value"] for o in fields["business_age"]["options"]] == ["under-1", "1-2", "2-5", "over-5"]


def test_unknown_calculator_returns_404(client: TestClient):
    assert client.get("/v1/calculators/mortgage/config").status_code == 404
    assert client.post("/v1/calculators/mortgage", json={}).status_code == 404


def test_business_loan_calculation(client: TestClient):
    """Test POST /v1/calculators/business_loan with the default form"""
    response = client.post(
        "/v1/calculators/business_loan",
        json={"loan_amount": 50_000, "term_months": 36, "business_age": "2-5", "annual_turnover": "100k-500k"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["calculator"] == "business_loan"
    assert data["results"]["monthly_payment"] == pytest.approx(1611.01, abs=0.01)
    assert data["results"]["eligibility"]["score"] == 95
    assert data["results"]["eligibility"]["tier"] == "high"
    assert response.headers["X-Session-ID"] == data["session_id"]
    assert "X-Request-ID" in response.headers


def test_inputs_clamped_to_configured_ranges(client: TestClient):
    response = client.post("/v1/calculators/business_loan", json={"loan_amount": 5_000_000, "term_months": 3})

    assert response.status_code == 200
    inputs = response.json()["inputs"]
    assert inputs["loan_amount"] == 500_000
    assert inputs["term_months"] == 12


def test_invalid_enum_rejected(client: TestClient):
    response = client.post("/v1/calculators/vehicle_finance", json={"vehicle_type": "tractor"})
    assert response.status_code == 422


@pytest.mark.parametrize(
    "key,headline",
    [
        ("affordability", "max_comfortable_payment"),
        ("equipment_finance", "monthly_payment"),
        ("vehicle_finance", "recommendation"),
        ("invoice_finance", "total_fees"),
    ],
)
def test_every_calculator_runs_with_defaults(client: TestClient, key: str, headline: str):
    response = client.post(f"/v1/calculators/{key}", json={})

    assert response.status_code == 200
    assert headline in response.json()["results"]


def test_calculation_saved_for_session(client: TestClient):
    """Latest calculation is retrievable under the echoed session id"""
    headers = {"X-Session-ID": "visitor-1"}
    client.post("/v1/calculators/invoice_finance", json={"invoice_value": 25_000}, headers=headers)
    client.post("/v1/calculators/invoice_finance", json={"invoice_value": 40_000}, headers=headers)

    response = client.get("/v1/sessions/visitor-1/calculators/invoice_finance")

    assert response.status_code == 200
    data = response.json()
    assert data["inputs"]["invoice_value"] == 40_000
    assert data["results"]["advance_amount"] == 34_000

    listing = client.get("/v1/sessions/visitor-1").json()
    assert listing["calculators"] == ["invoice_finance"]


def test_missing_saved_calculation_returns_404(client: TestClient):
    response = client.get("/v1/sessions/nobody/calculators/business_loan")
    assert response.status_code == 404


def test_clear_session(client: TestClient):
    headers = {"X-Session-ID": "visitor-2"}
    client.post("/v1/calculators/affordability", json={}, headers=headers)

    response = client.delete("/v1/sessions/visitor-2")

    assert response.status_code == 200
    assert response.json()["cleared"] is True
    assert client.get("/v1/sessions/visitor-2/calculators/affordability").status_code == 404


@patch("tradesman_finance.infrastructure.clients.leads.LeadWebhookClient.send_lead")
def test_quote_forwards_lead_with_saved_figures(mock_send: AsyncMock, client: TestClient):
    """Test POST /v1/quotes schedules the lead webhook with the saved calculation's headline figures"""
    mock_send.return_value = True
    client.app.dependency_overrides[get_lead_client] = lambda: LeadWebhookClient("https://hooks.example.test/lead")
    headers = {"X-Session-ID": "visitor-3"}
    client.post("/v1/calculators/business_loan", json={}, headers=headers)

    response = client.post(
        "/v1/quotes",
        json={"calculator": "business_loan", "name": "Sam Carter", "email": "sam@example.com"},
        headers=headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["lead_forwarding"] == "scheduled"
    assert data["summary"]["finance_type"] == "business-loan"
    assert data["summary"]["tier"] == "high"

    mock_send.assert_called_once()
    lead = mock_send.call_args.args[0]
    assert lead["calculator"] == "business_loan"
    assert lead["amount"] == 50_000


def test_quote_without_webhook_is_accepted(client: TestClient):
    disabled = LeadWebhookClient()
    disabled.webhook_url = None
    client.app.dependency_overrides[get_lead_client] = lambda: disabled
    response = client.post(
        "/v1/quotes",
        json={"calculator": "invoice_finance", "name": "Sam Carter", "email": "sam@example.com"},
    )

    assert response.status_code == 200
    assert response.json()["lead_forwarding"] == "disabled"
    assert response.json()["summary"] is None


def test_quote_rejects_bad_email(client: TestClient):
    response = client.post(
        "/v1/quotes",
        json={"calculator": "business_loan", "name": "Sam", "email": "not-an-email"},
    )
    assert response.status_code == 422


def test_malformed_saved_calculation_returns_404(client: TestClient, db):
    """A stored row whose inputs/results are not objects is treated as absent"""
    SqlSessionStore(db, "visitor-4").set(
        "tradesman-calculator-business-loan",
        json.dumps({"inputs": [1, 2], "results": "oops"}),
    )

    response = client.get("/v1/sessions/visitor-4/calculators/business_loan")
    assert response.status_code == 404
