import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_partner_config
from app.exceptions import ConfigurationError
from main import app
from tests.factories import build_config

client = TestClient(app)

BASELINE_PAYLOAD = {
    "equity": 3_000_000,
    "ltv": 75,
    "netIncome": 40_000,
    "ratio": 33,
    "age": 30,
    "maxAge": 80,
    "interest": 5.0,
    "isRented": False,
    "rentalYield": 3.0,
    "rentRecognition": 0,
    "budgetCap": None,
    "isFirstProperty": True,
    "isIsraeliTaxResident": True,
    "expectedRent": None,
    "lawyerPct": 1.0,
    "brokerPct": 2.0,
    "vatPct": 18,
    "advisorFee": 9000,
    "otherFee": 3000,
}


@pytest.fixture
def partner_config_override():
    def _override(config):
        app.dependency_overrides[get_partner_config] = lambda: config

    yield _override
    app.dependency_overrides.clear()


def test_health_and_root():
    health = client.get("/health")
    root = client.get("/")

    assert health.status_code == 200
    assert health.json()["status"] == "healthy"
    assert root.status_code == 200
    assert root.json()["status"] == "operational"


def test_calculate_budget_returns_results_and_schedule():
    response = client.post("/calculate-budget", json=BASELINE_PAYLOAD)

    assert response.status_code == 200
    body = response.json()
    results = body["results"]
    assert 5_000_000 < results["maxPropertyValue"] < 5_250_000
    assert results["actualLTV"] <= 75
    assert results["taxProfile"] == "SINGLE_HOME"
    assert results["limitingFactor"] == "INCOME_LIMIT"
    assert len(body["amortization"]) == 360
    assert body["amortization"][0]["opening"] == pytest.approx(results["loanAmount"])
    assert len(body["yearlyBreakdown"]) == 30


def test_invalid_payload_returns_field_errors():
    payload = {**BASELINE_PAYLOAD, "age": 10}
    del payload["equity"]

    response = client.post("/calculate-budget", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid input data"
    fields = {detail["field"] for detail in body["details"]}
    assert {"equity", "age"} <= fields


def test_infeasible_inputs_return_calculation_failed():
    payload = {**BASELINE_PAYLOAD, "age": 80, "maxAge": 80}

    response = client.post("/calculate-budget", json=payload)

    assert response.status_code == 422
    assert response.json()["code"] == "CALCULATION_FAILED"


def test_unexpected_error_returns_error_id(monkeypatch):
    def _boom(*args, **kwargs):
        raise RuntimeError("solver exploded")

    monkeypatch.setattr("app.routers.calculator.calculate", _boom)

    response = client.post("/calculate-budget", json=BASELINE_PAYLOAD)

    assert response.status_code == 500
    body = response.json()
    assert len(body["errorId"]) == 8
    assert "solver exploded" not in body["error"]


def test_partner_endpoint_fills_defaults_and_attaches_table():
    response = client.post(
        "/calculate-budget/partner",
        json={"equity": 3_000_000, "netIncome": 40_000, "age": 30},
    )

    assert response.status_code == 200
    results = response.json()["results"]
    assert 5_000_000 < results["maxPropertyValue"] < 5_250_000
    assert len(results["amortizationTable"]) == 60
    assert len(response.json()["amortization"]) == 360


def test_partner_endpoint_applies_partner_limits(partner_config_override):
    partner_config_override(build_config(max_loan_term_years=20))

    response = client.post(
        "/calculate-budget/partner",
        json={"equity": 3_000_000, "netIncome": 40_000, "age": 30},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["results"]["loanTermYears"] == 20
    assert body["results"]["amortizationTable"] is None
    assert len(body["amortization"]) == 240


def test_partner_endpoint_rejects_values_outside_engine_ranges():
    response = client.post(
        "/calculate-budget/partner",
        json={"equity": 3_000_000, "netIncome": 40_000, "age": 30, "advisorFee": 5_000_000},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid input data"
    assert len(body["details"]) == 1


def test_partner_config_endpoint(partner_config_override):
    partner_config_override(build_config(max_age=75))

    response = client.get("/partner-config")

    assert response.status_code == 200
    config = response.json()["config"]
    assert config["max_age"] == 75
    assert config["vat_percent"] == 18.0
    assert config["enable_what_if_calculator"] is True


def test_broken_partner_config_returns_configuration_error():
    def _broken():
        raise ConfigurationError("Partner config failed validation")

    app.dependency_overrides[get_partner_config] = _broken
    try:
        response = client.get("/partner-config")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {
        "error": "Partner config failed validation",
        "code": "CONFIGURATION_ERROR",
    }
