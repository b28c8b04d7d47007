import pytest

from src.kurir.config import settings
from src.kurir.services.routing.gateway import UpstreamServiceError


def test_optimize_route_endpoint(api_client, stub_gateway):
    stub_gateway.reply = '{"optimizedRoute":["Jl. Thamrin 5","Jl. Sudirman 1","Jl. Gatot Subroto 10"]}'

    response = api_client.post(
        "/api/optimize-route",
        json={"destinations": ["Jl. Sudirman 1", "Jl. Thamrin 5", "Jl. Gatot Subroto 10"]},
    )

    assert response.status_code == 200
    assert response.json() == {
        "optimizedRoute": ["Jl. Thamrin 5", "Jl. Sudirman 1", "Jl. Gatot Subroto 10"],
        "outcome": "ordered",
    }


@pytest.mark.parametrize(
    ("destinations", "message"),
    [
        (["Jl. Sudirman 1"], "at least 2 destinations required"),
        ([f"Stop {i}" for i in range(11)], "at most 10 destinations allowed"),
        (["Jl. Sudirman 1", "   ", ""], "at least 2 destinations required"),
    ],
)
def test_optimize_route_rejects_bad_counts(api_client, stub_gateway, destinations, message):
    response = api_client.post("/api/optimize-route", json={"destinations": destinations})

    assert response.status_code == 400
    assert response.json() == {"error": message}
    assert stub_gateway.calls == []


def test_blank_entries_are_not_sent_to_the_model(api_client, stub_gateway):
    stub_gateway.reply = "no json"

    response = api_client.post("/api/optimize-route", json={"destinations": ["A", " ", "B"]})

    assert response.json() == {"optimizedRoute": ["A", "B"], "outcome": "fallback"}
    user_prompt = stub_gateway.calls[0]["messages"][1]["content"]
    assert "1. A\n2. B" in user_prompt


def test_fallback_returns_addresses_as_submitted(api_client, stub_gateway):
    stub_gateway.reply = "no json"

    response = api_client.post("/api/optimize-route", json={"destinations": [" Jl. A ", "Jl. B"]})

    assert response.json() == {"optimizedRoute": [" Jl. A ", "Jl. B"], "outcome": "fallback"}


def test_malformed_body_is_a_validation_error(api_client, stub_gateway):
    response = api_client.post("/api/optimize-route", json={"destinations": "A;B"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_upstream_failure_returns_500(api_client, stub_gateway):
    stub_gateway.error = UpstreamServiceError("AI gateway error: 503", status_code=503)

    response = api_client.post("/api/optimize-route", json={"destinations": ["A", "B"]})

    assert response.status_code == 500
    assert response.json() == {"error": "AI gateway error: 503"}


def test_missing_gateway_key_returns_500(api_client, monkeypatch):
    monkeypatch.setattr(settings, "ai_gateway_api_key", None)

    response = api_client.post("/api/optimize-route", json={"destinations": ["A", "B"]})

    assert response.status_code == 500
    assert response.json() == {"error": "AI gateway API key is not configured."}


def test_options_returns_empty_200(api_client):
    response = api_client.options("/api/optimize-route")

    assert response.status_code == 200
    assert response.content == b""


def test_cors_preflight_is_open(api_client):
    response = api_client.options(
        "/api/optimize-route",
        headers={
            "Origin": "https://kurir.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_health_endpoints(api_client, monkeypatch):
    monkeypatch.setattr(settings, "ai_gateway_api_key", "configured")

    assert api_client.get("/api/health").json() == {"status": "ok"}
    assert api_client.get("/api/health/ai-gateway").json()["configured"] is True
    assert api_client.get("/api/health/database").json()["connected"] is True
