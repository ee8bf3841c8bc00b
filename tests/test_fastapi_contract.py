"""
FastAPI contract tests.

The pipeline is replaced with in-memory fakes through create_app(pipeline=...),
so no provider or network call is made.
"""

import pytest
from fastapi.testclient import TestClient

from models.errors import ModelGatewayError, SchemaRepairExhaustedError
from models.unified_response import NormalizedError
from orchestrator.core import build_pipeline
from server.app import create_app
from tests.fakes import FakeEvidenceSource, FakeGateway, make_results


class RaisingPipeline:
    def __init__(self, error):
        self.error = error

    async def run(self, query):
        raise self.error


@pytest.fixture
def client(config):
    gateway = FakeGateway("Grounded answer [1][2].")
    pipeline = build_pipeline(gateway, FakeEvidenceSource(results=make_results(2)), page_timeout_s=1.0)
    with TestClient(create_app(config=config, pipeline=pipeline)) as test_client:
        yield test_client


def _client_raising(config, error):
    return TestClient(create_app(config=config, pipeline=RaisingPipeline(error)))


@pytest.mark.integration
@pytest.mark.parametrize("path", ["/health", "/status"])
def test_health_endpoints(client, path):
    response = client.get(path)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["timestamp"].endswith("Z")


@pytest.mark.integration
def test_web_search_returns_answer_sources_and_mode(client):
    response = client.post("/api/v1/search", json={"query": "latest iPhone price"})

    assert response.status_code == 200
    assert response.json() == {
        "answer": "Grounded answer [1][2].",
        "sources": ["https://example.com/page-1", "https://example.com/page-2"],
        "mode": "web",
    }


@pytest.mark.integration
def test_direct_search_has_no_sources(client):
    response = client.post("/api/v1/search", json={"query": "what is a monad"})

    assert response.status_code == 200
    assert response.json()["mode"] == "direct"
    assert response.json()["sources"] == []


@pytest.mark.integration
def test_short_query_is_a_400(client):
    response = client.post("/api/v1/search", json={"query": "hi"})

    assert response.status_code == 400
    assert response.json() == {"error": "Please input a query..."}


@pytest.mark.integration
@pytest.mark.parametrize("payload", [{}, {"query": 5}, {"query": "x" * 2001}])
def test_malformed_body_is_a_400(client, payload):
    response = client.post("/api/v1/search", json=payload)

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.integration
def test_repair_exhausted_is_a_502(config):
    error = SchemaRepairExhaustedError({"answer": ""}, {"answer": "", "sources": []}, "answer too short")

    response = _client_raising(config, error).post("/api/v1/search", json={"query": "what is a monad"})

    assert response.status_code == 502
    assert response.json()["kind"] == "schema_repair_exhausted"


@pytest.mark.integration
def test_model_unavailable_is_a_503(config):
    error = ModelGatewayError(NormalizedError(code="auth", message="bad key", provider="openai"))

    response = _client_raising(config, error).post("/api/v1/search", json={"query": "what is a monad"})

    assert response.status_code == 503
    assert response.json()["kind"] == "model_unavailable"


@pytest.mark.integration
def test_unknown_route_is_a_404(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "URL /nope does not exist on this server !!!"}


@pytest.mark.integration
def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"


@pytest.mark.integration
def test_cors_allows_configured_origin(client, config):
    response = client.options(
        "/api/v1/search",
        headers={"Origin": config.ALLOWED_ORIGIN, "Access-Control-Request-Method": "POST"},
    )

    assert response.headers["access-control-allow-origin"] == config.ALLOWED_ORIGIN
