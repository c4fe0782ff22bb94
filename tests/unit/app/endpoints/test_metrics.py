"""Unit tests for the /metrics REST API endpoint."""

import pytest
from fastapi.testclient import TestClient

from app.endpoints.metrics import metrics_endpoint_handler


@pytest.mark.asyncio
async def test_metrics_endpoint() -> None:
    """Test the metrics endpoint handler."""
    response = await metrics_endpoint_handler()
    assert response is not None
    assert response.status_code == 200
    assert "text/plain" in response.headers["Content-Type"]

    response_body = response.body.decode()

    # Check if the response contains Prometheus metrics format
    assert "# TYPE rag_rest_api_calls_total counter" in response_body
    assert "# TYPE rag_response_duration_seconds histogram" in response_body
    assert "# TYPE rag_llm_calls_total counter" in response_body
    assert "# TYPE rag_llm_calls_failures_total counter" in response_body
    assert "# TYPE rag_answer_cache_hits_total counter" in response_body
    assert "# TYPE rag_answer_cache_misses_total counter" in response_body
    assert "# TYPE rag_upstream_failures_total counter" in response_body
    assert "# TYPE rag_cache_degraded_operations_total counter" in response_body


def test_rest_api_calls_are_counted(client: TestClient) -> None:
    """Test that requests are counted under the route template."""
    client.get("/session/507003/history")
    body = client.get("/metrics").text
    assert (
        'rag_rest_api_calls_total{path="/session/{session_id}/history",'
        'status_code="200"}' in body
    )
    assert 'rag_rest_api_calls_total{path="/metrics"' not in body
