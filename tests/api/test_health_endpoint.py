"""
Test suite for the health endpoint.

System role: Liveness contract verification
"""

from notchy.observability.middleware import CORRELATION_HEADER


class TestHealthCheck:
    """Test suite for GET /api/v1/health."""

    def test_should_report_healthy(self, api_client) -> None:
        """Should return the fixed liveness body."""
        response = api_client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy"}

    def test_should_generate_correlation_id(self, api_client) -> None:
        """Should attach a generated correlation id when none is sent."""
        response = api_client.get("/api/v1/health")

        assert response.headers[CORRELATION_HEADER]
