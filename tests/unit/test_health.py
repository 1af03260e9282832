"""Unit tests for health slice."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from eval_gateway.shared.exceptions import EvaluationStatusError, EvaluationTransportError
from eval_gateway.slices.health.health_router import HealthRouter


class TestHealthRouter:
    """Test health endpoint functionality."""

    @pytest.mark.asyncio
    async def test_health_check_success(self, mock_evaluation_client):
        """Test successful health check."""
        router = HealthRouter(mock_evaluation_client)
        result = await router.health_check()

        expected = {
            "status": "healthy",
            "gateway": "Ok",
            "upstream": "Ok"
        }
        assert result == expected
        mock_evaluation_client.health.assert_called_once()

    @pytest.mark.asyncio
    async def test_health_check_upstream_unreachable(self):
        """Test health check when the evaluation service is unreachable."""
        mock_client = MagicMock()
        mock_client.health = AsyncMock(side_effect=EvaluationTransportError("Connection failed"))

        router = HealthRouter(mock_client)
        result = await router.health_check()

        expected = {
            "status": "unhealthy",
            "gateway": "Ok",
            "upstream": "error"
        }
        assert result == expected
        mock_client.health.assert_called_once()

    @pytest.mark.asyncio
    async def test_health_check_upstream_error_status(self):
        """Test health check when the evaluation service answers with an error status."""
        mock_client = MagicMock()
        mock_client.health = AsyncMock(side_effect=EvaluationStatusError(503, "/health"))

        router = HealthRouter(mock_client)
        result = await router.health_check()

        assert result["status"] == "unhealthy"
        assert result["upstream"] == "error"
