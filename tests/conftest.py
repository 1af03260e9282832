"""Shared test configuration and fixtures for all tests."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from eval_gateway.shared.config import Config
from eval_gateway.shared.models import AggregateScores, EvaluationResult
from eval_gateway.shared.retry import RetryPolicy
from .helpers import UpstreamRecorder
from .test_const import (
    MOCK_AGGREGATE_PAYLOAD, MOCK_EVALUATION_PAYLOAD, RETRY_ATTEMPTS, RETRY_DELAY, TEST_ORIGIN,
    TEST_PROXY_PREFIX, TEST_PROXY_TARGET,
)


@pytest.fixture
def mock_evaluation_client():
    """Mock evaluation client fixture."""
    mock_client = MagicMock()
    mock_client.run_one_prompt = AsyncMock(return_value=EvaluationResult.model_validate(MOCK_EVALUATION_PAYLOAD))
    mock_client.aggregate_scores = AsyncMock(return_value=AggregateScores.model_validate(MOCK_AGGREGATE_PAYLOAD))
    mock_client.health = AsyncMock(return_value={"status": "ok"})
    return mock_client


@pytest.fixture
def recorded_sleep():
    """Sleep replacement that records requested delays instead of waiting."""
    delays = []

    async def sleep(seconds):
        delays.append(seconds)

    sleep.delays = delays
    return sleep


@pytest.fixture
def retry_policy():
    """The default aggregate score retry policy."""
    return RetryPolicy(max_attempts=RETRY_ATTEMPTS, delay=RETRY_DELAY)


@pytest.fixture
def test_config():
    """Config pointing at test origins."""
    return Config(
        evaluation_origin=TEST_ORIGIN,
        proxy_prefix=TEST_PROXY_PREFIX,
        proxy_target=TEST_PROXY_TARGET,
    )


@pytest.fixture
def mock_logging():
    """Mock logging module fixture."""
    with patch('eval_gateway.shared.logging.logging') as mock_logging:
        yield mock_logging


@pytest.fixture
def upstream():
    """Mock upstream answering 200 with an empty JSON object."""
    return UpstreamRecorder(json={})
