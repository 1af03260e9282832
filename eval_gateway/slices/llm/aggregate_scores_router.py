from fastapi import APIRouter

from eval_gateway.const import MOCK_AGGREGATE_SCORES
from eval_gateway.shared.logging import LoggingManager
from eval_gateway.shared.models import AggregateScores


class AggregateScoresRouter:
    """Router for the placeholder aggregate score endpoint."""

    def __init__(self):
        self.router = APIRouter(prefix="/api/llm", tags=["llm"])
        self.logger = LoggingManager.get_logger(__name__)
        self.router.get("/aggregateScores", response_model=AggregateScores)(self.aggregate_scores)

    @classmethod
    def get_router(cls) -> APIRouter:
        """Get the router instance."""
        return cls().router

    async def aggregate_scores(self) -> AggregateScores:
        """Return hard-coded running aggregate scores."""
        self.logger.info(f"Mock aggregate scores for {len(MOCK_AGGREGATE_SCORES)} models")
        return AggregateScores(aggregate_scores=dict(MOCK_AGGREGATE_SCORES))
