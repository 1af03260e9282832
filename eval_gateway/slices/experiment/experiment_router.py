from fastapi import APIRouter

from eval_gateway.const import LEGACY_MOCK_EXPERIMENT_PATH, MOCK_EVALUATION_RESPONSES, MOCK_EXPERIMENT_PATH
from eval_gateway.shared.logging import LoggingManager
from eval_gateway.shared.models import EvaluationRequest, EvaluationResult, ModelResponse


class ExperimentRouter:
    """Router for the placeholder single-prompt evaluation endpoint."""

    def __init__(self):
        self.router = APIRouter(tags=["experiment"])
        self.logger = LoggingManager.get_logger(__name__)
        self.router.post(MOCK_EXPERIMENT_PATH, response_model=EvaluationResult)(self.run_one_prompt)
        # misspelt path kept for existing callers
        self.router.post(
            LEGACY_MOCK_EXPERIMENT_PATH, response_model=EvaluationResult, include_in_schema=False,
        )(self.run_one_prompt)

    @classmethod
    def get_router(cls) -> APIRouter:
        """Get the router instance."""
        return cls().router

    async def run_one_prompt(self, request: EvaluationRequest) -> EvaluationResult:
        """Return hard-coded model responses for the prompt."""
        responses = [
            ModelResponse(
                model=model,
                response_text=template.format(prompt=request.user_prompt),
                time_ms=time_ms,
                score=score,
            )
            for model, template, time_ms, score in MOCK_EVALUATION_RESPONSES
        ]
        result = EvaluationResult.from_responses(responses)
        self.logger.info(f"Mock evaluation returned {len(responses)} responses (aggregate {result.aggregate_score:.2f})")
        return result
