from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, ValidationError

from eval_gateway.const import AGGREGATE_SCORES_PATH, EXPERIMENT_PATH, HEALTH_PATH
from .config import Config
from .exceptions import EvaluationResponseError, EvaluationStatusError, EvaluationTransportError
from .logging import LoggingManager
from .models import AggregateScores, EvaluationRequest, EvaluationResult


class EvaluationClient:
    """Async client for the evaluation service endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        config = Config()
        self.base_url = base_url or config.gateway_url
        self.logger = LoggingManager.get_logger(__name__)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or config.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "EvaluationClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send a request, mapping transport errors and non-2xx statuses to client errors."""
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            self.logger.error(f"{method} {path} could not reach {self.base_url}: {str(e)}")
            raise EvaluationTransportError(f"{method} {path} failed: {str(e)}") from e

        if not response.is_success:
            self.logger.error(f"{method} {path} returned HTTP {response.status_code}")
            raise EvaluationStatusError(response.status_code, path)
        return response

    def _json_body(self, response: httpx.Response) -> Dict[str, Any]:
        """Decode a JSON object body; anything else counts as an empty object."""
        try:
            data = response.json()
        except ValueError:
            self.logger.warning(f"Non-JSON body from {response.request.url}, treating as empty")
            return {}
        if not isinstance(data, dict):
            self.logger.warning(f"Unexpected body type {type(data).__name__} from {response.request.url}")
            return {}
        return data

    def _parse(self, model_class: type, response: httpx.Response) -> BaseModel:
        try:
            return model_class.model_validate(self._json_body(response))
        except ValidationError as e:
            raise EvaluationResponseError(f"Malformed {model_class.__name__} from {response.request.url}: {e}") from e

    async def run_one_prompt(self, prompt: str) -> EvaluationResult:
        """Evaluate one prompt across the service's models."""
        body = EvaluationRequest(user_prompt=prompt).model_dump(by_alias=True)
        response = await self._request("POST", EXPERIMENT_PATH, json=body)
        return self._parse(EvaluationResult, response)

    async def aggregate_scores(self) -> AggregateScores:
        """Fetch the running aggregate score of every model."""
        response = await self._request("GET", AGGREGATE_SCORES_PATH)
        return self._parse(AggregateScores, response)

    async def health(self) -> Dict[str, Any]:
        """Ping the service's health endpoint."""
        response = await self._request("GET", HEALTH_PATH)
        return self._json_body(response)
