"""Wire models for the evaluation service.

Attributes are snake_case; the JSON form uses the camelCase names of the
evaluation service. Parsing is lenient: missing, null or mistyped fields fall
back to zero or empty values instead of failing. Only a ``responses`` value
that is not a list, or an ``aggregateScores`` value that is not a map, is
rejected.
"""

import math
from typing import Any, Dict, List, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


def mean_score(responses: Sequence["ModelResponse"]) -> float:
    """Arithmetic mean of the response scores, 0.0 when there are none."""
    if not responses:
        return 0.0
    return sum(response.score for response in responses) / len(responses)


def number_or_zero(value: Any) -> float:
    """Finite numeric value of ``value``; anything else counts as 0.0.

    Numeric strings such as ``"4.5"`` are accepted. Booleans, null, NaN and
    infinities are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0.0
    if not isinstance(value, (int, float)):
        return 0.0
    value = float(value)
    return value if math.isfinite(value) else 0.0


def text_or_empty(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class EvaluationRequest(BaseModel):
    """Body of a single-prompt evaluation request."""

    model_config = ConfigDict(populate_by_name=True)

    user_prompt: str = Field(default="", alias="userPrompt")

    @field_validator("user_prompt", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ModelResponse(BaseModel):
    """One model's answer to the prompt, with latency and score."""

    model_config = ConfigDict(populate_by_name=True)

    model: str = ""
    response_text: str = Field(default="", alias="responseText")
    time_ms: int = Field(default=0, alias="timeMs")
    score: float = 0.0

    @field_validator("model", "response_text", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        return text_or_empty(value)

    @field_validator("time_ms", mode="before")
    @classmethod
    def _as_whole_ms(cls, value: Any) -> int:
        return int(round(number_or_zero(value)))

    @field_validator("score", mode="before")
    @classmethod
    def _as_score(cls, value: Any) -> float:
        return number_or_zero(value)


class EvaluationResult(BaseModel):
    """Ordered model responses plus the mean of their scores."""

    model_config = ConfigDict(populate_by_name=True)

    responses: List[ModelResponse] = Field(default_factory=list)
    aggregate_score: float = Field(default=0.0, alias="aggregateScore")

    @field_validator("responses", mode="before")
    @classmethod
    def _drop_non_objects(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            # null or scalar entries carry no model to show
            return [item for item in value if isinstance(item, (dict, ModelResponse))]
        return value

    @field_validator("aggregate_score", mode="before")
    @classmethod
    def _as_score(cls, value: Any) -> float:
        return number_or_zero(value)

    @classmethod
    def from_responses(cls, responses: List[ModelResponse]) -> "EvaluationResult":
        """Build a result whose aggregate score is the mean of the responses."""
        return cls(responses=responses, aggregate_score=mean_score(responses))


class AggregateScores(BaseModel):
    """Running aggregate score per model, maintained by the evaluation service."""

    model_config = ConfigDict(populate_by_name=True)

    aggregate_scores: Dict[str, float] = Field(default_factory=dict, alias="aggregateScores")

    @field_validator("aggregate_scores", mode="before")
    @classmethod
    def _scores_as_numbers(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(model): number_or_zero(score) for model, score in value.items()}
        return value
