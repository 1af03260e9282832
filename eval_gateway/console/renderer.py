"""Text rendering of evaluation results as score cards."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from eval_gateway.const import (
    LOADING_MESSAGE, MAX_SCORE, NO_RESULTS_MESSAGE, PROGRESS_BAR_WIDTH, SCORE_VARIANT_DEFAULT,
    SCORE_VARIANT_DESTRUCTIVE, SCORE_VARIANT_SECONDARY,
)
from eval_gateway.shared.models import EvaluationResult
from .orchestrator import ConsoleState


def score_variant(score: float) -> str:
    """Badge variant for a score."""
    if score >= 4:
        return SCORE_VARIANT_DEFAULT
    if score >= 3:
        return SCORE_VARIANT_SECONDARY
    return SCORE_VARIANT_DESTRUCTIVE


def score_percent(score: float) -> float:
    return score / MAX_SCORE * 100


@dataclass
class ScoreCard:
    """View of one model response."""
    model: str
    response_text: str
    score: float
    time_ms: int
    aggregate_score: float

    @property
    def variant(self) -> str:
        return score_variant(self.score)

    @property
    def score_percent(self) -> float:
        return score_percent(self.score)

    @property
    def aggregate_percent(self) -> float:
        return score_percent(self.aggregate_score)


def build_score_cards(results: Optional[EvaluationResult], aggregate_scores: Optional[Dict[str, float]]) -> List[ScoreCard]:
    """One card per response, in the order the service returned them.

    Models missing from ``aggregate_scores`` get an aggregate of 0.
    """
    if results is None:
        return []
    aggregate_scores = aggregate_scores or {}
    return [
        ScoreCard(
            model=response.model,
            response_text=response.response_text,
            score=response.score,
            time_ms=response.time_ms,
            aggregate_score=aggregate_scores.get(response.model, 0.0),
        )
        for response in results.responses
    ]


def render_progress_bar(percent: float, width: int = PROGRESS_BAR_WIDTH) -> str:
    percent = min(max(percent, 0.0), 100.0)
    filled = int(round(percent / 100 * width))
    return f"[{'#' * filled}{'-' * (width - filled)}] {percent:.0f}%"


def render_card(card: ScoreCard) -> str:
    lines = [
        f"{card.model} ({card.variant})",
        card.response_text,
        f"Score: {card.score:.2f}/5 {render_progress_bar(card.score_percent)}",
        f"Response time: {card.time_ms}ms",
        f"Aggregate Score: {render_progress_bar(card.aggregate_percent)}",
    ]
    return "\n".join(lines)


def render_results(results: Optional[EvaluationResult], aggregate_scores: Optional[Dict[str, float]]) -> str:
    """Render all score cards, or the empty state when there are no responses."""
    cards = build_score_cards(results, aggregate_scores)
    if not cards:
        return NO_RESULTS_MESSAGE
    return "\n\n".join(render_card(card) for card in cards)


def render_state(state: ConsoleState) -> str:
    parts = []
    if state.error:
        parts.append(f"Error: {state.error}")
    if state.is_loading:
        parts.append(LOADING_MESSAGE)
    if state.results is not None:
        parts.append(render_results(state.results, state.aggregate_scores))
    return "\n\n".join(parts)
