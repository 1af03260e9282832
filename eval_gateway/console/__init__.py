"""Console package initialization."""
from .orchestrator import ConsolePhase, ConsoleState, EvaluationConsole
from .renderer import ScoreCard, build_score_cards, render_results, render_state, score_variant

__all__ = [
    'ConsolePhase',
    'ConsoleState',
    'EvaluationConsole',
    'ScoreCard',
    'build_score_cards',
    'render_results',
    'render_state',
    'score_variant'
]
