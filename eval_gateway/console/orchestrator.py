"""Client-side orchestration of prompt submissions and aggregate score refreshes."""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Set

from eval_gateway.const import AGGREGATE_SCORES_ERROR_MESSAGE, SUBMIT_ERROR_MESSAGE
from eval_gateway.shared.config import Config
from eval_gateway.shared.exceptions import EvaluationClientError, RetryExhaustedError
from eval_gateway.shared.logging import LoggingManager
from eval_gateway.shared.models import EvaluationResult
from eval_gateway.shared.retry import RetryPolicy, retry_with_fixed_delay


class ConsolePhase(Enum):
    """Submission lifecycle."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    RESULTS_READY = "results_ready"
    FAILED = "failed"


@dataclass
class ConsoleState:
    """Everything the renderer needs to draw the console."""
    phase: ConsolePhase = ConsolePhase.IDLE
    results: Optional[EvaluationResult] = None
    is_loading: bool = False
    aggregate_scores: Dict[str, float] = field(default_factory=dict)
    error: Optional[str] = None
    generation: int = 0


class EvaluationConsole:
    """Owns the console state and drives the evaluation client.

    Each submission takes a new generation number. A reply that arrives after a
    newer submission started is dropped without touching the state.

    A successful submission schedules an aggregate score refresh in the
    background; the refresh retries on its own policy and its failure only sets
    the error text, the results stay on screen.
    """

    def __init__(self, client, retry_policy: Optional[RetryPolicy] = None, sleep=None):
        self.client = client
        self.retry_policy = retry_policy or RetryPolicy.from_config(Config())
        self.state = ConsoleState()
        self.logger = LoggingManager.get_logger(__name__)
        self._sleep = sleep or asyncio.sleep
        self._refresh_tasks: Set[asyncio.Task] = set()

    async def start(self) -> None:
        """Load the aggregate scores once before the first submission."""
        await self.fetch_aggregate_scores()

    async def fetch_aggregate_scores(self) -> bool:
        """Refresh the aggregate scores, retrying on client errors.

        Returns:
            True if the scores were replaced, False if every attempt failed.
        """
        try:
            scores = await retry_with_fixed_delay(
                self.client.aggregate_scores,
                self.retry_policy,
                sleep=self._sleep,
                retry_on=(EvaluationClientError,),
                name="Aggregate score fetch",
            )
        except RetryExhaustedError as e:
            self.logger.error(f"Error fetching aggregate scores: {str(e.last_error)}")
            self.state.error = AGGREGATE_SCORES_ERROR_MESSAGE
            return False

        self.state.aggregate_scores = dict(scores.aggregate_scores)
        self.state.error = None
        self.logger.info(f"Loaded aggregate scores for {len(self.state.aggregate_scores)} models")
        return True

    async def submit_query(self, query: str) -> ConsoleState:
        """Evaluate ``query`` and update the state with the outcome."""
        self.state.generation += 1
        generation = self.state.generation
        self.state.phase = ConsolePhase.SUBMITTING
        self.state.is_loading = True
        self.state.results = None
        self.state.error = None

        try:
            result = await self.client.run_one_prompt(query)
        except EvaluationClientError as e:
            self.logger.error(f"Error submitting query: {str(e)}")
            if self._is_current(generation):
                self.state.phase = ConsolePhase.FAILED
                self.state.error = SUBMIT_ERROR_MESSAGE
            return self.state
        finally:
            if self._is_current(generation):
                self.state.is_loading = False

        if not self._is_current(generation):
            self.logger.info(f"Dropping reply for superseded submission {generation}")
            return self.state

        self.state.results = result
        self.state.phase = ConsolePhase.RESULTS_READY
        self.logger.info(f"Received {len(result.responses)} responses (aggregate {result.aggregate_score:.2f})")
        self._schedule_refresh()
        return self.state

    async def wait_for_refreshes(self) -> None:
        """Wait for background aggregate score refreshes to finish."""
        while self._refresh_tasks:
            await asyncio.gather(*list(self._refresh_tasks))

    def _is_current(self, generation: int) -> bool:
        return generation == self.state.generation

    def _schedule_refresh(self) -> None:
        task = asyncio.create_task(self.fetch_aggregate_scores())
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)
