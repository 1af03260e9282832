"""FastAPI application for the Nural eval gateway."""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from eval_gateway.const import APP_DESCRIPTION, APP_TITLE, APP_VERSION
from eval_gateway.shared.config import Config
from eval_gateway.shared.evaluation_client import EvaluationClient
from eval_gateway.shared.httpx_util import HTTPXForwarder
from eval_gateway.shared.logging import LoggingManager
from eval_gateway.slices.experiment.experiment_router import ExperimentRouter
from eval_gateway.slices.health.health_router import HealthRouter
from eval_gateway.slices.llm.aggregate_scores_router import AggregateScoresRouter
from eval_gateway.slices.passthrough.passthrough_router import PassthroughRouter
from eval_gateway.slices.rewrite.rewrite_router import RewriteRouter


class EvalGatewayApp:
    """Main application class for the eval gateway."""

    def __init__(self, config: Optional[Config] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or Config()

        # Setup logging
        LoggingManager.setup_logging(self.config.log_level, self.config.library_log_levels)
        self.logger = LoggingManager.get_logger(__name__)

        # Upstream access
        self.forwarder = HTTPXForwarder(timeout=self.config.request_timeout, transport=transport)
        self.upstream_client = EvaluationClient(
            base_url=self.config.evaluation_origin,
            timeout=self.config.request_timeout,
            transport=transport,
        )

        # Initialize routers
        self.experiment_router = ExperimentRouter.get_router()
        self.aggregate_scores_router = AggregateScoresRouter.get_router()
        self.health_router = HealthRouter.get_router(self.upstream_client)
        self.passthrough_router = PassthroughRouter.get_router(self.config.proxy_rule, self.forwarder)
        self.rewrite_router = RewriteRouter.get_router(self.config.rewrites, self.forwarder)

        # Create FastAPI app
        self.app = FastAPI(
            title=APP_TITLE,
            description=APP_DESCRIPTION,
            version=APP_VERSION,
            lifespan=self._lifespan,
        )

        # Mount slices
        self.app.include_router(self.experiment_router)
        self.app.include_router(self.aggregate_scores_router)
        self.app.include_router(self.health_router)
        self.app.include_router(self.passthrough_router)
        self.app.include_router(self.rewrite_router)

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        self.logger.info(
            f"Gateway ready: {len(self.config.rewrites)} rewrites to {self.config.evaluation_origin}, "
            f"proxy {self.config.proxy_prefix} -> {self.config.proxy_target}"
        )
        yield
        await self.upstream_client.aclose()


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Build the FastAPI application."""
    return EvalGatewayApp(config).app
