from typing import List

from fastapi import APIRouter, Request, Response

from eval_gateway.const import FORWARDED_METHODS
from eval_gateway.shared.config import RewriteRule
from eval_gateway.shared.httpx_util import HTTPXForwarder
from eval_gateway.shared.logging import LoggingManager


class RewriteRouter:
    """Router mapping public paths onto fixed upstream URLs, one route per rule."""

    def __init__(self, rules: List[RewriteRule], forwarder: HTTPXForwarder):
        self.rules = rules
        self.forwarder = forwarder
        self.router = APIRouter(tags=["rewrite"])
        self.logger = LoggingManager.get_logger(__name__)
        for rule in rules:
            self.router.add_api_route(rule.source, self._make_endpoint(rule), methods=FORWARDED_METHODS)
            self.logger.debug(f"Rewrite {rule.source} -> {rule.destination}")

    @classmethod
    def get_router(cls, rules: List[RewriteRule], forwarder: HTTPXForwarder) -> APIRouter:
        """Get the router instance."""
        return cls(rules, forwarder).router

    def _make_endpoint(self, rule: RewriteRule):
        async def rewrite(request: Request) -> Response:
            return await self.forwarder.forward(request, rule.target_url(request.url.query))

        rewrite.__name__ = f"rewrite_{rule.source.strip('/').replace('/', '_') or 'root'}"
        return rewrite
