from fastapi import APIRouter, Request, Response

from eval_gateway.const import FORWARDED_METHODS
from eval_gateway.shared.config import ProxyRule
from eval_gateway.shared.httpx_util import HTTPXForwarder, raw_request_path
from eval_gateway.shared.logging import LoggingManager


class PassthroughRouter:
    """Router forwarding everything under the proxy prefix to a fixed local origin."""

    def __init__(self, rule: ProxyRule, forwarder: HTTPXForwarder):
        self.rule = rule
        self.forwarder = forwarder
        self.router = APIRouter(tags=["passthrough"])
        self.logger = LoggingManager.get_logger(__name__)
        self.router.api_route(f"{rule.prefix}/{{path:path}}", methods=FORWARDED_METHODS)(self.passthrough)

    @classmethod
    def get_router(cls, rule: ProxyRule, forwarder: HTTPXForwarder) -> APIRouter:
        """Get the router instance."""
        return cls(rule, forwarder).router

    async def passthrough(self, request: Request) -> Response:
        """Strip the prefix and forward the request unchanged."""
        url = self.rule.target_url(raw_request_path(request), request.url.query)
        self.logger.debug(f"Proxying {request.method} {request.url.path} to {url}")
        return await self.forwarder.forward(request, url)
