from fastapi import APIRouter
from typing import Dict, Any

from eval_gateway.const import HEALTH_STATUS_ERROR, HEALTH_STATUS_HEALTHY, HEALTH_STATUS_OK, HEALTH_STATUS_UNHEALTHY
from eval_gateway.shared.exceptions import EvaluationClientError
from eval_gateway.shared.logging import LoggingManager


class HealthRouter:
    """Router for the gateway's own health endpoint."""

    def __init__(self, upstream_client):
        self.upstream_client = upstream_client
        self.router = APIRouter(prefix="/api/health", tags=["health"])
        self.logger = LoggingManager.get_logger(__name__)
        self.router.get("", response_model=Dict[str, Any])(self.health_check)

    @classmethod
    def get_router(cls, upstream_client) -> APIRouter:
        """Get the router instance."""
        return cls(upstream_client).router

    async def health_check(self) -> Dict[str, Any]:
        """Check health of the gateway and the external evaluation service."""
        gateway_status = HEALTH_STATUS_OK
        upstream_status = HEALTH_STATUS_OK

        try:
            self.logger.debug("Checking upstream evaluation service health")
            await self.upstream_client.health()
            self.logger.debug("Upstream health check passed")
        except EvaluationClientError as e:
            upstream_status = HEALTH_STATUS_ERROR
            self.logger.warning(f"Upstream health check failed: {str(e)}")

        status = HEALTH_STATUS_HEALTHY if upstream_status == HEALTH_STATUS_OK else HEALTH_STATUS_UNHEALTHY
        self.logger.info(f"Health check result: {status} (gateway: {gateway_status}, upstream: {upstream_status})")

        return {
            "status": status,
            "gateway": gateway_status,
            "upstream": upstream_status
        }
