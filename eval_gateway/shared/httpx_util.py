"""HTTP forwarding utilities for the eval gateway."""

from typing import List, Optional, Tuple

import httpx
from fastapi import HTTPException, Request, Response

from eval_gateway.const import (
    DEFAULT_REQUEST_TIMEOUT, HTTP_BAD_GATEWAY, HTTP_GATEWAY_TIMEOUT, REQUEST_HEADERS_TO_DROP,
    RESPONSE_HEADERS_TO_DROP,
)
from .logging import LoggingManager


def raw_request_path(request: Request) -> str:
    """Percent-encoded request path as received, without the query string."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1").split("?", 1)[0]
    return request.url.path


class HTTPXForwarder:
    """Relays an incoming request to an upstream URL and returns the upstream reply.

    Method, headers and body are forwarded verbatim except for the hop headers
    in REQUEST_HEADERS_TO_DROP; httpx sets ``Host`` from the upstream URL.
    Upstream statuses, including errors, are relayed unchanged.
    """

    def __init__(self, timeout: float = DEFAULT_REQUEST_TIMEOUT, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport
        self.logger = LoggingManager.get_logger(__name__)

    @staticmethod
    def _clean_request_headers(request: Request) -> List[Tuple[str, str]]:
        return [(k, v) for k, v in request.headers.items() if k.lower() not in REQUEST_HEADERS_TO_DROP]

    @staticmethod
    def _relay_response(response: httpx.Response) -> Response:
        relayed = Response(content=response.content, status_code=response.status_code)
        for k, v in response.headers.multi_items():
            if k.lower() not in RESPONSE_HEADERS_TO_DROP:
                relayed.headers.append(k, v)
        return relayed

    async def forward(self, request: Request, url: str) -> Response:
        """Forward ``request`` to ``url``."""
        body = await request.body()
        headers = self._clean_request_headers(request)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(request.method, url, headers=headers, content=body)
        except httpx.TimeoutException as e:
            self.logger.error(f"Timeout forwarding {request.method} to {url}: {str(e)}")
            raise HTTPException(status_code=HTTP_GATEWAY_TIMEOUT, detail="Upstream request timed out")
        except httpx.RequestError as e:
            self.logger.error(f"Failed to reach upstream {url}: {str(e)}")
            raise HTTPException(status_code=HTTP_BAD_GATEWAY, detail="Upstream request failed")

        self.logger.info(f"Forwarded {request.method} {raw_request_path(request)} -> {url} ({response.status_code})")
        return self._relay_response(response)
