"""Test helpers for faking upstream HTTP services."""

import httpx


class UpstreamRecorder:
    """Records requests sent to a mock upstream and answers with a fixed response."""

    def __init__(self, status_code=200, json=None, content=b"", headers=None):
        self.requests = []
        self.status_code = status_code
        self.json = json
        self.content = content
        self.headers = headers or {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.json is not None:
            return httpx.Response(self.status_code, json=self.json, headers=self.headers)
        return httpx.Response(self.status_code, content=self.content, headers=self.headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]
