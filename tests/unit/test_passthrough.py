"""Unit tests for passthrough and rewrite slices."""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from eval_gateway.shared.config import ProxyRule, RewriteRule
from eval_gateway.shared.httpx_util import HTTPXForwarder
from eval_gateway.slices.passthrough.passthrough_router import PassthroughRouter
from eval_gateway.slices.rewrite.rewrite_router import RewriteRouter
from ..helpers import UpstreamRecorder
from ..test_const import HTTP_BAD_GATEWAY, HTTP_GATEWAY_TIMEOUT, TEST_ORIGIN


def make_proxy_client(recorder_or_transport, rule=None) -> TestClient:
    transport = getattr(recorder_or_transport, "transport", recorder_or_transport)
    app = FastAPI()
    app.include_router(PassthroughRouter.get_router(rule or ProxyRule(), HTTPXForwarder(transport=transport)))
    return TestClient(app)


def make_rewrite_client(recorder, rules) -> TestClient:
    app = FastAPI()
    app.include_router(RewriteRouter.get_router(rules, HTTPXForwarder(transport=recorder.transport)))
    return TestClient(app)


class TestPassthroughRouter:
    """Test the prefix-stripping reverse proxy."""

    def test_forwards_path_query_method_body_and_headers(self):
        recorder = UpstreamRecorder(json={"ok": True})
        client = make_proxy_client(recorder)

        response = client.post(
            "/api/proxy/foo/bar?x=1",
            content=b'{"key": "value"}',
            headers={"content-type": "application/json", "authorization": "Bearer token", "x-trace": "abc"},
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True}

        forwarded = recorder.last_request
        assert str(forwarded.url) == "http://localhost:5000/foo/bar?x=1"
        assert forwarded.method == "POST"
        assert forwarded.content == b'{"key": "value"}'
        assert forwarded.headers["authorization"] == "Bearer token"
        assert forwarded.headers["x-trace"] == "abc"
        assert forwarded.headers["content-type"] == "application/json"
        assert forwarded.headers["host"] == "localhost:5000"

    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
    def test_preserves_method(self, method):
        recorder = UpstreamRecorder(content=b"")
        client = make_proxy_client(recorder)

        client.request(method, "/api/proxy/items/7")

        assert recorder.last_request.method == method
        assert recorder.last_request.url.path == "/items/7"

    def test_relays_upstream_status_and_headers(self):
        recorder = UpstreamRecorder(status_code=404, content=b"missing", headers={"x-upstream": "yes"})
        client = make_proxy_client(recorder)

        response = client.get("/api/proxy/nothing")

        assert response.status_code == 404
        assert response.content == b"missing"
        assert response.headers["x-upstream"] == "yes"

    def test_custom_rule(self):
        recorder = UpstreamRecorder(content=b"ok")
        client = make_proxy_client(recorder, ProxyRule(prefix="/backend", target="http://svc:8000/base"))

        client.get("/backend/a/b")

        assert str(recorder.last_request.url) == "http://svc:8000/base/a/b"

    def test_unreachable_upstream_returns_502(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_proxy_client(httpx.MockTransport(refuse))
        response = client.get("/api/proxy/foo")

        assert response.status_code == HTTP_BAD_GATEWAY

    def test_upstream_timeout_returns_504(self):
        def stall(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_proxy_client(httpx.MockTransport(stall))
        response = client.get("/api/proxy/foo")

        assert response.status_code == HTTP_GATEWAY_TIMEOUT


class TestRewriteRouter:
    """Test static path rewrites."""

    def test_rewrites_to_fixed_destination(self):
        recorder = UpstreamRecorder(json={"aggregateScores": {"ModelA": 4.5}})
        rules = [RewriteRule(source="/llm/aggregateScores", destination=f"{TEST_ORIGIN}/llm/aggregateScores")]
        client = make_rewrite_client(recorder, rules)

        response = client.get("/llm/aggregateScores")

        assert response.json() == {"aggregateScores": {"ModelA": 4.5}}
        assert str(recorder.last_request.url) == f"{TEST_ORIGIN}/llm/aggregateScores"

    def test_rewrite_keeps_method_body_and_query(self):
        recorder = UpstreamRecorder(json={})
        rules = [RewriteRule(source="/experiment/runOnePrompt", destination=f"{TEST_ORIGIN}/experiment/runOnePrompt")]
        client = make_rewrite_client(recorder, rules)

        client.post("/experiment/runOnePrompt?trace=1", content=b'{"userPrompt": "hi"}')

        forwarded = recorder.last_request
        assert forwarded.method == "POST"
        assert str(forwarded.url) == f"{TEST_ORIGIN}/experiment/runOnePrompt?trace=1"
        assert forwarded.content == b'{"userPrompt": "hi"}'

    def test_one_route_per_rule(self):
        rules = [
            RewriteRule(source="/a", destination="http://x/a"),
            RewriteRule(source="/b", destination="http://x/b"),
        ]
        router = RewriteRouter.get_router(rules, HTTPXForwarder())
        assert sorted(route.path for route in router.routes) == ["/a", "/b"]

    def test_unmatched_path_is_not_forwarded(self):
        recorder = UpstreamRecorder(json={})
        client = make_rewrite_client(recorder, [RewriteRule(source="/health", destination="http://x/health")])

        response = client.get("/other")

        assert response.status_code == 404
        assert recorder.requests == []
