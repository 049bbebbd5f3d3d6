"""Tests for WebhookClient — POST with transport-level retry."""

import json

import httpx
import pytest

from tronvault.infra.http.webhook_client import WebhookClient, is_retryable

URL = "https://hooks.example/deposits"


def _client(handler, max_attempts: int = 4) -> WebhookClient:
    return WebhookClient(
        max_attempts=max_attempts,
        backoff_base=0,
        transport=httpx.MockTransport(handler),
    )


class TestPost:
    async def test_posts_json(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        async with _client(handler) as client:
            resp = await client.post(URL, {"hash": "ab", "value": "1"})

        assert resp.status_code == 204
        assert seen[0].method == "POST"
        assert seen[0].headers["content-type"] == "application/json"
        assert json.loads(seen[0].content) == {"hash": "ab", "value": "1"}

    async def test_retries_server_errors(self):
        statuses = iter([503, 500, 200])

        async with _client(lambda request: httpx.Response(next(statuses))) as client:
            resp = await client.post(URL, {})

        assert resp.status_code == 200

    async def test_retries_rate_limit(self):
        statuses = iter([429, 201])

        async with _client(lambda request: httpx.Response(next(statuses))) as client:
            resp = await client.post(URL, {})

        assert resp.status_code == 201

    async def test_client_error_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(400)

        async with _client(handler) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.post(URL, {})

        assert len(calls) == 1

    async def test_gives_up_after_max_attempts(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler, max_attempts=3) as client:
            with pytest.raises(httpx.ConnectError):
                await client.post(URL, {})

        assert len(calls) == 3

    async def test_timeout_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ReadTimeout("slow", request=request)

        async with _client(handler) as client:
            with pytest.raises(httpx.ReadTimeout):
                await client.post(URL, {})

        assert len(calls) == 1


class TestIsRetryable:
    def _status_error(self, status: int) -> httpx.HTTPStatusError:
        request = httpx.Request("POST", URL)
        return httpx.HTTPStatusError("x", request=request, response=httpx.Response(status, request=request))

    @pytest.mark.parametrize("status,expected", [(429, True), (500, True), (599, True), (404, False), (410, False)])
    def test_status(self, status, expected):
        assert is_retryable(self._status_error(status)) is expected

    def test_other_exceptions(self):
        assert is_retryable(ValueError("x")) is False
