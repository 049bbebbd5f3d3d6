"""Webhook POST client with transport-level retry and capped exponential backoff."""

import logging

import httpx
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

logger = logging.getLogger(__name__)


def is_retryable(exc: BaseException) -> bool:
    """Transient failures only: no response at all, 429 or 5xx.

    A timeout may mean the receiver already got the POST, so it is not retried.
    """
    if isinstance(exc, httpx.TimeoutException):
        return False
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or 500 <= status <= 599
    return False


class WebhookClient:
    def __init__(
        self,
        timeout: float = 30.0,
        max_attempts: int = 15,
        backoff_base: float = 1.0,
        backoff_max: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._max_attempts = max_attempts
        self._backoff_base = backoff_base
        self._backoff_max = backoff_max
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )

    async def post(self, url: str, payload: dict) -> httpx.Response:
        """POST JSON; any 2xx is success. Raises the last httpx error once retries run out."""
        retrying = AsyncRetrying(
            retry=retry_if_exception(is_retryable),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._backoff_base, max=self._backoff_max),
            before_sleep=self._log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                resp = await self._client.post(url, json=payload)
                resp.raise_for_status()
        return resp

    @staticmethod
    def _log_retry(retry_state) -> None:
        logger.warning(
            "Webhook attempt %d failed (%s), retrying in %.1fs",
            retry_state.attempt_number,
            retry_state.outcome.exception(),
            retry_state.next_action.sleep if retry_state.next_action else 0.0,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "WebhookClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
