"""WebhookDispatcher — confirmation-gated, fire-and-forget webhook delivery."""

import asyncio
import logging
from typing import Callable

import httpx
from pydantic import BaseModel

from tronvault.domain.enums import ErrorKind
from tronvault.domain.models.transfer import TransactionInfo, Transfer
from tronvault.exceptions import DeliveryTransportError, TronVaultError
from tronvault.infra.blockchain.base import ChainClient
from tronvault.infra.http.webhook_client import WebhookClient
from tronvault.scanner.receipt import ReceiptOptions, Sleep, wait_for_receipt

logger = logging.getLogger(__name__)


class DeliveryResult(BaseModel):
    """Outcome of one webhook delivery task."""

    tx_hash: str
    url: str
    delivered: bool
    status_code: int | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None


class WebhookDispatcher:
    """Spawns one task per transfer: wait for the receipt, then POST once.

    Tasks are not joined by the scan loop. Each task ends in a DeliveryResult
    that is logged and passed to ``on_result``.
    """

    def __init__(
        self,
        chain: ChainClient,
        client: WebhookClient,
        receipt_options: ReceiptOptions | None = None,
        sleep: Sleep = asyncio.sleep,
        on_result: Callable[[DeliveryResult], None] | None = None,
    ) -> None:
        self._chain = chain
        self._client = client
        self._options = receipt_options or ReceiptOptions()
        self._sleep = sleep
        self._on_result = on_result
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> set[asyncio.Task]:
        return set(self._tasks)

    def dispatch(self, url: str, transfer: Transfer) -> asyncio.Task:
        task = asyncio.create_task(self.deliver(url, transfer), name=f"webhook:{transfer.hash}")
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    async def deliver(self, url: str, transfer: Transfer) -> DeliveryResult:
        async def send(info: TransactionInfo) -> httpx.Response:
            current = await self._chain.get_current_height()
            payload = transfer.with_confirmation(info, current).to_payload()
            return await self._client.post(url, payload)

        try:
            resp = await wait_for_receipt(self._chain, transfer.hash, send, self._options, self._sleep)
        except TronVaultError as e:
            return self._failed(url, transfer, e)
        except httpx.HTTPError as e:
            return self._failed(url, transfer, DeliveryTransportError(f"POST {url} failed: {e}"))

        return DeliveryResult(tx_hash=transfer.hash, url=url, delivered=True, status_code=resp.status_code)

    async def drain(self) -> list[DeliveryResult]:
        """Wait for the deliveries in flight. Shutdown does not call this."""
        results = await asyncio.gather(*self._tasks, return_exceptions=True)
        return [r for r in results if isinstance(r, DeliveryResult)]

    @staticmethod
    def _failed(url: str, transfer: Transfer, error: TronVaultError) -> DeliveryResult:
        return DeliveryResult(
            tx_hash=transfer.hash,
            url=url,
            delivered=False,
            error=error.message,
            error_kind=error.kind,
        )

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Delivery %s cancelled", task.get_name())
            return

        exc = task.exception()
        if exc is not None:
            logger.error("Delivery %s crashed", task.get_name(), exc_info=exc)
            return

        result: DeliveryResult = task.result()
        if result.delivered:
            logger.info("Sent %s to %s", result.tx_hash, result.url)
        else:
            logger.error("Failed to send %s to %s: %s", result.tx_hash, result.url, result.error)

        if self._on_result is not None:
            self._on_result(result)
