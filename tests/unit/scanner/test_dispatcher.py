from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from tronvault.domain.enums import ErrorKind
from tronvault.domain.models.transfer import TransactionInfo, Transfer
from tronvault.infra.http.webhook_client import WebhookClient
from tronvault.scanner.dispatcher import DeliveryResult, WebhookDispatcher
from tronvault.scanner.receipt import ReceiptOptions

URL = "https://hooks.example/deposits"


def _transfer() -> Transfer:
    return Transfer(
        hash="ef" * 32,
        from_address="TXYZopYRdj2D9XRtbG411XZZ3kM5VkAeBf",
        to_address="TJRabPrwbZy45sbavfcjinPJC18kjpRTv8",
        value="1000000",
    )


@pytest.fixture()
def client():
    mock = AsyncMock(spec=WebhookClient)
    mock.post.return_value = MagicMock(status_code=200)
    return mock


@pytest.fixture()
def sleep():
    return AsyncMock()


def _dispatcher(chain, client, sleep, **kwargs) -> WebhookDispatcher:
    return WebhookDispatcher(chain, client, ReceiptOptions(delay=3.0, max_attempts=3), sleep, **kwargs)


class TestDeliver:
    async def test_posts_enriched_payload(self, chain, client, sleep):
        chain.get_transaction_info.return_value = TransactionInfo(block_number=105, block_timestamp=1_700_000_000_000)
        chain.get_current_height.return_value = 125

        result = await _dispatcher(chain, client, sleep).deliver(URL, _transfer())

        assert result.delivered is True
        assert result.status_code == 200
        url, payload = client.post.await_args.args
        assert url == URL
        assert payload == {
            "hash": "ef" * 32,
            "from": "TXYZopYRdj2D9XRtbG411XZZ3kM5VkAeBf",
            "to": "TJRabPrwbZy45sbavfcjinPJC18kjpRTv8",
            "value": "1000000",
            "contract": None,
            "timestamp": 1_700_000_000_000,
            "confirmations": 20,
            "blockNumber": 105,
        }

    async def test_waits_for_receipt_before_posting(self, chain, client, sleep):
        chain.get_transaction_info.side_effect = [TransactionInfo(), TransactionInfo(block_number=1)]
        chain.get_current_height.return_value = 1

        result = await _dispatcher(chain, client, sleep).deliver(URL, _transfer())

        assert result.delivered is True
        sleep.assert_awaited_once_with(3.0)

    async def test_failed_transaction_not_posted(self, chain, client, sleep):
        chain.get_transaction_info.return_value = TransactionInfo(block_number=1, result="FAILED")

        result = await _dispatcher(chain, client, sleep).deliver(URL, _transfer())

        assert result.delivered is False
        assert result.error_kind == ErrorKind.CONFIRMATION_FAILURE
        client.post.assert_not_awaited()

    async def test_timeout_not_posted(self, chain, client, sleep):
        chain.get_transaction_info.return_value = TransactionInfo()

        result = await _dispatcher(chain, client, sleep).deliver(URL, _transfer())

        assert result.error_kind == ErrorKind.CONFIRMATION_TIMEOUT
        assert chain.get_transaction_info.await_count == 3
        client.post.assert_not_awaited()

    async def test_transport_failure(self, chain, client, sleep):
        chain.get_transaction_info.return_value = TransactionInfo(block_number=1)
        chain.get_current_height.return_value = 1
        client.post.side_effect = httpx.ConnectError("connection refused")

        result = await _dispatcher(chain, client, sleep).deliver(URL, _transfer())

        assert result.delivered is False
        assert result.error_kind == ErrorKind.DELIVERY_TRANSPORT
        assert "connection refused" in result.error


class TestDispatch:
    async def test_result_reported_through_callback(self, chain, client, sleep):
        chain.get_transaction_info.return_value = TransactionInfo(block_number=1)
        chain.get_current_height.return_value = 2
        results: list[DeliveryResult] = []
        dispatcher = _dispatcher(chain, client, sleep, on_result=results.append)

        task = dispatcher.dispatch(URL, _transfer())
        assert task in dispatcher.pending

        drained = await dispatcher.drain()

        assert [r.delivered for r in drained] == [True]
        assert [r.tx_hash for r in results] == ["ef" * 32]
        assert dispatcher.pending == set()

    async def test_each_transfer_gets_its_own_task(self, chain, client, sleep):
        chain.get_transaction_info.return_value = TransactionInfo(block_number=1)
        chain.get_current_height.return_value = 1
        dispatcher = _dispatcher(chain, client, sleep)

        first = dispatcher.dispatch(URL, _transfer())
        second = dispatcher.dispatch("https://hooks.example/other", _transfer())

        assert first is not second
        results = await dispatcher.drain()
        assert len(results) == 2
        assert client.post.await_count == 2
