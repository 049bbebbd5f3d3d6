"""Tests for TronGridClient — full-node HTTP calls."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from tenacity import wait_none

from tronvault.exceptions import ExternalServiceError
from tronvault.infra.blockchain.tron.trongrid_client import TronGridClient


@pytest.fixture()
def mock_http():
    return AsyncMock()


@pytest.fixture()
def client(mock_http, monkeypatch):
    monkeypatch.setattr(TronGridClient._call.retry, "wait", wait_none())
    return TronGridClient(api_host="https://api.trongrid.io/", http_client=mock_http)


def _mock_response(data, status_code: int = 200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data
    return resp


class TestGetCurrentHeight:
    async def test_reads_block_number(self, client, mock_http):
        mock_http.post.return_value = _mock_response({"block_header": {"raw_data": {"number": 61_000_000}}})

        assert await client.get_current_height() == 61_000_000
        mock_http.post.assert_awaited_once_with("https://api.trongrid.io/wallet/getnowblock", json={})


class TestGetBlockRange:
    async def test_passes_range(self, client, mock_http):
        blocks = [{"block_header": {"raw_data": {"number": 11}}}]
        mock_http.post.return_value = _mock_response({"block": blocks})

        assert await client.get_block_range(11, 21) == blocks
        mock_http.post.assert_awaited_once_with(
            "https://api.trongrid.io/wallet/getblockbylimitnext",
            json={"startNum": 11, "endNum": 21},
        )

    async def test_no_blocks_yet(self, client, mock_http):
        mock_http.post.return_value = _mock_response({})
        assert await client.get_block_range(11, 21) == []


class TestGetTransactionInfo:
    async def test_confirmed_uses_solidity_node(self, client, mock_http):
        mock_http.post.return_value = _mock_response({
            "id": "ab" * 32,
            "blockNumber": 500,
            "blockTimeStamp": 1_700_000_000_000,
            "receipt": {"result": "SUCCESS"},
            "log": [{"address": "a614f803b6fd780986a42c78ec9c7f77e6ded13c", "topics": ["dd"], "data": "00"}],
        })

        info = await client.get_transaction_info("ab" * 32)

        assert mock_http.post.await_args.args[0].endswith("/walletsolidity/gettransactioninfobyid")
        assert info.block_number == 500
        assert info.receipt_result == "SUCCESS"
        assert info.logs[0].address == "a614f803b6fd780986a42c78ec9c7f77e6ded13c"
        assert info.is_finalized

    async def test_unconfirmed_uses_full_node(self, client, mock_http):
        mock_http.post.return_value = _mock_response({})

        info = await client.get_transaction_info("ab" * 32, confirmed=False)

        assert mock_http.post.await_args.args[0].endswith("/wallet/gettransactioninfobyid")
        assert not info.is_finalized

    async def test_failure_reason_decoded(self, client, mock_http):
        mock_http.post.return_value = _mock_response({
            "blockNumber": 1, "result": "FAILED", "resMessage": "4f7574206f6620656e65726779",
        })

        info = await client.get_transaction_info("ab" * 32)

        assert info.failed
        assert info.failure_reason == "Out of energy"


class TestErrors:
    async def test_http_error_retried_then_raised(self, client, mock_http):
        mock_http.post.return_value = _mock_response({}, status_code=503)

        with pytest.raises(ExternalServiceError, match="503"):
            await client.get_transaction("ab" * 32)
        assert mock_http.post.await_count == 5

    async def test_error_body(self, client, mock_http):
        mock_http.post.return_value = _mock_response({"Error": "class java.lang.NullPointerException"})

        with pytest.raises(ExternalServiceError, match="NullPointerException"):
            await client.get_current_height()

    async def test_recovers_after_transient_error(self, client, mock_http):
        mock_http.post.side_effect = [
            _mock_response({}, status_code=502),
            _mock_response({"block_header": {"raw_data": {"number": 7}}}),
        ]
        assert await client.get_current_height() == 7
