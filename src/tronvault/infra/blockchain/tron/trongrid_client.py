"""TronGrid full-node HTTP API client."""

import logging

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from tronvault.domain.models.transfer import TransactionInfo
from tronvault.exceptions import ExternalServiceError
from tronvault.infra.blockchain.base import ChainClient
from tronvault.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)


class TronGridClient(ChainClient):
    def __init__(self, api_host: str, http_client: RateLimitedClient) -> None:
        self._api_host = api_host.rstrip("/")
        self._http = http_client

    @retry(
        retry=retry_if_exception_type((ExternalServiceError, httpx.TransportError)),
        stop=stop_after_attempt(5),
        wait=wait_exponential(multiplier=1, min=1, max=15),
        reraise=True,
    )
    async def _call(self, path: str, payload: dict | None = None) -> dict:
        """POST to a node endpoint and return the JSON body."""
        resp = await self._http.post(f"{self._api_host}{path}", json=payload or {})
        if resp.status_code >= 400:
            raise ExternalServiceError(f"TronGrid HTTP {resp.status_code} ({path})")

        data = resp.json()
        if isinstance(data, dict) and "Error" in data:
            raise ExternalServiceError(f"TronGrid error ({path}): {data['Error']}")
        return data or {}

    async def get_current_height(self) -> int:
        block = await self._call("/wallet/getnowblock")
        return int(block["block_header"]["raw_data"]["number"])

    async def get_block_range(self, start: int, stop: int) -> list[dict]:
        data = await self._call("/wallet/getblockbylimitnext", {"startNum": start, "endNum": stop})
        blocks = data.get("block", [])
        logger.debug("Fetched %d blocks in [%d, %d)", len(blocks), start, stop)
        return blocks

    async def get_transaction(self, tx_hash: str) -> dict:
        return await self._call("/wallet/gettransactionbyid", {"value": tx_hash})

    async def get_transaction_info(self, tx_hash: str, confirmed: bool = True) -> TransactionInfo:
        # Solidity node only answers for solidified (irreversible) blocks
        path = "/walletsolidity/gettransactioninfobyid" if confirmed else "/wallet/gettransactioninfobyid"
        data = await self._call(path, {"value": tx_hash})
        return TransactionInfo.from_api(data)
