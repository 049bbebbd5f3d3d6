"""Canonical transfer record and the chain/receipt shapes it is built from."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tronvault.domain.enums import ExecutionResult


class Transfer(BaseModel):
    """Canonical transfer, independent of native vs. token origin.

    Serialized with the wire aliases (``from``, ``to``, ``blockNumber``) for webhooks.
    """

    model_config = ConfigDict(populate_by_name=True)

    hash: str
    from_address: str = Field(alias="from")
    to_address: str = Field(alias="to")
    value: str  # decimal string, smallest unit (sun / token base unit)
    contract: str | None = None  # None = native TRX
    timestamp: int | None = None
    confirmations: int | None = None
    block_number: int | None = Field(default=None, alias="blockNumber")

    @property
    def is_token(self) -> bool:
        return self.contract is not None

    def with_confirmation(self, info: "TransactionInfo", current_height: int) -> "Transfer":
        """Copy with timestamp/confirmations/blockNumber filled from a receipt."""
        return self.model_copy(update={
            "timestamp": info.block_timestamp,
            "confirmations": current_height - info.block_number if info.block_number is not None else None,
            "block_number": info.block_number,
        })

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class TransferInput(BaseModel):
    """Arguments decoded from a transfer/transferFrom call (41-prefixed hex addresses)."""

    to: str
    value: str
    from_: str | None = None  # only transferFrom carries an explicit sender


class TransferEvent(BaseModel):
    """A decoded Transfer(from, to, value) event log (41-prefixed hex addresses)."""

    from_: str
    to: str
    value: str


class LogEntry(BaseModel):
    address: str  # hex without the 41 prefix, as returned by the node
    topics: list[str] = []
    data: str = ""


class TransactionInfo(BaseModel):
    """Receipt view of a transaction (``gettransactioninfobyid``)."""

    tx_id: str | None = None
    block_number: int | None = None
    block_timestamp: int | None = None
    result: str | None = None  # only present ("FAILED") when execution failed
    res_message: str | None = None  # hex-encoded failure reason
    receipt_result: str | None = None
    logs: list[LogEntry] = []

    @classmethod
    def from_api(cls, data: dict) -> "TransactionInfo":
        receipt = data.get("receipt") or {}
        return cls(
            tx_id=data.get("id"),
            block_number=data.get("blockNumber"),
            block_timestamp=data.get("blockTimeStamp"),
            result=data.get("result"),
            res_message=data.get("resMessage"),
            receipt_result=receipt.get("result"),
            logs=[LogEntry(**log) for log in data.get("log", [])],
        )

    @property
    def is_finalized(self) -> bool:
        return self.block_number is not None

    @property
    def failed(self) -> bool:
        return self.result == ExecutionResult.FAILED.value

    @property
    def failure_reason(self) -> str:
        if not self.res_message:
            return ""
        try:
            return bytes.fromhex(self.res_message).decode("utf-8", errors="replace")
        except ValueError:
            return self.res_message


class WalletSubscription(BaseModel):
    """A wallet's configured webhooks, mirrored from the wallet store."""

    wallet_id: str
    address: str
    native_webhook: str | None = None
    token_webhooks: dict[str, str] = {}  # base58 contract address -> webhook url
