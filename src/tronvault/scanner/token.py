"""TRC20 token transfers looked up by hash, with event-log verification."""

import logging

from tronvault.domain.enums import ExecutionResult
from tronvault.domain.models.transfer import Transfer
from tronvault.exceptions import (
    ConfirmationFailure,
    InvalidTransferError,
    TransferEventNotFoundError,
    TransferNotConfirmedError,
)
from tronvault.infra.blockchain.base import ChainClient
from tronvault.scanner.classifier import contract_parameter, is_trigger_smart_contract
from tronvault.scanner.decoder import decode_transfer_events, decode_transfer_input

logger = logging.getLogger(__name__)


class Token:
    """A TRC20 contract, addressed by its base58 address."""

    def __init__(self, address: str, chain: ChainClient) -> None:
        self._address = address
        self._chain = chain
        self._hex_address = chain.to_hex(address)

    @property
    def address(self) -> str:
        return self._address

    @property
    def hex_address(self) -> str:
        return self._hex_address

    async def build_transfer(self, tx_hash: str) -> Transfer:
        """Transfer reconstructed from the call input only (value not verified)."""
        tx = await self._chain.get_transaction(tx_hash)
        if not is_trigger_smart_contract(tx):
            raise InvalidTransferError("Unknown transaction type.")

        parameter = contract_parameter(tx)
        if (parameter.get("contract_address") or "").lower() != self._hex_address:
            raise InvalidTransferError("Unknown contract address.")

        data = parameter.get("data")
        if not isinstance(data, str) or not data:
            raise InvalidTransferError("Invalid transfer parameter.")

        transfer_input = decode_transfer_input(data)
        sender = transfer_input.from_ or parameter.get("owner_address")
        if not sender:
            raise InvalidTransferError("Invalid transfer parameter.")

        return Transfer(
            hash=tx["txID"],
            from_address=self._chain.to_base58(sender),
            to_address=self._chain.to_base58(transfer_input.to),
            value=transfer_input.value,
            contract=self._address,
        )

    async def get_transfer(self, tx_hash: str) -> Transfer:
        return await self.build_transfer(tx_hash)

    async def get_verified_transfer(self, tx_hash: str) -> Transfer:
        """Transfer whose value comes from the emitted Transfer event, not the call input."""
        transfer = await self.build_transfer(tx_hash)
        info = await self._chain.get_transaction_info(tx_hash, confirmed=False)

        if not info.is_finalized:
            raise TransferNotConfirmedError("Transfer not confirmed.")
        if info.receipt_result != ExecutionResult.SUCCESS.value:
            raise ConfirmationFailure("Token transfer failed.", reason=info.failure_reason or info.receipt_result)

        events = decode_transfer_events(info.logs, self._hex_address)
        match = next(
            (
                e for e in events
                if self._chain.to_base58(e.from_) == transfer.from_address
                and self._chain.to_base58(e.to) == transfer.to_address
            ),
            None,
        )
        if match is None:
            raise TransferEventNotFoundError("Transfer event not found.")

        if match.value != transfer.value:
            logger.warning(
                "Call value %s differs from event value %s for %s",
                transfer.value, match.value, tx_hash,
            )

        current = await self._chain.get_current_height()
        return transfer.model_copy(update={"value": match.value}).with_confirmation(info, current)
