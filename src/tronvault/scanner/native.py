"""Native TRX transfers looked up by hash."""

from tronvault.domain.models.transfer import Transfer
from tronvault.exceptions import InvalidTransferError
from tronvault.infra.blockchain.base import ChainClient
from tronvault.scanner.classifier import is_transfer_contract
from tronvault.scanner.decoder import decode_native_transfer


async def get_native_transfer(chain: ChainClient, tx_hash: str) -> Transfer:
    """Native transfer by hash; confirmation fields are filled once it is in a block."""
    tx = await chain.get_transaction(tx_hash)
    if not is_transfer_contract(tx):
        raise InvalidTransferError("Unknown transaction type.")

    transfer = decode_native_transfer(tx)
    info = await chain.get_transaction_info(tx_hash, confirmed=False)
    if not info.is_finalized:
        return transfer

    current = await chain.get_current_height()
    return transfer.with_confirmation(info, current)
