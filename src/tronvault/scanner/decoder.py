"""Decode raw transactions and event logs into canonical transfers."""

import logging

from eth_abi import decode
from eth_abi.exceptions import DecodingError

from tronvault.domain.enums import TxKind
from tronvault.domain.models.transfer import LogEntry, Transfer, TransferEvent, TransferInput
from tronvault.exceptions import DecodeRejection
from tronvault.infra.blockchain.tron.abi import TRANSFER_METHODS, get_method
from tronvault.infra.blockchain.tron.address import HEX_PREFIX, from_abi_address, to_base58
from tronvault.scanner.classifier import classify, contract_parameter

logger = logging.getLogger(__name__)


def decode_transfer_input(data: str) -> TransferInput:
    """Decode ``transfer(to, value)`` / ``transferFrom(from, to, value)`` call data.

    The selector is checked before the payload layout is trusted.
    """
    method = get_method(data[:8]) if len(data) >= 8 else None
    if method is None or method.name not in TRANSFER_METHODS:
        raise DecodeRejection("Unrecognized parameter.")

    try:
        decoded = decode(method.input_types, bytes.fromhex(data[8:]))
    except (DecodingError, ValueError) as e:
        raise DecodeRejection(f"Malformed {method.name} parameter: {e}") from e

    values = {param.name: value for param, value in zip(method.inputs, decoded)}
    return TransferInput(
        to=from_abi_address(values["_to"]),
        value=str(values["_value"]),
        from_=from_abi_address(values["_from"]) if "_from" in values else None,
    )


def decode_native_transfer(tx: dict) -> Transfer:
    parameter = contract_parameter(tx)
    try:
        return Transfer(
            hash=tx["txID"],
            from_address=to_base58(parameter["owner_address"]),
            to_address=to_base58(parameter["to_address"]),
            value=str(parameter["amount"]),
        )
    except (KeyError, ValueError) as e:
        raise DecodeRejection(f"Malformed TransferContract: {e}") from e


def decode_token_transfer(tx: dict) -> Transfer:
    parameter = contract_parameter(tx)
    data = parameter.get("data")
    if not isinstance(data, str) or not data:
        raise DecodeRejection("Invalid transfer parameter.")

    transfer_input = decode_transfer_input(data)
    # transfer() has no sender argument; the caller is the sender
    sender = transfer_input.from_ or parameter.get("owner_address")
    try:
        return Transfer(
            hash=tx["txID"],
            from_address=to_base58(sender),
            to_address=to_base58(transfer_input.to),
            value=transfer_input.value,
            contract=to_base58(parameter["contract_address"]),
        )
    except (KeyError, ValueError, TypeError) as e:
        raise DecodeRejection(f"Malformed TriggerSmartContract: {e}") from e


def decode_transfer_events(logs: list[LogEntry], contract_hex: str) -> list[TransferEvent]:
    """Decode Transfer event logs emitted by ``contract_hex`` (41-prefixed hex)."""
    event = get_method("Transfer")
    indexed = [p for p in event.inputs if p.indexed]
    plain = [p for p in event.inputs if not p.indexed]

    results: list[TransferEvent] = []
    for log in logs:
        if not log.topics or not log.topics[0].lower().startswith(event.signature):
            continue
        if (HEX_PREFIX + log.address).lower() != contract_hex.lower():
            continue
        if len(log.topics) - 1 < len(indexed):
            continue

        try:
            values = {
                param.name: decode([param.type], bytes.fromhex(topic))[0]
                for param, topic in zip(indexed, log.topics[1:])
            }
            decoded = decode([p.type for p in plain], bytes.fromhex(log.data))
            values.update({param.name: value for param, value in zip(plain, decoded)})
        except (DecodingError, ValueError):
            logger.debug("Skipping malformed Transfer log from %s", log.address)
            continue

        results.append(TransferEvent(
            from_=from_abi_address(values["from"]),
            to=from_abi_address(values["to"]),
            value=str(values["value"]),
        ))
    return results


def decode_transaction(tx: dict) -> Transfer | None:
    """Canonical transfer for a transaction, or None if it is not a transfer."""
    kind = classify(tx)
    if kind == TxKind.NATIVE_TRANSFER:
        return decode_native_transfer(tx)
    if kind == TxKind.TOKEN_CALL:
        return decode_token_transfer(tx)
    return None


def extract_transfers(blocks: list[dict]) -> list[Transfer]:
    """All native and token transfers in the given blocks, in block order.

    Transactions that fail to decode are skipped.
    """
    transfers: list[Transfer] = []
    for block in blocks:
        for tx in block.get("transactions", []):
            try:
                transfer = decode_transaction(tx)
            except DecodeRejection as e:
                logger.debug("Skipping tx %s: %s", tx.get("txID"), e)
                continue
            if transfer is not None:
                transfers.append(transfer)
    return transfers


def block_height(block: dict) -> int:
    return int(block["block_header"]["raw_data"]["number"])


def latest_block_number(blocks: list[dict], current: int) -> int:
    """Highest block height in ``blocks``; ``current`` if none is higher."""
    return max([current, *(block_height(b) for b in blocks)])
