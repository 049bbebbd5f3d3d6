"""Classify raw transactions: native transfer, token transfer call, or other."""

from tronvault.domain.enums import ContractType, TxKind
from tronvault.infra.blockchain.tron.abi import TRANSFER_SELECTORS


def first_contract(tx: dict) -> dict | None:
    contracts = (tx.get("raw_data") or {}).get("contract") or []
    return contracts[0] if contracts else None


def contract_type(tx: dict) -> str | None:
    contract = first_contract(tx)
    return contract.get("type") if contract else None


def contract_parameter(tx: dict) -> dict:
    """The ``parameter.value`` block of the first contract (empty if missing)."""
    contract = first_contract(tx) or {}
    return (contract.get("parameter") or {}).get("value") or {}


def method_selector(tx: dict) -> str | None:
    """First 4 bytes (8 hex chars) of the call data, lowercased."""
    data = contract_parameter(tx).get("data")
    if not isinstance(data, str) or len(data) < 8:
        return None
    return data[:8].lower()


def is_transfer_contract(tx: dict) -> bool:
    return contract_type(tx) == ContractType.TRANSFER.value


def is_trigger_smart_contract(tx: dict) -> bool:
    return contract_type(tx) == ContractType.TRIGGER_SMART_CONTRACT.value


def classify(tx: dict) -> TxKind:
    if is_transfer_contract(tx):
        return TxKind.NATIVE_TRANSFER
    if is_trigger_smart_contract(tx) and method_selector(tx) in TRANSFER_SELECTORS:
        return TxKind.TOKEN_CALL
    return TxKind.OTHER
