from enum import Enum


class ContractType(str, Enum):
    """Contract types found in ``raw_data.contract[0].type``."""

    TRANSFER = "TransferContract"
    TRIGGER_SMART_CONTRACT = "TriggerSmartContract"


class TxKind(str, Enum):
    """Scanner classification of a raw transaction."""

    NATIVE_TRANSFER = "NATIVE_TRANSFER"
    TOKEN_CALL = "TOKEN_CALL"
    OTHER = "OTHER"


class ExecutionResult(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
