from tronvault.domain.enums.error import ErrorKind
from tronvault.domain.enums.listener import ListenerState
from tronvault.domain.enums.transaction import ContractType, ExecutionResult, TxKind

__all__ = [
    "ContractType",
    "ErrorKind",
    "ExecutionResult",
    "ListenerState",
    "TxKind",
]
