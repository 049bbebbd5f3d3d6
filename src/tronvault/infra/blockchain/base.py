"""Abstract chain client the scanner depends on."""

from abc import ABC, abstractmethod

from tronvault.domain.models.transfer import TransactionInfo
from tronvault.infra.blockchain.tron import abi, address
from tronvault.infra.blockchain.tron.abi import AbiMethod


class ChainClient(ABC):
    """Interface for chain access: heights, blocks, transactions, receipts.

    Address codec and ABI lookup are shared helpers; adapters only implement I/O.
    """

    @abstractmethod
    async def get_current_height(self) -> int:
        """Height of the latest block known to the node."""

    @abstractmethod
    async def get_block_range(self, start: int, stop: int) -> list[dict]:
        """Blocks with height in [start, stop). May return fewer, or none."""

    @abstractmethod
    async def get_transaction(self, tx_hash: str) -> dict:
        """Raw transaction by id. Empty dict if unknown."""

    @abstractmethod
    async def get_transaction_info(self, tx_hash: str, confirmed: bool = True) -> TransactionInfo:
        """Receipt view (solidified when ``confirmed``, otherwise latest)."""

    def to_base58(self, hex_address: str) -> str:
        return address.to_base58(hex_address)

    def to_hex(self, base58_address: str) -> str:
        return address.to_hex(base58_address)

    def get_method(self, key: str) -> AbiMethod | None:
        return abi.get_method(key)
