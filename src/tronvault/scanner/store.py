"""Wallet store interface the scanner reads subscriptions and ownership from."""

from abc import ABC, abstractmethod

from tronvault.domain.models.transfer import WalletSubscription


class WalletStore(ABC):
    @abstractmethod
    async def list_subscriptions(self) -> list[WalletSubscription]:
        """All wallets that have at least one webhook configured."""

    @abstractmethod
    async def has_address(self, wallet_id: str, address: str) -> bool:
        """True if ``address`` is the wallet's own address or one of its sub-addresses."""
