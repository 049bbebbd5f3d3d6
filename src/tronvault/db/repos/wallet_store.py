"""WalletStore backed by the SQL wallet tables."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tronvault.db.models.wallet import Wallet
from tronvault.db.repos.wallet_repo import WalletRepo
from tronvault.domain.models.transfer import WalletSubscription
from tronvault.scanner.store import WalletStore


def to_subscription(wallet: Wallet) -> WalletSubscription:
    return WalletSubscription(
        wallet_id=str(wallet.id),
        address=wallet.address,
        native_webhook=wallet.transfer_webhook,
        token_webhooks={e.contract: e.webhook for e in wallet.token_transfer_events},
    )


class SqlWalletStore(WalletStore):
    """Opens a short-lived session per call; safe to share across tasks."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_subscriptions(self) -> list[WalletSubscription]:
        async with self._session_factory() as session:
            wallets = await WalletRepo(session).list_subscribed()
            return [to_subscription(w) for w in wallets]

    async def has_address(self, wallet_id: str, address: str) -> bool:
        try:
            wid = uuid.UUID(wallet_id)
        except ValueError:
            return False
        async with self._session_factory() as session:
            return await WalletRepo(session).has_address(wid, address)
