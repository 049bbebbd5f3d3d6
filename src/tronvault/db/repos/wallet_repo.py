import uuid
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tronvault.db.models.wallet import TokenTransferEvent, Wallet, WalletAddress


class WalletRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, address: str, label: Optional[str] = None) -> Wallet:
        wallet = Wallet(address=address, label=label, addresses=[], token_transfer_events=[])
        self._session.add(wallet)
        await self._session.flush()
        return wallet

    async def get_by_id(self, wallet_id: uuid.UUID) -> Optional[Wallet]:
        result = await self._session.execute(
            select(Wallet).where(Wallet.id == wallet_id)
        )
        return result.scalar_one_or_none()

    async def add_address(self, wallet: Wallet, address: str) -> WalletAddress:
        sub = WalletAddress(wallet_id=wallet.id, address=address)
        self._session.add(sub)
        await self._session.flush()
        return sub

    async def has_address(self, wallet_id: uuid.UUID, address: str) -> bool:
        """Own address or registered sub-address. Base58 addresses are case-sensitive."""
        own = await self._session.execute(
            select(Wallet.id).where(Wallet.id == wallet_id, Wallet.address == address)
        )
        if own.first() is not None:
            return True
        sub = await self._session.execute(
            select(WalletAddress.id).where(
                WalletAddress.wallet_id == wallet_id,
                WalletAddress.address == address,
            )
        )
        return sub.first() is not None

    async def list_subscribed(self) -> list[Wallet]:
        """Wallets with a native webhook or at least one token webhook."""
        result = await self._session.execute(
            select(Wallet)
            .where(or_(Wallet.transfer_webhook.is_not(None), Wallet.token_transfer_events.any()))
            .order_by(Wallet.created_at.asc())
        )
        return list(result.scalars().all())

    async def set_transfer_event(self, wallet: Wallet, webhook: str) -> Wallet:
        wallet.transfer_webhook = webhook
        await self._session.flush()
        return wallet

    async def set_token_transfer_event(self, wallet: Wallet, contract: str, webhook: str) -> Wallet:
        """Insert or replace the webhook for ``contract``."""
        for event in wallet.token_transfer_events:
            if event.contract == contract:
                event.webhook = webhook
                break
        else:
            wallet.token_transfer_events.append(TokenTransferEvent(contract=contract, webhook=webhook))
        await self._session.flush()
        return wallet
