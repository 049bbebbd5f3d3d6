"""Runtime webhook registration: persist the event, then update the live registry."""

import logging
import uuid

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tronvault.db.models.wallet import Wallet
from tronvault.db.repos.wallet_repo import WalletRepo
from tronvault.db.repos.wallet_store import to_subscription
from tronvault.domain.models.transfer import WalletSubscription
from tronvault.exceptions import InvalidAddressError, InvalidWebhookError, WalletNotFoundError
from tronvault.infra.blockchain.tron.address import is_base58_address
from tronvault.scanner.listener import BlockListener

logger = logging.getLogger(__name__)

_url_adapter = TypeAdapter(AnyHttpUrl)


def _validate_webhook(url: str) -> str:
    try:
        _url_adapter.validate_python(url)
    except ValidationError as e:
        raise InvalidWebhookError(f"Invalid webhook URL: {url}") from e
    return url


class SubscriptionService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession], listener: BlockListener) -> None:
        self._session_factory = session_factory
        self._listener = listener

    async def set_transfer_webhook(self, wallet_id: str, url: str) -> WalletSubscription:
        webhook = _validate_webhook(url)
        async with self._session_factory() as session:
            repo = WalletRepo(session)
            wallet = await self._get_wallet(repo, wallet_id)
            await repo.set_transfer_event(wallet, webhook)
            await session.commit()
            return self._register(wallet)

    async def set_token_transfer_webhook(self, wallet_id: str, contract: str, url: str) -> WalletSubscription:
        if not is_base58_address(contract):
            raise InvalidAddressError("Invalid address.")
        webhook = _validate_webhook(url)
        async with self._session_factory() as session:
            repo = WalletRepo(session)
            wallet = await self._get_wallet(repo, wallet_id)
            await repo.set_token_transfer_event(wallet, contract, webhook)
            await session.commit()
            return self._register(wallet)

    @staticmethod
    async def _get_wallet(repo: WalletRepo, wallet_id: str) -> Wallet:
        try:
            wid = uuid.UUID(wallet_id)
        except ValueError:
            raise WalletNotFoundError(f"Wallet [{wallet_id}] not found.") from None
        wallet = await repo.get_by_id(wid)
        if wallet is None:
            raise WalletNotFoundError(f"Wallet [{wallet_id}] not found.")
        return wallet

    def _register(self, wallet: Wallet) -> WalletSubscription:
        subscription = to_subscription(wallet)
        self._listener.register_handler(subscription)
        logger.info("Registered webhooks for wallet %s", subscription.wallet_id)
        return subscription
