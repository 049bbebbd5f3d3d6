"""BlockHandler — per-wallet matching of decoded transfers against webhooks."""

import logging

from tronvault.domain.models.transfer import Transfer, WalletSubscription
from tronvault.scanner.dispatcher import WebhookDispatcher
from tronvault.scanner.store import WalletStore

logger = logging.getLogger(__name__)


class BlockHandler:
    """Dispatches a webhook for each transfer into an address the wallet owns."""

    def __init__(self, subscription: WalletSubscription, store: WalletStore, dispatcher: WebhookDispatcher) -> None:
        self.subscription = subscription
        self._store = store
        self._dispatcher = dispatcher

    @property
    def wallet_id(self) -> str:
        return self.subscription.wallet_id

    async def handle(self, transfers: list[Transfer]) -> None:
        await self.handle_transfers([t for t in transfers if not t.is_token])
        await self.handle_token_transfers([t for t in transfers if t.is_token])

    async def handle_transfers(self, transfers: list[Transfer]) -> None:
        webhook = self.subscription.native_webhook
        if webhook is None:
            return
        for transfer in transfers:
            await self._notify_if_owned(webhook, transfer)

    async def handle_token_transfers(self, transfers: list[Transfer]) -> None:
        webhooks = self.subscription.token_webhooks
        for transfer in transfers:
            webhook = webhooks.get(transfer.contract or "")
            if webhook is None:
                continue
            await self._notify_if_owned(webhook, transfer)

    async def includes_address(self, address: str) -> bool:
        return await self._store.has_address(self.wallet_id, address)

    async def _notify_if_owned(self, webhook: str, transfer: Transfer) -> None:
        try:
            if await self.includes_address(transfer.to_address):
                self._dispatcher.dispatch(webhook, transfer)
        except Exception:
            logger.exception("Handler for wallet %s failed on %s", self.wallet_id, transfer.hash)
