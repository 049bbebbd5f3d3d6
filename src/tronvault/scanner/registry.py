"""SubscriptionRegistry — wallet id -> BlockHandler, read by the scan loop."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tronvault.scanner.handler import BlockHandler


class SubscriptionRegistry:
    """Insert-or-replace only; entries are never removed.

    Readers take a snapshot with ``handlers()`` so a registration made while a
    batch is being fanned out only takes effect for the next batch.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, BlockHandler] = {}

    def register(self, handler: BlockHandler) -> None:
        self._handlers[handler.wallet_id] = handler

    def get(self, wallet_id: str) -> BlockHandler | None:
        return self._handlers.get(wallet_id)

    def handlers(self) -> list[BlockHandler]:
        return list(self._handlers.values())

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, wallet_id: object) -> bool:
        return wallet_id in self._handlers
