"""BlockListener — sequential block scanner feeding the per-wallet handlers."""

import asyncio
import logging

from tronvault.domain.enums import ListenerState
from tronvault.domain.models.transfer import Transfer, WalletSubscription
from tronvault.exceptions import FatalStartupError, TransientFetchError
from tronvault.infra.blockchain.base import ChainClient
from tronvault.scanner.decoder import extract_transfers, latest_block_number
from tronvault.scanner.dispatcher import WebhookDispatcher
from tronvault.scanner.handler import BlockHandler
from tronvault.scanner.registry import SubscriptionRegistry
from tronvault.scanner.store import WalletStore

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 3.0
DEFAULT_BLOCK_RANGE = 10


class BlockListener:
    """Scans blocks in increasing height order and fans transfers out to handlers.

    Lifecycle: INITIALIZING -> RUNNING -> STOPPING -> STOPPED (-> RUNNING again).
    The cursor is the last fully scanned height; it only moves forward, to the
    highest block of a successfully processed range.
    """

    def __init__(
        self,
        chain: ChainClient,
        store: WalletStore,
        dispatcher: WebhookDispatcher,
        registry: SubscriptionRegistry,
        interval: float = DEFAULT_INTERVAL,
        block_range: int = DEFAULT_BLOCK_RANGE,
    ) -> None:
        self._chain = chain
        self._store = store
        self._dispatcher = dispatcher
        self._registry = registry
        self._interval = interval
        self._block_range = block_range
        self._state = ListenerState.INITIALIZING
        self._cursor: int | None = None
        self._task: asyncio.Task[int] | None = None
        self._stop_event = asyncio.Event()

    @property
    def state(self) -> ListenerState:
        return self._state

    @property
    def cursor(self) -> int | None:
        return self._cursor

    @property
    def registry(self) -> SubscriptionRegistry:
        return self._registry

    async def initialize(self) -> None:
        """Start from the current chain head and load every stored subscription."""
        try:
            self._cursor = await self._chain.get_current_height()
        except Exception as e:
            raise FatalStartupError(f"Cannot read current block height: {e}") from e

        try:
            subscriptions = await self._store.list_subscriptions()
        except Exception as e:
            raise FatalStartupError(f"Cannot load wallet subscriptions: {e}") from e

        for subscription in subscriptions:
            self.register_handler(subscription)
        logger.info("Loaded %d wallet subscriptions, head at %d", len(subscriptions), self._cursor)

    def register_handler(self, subscription: WalletSubscription) -> None:
        """Add or replace the handler for a wallet."""
        self._registry.register(BlockHandler(subscription, self._store, self._dispatcher))

    async def start(self) -> None:
        """Start scanning after the cursor. Joins any previous loop first, so a restart resumes at its cursor."""
        while self._task is not None:
            await self.stop()
        if self._cursor is None:
            raise FatalStartupError("Block listener has no starting block; call initialize() first")

        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._listen(self._cursor, self._stop_event), name="block-listener")
        self._state = ListenerState.RUNNING

    async def stop(self) -> int | None:
        """Finish the current iteration and return the final cursor."""
        task = self._task
        if task is None:
            return self._cursor

        self._state = ListenerState.STOPPING
        self._stop_event.set()
        cursor = await task
        if self._task is task:
            self._cursor = cursor
            self._task = None
            self._state = ListenerState.STOPPED
            logger.info("Stopped block listener at: %d", cursor)
        return cursor

    async def _listen(self, from_block: int, stop_event: asyncio.Event) -> int:
        cursor = from_block
        logger.info("Started block listener at: %d", cursor)
        while not stop_event.is_set():
            try:
                cursor = await self.scan_once(cursor)
                self._cursor = cursor
            except TransientFetchError as e:
                logger.error("%s", e)
            except Exception:
                logger.exception("Unexpected error scanning after block %d", cursor)
            await self._pause(stop_event)
        return cursor

    async def _pause(self, stop_event: asyncio.Event) -> None:
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=self._interval)
        except TimeoutError:
            pass

    async def scan_once(self, cursor: int) -> int:
        """Fetch, decode and fan out [cursor+1, cursor+1+block_range). Returns the new cursor."""
        start = cursor + 1
        stop = start + self._block_range
        try:
            blocks = await self._chain.get_block_range(start, stop)
        except Exception as e:
            raise TransientFetchError(f"Fetching blocks [{start}, {stop}) failed: {e}") from e

        # Headers are checked before any transfer is dispatched
        try:
            latest = latest_block_number(blocks, cursor)
        except (KeyError, TypeError, ValueError) as e:
            raise TransientFetchError(f"Malformed block in [{start}, {stop}): {e!r}") from e

        await self.process_blocks(blocks)
        return latest

    async def process_blocks(self, blocks: list[dict]) -> list[Transfer]:
        transfers = extract_transfers(blocks)
        if transfers:
            for handler in self._registry.handlers():
                await handler.handle(transfers)
        return transfers
