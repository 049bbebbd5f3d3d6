"""Poll a transaction's receipt until it is finalized, then run an action."""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from pydantic import BaseModel

from tronvault.domain.models.transfer import TransactionInfo
from tronvault.exceptions import ConfirmationFailure, ConfirmationTimeout
from tronvault.infra.blockchain.base import ChainClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class ReceiptOptions(BaseModel):
    delay: float = 3.0  # seconds between attempts
    max_attempts: int = 20
    confirmed: bool = True  # solidified view vs. latest view


async def wait_for_receipt(
    chain: ChainClient,
    tx_hash: str,
    action: Callable[[TransactionInfo], Awaitable[T]],
    options: ReceiptOptions | None = None,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Fetch the receipt up to ``max_attempts`` times, ``delay`` apart.

    Once a block number appears: raise ConfirmationFailure if execution failed,
    otherwise return ``await action(info)``. Raises ConfirmationTimeout when
    attempts run out first.
    """
    options = options or ReceiptOptions()

    for attempt in range(1, options.max_attempts + 1):
        info = await chain.get_transaction_info(tx_hash, confirmed=options.confirmed)
        if info.is_finalized:
            if info.failed:
                reason = info.failure_reason
                raise ConfirmationFailure(f"Failed [{tx_hash}]: {reason}", reason=reason)
            return await action(info)

        logger.debug("Receipt for %s not final (attempt %d/%d)", tx_hash, attempt, options.max_attempts)
        await sleep(options.delay)

    raise ConfirmationTimeout(tx_hash, options.max_attempts)
