"""Block listener process: scan until SIGINT/SIGTERM, then stop cleanly."""

import asyncio
import logging
import signal
import sys

from tronvault.config import check_preconditions
from tronvault.container import Container
from tronvault.exceptions import FatalStartupError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


async def run_listener(container: Container, shutdown: asyncio.Event | None = None) -> None:
    """Initialize and run the listener until ``shutdown`` is set (or a signal arrives)."""
    check_preconditions(container.settings())
    shutdown = shutdown or asyncio.Event()

    loop = asyncio.get_running_loop()
    installed = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown.set)
            installed.append(sig)
        except (NotImplementedError, RuntimeError):
            logger.debug("Signal handler for %s not supported here", sig)

    listener = container.listener()
    try:
        await listener.initialize()
        await listener.start()
        await shutdown.wait()
        await listener.stop()
        pending = len(container.dispatcher().pending)
        if pending:
            logger.warning("Abandoning %d in-flight webhook deliveries", pending)
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)
        await container.chain_http().close()
        await container.webhook_client().close()
        await container.engine().dispose()


def main() -> int:
    container = Container()
    configure_logging(container.settings().log_level)
    try:
        asyncio.run(run_listener(container))
    except FatalStartupError as e:
        logger.critical("Startup failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
