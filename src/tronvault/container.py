from dependency_injector import containers, providers

from tronvault.config import Settings
from tronvault.db.repos.wallet_store import SqlWalletStore
from tronvault.db.session import build_engine, build_session_factory
from tronvault.infra.blockchain.tron.trongrid_client import TronGridClient
from tronvault.infra.http.rate_limited_client import RateLimitedClient
from tronvault.infra.http.webhook_client import WebhookClient
from tronvault.scanner.dispatcher import WebhookDispatcher
from tronvault.scanner.listener import BlockListener
from tronvault.scanner.receipt import ReceiptOptions
from tronvault.scanner.registry import SubscriptionRegistry
from tronvault.services.subscriptions import SubscriptionService


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    chain_http = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.tron_rate_per_second,
        timeout=settings.provided.tron_timeout,
        headers=settings.provided.api_headers,
    )

    chain = providers.Singleton(
        TronGridClient,
        api_host=settings.provided.tron_api_host,
        http_client=chain_http,
    )

    webhook_client = providers.Singleton(
        WebhookClient,
        timeout=settings.provided.webhook_timeout,
        max_attempts=settings.provided.webhook_max_attempts,
        backoff_base=settings.provided.webhook_backoff_base,
        backoff_max=settings.provided.webhook_backoff_max,
    )

    receipt_options = providers.Singleton(
        ReceiptOptions,
        delay=settings.provided.receipt_delay,
        max_attempts=settings.provided.receipt_max_attempts,
        confirmed=settings.provided.receipt_confirmed,
    )

    wallet_store = providers.Singleton(SqlWalletStore, session_factory=session_factory)

    registry = providers.Singleton(SubscriptionRegistry)

    dispatcher = providers.Singleton(
        WebhookDispatcher,
        chain=chain,
        client=webhook_client,
        receipt_options=receipt_options,
    )

    listener = providers.Singleton(
        BlockListener,
        chain=chain,
        store=wallet_store,
        dispatcher=dispatcher,
        registry=registry,
        interval=settings.provided.scan_interval,
        block_range=settings.provided.block_range,
    )

    subscriptions = providers.Factory(
        SubscriptionService,
        session_factory=session_factory,
        listener=listener,
    )
