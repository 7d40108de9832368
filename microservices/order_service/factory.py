"""
Order Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.

Usage:
    from .factory import create_order_handler
    handler = create_order_handler(config, store_client, notifier_client)
"""
import logging

from core.config import OrderServiceConfig

from .events.publishers import NotificationPublisher
from .order_handler import OrderHandler
from .order_repository import OrderRepository
from .pricing import PricingCalculator
from .protocols import NotifierClientProtocol, StoreClientProtocol
from .refund_processor import RefundProcessor
from .request_validator import RequestValidator

logger = logging.getLogger(__name__)


async def create_store_client(config: OrderServiceConfig) -> StoreClientProtocol:
    """
    Create the store client for the configured backend.

    PostgreSQL when DATABASE_URL is set, otherwise an in-memory store.
    """
    if config.database_url:
        # Import real client here (not at module level)
        from .clients.postgres_store import PostgresStoreClient

        client = await PostgresStoreClient.connect(
            config.database_url,
            append_only_tables=[config.history_table],
        )
        await client.ensure_tables([config.orders_table, config.history_table])
        return client

    from .clients import InMemoryStoreClient

    logger.warning("DATABASE_URL not set, using in-memory order store")
    return InMemoryStoreClient(append_only_tables=[config.history_table])


def create_notifier_client(config: OrderServiceConfig) -> NotifierClientProtocol:
    """HTTP notifier when NOTIFIER_URL is set, otherwise an in-memory notifier"""
    if config.notifier_url:
        from .clients import HttpNotifierClient

        return HttpNotifierClient(config.notifier_url, timeout=config.notifier_timeout)

    from .clients import InMemoryNotifierClient

    logger.warning("NOTIFIER_URL not set, notifications are only recorded in memory")
    return InMemoryNotifierClient()


def create_order_repository(config: OrderServiceConfig, store_client: StoreClientProtocol) -> OrderRepository:
    return OrderRepository(
        store_client=store_client,
        orders_table=config.orders_table,
        history_table=config.history_table,
    )


def create_notification_publisher(
    config: OrderServiceConfig,
    notifier_client: NotifierClientProtocol
) -> NotificationPublisher:
    return NotificationPublisher(notifier_client=notifier_client, topic=config.notification_topic)


def create_order_handler(
    config: OrderServiceConfig,
    store_client: StoreClientProtocol,
    notifier_client: NotifierClientProtocol,
) -> OrderHandler:
    """
    Create OrderHandler with its repository, publisher, validator and calculator.

    Args:
        config: Order service configuration
        store_client: Store collaborator
        notifier_client: Notifier collaborator

    Returns:
        Configured OrderHandler instance
    """
    return OrderHandler(
        repository=create_order_repository(config, store_client),
        publisher=create_notification_publisher(config, notifier_client),
        validator=RequestValidator(reject_non_positive_items=config.reject_non_positive_items),
        calculator=PricingCalculator(),
    )


def create_refund_processor(
    config: OrderServiceConfig,
    store_client: StoreClientProtocol,
    notifier_client: NotifierClientProtocol,
) -> RefundProcessor:
    """Create RefundProcessor sharing the same collaborators as the handler"""
    return RefundProcessor(
        repository=create_order_repository(config, store_client),
        publisher=create_notification_publisher(config, notifier_client),
    )
