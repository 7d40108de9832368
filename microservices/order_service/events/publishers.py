"""
Order Service Event Publishers

Fixed-template notifications for new orders and refunds.
"""

import logging
from decimal import Decimal
from typing import Union

from core.config import ConfigurationError

from ..protocols import NotifierClientProtocol, NotifyError
from .models import NotificationMessage

logger = logging.getLogger(__name__)

NEW_ORDER_SUBJECT = "New Order"

Amount = Union[int, float, Decimal]


def _format_amount(amount: Amount) -> str:
    # 1080.0 -> "1080", 99.5 -> "99.5"
    return format(Decimal(str(amount)).normalize(), "f")


def build_new_order_message(topic: str, order_id: str, total: Amount) -> NotificationMessage:
    return NotificationMessage(
        topic=topic,
        subject=NEW_ORDER_SUBJECT,
        body=f"Order received: {order_id} total: {_format_amount(total)}",
    )


def build_refund_message(topic: str, order_id: str, amount: Amount) -> NotificationMessage:
    return NotificationMessage(
        topic=topic,
        body=f"Refund processed: {order_id} amount: {_format_amount(amount)}",
    )


class NotificationPublisher:
    """Publishes order notifications through the injected notifier client"""

    def __init__(self, notifier_client: NotifierClientProtocol, topic: str):
        if not topic:
            raise ConfigurationError("NotificationPublisher requires a notification topic")
        self.notifier = notifier_client
        self.topic = topic

    async def notify_new_order(self, order_id: str, total: Amount) -> None:
        """Publish the new-order notification, raising NotifyError on failure"""
        await self._publish(build_new_order_message(self.topic, order_id, total), order_id)

    async def notify_refund(self, order_id: str, amount: Amount) -> None:
        """Publish the refund notification, raising NotifyError on failure"""
        await self._publish(build_refund_message(self.topic, order_id, amount), order_id)

    async def _publish(self, message: NotificationMessage, order_id: str) -> None:
        try:
            await self.notifier.publish(
                topic=message.topic,
                message=message.body,
                subject=message.subject,
            )
        except Exception as e:
            logger.error(f"❌ Failed to publish notification for order {order_id}: {e}")
            raise NotifyError(f"Failed to publish notification for order {order_id}: {e}") from e

        logger.info(f"✅ Published notification for order {order_id} to {message.topic}")
