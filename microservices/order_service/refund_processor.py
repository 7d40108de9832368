"""
Refund Processor

Performs the COMPLETED -> REFUNDED transition of an existing order.
"""

import logging
import math
from datetime import datetime
from typing import Any, Callable

from .events.publishers import NotificationPublisher
from .models import OrderStatus, RefundErrorCode, RefundResult
from .order_handler import utc_now
from .order_repository import OrderRepository
from .protocols import ConditionalWriteError, NotifyError, StoreError

logger = logging.getLogger(__name__)


def _is_positive_amount(amount: Any) -> bool:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    try:
        return math.isfinite(amount) and amount > 0
    except OverflowError:
        return False


class RefundProcessor:
    """
    Refund orchestration

    Preconditions are checked in order and the first failure is returned
    without any write. The orders-table write is conditional on the stored
    status still being COMPLETED, so concurrent refunds of one order cannot
    both succeed. user_id is required but not matched against the order owner.
    """

    def __init__(
        self,
        repository: OrderRepository,
        publisher: NotificationPublisher,
        clock: Callable[[], datetime] = utc_now
    ):
        self.repository = repository
        self.publisher = publisher
        self.clock = clock

    async def refund(self, order_id: str, user_id: str, amount: Any) -> RefundResult:
        """
        Refund a completed order

        Args:
            order_id: Order to refund
            user_id: Requesting user
            amount: Refund amount, must be greater than zero

        Returns:
            RefundResult with the updated order on success
        """
        if not order_id or not user_id or not _is_positive_amount(amount):
            return self._rejected(
                order_id, RefundErrorCode.INVALID_INPUT,
                "order_id and user_id are required and amount must be greater than zero"
            )

        try:
            existing = await self.repository.get_order(order_id)
        except StoreError as e:
            return self._rejected(order_id, RefundErrorCode.STORE_ERROR, str(e))

        if existing is None:
            return self._rejected(order_id, RefundErrorCode.ORDER_NOT_FOUND, f"Order not found: {order_id}")

        if existing.status != OrderStatus.COMPLETED:
            return self._rejected(
                order_id, RefundErrorCode.INVALID_STATUS,
                f"Cannot refund order with status: {existing.status.value}"
            )

        updated = existing.model_copy(update={
            "status": OrderStatus.REFUNDED,
            "refund_amount": amount,
            "updated_at": self.clock(),
        })

        try:
            await self.repository.save_order(
                updated, expected_status=OrderStatus.COMPLETED, previous=existing
            )
        except ConditionalWriteError:
            return self._rejected(order_id, RefundErrorCode.CONFLICT, "Order was modified concurrently")
        except StoreError as e:
            return self._rejected(order_id, RefundErrorCode.STORE_ERROR, str(e))

        try:
            await self.publisher.notify_refund(order_id, amount)
        except NotifyError as e:
            # The refund is recorded; only the notification failed
            logger.error(f"Refund for order {order_id} saved but notification failed: {e}")
            return RefundResult(
                success=False,
                reason="Refund recorded but notification failed",
                error_code=RefundErrorCode.NOTIFY_ERROR,
                order=updated,
            )

        logger.info(f"Order refunded: {order_id}, amount: {amount}")
        return RefundResult(success=True, order=updated)

    def _rejected(self, order_id: str, code: RefundErrorCode, reason: str) -> RefundResult:
        if code in (RefundErrorCode.STORE_ERROR, RefundErrorCode.NOTIFY_ERROR):
            logger.error(f"Refund for order {order_id} failed: {reason}")
        else:
            logger.warning(f"Refund for order {order_id} rejected ({code.value}): {reason}")
        return RefundResult(success=False, reason=reason, error_code=code)
