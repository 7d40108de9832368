"""
Order Handler

Handles a new order submission: validate, price, persist to both tables,
then notify. Always returns a structured HandlerResponse.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from .events.publishers import NotificationPublisher
from .models import HandlerResponse, OrderRecord, OrderStatus
from .order_repository import OrderRepository
from .pricing import PricingCalculator
from .protocols import NotifyError, StoreError
from .request_validator import RequestValidator

logger = logging.getLogger(__name__)

INVALID_REQUEST_BODY = "Invalid request body"
TOTAL_OUT_OF_RANGE = "Order total is out of range"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderHandler:
    """
    New order orchestration

    Handles validation -> pricing -> dual-write persistence -> notification.
    Re-submitting the same body creates another PENDING record; there is no
    deduplication.
    """

    def __init__(
        self,
        repository: OrderRepository,
        publisher: NotificationPublisher,
        validator: Optional[RequestValidator] = None,
        calculator: Optional[PricingCalculator] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        """
        Initialize Order Handler

        Args:
            repository: Dual-write order repository
            publisher: Notification publisher
            validator: Request validator (default rules when omitted)
            calculator: Pricing calculator (default threshold and rate when omitted)
            clock: Source of createdAt timestamps
        """
        self.repository = repository
        self.publisher = publisher
        self.validator = validator or RequestValidator()
        self.calculator = calculator or PricingCalculator()
        self.clock = clock

    async def handle_event(self, event: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Handle an inbound {body} event and return {statusCode, body}"""
        body = event.get("body") if isinstance(event, dict) else None
        if not isinstance(body, str):
            response = HandlerResponse.build(400, {"ok": False, "errors": [INVALID_REQUEST_BODY]})
        else:
            response = await self.handle(body)
        return response.to_event()

    async def handle(self, raw_body: Any) -> HandlerResponse:
        """
        Handle a raw order submission.

        Args:
            raw_body: JSON string/bytes, or an already decoded object

        Returns:
            200 with pricing, 400 with every validation error, or 500 on
            a store or notifier failure
        """
        validation = self.validator.decode(raw_body)
        if not validation.is_valid:
            logger.warning(f"Order submission rejected: {validation.errors}")
            return HandlerResponse.build(400, {"ok": False, "errors": validation.errors})

        request = validation.request
        pricing = self.calculator.price(request.items)
        if not all(math.isfinite(float(v)) for v in (pricing.subtotal, pricing.discount, pricing.total)):
            logger.warning(f"Order {request.order_id} rejected: total out of range")
            return HandlerResponse.build(400, {"ok": False, "errors": [TOTAL_OUT_OF_RANGE]})

        record = OrderRecord(
            order_id=request.order_id,
            user_id=request.user_id,
            total=float(pricing.total),
            status=OrderStatus.PENDING,
            created_at=self.clock(),
        )

        try:
            await self.repository.save_order(record)
        except StoreError as e:
            logger.error(f"Failed to persist order {record.order_id}: {e}")
            return HandlerResponse.build(500, {
                "ok": False,
                "error": "Failed to save order",
                "orderId": record.order_id,
            })

        try:
            await self.publisher.notify_new_order(record.order_id, pricing.total)
        except NotifyError as e:
            # The saved order stands; only the notification is reported as failed
            logger.error(f"Order {record.order_id} saved but notification failed: {e}")
            return HandlerResponse.build(500, {
                "ok": False,
                "error": "Order saved but notification failed",
                "orderId": record.order_id,
            })

        logger.info(f"Order created: {record.order_id} for user {record.user_id}, total {pricing.total}")

        return HandlerResponse.build(200, {
            "ok": True,
            "orderId": record.order_id,
            "subtotal": float(pricing.subtotal),
            "discount": float(pricing.discount),
            "total": float(pricing.total),
        })
