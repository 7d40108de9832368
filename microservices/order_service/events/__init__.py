"""
Order Service Events Module

Exports all event-related functionality for order service
"""

from .models import NotificationMessage

from .publishers import (
    NEW_ORDER_SUBJECT,
    NotificationPublisher,
    build_new_order_message,
    build_refund_message,
)

__all__ = [
    # Event Models
    "NotificationMessage",
    # Publishers
    "NEW_ORDER_SUBJECT",
    "NotificationPublisher",
    "build_new_order_message",
    "build_refund_message",
]
