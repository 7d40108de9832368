"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - common.py: Base ID generators, timestamps
    - order_fixtures.py: Order submissions and records
"""

# Common utilities
from .common import (
    make_order_id,
    make_user_id,
    make_timestamp,
)

# Order fixtures
from .order_fixtures import (
    FIXED_NOW,
    HISTORY_TABLE,
    NOTIFICATION_TOPIC,
    ORDERS_TABLE,
    make_items,
    make_order_body,
    make_order_json,
    make_order_record,
)

__all__ = [
    "make_order_id",
    "make_user_id",
    "make_timestamp",
    "FIXED_NOW",
    "HISTORY_TABLE",
    "NOTIFICATION_TOPIC",
    "ORDERS_TABLE",
    "make_items",
    "make_order_body",
    "make_order_json",
    "make_order_record",
]
