#!/usr/bin/env python3
"""Order service configuration

Three identifiers are required before the service may start:
the operational orders table, the history table and the notification topic.
They are resolved once at process start; a missing value is fatal.
"""
import os
from dataclasses import dataclass
from typing import List, Optional


def _bool(val: str) -> bool:
    return val.lower() == "true"


def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


class ConfigurationError(Exception):
    """Required configuration is missing or blank"""
    pass


@dataclass
class OrderServiceConfig:
    """Order service settings"""

    # ===========================================
    # Required resource identifiers
    # ===========================================
    orders_table: str
    history_table: str
    notification_topic: str

    # ===========================================
    # Service
    # ===========================================
    service_name: str = "order_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8210
    debug: bool = False

    # ===========================================
    # Collaborators
    # ===========================================
    database_url: Optional[str] = None
    notifier_url: Optional[str] = None
    notifier_timeout: float = 10.0

    # ===========================================
    # Policy
    # ===========================================
    reject_non_positive_items: bool = False

    def __post_init__(self):
        missing = self.missing_fields()
        if missing:
            raise ConfigurationError(
                f"Required configuration missing: {', '.join(missing)}"
            )

    def missing_fields(self) -> List[str]:
        """Names of required identifiers that are absent or blank"""
        required = {
            "ORDERS_TABLE": self.orders_table,
            "HISTORY_TABLE": self.history_table,
            "NOTIFICATION_TOPIC": self.notification_topic,
        }
        return [name for name, value in required.items() if not value or not str(value).strip()]

    @classmethod
    def from_env(cls) -> 'OrderServiceConfig':
        """Load order service configuration from environment variables"""
        return cls(
            orders_table=os.getenv("ORDERS_TABLE", ""),
            history_table=os.getenv("HISTORY_TABLE", ""),
            notification_topic=os.getenv("NOTIFICATION_TOPIC") or os.getenv("SNS_TOPIC", ""),
            service_name=os.getenv("SERVICE_NAME", "order_service"),
            service_host=os.getenv("SERVICE_HOST", "0.0.0.0"),
            service_port=_int(os.getenv("SERVICE_PORT", "8210"), 8210),
            debug=_bool(os.getenv("DEBUG", "false")),
            database_url=os.getenv("DATABASE_URL") or None,
            notifier_url=os.getenv("NOTIFIER_URL") or None,
            notifier_timeout=_float(os.getenv("NOTIFIER_TIMEOUT", "10"), 10.0),
            reject_non_positive_items=_bool(os.getenv("REJECT_NON_POSITIVE_ITEMS", "false")),
        )
