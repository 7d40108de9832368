"""
Order Repository

Dual-write data access layer: every saved order goes to the operational
orders table and the history table. Lookups read the orders table only.
"""

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from core.config import ConfigurationError

from .models import OrderRecord, OrderStatus
from .protocols import ConditionalWriteError, StoreClientProtocol, StoreError

logger = logging.getLogger(__name__)


class OrderRepository:
    """
    Repository for order data operations

    Writes are idempotent per order_id on the orders table; the history table
    receives one entry per write.
    """

    def __init__(self, store_client: StoreClientProtocol, orders_table: str, history_table: str):
        """
        Args:
            store_client: Injected store client
            orders_table: Operational table identifier
            history_table: History table identifier
        """
        if not orders_table or not history_table:
            raise ConfigurationError("OrderRepository requires both orders_table and history_table")

        self.store = store_client
        self.orders_table = orders_table
        self.history_table = history_table

    async def save_order(
        self,
        record: OrderRecord,
        expected_status: Optional[OrderStatus] = None,
        previous: Optional[OrderRecord] = None
    ) -> None:
        """
        Write the record to both tables.

        Without ``expected_status`` both writes are dispatched concurrently and
        both run to completion. With it, the orders-table write is conditional
        and is made first; the history entry is only written once it holds.
        On this path the two writes are sequential, not concurrent. If the
        history write then fails, the orders row is put back to ``previous``
        so the transition can be retried.

        Raises:
            ConditionalWriteError: Stored status did not match expected_status
            StoreError: Either write failed
        """
        item = record.to_item()

        if expected_status is not None:
            await self._conditional_save(record, item, expected_status, previous)
            return

        results = await asyncio.gather(
            self.store.put(self.orders_table, item),
            self.store.put(self.history_table, item),
            return_exceptions=True,
        )
        failures = [
            (table, result)
            for table, result in zip((self.orders_table, self.history_table), results)
            if isinstance(result, BaseException)
        ]
        if failures:
            for table, error in failures:
                logger.error(f"Failed to write order {record.order_id} to {table}: {error}")
            table, error = failures[0]
            raise StoreError(f"Failed to save order {record.order_id} to {table}: {error}") from error

        logger.info(f"Order {record.order_id} saved to {self.orders_table} and {self.history_table}")

    async def _conditional_save(
        self,
        record: OrderRecord,
        item: dict,
        expected_status: OrderStatus,
        previous: Optional[OrderRecord]
    ) -> None:
        order_id = record.order_id
        try:
            await self.store.put(self.orders_table, item, expected_status=expected_status.value)
        except ConditionalWriteError:
            logger.warning(f"Order {order_id} is no longer {expected_status.value}, write rejected")
            raise
        except Exception as e:
            logger.error(f"Failed to write order {order_id} to {self.orders_table}: {e}")
            raise StoreError(f"Failed to save order {order_id} to {self.orders_table}: {e}") from e

        try:
            await self.store.put(self.history_table, item)
        except Exception as e:
            logger.error(f"Failed to write order {order_id} to {self.history_table}: {e}")
            if previous is not None:
                await self._restore(record, previous)
            raise StoreError(f"Failed to save order {order_id} to {self.history_table}: {e}") from e

        logger.info(f"Order {order_id} saved to {self.orders_table} and {self.history_table}")

    async def _restore(self, record: OrderRecord, previous: OrderRecord) -> None:
        try:
            await self.store.put(
                self.orders_table, previous.to_item(), expected_status=record.status.value
            )
            logger.info(f"Order {record.order_id} restored to {previous.status.value}")
        except Exception as e:
            logger.error(f"Failed to restore order {record.order_id} to {previous.status.value}: {e}")

    async def get_order(self, order_id: str) -> Optional[OrderRecord]:
        """Get order by ID from the orders table"""
        try:
            item = await self.store.get(self.orders_table, {"orderId": order_id})
        except Exception as e:
            logger.error(f"Failed to get order {order_id}: {e}")
            raise StoreError(f"Failed to get order {order_id}: {e}") from e

        if item is None:
            return None
        try:
            return OrderRecord.from_item(item)
        except ValidationError as e:
            logger.error(f"Malformed order document {order_id}: {e}")
            raise StoreError(f"Malformed order document {order_id}") from e
