"""
PostgreSQL Store Client

asyncpg-backed document store. Each destination is a table of
(order_id, status, payload JSONB, written_at). Point-lookup tables upsert on
order_id; append-only tables insert one row per write.

Usage:
    client = await PostgresStoreClient.connect(dsn, append_only_tables=["order_history"])
    await client.ensure_tables(["orders", "order_history"])
"""

import json
import logging
import re
from typing import Any, Dict, Iterable, Optional

import asyncpg

from ..protocols import ConditionalWriteError

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def _table(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid table identifier: {name!r}")
    return name


class PostgresStoreClient:
    """Order document store on PostgreSQL"""

    def __init__(self, pool: asyncpg.Pool, append_only_tables: Optional[Iterable[str]] = None):
        self.pool = pool
        self.append_only_tables = set(append_only_tables or [])

    @classmethod
    async def connect(
        cls,
        dsn: str,
        append_only_tables: Optional[Iterable[str]] = None,
        min_size: int = 1,
        max_size: int = 5
    ) -> "PostgresStoreClient":
        pool = await asyncpg.create_pool(dsn=dsn, min_size=min_size, max_size=max_size, timeout=30)
        logger.info("PostgresStoreClient connected")
        return cls(pool, append_only_tables=append_only_tables)

    async def close(self):
        await self.pool.close()

    async def ensure_tables(self, destinations: Iterable[str]) -> None:
        """Create destination tables if they do not exist"""
        async with self.pool.acquire() as conn:
            for destination in destinations:
                table = _table(destination)
                if destination in self.append_only_tables:
                    await conn.execute(
                        f"CREATE TABLE IF NOT EXISTS {table} ("
                        " id BIGSERIAL PRIMARY KEY,"
                        " order_id TEXT NOT NULL,"
                        " status TEXT NOT NULL,"
                        " payload JSONB NOT NULL,"
                        " written_at TIMESTAMPTZ NOT NULL DEFAULT now())"
                    )
                else:
                    await conn.execute(
                        f"CREATE TABLE IF NOT EXISTS {table} ("
                        " order_id TEXT PRIMARY KEY,"
                        " status TEXT NOT NULL,"
                        " payload JSONB NOT NULL,"
                        " written_at TIMESTAMPTZ NOT NULL DEFAULT now())"
                    )

    async def put(
        self,
        destination: str,
        record: Dict[str, Any],
        expected_status: Optional[str] = None
    ) -> None:
        table = _table(destination)
        order_id = record["orderId"]
        payload = json.dumps(record)

        async with self.pool.acquire() as conn:
            if destination in self.append_only_tables:
                await conn.execute(
                    f"INSERT INTO {table} (order_id, status, payload) VALUES ($1, $2, $3::jsonb)",
                    order_id, record["status"], payload
                )
                return

            if expected_status is not None:
                result = await conn.execute(
                    f"UPDATE {table} SET status = $2, payload = $3::jsonb, written_at = now()"
                    f" WHERE order_id = $1 AND status = $4",
                    order_id, record["status"], payload, expected_status
                )
                # asyncpg returns the command tag, e.g. "UPDATE 1"
                if result.split()[-1] == "0":
                    raise ConditionalWriteError(f"{table}[{order_id}] status is not {expected_status}")
                return

            await conn.execute(
                f"INSERT INTO {table} (order_id, status, payload) VALUES ($1, $2, $3::jsonb)"
                f" ON CONFLICT (order_id) DO UPDATE"
                f" SET status = EXCLUDED.status, payload = EXCLUDED.payload, written_at = now()",
                order_id, record["status"], payload
            )

    async def get(self, destination: str, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        table = _table(destination)
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(f"SELECT payload FROM {table} WHERE order_id = $1", key["orderId"])
        if row is None:
            return None
        payload = row["payload"]
        return json.loads(payload) if isinstance(payload, str) else dict(payload)
