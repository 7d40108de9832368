"""
Order Service - Client Component Tests

In-memory store semantics, the SQL issued by the Postgres store (fake
asyncpg pool), and the HTTP notifier request shape (httpx MockTransport,
no network).
"""
import json
from contextlib import asynccontextmanager

import httpx
import pytest

from microservices.order_service.clients import (
    HttpNotifierClient,
    InMemoryNotifierClient,
    InMemoryStoreClient,
)
from microservices.order_service.clients.postgres_store import PostgresStoreClient
from microservices.order_service.protocols import (
    ConditionalWriteError,
    NotifierClientProtocol,
    StoreClientProtocol,
)
from tests.fixtures import HISTORY_TABLE, ORDERS_TABLE

pytestmark = [pytest.mark.component, pytest.mark.asyncio]


def doc(order_id="ord_1", status="PENDING", **extra):
    return {"orderId": order_id, "userId": "usr_1", "total": 10.0, "status": status, **extra}


class TestInMemoryStoreClient:

    @pytest.fixture
    def store(self):
        return InMemoryStoreClient(append_only_tables=[HISTORY_TABLE])

    async def test_implements_protocol(self, store):
        assert isinstance(store, StoreClientProtocol)

    async def test_put_then_get(self, store):
        await store.put(ORDERS_TABLE, doc())

        assert await store.get(ORDERS_TABLE, {"orderId": "ord_1"}) == doc()

    async def test_get_missing(self, store):
        assert await store.get(ORDERS_TABLE, {"orderId": "nope"}) is None

    async def test_put_overwrites_same_key(self, store):
        await store.put(ORDERS_TABLE, doc(status="PENDING"))
        await store.put(ORDERS_TABLE, doc(status="COMPLETED"))

        assert (await store.get(ORDERS_TABLE, {"orderId": "ord_1"}))["status"] == "COMPLETED"

    async def test_history_table_appends(self, store):
        await store.put(HISTORY_TABLE, doc(status="PENDING"))
        await store.put(HISTORY_TABLE, doc(status="COMPLETED"))

        assert [d["status"] for d in store.history(HISTORY_TABLE)] == ["PENDING", "COMPLETED"]
        assert await store.get(HISTORY_TABLE, {"orderId": "ord_1"}) is None

    async def test_conditional_put(self, store):
        await store.put(ORDERS_TABLE, doc(status="COMPLETED"))

        await store.put(ORDERS_TABLE, doc(status="REFUNDED"), expected_status="COMPLETED")

        with pytest.raises(ConditionalWriteError):
            await store.put(ORDERS_TABLE, doc(status="REFUNDED"), expected_status="COMPLETED")

    async def test_conditional_put_on_missing_document(self, store):
        with pytest.raises(ConditionalWriteError):
            await store.put(ORDERS_TABLE, doc(), expected_status="COMPLETED")

    async def test_returned_documents_are_copies(self, store):
        await store.put(ORDERS_TABLE, doc())

        fetched = await store.get(ORDERS_TABLE, {"orderId": "ord_1"})
        fetched["status"] = "MUTATED"

        assert (await store.get(ORDERS_TABLE, {"orderId": "ord_1"}))["status"] == "PENDING"


class TestHttpNotifierClient:

    async def test_publish_posts_payload(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(202)

        client = HttpNotifierClient(
            "http://notifier:8206/",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        async with client:
            await client.publish("orders", "Order received: ord_1 total: 10", subject="New Order")

        assert isinstance(client, NotifierClientProtocol)
        assert len(requests) == 1
        assert str(requests[0].url) == "http://notifier:8206/api/v1/notifications/publish"
        assert json.loads(requests[0].content) == {
            "topic": "orders",
            "message": "Order received: ord_1 total: 10",
            "subject": "New Order",
        }

    async def test_subject_omitted_when_none(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200)

        async with HttpNotifierClient(
            "http://notifier:8206",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        ) as client:
            await client.publish("orders", "Refund processed: ord_1 amount: 5")

        assert bodies == [{"topic": "orders", "message": "Refund processed: ord_1 amount: 5"}]

    async def test_error_status_raises(self):
        client = HttpNotifierClient(
            "http://notifier:8206",
            client=httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(503))),
        )
        async with client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.publish("orders", "message")


class TestInMemoryNotifierClient:

    async def test_records_messages(self):
        notifier = InMemoryNotifierClient()

        await notifier.publish("orders", "hello", subject="New Order")

        assert notifier.published == [{"topic": "orders", "subject": "New Order", "message": "hello"}]


class FakeConnection:
    """Records SQL and returns a preset command tag"""

    def __init__(self):
        self.executed = []
        self.command_tag = "INSERT 0 1"
        self.row = None

    async def execute(self, sql, *args):
        self.executed.append((sql, args))
        return self.command_tag

    async def fetchrow(self, sql, *args):
        self.executed.append((sql, args))
        return self.row


class FakePool:

    def __init__(self):
        self.conn = FakeConnection()

    @asynccontextmanager
    async def acquire(self):
        yield self.conn


class TestPostgresStoreClient:

    @pytest.fixture
    def pool(self):
        return FakePool()

    @pytest.fixture
    def store(self, pool):
        return PostgresStoreClient(pool, append_only_tables=[HISTORY_TABLE])

    async def test_implements_protocol(self, store):
        assert isinstance(store, StoreClientProtocol)

    async def test_point_table_upserts(self, store, pool):
        await store.put(ORDERS_TABLE, doc())

        sql, args = pool.conn.executed[0]
        assert sql.startswith(f"INSERT INTO {ORDERS_TABLE}")
        assert "ON CONFLICT (order_id) DO UPDATE" in sql
        assert args[:2] == ("ord_1", "PENDING")
        assert json.loads(args[2]) == doc()

    async def test_append_only_table_inserts(self, store, pool):
        await store.put(HISTORY_TABLE, doc())

        sql, args = pool.conn.executed[0]
        assert sql.startswith(f"INSERT INTO {HISTORY_TABLE}")
        assert "ON CONFLICT" not in sql

    async def test_conditional_put_updates_matching_status(self, store, pool):
        pool.conn.command_tag = "UPDATE 1"

        await store.put(ORDERS_TABLE, doc(status="REFUNDED"), expected_status="COMPLETED")

        sql, args = pool.conn.executed[0]
        assert sql.startswith(f"UPDATE {ORDERS_TABLE}")
        assert "AND status = $4" in sql
        assert args[1] == "REFUNDED"
        assert args[3] == "COMPLETED"

    async def test_conditional_put_without_match_raises(self, store, pool):
        pool.conn.command_tag = "UPDATE 0"

        with pytest.raises(ConditionalWriteError):
            await store.put(ORDERS_TABLE, doc(status="REFUNDED"), expected_status="COMPLETED")

    async def test_get_decodes_payload(self, store, pool):
        pool.conn.row = {"payload": json.dumps(doc())}

        assert await store.get(ORDERS_TABLE, {"orderId": "ord_1"}) == doc()
        assert pool.conn.executed[0][1] == ("ord_1",)

    async def test_get_missing(self, store, pool):
        assert await store.get(ORDERS_TABLE, {"orderId": "nope"}) is None

    async def test_rejects_unsafe_table_name(self, store):
        with pytest.raises(ValueError):
            await store.put("orders; DROP TABLE orders", doc())

    async def test_ensure_tables(self, store, pool):
        await store.ensure_tables([ORDERS_TABLE, HISTORY_TABLE])

        orders_sql, history_sql = [sql for sql, _ in pool.conn.executed]
        assert "order_id TEXT PRIMARY KEY" in orders_sql
        assert "BIGSERIAL PRIMARY KEY" in history_sql
