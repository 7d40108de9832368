"""
In-Memory Store Client

Local development and test store. Point-lookup tables keep one document per
orderId; append-only tables keep every written document in order.
"""

import copy
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..protocols import ConditionalWriteError

logger = logging.getLogger(__name__)


class InMemoryStoreClient:
    """Dict-backed store keyed by orderId"""

    def __init__(self, append_only_tables: Optional[Iterable[str]] = None, key_field: str = "orderId"):
        self.append_only_tables = set(append_only_tables or [])
        self.key_field = key_field
        self._tables: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._logs: Dict[str, List[Dict[str, Any]]] = {}

    async def put(
        self,
        destination: str,
        record: Dict[str, Any],
        expected_status: Optional[str] = None
    ) -> None:
        document = copy.deepcopy(record)

        if destination in self.append_only_tables:
            self._logs.setdefault(destination, []).append(document)
            return

        table = self._tables.setdefault(destination, {})
        key = document[self.key_field]
        if expected_status is not None:
            current = table.get(key)
            if current is None or current.get("status") != expected_status:
                raise ConditionalWriteError(
                    f"{destination}[{key}] status is not {expected_status}"
                )
        table[key] = document

    async def get(self, destination: str, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        document = self._tables.get(destination, {}).get(key[self.key_field])
        return copy.deepcopy(document) if document is not None else None

    def history(self, destination: str) -> List[Dict[str, Any]]:
        """Every document written to an append-only table, oldest first"""
        return copy.deepcopy(self._logs.get(destination, []))
