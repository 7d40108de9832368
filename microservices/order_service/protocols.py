"""
Order Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, Optional, Protocol, runtime_checkable


# ============================================================================
# Custom Exceptions
# ============================================================================

class OrderServiceError(Exception):
    """Base exception for order service errors"""
    pass


class StoreError(OrderServiceError):
    """Store read or write failed"""
    pass


class ConditionalWriteError(StoreError):
    """Stored status no longer matches the expected prior status"""
    pass


class NotifyError(OrderServiceError):
    """Notification publish failed"""
    pass


# ============================================================================
# Store Client Protocol
# ============================================================================

@runtime_checkable
class StoreClientProtocol(Protocol):
    """
    Interface for the key-value/document store.

    Implementations raise on transport failure. When ``expected_status`` is
    given, ``put`` must only succeed if the stored document's status still
    equals it, and raise ConditionalWriteError otherwise.
    """

    async def put(
        self,
        destination: str,
        record: Dict[str, Any],
        expected_status: Optional[str] = None
    ) -> None:
        """Write a document to a destination table"""
        ...

    async def get(self, destination: str, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Point lookup, None when absent"""
        ...


# ============================================================================
# Notifier Client Protocol
# ============================================================================

@runtime_checkable
class NotifierClientProtocol(Protocol):
    """Interface for the publish-subscribe notifier"""

    async def publish(self, topic: str, message: str, subject: Optional[str] = None) -> None:
        """Publish a message to a topic"""
        ...
