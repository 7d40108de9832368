"""
Order Service Clients

Concrete store and notifier collaborators
"""

from .in_memory_store import InMemoryStoreClient
from .notifier_clients import HttpNotifierClient, InMemoryNotifierClient

__all__ = [
    "InMemoryStoreClient",
    "HttpNotifierClient",
    "InMemoryNotifierClient",
]
