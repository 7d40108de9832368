"""
Notifier Clients

Publish-subscribe notifier implementations: an HTTP client for the
notification gateway and an in-memory client for local runs and tests.
"""

import httpx
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class HttpNotifierClient:
    """Client for the notification gateway publish endpoint"""

    def __init__(self, base_url: str, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize notifier client

        Args:
            base_url: Notification gateway base URL
            timeout: Request timeout in seconds
            client: Preconfigured httpx client (tests, shared pools)
        """
        self.base_url = base_url.rstrip('/')
        self.client = client or httpx.AsyncClient(timeout=timeout)
        logger.info(f"HttpNotifierClient initialized with base_url: {self.base_url}")

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def publish(self, topic: str, message: str, subject: Optional[str] = None) -> None:
        """
        Publish a message

        Raises:
            httpx.HTTPError: Transport failure or non-2xx response
        """
        payload: Dict[str, Any] = {"topic": topic, "message": message}
        if subject is not None:
            payload["subject"] = subject

        response = await self.client.post(f"{self.base_url}/api/v1/notifications/publish", json=payload)
        response.raise_for_status()


class InMemoryNotifierClient:
    """Records published messages instead of sending them"""

    def __init__(self):
        self.published: List[Dict[str, Any]] = []

    async def publish(self, topic: str, message: str, subject: Optional[str] = None) -> None:
        self.published.append({"topic": topic, "subject": subject, "message": message})
        logger.debug(f"Notification recorded for {topic}: {message}")
